"""Named physical dimension constants for the ceiling-heating layout.

All values in millimetres unless noted. Defaults match the settings store
of the drawing application.
"""

# Support profiles
PROFILE_WIDTH = 60.0              # CD profile width
PROFILE_SPACING = 400.0           # axis-to-axis spacing
WALL_BUFFER = 250.0               # turning zone kept free at both profile ends
GRID_MARGIN = 100.0               # minimum margin perpendicular to the profiles
LENGTH_STEP = 100.0               # profile length quantization step
MIN_PROFILE_LENGTH = 1000.0       # shorter profiles are not mounted

# Heat plates
PLATE_WIDTH = 50.0                # heat-transfer plate width
SYSTEM4_GAP = 136.0 / 3.0         # (4 x 50) + (3 x 45.33) = 336
SYSTEM6_GAP = 7.2                 # (6 x 50) + (5 x 7.2) = 336
RECIPE_SPAN = 336.0               # total plate block span, both systems
VISUAL_OFFSET = 30.0              # drawing/physical origin mismatch correction
PLATE_STOCK_STEP = 50.0           # plates are stocked in 5 cm increments
RECIPE_TOLERANCE = 0.05           # allowed recipe span mismatch

# Pipe circuits
MAX_CIRCUIT_LENGTH = 100000.0     # 100 m per circuit
STUB_LENGTH = 150.0               # supply/return lead on the connection side
MAX_TURN_DEPTH = 250.0            # outermost nested turn depth
SMALL_TURN_DEPTH = 150.0          # connection-side U-turn depth
CORNER_RADIUS = 50.0              # turn corner radius
MIN_BEND_RADIUS = 25.0            # tightest bend the pipe tolerates
BLOCK_SIZE = 8                    # plates per register block (count)
PIPE_WIDTH = 16.0                 # pipe outer diameter, drawing only

CIRCUIT_COLORS = (
    "#32CD32",  # lime green
    "#228B22",  # forest green
    "#FF6600",  # orange
    "#0066FF",  # blue
    "#9933FF",  # purple
    "#FF3399",  # pink
)

# Plate count per system recipe
SYSTEM_PLATE_COUNT = {"Four": 4, "Six": 6}
