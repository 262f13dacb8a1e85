"""Table geometry and physical constants.

World units, origin at the table centre, x along the long edge.
Friction is a speed decrement applied once per frame, not scaled by dt.
"""

from billiards.types import Vec2

# Table dimensions
TABLE_WIDTH = 15.0
TABLE_HEIGHT = 8.0

# Pockets; corner pockets are pulled in a little so a ball actually fits
POCKET_RADIUS = 0.4
POCKET_INSET = 0.1
POCKET_POSITIONS = (
    Vec2(-0.5 * TABLE_WIDTH + POCKET_INSET, -0.5 * TABLE_HEIGHT + POCKET_INSET),
    Vec2(0.0, -0.5 * TABLE_HEIGHT),
    Vec2(0.5 * TABLE_WIDTH - POCKET_INSET, -0.5 * TABLE_HEIGHT + POCKET_INSET),
    Vec2(-0.5 * TABLE_WIDTH + POCKET_INSET, 0.5 * TABLE_HEIGHT - POCKET_INSET),
    Vec2(0.0, 0.5 * TABLE_HEIGHT),
    Vec2(0.5 * TABLE_WIDTH - POCKET_INSET, 0.5 * TABLE_HEIGHT - POCKET_INSET),
)

# Balls
BALL_RADIUS = 0.3
BALL_COUNT = 7
CUE_BALL = 0
START_POSITIONS = (
    Vec2(-0.3 * TABLE_WIDTH, 0.0),  # cue ball
    Vec2(0.2 * TABLE_WIDTH, 0.0),
    Vec2(0.25 * TABLE_WIDTH, 0.05 * TABLE_HEIGHT),
    Vec2(0.25 * TABLE_WIDTH, -0.05 * TABLE_HEIGHT),
    Vec2(0.3 * TABLE_WIDTH, 0.1 * TABLE_HEIGHT),
    Vec2(0.3 * TABLE_WIDTH, 0.0),
    Vec2(0.3 * TABLE_WIDTH, -0.1 * TABLE_HEIGHT),
)

FRICTION = 0.01  # speed lost per frame

# Shot
CHARGE_TIME = 1.0  # seconds to reach full power
SHOT_POWER = 6.0  # cue speed at full charge

# Pair collision debounce (frames)
COOLDOWN_START = 3
COOLDOWN_READY = 2
COOLDOWN_CAP = 10

# Below this length a separation or aim vector has no usable direction
SEPARATION_EPSILON = 1e-6

# Frame pacing
TARGET_FPS = 60
MIN_FPS = 5
MAX_FPS = 200
