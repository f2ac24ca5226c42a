"""Simulation constants and default tunables.

All engine quantities are in simulation units: world distance units, ticks,
and masses relative to an Earth-like planet. Nothing here is SI.
"""
import math

import numpy as np

# --- Physics ---
DEFAULT_G = 50.0
SUN_MASS = 1000.0
TIME_STEP = 0.1  # simulation time per tick
SOFTENING_LENGTH = 1.0
SOFTENING_FACTOR_SQ = SOFTENING_LENGTH ** 2

# --- Satellites ---
TICKS_PER_UNIT_TIME = 60
DEFAULT_ORBIT_RATE = 1.0  # radians per unit time
TWO_PI = 2.0 * math.pi

# Placements closer to the sun than this have no usable circular velocity.
MIN_PLACEMENT_RADIUS = SOFTENING_LENGTH

# --- Trails ---
DEFAULT_TRAIL_LENGTH = 150
MIN_TRAIL_LENGTH = 10
MAX_TRAIL_LENGTH = 1000

# --- Explosions ---
EXPLOSION_PARTICLES = 50
EXPLOSION_LIFETIME = 50  # ticks
EXPLOSION_SPEED_RANGE = (2.0, 5.0)
EXPLOSION_RADIUS_RANGE = (2.0, 5.0)

# --- Random population ---
POPULATE_RADIUS_RANGE = (120.0, 450.0)
# Scattered planets get their circular speed scaled by a factor in this range
POPULATE_SPEED_JITTER = (0.85, 1.15)

# --- Display ---
WIDTH, HEIGHT = 1200, 800
UI_SIDEBAR_WIDTH = 280
UI_BOTTOM_HEIGHT = 0
FPS = TICKS_PER_UNIT_TIME
ZOOM_BASE = 1.0
MIN_ZOOM = 0.1
MAX_ZOOM = 10.0
INITIAL_PAN_OFFSET = np.array(
    [(WIDTH - UI_SIDEBAR_WIDTH) / 2, (HEIGHT - UI_BOTTOM_HEIGHT) / 2]
)
SHOW_TRAILS = True

# Colours
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
DARK_GRAY = (60, 60, 60)
ORANGE = (255, 165, 0)
EXPLOSION_COLOR = ORANGE

# Avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
