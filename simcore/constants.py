#!/usr/bin/env python3
"""
Shared constants for the gravity simulator (SI units unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
engine, the presets and the viewer, and makes tuning easier.
"""

# Physical constants
G = 6.67430e-11  # m^3 kg^-1 s^-2

# Time shorthands
MINUTE = 60.0
HOUR = 60 * MINUTE
DAY = 24 * HOUR
YEAR = 365 * DAY
CALENDAR_YEAR = 31556926.0  # 365.2422 days, used for the coarse year counter only

# Distance shorthands
KILOMETER = 1000.0
EARTH_RADIUS = 6371 * KILOMETER
MOON_RADIUS = 1737.1 * KILOMETER
JUPITER_RADIUS = 69911 * KILOMETER
SUN_RADIUS = 696340 * KILOMETER
ASTRONOMICAL_UNIT = 149597871 * KILOMETER

# Masses
MOON_MASS = 7.34767309e22
EARTH_MASS = 5.972e24
SUN_MASS = 1.989e30

# Body defaults
DEFAULT_BODY_SIZE = 1.0
DEFAULT_BODY_MASS = 10.0
DEFAULT_BODY_COLOR = (255, 255, 0)

# Physics controls
DEFAULT_TARGET_TIME_STEP = 5 * MINUTE  # simulated seconds per step in fixed mode
DEFAULT_MIN_FORCE = 0.1  # N; pairwise forces below this are ignored
DEFAULT_ADAPTIVE_TIME_RANGE = 7 * JUPITER_RADIUS
DEFAULT_ADAPTIVE_TIME_MAX_FACTOR = 12.0
DEFAULT_SPEED_MULTIPLIER = 100000.0  # simulated seconds per real second
DEFAULT_SPEED_LIMIT_THRESHOLD = 20000.0  # m/s
DEFAULT_SPEED_LIMIT_CAP = 100000.0  # m/s
DEFAULT_SPEED_LIMIT_MAX_REDUCTION = 0.9
DEFAULT_HISTORY_LIMIT = 3000  # step durations kept for the moving average
DEFAULT_UPDATE_INTERVAL = 0.0  # seconds to yield between physics steps
DEFAULT_INITIAL_STEP_DURATION = 1e-3  # seconds assumed before any step is measured

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
FRAME_RATE = 30
MAX_SEGMENTS = 1000
BACKGROUND_COLOR = (0, 0, 0)
HUD_COLOR = (200, 200, 200)
ORBIT_COLOR = (0, 255, 0)
ESCAPE_COLOR = (255, 68, 51)

# Camera zoom bounds (meters-per-pixel)
DEFAULT_METERS_PER_PIXEL = 5e8 / (VIEW_HEIGHT / 2)
MIN_METERS_PER_PIXEL = 1e-3
MAX_METERS_PER_PIXEL = 1e13
ZOOM_MARGIN = 1.1

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
