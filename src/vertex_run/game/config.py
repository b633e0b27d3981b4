import math
from dataclasses import dataclass

# --- Display ---
WIDTH = 1920
HEIGHT = 1080
FPS = 60

# --- World / Physics ---
SCROLL_PX_PER_TICK = 10.0   # camera advance per tick (px)
GROUND_Y = 880              # world y of the floor line
CEILING_Y = 200             # world y of the ceiling line
GRAVITY_DOWN = 1
GRAVITY_UP = -1

# --- Player ---
PLAYER_X = 480              # player's fixed screen x (world scrolls left)
PLAYER_W = 80
PLAYER_H = 80
HITBOX_INSET_X = 4          # side inset of the foot/head sample points

# --- Obstacles / goal ---
SPIKE_W = 55
SPIKE_H = 55
PORTAL_W = 120
PORTAL_H = 400
GOAL_OFFSET = 300           # gap between last cursor position and the portal
LEVEL_TRAILING_MARGIN = 200
RENDER_MARGIN = 100         # obstacles this far off-screen are still drawn

# --- Particles ---
PARTICLES_PER_EMIT = 2
PARTICLE_VX_SPREAD = 6.0
PARTICLE_VY_MIN = 2.0
PARTICLE_VY_SPREAD = 5.0
PARTICLE_LIFE_MIN = 18.0
PARTICLE_LIFE_SPREAD = 12.0
PARTICLE_SIZE_MIN = 3.0
PARTICLE_SIZE_SPREAD = 4.0

# --- Scores / persistence ---
MAX_PROGRESS = 100
DEATHS_KEY = "vertexrun_deaths"
RECORD_KEY = "vertexrun_record"
STORE_PATH_DEFAULT = "vertexrun_save.json"
SEED_DEFAULT = 12345


@dataclass(frozen=True)
class LevelConfig:
    """Level generation tuning.

    - first_obstacle_distance: world x of the first spike.
    - min/max_distance_between: cursor advance after each spike (or pair).
    - chance_two_in_row_percent: chance that a second spike follows right behind.
    - obstacle_count: spike budget; a pair counts as two.
    """
    first_obstacle_distance: float = 2000
    min_distance_between: float = 350
    max_distance_between: float = 600
    chance_two_in_row_percent: float = 30
    obstacle_count: int = 60


@dataclass(frozen=True)
class JumpConfig:
    """Jump and gravity tuning, in px per tick.

    Caps of 0 mean unlimited.
    """
    initial_velocity_up: float = 20.0
    gravity_multiplier: float = 1.20
    rotation_radians_per_jump: float = math.pi / 2
    velocity_cap_down: float = 0.0
    velocity_cap_up: float = 0.0


LEVEL_CONFIG = LevelConfig()
JUMP_CONFIG = JumpConfig()

# --- Colors (RGB) ---
COLOR_BG = (13, 10, 18)
COLOR_BG_LAYERS = ((21, 16, 28), (30, 18, 40), (42, 24, 56))
COLOR_FLOOR = (42, 30, 56)
COLOR_FLOOR_EDGE = (58, 40, 72)
COLOR_SPIKE = (255, 183, 197)
COLOR_SPIKE_EDGE = (232, 180, 184)
COLOR_PORTAL = (255, 183, 197)
COLOR_PARTICLE = (255, 210, 100)
COLOR_PLAYER = (255, 183, 77)
COLOR_PLAYER_EDGE = (78, 205, 196)
COLOR_FG = (240, 232, 242)
COLOR_DANGER = (255, 86, 110)
