# Screen settings
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600
FPS = 60

# Camera settings
# Pixels on screen per world unit (orthographic zoom)
CAMERA_PIXELS_PER_UNIT = 64.0
# Camera sits this far below/left of the player so the sprite body is centered
CAMERA_PLAYER_OFFSET = (0.0, 0.25)

# Player settings
# Movement speeds in world units per second
WALK_SPEED = 3.0
RUN_SPEED = 4.0
# Walk/run cycle playback speed in frames per second
PLAYER_ANIM_SPEED = 8.0
# Grid position (x, y, layer) the player spawns on
PLAYER_SPAWN = (0, 0, 1)

# Map settings
# Ground spans -MAP_RADIUS..MAP_RADIUS on both axes
MAP_RADIUS = 10
GROUND_LAYER = 0
WALL_LAYER = 1

# Texture settings
# Directory holding sprite sheets (relative to the tilegame package)
ASSET_DIR = "assets"
# Atlas table: (name, path, (cell_w, cell_h), grid_width, grid_height, padding)
ATLASES = (
    ("grass", "textures/tiles/grass.png", (32, 32), 8, 8, None),
    ("wall", "textures/tiles/wall.png", (16, 16), 14, 10, (16, 16)),
    (
        "player-base",
        "textures/player/fbas_1body_human_00.png",
        (64, 64),
        16,
        16,
        None,
    ),
)

# Colors
BACKGROUND_COLOR = (0.1, 0.1, 0.12)
