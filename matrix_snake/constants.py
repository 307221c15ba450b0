from __future__ import annotations

# Board
SCREEN_WIDTH_PX: int = 320
SCREEN_HEIGHT_PX: int = 240
TILE_SIZE_PX: int = 10
GRID_WIDTH: int = SCREEN_WIDTH_PX // TILE_SIZE_PX
GRID_HEIGHT: int = SCREEN_HEIGHT_PX // TILE_SIZE_PX

# Map generation
DEFAULT_WALL_DENSITY: float = 0.10
WALL_DENSITY_MIN: float = 0.0
WALL_DENSITY_MAX: float = 0.35
WALL_DENSITY_STEP: float = 0.02
SAFE_ZONE_RADIUS: int = 2  # 5x5 clear square around the spawn
SEED_MAX: int = 2**64
RESEED_MULTIPLIER: int = 6364136223846793005

# Snake
INITIAL_SNAKE_LENGTH: int = 3
DEFAULT_MOVE_INTERVAL_S: float = 0.12
MOVE_INTERVAL_MIN_S: float = 0.05
MOVE_INTERVAL_MAX_S: float = 0.35
MOVE_INTERVAL_STEP_S: float = 0.02
PREVIEW_MIN_INTERVAL_S: float = 0.05

# Audio
SAMPLE_RATE_HZ: int = 44100
TONE_HEADROOM: float = 0.7
DEFAULT_SOUND_VOLUME: float = 1.0
VOLUME_STEP: float = 0.05

# Glyph rain
RAIN_SPEED_MIN: float = 6.0
RAIN_SPEED_MAX: float = 18.0

SAVE_FILENAME: str = "snake_save.json"
