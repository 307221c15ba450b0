"""Headless game model: map generation, glyphs and snake rules."""

from .glyphs import MATRIX_GLYPHS, glyph_for, random_glyph
from .map_gen import (
    GameMap,
    MapGenerator,
    SafeZone,
    WallSet,
    generate_walls,
    safe_zone,
    spawn_cell,
)
from .snake import Direction, SnakeGame, StepEvent

__all__ = [
    "MATRIX_GLYPHS",
    "glyph_for",
    "random_glyph",
    "GameMap",
    "MapGenerator",
    "SafeZone",
    "WallSet",
    "generate_walls",
    "safe_zone",
    "spawn_cell",
    "Direction",
    "SnakeGame",
    "StepEvent",
]
