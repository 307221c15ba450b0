"""Matrix-themed snake with procedural maps and synthesized sound effects."""

from .audio.tone import generate_tone, parse_wav_header
from .config import GameConfig
from .errors import InvalidDimensions, InvalidParameter
from .sim.glyphs import glyph_for
from .sim.map_gen import GameMap, WallSet, generate_walls
from .types import Cell

__all__ = [
    "Cell",
    "GameConfig",
    "GameMap",
    "InvalidDimensions",
    "InvalidParameter",
    "WallSet",
    "generate_tone",
    "generate_walls",
    "glyph_for",
    "parse_wav_header",
]
