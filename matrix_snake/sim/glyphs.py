"""Matrix glyph alphabet and per-cell glyph selection."""

from __future__ import annotations

import numpy as np

from ..types import Cell

MATRIX_GLYPHS: str = "01<>[]{}()/\\|-=+*;:.,^~ABCDEFGHIJKLMNOPQRSTUVWXYZ"

_HASH_X: int = 73_856_093
_HASH_Y: int = 19_349_663


def glyph_for(cell: Cell) -> str:
    """Stable decorative glyph for a cell; the same cell always maps to the same glyph."""
    h = abs((cell.x * _HASH_X) ^ (cell.y * _HASH_Y))
    return MATRIX_GLYPHS[h % len(MATRIX_GLYPHS)]


def random_glyph(rng: np.random.Generator) -> str:
    return MATRIX_GLYPHS[int(rng.integers(0, len(MATRIX_GLYPHS)))]
