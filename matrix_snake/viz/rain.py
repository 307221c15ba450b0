"""Falling glyph columns drawn behind every screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

import numpy as np

from ..constants import RAIN_SPEED_MAX, RAIN_SPEED_MIN
from ..types import Cell


@dataclass
class Drop:
    x: int
    y: float
    speed: float  # cells per second


class MatrixRain:
    """One drop every second column, each falling at its own speed and wrapping to the top."""

    def __init__(self, width: int, height: int, rng: np.random.Generator) -> None:
        self.width = int(width)
        self.height = int(height)
        self.drops: List[Drop] = [
            Drop(
                x=(i * 2) % self.width,
                y=float(rng.integers(0, self.height)),
                speed=float(rng.uniform(RAIN_SPEED_MIN, RAIN_SPEED_MAX)),
            )
            for i in range(self.width // 2)
        ]

    def update(self, dt: float) -> None:
        for d in self.drops:
            d.y += d.speed * max(0.0, dt)
            if d.y >= self.height:
                d.y = 0.0

    def cells(self) -> Iterator[Cell]:
        for d in self.drops:
            x = min(max(d.x, 0), self.width - 1)
            y = min(max(int(d.y), 0), self.height - 1)
            yield Cell(x, y)
