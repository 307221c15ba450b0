from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Cell:
    """Integer grid coordinate. x grows to the right, y grows downwards."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Cell":
        return Cell(self.x + dx, self.y + dy)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)
