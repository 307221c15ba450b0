"""Procedural wall maps.

Responsibilities:
- Seal the board border.
- Keep a square safe zone around the spawn point free of walls.
- Scatter interior walls with a configurable density from a locally seeded RNG.

Grid convention: True = wall; indices [row, col] = [y, x].
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple, Union

import numpy as np

from ..config import MapConfig
from ..constants import (
    GRID_HEIGHT,
    GRID_WIDTH,
    SAFE_ZONE_RADIUS,
    SEED_MAX,
    WALL_DENSITY_MAX,
    WALL_DENSITY_MIN,
)
from ..errors import InvalidDimensions, InvalidParameter
from ..types import Cell

CellLike = Union[Cell, Tuple[int, int]]


class WallSet:
    """Set of wall cells over a fixed-size grid with O(1) membership."""

    def __init__(self, grid: np.ndarray) -> None:
        if grid.ndim != 2:
            raise InvalidDimensions("wall grid must be 2D")
        self._grid = np.array(grid, dtype=bool)
        self._grid.flags.writeable = False

    @classmethod
    def from_cells(cls, width: int, height: int, cells: Iterable[CellLike]) -> "WallSet":
        _check_dimensions(width, height)
        grid = np.zeros((height, width), dtype=bool)
        for c in cells:
            x, y = _xy(c)
            if not (0 <= x < width and 0 <= y < height):
                raise InvalidParameter(f"cell ({x}, {y}) outside {width}x{height} grid")
            grid[y, x] = True
        return cls(grid)

    @property
    def width(self) -> int:
        return int(self._grid.shape[1])

    @property
    def height(self) -> int:
        return int(self._grid.shape[0])

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return bool(self._grid[y, x])

    def as_array(self) -> np.ndarray:
        return self._grid.copy()

    def __contains__(self, item: object) -> bool:
        try:
            x, y = _xy(item)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False
        return self.is_wall(x, y)

    def __iter__(self) -> Iterator[Cell]:
        ys, xs = np.nonzero(self._grid)
        for y, x in zip(ys, xs):
            yield Cell(int(x), int(y))

    def __len__(self) -> int:
        return int(self._grid.sum())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WallSet):
            return NotImplemented
        return self._grid.shape == other._grid.shape and bool(np.array_equal(self._grid, other._grid))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"WallSet({self.width}x{self.height}, walls={len(self)})"


@dataclass(frozen=True)
class SafeZone:
    """Inclusive rectangle [x0, x1] x [y0, y1]; empty when x0 > x1 or y0 > y1."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def empty(self) -> bool:
        return self.x0 > self.x1 or self.y0 > self.y1

    def contains(self, x: int, y: int) -> bool:
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1

    def cells(self) -> Iterator[Cell]:
        for y in range(self.y0, self.y1 + 1):
            for x in range(self.x0, self.x1 + 1):
                yield Cell(x, y)


def spawn_cell(width: int, height: int) -> Cell:
    return Cell(width // 2, height // 2)


def safe_zone(width: int, height: int, radius: int = SAFE_ZONE_RADIUS) -> SafeZone:
    """Square of half-size `radius` around the spawn, clipped to the interior."""
    c = spawn_cell(width, height)
    r = max(0, int(radius))
    return SafeZone(
        x0=max(1, c.x - r),
        y0=max(1, c.y - r),
        x1=min(width - 2, c.x + r),
        y1=min(height - 2, c.y + r),
    )


def clamp_density(wall_density: float) -> float:
    d = float(wall_density)
    if math.isnan(d):
        raise InvalidParameter("wall_density must be a number")
    return float(np.clip(d, WALL_DENSITY_MIN, WALL_DENSITY_MAX))


class MapGenerator:
    """Wall map generator driven by an injected NumPy generator."""

    def __init__(self, cfg: MapConfig, rng: np.random.Generator) -> None:
        self.cfg = cfg
        self.rng = rng

    def generate(self) -> WallSet:
        W, H = int(self.cfg.width), int(self.cfg.height)
        _check_dimensions(W, H)
        density = clamp_density(self.cfg.wall_density)

        grid = np.zeros((H, W), dtype=bool)
        grid[0, :] = True
        grid[H - 1, :] = True
        grid[:, 0] = True
        grid[:, W - 1] = True

        eligible = ~grid
        zone = safe_zone(W, H, self.cfg.safe_radius)
        if not zone.empty:
            eligible[zone.y0 : zone.y1 + 1, zone.x0 : zone.x1 + 1] = False

        # Boolean-mask assignment walks cells in C (row-major) order: one draw per cell
        rolls = self.rng.random(int(eligible.sum()))
        grid[eligible] = rolls < density
        return WallSet(grid)


def generate_walls(
    seed: int,
    wall_density: float,
    width: int = GRID_WIDTH,
    height: int = GRID_HEIGHT,
    safe_radius: int = SAFE_ZONE_RADIUS,
) -> WallSet:
    """Generate a wall map; a pure function of (seed, density, width, height)."""
    _check_dimensions(width, height)
    rng = np.random.default_rng(_check_seed(seed))
    # MapConfig asserts the density range, so clamp before building it
    cfg = MapConfig(
        width=int(width),
        height=int(height),
        wall_density=clamp_density(wall_density),
        safe_radius=int(safe_radius),
    )
    return MapGenerator(cfg, rng).generate()


@dataclass
class GameMap:
    walls: WallSet
    seed: int
    wall_density: float
    spawn: Cell

    @property
    def width(self) -> int:
        return self.walls.width

    @property
    def height(self) -> int:
        return self.walls.height

    def is_wall(self, c: Cell) -> bool:
        return self.walls.is_wall(c.x, c.y)

    @classmethod
    def generate(
        cls, seed: int, wall_density: float, cfg: Optional[MapConfig] = None
    ) -> "GameMap":
        c = cfg or MapConfig()
        walls = generate_walls(seed, wall_density, c.width, c.height, c.safe_radius)
        return cls(
            walls=walls,
            seed=int(seed),
            wall_density=clamp_density(wall_density),
            spawn=spawn_cell(c.width, c.height),
        )


def _check_dimensions(width: int, height: int) -> None:
    if int(width) <= 0 or int(height) <= 0:
        raise InvalidDimensions(f"grid must be positive, got {width}x{height}")


def _check_seed(seed: int) -> int:
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise InvalidParameter(f"seed must be an integer, got {type(seed).__name__}")
    s = int(seed)
    if not 0 <= s < SEED_MAX:
        raise InvalidParameter(f"seed must be in [0, 2**64), got {s}")
    return s


def _xy(c: CellLike) -> Tuple[int, int]:
    if isinstance(c, Cell):
        return c.x, c.y
    x, y = c
    return int(x), int(y)
