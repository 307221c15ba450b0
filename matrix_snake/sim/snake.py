"""Snake rules on a generated map: movement, collisions, food and score."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from ..constants import INITIAL_SNAKE_LENGTH
from ..types import Cell
from .glyphs import random_glyph
from .map_gen import GameMap


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITE[self]

    def turned_clockwise(self) -> "Direction":
        return _CLOCKWISE[self]


_OPPOSITE = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

_CLOCKWISE = {
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.UP,
}


class StepEvent(Enum):
    IDLE = "idle"
    MOVED = "moved"
    ATE = "ate"
    DIED = "died"


class SnakeGame:
    """One round of snake on a fixed map.

    The head is ``snake[0]``; ``body_glyphs[i]`` is the glyph drawn for ``snake[i]``.
    """

    def __init__(
        self,
        game_map: GameMap,
        move_interval_s: float,
        rng: Optional[np.random.Generator] = None,
        initial_length: int = INITIAL_SNAKE_LENGTH,
    ) -> None:
        self.map = game_map
        self.move_interval_s = float(move_interval_s)
        self.rng = rng or np.random.default_rng()
        self.initial_length = int(initial_length)
        self.restart()

    def restart(self) -> None:
        start = self.map.spawn
        self.snake: List[Cell] = [start.offset(-i, 0) for i in range(self.initial_length)]
        self.body_glyphs: List[str] = [random_glyph(self.rng) for _ in self.snake]
        self.direction = Direction.RIGHT
        self.next_direction = Direction.RIGHT
        self.score = 0
        self.alive = True
        self.last_move_at: Optional[float] = None
        self.food: Optional[Cell] = None
        self.food_glyph = random_glyph(self.rng)
        self.spawn_food()

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def spawn_food(self) -> Optional[Cell]:
        occupied = set(self.snake)
        free = [
            Cell(x, y)
            for y in range(self.map.height)
            for x in range(self.map.width)
            if not self.map.walls.is_wall(x, y) and Cell(x, y) not in occupied
        ]
        if not free:
            self.food = None
            return None
        self.food = free[int(self.rng.integers(0, len(free)))]
        self.food_glyph = random_glyph(self.rng)
        return self.food

    def queue_direction(self, direction: Direction) -> None:
        if direction is self.direction.opposite:
            return
        self.next_direction = direction

    def update(self, now_s: float) -> StepEvent:
        if not self.alive:
            return StepEvent.IDLE
        if self.last_move_at is None:
            # First frame only arms the timer
            self.last_move_at = float(now_s)
            return StepEvent.IDLE
        if now_s - self.last_move_at < self.move_interval_s:
            return StepEvent.IDLE
        self.last_move_at = float(now_s)
        return self.step()

    def step(self) -> StepEvent:
        if not self.alive:
            return StepEvent.IDLE
        self.direction = self.next_direction
        dx, dy = self.direction.delta
        new_head = self.head.offset(dx, dy)

        # No wrap-around: leaving the board is fatal
        if not self.map.walls.in_bounds(new_head.x, new_head.y) or self.map.is_wall(new_head):
            self.alive = False
            return StepEvent.DIED
        if new_head in self.snake:
            self.alive = False
            return StepEvent.DIED

        self.snake.insert(0, new_head)
        self.body_glyphs.insert(0, random_glyph(self.rng))

        if new_head == self.food:
            self.score += 1
            self.spawn_food()
            return StepEvent.ATE

        self.snake.pop()
        self.body_glyphs.pop()
        return StepEvent.MOVED
