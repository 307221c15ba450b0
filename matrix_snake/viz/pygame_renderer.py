"""Pygame renderer for the matrix snake game.

Renders:
- Glyph rain behind every screen
- Lobby menu with a live map preview and a wandering preview head
- Board walls, snake, food and HUD while playing
- Settings screen and the game-over overlay

Supports windowed (interactive) and headless modes. Returns frames for recording.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import numpy as np
import pygame

from ..config import DisplayConfig
from ..constants import DEFAULT_MOVE_INTERVAL_S, GRID_HEIGHT, GRID_WIDTH
from ..screens import MENU_ITEMS, GameSession, Screen
from ..sim.glyphs import glyph_for, random_glyph
from ..sim.map_gen import WallSet
from ..sim.snake import SnakeGame
from ..types import Cell
from .rain import MatrixRain

Color = Tuple[int, ...]


@dataclass
class Colors:
    background: Color = (0, 0, 0)
    head: Color = (163, 255, 163)
    body: Color = (64, 230, 64)
    wall: Color = (20, 102, 20)
    food: Color = (230, 255, 230)
    rain: Color = (51, 204, 51, 128)
    preview_wall: Color = (20, 102, 20, 204)
    text: Color = (255, 255, 255)
    text_dim: Color = (130, 130, 130)
    text_light: Color = (200, 200, 200)
    overlay: Color = (0, 0, 0, 102)


@dataclass
class Layout:
    tile_w: float
    tile_h: float
    off_x: float
    off_y: float


@dataclass
class VizConfig:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    colors: Colors = field(default_factory=Colors)
    preview_fraction: float = 0.85


class Renderer:
    def __init__(
        self,
        grid_size: Tuple[int, int] = (GRID_WIDTH, GRID_HEIGHT),
        viz_cfg: Optional[VizConfig] = None,
        display: bool = True,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.viz = viz_cfg or VizConfig()
        self.colors = self.viz.colors
        self.grid_w, self.grid_h = int(grid_size[0]), int(grid_size[1])
        self.display = bool(display)
        self.rng = rng or np.random.default_rng()

        if not self.display:
            os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

        pygame.init()
        dcfg = self.viz.display
        if self.display:
            flags = pygame.FULLSCREEN if dcfg.fullscreen else 0
            self.screen = pygame.display.set_mode(dcfg.size_px, flags)
            pygame.display.set_caption(dcfg.title)
        else:
            self.screen = pygame.Surface(dcfg.size_px)
        self.width, self.height = self.screen.get_size()
        self.clock = pygame.time.Clock()
        pygame.font.init()
        self._fonts: Dict[int, pygame.font.Font] = {}
        self._glyphs: Dict[Tuple[str, int, Color], pygame.Surface] = {}
        self.rain = MatrixRain(self.grid_w, self.grid_h, self.rng)

    # Layout and primitives

    def board_layout(self, fraction: float = 1.0) -> Layout:
        """Square tiles scaled to fit `fraction` of the window, centered."""
        tile = min(self.width * fraction / self.grid_w, self.height * fraction / self.grid_h)
        off_x = (self.width - tile * self.grid_w) * 0.5
        off_y = (self.height - tile * self.grid_h) * 0.5
        return Layout(tile, tile, off_x, off_y)

    def font(self, size: int) -> pygame.font.Font:
        size = max(6, int(size))
        if size not in self._fonts:
            self._fonts[size] = pygame.font.SysFont("monospace", size, bold=True)
        return self._fonts[size]

    def _glyph_surface(self, ch: str, size: int, color: Color) -> pygame.Surface:
        key = (ch, size, color)
        surf = self._glyphs.get(key)
        if surf is None:
            surf = self.font(size).render(ch, True, color[:3])
            if len(color) == 4:
                surf.set_alpha(color[3])
            self._glyphs[key] = surf
        return surf

    def draw_glyph(self, ch: str, cell: Cell, color: Color, layout: Layout) -> None:
        size = int(max(6.0, min(layout.tile_w, layout.tile_h)))
        surf = self._glyph_surface(ch, size, color)
        cx = layout.off_x + (cell.x + 0.5) * layout.tile_w
        cy = layout.off_y + (cell.y + 0.5) * layout.tile_h
        self.screen.blit(surf, surf.get_rect(center=(int(cx), int(cy))))

    def draw_text(self, text: str, pos: Tuple[float, float], size: int, color: Color) -> None:
        surf = self.font(size).render(text, True, color[:3])
        self.screen.blit(surf, (int(pos[0]), int(pos[1])))

    def draw_text_centered(self, text: str, y: float, size: int, color: Color) -> None:
        surf = self.font(size).render(text, True, color[:3])
        self.screen.blit(surf, surf.get_rect(midtop=(self.width // 2, int(y))))

    # Scene pieces

    def draw_rain(self, dt: float) -> None:
        self.rain.update(dt)
        layout = self.board_layout()
        for cell in self.rain.cells():
            self.draw_glyph(random_glyph(self.rng), cell, self.colors.rain, layout)

    def draw_walls(self, walls: WallSet, layout: Layout, color: Color) -> None:
        for c in walls:
            self.draw_glyph(glyph_for(c), c, color, layout)

    def draw_game(self, game: SnakeGame) -> None:
        layout = self.board_layout()
        self.draw_walls(game.map.walls, layout, self.colors.wall)
        for i, (c, ch) in enumerate(zip(game.snake, game.body_glyphs)):
            color = self.colors.head if i == 0 else self.colors.body
            self.draw_glyph(ch, c, color, layout)
        if game.food is not None:
            self.draw_glyph(game.food_glyph, game.food, self.colors.food, layout)

        status = "Arrows/WASD to move" if game.alive else "Game Over - R to restart, Enter to lobby"
        self.draw_text(f"Score: {game.score}", (8, 4), 24, self.colors.body)
        self.draw_text(status, (8, 32), 18, self.colors.wall)

    def draw_lobby(self, session: GameSession) -> None:
        lobby = session.lobby
        c = self.colors
        layout = self.board_layout(self.viz.preview_fraction)
        self.draw_walls(lobby.preview_map.walls, layout, c.preview_wall)

        # Preview head shifts from green to red as the snake gets faster
        speed = min(4.0, max(0.5, DEFAULT_MOVE_INTERVAL_S / lobby.move_interval_s))
        head_color = (int(min(1.0, 0.15 * speed) * 255), int(min(1.0, 0.9 / speed) * 255), 51)
        self.draw_glyph(random_glyph(self.rng), lobby.preview_pos, head_color, layout)

        y = self.height * 0.25
        self.draw_text_centered("SNAKE", y, 40, c.head)
        y += 56
        for i, item in enumerate(MENU_ITEMS):
            self.draw_text_centered(item, y, 20, c.text if lobby.selected == i else c.text_dim)
            y += 24
        self.draw_text_centered("S: Settings", y, 20, c.text_dim)

        self.draw_text_centered(f"Best: {session.best_score}", self.height - 72, 20, c.body)
        params = (
            f"Seed: {lobby.seed}  Density: {lobby.wall_density * 100:.0f}%  "
            f"Speed: {lobby.move_interval_s * 1000:.0f}ms"
        )
        self.draw_text_centered(params, self.height - 44, 18, c.text_light)

    def draw_settings(self, session: GameSession) -> None:
        c = self.colors
        y = self.height * 0.25
        self.draw_text_centered("SETTINGS", y, 36, c.head)
        y += 56
        vol = int(round(session.settings.sound_volume * 100))
        self.draw_text_centered(f"Volume: {vol:>3}%", y, 22, c.text)
        y += 28
        self.draw_text_centered("Left/Right or -/+ : Adjust volume   M: Mute/Unmute", y, 18, c.text_dim)
        y += 24
        self.draw_text_centered("Enter/Esc: Back", y, 18, c.text_dim)

    def draw_game_over(self, session: GameSession) -> None:
        self.draw_game(session.game)
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill(self.colors.overlay)
        self.screen.blit(overlay, (0, 0))
        y = self.height * 0.4
        self.draw_text_centered("GAME OVER", y, 36, self.colors.head)
        self.draw_text_centered("R: Restart  Enter: Lobby  Q: Quit", y + 56, 22, self.colors.text)

    # Frame

    def render(self, session: GameSession, dt: float = 0.0) -> pygame.Surface:
        self.screen.fill(self.colors.background)
        self.draw_rain(dt)
        if session.screen is Screen.LOBBY:
            self.draw_lobby(session)
        elif session.screen is Screen.SETTINGS:
            self.draw_settings(session)
        elif session.screen is Screen.PLAYING:
            self.draw_game(session.game)
        elif session.screen is Screen.GAME_OVER:
            self.draw_game_over(session)
        if self.display:
            pygame.display.flip()
        return self.screen

    def tick(self) -> float:
        """Wait for the next frame and return the elapsed time in seconds."""
        return self.clock.tick(self.viz.display.fps) / 1000.0

    def close(self) -> None:
        pygame.quit()
