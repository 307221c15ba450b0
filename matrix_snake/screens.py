"""Screen state machine: Lobby, Settings, Playing and GameOver.

The active screen is a tagged value (:class:`Screen`) and every screen change
goes through :data:`TRANSITIONS`. Input arrives as abstract :class:`Action`s so
the machine runs without a window.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Protocol, Tuple

import numpy as np

from .config import GameConfig, MapConfig
from .constants import (
    MOVE_INTERVAL_MAX_S,
    MOVE_INTERVAL_MIN_S,
    MOVE_INTERVAL_STEP_S,
    PREVIEW_MIN_INTERVAL_S,
    RESEED_MULTIPLIER,
    SEED_MAX,
    VOLUME_STEP,
    WALL_DENSITY_MAX,
    WALL_DENSITY_MIN,
    WALL_DENSITY_STEP,
)
from .errors import InvalidTransition
from .persistence import SaveData, SaveStore
from .sim.map_gen import GameMap
from .sim.snake import Direction, SnakeGame, StepEvent
from .types import Cell


class Screen(Enum):
    LOBBY = "lobby"
    SETTINGS = "settings"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Trigger(Enum):
    START = auto()
    OPEN_SETTINGS = auto()
    CLOSE_SETTINGS = auto()
    DIE = auto()
    RESTART = auto()
    RETURN_TO_LOBBY = auto()


TRANSITIONS: Dict[Tuple[Screen, Trigger], Screen] = {
    (Screen.LOBBY, Trigger.START): Screen.PLAYING,
    (Screen.LOBBY, Trigger.OPEN_SETTINGS): Screen.SETTINGS,
    (Screen.SETTINGS, Trigger.CLOSE_SETTINGS): Screen.LOBBY,
    (Screen.PLAYING, Trigger.DIE): Screen.GAME_OVER,
    (Screen.GAME_OVER, Trigger.RESTART): Screen.PLAYING,
    (Screen.GAME_OVER, Trigger.RETURN_TO_LOBBY): Screen.LOBBY,
}


def next_screen(screen: Screen, trigger: Trigger) -> Screen:
    try:
        return TRANSITIONS[(screen, trigger)]
    except KeyError:
        raise InvalidTransition(f"no transition from {screen.name} on {trigger.name}") from None


class Action(Enum):
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    CONFIRM = auto()
    BACK = auto()
    RESEED = auto()
    DENSITY_DOWN = auto()
    DENSITY_UP = auto()
    SLOWER = auto()
    FASTER = auto()
    SETTINGS = auto()
    MUTE = auto()
    RESTART = auto()
    QUIT = auto()


_STEER = {
    Action.UP: Direction.UP,
    Action.DOWN: Direction.DOWN,
    Action.LEFT: Direction.LEFT,
    Action.RIGHT: Direction.RIGHT,
}


class SoundSink(Protocol):
    def play(self, name: str) -> bool: ...

    def set_volume(self, volume: float) -> None: ...


def reseed(seed: int) -> int:
    return (int(seed) * RESEED_MULTIPLIER + 1) % SEED_MAX


def time_seed() -> int:
    return int(time.time() * 1_000_000) % SEED_MAX


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


MENU_ITEMS: Tuple[str, ...] = (
    "Enter: Start",
    "R: Reseed",
    "- / + : Wall density",
    "[ / ] : Speed",
    "Q: Quit",
)
MENU_START, MENU_RESEED, MENU_DENSITY, MENU_SPEED, MENU_QUIT = range(len(MENU_ITEMS))


@dataclass
class LobbyState:
    seed: int
    wall_density: float
    move_interval_s: float
    map_cfg: MapConfig
    selected: int = MENU_START
    preview_map: Optional[GameMap] = None
    preview_pos: Optional[Cell] = None
    preview_dir: Direction = Direction.RIGHT
    preview_last_move: float = 0.0

    def __post_init__(self) -> None:
        self.wall_density = _clamp(self.wall_density, WALL_DENSITY_MIN, WALL_DENSITY_MAX)
        self.move_interval_s = _clamp(self.move_interval_s, MOVE_INTERVAL_MIN_S, MOVE_INTERVAL_MAX_S)
        if self.preview_map is None:
            self.regenerate_preview()

    @classmethod
    def from_save(
        cls, save: SaveData, cfg: GameConfig, seed_override: Optional[int] = None
    ) -> "LobbyState":
        if seed_override is not None:
            seed = seed_override
        elif save.last_seed is not None and 0 <= save.last_seed < SEED_MAX:
            seed = save.last_seed
        else:
            seed = time_seed()
        density = cfg.map.wall_density if save.last_wall_density is None else save.last_wall_density
        if save.last_move_interval_ms is None:
            interval = cfg.gameplay.move_interval_s
        else:
            interval = save.last_move_interval_ms / 1000.0
        return cls(seed=seed, wall_density=density, move_interval_s=interval, map_cfg=cfg.map)

    def regenerate_preview(self) -> None:
        self.preview_map = GameMap.generate(self.seed, self.wall_density, self.map_cfg)
        self.preview_pos = self.preview_map.spawn
        self.preview_dir = Direction.RIGHT

    def move_selection(self, delta: int) -> None:
        self.selected = (self.selected + delta) % len(MENU_ITEMS)

    def reseed(self) -> None:
        self.seed = reseed(self.seed)
        self.regenerate_preview()

    def adjust_density(self, delta: float) -> None:
        d = round(_clamp(self.wall_density + delta, WALL_DENSITY_MIN, WALL_DENSITY_MAX), 4)
        if d != self.wall_density:
            self.wall_density = d
            self.regenerate_preview()

    def adjust_interval(self, delta: float) -> None:
        self.move_interval_s = round(
            _clamp(self.move_interval_s + delta, MOVE_INTERVAL_MIN_S, MOVE_INTERVAL_MAX_S), 4
        )

    def advance_preview(self, now_s: float) -> None:
        """Wander a preview head around the map at the selected speed."""
        if now_s - self.preview_last_move < max(self.move_interval_s, PREVIEW_MIN_INTERVAL_S):
            return
        self.preview_last_move = now_s
        m = self.preview_map
        head = self.preview_pos
        d = self.preview_dir
        for _ in range(4):
            dx, dy = d.delta
            cand = head.offset(dx, dy)
            inside = 0 < cand.x < m.width - 1 and 0 < cand.y < m.height - 1
            if inside and not m.is_wall(cand):
                self.preview_pos = cand
                self.preview_dir = d
                return
            d = d.turned_clockwise()
        # Boxed in: restart from the spawn
        self.preview_pos = m.spawn
        self.preview_dir = Direction.RIGHT


@dataclass
class SettingsState:
    sound_volume: float

    def adjust(self, delta: float) -> None:
        self.sound_volume = round(_clamp(self.sound_volume + delta, 0.0, 1.0), 4)

    def toggle_mute(self) -> None:
        self.sound_volume = 0.0 if self.sound_volume > 0.0 else 1.0


class GameSession:
    """Owns the active screen, its state, the save store and sound output."""

    def __init__(
        self,
        cfg: GameConfig,
        store: SaveStore,
        sounds: Optional[SoundSink] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.cfg = cfg
        self.store = store
        self.sounds = sounds
        self.rng = rng or np.random.default_rng()
        self.running = True

        save = self.store.load()
        self.best_score = save.best_score
        self.sound_volume = save.sound_volume
        if self.sounds is not None:
            self.sounds.set_volume(self.sound_volume)

        self.screen = Screen.LOBBY
        self.lobby: Optional[LobbyState] = LobbyState.from_save(save, cfg, seed_override=cfg.seed)
        self.settings: Optional[SettingsState] = None
        self.game: Optional[SnakeGame] = None

    def _fire(self, trigger: Trigger) -> None:
        self.screen = next_screen(self.screen, trigger)

    def _play(self, name: str) -> None:
        if self.sounds is not None:
            self.sounds.play(name)

    def handle(self, action: Action, now_s: float = 0.0) -> None:
        if action is Action.QUIT:
            self.running = False
            return
        handler = {
            Screen.LOBBY: self._handle_lobby,
            Screen.SETTINGS: self._handle_settings,
            Screen.PLAYING: self._handle_playing,
            Screen.GAME_OVER: self._handle_game_over,
        }[self.screen]
        handler(action, now_s)

    def update(self, now_s: float) -> None:
        if self.screen is Screen.LOBBY:
            self.lobby.advance_preview(now_s)
        elif self.screen is Screen.PLAYING:
            event = self.game.update(now_s)
            if event is StepEvent.ATE:
                self._play("eat")
            elif event is StepEvent.DIED:
                self._play("die")
                self._enter_game_over()

    # Lobby

    def _handle_lobby(self, action: Action, now_s: float) -> None:
        lobby = self.lobby
        if action is Action.UP:
            lobby.move_selection(-1)
        elif action is Action.DOWN:
            lobby.move_selection(1)
        elif action in (Action.LEFT, Action.RIGHT):
            sign = -1 if action is Action.LEFT else 1
            if lobby.selected == MENU_DENSITY:
                lobby.adjust_density(sign * WALL_DENSITY_STEP)
            elif lobby.selected == MENU_SPEED:
                # Left slows the snake down (longer interval)
                lobby.adjust_interval(-sign * MOVE_INTERVAL_STEP_S)
        elif action is Action.RESEED:
            lobby.reseed()
        elif action is Action.DENSITY_DOWN:
            lobby.adjust_density(-WALL_DENSITY_STEP)
        elif action is Action.DENSITY_UP:
            lobby.adjust_density(WALL_DENSITY_STEP)
        elif action is Action.SLOWER:
            lobby.adjust_interval(MOVE_INTERVAL_STEP_S)
        elif action is Action.FASTER:
            lobby.adjust_interval(-MOVE_INTERVAL_STEP_S)
        elif action is Action.SETTINGS:
            self.settings = SettingsState(sound_volume=self.sound_volume)
            self._fire(Trigger.OPEN_SETTINGS)
        elif action is Action.CONFIRM:
            if lobby.selected == MENU_START:
                self.start_game()
            elif lobby.selected == MENU_RESEED:
                lobby.reseed()
            elif lobby.selected == MENU_QUIT:
                self.running = False

    def start_game(self) -> None:
        lobby = self.lobby
        game_map = GameMap.generate(lobby.seed, lobby.wall_density, self.cfg.map)
        self.game = SnakeGame(
            game_map,
            lobby.move_interval_s,
            rng=self.rng,
            initial_length=self.cfg.gameplay.initial_length,
        )
        self.store.update(
            last_seed=int(lobby.seed),
            last_wall_density=float(lobby.wall_density),
            last_move_interval_ms=int(round(lobby.move_interval_s * 1000)),
        )
        print(
            f"[INFO] Starting game: seed={lobby.seed} density={lobby.wall_density:.2f} "
            f"interval={lobby.move_interval_s * 1000:.0f}ms"
        )
        self._fire(Trigger.START)

    # Settings

    def _handle_settings(self, action: Action, now_s: float) -> None:
        st = self.settings
        if action in (Action.LEFT, Action.DENSITY_DOWN):
            st.adjust(-VOLUME_STEP)
        elif action in (Action.RIGHT, Action.DENSITY_UP):
            st.adjust(VOLUME_STEP)
        elif action is Action.MUTE:
            st.toggle_mute()
        elif action in (Action.CONFIRM, Action.BACK):
            self.sound_volume = st.sound_volume
            if self.sounds is not None:
                self.sounds.set_volume(self.sound_volume)
            self.store.update(sound_volume=float(self.sound_volume))
            self._fire(Trigger.CLOSE_SETTINGS)

    # Playing / GameOver

    def _handle_playing(self, action: Action, now_s: float) -> None:
        direction = _STEER.get(action)
        if direction is not None:
            self.game.queue_direction(direction)

    def _enter_game_over(self) -> None:
        score = self.game.score
        if score > self.best_score:
            self.best_score = score
            self.store.update(best_score=int(score))
            print(f"[INFO] New best score: {score}")
        self._fire(Trigger.DIE)

    def _handle_game_over(self, action: Action, now_s: float) -> None:
        if action is Action.RESTART:
            self.game = SnakeGame(
                self.game.map,
                self.game.move_interval_s,
                rng=self.rng,
                initial_length=self.cfg.gameplay.initial_length,
            )
            self._fire(Trigger.RESTART)
        elif action is Action.CONFIRM:
            self.lobby = LobbyState.from_save(self.store.load(), self.cfg)
            self._fire(Trigger.RETURN_TO_LOBBY)
