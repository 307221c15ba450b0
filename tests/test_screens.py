import json

import numpy as np
import pytest

from matrix_snake.config import GameConfig
from matrix_snake.constants import RESEED_MULTIPLIER, SEED_MAX
from matrix_snake.errors import InvalidTransition
from matrix_snake.persistence import SaveData, SaveStore
from matrix_snake.screens import (
    MENU_DENSITY,
    MENU_QUIT,
    MENU_SPEED,
    TRANSITIONS,
    Action,
    GameSession,
    LobbyState,
    Screen,
    Trigger,
    next_screen,
    reseed,
)
from matrix_snake.sim.snake import StepEvent
from matrix_snake.types import Cell


class RecordingSounds:
    def __init__(self):
        self.played = []
        self.volume = None

    def play(self, name):
        self.played.append(name)
        return True

    def set_volume(self, volume):
        self.volume = volume


def make_session(tmp_path, seed=1234, **save):
    store = SaveStore(tmp_path / "save.json")
    if save:
        store.write(SaveData(**save))
    cfg = GameConfig.from_dict({"seed": seed})
    sounds = RecordingSounds()
    session = GameSession(cfg, store, sounds=sounds, rng=np.random.default_rng(0))
    return session, store, sounds


def test_transition_table():
    assert next_screen(Screen.LOBBY, Trigger.START) is Screen.PLAYING
    assert next_screen(Screen.PLAYING, Trigger.DIE) is Screen.GAME_OVER
    assert next_screen(Screen.GAME_OVER, Trigger.RESTART) is Screen.PLAYING
    assert len(TRANSITIONS) == 6
    with pytest.raises(InvalidTransition):
        next_screen(Screen.SETTINGS, Trigger.DIE)


def test_reseed_is_lcg_step():
    assert reseed(0) == 1
    assert reseed(5) == (5 * RESEED_MULTIPLIER + 1) % SEED_MAX
    assert 0 <= reseed(SEED_MAX - 1) < SEED_MAX


def test_lobby_defaults_and_saved_values(tmp_path):
    session, _, sounds = make_session(tmp_path)
    lobby = session.lobby
    assert session.screen is Screen.LOBBY
    assert lobby.seed == 1234
    assert lobby.wall_density == pytest.approx(0.10)
    assert lobby.move_interval_s == pytest.approx(0.12)
    assert sounds.volume == pytest.approx(1.0)

    session, _, _ = make_session(
        tmp_path, seed=None, last_seed=77, last_wall_density=0.2, last_move_interval_ms=200
    )
    assert session.lobby.seed == 77
    assert session.lobby.wall_density == pytest.approx(0.2)
    assert session.lobby.move_interval_s == pytest.approx(0.2)


def test_lobby_adjustments_are_clamped(tmp_path):
    session, _, _ = make_session(tmp_path)
    lobby = session.lobby
    for _ in range(30):
        session.handle(Action.DENSITY_UP)
    assert lobby.wall_density == pytest.approx(0.35)
    for _ in range(30):
        session.handle(Action.FASTER)
    assert lobby.move_interval_s == pytest.approx(0.05)

    session.handle(Action.DOWN)
    session.handle(Action.DOWN)
    assert lobby.selected == MENU_DENSITY
    session.handle(Action.LEFT)
    assert lobby.wall_density == pytest.approx(0.33)
    session.handle(Action.DOWN)
    assert lobby.selected == MENU_SPEED
    session.handle(Action.LEFT)
    assert lobby.move_interval_s == pytest.approx(0.07)


def test_reseed_regenerates_preview(tmp_path):
    session, _, _ = make_session(tmp_path)
    before = session.lobby.preview_map.walls
    session.handle(Action.RESEED)
    assert session.lobby.seed == reseed(1234)
    assert session.lobby.preview_map.seed == reseed(1234)
    assert session.lobby.preview_map.walls != before


def test_menu_wraps_and_quit(tmp_path):
    session, _, _ = make_session(tmp_path)
    session.handle(Action.UP)
    assert session.lobby.selected == MENU_QUIT
    session.handle(Action.CONFIRM)
    assert not session.running


def test_start_persists_settings(tmp_path):
    session, store, _ = make_session(tmp_path)
    session.handle(Action.CONFIRM)
    assert session.screen is Screen.PLAYING
    assert session.game.map.seed == 1234
    saved = json.loads((tmp_path / "save.json").read_text())
    assert saved["last_seed"] == 1234
    assert saved["last_wall_density"] == pytest.approx(0.10)
    assert saved["last_move_interval_ms"] == 120


def test_death_moves_to_game_over_and_saves_best(tmp_path):
    session, store, sounds = make_session(tmp_path)
    session.handle(Action.CONFIRM)
    game = session.game
    game.score = 5
    # Steer straight up into the border
    game.food = None
    session.handle(Action.UP)
    t = 0.0
    while session.screen is Screen.PLAYING and t < 10.0:
        session.update(t)
        t += 0.2
    assert session.screen is Screen.GAME_OVER
    assert sounds.played[-1] == "die"
    assert session.best_score == 5
    assert store.load().best_score == 5


def test_eating_plays_sound(tmp_path):
    session, _, sounds = make_session(tmp_path)
    session.handle(Action.CONFIRM)
    game = session.game
    game.food = game.head.offset(1, 0)
    session.update(0.0)
    session.update(1.0)
    assert game.score == 1
    assert sounds.played == ["eat"]


def test_game_over_restart_and_lobby(tmp_path):
    session, _, _ = make_session(tmp_path)
    session.handle(Action.CONFIRM)
    first_map = session.game.map
    session.game.alive = False
    session._enter_game_over()
    session.handle(Action.RESTART)
    assert session.screen is Screen.PLAYING
    assert session.game.map is first_map
    assert session.game.alive

    session.game.alive = False
    session._enter_game_over()
    session.handle(Action.CONFIRM)
    assert session.screen is Screen.LOBBY
    assert session.lobby.seed == 1234


def test_settings_volume_and_mute(tmp_path):
    session, store, sounds = make_session(tmp_path)
    session.handle(Action.SETTINGS)
    assert session.screen is Screen.SETTINGS
    session.handle(Action.LEFT)
    session.handle(Action.DENSITY_DOWN)
    assert session.settings.sound_volume == pytest.approx(0.9)
    session.handle(Action.MUTE)
    assert session.settings.sound_volume == 0.0
    session.handle(Action.MUTE)
    assert session.settings.sound_volume == 1.0
    session.handle(Action.LEFT)
    session.handle(Action.BACK)
    assert session.screen is Screen.LOBBY
    assert sounds.volume == pytest.approx(0.95)
    assert store.load().sound_volume == pytest.approx(0.95)


def test_quit_from_any_screen(tmp_path):
    session, _, _ = make_session(tmp_path)
    session.handle(Action.CONFIRM)
    session.handle(Action.QUIT)
    assert not session.running


def test_preview_head_stays_on_free_cells(tmp_path):
    session, _, _ = make_session(tmp_path)
    lobby = session.lobby
    m = lobby.preview_map
    for i in range(200):
        lobby.advance_preview(i * 0.2)
        pos = lobby.preview_pos
        assert not m.is_wall(pos)
        assert 0 < pos.x < m.width - 1 and 0 < pos.y < m.height - 1


def test_lobby_state_clamps_out_of_range_save(tmp_path):
    cfg = GameConfig()
    lobby = LobbyState.from_save(
        SaveData(last_seed=3, last_wall_density=0.9, last_move_interval_ms=10), cfg
    )
    assert lobby.wall_density == pytest.approx(0.35)
    assert lobby.move_interval_s == pytest.approx(0.05)
    assert lobby.preview_pos == Cell(16, 12)


def test_lobby_state_ignores_out_of_range_saved_seed():
    cfg = GameConfig()
    for bad in (-1, SEED_MAX):
        lobby = LobbyState.from_save(SaveData(last_seed=bad), cfg)
        assert 0 <= lobby.seed < SEED_MAX
        assert lobby.preview_map.seed == lobby.seed
