"""Main loop: pygame events -> session actions -> frame."""

from __future__ import annotations

from typing import Dict, Optional

import numpy as np
import pygame

from .audio.sounds import SoundBank
from .config import GameConfig
from .persistence import SaveStore
from .screens import Action, GameSession, Screen
from .viz.pygame_renderer import Renderer, VizConfig

_MOVE_KEYS: Dict[int, Action] = {
    pygame.K_UP: Action.UP,
    pygame.K_w: Action.UP,
    pygame.K_DOWN: Action.DOWN,
    pygame.K_s: Action.DOWN,
    pygame.K_LEFT: Action.LEFT,
    pygame.K_a: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_d: Action.RIGHT,
}

KEYMAPS: Dict[Screen, Dict[int, Action]] = {
    Screen.LOBBY: {
        pygame.K_UP: Action.UP,
        pygame.K_DOWN: Action.DOWN,
        pygame.K_LEFT: Action.LEFT,
        pygame.K_RIGHT: Action.RIGHT,
        pygame.K_RETURN: Action.CONFIRM,
        pygame.K_KP_ENTER: Action.CONFIRM,
        pygame.K_r: Action.RESEED,
        pygame.K_MINUS: Action.DENSITY_DOWN,
        pygame.K_EQUALS: Action.DENSITY_UP,
        pygame.K_LEFTBRACKET: Action.SLOWER,
        pygame.K_RIGHTBRACKET: Action.FASTER,
        pygame.K_s: Action.SETTINGS,
    },
    Screen.SETTINGS: {
        pygame.K_LEFT: Action.LEFT,
        pygame.K_RIGHT: Action.RIGHT,
        pygame.K_MINUS: Action.DENSITY_DOWN,
        pygame.K_EQUALS: Action.DENSITY_UP,
        pygame.K_m: Action.MUTE,
        pygame.K_RETURN: Action.CONFIRM,
        pygame.K_KP_ENTER: Action.CONFIRM,
        pygame.K_ESCAPE: Action.BACK,
    },
    Screen.PLAYING: dict(_MOVE_KEYS),
    Screen.GAME_OVER: {
        pygame.K_r: Action.RESTART,
        pygame.K_RETURN: Action.CONFIRM,
        pygame.K_KP_ENTER: Action.CONFIRM,
    },
}


def action_for_key(screen: Screen, key: int) -> Optional[Action]:
    if key == pygame.K_q:
        return Action.QUIT
    return KEYMAPS[screen].get(key)


def run(cfg: GameConfig, display: bool = True, max_frames: Optional[int] = None) -> int:
    """Run the game until quit. Returns the best score seen this session."""
    rng = np.random.default_rng(cfg.seed)
    renderer = Renderer(
        (cfg.map.width, cfg.map.height),
        VizConfig(display=cfg.display),
        display=display,
        rng=rng,
    )
    sounds = SoundBank(cfg.audio)
    store = SaveStore(cfg.save_path)
    session = GameSession(cfg, store, sounds=sounds, rng=rng)
    print(f"[INFO] Save file: {store.path.resolve()}")

    frames = 0
    dt = 0.0
    try:
        while session.running:
            now = pygame.time.get_ticks() / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    session.running = False
                elif event.type == pygame.KEYDOWN:
                    action = action_for_key(session.screen, event.key)
                    if action is not None:
                        session.handle(action, now)
            if not session.running:
                break
            session.update(now)
            renderer.render(session, dt)
            dt = renderer.tick()
            frames += 1
            if max_frames is not None and frames >= max_frames:
                break
    finally:
        renderer.close()
    return session.best_score
