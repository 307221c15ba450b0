"""Utility helpers shared by the game entry points and tests."""

from .config import load_config_any, load_config_dict, load_game_config, to_game_config

__all__ = [
    "load_config_any",
    "load_config_dict",
    "load_game_config",
    "to_game_config",
]
