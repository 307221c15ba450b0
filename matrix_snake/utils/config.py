"""Config loading helpers built around OmegaConf."""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from omegaconf import DictConfig, OmegaConf

from ..config import GameConfig


def load_config_any(path: str, overrides: Optional[Sequence[str]] = None) -> Any:
    """Load a YAML file, apply dotlist overrides and return the resolved Python object."""
    cfg = OmegaConf.load(path)
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))
    return OmegaConf.to_container(cfg, resolve=True)


def load_config_dict(path: str, overrides: Optional[Sequence[str]] = None) -> Dict[str, Any]:
    """Load a config file and guarantee a `dict` result."""
    cfg = load_config_any(path, overrides)
    if not isinstance(cfg, dict):
        raise TypeError(f"Expected mapping at {path}, got {type(cfg)}")
    return cfg


def to_game_config(cfg: DictConfig | Dict[str, Any]) -> GameConfig:
    """Build a validated GameConfig from a Hydra/OmegaConf node or plain dict."""
    if isinstance(cfg, DictConfig):
        data = OmegaConf.to_container(cfg, resolve=True)
    else:
        data = cfg
    if not isinstance(data, dict):
        raise TypeError("Expected config to resolve to a dict")
    # Hydra's own node is not part of the game config
    data = {k: v for k, v in data.items() if k != "hydra"}
    return GameConfig.from_dict(data)


def load_game_config(path: str, overrides: Optional[Sequence[str]] = None) -> GameConfig:
    return to_game_config(load_config_dict(path, overrides))
