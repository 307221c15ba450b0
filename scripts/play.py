"""Launch the matrix snake game.

Hydra composes `configs/config.yaml`; any field can be overridden from the
command line, e.g.::

    python scripts/play.py map.wall_density=0.2 seed=42 display.fullscreen=true
"""

from __future__ import annotations

import hydra
from omegaconf import DictConfig

from matrix_snake.app import run
from matrix_snake.utils.config import to_game_config


@hydra.main(config_path="../configs", config_name="config", version_base=None)
def main(cfg: DictConfig) -> None:
    game_cfg = to_game_config(cfg)
    best = run(game_cfg, display=not bool(cfg.get("headless", False)))
    print(f"[INFO] Best score: {best}")


if __name__ == "__main__":
    main()
