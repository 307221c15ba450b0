"""JSON save data: best score and last-used settings."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import DEFAULT_SOUND_VOLUME, SAVE_FILENAME, SEED_MAX


@dataclass
class SaveData:
    best_score: int = 0
    last_seed: Optional[int] = None
    last_wall_density: Optional[float] = None
    last_move_interval_ms: Optional[int] = None
    sound_volume: float = DEFAULT_SOUND_VOLUME

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "SaveData":
        def opt(key: str, cast):
            v = d.get(key)
            return None if v is None else cast(v)

        return cls(
            best_score=max(0, int(d.get("best_score", 0))),
            last_seed=_valid_seed(opt("last_seed", int)),
            last_wall_density=opt("last_wall_density", float),
            last_move_interval_ms=opt("last_move_interval_ms", int),
            sound_volume=min(1.0, max(0.0, float(d.get("sound_volume", DEFAULT_SOUND_VOLUME)))),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _valid_seed(seed: Optional[int]) -> Optional[int]:
    # Out-of-range seeds fall back to a fresh one instead of failing map generation
    if seed is None or not 0 <= seed < SEED_MAX:
        return None
    return seed


class SaveStore:
    def __init__(self, path: str | Path = SAVE_FILENAME) -> None:
        self.path = Path(path)

    def load(self) -> SaveData:
        if not self.path.is_file():
            return SaveData()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            if not isinstance(raw, dict):
                raise TypeError(f"expected a JSON object, got {type(raw).__name__}")
            return SaveData.from_dict(raw)
        except (OSError, json.JSONDecodeError, TypeError, ValueError, OverflowError) as e:
            print(f"[WARN] Ignoring unreadable save file {self.path}: {e}")
            return SaveData()

    def write(self, data: SaveData) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data.to_dict(), f, indent=2)
        except OSError as e:
            print(f"[WARN] Could not write save file {self.path}: {e}")
            return False
        return True

    def update(self, **changes: Any) -> SaveData:
        """Load, apply field changes, write back and return the new data."""
        data = self.load()
        for key, value in changes.items():
            if not hasattr(data, key):
                raise AttributeError(f"SaveData has no field {key!r}")
            setattr(data, key, value)
        self.write(data)
        return data
