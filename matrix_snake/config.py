from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .constants import (
    DEFAULT_MOVE_INTERVAL_S,
    DEFAULT_SOUND_VOLUME,
    DEFAULT_WALL_DENSITY,
    GRID_HEIGHT,
    GRID_WIDTH,
    INITIAL_SNAKE_LENGTH,
    MOVE_INTERVAL_MAX_S,
    MOVE_INTERVAL_MIN_S,
    SAFE_ZONE_RADIUS,
    SAMPLE_RATE_HZ,
    SAVE_FILENAME,
    WALL_DENSITY_MAX,
    WALL_DENSITY_MIN,
)


@dataclass
class MapConfig:
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    wall_density: float = DEFAULT_WALL_DENSITY
    safe_radius: int = SAFE_ZONE_RADIUS

    def __post_init__(self) -> None:
        assert self.width > 0, "width must be > 0"
        assert self.height > 0, "height must be > 0"
        assert (
            WALL_DENSITY_MIN <= self.wall_density <= WALL_DENSITY_MAX
        ), f"wall_density in [{WALL_DENSITY_MIN}, {WALL_DENSITY_MAX}]"
        assert self.safe_radius >= 0, "safe_radius must be >= 0"


@dataclass
class GameplayConfig:
    move_interval_s: float = DEFAULT_MOVE_INTERVAL_S
    initial_length: int = INITIAL_SNAKE_LENGTH

    def __post_init__(self) -> None:
        assert (
            MOVE_INTERVAL_MIN_S <= self.move_interval_s <= MOVE_INTERVAL_MAX_S
        ), f"move_interval_s in [{MOVE_INTERVAL_MIN_S}, {MOVE_INTERVAL_MAX_S}]"
        assert self.initial_length >= 1, "initial_length must be >= 1"


@dataclass
class ToneConfig:
    """One synthesized sound effect and the gain it is played back with."""

    frequency_hz: float
    duration_s: float
    volume: float
    gain: float = 1.0

    def __post_init__(self) -> None:
        assert self.frequency_hz > 0.0, "frequency_hz must be > 0"
        assert self.duration_s > 0.0, "duration_s must be > 0"
        assert 0.0 <= self.volume <= 1.0, "volume in [0,1]"
        assert 0.0 <= self.gain <= 1.0, "gain in [0,1]"


@dataclass
class AudioConfig:
    enabled: bool = True
    sample_rate: int = SAMPLE_RATE_HZ
    bits_per_sample: int = 16
    volume: float = DEFAULT_SOUND_VOLUME
    eat: ToneConfig = field(
        default_factory=lambda: ToneConfig(frequency_hz=880.0, duration_s=0.08, volume=0.6, gain=0.35)
    )
    die: ToneConfig = field(
        default_factory=lambda: ToneConfig(frequency_hz=110.0, duration_s=0.25, volume=0.7, gain=0.6)
    )

    def __post_init__(self) -> None:
        assert self.sample_rate > 0, "sample_rate must be > 0"
        assert self.bits_per_sample in (8, 16), "bits_per_sample must be 8 or 16"
        assert 0.0 <= self.volume <= 1.0, "volume in [0,1]"


@dataclass
class DisplayConfig:
    size_px: Tuple[int, int] = (960, 720)
    fullscreen: bool = False
    fps: int = 60
    title: str = "Snake - Matrix"

    def __post_init__(self) -> None:
        assert len(self.size_px) == 2, "size_px must be (width, height)"
        assert self.size_px[0] > 0 and self.size_px[1] > 0, "size_px must be positive"
        assert self.fps > 0, "fps must be > 0"


@dataclass
class GameConfig:
    map: MapConfig = field(default_factory=MapConfig)
    gameplay: GameplayConfig = field(default_factory=GameplayConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    save_path: str = SAVE_FILENAME
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, cfg: Dict[str, Any] | None) -> "GameConfig":
        d = cfg or {}
        audio_cfg = dict(d.get("audio", {}))
        # Tone sections are nested dicts; fall back to dataclass defaults when absent
        defaults = AudioConfig()
        eat = ToneConfig(**{**defaults.eat.__dict__, **dict(audio_cfg.pop("eat", {}) or {})})
        die = ToneConfig(**{**defaults.die.__dict__, **dict(audio_cfg.pop("die", {}) or {})})

        display_cfg = dict(d.get("display", {}))
        if "size_px" in display_cfg:
            display_cfg["size_px"] = tuple(int(v) for v in display_cfg["size_px"])

        seed = d.get("seed")
        return cls(
            map=MapConfig(**dict(d.get("map", {}))),
            gameplay=GameplayConfig(**dict(d.get("gameplay", {}))),
            audio=AudioConfig(eat=eat, die=die, **audio_cfg),
            display=DisplayConfig(**display_cfg),
            save_path=str(d.get("save_path", SAVE_FILENAME)),
            seed=None if seed is None else int(seed),
        )
