"""Sound effects: synthesize tones once and play them through pygame.mixer."""

from __future__ import annotations

import io
from typing import Dict, Optional

from ..config import AudioConfig, ToneConfig
from ..constants import TONE_HEADROOM
from .tone import generate_tone

try:
    import pygame
except ImportError:  # pragma: no cover - audio optional in headless CI
    pygame = None


class SoundBank:
    """Named sound effects built from :class:`ToneConfig` entries.

    Buffers are always synthesized; playback is skipped when audio is
    disabled or no mixer device is available.
    """

    def __init__(self, cfg: Optional[AudioConfig] = None) -> None:
        self.cfg = cfg or AudioConfig()
        self.volume = float(self.cfg.volume)
        self._tones: Dict[str, ToneConfig] = {"eat": self.cfg.eat, "die": self.cfg.die}
        self.buffers: Dict[str, bytes] = {
            name: self._synthesize(tone) for name, tone in self._tones.items()
        }
        self._sounds: Dict[str, object] = {}
        self.available = False
        if self.cfg.enabled:
            self._load_mixer()

    def _synthesize(self, tone: ToneConfig) -> bytes:
        return generate_tone(
            tone.frequency_hz,
            tone.duration_s,
            min(1.0, tone.volume * TONE_HEADROOM),
            sample_rate=self.cfg.sample_rate,
            bits_per_sample=self.cfg.bits_per_sample,
        )

    def _load_mixer(self) -> None:
        if pygame is None:
            print("[WARN] pygame not available; sound effects disabled")
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            self._sounds = {
                name: pygame.mixer.Sound(file=io.BytesIO(buf)) for name, buf in self.buffers.items()
            }
        except pygame.error as e:
            print(f"[WARN] Audio device unavailable; sound effects disabled: {e}")
            self._sounds = {}
            return
        self.available = True

    def set_volume(self, volume: float) -> None:
        self.volume = max(0.0, min(1.0, float(volume)))

    def effective_volume(self, name: str) -> float:
        return self._tones[name].gain * self.volume

    def play(self, name: str) -> bool:
        """Play a named effect. Returns False when nothing was played."""
        if name not in self._tones:
            raise KeyError(f"unknown sound effect: {name}")
        if not self.available or self.volume <= 0.0:
            return False
        sound = self._sounds[name]
        sound.set_volume(self.effective_volume(name))
        sound.play()
        return True
