"""Procedural sound effects."""

from .sounds import SoundBank
from .tone import WavHeader, generate_tone, parse_wav_header

__all__ = ["SoundBank", "WavHeader", "generate_tone", "parse_wav_header"]
