"""Sine tone synthesis into in-memory WAV buffers.

NumPy computes the waveform and the standard ``wave`` module writes the
RIFF/WAVE PCM container into a ``BytesIO``. Nothing touches disk or an
audio device here.
"""

from __future__ import annotations

import io
import math
import struct
import wave
from dataclasses import dataclass

import numpy as np

from ..constants import SAMPLE_RATE_HZ
from ..errors import InvalidParameter

WAV_HEADER_SIZE: int = 44

_FULL_SCALE = {8: 127, 16: 32767}


@dataclass(frozen=True)
class WavHeader:
    sample_rate: int
    channels: int
    bits_per_sample: int
    byte_rate: int
    block_align: int
    riff_size: int
    data_size: int

    @property
    def frames(self) -> int:
        return self.data_size // self.block_align


def num_frames(duration_s: float, sample_rate: int) -> int:
    return max(1, int(round(float(duration_s) * int(sample_rate))))


def synthesize_samples(
    frequency_hz: float,
    duration_s: float,
    volume: float,
    sample_rate: int = SAMPLE_RATE_HZ,
    bits_per_sample: int = 16,
) -> np.ndarray:
    """Return the signed sample values (before any 8-bit offset) as int32."""
    _validate(frequency_hz, duration_s, volume, sample_rate, bits_per_sample)
    n = num_frames(duration_s, sample_rate)
    t = np.arange(n, dtype=np.float64) / float(sample_rate)
    wave_f = np.sin(2.0 * np.pi * float(frequency_hz) * t)
    full_scale = _FULL_SCALE[bits_per_sample]
    return np.round(float(volume) * full_scale * wave_f).astype(np.int32)


def generate_tone(
    frequency_hz: float,
    duration_s: float,
    volume: float,
    sample_rate: int = SAMPLE_RATE_HZ,
    bits_per_sample: int = 16,
) -> bytes:
    """Synthesize a mono sine tone and return it as a complete WAV file in memory.

    Args:
        frequency_hz: tone frequency, > 0.
        duration_s: length in seconds, > 0. Rounded to whole frames, at least one.
        volume: amplitude in [0, 1] relative to full scale; 0 gives silent frames.
        sample_rate: frames per second, > 0.
        bits_per_sample: 16 (signed little-endian) or 8 (unsigned, offset 128).

    Raises:
        InvalidParameter: on non-positive frequency, duration or sample rate,
            volume outside [0, 1], or an unsupported bit depth.
    """
    samples = synthesize_samples(frequency_hz, duration_s, volume, sample_rate, bits_per_sample)
    if bits_per_sample == 16:
        frames = samples.astype("<i2").tobytes()
    else:
        frames = (samples + 128).astype(np.uint8).tobytes()

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(bits_per_sample // 8)
        wf.setframerate(int(sample_rate))
        wf.writeframes(frames)
    return buf.getvalue()


def parse_wav_header(data: bytes) -> WavHeader:
    """Decode the canonical 44-byte PCM header written by :func:`generate_tone`."""
    if len(data) < WAV_HEADER_SIZE:
        raise InvalidParameter(f"buffer too short for a WAV header: {len(data)} bytes")
    riff, riff_size, wave_id = struct.unpack_from("<4sI4s", data, 0)
    fmt_id, fmt_size, fmt_tag, channels, rate, byte_rate, block_align, bits = struct.unpack_from(
        "<4sIHHIIHH", data, 12
    )
    data_id, data_size = struct.unpack_from("<4sI", data, 36)
    if riff != b"RIFF" or wave_id != b"WAVE" or fmt_id != b"fmt " or data_id != b"data":
        raise InvalidParameter("not a canonical RIFF/WAVE buffer")
    if fmt_size != 16 or fmt_tag != 1:
        raise InvalidParameter(f"unsupported WAV format tag {fmt_tag} (fmt size {fmt_size})")
    return WavHeader(
        sample_rate=rate,
        channels=channels,
        bits_per_sample=bits,
        byte_rate=byte_rate,
        block_align=block_align,
        riff_size=riff_size,
        data_size=data_size,
    )


def _validate(
    frequency_hz: float,
    duration_s: float,
    volume: float,
    sample_rate: int,
    bits_per_sample: int,
) -> None:
    for name, value in (
        ("frequency_hz", frequency_hz),
        ("duration_s", duration_s),
        ("sample_rate", sample_rate),
    ):
        if math.isnan(float(value)) or float(value) <= 0.0:
            raise InvalidParameter(f"{name} must be > 0, got {value}")
    if math.isnan(float(volume)) or not 0.0 <= float(volume) <= 1.0:
        raise InvalidParameter(f"volume must be in [0, 1], got {volume}")
    if bits_per_sample not in _FULL_SCALE:
        raise InvalidParameter(f"bits_per_sample must be 8 or 16, got {bits_per_sample}")
