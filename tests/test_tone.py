import io
import struct
import wave

import numpy as np
import pytest

from matrix_snake.audio.tone import (
    WAV_HEADER_SIZE,
    generate_tone,
    parse_wav_header,
    synthesize_samples,
)
from matrix_snake.errors import InvalidParameter


def test_header_matches_requested_tone():
    buf = generate_tone(880, 0.1, 1.0, 44100)
    hdr = parse_wav_header(buf)
    assert hdr.frames == 4410
    assert hdr.sample_rate == 44100
    assert hdr.channels == 1
    assert hdr.bits_per_sample == 16
    assert hdr.block_align == 2
    assert hdr.byte_rate == 44100 * 2
    assert hdr.data_size == 4410 * 2
    assert hdr.riff_size == 36 + hdr.data_size
    assert len(buf) == WAV_HEADER_SIZE + hdr.data_size


def test_standard_decoder_reads_buffer():
    buf = generate_tone(440, 0.05, 0.5, 22050)
    with wave.open(io.BytesIO(buf), "rb") as wf:
        assert wf.getnchannels() == 1
        assert wf.getsampwidth() == 2
        assert wf.getframerate() == 22050
        assert wf.getnframes() == int(round(0.05 * 22050))


def test_zero_volume_is_silent_not_empty():
    buf = generate_tone(440, 0.05, 0.0, 44100)
    hdr = parse_wav_header(buf)
    assert hdr.frames == 2205
    samples = np.frombuffer(buf[WAV_HEADER_SIZE:], dtype="<i2")
    assert samples.size == 2205
    assert not np.any(samples)


def test_sample_values_follow_sine():
    # Quarter period per sample: 0, +peak, 0, -peak
    buf = generate_tone(11025, 0.001, 1.0, 44100)
    samples = np.frombuffer(buf[WAV_HEADER_SIZE:], dtype="<i2")
    assert samples[0] == 0
    assert samples[1] == 32767
    assert abs(int(samples[2])) <= 1
    assert samples[3] == -32767


def test_volume_scales_amplitude():
    loud = synthesize_samples(440, 0.05, 1.0)
    quiet = synthesize_samples(440, 0.05, 0.25)
    assert np.abs(quiet).max() == pytest.approx(np.abs(loud).max() / 4, abs=1)


def test_eight_bit_is_offset_unsigned():
    buf = generate_tone(440, 0.01, 0.0, 8000, bits_per_sample=8)
    hdr = parse_wav_header(buf)
    assert hdr.bits_per_sample == 8
    assert hdr.block_align == 1
    assert set(buf[WAV_HEADER_SIZE:]) == {128}


def test_very_short_tone_has_one_frame():
    hdr = parse_wav_header(generate_tone(440, 1e-9, 0.5))
    assert hdr.frames == 1


@pytest.mark.parametrize(
    "args",
    [
        (-1, 0.1, 0.5, 44100),
        (0, 0.1, 0.5, 44100),
        (440, 0.0, 0.5, 44100),
        (440, 0.1, 0.5, 0),
        (440, 0.1, 1.5, 44100),
        (440, 0.1, -0.1, 44100),
        (float("nan"), 0.1, 0.5, 44100),
    ],
)
def test_invalid_parameters_rejected(args):
    with pytest.raises(InvalidParameter):
        generate_tone(*args)


def test_unsupported_bit_depth_rejected():
    with pytest.raises(InvalidParameter):
        generate_tone(440, 0.1, 0.5, 44100, bits_per_sample=24)


def test_parse_rejects_non_wav():
    with pytest.raises(InvalidParameter):
        parse_wav_header(b"RIFF")
    bogus = b"RIFX" + struct.pack("<I", 36) + b"WAVE" + bytes(32)
    with pytest.raises(InvalidParameter):
        parse_wav_header(bogus)
