import pytest

from matrix_snake.audio.sounds import SoundBank
from matrix_snake.audio.tone import parse_wav_header
from matrix_snake.config import AudioConfig


def test_disabled_bank_builds_buffers_but_stays_silent():
    bank = SoundBank(AudioConfig(enabled=False))
    assert set(bank.buffers) == {"eat", "die"}
    eat = parse_wav_header(bank.buffers["eat"])
    die = parse_wav_header(bank.buffers["die"])
    assert eat.frames == round(0.08 * 44100)
    assert die.frames == round(0.25 * 44100)
    assert bank.available is False
    assert bank.play("eat") is False


def test_effective_volume_uses_gain():
    bank = SoundBank(AudioConfig(enabled=False))
    bank.set_volume(0.5)
    assert bank.effective_volume("eat") == pytest.approx(0.35 * 0.5)
    assert bank.effective_volume("die") == pytest.approx(0.6 * 0.5)
    bank.set_volume(4.0)
    assert bank.volume == 1.0


def test_unknown_effect_raises():
    bank = SoundBank(AudioConfig(enabled=False))
    with pytest.raises(KeyError):
        bank.play("boom")
