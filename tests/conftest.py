"""Shared pytest fixtures for voicetype tests."""

import numpy as np
import pytest

from voicetype import VoiceTypeAnalyzer

from synth import buffer_of, make_tone, make_vowel, make_wav


@pytest.fixture(scope="session")
def vowel_buffer():
    """10 s of a steady voiced vowel at 16 kHz."""
    return buffer_of(make_vowel())


@pytest.fixture(scope="session")
def silent_buffer():
    """5 s of digital silence."""
    return buffer_of(np.zeros(5 * 16000))


@pytest.fixture(scope="session")
def short_tone_buffer():
    """3 s clean 150 Hz sine at amplitude 0.5."""
    return buffer_of(make_tone(150.0, 3.0))


@pytest.fixture(scope="session")
def static_buffer():
    """6 s of a DC level with sub-threshold jitter (std well below 0.001)."""
    rng = np.random.default_rng(7)
    samples = 0.5 + rng.uniform(-0.0005, 0.0005, 6 * 16000)
    return buffer_of(samples)


@pytest.fixture(scope="session")
def noise_buffer():
    """6 s of uniform white noise: loud and varied, but not a voice."""
    rng = np.random.default_rng(42)
    return buffer_of(rng.uniform(-0.5, 0.5, 6 * 16000))


@pytest.fixture(scope="session")
def vowel_wav_bytes():
    return make_wav(make_vowel())


@pytest.fixture(scope="session")
def silent_wav_bytes():
    return make_wav(np.zeros(5 * 16000))


@pytest.fixture()
def analyzer():
    """Fresh sequential analyzer."""
    return VoiceTypeAnalyzer()
