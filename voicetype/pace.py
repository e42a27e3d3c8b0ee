"""Speech activity, speaking pace and dynamic range."""

import numpy as np

from .features import FRAME_SIZE, split_frames
from .types import PaceMetrics

ACTIVITY_FRAME_SECONDS = 0.02
SPEECH_RMS_THRESHOLD = 0.02

# Words in the fixed reading script the recording is made from
REFERENCE_WORD_COUNT = 50
FALLBACK_WPM = 150.0

SILENCE_FLOOR = 0.001


def _frame_rms(frames: np.ndarray) -> np.ndarray:
    if frames.size == 0:
        return np.zeros(len(frames))
    return np.sqrt(np.mean(frames ** 2, axis=1))


def speech_ratio(samples: np.ndarray, sample_rate: float,
                 threshold: float = SPEECH_RMS_THRESHOLD) -> float:
    """Fraction of 20 ms frames whose RMS exceeds ``threshold``.

    A trailing partial frame is not counted.  Returns 0 when the buffer
    holds no complete frame.
    """
    frame_len = int(ACTIVITY_FRAME_SECONDS * sample_rate)
    frames = split_frames(samples, frame_len)
    if len(frames) == 0:
        return 0.0
    energies = _frame_rms(frames)
    return float(np.count_nonzero(energies > threshold) / len(frames))


def analyze_pace(samples: np.ndarray, sample_rate: float, duration: float) -> PaceMetrics:
    """Estimate words per minute assuming the reference script was read.

    The speaking time is the caller-supplied duration scaled by the speech
    ratio.  A zero speaking time yields 150 wpm.
    """
    ratio = speech_ratio(samples, sample_rate)
    speaking_time = duration * ratio
    if speaking_time > 0:
        wpm = (REFERENCE_WORD_COUNT / speaking_time) * 60
    else:
        wpm = FALLBACK_WPM
    return PaceMetrics(wpm=float(wpm), speech_ratio=ratio, pause_density=1.0 - ratio)


def dynamic_range(samples: np.ndarray, frame_size: int = FRAME_SIZE) -> float:
    """Loudest over quietest non-silent frame RMS, as a plain ratio.

    Frames at or below the 0.001 silence floor are ignored for the minimum;
    if none remain the floor itself is used.
    """
    energies = _frame_rms(split_frames(samples, frame_size))
    if len(energies) == 0:
        return 0.0
    max_energy = float(np.max(energies))
    audible = energies[energies > SILENCE_FLOOR]
    min_energy = float(np.min(audible)) if len(audible) > 0 else SILENCE_FLOOR
    return max_energy / min_energy
