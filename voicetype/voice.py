"""
Voicing estimators: pitch, formants and harmonics-to-noise ratio.

These work on a single analysis frame (2048 samples by default) and its
magnitude spectrum from :func:`voicetype.features.spectrum`.  Spectra are
expected to come from even-length frames, so that N/2 bins span 0 to
sample_rate/2.  Pitch uses integer-period resolution.
"""

import math
from typing import Tuple

import numpy as np

from .features import FRAME_SIZE, bin_frequencies

MIN_PITCH_HZ = 80.0
MAX_PITCH_HZ = 400.0

FORMANT_RANGE = (200.0, 3000.0)

HNR_HARMONICS = 10
HNR_NO_NOISE_DB = 20.0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def pitch_period_range(sample_rate: float) -> Tuple[int, int]:
    """Integer lag range whose periods map into [80, 400] Hz."""
    min_period = max(1, int(math.ceil(sample_rate / MAX_PITCH_HZ)))
    max_period = max(min_period, int(math.floor(sample_rate / MIN_PITCH_HZ)))
    return min_period, max_period


def estimate_pitch(samples: np.ndarray, sample_rate: float,
                   frame_size: int = FRAME_SIZE) -> float:
    """Autocorrelation pitch over the first ``frame_size`` samples, in Hz.

    Candidate periods are scanned from the shortest (400 Hz) upward and the
    first period reaching a strictly greater score wins.  The score for
    period p is the raw lagged product sum over the valid overlap, so the
    result always lies in [80, 400] Hz.
    """
    frame = np.asarray(samples, dtype=np.float64)[:frame_size]
    min_period, max_period = pitch_period_range(sample_rate)

    best_period = min_period
    best_score = -np.inf
    for period in range(min_period, max_period + 1):
        if period < len(frame):
            score = float(np.dot(frame[:-period], frame[period:]))
        else:
            score = 0.0
        if score > best_score:
            best_score = score
            best_period = period

    return sample_rate / best_period


def estimate_formants(mags: np.ndarray, sample_rate: float) -> Tuple[float, float]:
    """Pick F1/F2 as the two strongest spectral peaks in 200-3000 Hz.

    A peak must strictly exceed both neighbours on each side.  Selection is
    by magnitude; the pair is then ordered so that F1 <= F2 in frequency.
    A missing peak reads as 0 Hz.
    """
    mags = np.asarray(mags, dtype=np.float64)
    freqs = bin_frequencies(len(mags), sample_rate)
    lo, hi = FORMANT_RANGE

    peaks = []
    for i in range(2, len(mags) - 2):
        if not (lo <= freqs[i] <= hi):
            continue
        m = mags[i]
        if m > mags[i - 1] and m > mags[i - 2] and m > mags[i + 1] and m > mags[i + 2]:
            peaks.append((m, freqs[i]))

    # Stable sort keeps the lower bin first among equal magnitudes
    peaks.sort(key=lambda p: p[0], reverse=True)

    f1 = float(peaks[0][1]) if len(peaks) > 0 else 0.0
    f2 = float(peaks[1][1]) if len(peaks) > 1 else 0.0
    if f2 < f1:
        f1, f2 = f2, f1
    return f1, f2


def harmonics_to_noise(mags: np.ndarray, sample_rate: float, f0: float) -> float:
    """Harmonics-to-noise ratio in dB from a frame spectrum and its pitch.

    For each of the first ten harmonics, the magnitude at the harmonic bin
    counts as harmonic energy and the magnitude half a fundamental (in bins)
    above it counts as noise.  Returns 0 for an f0 outside [80, 400] Hz,
    20 dB when no noise energy is found, and 0 when noise is present but
    the harmonic bins are empty (the ratio would be -inf).
    """
    if not (MIN_PITCH_HZ <= f0 <= MAX_PITCH_HZ):
        return 0.0

    mags = np.asarray(mags, dtype=np.float64)
    bin_width = sample_rate / (2 * len(mags)) if len(mags) else 0.0
    if bin_width <= 0:
        return 0.0

    noise_offset = _round_half_up((f0 / bin_width) / 2)
    harmonic_energy = 0.0
    noise_energy = 0.0
    for h in range(1, HNR_HARMONICS + 1):
        harmonic_bin = _round_half_up(h * f0 / bin_width)
        noise_bin = harmonic_bin + noise_offset
        if noise_bin >= len(mags):
            break
        harmonic_energy += mags[harmonic_bin]
        noise_energy += mags[noise_bin]

    if noise_energy == 0:
        return HNR_NO_NOISE_DB
    if harmonic_energy <= 0:
        return 0.0
    return float(10 * np.log10(harmonic_energy / noise_energy))
