"""
Spectrum engine and primitive acoustic features.

All calculators are pure functions over a read-only sample array.  Frame
spectra follow the direct DFT definition: for a frame of N samples, bin k
in [0, N/2) holds |sum_j x[j] * exp(-2*pi*i*k*j/N)| and maps to frequency
k * sample_rate / N.  ``scipy.fft.rfft`` computes exactly this, so it is
used in place of the O(N^2) sum.

Numeric edge cases (empty input, zero-magnitude frames, empty bands)
resolve to 0.0 rather than raising.
"""

from typing import Optional

import numpy as np
from scipy.fft import rfft

from .types import EnergyBands

FRAME_SIZE = 2048

# Half-open [lo, hi) Hz ranges
ENERGY_BANDS = {
    'low': (0.0, 250.0),
    'mid_low': (250.0, 500.0),
    'mid': (500.0, 2000.0),
    'high': (2000.0, 4000.0),
    'very_high': (4000.0, 8000.0),
}

TILT_LOW_BAND = (200.0, 500.0)
TILT_HIGH_BAND = (2000.0, 4000.0)
TILT_OCTAVES = 3.0


# ---------------------------------------------------------------------------
# Framing / spectrum
# ---------------------------------------------------------------------------

def split_frames(samples: np.ndarray, frame_size: int) -> np.ndarray:
    """Partition into consecutive non-overlapping frames, dropping the remainder.

    Returns a (n_frames, frame_size) view; n_frames may be 0.
    """
    samples = np.asarray(samples, dtype=np.float64)
    if frame_size <= 0:
        return np.empty((0, 0))
    n_frames = len(samples) // frame_size
    return samples[:n_frames * frame_size].reshape(n_frames, frame_size)


def spectrum(frame: np.ndarray) -> np.ndarray:
    """Magnitude spectrum of a frame: N samples -> N // 2 magnitudes, bin k at k * sr / N."""
    frame = np.asarray(frame, dtype=np.float64)
    n = len(frame)
    if n == 0:
        return np.zeros(0)
    return np.abs(rfft(frame))[:n // 2]


def bin_frequencies(n_bins: int, sample_rate: float,
                    frame_length: Optional[int] = None) -> np.ndarray:
    """Center frequency of each bin of a spectrum with ``n_bins`` bins.

    Bin k maps to k * sample_rate / frame_length.  When the frame length
    is not given the spectrum is assumed to come from an even-length frame
    (``2 * n_bins`` samples); pass it explicitly for odd-length frames.
    """
    if frame_length is None:
        frame_length = 2 * n_bins
    return np.arange(n_bins) * sample_rate / frame_length


def band_mean(magnitudes: np.ndarray, freqs: np.ndarray, lo: float, hi: float) -> float:
    """Mean magnitude of bins whose frequency falls in [lo, hi); 0 if none do."""
    mask = (freqs >= lo) & (freqs < hi)
    count = int(np.sum(mask))
    if count == 0:
        return 0.0
    return float(np.sum(magnitudes[mask]) / count)


# ---------------------------------------------------------------------------
# Time-domain primitives
# ---------------------------------------------------------------------------

def rms_energy(samples: np.ndarray) -> float:
    """Root-mean-square amplitude; 0 for an empty slice."""
    samples = np.asarray(samples, dtype=np.float64)
    if samples.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(samples ** 2)))


def zero_crossing_rate(samples: np.ndarray) -> float:
    """Fraction of adjacent sample pairs whose sign (>= 0 vs < 0) differs.

    Normalized by the total sample count.
    """
    samples = np.asarray(samples, dtype=np.float64)
    if samples.size == 0:
        return 0.0
    non_negative = samples >= 0
    crossings = int(np.count_nonzero(non_negative[1:] != non_negative[:-1]))
    return crossings / samples.size


# ---------------------------------------------------------------------------
# Spectral features
# ---------------------------------------------------------------------------

def spectral_centroid(samples: np.ndarray, sample_rate: float,
                      frame_size: int = FRAME_SIZE) -> float:
    """Unweighted mean of per-frame spectral centroids in Hz.

    Frames with zero total magnitude are skipped.  Returns 0 when no frame
    contributes.
    """
    frames = split_frames(samples, frame_size)
    if len(frames) == 0:
        return 0.0

    mags = np.abs(rfft(frames, axis=1))[:, :frame_size // 2]
    freqs = bin_frequencies(mags.shape[1], sample_rate, frame_length=frame_size)

    totals = np.sum(mags, axis=1)
    voiced = totals > 0
    if not np.any(voiced):
        return 0.0

    centroids = np.sum(mags[voiced] * freqs, axis=1) / totals[voiced]
    return float(np.mean(centroids))


def energy_bands(samples: np.ndarray, sample_rate: float,
                 frame_size: int = FRAME_SIZE) -> EnergyBands:
    """Band-mean magnitudes from the spectrum of the first frame only."""
    frame = np.asarray(samples, dtype=np.float64)[:frame_size]
    mags = spectrum(frame)
    if mags.size == 0:
        return EnergyBands()
    freqs = bin_frequencies(len(mags), sample_rate, frame_length=len(frame))
    values = {
        name: band_mean(mags, freqs, lo, hi)
        for name, (lo, hi) in ENERGY_BANDS.items()
    }
    return EnergyBands(**values)


def spectral_tilt(mags: np.ndarray, sample_rate: float) -> float:
    """Approximate roll-off in dB/octave between 200-500 Hz and 2-4 kHz.

    Takes the magnitude spectrum of an even-length frame.  Returns 0 if
    either band is empty.
    """
    freqs = bin_frequencies(len(mags), sample_rate)
    low = band_mean(mags, freqs, *TILT_LOW_BAND)
    high = band_mean(mags, freqs, *TILT_HIGH_BAND)
    if low == 0 or high == 0:
        return 0.0
    return float(10 * np.log10(high / low) / TILT_OCTAVES)

