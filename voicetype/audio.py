"""
PCM WAV loading for the analyzer.

Decoding sits outside the classification core; this module only turns a
WAV container into a :class:`~voicetype.types.SampleBuffer`.  Multichannel
input keeps the first channel.
"""

import io
import logging
import wave
from pathlib import Path
from typing import Tuple, Union

import numpy as np

from .types import SampleBuffer

logger = logging.getLogger(__name__)


class AudioDecodeError(ValueError):
    """Raised when audio bytes cannot be decoded into samples."""


def decode_wav(audio_bytes: bytes) -> Tuple[np.ndarray, int]:
    """Decode WAV bytes to first-channel float64 samples + sample rate.

    Supports 8-bit, 16-bit, 24-bit, and 32-bit PCM WAV files.
    """
    buf = io.BytesIO(audio_bytes)
    try:
        with wave.open(buf, 'rb') as wf:
            sr = wf.getframerate()
            n_channels = wf.getnchannels()
            sampwidth = wf.getsampwidth()
            n_frames = wf.getnframes()
            raw = wf.readframes(n_frames)
    except (wave.Error, EOFError) as e:
        raise AudioDecodeError(f"Not a readable PCM WAV file: {e}") from e

    if sampwidth == 1:
        samples = np.frombuffer(raw, dtype=np.uint8).astype(np.float64) / 128.0 - 1.0
    elif sampwidth == 2:
        samples = np.frombuffer(raw, dtype='<i2').astype(np.float64) / 32768.0
    elif sampwidth == 3:
        # 24-bit: vectorized unpack of 3-byte little-endian samples
        raw_arr = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3)
        samples = (raw_arr[:, 0].astype(np.int32)
                   | (raw_arr[:, 1].astype(np.int32) << 8)
                   | (raw_arr[:, 2].astype(np.int32) << 16))
        samples = np.where(samples >= 0x800000, samples - 0x1000000, samples)
        samples = samples.astype(np.float64) / 8388608.0
    elif sampwidth == 4:
        samples = np.frombuffer(raw, dtype='<i4').astype(np.float64) / 2147483648.0
    else:
        raise AudioDecodeError(f"Unsupported sample width: {sampwidth}")

    if n_channels > 1:
        usable = len(samples) - len(samples) % n_channels
        samples = samples[:usable].reshape(-1, n_channels)[:, 0]

    return samples, sr


def buffer_from_wav(audio_bytes: bytes) -> SampleBuffer:
    """Decode WAV bytes into a SampleBuffer with duration from the header."""
    samples, sr = decode_wav(audio_bytes)
    if len(samples) == 0:
        raise AudioDecodeError("WAV file contains no samples")
    if sr <= 0:
        raise AudioDecodeError(f"Invalid sample rate in WAV header: {sr}")
    logger.debug(f"Decoded {len(samples)} samples at {sr} Hz")
    return SampleBuffer(samples=samples, sample_rate=sr, duration=len(samples) / sr)


def load_wav(path: Union[str, Path]) -> SampleBuffer:
    """Read a WAV file from disk into a SampleBuffer."""
    return buffer_from_wav(Path(path).read_bytes())
