"""
Validity gate for recordings.

Runs a fixed sequence of checks over the whole buffer and stops at the
first failure:

  1. Silence          whole-buffer RMS
  2. Too quiet        share of 20 ms frames carrying speech energy
  3. Too short        caller-supplied duration
  4. No variation     standard deviation of the first 48000 samples
  5. Not human voice  formant / HNR / spectral-tilt structure

A rejection is a ValidationOutcome, never an exception.
"""

import logging
from typing import Any, Dict

import numpy as np

from .features import FRAME_SIZE, rms_energy, spectral_tilt, spectrum
from .pace import speech_ratio
from .types import SampleBuffer, ValidationOutcome, ValidationReason
from .voice import estimate_formants, estimate_pitch, harmonics_to_noise

logger = logging.getLogger(__name__)

REASON_MESSAGES = {
    ValidationReason.SILENCE: "No audio detected. Check that your microphone is connected and unmuted.",
    ValidationReason.TOO_QUIET: "The recording is too quiet. Speak closer to the microphone.",
    ValidationReason.TOO_SHORT: "The recording is too short. Read the full script (at least 5 seconds).",
    ValidationReason.NO_VARIATION: "The recording contains only static or a constant signal.",
    ValidationReason.NOT_HUMAN_VOICE: "No human voice detected. Record yourself reading the script aloud.",
    ValidationReason.VALID: "Recording accepted.",
}


class ValidityGate:
    """Sequential, short-circuiting quality checks for a SampleBuffer."""

    THRESHOLDS = {
        'silence_rms': 0.01,
        'speech_frame_rms': 0.02,
        'min_speech_ratio': 0.20,
        'min_duration': 5.0,
        'variation_window': 48000,   # samples
        'min_std': 0.001,
        # Human-voice sub-gate
        'voice_frames': 10,
        'voice_frame_rms': 0.02,
        'f1_range': (200.0, 1200.0),
        'f2_range': (600.0, 3000.0),
        'min_hnr': 3.0,
        'tilt_range': (-20.0, -3.0),
        'min_voice_ratio': 0.4,
    }

    def check(self, buffer: SampleBuffer) -> ValidationOutcome:
        """Run all checks in order and return the first failure, or VALID."""
        t = self.THRESHOLDS
        samples = buffer.samples
        sr = buffer.sample_rate

        energy = rms_energy(samples)
        if energy < t['silence_rms']:
            return self._reject(ValidationReason.SILENCE, f"rms={energy:.5f}")

        ratio = speech_ratio(samples, sr, t['speech_frame_rms'])
        if ratio < t['min_speech_ratio']:
            return self._reject(ValidationReason.TOO_QUIET, f"speech_ratio={ratio:.3f}")

        if buffer.duration < t['min_duration']:
            return self._reject(ValidationReason.TOO_SHORT, f"duration={buffer.duration:.2f}s")

        window = samples[:min(len(samples), t['variation_window'])]
        # Population std: divide by n
        std = float(np.std(window, ddof=0))
        if std < t['min_std']:
            return self._reject(ValidationReason.NO_VARIATION, f"std={std:.6f}")

        voice = self.analyze_voice(samples, sr)
        if not voice['passed']:
            return self._reject(
                ValidationReason.NOT_HUMAN_VOICE,
                f"voiced_ratio={voice['valid_ratio']:.2f}",
            )

        logger.debug("Recording passed validity gate")
        return ValidationOutcome(
            is_valid=True,
            reason=ValidationReason.VALID,
            message=REASON_MESSAGES[ValidationReason.VALID],
        )

    def analyze_voice(self, samples: np.ndarray, sample_rate: float) -> Dict[str, Any]:
        """Human-voice sub-gate over evenly spaced 2048-sample frames.

        Quiet frames are skipped but still count toward the fixed
        denominator.  A frame is voiced when its formants, HNR and spectral
        tilt all fall in the human ranges.
        """
        t = self.THRESHOLDS
        n_frames = t['voice_frames']
        f1_lo, f1_hi = t['f1_range']
        f2_lo, f2_hi = t['f2_range']
        tilt_lo, tilt_hi = t['tilt_range']

        if len(samples) < FRAME_SIZE:
            return {'passed': False, 'valid_frames': 0, 'valid_ratio': 0.0,
                    'note': 'Buffer shorter than one analysis frame'}

        stride = (len(samples) - FRAME_SIZE) // n_frames
        valid_frames = 0
        skipped = 0
        for i in range(n_frames):
            start = i * stride
            frame = samples[start:start + FRAME_SIZE]
            if rms_energy(frame) < t['voice_frame_rms']:
                skipped += 1
                continue

            mags = spectrum(frame)
            f1, f2 = estimate_formants(mags, sample_rate)
            f0 = estimate_pitch(frame, sample_rate)
            hnr = harmonics_to_noise(mags, sample_rate, f0)
            tilt = spectral_tilt(mags, sample_rate)

            formants_ok = f1_lo <= f1 <= f1_hi and f2_lo <= f2 <= f2_hi
            if formants_ok and hnr >= t['min_hnr'] and tilt_lo <= tilt <= tilt_hi:
                valid_frames += 1
            else:
                logger.debug(
                    f"Frame {i} not voiced: f1={f1:.0f} f2={f2:.0f} "
                    f"hnr={hnr:.1f} tilt={tilt:.2f}"
                )

        valid_ratio = valid_frames / n_frames
        return {
            'passed': valid_ratio >= t['min_voice_ratio'],
            'valid_frames': valid_frames,
            'skipped_frames': skipped,
            'valid_ratio': valid_ratio,
        }

    def _reject(self, reason: ValidationReason, detail: str) -> ValidationOutcome:
        logger.info(f"Recording rejected: {reason.value} ({detail})")
        return ValidationOutcome(is_valid=False, reason=reason, message=REASON_MESSAGES[reason])
