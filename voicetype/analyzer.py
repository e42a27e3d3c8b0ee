"""Voice-type analysis pipeline.

validity gate -> feature extraction -> classification
"""
import concurrent.futures
import logging
from typing import Any, Callable, Dict, List, Tuple

from .audio import buffer_from_wav
from .classifier import VoiceTypeClassifier
from .features import energy_bands, rms_energy, spectral_centroid, zero_crossing_rate
from .pace import analyze_pace, dynamic_range
from .types import AnalysisResult, FeatureVector, SampleBuffer
from .validation import ValidityGate
from .voice import estimate_pitch

logger = logging.getLogger(__name__)


class VoiceTypeAnalyzer:
    """Main entry point: turns a recording into an archetype."""

    def __init__(self, max_workers: int = 1):
        """Initialize VoiceTypeAnalyzer.

        Args:
            max_workers: Number of threads for feature extraction.
                1 (default) runs sequentially.  Values > 1 use a
                ThreadPoolExecutor to run the independent feature
                calculators concurrently; results are identical.
        """
        self._max_workers = max(1, max_workers)
        self.gate = ValidityGate()
        self.classifier = VoiceTypeClassifier()

    def analyze(self, buffer: SampleBuffer) -> AnalysisResult:
        """Validate, extract features and classify one recording.

        Args:
            buffer: Mono samples with sample rate and duration

        Returns:
            AnalysisResult carrying the gate outcome and, for valid
            recordings, the feature vector and classification.
        """
        outcome = self.gate.check(buffer)
        if not outcome.is_valid:
            return AnalysisResult(outcome=outcome)

        features = self.extract_features(buffer)
        classification = self.classifier.classify(features)
        logger.info(f"Voice type: {classification.archetype.value}")

        return AnalysisResult(
            outcome=outcome,
            features=features,
            classification=classification,
        )

    def analyze_wav(self, audio_bytes: bytes) -> AnalysisResult:
        """Decode WAV bytes and analyze them.

        Decode failures and broken buffers come back as an AnalysisResult
        with ``error`` set rather than raising.
        """
        try:
            buffer = buffer_from_wav(audio_bytes)
        except (ValueError, TypeError) as e:
            logger.error(f"Failed to decode audio: {e}")
            return AnalysisResult(error=f"Audio decode failed: {e}")
        return self.analyze(buffer)

    def extract_features(self, buffer: SampleBuffer) -> FeatureVector:
        """Compute the full feature vector for a buffer that passed the gate."""
        samples = buffer.samples
        sr = buffer.sample_rate

        tasks: List[Tuple[str, Callable[..., Any], tuple]] = [
            ('spectral_centroid', spectral_centroid, (samples, sr)),
            ('zero_crossing_rate', zero_crossing_rate, (samples,)),
            ('rms_energy', rms_energy, (samples,)),
            ('energy_bands', energy_bands, (samples, sr)),
            ('pitch', estimate_pitch, (samples, sr)),
            ('pace', analyze_pace, (samples, sr, buffer.duration)),
            ('dynamic_range', dynamic_range, (samples,)),
        ]

        results: Dict[str, Any] = {}
        if self._max_workers > 1:
            with concurrent.futures.ThreadPoolExecutor(max_workers=self._max_workers) as executor:
                futures = {
                    key: executor.submit(fn, *args)
                    for key, fn, args in tasks
                }
                for key, future in futures.items():
                    results[key] = future.result()
        else:
            for key, fn, args in tasks:
                results[key] = fn(*args)

        features = FeatureVector(**results)
        logger.debug(f"Extracted features: {features.to_dict()}")
        return features
