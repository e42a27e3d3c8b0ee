"""
voicetype

Deterministic voice-type classification for short speech recordings.
"""

from .analyzer import VoiceTypeAnalyzer
from .types import (
    Archetype,
    SampleBuffer,
    EnergyBands,
    PaceMetrics,
    FeatureVector,
    ValidationReason,
    ValidationOutcome,
    Classification,
    AnalysisResult,
)
from .validation import ValidityGate
from .classifier import VoiceTypeClassifier
from .audio import AudioDecodeError, load_wav
from .profiles import ArchetypeProfile, get_profile
from .feedback import FeedbackRecord, build_feedback, derive_voice_type, training_vector

__version__ = "0.0.1"
__all__ = [
    "VoiceTypeAnalyzer",
    "Archetype",
    "SampleBuffer",
    "EnergyBands",
    "PaceMetrics",
    "FeatureVector",
    "ValidationReason",
    "ValidationOutcome",
    "Classification",
    "AnalysisResult",
    "ValidityGate",
    "VoiceTypeClassifier",
    "AudioDecodeError",
    "load_wav",
    "ArchetypeProfile",
    "get_profile",
    "FeedbackRecord",
    "build_feedback",
    "derive_voice_type",
    "training_vector",
]
