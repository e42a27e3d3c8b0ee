"""Type definitions for voicetype."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any, Optional, Sequence, Union

import numpy as np


class Archetype(Enum):
    """Voice-acting archetypes, in tie-break order."""
    AUTHORITY = "authority"
    STORYTELLER = "storyteller"
    ENERGIZER = "energizer"
    EDUCATOR = "educator"
    CHARACTER = "character"
    VERSATILE = "versatile"


class ValidationReason(Enum):
    """Outcome of the validity gate."""
    SILENCE = "silence"
    TOO_QUIET = "too_quiet"
    TOO_SHORT = "too_short"
    NO_VARIATION = "no_variation"
    NOT_HUMAN_VOICE = "not_human_voice"
    VALID = "valid"


@dataclass(frozen=True, eq=False)
class SampleBuffer:
    """Mono samples in [-1.0, 1.0] with their sample rate and duration.

    The duration is taken as given by the capture side and is not
    re-derived from the sample count.
    """
    samples: np.ndarray
    sample_rate: int
    duration: float

    def __post_init__(self):
        data = np.array(self.samples, dtype=np.float64)
        if data.ndim != 1:
            raise ValueError(f"Samples must be one-dimensional, got shape {data.shape}")
        if data.size == 0:
            raise ValueError("Sample buffer is empty")
        if not np.isfinite(self.sample_rate) or self.sample_rate <= 0:
            raise ValueError(f"Invalid sample rate: {self.sample_rate}")
        if not np.isfinite(self.duration) or self.duration < 0:
            raise ValueError(f"Invalid duration: {self.duration}")
        data.setflags(write=False)
        object.__setattr__(self, "samples", data)

    @classmethod
    def from_samples(cls, samples: Sequence[float], sample_rate: int,
                     duration: Optional[float] = None) -> "SampleBuffer":
        """Build a buffer, deriving the duration from the sample count if omitted."""
        if duration is None:
            duration = len(samples) / sample_rate if sample_rate else 0.0
        return cls(samples=np.asarray(samples), sample_rate=sample_rate, duration=duration)

    def __len__(self) -> int:
        return int(self.samples.size)


@dataclass(frozen=True)
class EnergyBands:
    """Mean spectral magnitude per frequency band."""
    low: float = 0.0
    mid_low: float = 0.0
    mid: float = 0.0
    high: float = 0.0
    very_high: float = 0.0


@dataclass(frozen=True)
class PaceMetrics:
    """Speech activity and estimated speaking rate."""
    wpm: float
    speech_ratio: float
    pause_density: float


@dataclass(frozen=True)
class FeatureVector:
    """Acoustic features of one validated recording."""
    spectral_centroid: float
    zero_crossing_rate: float
    rms_energy: float
    energy_bands: EnergyBands
    pitch: float
    pace: PaceMetrics
    dynamic_range: float

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the field names the feedback collector stores."""
        return {
            "spectralCentroid": self.spectral_centroid,
            "zeroCrossingRate": self.zero_crossing_rate,
            "rmsEnergy": self.rms_energy,
            "energyDistribution": {
                "low": self.energy_bands.low,
                "midLow": self.energy_bands.mid_low,
                "mid": self.energy_bands.mid,
                "high": self.energy_bands.high,
                "veryHigh": self.energy_bands.very_high,
            },
            "pitch": self.pitch,
            "pace": {
                "wpm": self.pace.wpm,
                "speechRatio": self.pace.speech_ratio,
                "pauseDensity": self.pace.pause_density,
            },
            "dynamicRange": self.dynamic_range,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeatureVector":
        bands = data.get("energyDistribution", {})
        pace = data.get("pace", {})
        return cls(
            spectral_centroid=float(data.get("spectralCentroid", 0.0)),
            zero_crossing_rate=float(data.get("zeroCrossingRate", 0.0)),
            rms_energy=float(data.get("rmsEnergy", 0.0)),
            energy_bands=EnergyBands(
                low=float(bands.get("low", 0.0)),
                mid_low=float(bands.get("midLow", 0.0)),
                mid=float(bands.get("mid", 0.0)),
                high=float(bands.get("high", 0.0)),
                very_high=float(bands.get("veryHigh", 0.0)),
            ),
            pitch=float(data.get("pitch", 0.0)),
            pace=PaceMetrics(
                wpm=float(pace.get("wpm", 0.0)),
                speech_ratio=float(pace.get("speechRatio", 0.0)),
                pause_density=float(pace.get("pauseDensity", 0.0)),
            ),
            dynamic_range=float(data.get("dynamicRange", 0.0)),
        )


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of running a buffer through the validity gate."""
    is_valid: bool
    reason: ValidationReason
    message: str = ""


@dataclass
class Classification:
    """Winning archetype plus the scores that produced it."""
    archetype: Archetype
    scores: Dict[Archetype, int] = field(default_factory=dict)
    matched_rules: List[str] = field(default_factory=list)


@dataclass
class AnalysisResult:
    """Complete analysis of one recording.

    ``outcome`` is None only when the input could not be analyzed at all
    (decode failure or a broken buffer); ``error`` then says why.
    """
    outcome: Optional[ValidationOutcome] = None
    features: Optional[FeatureVector] = None
    classification: Optional[Classification] = None
    error: Optional[str] = None

    @property
    def archetype(self) -> Optional[Archetype]:
        if self.classification is None:
            return None
        return self.classification.archetype

    @property
    def succeeded(self) -> bool:
        return self.classification is not None


ArchetypeLike = Union[Archetype, str]
