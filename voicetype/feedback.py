"""
Feedback records and training-data export.

After a recording is classified, the listener may report which niches
they actually work in.  The record pairs that report with the predicted
archetype and the feature vector it came from; the offline trainer later
turns stored records into (input vector, label) pairs with
:func:`training_vector` and :func:`derive_voice_type`.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from .types import Archetype, ArchetypeLike, FeatureVector


class ExperienceLevel(Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    NOT_SPECIFIED = "not_specified"


NICHE_OPTIONS = {
    'audiobooks': 'Audiobook Narration',
    'commercials': 'Commercial Ads',
    'documentary': 'Documentary',
    'elearning': 'E-Learning',
    'gaming': 'Gaming/Animation',
    'podcasts': 'Podcast Hosting',
    'corporate': 'Corporate Training',
    'character': 'Character Voices',
}

NICHE_TO_TYPE = {
    # Storyteller
    'audiobooks': Archetype.STORYTELLER,
    'audiobook narration': Archetype.STORYTELLER,
    'podcasts': Archetype.STORYTELLER,
    'podcast hosting': Archetype.STORYTELLER,
    'childrens stories': Archetype.STORYTELLER,
    "children's stories": Archetype.STORYTELLER,

    # Authority
    'documentary': Archetype.AUTHORITY,
    'documentary narration': Archetype.AUTHORITY,
    'corporate': Archetype.AUTHORITY,
    'corporate training': Archetype.AUTHORITY,
    'news': Archetype.AUTHORITY,
    'news reading': Archetype.AUTHORITY,
    'political content': Archetype.AUTHORITY,

    # Energizer
    'commercials': Archetype.ENERGIZER,
    'commercial ads': Archetype.ENERGIZER,
    'radio commercials': Archetype.ENERGIZER,
    'product ads': Archetype.ENERGIZER,
    'ads': Archetype.ENERGIZER,
    'social media': Archetype.ENERGIZER,
    'social media videos': Archetype.ENERGIZER,
    'gaming content': Archetype.ENERGIZER,

    # Educator
    'elearning': Archetype.EDUCATOR,
    'e-learning': Archetype.EDUCATOR,
    'e-learning courses': Archetype.EDUCATOR,
    'tutorials': Archetype.EDUCATOR,
    'tutorial videos': Archetype.EDUCATOR,
    'training': Archetype.EDUCATOR,
    'training materials': Archetype.EDUCATOR,
    'educational content': Archetype.EDUCATOR,

    # Character
    'animation': Archetype.CHARACTER,
    'gaming': Archetype.CHARACTER,
    'video games': Archetype.CHARACTER,
    'character work': Archetype.CHARACTER,
    'character voices': Archetype.CHARACTER,
    'dramatic readings': Archetype.CHARACTER,
}


@dataclass
class FeedbackRecord:
    """One listener report, ready to hand to the feedback collector."""
    predicted_type: Archetype
    actual_niches: List[str]
    features: FeatureVector
    experience_level: ExperienceLevel = ExperienceLevel.NOT_SPECIFIED
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predicted_type": self.predicted_type.value,
            "actual_niches": list(self.actual_niches),
            "experience_level": self.experience_level.value,
            "features": self.features.to_dict(),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FeedbackRecord":
        return cls(
            predicted_type=Archetype(data["predicted_type"]),
            actual_niches=list(data.get("actual_niches", [])),
            features=FeatureVector.from_dict(data.get("features", {})),
            experience_level=ExperienceLevel(data.get("experience_level", "not_specified")),
            timestamp=data.get("timestamp", ""),
        )


def build_feedback(
    predicted_type: ArchetypeLike,
    niches: Iterable[str],
    features: FeatureVector,
    experience_level: Optional[str] = None,
) -> FeedbackRecord:
    """Create a feedback record for a classified recording.

    Args:
        predicted_type: Archetype the analyzer returned
        niches: Niches the listener selected (at least one)
        features: Feature vector the prediction was made from
        experience_level: One of the ExperienceLevel values

    Raises:
        ValueError: if no niche is given or a value is unknown
    """
    if not isinstance(predicted_type, Archetype):
        predicted_type = Archetype(predicted_type)

    selected = [n.strip() for n in niches if n and n.strip()]
    if not selected:
        raise ValueError("Select at least one niche")

    level = ExperienceLevel(experience_level) if experience_level else ExperienceLevel.NOT_SPECIFIED

    return FeedbackRecord(
        predicted_type=predicted_type,
        actual_niches=selected,
        features=features,
        experience_level=level,
    )


def training_vector(features: FeatureVector) -> List[float]:
    """The ten normalized model inputs used by the offline trainer."""
    return [
        features.spectral_centroid / 3000,
        features.zero_crossing_rate,
        features.rms_energy,
        features.energy_bands.low,
        features.energy_bands.mid,
        features.energy_bands.high,
        features.pitch / 400,
        features.pace.wpm / 250,
        features.pace.speech_ratio,
        features.dynamic_range / 25,
    ]


def derive_voice_type(niches: Iterable[str]) -> Archetype:
    """Label a record with the archetype most of its niches map to.

    Unknown niches count toward ``versatile``.  Ties go to the type seen
    first.
    """
    counts: Dict[Archetype, int] = {}
    for niche in niches:
        archetype = NICHE_TO_TYPE.get(niche.lower().strip(), Archetype.VERSATILE)
        counts[archetype] = counts.get(archetype, 0) + 1

    if not counts:
        return Archetype.VERSATILE

    return max(counts, key=counts.get)
