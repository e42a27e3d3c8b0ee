"""Tests for feedback records and training export."""

import pytest

from voicetype.feedback import (
    ExperienceLevel,
    FeedbackRecord,
    build_feedback,
    derive_voice_type,
    training_vector,
)
from voicetype.types import Archetype, EnergyBands, FeatureVector, PaceMetrics


@pytest.fixture
def features():
    return FeatureVector(
        spectral_centroid=1500.0,
        zero_crossing_rate=0.06,
        rms_energy=0.1,
        energy_bands=EnergyBands(low=2.0, mid_low=1.5, mid=1.0, high=0.5, very_high=0.25),
        pitch=200.0,
        pace=PaceMetrics(wpm=125.0, speech_ratio=0.8, pause_density=0.2),
        dynamic_range=5.0,
    )


class TestBuildFeedback:
    def test_basic_record(self, features):
        record = build_feedback("storyteller", ["audiobooks", " podcasts "], features)
        assert record.predicted_type is Archetype.STORYTELLER
        assert record.actual_niches == ["audiobooks", "podcasts"]
        assert record.experience_level is ExperienceLevel.NOT_SPECIFIED
        assert record.timestamp

    def test_experience_level(self, features):
        record = build_feedback(Archetype.EDUCATOR, ["elearning"], features, experience_level="advanced")
        assert record.experience_level is ExperienceLevel.ADVANCED

    def test_requires_a_niche(self, features):
        with pytest.raises(ValueError, match="niche"):
            build_feedback(Archetype.EDUCATOR, ["", "  "], features)

    def test_unknown_experience_level(self, features):
        with pytest.raises(ValueError):
            build_feedback(Archetype.EDUCATOR, ["elearning"], features, experience_level="guru")

    def test_unknown_predicted_type(self, features):
        with pytest.raises(ValueError):
            build_feedback("narrator", ["elearning"], features)

    def test_dict_round_trip(self, features):
        record = build_feedback(Archetype.CHARACTER, ["gaming"], features, "beginner")
        data = record.to_dict()
        assert data["predicted_type"] == "character"
        assert data["features"]["spectralCentroid"] == 1500.0
        assert FeedbackRecord.from_dict(data) == record


class TestTrainingExport:
    def test_training_vector(self, features):
        vector = training_vector(features)
        assert vector == pytest.approx([0.5, 0.06, 0.1, 2.0, 1.0, 0.5, 0.5, 0.5, 0.8, 0.2])

    def test_majority_niche(self):
        assert derive_voice_type(["audiobooks", "podcasts", "gaming"]) is Archetype.STORYTELLER

    def test_tie_goes_to_first_seen(self):
        assert derive_voice_type(["gaming", "audiobooks"]) is Archetype.CHARACTER

    def test_case_and_whitespace_ignored(self):
        assert derive_voice_type([" Documentary "]) is Archetype.AUTHORITY

    def test_unknown_niche_is_versatile(self):
        assert derive_voice_type(["weddings"]) is Archetype.VERSATILE

    def test_empty_is_versatile(self):
        assert derive_voice_type([]) is Archetype.VERSATILE
