"""Tests for the rule-based voice-type classifier."""

import pytest

from voicetype.classifier import RULES, ScoringRule, VoiceTypeClassifier
from voicetype.types import Archetype, EnergyBands, FeatureVector, PaceMetrics


def _features(centroid=1500.0, zcr=0.07, rms=0.1, bands=None, pitch=160.0,
              wpm=150.0, speech_ratio=0.8, pause_density=0.2, dyn=10.0):
    return FeatureVector(
        spectral_centroid=centroid,
        zero_crossing_rate=zcr,
        rms_energy=rms,
        energy_bands=bands or EnergyBands(low=1.0, mid_low=1.0, mid=1.0, high=1.0, very_high=1.0),
        pitch=pitch,
        pace=PaceMetrics(wpm=wpm, speech_ratio=speech_ratio, pause_density=pause_density),
        dynamic_range=dyn,
    )


class TestProfile:
    @pytest.mark.parametrize("centroid,expected", [
        (2500.0, 'bright'), (2000.0, 'balanced'), (1500.0, 'balanced'),
        (1200.0, 'warm'), (800.0, 'warm'),
    ])
    def test_brightness(self, centroid, expected):
        assert VoiceTypeClassifier().profile(_features(centroid=centroid)).brightness == expected

    @pytest.mark.parametrize("zcr,expected", [
        (0.15, 'energetic'), (0.10, 'moderate'), (0.05, 'smooth'),
    ])
    def test_texture(self, zcr, expected):
        assert VoiceTypeClassifier().profile(_features(zcr=zcr)).texture == expected

    @pytest.mark.parametrize("pitch,expected", [
        (250.0, 'high'), (200.0, 'medium'), (140.0, 'low'),
    ])
    def test_pitch(self, pitch, expected):
        assert VoiceTypeClassifier().profile(_features(pitch=pitch)).pitch == expected

    @pytest.mark.parametrize("wpm,expected", [
        (200.0, 'fast'), (170.0, 'medium'), (130.0, 'slow'),
    ])
    def test_pace(self, wpm, expected):
        assert VoiceTypeClassifier().profile(_features(wpm=wpm)).pace == expected

    @pytest.mark.parametrize("dyn,expected", [
        (20.0, 'highly_expressive'), (15.0, 'expressive'), (8.0, 'controlled'),
    ])
    def test_expressiveness(self, dyn, expected):
        assert VoiceTypeClassifier().profile(_features(dyn=dyn)).expressiveness == expected


class TestArchetypes:
    def test_authority(self):
        fv = _features(centroid=900.0, zcr=0.03, pitch=100.0, wpm=120.0, dyn=2.0,
                       bands=EnergyBands(low=10.0, mid=5.0, high=1.0))
        result = VoiceTypeClassifier().classify(fv)
        assert result.archetype == Archetype.AUTHORITY
        assert result.scores[Archetype.AUTHORITY] == 11

    def test_storyteller(self):
        fv = _features(centroid=1500.0, zcr=0.03, pitch=160.0, wpm=150.0, dyn=10.0,
                       speech_ratio=0.75, pause_density=0.25,
                       bands=EnergyBands(low=1.0, mid=0.5, high=1.0, very_high=1.0))
        result = VoiceTypeClassifier().classify(fv)
        assert result.archetype == Archetype.STORYTELLER
        assert result.scores[Archetype.STORYTELLER] == 12

    def test_energizer(self):
        fv = _features(centroid=2500.0, zcr=0.15, pitch=250.0, wpm=200.0, dyn=5.0,
                       speech_ratio=0.9, pause_density=0.1,
                       bands=EnergyBands(low=1.0, high=5.0))
        result = VoiceTypeClassifier().classify(fv)
        assert result.archetype == Archetype.ENERGIZER
        assert result.scores[Archetype.ENERGIZER] == 13

    def test_educator(self):
        fv = _features(centroid=1500.0, zcr=0.07, pitch=150.0, wpm=150.0, dyn=3.0,
                       speech_ratio=0.85, pause_density=0.15,
                       bands=EnergyBands(low=1.0, mid=5.0, high=2.0, very_high=1.0))
        result = VoiceTypeClassifier().classify(fv)
        assert result.archetype == Archetype.EDUCATOR
        assert result.scores[Archetype.EDUCATOR] == 11

    def test_character(self):
        fv = _features(centroid=1000.0, zcr=0.12, pitch=120.0, wpm=100.0, dyn=20.0,
                       speech_ratio=0.6, pause_density=0.4,
                       bands=EnergyBands(low=1.0, high=2.0))
        result = VoiceTypeClassifier().classify(fv)
        assert result.archetype == Archetype.CHARACTER
        assert result.scores[Archetype.CHARACTER] == 11

    def test_all_round_rule_fires(self):
        result = VoiceTypeClassifier().classify(_features())
        assert 'versatile.all_round' in result.matched_rules
        assert result.scores[Archetype.VERSATILE] == 9


class TestWinnerSelection:
    def test_degenerate_vector_is_versatile(self):
        fv = _features(centroid=0.0, zcr=0.0, rms=0.0, pitch=0.0, wpm=0.0,
                       speech_ratio=0.0, pause_density=0.0, dyn=0.0,
                       bands=EnergyBands())
        result = VoiceTypeClassifier().classify(fv)
        assert result.archetype == Archetype.VERSATILE
        assert all(score == 0 for score in result.scores.values())

    def test_low_winning_score_falls_back(self):
        rules = (ScoringRule('test.two', Archetype.ENERGIZER, 2, lambda p: True),)
        result = VoiceTypeClassifier(rules=rules).classify(_features())
        assert result.scores[Archetype.ENERGIZER] == 2
        assert result.archetype == Archetype.VERSATILE

    def test_no_rules_falls_back(self):
        result = VoiceTypeClassifier(rules=()).classify(_features())
        assert result.archetype == Archetype.VERSATILE

    def test_tie_goes_to_earlier_archetype(self):
        rules = (
            ScoringRule('test.character', Archetype.CHARACTER, 4, lambda p: True),
            ScoringRule('test.storyteller', Archetype.STORYTELLER, 4, lambda p: True),
        )
        result = VoiceTypeClassifier(rules=rules).classify(_features())
        assert result.archetype == Archetype.STORYTELLER

    def test_authority_wins_ties_at_three(self):
        rules = (
            ScoringRule('test.educator', Archetype.EDUCATOR, 3, lambda p: True),
            ScoringRule('test.authority', Archetype.AUTHORITY, 3, lambda p: True),
        )
        result = VoiceTypeClassifier(rules=rules).classify(_features())
        assert result.archetype == Archetype.AUTHORITY

    def test_deterministic(self):
        clf = VoiceTypeClassifier()
        fv = _features(pitch=230.0, centroid=2100.0)
        assert clf.classify(fv) == clf.classify(fv)


class TestRuleTable:
    def test_every_archetype_scored(self):
        covered = {rule.archetype for rule in RULES}
        assert covered == set(Archetype)

    def test_rule_names_unique(self):
        names = [rule.name for rule in RULES]
        assert len(names) == len(set(names))

    def test_points_per_archetype(self):
        totals = {}
        for rule in RULES:
            totals[rule.archetype] = totals.get(rule.archetype, 0) + rule.points
        assert totals == {
            Archetype.AUTHORITY: 11,
            Archetype.STORYTELLER: 12,
            Archetype.ENERGIZER: 13,
            Archetype.EDUCATOR: 11,
            Archetype.CHARACTER: 11,
            Archetype.VERSATILE: 9,
        }
