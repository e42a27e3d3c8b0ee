"""
Rule-based voice-type classifier.

Continuous features are bucketed into five categorical levels, then every
row of ``RULES`` is evaluated and its points are added to its archetype.
The highest score wins, ties going to the earlier archetype in
:class:`~voicetype.types.Archetype` order; a winning score below 3 falls
back to ``versatile``.  Classification is a pure function of the
FeatureVector.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from .types import Archetype, Classification, FeatureVector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoiceProfile:
    """Categorical view of a FeatureVector."""
    brightness: str       # bright | balanced | warm
    texture: str          # energetic | moderate | smooth
    pitch: str            # high | medium | low
    pace: str             # fast | medium | slow
    expressiveness: str   # highly_expressive | expressive | controlled
    features: FeatureVector


@dataclass(frozen=True)
class ScoringRule:
    """One auditable row of the scoring table."""
    name: str
    archetype: Archetype
    points: int
    predicate: Callable[[VoiceProfile], bool]


def _storyteller_pauses(p: VoiceProfile) -> bool:
    return 0.15 < p.features.pace.pause_density < 0.35


def _mid_band_dominant(p: VoiceProfile) -> bool:
    bands = p.features.energy_bands
    return bands.mid > bands.low and bands.mid > bands.very_high


def _balanced_all_round(p: VoiceProfile) -> bool:
    return (p.brightness == 'balanced' and p.texture == 'moderate'
            and p.pace == 'medium' and p.expressiveness == 'expressive')


A = Archetype

RULES: Tuple[ScoringRule, ...] = (
    ScoringRule('authority.low_pitch', A.AUTHORITY, 3, lambda p: p.pitch == 'low'),
    ScoringRule('authority.warm', A.AUTHORITY, 2, lambda p: p.brightness == 'warm'),
    ScoringRule('authority.controlled', A.AUTHORITY, 2, lambda p: p.expressiveness == 'controlled'),
    ScoringRule('authority.measured_pace', A.AUTHORITY, 2, lambda p: p.pace in ('slow', 'medium')),
    ScoringRule('authority.low_band_weight', A.AUTHORITY, 2,
                lambda p: p.features.energy_bands.low > p.features.energy_bands.high),

    ScoringRule('storyteller.balanced', A.STORYTELLER, 3, lambda p: p.brightness == 'balanced'),
    ScoringRule('storyteller.smooth_texture', A.STORYTELLER, 2, lambda p: p.texture in ('smooth', 'moderate')),
    ScoringRule('storyteller.medium_pace', A.STORYTELLER, 3, lambda p: p.pace == 'medium'),
    ScoringRule('storyteller.expressive', A.STORYTELLER, 2, lambda p: p.expressiveness == 'expressive'),
    ScoringRule('storyteller.natural_pauses', A.STORYTELLER, 2, _storyteller_pauses),

    ScoringRule('energizer.high_pitch', A.ENERGIZER, 3, lambda p: p.pitch == 'high'),
    ScoringRule('energizer.bright', A.ENERGIZER, 3, lambda p: p.brightness == 'bright'),
    ScoringRule('energizer.fast_pace', A.ENERGIZER, 3, lambda p: p.pace == 'fast'),
    ScoringRule('energizer.energetic_texture', A.ENERGIZER, 2, lambda p: p.texture == 'energetic'),
    ScoringRule('energizer.continuous_speech', A.ENERGIZER, 2, lambda p: p.features.pace.speech_ratio > 0.75),

    ScoringRule('educator.medium_pace', A.EDUCATOR, 2, lambda p: p.pace == 'medium'),
    ScoringRule('educator.controlled', A.EDUCATOR, 3, lambda p: p.expressiveness == 'controlled'),
    ScoringRule('educator.balanced', A.EDUCATOR, 2, lambda p: p.brightness == 'balanced'),
    ScoringRule('educator.mid_band_clarity', A.EDUCATOR, 2, _mid_band_dominant),
    ScoringRule('educator.steady_rate', A.EDUCATOR, 2, lambda p: abs(p.features.pace.wpm - 150) < 20),

    ScoringRule('character.highly_expressive', A.CHARACTER, 4, lambda p: p.expressiveness == 'highly_expressive'),
    ScoringRule('character.wide_range', A.CHARACTER, 3, lambda p: p.features.dynamic_range > 12),
    ScoringRule('character.energetic_texture', A.CHARACTER, 2, lambda p: p.texture == 'energetic'),
    ScoringRule('character.frequent_pauses', A.CHARACTER, 2, lambda p: p.features.pace.pause_density > 0.25),

    ScoringRule('versatile.all_round', A.VERSATILE, 5, _balanced_all_round),
    ScoringRule('versatile.medium_pitch', A.VERSATILE, 2, lambda p: p.pitch == 'medium'),
    ScoringRule('versatile.moderate_range', A.VERSATILE, 2, lambda p: 8 < p.features.dynamic_range < 15),
)

del A


class VoiceTypeClassifier:
    """Maps a FeatureVector onto one of the six archetypes."""

    THRESHOLDS = {
        'centroid_bright': 2000.0,
        'centroid_balanced': 1200.0,
        'zcr_energetic': 0.10,
        'zcr_moderate': 0.05,
        'pitch_high': 200.0,
        'pitch_medium': 140.0,
        'wpm_fast': 170.0,
        'wpm_medium': 130.0,
        'range_highly_expressive': 15.0,
        'range_expressive': 8.0,
        'min_winning_score': 3,
    }

    def __init__(self, rules: Tuple[ScoringRule, ...] = RULES):
        self.rules = rules

    def profile(self, features: FeatureVector) -> VoiceProfile:
        """Bucket continuous features into categorical levels."""
        t = self.THRESHOLDS

        if features.spectral_centroid > t['centroid_bright']:
            brightness = 'bright'
        elif features.spectral_centroid > t['centroid_balanced']:
            brightness = 'balanced'
        else:
            brightness = 'warm'

        if features.zero_crossing_rate > t['zcr_energetic']:
            texture = 'energetic'
        elif features.zero_crossing_rate > t['zcr_moderate']:
            texture = 'moderate'
        else:
            texture = 'smooth'

        if features.pitch > t['pitch_high']:
            pitch = 'high'
        elif features.pitch > t['pitch_medium']:
            pitch = 'medium'
        else:
            pitch = 'low'

        if features.pace.wpm > t['wpm_fast']:
            pace = 'fast'
        elif features.pace.wpm > t['wpm_medium']:
            pace = 'medium'
        else:
            pace = 'slow'

        if features.dynamic_range > t['range_highly_expressive']:
            expressiveness = 'highly_expressive'
        elif features.dynamic_range > t['range_expressive']:
            expressiveness = 'expressive'
        else:
            expressiveness = 'controlled'

        return VoiceProfile(
            brightness=brightness,
            texture=texture,
            pitch=pitch,
            pace=pace,
            expressiveness=expressiveness,
            features=features,
        )

    def score(self, features: FeatureVector) -> Tuple[Dict[Archetype, int], List[str]]:
        """Evaluate every rule; returns (scores per archetype, matched rule names)."""
        profile = self.profile(features)
        scores = {archetype: 0 for archetype in Archetype}
        matched = []
        for rule in self.rules:
            if rule.predicate(profile):
                scores[rule.archetype] += rule.points
                matched.append(rule.name)
        return scores, matched

    def classify(self, features: FeatureVector) -> Classification:
        """Pick the archetype with the strictly highest score.

        A vector with no signal energy cannot come out of the validity gate
        and is reported as ``versatile`` without scoring.
        """
        if features.rms_energy <= 0:
            logger.debug("Degenerate feature vector, defaulting to versatile")
            return Classification(
                archetype=Archetype.VERSATILE,
                scores={archetype: 0 for archetype in Archetype},
            )

        scores, matched = self.score(features)

        winner = Archetype.AUTHORITY
        best = -1
        for archetype in Archetype:
            if scores[archetype] > best:
                best = scores[archetype]
                winner = archetype

        if best < self.THRESHOLDS['min_winning_score']:
            winner = Archetype.VERSATILE

        summary = {a.value: s for a, s in scores.items()}
        logger.debug(f"Classified as {winner.value} with scores {summary}")
        return Classification(archetype=winner, scores=scores, matched_rules=matched)
