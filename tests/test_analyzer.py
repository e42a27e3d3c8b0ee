"""Tests for the VoiceTypeAnalyzer pipeline."""

import pytest

from voicetype import VoiceTypeAnalyzer
from voicetype.types import Archetype, ValidationReason

from synth import buffer_of, make_harmonic_series


class TestAnalyzerBasic:
    def test_instantiation(self):
        analyzer = VoiceTypeAnalyzer()
        assert analyzer.gate is not None
        assert analyzer.classifier is not None

    def test_valid_vowel_classified(self, analyzer, vowel_buffer):
        result = analyzer.analyze(vowel_buffer)
        assert result.succeeded
        assert result.outcome.is_valid
        assert result.archetype == Archetype.AUTHORITY
        assert result.error is None

    @pytest.mark.parametrize("fixture,reason", [
        ("silent_buffer", ValidationReason.SILENCE),
        ("short_tone_buffer", ValidationReason.TOO_SHORT),
        ("static_buffer", ValidationReason.NO_VARIATION),
        ("noise_buffer", ValidationReason.NOT_HUMAN_VOICE),
    ])
    def test_rejections_skip_features(self, analyzer, request, fixture, reason):
        result = analyzer.analyze(request.getfixturevalue(fixture))
        assert result.outcome.reason == reason
        assert result.features is None
        assert result.classification is None
        assert result.archetype is None
        assert not result.succeeded


class TestFeatureExtraction:
    @pytest.fixture(scope="class")
    def features(self, vowel_buffer):
        return VoiceTypeAnalyzer().extract_features(vowel_buffer)

    def test_pitch(self, features):
        assert features.pitch == pytest.approx(125.0)

    def test_warm_centroid(self, features):
        assert 800.0 < features.spectral_centroid < 1000.0

    def test_steady_level(self, features):
        assert features.dynamic_range == pytest.approx(1.0, abs=1e-6)

    def test_pace_fully_voiced(self, features):
        assert features.pace.speech_ratio == 1.0
        assert features.pace.pause_density == 0.0
        # 50 words over 10 s
        assert features.pace.wpm == pytest.approx(300.0)

    def test_low_band_over_high(self, features):
        assert features.energy_bands.low > features.energy_bands.high

    def test_rms(self, features):
        assert 0.1 < features.rms_energy < 0.2


class TestHarmonicSeries:
    """10 s, 110 Hz, 9 harmonics at -3 dB each, 22050 Hz."""

    @pytest.fixture(scope="class")
    def series_buffer(self):
        return buffer_of(make_harmonic_series(), sr=22050)

    def test_rejected_by_voice_gate(self, series_buffer):
        # Top harmonic is 990 Hz: nothing in the 2-4 kHz tilt band and
        # F2 (330 Hz) below the 600 Hz floor
        result = VoiceTypeAnalyzer().analyze(series_buffer)
        assert result.outcome.reason == ValidationReason.NOT_HUMAN_VOICE
        assert result.classification is None

    def test_no_voiced_frames(self, series_buffer):
        gate = VoiceTypeAnalyzer().gate
        voice = gate.analyze_voice(series_buffer.samples, series_buffer.sample_rate)
        assert voice['valid_frames'] == 0

    def test_features_favor_authority(self, series_buffer):
        analyzer = VoiceTypeAnalyzer()
        features = analyzer.extract_features(series_buffer)
        result = analyzer.classifier.classify(features)
        assert result.archetype == Archetype.AUTHORITY
        assert abs(features.pitch - 110.0) <= 1.0


class TestDeterminism:
    def test_repeated_runs_identical(self, vowel_buffer):
        first = VoiceTypeAnalyzer().analyze(vowel_buffer)
        second = VoiceTypeAnalyzer().analyze(vowel_buffer)
        assert first.features == second.features
        assert first.classification == second.classification

    def test_parallel_matches_sequential(self, vowel_buffer):
        sequential = VoiceTypeAnalyzer(max_workers=1).extract_features(vowel_buffer)
        parallel = VoiceTypeAnalyzer(max_workers=4).extract_features(vowel_buffer)
        assert sequential == parallel


class TestAnalyzeWav:
    def test_valid_wav(self, analyzer, vowel_wav_bytes):
        result = analyzer.analyze_wav(vowel_wav_bytes)
        assert result.succeeded
        assert result.archetype == Archetype.AUTHORITY

    def test_silent_wav(self, analyzer, silent_wav_bytes):
        result = analyzer.analyze_wav(silent_wav_bytes)
        assert result.outcome.reason == ValidationReason.SILENCE
        assert result.error is None

    def test_garbage_bytes(self, analyzer):
        result = analyzer.analyze_wav(b"definitely not a wav file")
        assert result.error is not None
        assert "decode failed" in result.error
        assert result.outcome is None
        assert not result.succeeded
