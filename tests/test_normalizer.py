"""Unit tests for timestamp normalization.

WHY: Subtracting the clip start twice shifts every caption by a whole
clip offset. These tests pin down that the subtraction happens exactly
once, keeps negative values, and rejects invalid clip windows.
"""

import logging

import pytest

from clip_captions.core.ingest import parse_transcript
from clip_captions.core.ir import ClipWindow, NormalizedTranscript, RawTranscript, Utterance, Word
from clip_captions.core.normalizer import normalize
from clip_captions.errors import ConfigurationError, DoubleNormalizationError


class TestTranslation:
    """Every timestamp moves by -clip_start_ms, nothing else changes."""

    def test_scenario_a_utterance(self, hello_payload):
        result = normalize(parse_transcript(hello_payload), ClipWindow(30000, 90000))
        assert result.utterances == (
            Utterance(text="hello there", start_ms=0, end_ms=800, speaker="A"),
        )
        assert result.words[1] == Word(text="there", start_ms=400, end_ms=800)

    def test_negative_times_are_kept(self):
        raw = RawTranscript(words=[Word(text="early", start_ms=900, end_ms=1100)])
        result = normalize(raw, ClipWindow(1000, 5000))
        assert result.words[0].start_ms == -100
        assert result.words[0].end_ms == 100

    def test_order_and_interval_shape_preserved(self):
        words = [
            Word(text="b", start_ms=2000, end_ms=2500),
            Word(text="a", start_ms=1500, end_ms=1500),
        ]
        result = normalize(RawTranscript(words=list(words)), ClipWindow(1000, 9000))
        assert [w.text for w in result.words] == ["b", "a"]
        for before, after in zip(words, result.words):
            assert after.start_ms <= after.end_ms
            assert after.end_ms - after.start_ms == before.end_ms - before.start_ms

    def test_no_utterances_stays_none(self, words_only_payload):
        result = normalize(parse_transcript(words_only_payload), ClipWindow(0, 5000))
        assert result.utterances is None

    def test_result_is_frozen_and_distinct(self, hello_payload):
        raw = parse_transcript(hello_payload)
        result = normalize(raw, ClipWindow(30000, 90000))
        assert isinstance(result, NormalizedTranscript)
        assert isinstance(result.words, tuple)
        with pytest.raises(Exception):
            result.words = ()
        # Raw data itself is untouched.
        assert raw.words[0].start_ms == 30000


class TestExactlyOnce:
    """Normalization cannot be applied twice."""

    def test_normalized_input_is_rejected(self, hello_payload):
        once = normalize(parse_transcript(hello_payload), ClipWindow(30000, 90000))
        with pytest.raises(DoubleNormalizationError):
            normalize(once, ClipWindow(30000, 90000))

    def test_raw_transcript_is_consumed(self, hello_payload):
        raw = parse_transcript(hello_payload)
        normalize(raw, ClipWindow(30000, 90000))
        assert raw.consumed is True
        with pytest.raises(DoubleNormalizationError):
            normalize(raw, ClipWindow(30000, 90000))

    def test_failed_normalization_does_not_consume(self, hello_payload):
        raw = parse_transcript(hello_payload)
        bad_clip = ClipWindow(30000, 90000)
        object.__setattr__(bad_clip, "clip_end_ms", 10)
        with pytest.raises(ConfigurationError):
            normalize(raw, bad_clip)
        assert raw.consumed is False

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            normalize({"words": []}, ClipWindow(0, 1000))


class TestClipWindow:
    """Clip end must be strictly after clip start."""

    @pytest.mark.parametrize("start,end", [(1000, 1000), (2000, 1000)])
    def test_invalid_window(self, start, end):
        with pytest.raises(ConfigurationError):
            ClipWindow(start, end)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            ClipWindow(5, 1)

    def test_duration(self):
        assert ClipWindow(30000, 90000).duration_ms == 60000

    def test_suspicious_start_is_logged(self, caplog):
        huge = 7 * 60 * 60 * 1000
        with caplog.at_level(logging.WARNING, logger="clip_captions.core.normalizer"):
            normalize(RawTranscript.empty(), ClipWindow(huge, huge + 1000))
        assert "Suspicious clip start" in caplog.text
