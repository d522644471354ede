"""Shared test fixtures for the clip_captions test suite.

WHY: Most test modules need the same small provider transcripts: a single
utterance well inside a long episode, a words-only transcript, and a
two-utterance transcript with speaker changes. Centralising them keeps
the expected timings in one place.

HOW: Pytest fixtures return fresh provider payload dicts (absolute
milliseconds, provider field names) and pre-normalized transcripts built
directly from IR dataclasses.

RULES:
- Payload fixtures use the provider's ``start``/``end`` field names
- Fixtures return new objects on every call; tests may consume them
"""

from typing import Any, Dict

import pytest

from clip_captions.core.ir import ClipWindow, NormalizedTranscript, Utterance, Word


# ---------------------------------------------------------------------------
# Provider payloads (absolute time)
# ---------------------------------------------------------------------------

HELLO_PAYLOAD: Dict[str, Any] = {
    "text": "hello there",
    "words": [
        {"text": "hello", "start": 30000, "end": 30400, "confidence": 0.98},
        {"text": "there", "start": 30400, "end": 30800, "confidence": 0.97},
    ],
    "utterances": [
        {"text": "hello there", "start": 30000, "end": 30800, "speaker": "A",
         "confidence": 0.97, "words": []},
    ],
}

DIALOGUE_PAYLOAD: Dict[str, Any] = {
    "text": "Hello world. This is a test.",
    "words": [
        {"text": "Hello", "start": 61000, "end": 61500},
        {"text": "world.", "start": 61500, "end": 62100},
        {"text": "This", "start": 63000, "end": 63500},
        {"text": "is", "start": 63500, "end": 64000},
        {"text": "a", "start": 64000, "end": 64500},
        {"text": "test.", "start": 64500, "end": 65100},
    ],
    "utterances": [
        {"text": "Hello world.", "start": 61000, "end": 62100, "speaker": "A"},
        {"text": "This is a test.", "start": 63000, "end": 65100, "speaker": "B"},
    ],
}


@pytest.fixture
def hello_payload():
    """Scenario A/B transcript: one utterance at 30.0-30.8 s, speaker A."""
    return {
        "text": HELLO_PAYLOAD["text"],
        "words": [dict(w) for w in HELLO_PAYLOAD["words"]],
        "utterances": [dict(u) for u in HELLO_PAYLOAD["utterances"]],
    }


@pytest.fixture
def dialogue_payload():
    """Two speakers, two utterances, clip expected to start at 60 s."""
    return {
        "text": DIALOGUE_PAYLOAD["text"],
        "words": [dict(w) for w in DIALOGUE_PAYLOAD["words"]],
        "utterances": [dict(u) for u in DIALOGUE_PAYLOAD["utterances"]],
    }


@pytest.fixture
def words_only_payload():
    """Scenario C transcript: two adjacent words, no utterance array."""
    return {
        "words": [
            {"text": "a", "start": 1000, "end": 1200},
            {"text": "b", "start": 1200, "end": 1400},
        ],
    }


# ---------------------------------------------------------------------------
# Normalized transcripts (clip-relative time)
# ---------------------------------------------------------------------------

def _make_transcript(words=(), utterances=None, clip_start_ms=0, clip_end_ms=60000):
    """Build a NormalizedTranscript directly from IR objects."""
    return NormalizedTranscript(
        words=tuple(words),
        utterances=tuple(utterances) if utterances is not None else None,
        clip=ClipWindow(clip_start_ms=clip_start_ms, clip_end_ms=clip_end_ms),
    )


@pytest.fixture
def chunk_transcript():
    """Scenario D transcript: three words starting at 1000, 1300, 1600 ms."""
    return _make_transcript(words=[
        Word(text="word@1000", start_ms=1000, end_ms=1250),
        Word(text="word@1300", start_ms=1300, end_ms=1550),
        Word(text="word@1600", start_ms=1600, end_ms=1850),
    ])


@pytest.fixture
def overlapping_transcript():
    """Two overlapping utterances (3000-5000 and 4000-6000)."""
    return _make_transcript(utterances=[
        Utterance(text="first speaker", start_ms=3000, end_ms=5000, speaker="A"),
        Utterance(text="second speaker", start_ms=4000, end_ms=6000, speaker="B"),
    ])


@pytest.fixture
def make_transcript():
    """Factory for NormalizedTranscripts built straight from IR objects."""
    return _make_transcript
