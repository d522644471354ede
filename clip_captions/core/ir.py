"""Intermediate representation dataclasses for clip captions.

WHY: Transcription providers return word and utterance timestamps anchored
to the original, untrimmed media. Playback happens on a trimmed clip. Mixing
the two time bases is the main way caption sync breaks, so the two states
of a transcript are separate types: RawTranscript (absolute time) and
NormalizedTranscript (clip-relative time). Only the normalizer can turn one
into the other.

HOW: Plain dataclasses form the model:
  Word                 — one recognised word with start/end in ms
  Utterance            — a span of continuous speech, optionally attributed
  ClipWindow           — absolute bounds of the selected clip
  RawTranscript        — provider output, absolute time, consumed once
  NormalizedTranscript — frozen, clip-relative, owned by the engine
  CaptionState         — the caption visible at a given instant
  Chunk                — a short run of words with one highlighted word

RULES:
- All times are float milliseconds
- start_ms <= end_ms for every Word and Utterance as received
- Utterances may overlap; order in the sequence is meaningful
- RawTranscript.utterances is None when the provider sent no utterance array
- NormalizedTranscript is immutable (frozen, tuples)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from clip_captions.errors import ConfigurationError


@dataclass(frozen=True)
class Word:
    """A single recognised word with its timing."""

    text: str
    start_ms: float
    end_ms: float

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "startMs": self.start_ms, "endMs": self.end_ms}


@dataclass(frozen=True)
class Utterance:
    """A provider-defined span of continuous speech, typically one speaker turn."""

    text: str
    start_ms: float
    end_ms: float
    speaker: str | None = None


@dataclass(frozen=True)
class ClipWindow:
    """Absolute bounds of the user-selected clip within the source media.

    RULES:
    - clip_end_ms must be strictly greater than clip_start_ms
    - Violations raise ConfigurationError at construction time
    """

    clip_start_ms: float
    clip_end_ms: float

    def __post_init__(self) -> None:
        if self.clip_end_ms <= self.clip_start_ms:
            raise ConfigurationError(
                "Invalid clip window: end ({}) must be after start ({})".format(
                    self.clip_end_ms, self.clip_start_ms
                )
            )

    @property
    def duration_ms(self) -> float:
        return self.clip_end_ms - self.clip_start_ms


@dataclass
class RawTranscript:
    """Provider transcript in the absolute time base of the source media.

    WHY: Normalization must happen exactly once. A raw transcript records
    whether it has already been handed to the normalizer so a second
    normalization of the same object fails loudly instead of silently
    subtracting the clip start twice.

    RULES:
    - words: ordered as received
    - utterances: ordered as received, or None when absent
    - consumed: set by normalize(); never reset
    """

    words: list[Word] = field(default_factory=list)
    utterances: list[Utterance] | None = None
    consumed: bool = field(default=False, init=False, repr=False, compare=False)

    @classmethod
    def empty(cls) -> RawTranscript:
        return cls(words=[], utterances=None)


@dataclass(frozen=True)
class NormalizedTranscript:
    """Clip-relative transcript produced by the normalizer.

    Negative timestamps are valid: they belong to words that started
    before the clip window opened.
    """

    words: tuple[Word, ...]
    utterances: tuple[Utterance, ...] | None
    clip: ClipWindow

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def utterance_count(self) -> int:
        return len(self.utterances) if self.utterances else 0


@dataclass(frozen=True)
class CaptionState:
    """The caption visible at one instant of playback."""

    text: str
    is_active: bool
    speaker: str | None = None

    @classmethod
    def empty(cls) -> CaptionState:
        return cls(text="", is_active=False, speaker=None)

    def to_dict(self) -> dict[str, Any]:
        """Renderer-facing shape: ``{text, isActive, speaker}``."""
        return {"text": self.text, "isActive": self.is_active, "speaker": self.speaker}


@dataclass(frozen=True)
class Chunk:
    """A short run of words shown together, with at most one highlighted word.

    ``changed`` is True when ``text`` differs from the previously emitted
    chunk text, so the renderer can start a transition once per change.
    """

    text: str
    highlighted_word: Word | None = None
    changed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "highlightedWord": (
                self.highlighted_word.to_dict() if self.highlighted_word else None
            ),
            "changed": self.changed,
        }
