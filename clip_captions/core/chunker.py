"""Chunked caption mode: a few nearby words with one highlighted word.

WHY: Social-style captions show two or three words at a time and light up
the word being spoken, instead of a full utterance. The renderer animates
a transition whenever the visible words change, so it needs a reliable
"changed" signal rather than diffing strings itself.

HOW: A word is visible while t lies in
``[start_ms - lookahead_ms, start_ms + lookback_ms]``: it appears a little
before it is spoken and lingers a little after. The first ``max_words``
visible words in sequence order form the chunk text. The highlighted word
is the first of those chunk words whose
``[start_ms, start_ms + HIGHLIGHT_SPAN_MS]`` contains t. ChunkBuilder
wraps the pure build_chunk() and remembers the last emitted text to
compute ``changed``.

RULES:
- build_chunk() is pure; ChunkBuilder holds the only state (last text)
- At most one highlighted word; ties go to sequence order
- The highlighted word is always one of the words in the chunk text
- changed is True only when text differs from the previous emission
- An empty chunk after a non-empty one counts as a change
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from clip_captions.config import (
    DEFAULT_LOOKAHEAD_MS,
    DEFAULT_LOOKBACK_MS,
    DEFAULT_MAX_WORDS,
    HIGHLIGHT_SPAN_MS,
)
from clip_captions.core.ir import Chunk, NormalizedTranscript, Word
from clip_captions.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChunkConfig:
    """Visibility windows and size limit for chunk mode.

    Attributes:
        lookahead_ms: How long before its start a word becomes visible.
        lookback_ms: How long after its start a word stays visible.
        max_words: Maximum words shown in one chunk.
    """

    lookahead_ms: float = DEFAULT_LOOKAHEAD_MS
    lookback_ms: float = DEFAULT_LOOKBACK_MS
    max_words: int = DEFAULT_MAX_WORDS

    def __post_init__(self) -> None:
        if self.lookahead_ms < 0 or self.lookback_ms < 0:
            raise ConfigurationError(
                "Chunk windows must be non-negative (lookahead={}, lookback={})".format(
                    self.lookahead_ms, self.lookback_ms
                )
            )
        if self.max_words < 1:
            raise ConfigurationError(
                "max_words must be at least 1, got {}".format(self.max_words)
            )


def visible_words(
    transcript: NormalizedTranscript,
    relative_time_ms: float,
    config: ChunkConfig,
) -> List[Word]:
    """All words visible at t, in sequence order, before the max_words cut."""
    t = relative_time_ms
    return [
        w for w in transcript.words
        if w.start_ms - config.lookahead_ms <= t <= w.start_ms + config.lookback_ms
    ]


def highlighted_word(
    words: Sequence[Word],
    relative_time_ms: float,
) -> Optional[Word]:
    """The first of ``words`` whose highlight span contains t, or None."""
    t = relative_time_ms
    for w in words:
        if w.start_ms <= t <= w.start_ms + HIGHLIGHT_SPAN_MS:
            return w
    return None


def build_chunk(
    transcript: NormalizedTranscript,
    relative_time_ms: float,
    config: Optional[ChunkConfig] = None,
) -> Chunk:
    """Compute the chunk visible at ``relative_time_ms``.

    Stateless: ``changed`` is always True here. Use ChunkBuilder when the
    change signal matters.
    """
    cfg = config or ChunkConfig()
    words = visible_words(transcript, relative_time_ms, cfg)[:cfg.max_words]
    return Chunk(
        text=" ".join(w.text for w in words),
        highlighted_word=highlighted_word(words, relative_time_ms),
        changed=True,
    )


class ChunkBuilder:
    """Stateful wrapper around build_chunk() that emits a change signal.

    One builder per caption stream. The engine owns one and resets it
    together with the transcript.
    """

    def __init__(self, config: Optional[ChunkConfig] = None) -> None:
        self.config = config or ChunkConfig()
        self._last_text = ""

    @property
    def last_text(self) -> str:
        return self._last_text

    def build(self, transcript: NormalizedTranscript, relative_time_ms: float) -> Chunk:
        chunk = build_chunk(transcript, relative_time_ms, self.config)
        changed = chunk.text != self._last_text
        if changed:
            logger.debug("Chunk changed at %s ms: %r -> %r",
                         relative_time_ms, self._last_text, chunk.text)
            self._last_text = chunk.text
        return Chunk(text=chunk.text, highlighted_word=chunk.highlighted_word,
                     changed=changed)

    def reset(self) -> None:
        self._last_text = ""
