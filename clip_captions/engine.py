"""The caption synchronization engine.

WHY: The host application has a playback clock and a renderer; it needs
one object that takes the provider transcript and the clip window once,
then answers "what caption is visible now?" on every tick. Preview and
export run at the same time, so there is no module-level singleton: each
caption stream gets its own engine.

HOW: set_transcript() parses the provider payload (core.ingest), validates
the clip window and normalizes timestamps (core.normalizer). The
normalized transcript is the engine's only substantial state. Queries
delegate to the pure selector and to the engine's ChunkBuilder. In debug
mode each query also emits a TraceRecord to the logger and to an optional
sink.

RULES:
- States: UNINITIALIZED → set_transcript → LOADED → reset → UNINITIALIZED
- set_transcript on a LOADED engine raises ConfigurationError
- reset() is idempotent and keeps the debug flag
- Queries on an UNINITIALIZED engine return the empty caption
- Debug tracing never changes what a query returns
- No I/O, no threads, no timers
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable, Optional

from clip_captions.config import DEFAULT_DEBUG_MODE
from clip_captions.core.chunker import ChunkBuilder, ChunkConfig, visible_words
from clip_captions.core.ingest import parse_transcript
from clip_captions.core.ir import (
    CaptionState,
    Chunk,
    ClipWindow,
    NormalizedTranscript,
    RawTranscript,
)
from clip_captions.core.normalizer import normalize
from clip_captions.core.selector import select_with_candidates
from clip_captions.core.text import tidy_caption_text
from clip_captions.debug import DebugSnapshot, TraceRecord, snapshot
from clip_captions.errors import ConfigurationError

logger = logging.getLogger(__name__)

TraceSink = Callable[[TraceRecord], None]


class EngineState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"


class CaptionEngine:
    """Per-stream caption engine.

    Args:
        debug_mode: Emit a TraceRecord for every query.
        chunk_config: Windows and size limit for chunk mode.
        tidy_text: Pass utterance and word captions through
                   tidy_caption_text() before returning them.
        trace_sink: Called with every TraceRecord while debug mode is on.
    """

    def __init__(
        self,
        debug_mode: bool = DEFAULT_DEBUG_MODE,
        chunk_config: Optional[ChunkConfig] = None,
        tidy_text: bool = False,
        trace_sink: Optional[TraceSink] = None,
    ) -> None:
        self._debug_mode = debug_mode
        self._tidy_text = tidy_text
        self._trace_sink = trace_sink
        self._chunks = ChunkBuilder(chunk_config)
        self._transcript = None  # type: Optional[NormalizedTranscript]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> EngineState:
        if self._transcript is None:
            return EngineState.UNINITIALIZED
        return EngineState.LOADED

    @property
    def transcript(self) -> Optional[NormalizedTranscript]:
        return self._transcript

    @property
    def chunk_config(self) -> ChunkConfig:
        return self._chunks.config

    def set_transcript(
        self,
        payload: Any,
        clip_start_ms: float,
        clip_end_ms: float,
    ) -> NormalizedTranscript:
        """Load a transcript for one clip.

        Args:
            payload: Provider transcript document (dict), or a RawTranscript
                     parsed elsewhere. Malformed documents load as empty.
            clip_start_ms: Absolute clip start in the source media.
            clip_end_ms: Absolute clip end in the source media.

        Returns:
            The normalized transcript now held by the engine.

        Raises:
            ConfigurationError: The clip window is invalid, or the engine
                already holds a transcript (call reset() first).
            DoubleNormalizationError: payload was already normalized.
        """
        if self._transcript is not None:
            raise ConfigurationError(
                "Engine already holds a transcript for clip {}-{} ms; call "
                "reset() before loading a new clip".format(
                    self._transcript.clip.clip_start_ms,
                    self._transcript.clip.clip_end_ms,
                )
            )

        clip = ClipWindow(clip_start_ms=clip_start_ms, clip_end_ms=clip_end_ms)

        if isinstance(payload, (RawTranscript, NormalizedTranscript)):
            raw = payload
        else:
            raw = parse_transcript(payload)

        self._transcript = normalize(raw, clip)
        self._chunks.reset()

        if self._debug_mode:
            first = self._transcript.utterances[0] if self._transcript.utterances else None
            logger.debug(
                "Setup complete: %d utterances, %d words, clip duration %s ms, "
                "first utterance %r",
                self._transcript.utterance_count,
                self._transcript.word_count,
                clip.duration_ms,
                first.text if first else None,
            )
        return self._transcript

    def reset(self) -> None:
        """Drop the loaded transcript. Safe to call any number of times."""
        if self._transcript is None:
            return
        self._transcript = None
        self._chunks.reset()
        logger.debug("Engine reset")

    # ------------------------------------------------------------------
    # Debug
    # ------------------------------------------------------------------

    @property
    def debug_mode(self) -> bool:
        return self._debug_mode

    def set_debug_mode(self, enabled: bool) -> None:
        self._debug_mode = bool(enabled)

    def snapshot(self) -> DebugSnapshot:
        return snapshot(self)

    def _trace(self, record: TraceRecord) -> None:
        logger.debug(
            "Trace %s t=%s candidates=%d result=%r",
            record.kind, record.time_ms, record.candidate_count, record.result.text,
        )
        if self._trace_sink is not None:
            self._trace_sink(record)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def current_caption(self, relative_time_ms: float) -> CaptionState:
        """The caption visible at ``relative_time_ms`` after clip start."""
        if self._transcript is None:
            caption, candidates = CaptionState.empty(), 0
        else:
            caption, candidates = select_with_candidates(self._transcript, relative_time_ms)
            if self._tidy_text and caption.text:
                caption = CaptionState(
                    text=tidy_caption_text(caption.text),
                    is_active=caption.is_active,
                    speaker=caption.speaker,
                )

        if self._debug_mode:
            self._trace(TraceRecord(
                kind="caption",
                time_ms=relative_time_ms,
                candidate_count=candidates,
                result=caption,
            ))
        return caption

    def caption_at_position(self, position_ms: float) -> CaptionState:
        """Like current_caption(), for an absolute position in the source media."""
        if self._transcript is None:
            return self.current_caption(position_ms)
        return self.current_caption(position_ms - self._transcript.clip.clip_start_ms)

    def current_chunk(self, relative_time_ms: float) -> Chunk:
        """The chunk visible at ``relative_time_ms``, with a change signal."""
        if self._transcript is None:
            chunk, candidates = Chunk(text="", highlighted_word=None, changed=False), 0
        else:
            chunk = self._chunks.build(self._transcript, relative_time_ms)
            if self._debug_mode:
                candidates = len(visible_words(
                    self._transcript, relative_time_ms, self._chunks.config))
            else:
                candidates = 0

        if self._debug_mode:
            self._trace(TraceRecord(
                kind="chunk",
                time_ms=relative_time_ms,
                candidate_count=candidates,
                result=chunk,
            ))
        return chunk
