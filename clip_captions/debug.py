"""Read-only introspection of a caption engine.

WHY: When captions look wrong on device, the first questions are always
the same: was a transcript loaded, how many words and utterances survived
parsing, and which clip window was used. The snapshot answers them without
touching selection.

HOW: snapshot() reads the engine's public properties into a frozen
DebugSnapshot. TraceRecord is the per-query record an engine in debug
mode emits (see CaptionEngine.set_debug_mode).

RULES:
- snapshot() never mutates the engine
- An unloaded engine reports zero counts and zero clip bounds
- to_dict() uses the camelCase keys the host's log pipeline expects
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from clip_captions.core.ir import CaptionState, Chunk

if TYPE_CHECKING:
    from clip_captions.engine import CaptionEngine


@dataclass(frozen=True)
class DebugSnapshot:
    has_transcript: bool
    word_count: int
    utterance_count: int
    clip_start_ms: float
    clip_end_ms: float
    clip_duration_ms: float
    debug_mode_enabled: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasTranscript": self.has_transcript,
            "wordCount": self.word_count,
            "utteranceCount": self.utterance_count,
            "clipStartMs": self.clip_start_ms,
            "clipEndMs": self.clip_end_ms,
            "clipDurationMs": self.clip_duration_ms,
            "debugModeEnabled": self.debug_mode_enabled,
        }


@dataclass(frozen=True)
class TraceRecord:
    """One selection call as seen by an engine in debug mode.

    Attributes:
        kind: ``"caption"`` or ``"chunk"``.
        time_ms: The clip-relative time queried.
        candidate_count: Utterances or words that matched the query time.
        result: The value returned to the caller.
    """

    kind: str
    time_ms: float
    candidate_count: int
    result: Union[CaptionState, Chunk]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "timeMs": self.time_ms,
            "candidateCount": self.candidate_count,
            "result": self.result.to_dict(),
        }


def snapshot(engine: CaptionEngine) -> DebugSnapshot:
    """Describe the engine's loaded state."""
    transcript = engine.transcript
    clip = transcript.clip if transcript is not None else None
    return DebugSnapshot(
        has_transcript=transcript is not None,
        word_count=transcript.word_count if transcript is not None else 0,
        utterance_count=transcript.utterance_count if transcript is not None else 0,
        clip_start_ms=clip.clip_start_ms if clip is not None else 0,
        clip_end_ms=clip.clip_end_ms if clip is not None else 0,
        clip_duration_ms=clip.duration_ms if clip is not None else 0,
        debug_mode_enabled=engine.debug_mode,
    )


def format_snapshot(snap: DebugSnapshot, first_caption: Optional[CaptionState] = None) -> str:
    """One-line human summary, used by the CLI's --debug output."""
    line = "transcript={} words={} utterances={} clip={}-{}ms ({}ms) debug={}".format(
        "yes" if snap.has_transcript else "no",
        snap.word_count,
        snap.utterance_count,
        snap.clip_start_ms,
        snap.clip_end_ms,
        snap.clip_duration_ms,
        "on" if snap.debug_mode_enabled else "off",
    )
    if first_caption is not None and first_caption.text:
        line += " first={!r}".format(first_caption.text)
    return line
