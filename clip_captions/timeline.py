"""Caption timeline export: sample an engine across its clip, emit SRT.

WHY: Reviewing sync on a device means scrubbing a clip over and over. A
timeline of what the engine would show, tick by tick, is easier to check
and to diff between transcript versions. SRT is the format every video
tool and player already opens.

HOW: build_cues() queries the engine at t = 0, tick, 2*tick, ... up to the
clip duration, exactly as a player ticking at that cadence would, and
merges runs of identical text into cues. cues_to_srt() renders them.

RULES:
- Requires a loaded engine (ConfigurationError otherwise)
- Empty captions produce no cue; they only end the previous one
- A cue ends where the next differing sample starts, or at clip end
- Chunk mode merges on chunk text; the speaker is unknown there
- Caption mode samples through the engine's public query, so debug traces
  behave as during playback
- Chunk mode samples with its own ChunkBuilder; the engine's live change
  signal is left untouched
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from clip_captions.config import DEFAULT_TICK_MS
from clip_captions.core.chunker import ChunkBuilder
from clip_captions.engine import CaptionEngine
from clip_captions.errors import ConfigurationError


@dataclass
class Cue:
    index: int
    start_ms: float
    end_ms: float
    text: str
    speaker: Optional[str] = None


def _sample_times(duration_ms: float, tick_ms: float) -> List[float]:
    # Last sample lands on the clip end whenever the tick divides the duration.
    count = int(duration_ms / tick_ms + 1e-9)
    return [min(i * tick_ms, duration_ms) for i in range(count + 1)]


def build_cues(
    engine: CaptionEngine,
    tick_ms: float = DEFAULT_TICK_MS,
    chunked: bool = False,
) -> List[Cue]:
    """Sample the engine across its clip and collapse equal captions.

    Args:
        engine: A loaded engine.
        tick_ms: Sampling step in milliseconds.
        chunked: Sample chunk mode instead of caption mode.

    Returns:
        Cues in time order, numbered from 1.
    """
    transcript = engine.transcript
    if transcript is None:
        raise ConfigurationError("Cannot build a timeline: no transcript loaded")
    if tick_ms <= 0:
        raise ConfigurationError("tick_ms must be positive, got {}".format(tick_ms))

    duration = transcript.clip.duration_ms
    exporter = ChunkBuilder(engine.chunk_config) if chunked else None
    cues = []  # type: List[Cue]
    current = None  # type: Optional[Cue]

    for t in _sample_times(duration, tick_ms):
        if chunked:
            text, speaker = exporter.build(transcript, t).text, None
        else:
            caption = engine.current_caption(t)
            text, speaker = caption.text, caption.speaker

        if current is not None and text == current.text and speaker == current.speaker:
            continue
        if current is not None:
            current.end_ms = t
            cues.append(current)
            current = None
        if text:
            current = Cue(index=len(cues) + 1, start_ms=t, end_ms=duration,
                          text=text, speaker=speaker)

    if current is not None:
        current.end_ms = duration
        cues.append(current)
    return cues


def format_srt_timestamp(ms: float) -> str:
    """Format milliseconds as ``HH:MM:SS,mmm``."""
    total = int(round(ms))
    hours, rem = divmod(total, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    seconds, millis = divmod(rem, 1000)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, seconds, millis)


def cues_to_srt(cues: List[Cue]) -> str:
    """Render cues as an SRT document. Empty input gives an empty string."""
    blocks = []  # type: List[str]
    for cue in cues:
        text = "[{}] {}".format(cue.speaker, cue.text) if cue.speaker else cue.text
        blocks.append("{}\n{} --> {}\n{}\n".format(
            cue.index,
            format_srt_timestamp(cue.start_ms),
            format_srt_timestamp(cue.end_ms),
            text,
        ))
    return "\n".join(blocks)
