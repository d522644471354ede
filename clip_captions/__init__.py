"""Clip captions — caption synchronization for trimmed audio/video clips.

WHY: Speech recognition timestamps are anchored to the original, untrimmed
media, but playback happens on a user-selected clip. This package turns
provider transcripts into the one caption that should be visible at any
instant of the clip.

HOW: Three stages — ingest (provider JSON to RawTranscript), normalize
(absolute to clip-relative time, exactly once), select (utterance caption
or word chunk at time t). CaptionEngine wires them per caption stream.

RULES:
- One CaptionEngine per caption stream; there is no shared instance
- Queries are pure and synchronous; scheduling belongs to the host
- Malformed transcripts never raise; they show no captions
"""

from clip_captions.core.chunker import ChunkBuilder, ChunkConfig, build_chunk
from clip_captions.core.ingest import parse_transcript
from clip_captions.core.ir import (
    CaptionState,
    Chunk,
    ClipWindow,
    NormalizedTranscript,
    RawTranscript,
    Utterance,
    Word,
)
from clip_captions.core.normalizer import normalize
from clip_captions.core.selector import select
from clip_captions.debug import DebugSnapshot, TraceRecord
from clip_captions.engine import CaptionEngine, EngineState
from clip_captions.errors import (
    CaptionError,
    ConfigurationError,
    DoubleNormalizationError,
)

__version__ = "0.1.0"

__all__ = [
    "CaptionEngine",
    "CaptionError",
    "CaptionState",
    "Chunk",
    "ChunkBuilder",
    "ChunkConfig",
    "ClipWindow",
    "ConfigurationError",
    "DebugSnapshot",
    "DoubleNormalizationError",
    "EngineState",
    "NormalizedTranscript",
    "RawTranscript",
    "TraceRecord",
    "Utterance",
    "Word",
    "build_chunk",
    "normalize",
    "parse_transcript",
    "select",
]
