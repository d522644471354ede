"""Command-line interface for inspecting clip captions.

WHY: Caption sync bugs are reported as "the caption at 0:12 is wrong".
Reproducing them should not need a phone: load the provider transcript,
give the clip window, and ask the engine what it shows at a given time, or
dump the whole clip as SRT.

HOW: argparse collects the transcript path, clip window and query options.
The transcript file is parsed and loaded into a fresh CaptionEngine. With
one or more ``--at`` values, one JSON object per query goes to stdout.
Without, the SRT timeline goes to stdout. Status and errors go to stderr.

RULES:
- Positional argument: provider transcript JSON file
- --clip-start / --clip-end: absolute milliseconds, required
- --at MS (repeatable): clip-relative query times
- --chunked: chunk mode instead of utterance captions
- --debug: DEBUG logging, trace records and a snapshot line on stderr
- Exit codes: 0 = success, 1 = error
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from clip_captions.config import (
    DEFAULT_LOOKAHEAD_MS,
    DEFAULT_LOOKBACK_MS,
    DEFAULT_MAX_WORDS,
    DEFAULT_TICK_MS,
)
from clip_captions.core.chunker import ChunkConfig
from clip_captions.core.ingest import load_transcript_file
from clip_captions.debug import TraceRecord, format_snapshot
from clip_captions.engine import CaptionEngine
from clip_captions.errors import CaptionError
from clip_captions.timeline import build_cues, cues_to_srt


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _print_trace(record: TraceRecord) -> None:
    _status("trace " + json.dumps(record.to_dict(), ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clip-captions",
        description="Show the captions a trimmed clip displays over time.",
    )
    parser.add_argument("transcript", help="Provider transcript JSON file")
    parser.add_argument("--clip-start", type=float, required=True,
                        help="Absolute clip start in ms")
    parser.add_argument("--clip-end", type=float, required=True,
                        help="Absolute clip end in ms")
    parser.add_argument("--at", type=float, action="append", metavar="MS",
                        help="Clip-relative query time in ms (repeatable)")
    parser.add_argument("--chunked", action="store_true",
                        help="Use chunked word captions")
    parser.add_argument("--lookahead", type=float, default=DEFAULT_LOOKAHEAD_MS,
                        help="Chunk lookahead in ms (default: %(default)s)")
    parser.add_argument("--lookback", type=float, default=DEFAULT_LOOKBACK_MS,
                        help="Chunk lookback in ms (default: %(default)s)")
    parser.add_argument("--max-words", type=int, default=DEFAULT_MAX_WORDS,
                        help="Words per chunk (default: %(default)s)")
    parser.add_argument("--tick", type=float, default=DEFAULT_TICK_MS,
                        help="Timeline sampling step in ms (default: %(default)s)")
    parser.add_argument("--tidy", action="store_true",
                        help="Tidy caption text for a two-line display")
    parser.add_argument("--debug", action="store_true",
                        help="Verbose logging and per-query trace records")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ChunkConfig(
            lookahead_ms=args.lookahead,
            lookback_ms=args.lookback,
            max_words=args.max_words,
        )
        raw = load_transcript_file(args.transcript)
        engine = CaptionEngine(
            debug_mode=args.debug,
            chunk_config=config,
            tidy_text=args.tidy,
            trace_sink=_print_trace if args.debug else None,
        )
        engine.set_transcript(raw, args.clip_start, args.clip_end)
    except (OSError, ValueError, CaptionError) as exc:
        _status("Error: {}".format(exc))
        return 1

    if args.debug:
        _status(format_snapshot(engine.snapshot()))

    if args.at:
        for t in args.at:
            if args.chunked:
                result = engine.current_chunk(t).to_dict()
            else:
                result = engine.current_caption(t).to_dict()
            result["timeMs"] = t
            print(json.dumps(result, ensure_ascii=False))
        return 0

    try:
        cues = build_cues(engine, tick_ms=args.tick, chunked=args.chunked)
    except CaptionError as exc:
        _status("Error: {}".format(exc))
        return 1

    _status("{} cues".format(len(cues)))
    sys.stdout.write(cues_to_srt(cues))
    return 0
