"""Provider transcript parsing into the RawTranscript IR.

WHY: The transcription provider hands back a JSON document with
``words: [{text, start, end}]`` and, optionally, ``utterances: [{text,
start, end, speaker}]``. Captions are a non-critical enhancement layer, so
a malformed document must never crash playback: it degrades to an empty
transcript and the engine shows no captions.

HOW: The document is validated against transcript_schema.json with
jsonschema. On success the words and utterances are copied into IR
dataclasses in sequence order. On any validation failure a warning is
logged and an empty RawTranscript is returned.

RULES:
- Missing ``words`` → no words
- Missing or null ``utterances`` → utterances is None (word fallback only)
- Non-dict payload, non-array fields, entries missing fields or with
  non-numeric times → empty transcript
- An entry whose start is after its end → empty transcript
- Times too large to represent as a float → empty transcript
- Extra provider fields (confidence, nested utterance words) are ignored
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import jsonschema

from clip_captions.core.ir import RawTranscript, Utterance, Word

logger = logging.getLogger(__name__)

_SCHEMA_PATH = Path(__file__).resolve().parent / "transcript_schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def _get_schema() -> dict:
    """Load and cache the provider transcript JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def parse_transcript(payload: Any) -> RawTranscript:
    """Parse a provider transcript document into a RawTranscript.

    Args:
        payload: The decoded provider response. Anything that is not a
                 well-formed transcript dict is tolerated.

    Returns:
        A fresh, unconsumed RawTranscript. Empty when the payload is
        malformed.
    """
    try:
        jsonschema.validate(instance=payload, schema=_get_schema())
    except jsonschema.ValidationError as exc:
        logger.warning(
            "Malformed transcript treated as empty: %s (at %s)",
            exc.message,
            "/".join(str(p) for p in exc.absolute_path) or "<root>",
        )
        return RawTranscript.empty()

    try:
        words = [
            Word(text=w["text"], start_ms=float(w["start"]), end_ms=float(w["end"]))
            for w in payload.get("words") or []
        ]

        raw_utterances = payload.get("utterances")
        utterances = None  # type: Optional[list]
        if raw_utterances is not None:
            utterances = [
                Utterance(
                    text=u["text"],
                    start_ms=float(u["start"]),
                    end_ms=float(u["end"]),
                    speaker=u.get("speaker"),
                )
                for u in raw_utterances
            ]
    except (OverflowError, ValueError) as exc:
        logger.warning("Malformed transcript treated as empty: %s", exc)
        return RawTranscript.empty()

    for item in words + (utterances or []):
        if item.start_ms > item.end_ms:
            logger.warning(
                "Malformed transcript treated as empty: %r starts after it ends "
                "(%s > %s)", item.text, item.start_ms, item.end_ms,
            )
            return RawTranscript.empty()

    logger.debug(
        "Parsed transcript: %d words, %s utterances",
        len(words),
        "no" if utterances is None else len(utterances),
    )
    return RawTranscript(words=words, utterances=utterances)


def load_transcript_file(path: str | Path) -> RawTranscript:
    """Read a provider transcript JSON file and parse it.

    Unlike parse_transcript, a file that is not valid JSON at all raises
    (json.JSONDecodeError); that is a caller mistake, not provider noise.
    """
    with open(path, encoding="utf-8") as f:
        payload = json.load(f)
    return parse_transcript(payload)
