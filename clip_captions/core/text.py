"""Optional caption text tidying for small renderers.

Provider text is returned verbatim by default. Hosts rendering on a
two-line phone overlay can ask the engine to tidy it: collapse whitespace,
fix missing spaces after sentence punctuation, cap the length at whole
sentences (or whole words) and capitalise the first letter.
"""

from __future__ import annotations

import re
from typing import Optional

from clip_captions.config import MAX_CAPTION_CHARS

_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_SPACING_RE = re.compile(r"([.!?])\s*([a-z])")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")

ELLIPSIS = "..."


def _truncate(text: str, max_chars: int) -> str:
    truncated = ""
    for sentence in _SENTENCE_SPLIT_RE.split(text):
        sentence = sentence.strip()
        candidate = truncated + (". " if truncated else "") + sentence
        if sentence and len(candidate) <= max_chars:
            truncated = candidate
        else:
            break

    if not truncated:
        for word in text.split(" "):
            if len(truncated + " " + word) <= max_chars:
                truncated += (" " if truncated else "") + word
            else:
                break

    return truncated + ELLIPSIS


def tidy_caption_text(text: Optional[str], max_chars: int = MAX_CAPTION_CHARS) -> str:
    """Normalise caption text for display.

    RULES:
    - None or empty → ""
    - Runs of whitespace collapse to one space; ends are trimmed
    - ``"end.next"`` becomes ``"end. next"`` (lowercase follower only)
    - Longer than max_chars → longest whole-sentence prefix, else longest
      whole-word prefix, followed by "..."
    - First character is upper-cased; the rest keeps provider casing
    """
    if not text:
        return ""

    tidy = _WHITESPACE_RE.sub(" ", text.strip())
    tidy = _SENTENCE_SPACING_RE.sub(r"\1 \2", tidy)

    if len(tidy) > max_chars:
        tidy = _truncate(tidy, max_chars)

    if tidy and tidy[0] != tidy[0].upper():
        tidy = tidy[0].upper() + tidy[1:]
    return tidy
