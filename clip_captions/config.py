"""Configuration constants and .env loading.

WHY: Timing thresholds (bootstrap window, highlight span, chunk windows)
are tuning knobs that product people adjust against real transcripts.
Keeping them as plain module-level constants, overridable from the
environment, means nobody has to dig through selection logic to find them.

HOW: python-dotenv loads the .env file on import. Each constant reads its
environment variable with a default.

RULES:
- All durations are integer milliseconds
- Bad values in the environment fail at import with a clear message
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the host is run from)
load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer setting from the environment.

    RULES:
    - Missing or blank → default
    - Non-integer → ValueError naming the variable
    """
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            "{} must be an integer number of milliseconds, got {!r}".format(name, raw)
        ) from None


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

BOOTSTRAP_WINDOW_MS = _env_int("CAPTION_BOOTSTRAP_WINDOW_MS", 500)
"""Clip-relative span during which the first utterance is always shown."""

HIGHLIGHT_SPAN_MS = _env_int("CAPTION_HIGHLIGHT_SPAN_MS", 500)
"""How long after its start a word stays highlighted in chunk mode."""

# ---------------------------------------------------------------------------
# Chunk mode defaults
# ---------------------------------------------------------------------------

DEFAULT_LOOKAHEAD_MS = _env_int("CAPTION_LOOKAHEAD_MS", 150)
DEFAULT_LOOKBACK_MS = _env_int("CAPTION_LOOKBACK_MS", 400)
DEFAULT_MAX_WORDS = _env_int("CAPTION_MAX_WORDS", 3)

# ---------------------------------------------------------------------------
# Display and export
# ---------------------------------------------------------------------------

MAX_CAPTION_CHARS = _env_int("CAPTION_MAX_CHARS", 60)
"""Roughly two lines of caption text on a phone-sized renderer."""

DEFAULT_TICK_MS = _env_int("CAPTION_TICK_MS", 250)
"""Sampling step used when exporting a caption timeline."""

DEFAULT_DEBUG_MODE = os.getenv("CAPTION_DEBUG", "false").lower() == "true"

SUSPICIOUS_CLIP_START_MS = 6 * 60 * 60 * 1000
"""Clip starts beyond six hours usually mean seconds/epoch values leaked in."""
