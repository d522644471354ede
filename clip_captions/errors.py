"""Exception hierarchy for the caption engine.

WHY: Callers need to tell configuration mistakes (a bad clip window, a
misconfigured chunk size) apart from contract violations such as feeding an
already-normalized transcript back into the normalizer.

RULES:
- Every exception raised on purpose by this package derives from CaptionError
- ConfigurationError is also a ValueError, so generic callers can catch it
- Malformed transcript data is never an exception; it degrades to an
  empty transcript (see core.ingest)
"""


class CaptionError(Exception):
    """Base class for caption engine errors."""


class ConfigurationError(CaptionError, ValueError):
    """Invalid clip window, chunk config, or engine lifecycle misuse."""


class DoubleNormalizationError(CaptionError):
    """A transcript was passed to the normalizer a second time."""
