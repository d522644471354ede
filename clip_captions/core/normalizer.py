"""Rebase absolute transcript timestamps onto clip-relative time.

WHY: The provider reports times relative to the start of the original
episode; the player reports times relative to the start of the trimmed
clip. Subtracting the clip start twice (once by the host, once here) is
the most damaging bug in this domain: every caption drifts by a whole clip
offset. The normalizer is therefore the only place the subtraction
happens, and it refuses to run twice on the same data.

HOW: normalize() takes a RawTranscript and a ClipWindow, marks the raw
transcript consumed, and returns a new frozen NormalizedTranscript with
``start - clip_start`` / ``end - clip_start`` for every word and
utterance.

RULES:
- Only RawTranscript is accepted; a NormalizedTranscript raises
  DoubleNormalizationError
- A RawTranscript may be normalized once; the second call raises
- Negative results are kept as-is (never clamped)
- Order and start <= end are preserved (pure translation)
- Clip starts past SUSPICIOUS_CLIP_START_MS are logged, not rejected
"""

from __future__ import annotations

import logging

from clip_captions.config import SUSPICIOUS_CLIP_START_MS
from clip_captions.core.ir import (
    ClipWindow,
    NormalizedTranscript,
    RawTranscript,
    Utterance,
    Word,
)
from clip_captions.errors import ConfigurationError, DoubleNormalizationError

logger = logging.getLogger(__name__)


def normalize(raw: RawTranscript, clip: ClipWindow) -> NormalizedTranscript:
    """Translate a raw transcript into the clip's time base, exactly once.

    Args:
        raw: Provider transcript in absolute milliseconds. Consumed.
        clip: Absolute bounds of the clip being played.

    Returns:
        A frozen NormalizedTranscript holding its own copies of the data.

    Raises:
        DoubleNormalizationError: raw is already normalized or consumed.
        ConfigurationError: clip end is not after clip start.
    """
    if isinstance(raw, NormalizedTranscript):
        raise DoubleNormalizationError(
            "Transcript is already clip-relative; normalizing it again would "
            "subtract the clip start twice"
        )
    if not isinstance(raw, RawTranscript):
        raise TypeError(
            "normalize() expects a RawTranscript, got {}".format(type(raw).__name__)
        )
    if raw.consumed:
        raise DoubleNormalizationError(
            "This RawTranscript has already been normalized; parse the "
            "provider response again to build a new one"
        )
    if clip.clip_end_ms <= clip.clip_start_ms:
        raise ConfigurationError(
            "Invalid clip window: end ({}) must be after start ({})".format(
                clip.clip_end_ms, clip.clip_start_ms
            )
        )

    if clip.clip_start_ms > SUSPICIOUS_CLIP_START_MS:
        logger.warning(
            "Suspicious clip start %s ms (over six hours); check for seconds "
            "or epoch values", clip.clip_start_ms,
        )

    offset = clip.clip_start_ms
    words = tuple(
        Word(text=w.text, start_ms=w.start_ms - offset, end_ms=w.end_ms - offset)
        for w in raw.words
    )
    utterances = None
    if raw.utterances is not None:
        utterances = tuple(
            Utterance(
                text=u.text,
                start_ms=u.start_ms - offset,
                end_ms=u.end_ms - offset,
                speaker=u.speaker,
            )
            for u in raw.utterances
        )

    raw.consumed = True

    logger.debug(
        "Normalized %d words and %d utterances to clip %s-%s ms",
        len(words), len(utterances or ()), clip.clip_start_ms, clip.clip_end_ms,
    )
    return NormalizedTranscript(words=words, utterances=utterances, clip=clip)
