"""Caption selection: which text is visible at a clip-relative instant.

WHY: The player ticks every few hundred milliseconds (and jumps around when
the user seeks). On each tick the renderer needs exactly one caption.
Recognition boundaries are imprecise and utterances sometimes overlap, so
the selection order has to be fixed and deterministic.

HOW: Four rules, first match wins:
  1. Bootstrap — within the first BOOTSTRAP_WINDOW_MS of the clip, show
     the first utterance even if its interval has not started yet.
  2. Utterance — the first utterance (sequence order) whose closed
     interval contains t.
  3. Word fallback — every word whose closed interval contains t, joined
     by single spaces in sequence order.
  4. Empty caption.

RULES:
- Pure: no caches, no mutation; same (transcript, t) → same result
- Overlap tie-break is sequence order, never "last write wins"
- Word fallback never carries a speaker
- More than one simultaneously active word is shown joined, not dropped
"""

from __future__ import annotations

from typing import Tuple

from clip_captions.config import BOOTSTRAP_WINDOW_MS
from clip_captions.core.ir import CaptionState, NormalizedTranscript


def select_with_candidates(
    transcript: NormalizedTranscript,
    relative_time_ms: float,
) -> Tuple[CaptionState, int]:
    """Select the active caption and report how many candidates matched.

    The candidate count is what debug traces record: the number of
    utterances whose interval contains t when an utterance won (1 for the
    bootstrap rule if t is outside every interval), otherwise the number of
    words joined by the fallback.

    Args:
        transcript: Clip-relative transcript.
        relative_time_ms: Milliseconds since clip start. May be negative.

    Returns:
        (caption, candidate_count)
    """
    t = relative_time_ms
    utterances = transcript.utterances or ()

    if utterances and 0 <= t <= BOOTSTRAP_WINDOW_MS:
        first = utterances[0]
        matching = sum(1 for u in utterances if u.start_ms <= t <= u.end_ms)
        return (
            CaptionState(text=first.text, is_active=True, speaker=first.speaker),
            max(matching, 1),
        )

    winner = None
    matching = 0
    for utterance in utterances:
        if utterance.start_ms <= t <= utterance.end_ms:
            matching += 1
            if winner is None:
                winner = utterance
    if winner is not None:
        return (
            CaptionState(text=winner.text, is_active=True, speaker=winner.speaker),
            matching,
        )

    active_words = [w.text for w in transcript.words if w.start_ms <= t <= w.end_ms]
    if active_words:
        return (
            CaptionState(text=" ".join(active_words), is_active=True, speaker=None),
            len(active_words),
        )

    return CaptionState.empty(), 0


def select(transcript: NormalizedTranscript, relative_time_ms: float) -> CaptionState:
    """Return the caption visible at ``relative_time_ms``."""
    caption, _ = select_with_candidates(transcript, relative_time_ms)
    return caption
