"""Spaced-repetition scheduling over a fixed, cyclic word list.

The schedule runs on a timeline of exposure steps that is separate from the
position in the list. Every forward move advances the step by the number of
candidates scanned, moving backwards leaves it alone, and a word marked
familiar is gated until the step reaches its ``next_available_step``.

All functions here are pure: they take the caller's state and return new
state without keeping any of their own.
"""
import logging
import math
from dataclasses import replace
from typing import Sequence, Tuple

from wordwatch.config import GAP_BASE_RATIO, GAP_CAP_RATIO
from wordwatch.models.word_models import ProgressStore, Word, WordProgress

logger = logging.getLogger(__name__)

# 2.0 ** 1024 overflows a float
MAX_DOUBLINGS = 1023


def _round_half_up(value: float) -> int:
    # value is never negative here
    return int(math.floor(value + 0.5))


def compute_gap(
    total_words: int,
    familiar_count: int,
    base_ratio: float = GAP_BASE_RATIO,
    cap_ratio: float = GAP_CAP_RATIO,
) -> int:
    """Number of steps a word must wait after its ``familiar_count``-th familiar mark.

    The first gap is ``base_ratio`` of the list length and doubles with every
    further mark, capped at ``cap_ratio`` of the list length. The result is
    rounded half up once and is never below 1.
    """
    k = max(familiar_count, 1)
    doublings = min(k - 1, MAX_DOUBLINGS)
    raw_gap = total_words * (base_ratio * 2.0 ** doublings)
    capped_gap = min(raw_gap, total_words * cap_ratio)
    return max(_round_half_up(capped_gap), 1)


def is_eligible(word_id: str, step: int, store: ProgressStore) -> bool:
    """Check whether a word may be shown at the given timeline step."""
    record = store.get(word_id)
    return record is None or step >= record.next_available_step


def advance(
    words: Sequence[Word],
    current_index: int,
    current_step: int,
    store: ProgressStore,
) -> Tuple[int, int]:
    """Pick the next word to show.

    Candidates are scanned at offsets ``1..len(words)`` from the current
    index, wrapping around the list, and the first one off cooldown wins.
    When every word is on cooldown the immediate neighbour is returned so the
    session always moves.

    Returns:
        The new ``(index, step)``. Unchanged for an empty list.
    """
    length = len(words)
    if length == 0:
        return current_index, current_step

    for offset in range(1, length + 1):
        candidate_index = (current_index + offset) % length
        candidate_step = current_step + offset
        if is_eligible(words[candidate_index].id, candidate_step, store):
            return candidate_index, candidate_step

    logger.debug(f"All {length} words on cooldown at step {current_step}, showing neighbour")
    return (current_index + 1) % length, current_step + 1


def retreat(words: Sequence[Word], current_index: int) -> int:
    """Index of the previous word. The timeline step is not touched."""
    length = len(words)
    if length == 0:
        return current_index
    return (current_index - 1 + length) % length


def mark_familiar(
    word: Word,
    current_step: int,
    store: ProgressStore,
    total_words: int,
    base_ratio: float = GAP_BASE_RATIO,
    cap_ratio: float = GAP_CAP_RATIO,
) -> ProgressStore:
    """Record that ``word`` was marked familiar at ``current_step``.

    Returns a new store with the word's record replaced; the given store is
    left as it was. The caller is expected to ``advance`` afterwards.
    """
    record = store.get(word.id) or WordProgress(familiar_count=0, next_available_step=current_step + 1)
    familiar_count = record.familiar_count + 1
    gap = compute_gap(total_words, familiar_count, base_ratio=base_ratio, cap_ratio=cap_ratio)

    updated = dict(store)
    updated[word.id] = replace(
        record,
        familiar_count=familiar_count,
        next_available_step=current_step + gap,
    )
    logger.debug(f"Word {word.id!r} familiar x{familiar_count}, gap {gap}, eligible at step {current_step + gap}")
    return updated
