"""SM-2 spaced repetition algorithm."""
import math
from typing import Optional

from mistake_book.clock import DAY_MS
from mistake_book.models import DEFAULT_EASE_FACTOR, MIN_EASE_FACTOR, Question, Rating

MASTERED_HORIZON_DAYS = 365


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_schedule(
    quality: int,
    prior_interval_days: int,
    prior_ef: Optional[float],
    now: int,
) -> dict:
    """Calculate next review parameters using SM-2.

    Args:
        quality: Rating 0-5 (0=complete blackout, 5=perfect), or 100 for
            "fully mastered", which skips the curve entirely.
        prior_interval_days: Current interval in days (0 if never reviewed)
        prior_ef: Current ease factor (minimum 1.3, None means 2.5)
        now: Review time in milliseconds

    Returns:
        Dict with interval (days, None for the mastered override),
        ease_factor and next_review (ms).
    """
    if quality == Rating.FULLY_MASTERED:
        return {
            "interval": None,
            "ease_factor": DEFAULT_EASE_FACTOR,
            "next_review": now + MASTERED_HORIZON_DAYS * DAY_MS,
        }

    ease_factor = DEFAULT_EASE_FACTOR if prior_ef is None else prior_ef
    new_ef = ease_factor + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
    new_ef = max(MIN_EASE_FACTOR, new_ef)

    if quality < 3:
        # Forgotten: back to tomorrow
        new_interval = 1
    elif prior_interval_days == 0:
        new_interval = 1
    elif prior_interval_days == 1:
        new_interval = 6
    else:
        new_interval = _round_half_up(prior_interval_days * new_ef)

    return {
        "interval": new_interval,
        "ease_factor": new_ef,
        "next_review": now + new_interval * DAY_MS,
    }


def prior_interval_days(question: Question) -> int:
    """Whole-day gap the question was last scheduled for (0 if never reviewed)."""
    if question.review_count == 0:
        return 0
    return _round_half_up((question.next_review - question.last_review) / DAY_MS)
