# tests/test_sm2.py
import pytest

from mistake_book.clock import DAY_MS
from mistake_book.sm2 import compute_schedule, prior_interval_days

NOW = 1_700_000_000_000


def test_first_review_correct():
    """First correct answer: interval=1."""
    result = compute_schedule(quality=5, prior_interval_days=0, prior_ef=2.5, now=NOW)
    assert result["interval"] == 1
    assert result["next_review"] == NOW + DAY_MS
    assert result["ease_factor"] == pytest.approx(2.6)


def test_second_review_correct():
    """Second correct answer: fixed step to 6, not scaled by EF."""
    result = compute_schedule(quality=5, prior_interval_days=1, prior_ef=2.5, now=NOW)
    assert result["interval"] == 6
    assert result["next_review"] == NOW + 6 * DAY_MS


def test_later_review_uses_new_ease_factor():
    """interval = round(prior_interval * new EF)."""
    result = compute_schedule(quality=5, prior_interval_days=6, prior_ef=2.5, now=NOW)
    assert result["interval"] == 16  # round(6 * 2.6)


def test_fuzzy_rating_grows_slowly():
    result = compute_schedule(quality=3, prior_interval_days=10, prior_ef=2.5, now=NOW)
    assert result["ease_factor"] == pytest.approx(2.36)
    assert result["interval"] == 24  # round(10 * 2.36)


def test_interval_rounds_half_up():
    # 5 * 2.5 = 12.5 with quality 4 (EF unchanged)
    result = compute_schedule(quality=4, prior_interval_days=5, prior_ef=2.5, now=NOW)
    assert result["ease_factor"] == pytest.approx(2.5)
    assert result["interval"] == 13


@pytest.mark.parametrize("quality", [0, 1, 2])
@pytest.mark.parametrize("prior", [0, 1, 6, 40])
def test_forgetting_resets_interval(quality, prior):
    result = compute_schedule(quality=quality, prior_interval_days=prior, prior_ef=2.5, now=NOW)
    assert result["interval"] == 1
    assert result["next_review"] == NOW + DAY_MS


@pytest.mark.parametrize("quality", [0, 1, 2, 3, 4, 5])
@pytest.mark.parametrize("prior_ef", [1.3, 1.4, 2.5, 3.1])
def test_ease_factor_floor(quality, prior_ef):
    """Ease factor never drops below 1.3."""
    result = compute_schedule(quality=quality, prior_interval_days=3, prior_ef=prior_ef, now=NOW)
    assert result["ease_factor"] >= 1.3


def test_missing_ease_factor_defaults():
    result = compute_schedule(quality=5, prior_interval_days=0, prior_ef=None, now=NOW)
    assert result["ease_factor"] == pytest.approx(2.6)


def test_fully_mastered_override():
    result = compute_schedule(quality=100, prior_interval_days=30, prior_ef=1.7, now=NOW)
    assert result["ease_factor"] == 2.5
    assert result["interval"] is None
    assert abs(result["next_review"] - NOW - 365 * DAY_MS) <= 1


def test_prior_interval_never_reviewed(make_question):
    q = make_question(review_count=0, last_review=0, next_review=NOW)
    assert prior_interval_days(q) == 0


def test_prior_interval_rounds_day_gap(make_question):
    q = make_question(review_count=2, last_review=NOW, next_review=NOW + 6 * DAY_MS + DAY_MS // 2)
    assert prior_interval_days(q) == 7
    q = make_question(review_count=2, last_review=NOW, next_review=NOW + 6 * DAY_MS + 1000)
    assert prior_interval_days(q) == 6
