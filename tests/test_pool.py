# tests/test_pool.py
import random

from mistake_book.models import QuestionKind, Subject
from mistake_book.pool import (
    due_session_label, is_due, random_session_label, select_due_pool, select_random_pool,
)

NOW = 1_700_000_000_000


def test_is_due(make_question):
    assert is_due(make_question(next_review=NOW), NOW)
    assert not is_due(make_question(next_review=NOW + 1), NOW)
    assert not is_due(make_question(next_review=NOW - 1, is_mastered=True), NOW)


def test_due_pool_excludes_future_and_mastered(make_question):
    due = make_question(next_review=NOW - 10)
    future = make_question(next_review=NOW + 10)
    mastered = make_question(next_review=NOW - 10, is_mastered=True)
    pool = select_due_pool([due, future, mastered], NOW, rng=random.Random(1))
    assert pool == [due]


def test_due_pool_filters_subject_and_kind(make_question):
    math_missed = make_question(subject=Subject.MATH)
    math_example = make_question(subject=Subject.MATH, kind=QuestionKind.WORKED_EXAMPLE)
    physics_missed = make_question(subject=Subject.PHYSICS)
    pool = select_due_pool(
        [math_missed, math_example, physics_missed], NOW,
        subject=Subject.MATH, kind=QuestionKind.MISSED_PROBLEM,
    )
    assert pool == [math_missed]


def test_worked_example_mode_ignores_due_date(make_question):
    future_example = make_question(kind=QuestionKind.WORKED_EXAMPLE, next_review=NOW + 10_000)
    mastered_example = make_question(kind=QuestionKind.WORKED_EXAMPLE, is_mastered=True)
    due_missed = make_question()
    pool = select_due_pool(
        [future_example, mastered_example, due_missed], NOW, kind=QuestionKind.WORKED_EXAMPLE,
    )
    assert pool == [future_example]


def test_due_pool_limit_and_shuffle(make_question):
    questions = [make_question() for _ in range(20)]
    pool = select_due_pool(questions, NOW, limit=5, rng=random.Random(42))
    assert len(pool) == 5
    assert len({q.id for q in pool}) == 5
    # same seed, same order
    assert pool == select_due_pool(questions, NOW, limit=5, rng=random.Random(42))


def test_due_pool_leaves_input_order(make_question):
    questions = [make_question() for _ in range(5)]
    before = list(questions)
    select_due_pool(questions, NOW, rng=random.Random(3))
    assert questions == before


def test_random_pool_includes_mastered(make_question):
    mastered = make_question(is_mastered=True, next_review=NOW + 10_000)
    pool = select_random_pool([mastered], 10)
    assert pool == [mastered]


def test_random_pool_count_and_filters(make_question):
    questions = [make_question(subject=Subject.ENGLISH) for _ in range(6)] + [make_question()]
    pool = select_random_pool(questions, 4, subject=Subject.ENGLISH, rng=random.Random(0))
    assert len(pool) == 4
    assert all(q.subject is Subject.ENGLISH for q in pool)


def test_due_labels():
    assert due_session_label(Subject.PHYSICS) == "Physics"
    assert due_session_label(kind=QuestionKind.WORKED_EXAMPLE) == "Worked Example Drill"
    assert due_session_label() == "Mixed Review"


def test_random_labels():
    assert random_session_label(Subject.MATH, QuestionKind.WORKED_EXAMPLE) == "Math - Worked Example Drill"
    assert random_session_label(None, QuestionKind.MISSED_PROBLEM) == "Missed Problem Drill"
    assert random_session_label() == "Random Practice"


def test_random_pool_non_positive_count(make_question):
    questions = [make_question() for _ in range(3)]
    assert select_random_pool(questions, 0) == []
    assert select_random_pool(questions, -2) == []
