"""Choosing which questions go into a review session."""
import random
from typing import Optional

from mistake_book.models import Question, QuestionKind, Subject

MIXED_LABEL = "Mixed Review"
RANDOM_TITLES = {
    QuestionKind.WORKED_EXAMPLE: "Worked Example Drill",
    QuestionKind.MISSED_PROBLEM: "Missed Problem Drill",
    None: "Random Practice",
}


def is_due(question: Question, now: int) -> bool:
    return not question.is_mastered and question.next_review <= now


def select_due_pool(
    questions: list[Question],
    now: int,
    subject: Optional[Subject] = None,
    kind: Optional[QuestionKind] = None,
    limit: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> list[Question]:
    """Shuffled queue of questions to review now.

    Asking for worked examples practises every unmastered example,
    due or not; any other request only returns due questions.
    """
    pool = [q for q in questions if not q.is_mastered]
    if kind is QuestionKind.WORKED_EXAMPLE:
        pool = [q for q in pool if q.kind is QuestionKind.WORKED_EXAMPLE]
    else:
        pool = [q for q in pool if q.next_review <= now]
        if kind is not None:
            pool = [q for q in pool if q.kind is kind]
    if subject is not None:
        pool = [q for q in pool if q.subject is subject]

    (rng or random).shuffle(pool)
    if limit:
        pool = pool[:limit]
    return pool


def select_random_pool(
    questions: list[Question],
    count: int,
    subject: Optional[Subject] = None,
    kind: Optional[QuestionKind] = None,
    rng: Optional[random.Random] = None,
) -> list[Question]:
    """Random practice over every question, mastered ones included."""
    if count <= 0:
        return []
    pool = list(questions)
    if subject is not None:
        pool = [q for q in pool if q.subject is subject]
    if kind is not None:
        pool = [q for q in pool if q.kind is kind]
    (rng or random).shuffle(pool)
    return pool[:count]


def due_session_label(subject: Optional[Subject] = None, kind: Optional[QuestionKind] = None) -> str:
    if subject is not None:
        return subject.value
    if kind is QuestionKind.WORKED_EXAMPLE:
        return RANDOM_TITLES[QuestionKind.WORKED_EXAMPLE]
    return MIXED_LABEL


def random_session_label(subject: Optional[Subject] = None, kind: Optional[QuestionKind] = None) -> str:
    title = RANDOM_TITLES[kind]
    return f"{subject.value} - {title}" if subject is not None else title
