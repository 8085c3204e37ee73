import pytest

from mistake_book.db import init_db
from mistake_book.models import Question, QuestionKind, Subject

T0 = 1_700_000_000_000


@pytest.fixture
def tmp_db(tmp_path):
    """Provide an initialized temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_mistake_book.db")
    init_db(db_path)
    return db_path


@pytest.fixture
def make_question():
    """Factory for questions with sensible never-reviewed defaults."""
    counter = iter(range(1, 10_000))

    def _make(**overrides) -> Question:
        n = next(counter)
        fields = dict(
            id=f"q{n}",
            kind=QuestionKind.MISSED_PROBLEM,
            subject=Subject.MATH,
            prompt=f"Question {n}",
            solution=f"Answer {n}",
            created_at=T0 + n,
            next_review=T0,
        )
        fields.update(overrides)
        return Question(**fields)

    return _make
