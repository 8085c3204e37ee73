"""Question storage over SQLite.

Every write reports success as a bool; database errors are logged, not raised,
so callers can decide how to compensate.
"""
import json
import logging
import sqlite3
from typing import Optional

from mistake_book.db import get_connection
from mistake_book.models import DEFAULT_EASE_FACTOR, Question, QuestionKind, Subject

logger = logging.getLogger(__name__)

COLUMNS = (
    "id", "kind", "subject", "prompt", "solution", "analysis", "source", "tags",
    "created_at", "review_count", "last_review", "next_review", "mastery_level",
    "ease_factor", "is_mastered", "transformed_from_example",
)


def _question_to_row(q: Question) -> tuple:
    return (
        q.id, q.kind.value, q.subject.value, q.prompt, q.solution, q.analysis, q.source,
        json.dumps(list(q.tags)), q.created_at, q.review_count, q.last_review, q.next_review,
        q.mastery_level, q.ease_factor, int(q.is_mastered), int(q.transformed_from_example),
    )


def _row_to_question(row: sqlite3.Row) -> Question:
    return Question(
        id=row["id"],
        kind=QuestionKind(row["kind"]),
        subject=Subject(row["subject"]),
        prompt=row["prompt"],
        solution=row["solution"],
        analysis=row["analysis"] or "",
        source=row["source"] or "",
        tags=json.loads(row["tags"] or "[]"),
        created_at=row["created_at"],
        review_count=row["review_count"],
        last_review=row["last_review"],
        next_review=row["next_review"],
        mastery_level=row["mastery_level"],
        ease_factor=row["ease_factor"] if row["ease_factor"] is not None else DEFAULT_EASE_FACTOR,
        is_mastered=bool(row["is_mastered"]),
        transformed_from_example=bool(row["transformed_from_example"]),
    )


def list_questions(db_path: str) -> list[Question]:
    """All questions, newest first."""
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM questions ORDER BY created_at DESC, rowid DESC").fetchall()
    conn.close()
    return [_row_to_question(r) for r in rows]


def get_question(db_path: str, question_id: str) -> Optional[Question]:
    conn = get_connection(db_path)
    row = conn.execute("SELECT * FROM questions WHERE id = ?", (question_id,)).fetchone()
    conn.close()
    return _row_to_question(row) if row else None


def create_question(db_path: str, question: Question) -> bool:
    placeholders = ", ".join("?" for _ in COLUMNS)
    conn = get_connection(db_path)
    try:
        conn.execute(
            f"INSERT INTO questions ({', '.join(COLUMNS)}) VALUES ({placeholders})",
            _question_to_row(question),
        )
        conn.commit()
        return True
    except sqlite3.Error as e:
        logger.error("Failed to create question %s: %s", question.id, e)
        return False
    finally:
        conn.close()


def update_question(db_path: str, question: Question) -> bool:
    assignments = ", ".join(f"{c} = ?" for c in COLUMNS[1:])
    conn = get_connection(db_path)
    try:
        cursor = conn.execute(
            f"UPDATE questions SET {assignments} WHERE id = ?",
            _question_to_row(question)[1:] + (question.id,),
        )
        conn.commit()
        if cursor.rowcount == 0:
            logger.error("Failed to update question %s: not found", question.id)
            return False
        return True
    except sqlite3.Error as e:
        logger.error("Failed to update question %s: %s", question.id, e)
        return False
    finally:
        conn.close()


def update_questions(db_path: str, questions: list[Question]) -> bool:
    """Upsert a batch of questions in a single transaction."""
    placeholders = ", ".join("?" for _ in COLUMNS)
    updates = ", ".join(f"{c} = excluded.{c}" for c in COLUMNS[1:])
    conn = get_connection(db_path)
    try:
        with conn:
            conn.executemany(
                f"INSERT INTO questions ({', '.join(COLUMNS)}) VALUES ({placeholders}) "
                f"ON CONFLICT(id) DO UPDATE SET {updates}",
                [_question_to_row(q) for q in questions],
            )
        return True
    except sqlite3.Error as e:
        logger.error("Failed to update %d questions: %s", len(questions), e)
        return False
    finally:
        conn.close()


def delete_question(db_path: str, question_id: str) -> bool:
    conn = get_connection(db_path)
    try:
        cursor = conn.execute("DELETE FROM questions WHERE id = ?", (question_id,))
        conn.commit()
        if cursor.rowcount == 0:
            logger.error("Failed to delete question %s: not found", question_id)
            return False
        return True
    except sqlite3.Error as e:
        logger.error("Failed to delete question %s: %s", question_id, e)
        return False
    finally:
        conn.close()
