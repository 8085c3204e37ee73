"""Review log history and daily reflections."""
import logging
import sqlite3

from mistake_book.config import REVIEW_LOG_LIMIT
from mistake_book.db import get_connection
from mistake_book.models import ReviewLog

logger = logging.getLogger(__name__)


def list_review_logs(db_path: str, limit: int = REVIEW_LOG_LIMIT) -> list[ReviewLog]:
    """Most recent review logs, newest first."""
    conn = get_connection(db_path)
    rows = conn.execute(
        "SELECT timestamp, count, subject FROM review_logs ORDER BY timestamp DESC, id DESC LIMIT ?",
        (limit,),
    ).fetchall()
    conn.close()
    return [ReviewLog(timestamp=r["timestamp"], count=r["count"], subject=r["subject"]) for r in rows]


def append_review_log(db_path: str, log: ReviewLog) -> bool:
    """Append a log, evicting the oldest beyond the retention cap."""
    conn = get_connection(db_path)
    try:
        with conn:
            conn.execute(
                "INSERT INTO review_logs (timestamp, count, subject) VALUES (?, ?, ?)",
                (log.timestamp, log.count, log.subject),
            )
            conn.execute(
                """DELETE FROM review_logs WHERE id NOT IN (
                    SELECT id FROM review_logs ORDER BY timestamp DESC, id DESC LIMIT ?
                )""",
                (REVIEW_LOG_LIMIT,),
            )
        return True
    except sqlite3.Error as e:
        logger.error("Failed to append review log: %s", e)
        return False
    finally:
        conn.close()


def list_reflections(db_path: str) -> dict[str, str]:
    """Reflections keyed by ISO date."""
    conn = get_connection(db_path)
    rows = conn.execute("SELECT date, content FROM reflections ORDER BY date").fetchall()
    conn.close()
    return {r["date"]: r["content"] for r in rows}


def save_reflection(db_path: str, date: str, content: str, now: int = 0) -> bool:
    """Upsert the reflection for a date; blank content removes it."""
    conn = get_connection(db_path)
    try:
        with conn:
            if not content.strip():
                conn.execute("DELETE FROM reflections WHERE date = ?", (date,))
            else:
                conn.execute(
                    """INSERT INTO reflections (date, content, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(date) DO UPDATE SET content = excluded.content,
                    updated_at = excluded.updated_at""",
                    (date, content, now),
                )
        return True
    except sqlite3.Error as e:
        logger.error("Failed to save reflection for %s: %s", date, e)
        return False
    finally:
        conn.close()
