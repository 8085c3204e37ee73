"""User settings persisted in the database."""
from mistake_book.config import DEFAULT_SESSION_SIZE
from mistake_book.db import get_connection


def get_setting(db_path: str, key: str, default: str = None) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["value"] if row else default


def set_setting(db_path: str, key: str, value: str) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO user_settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
        (key, value, value),
    )
    conn.commit()
    conn.close()


def get_session_size(db_path: str) -> int:
    """Number of questions drawn for random practice."""
    value = get_setting(db_path, "session_size")
    try:
        size = int(value) if value is not None else DEFAULT_SESSION_SIZE
    except ValueError:
        return DEFAULT_SESSION_SIZE
    return size if size > 0 else DEFAULT_SESSION_SIZE
