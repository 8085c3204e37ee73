"""Database initialization and connection management."""
import sqlite3
from pathlib import Path

from mistake_book.config import DEFAULT_DB_PATH

SCHEMA = """
CREATE TABLE IF NOT EXISTS questions (
    id TEXT PRIMARY KEY,
    kind TEXT NOT NULL,
    subject TEXT NOT NULL,
    prompt TEXT NOT NULL,
    solution TEXT NOT NULL,
    analysis TEXT DEFAULT '',
    source TEXT DEFAULT '',
    tags TEXT DEFAULT '[]',
    created_at INTEGER NOT NULL,
    review_count INTEGER DEFAULT 0,
    last_review INTEGER DEFAULT 0,
    next_review INTEGER NOT NULL,
    mastery_level INTEGER DEFAULT 0,
    ease_factor REAL DEFAULT 2.5,
    is_mastered INTEGER DEFAULT 0,
    transformed_from_example INTEGER DEFAULT 0
);

CREATE INDEX IF NOT EXISTS idx_questions_next_review ON questions(next_review);

CREATE TABLE IF NOT EXISTS review_logs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp INTEGER NOT NULL,
    count INTEGER NOT NULL,
    subject TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS reflections (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date TEXT NOT NULL UNIQUE,
    content TEXT NOT NULL,
    updated_at INTEGER
);

CREATE TABLE IF NOT EXISTS user_settings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    key TEXT NOT NULL UNIQUE,
    value TEXT
);
"""


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory and foreign keys enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating all tables if they don't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()
