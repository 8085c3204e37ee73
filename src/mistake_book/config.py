"""Paths and environment-driven configuration."""
import os
from pathlib import Path

DEFAULT_DB_PATH = os.getenv(
    "MISTAKE_BOOK_DB", str(Path.home() / ".mistake_book" / "mistake_book.db")
)
LOG_LEVEL = os.getenv("MISTAKE_BOOK_LOG_LEVEL", "WARNING").upper()

DEFAULT_SESSION_SIZE = 10
REVIEW_LOG_LIMIT = 100
