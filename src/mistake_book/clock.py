"""Millisecond clock used for all scheduling math."""
import time
from typing import Callable

DAY_MS = 24 * 60 * 60 * 1000

Clock = Callable[[], int]


def system_clock() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)
