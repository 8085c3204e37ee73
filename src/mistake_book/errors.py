"""Errors raised at the review-core boundary."""


class TutorError(Exception):
    """Base class for recoverable review errors."""


class InvalidQuality(TutorError, ValueError):
    """A rating outside 0-5 and the fully-mastered sentinel."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid rating {value!r}: expected 0-5 or 100 (fully mastered)")


class OutOfSequenceRating(TutorError):
    """A session action requested in a state that does not allow it."""
