"""Data classes for the mistake book domain model."""
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from mistake_book.errors import InvalidQuality

DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
MAX_MASTERY_LEVEL = 5


class QuestionKind(str, Enum):
    WORKED_EXAMPLE = "worked_example"
    MISSED_PROBLEM = "missed_problem"

    @property
    def label(self) -> str:
        return "Worked Example" if self is QuestionKind.WORKED_EXAMPLE else "Missed Problem"


class Subject(str, Enum):
    MATH = "Math"
    PHYSICS = "Physics"
    CHEMISTRY = "Chemistry"
    ENGLISH = "English"
    OTHER = "Other"


@dataclass(frozen=True)
class Rating:
    """A recall rating: graded 0-5, or the fully-mastered override."""
    quality: int

    FULLY_MASTERED = 100

    @classmethod
    def parse(cls, value) -> "Rating":
        if isinstance(value, Rating):
            return value
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidQuality(value)
        if 0 <= value <= 5 or value == cls.FULLY_MASTERED:
            return cls(value)
        raise InvalidQuality(value)

    @property
    def is_full_mastery(self) -> bool:
        return self.quality == self.FULLY_MASTERED


@dataclass
class Question:
    id: str
    kind: QuestionKind
    subject: Subject
    prompt: str
    solution: str
    analysis: str = ""
    source: str = ""
    tags: list[str] = field(default_factory=list)
    created_at: int = 0
    # Scheduling state, timestamps in ms
    review_count: int = 0
    last_review: int = 0
    next_review: int = 0
    mastery_level: int = 0
    ease_factor: float = DEFAULT_EASE_FACTOR
    is_mastered: bool = False
    transformed_from_example: bool = False


@dataclass(frozen=True)
class SessionResult:
    question_id: str
    quality: int
    next_review: int
    ease_factor: float
    interval: Optional[int] = None


@dataclass(frozen=True)
class ReviewLog:
    timestamp: int
    count: int
    subject: str


def new_question(
    prompt: str,
    solution: str,
    kind: QuestionKind,
    subject: Subject,
    now: int,
    analysis: str = "",
    source: str = "",
    tags: Optional[list[str]] = None,
) -> Question:
    """Create a never-reviewed question that is due immediately."""
    return Question(
        id=uuid.uuid4().hex,
        kind=QuestionKind(kind),
        subject=Subject(subject),
        prompt=prompt,
        solution=solution,
        analysis=analysis,
        source=source,
        tags=sorted(set(tags or [])),
        created_at=now,
        next_review=now,
    )
