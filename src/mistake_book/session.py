"""Review session state machine.

A session walks a fixed queue one question at a time:
present -> reveal -> rate -> next question, until the queue is exhausted.
Scheduling is computed as each rating lands, but nothing is persisted here;
the collected results are handed back once, when the session finishes.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from mistake_book.clock import Clock, system_clock
from mistake_book.errors import OutOfSequenceRating
from mistake_book.models import Question, Rating, SessionResult
from mistake_book.sm2 import compute_schedule, prior_interval_days


class SessionState(str, Enum):
    PRESENTING = "presenting"
    REVEALED = "revealed"
    FINISHED = "finished"
    EMPTY = "empty"  # nothing was due; distinct from a completed session


@dataclass(frozen=True)
class RateOutcome:
    done: bool
    next_question: Optional[Question]


class ReviewSession:
    def __init__(
        self,
        queue: Sequence[Question],
        label: str,
        clock: Clock = system_clock,
        on_complete: Optional[Callable[[list[SessionResult]], None]] = None,
    ):
        self.queue = list(queue)
        self.label = label
        self.clock = clock
        self.on_complete = on_complete
        self.index = 0
        self._results: list[SessionResult] = []
        self.state = SessionState.PRESENTING if self.queue else SessionState.EMPTY

    @property
    def done(self) -> bool:
        return self.state in (SessionState.FINISHED, SessionState.EMPTY)

    @property
    def current(self) -> Optional[Question]:
        if self.done:
            return None
        return self.queue[self.index]

    @property
    def progress(self) -> tuple[int, int]:
        """(1-based position of the current question, queue length)."""
        if self.done:
            return len(self.queue), len(self.queue)
        return self.index + 1, len(self.queue)

    @property
    def results(self) -> list[SessionResult]:
        if not self.done:
            raise OutOfSequenceRating("Results are only available once the session has finished")
        return list(self._results)

    def reveal(self) -> Question:
        """Expose the current question's solution."""
        if self.done:
            raise OutOfSequenceRating(f"Cannot reveal: session is {self.state.value}")
        self.state = SessionState.REVEALED
        return self.queue[self.index]

    def rate(self, quality) -> RateOutcome:
        """Record a rating for the revealed question and advance."""
        rating = Rating.parse(quality)
        if self.state is not SessionState.REVEALED:
            raise OutOfSequenceRating(
                f"Cannot rate while session is {self.state.value}; reveal the solution first"
            )

        question = self.queue[self.index]
        schedule = compute_schedule(
            rating.quality,
            prior_interval_days(question),
            question.ease_factor,
            self.clock(),
        )
        self._results.append(SessionResult(
            question_id=question.id,
            quality=rating.quality,
            next_review=schedule["next_review"],
            ease_factor=schedule["ease_factor"],
            interval=schedule["interval"],
        ))

        if self.index < len(self.queue) - 1:
            self.index += 1
            self.state = SessionState.PRESENTING
            return RateOutcome(done=False, next_question=self.queue[self.index])

        self.state = SessionState.FINISHED
        if self.on_complete is not None:
            self.on_complete(list(self._results))
        return RateOutcome(done=True, next_question=None)


def start_session(
    queue: Sequence[Question],
    label: str,
    clock: Clock = system_clock,
    on_complete: Optional[Callable[[list[SessionResult]], None]] = None,
) -> ReviewSession:
    return ReviewSession(queue, label, clock=clock, on_complete=on_complete)
