"""Applying session results back onto questions, and committing them."""
import logging
from dataclasses import replace

from mistake_book.logs import append_review_log
from mistake_book.models import (
    MAX_MASTERY_LEVEL, Question, QuestionKind, Rating, ReviewLog, SessionResult,
)
from mistake_book.store import update_question, update_questions

logger = logging.getLogger(__name__)

# Auto-mastery needs more than this many earlier reviews
MASTERY_MIN_PRIOR_REVIEWS = 3
FORGOTTEN_QUALITY = 1


def transform_kind(kind: QuestionKind, quality: int) -> tuple[QuestionKind, bool]:
    """Return (new kind, transformed?) for a rating.

    A worked example the learner completely forgot becomes a missed problem.
    """
    if kind is QuestionKind.WORKED_EXAMPLE and quality == FORGOTTEN_QUALITY:
        return QuestionKind.MISSED_PROBLEM, True
    return kind, False


def apply_result(question: Question, result: SessionResult, now: int) -> Question:
    """Return the question updated with one session result."""
    if result.question_id != question.id:
        raise ValueError(f"Result for {result.question_id} applied to question {question.id}")

    common = dict(
        review_count=question.review_count + 1,
        last_review=now,
        next_review=result.next_review,
        ease_factor=result.ease_factor,
    )
    if result.quality == Rating.FULLY_MASTERED:
        return replace(question, is_mastered=True, mastery_level=MAX_MASTERY_LEVEL, **common)

    kind, transformed = transform_kind(question.kind, result.quality)
    if transformed:
        logger.info("Question %s forgotten as a worked example, now a missed problem", question.id)
    return replace(
        question,
        kind=kind,
        transformed_from_example=question.transformed_from_example or transformed,
        is_mastered=result.quality >= 5 and question.review_count > MASTERY_MIN_PRIOR_REVIEWS,
        mastery_level=result.quality,
        **common,
    )


def apply_results(questions: list[Question], results: list[SessionResult], now: int) -> list[Question]:
    """Apply each result to its question, in result order."""
    by_id = {q.id: q for q in questions}
    updated = []
    for result in results:
        if result.question_id not in by_id:
            raise KeyError(result.question_id)
        updated.append(apply_result(by_id[result.question_id], result, now))
    return updated


def mark_mastered(question: Question) -> Question:
    """Manual mastery override; scheduling is left untouched."""
    return replace(question, is_mastered=True, mastery_level=MAX_MASTERY_LEVEL)


def master_question(db_path: str, question: Question) -> bool:
    return update_question(db_path, mark_mastered(question))


def commit_session(
    db_path: str,
    questions: list[Question],
    results: list[SessionResult],
    label: str,
    now: int,
) -> dict:
    """Persist a finished session: one batch update, then one review log.

    The log is only written once the questions are saved, so a failed batch
    leaves no history entry behind. ``saved`` reports whether the reviews were
    stored; ``log_saved`` whether the history entry followed.
    """
    updated = apply_results(questions, results, now)
    log = ReviewLog(timestamp=now, count=len(results), subject=label)
    if not update_questions(db_path, updated):
        logger.error("Session %r was not saved; %d results discarded", label, len(results))
        return {"questions": updated, "log": log, "saved": False, "log_saved": False}

    log_saved = append_review_log(db_path, log)
    if log_saved:
        logger.info("Committed session %r with %d results", label, len(results))
    else:
        logger.warning("Session %r saved without a review log entry", label)
    return {"questions": updated, "log": log, "saved": True, "log_saved": log_saved}
