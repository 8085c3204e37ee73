"""Progress statistics for the dashboard."""
from datetime import date, datetime, timedelta

from mistake_book.logs import list_review_logs
from mistake_book.models import Subject
from mistake_book.pool import is_due
from mistake_book.store import list_questions


def _local_date(ms: int) -> date:
    return datetime.fromtimestamp(ms / 1000).date()


def _streak_days(log_dates: set[date], today: date) -> int:
    day = today if today in log_dates else today - timedelta(days=1)
    streak = 0
    while day in log_dates:
        streak += 1
        day -= timedelta(days=1)
    return streak


def get_review_stats(db_path: str, now: int) -> dict:
    questions = list_questions(db_path)
    logs = list_review_logs(db_path)
    return {
        "total_questions": len(questions),
        "mastered_count": sum(1 for q in questions if q.is_mastered),
        "due_count": sum(1 for q in questions if is_due(q, now)),
        "streak_days": _streak_days({_local_date(log.timestamp) for log in logs}, _local_date(now)),
    }


def get_due_by_subject(db_path: str, now: int) -> dict[Subject, int]:
    counts = {s: 0 for s in Subject}
    for q in list_questions(db_path):
        if is_due(q, now):
            counts[q.subject] += 1
    return counts


def get_subject_stats(db_path: str, now: int) -> list[dict]:
    questions = list_questions(db_path)
    results = []
    for s in Subject:
        subset = [q for q in questions if q.subject is s]
        mastery_avg = sum(q.mastery_level for q in subset) / len(subset) if subset else 0.0
        results.append({
            "subject": s,
            "due": sum(1 for q in subset if is_due(q, now)),
            "total": len(subset),
            "mastery_avg": round(mastery_avg, 1),
        })
    return results


def get_mastery_distribution(db_path: str) -> dict[str, int]:
    dist = {"new": 0, "familiar": 0, "strong": 0, "mastered": 0}
    for q in list_questions(db_path):
        if q.is_mastered:
            dist["mastered"] += 1
        elif q.mastery_level >= 4:
            dist["strong"] += 1
        elif q.mastery_level >= 2:
            dist["familiar"] += 1
        else:
            dist["new"] += 1
    return dist


def get_daily_review_counts(db_path: str, now: int, days: int = 7) -> list[tuple[date, int]]:
    """Items reviewed per day, oldest day first, ending today."""
    today = _local_date(now)
    counts = {today - timedelta(days=i): 0 for i in range(days)}
    for log in list_review_logs(db_path):
        day = _local_date(log.timestamp)
        if day in counts:
            counts[day] += log.count
    return sorted(counts.items())
