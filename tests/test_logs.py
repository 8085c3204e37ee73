# tests/test_logs.py
from mistake_book.logs import append_review_log, list_reflections, list_review_logs, save_reflection
from mistake_book.models import ReviewLog


def test_logs_newest_first(tmp_db):
    append_review_log(tmp_db, ReviewLog(timestamp=100, count=3, subject="Math"))
    append_review_log(tmp_db, ReviewLog(timestamp=300, count=1, subject="Math - Worked Example Drill"))
    append_review_log(tmp_db, ReviewLog(timestamp=200, count=2, subject="Mixed Review"))
    assert [log.timestamp for log in list_review_logs(tmp_db)] == [300, 200, 100]
    assert list_review_logs(tmp_db)[0].subject == "Math - Worked Example Drill"


def test_logs_capped_at_100(tmp_db):
    for i in range(105):
        assert append_review_log(tmp_db, ReviewLog(timestamp=i, count=1, subject="Math"))
    logs = list_review_logs(tmp_db, limit=500)
    assert len(logs) == 100
    # the oldest five were evicted
    assert min(log.timestamp for log in logs) == 5


def test_list_logs_limit(tmp_db):
    for i in range(10):
        append_review_log(tmp_db, ReviewLog(timestamp=i, count=1, subject="Math"))
    assert len(list_review_logs(tmp_db, limit=3)) == 3


def test_append_log_failure_returns_false(tmp_path):
    assert append_review_log(str(tmp_path / "bare.db"), ReviewLog(1, 1, "Math")) is False


def test_reflections_upsert_by_date(tmp_db):
    assert save_reflection(tmp_db, "2026-10-18", "Practised integrals") is True
    assert save_reflection(tmp_db, "2026-10-18", "Practised integrals and limits") is True
    save_reflection(tmp_db, "2026-10-17", "Chemistry balancing")
    assert list_reflections(tmp_db) == {
        "2026-10-17": "Chemistry balancing",
        "2026-10-18": "Practised integrals and limits",
    }


def test_blank_reflection_removes_entry(tmp_db):
    save_reflection(tmp_db, "2026-10-18", "Something")
    save_reflection(tmp_db, "2026-10-18", "   ")
    assert list_reflections(tmp_db) == {}
