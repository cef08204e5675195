"""Progress statistics: daily counts, streaks and difficult words."""
from datetime import date, datetime, timedelta
from typing import Optional

from vocab_tutor.db import get_connection
from vocab_tutor.library import load_items
from vocab_tutor.models import LearningItem
from vocab_tutor.srs import INTERVAL_TABLE


def words_saved_today(db_path: str, today: Optional[date] = None) -> int:
    today = today or date.today()
    start = datetime.combine(today, datetime.min.time())
    end = start + timedelta(days=1)
    conn = get_connection(db_path)
    count = conn.execute(
        "SELECT COUNT(*) FROM learning_items WHERE saved_at >= ? AND saved_at < ?",
        (start.isoformat(), end.isoformat()),
    ).fetchone()[0]
    conn.close()
    return count


def activity_days(db_path: str) -> set[date]:
    """Calendar days on which a word was saved or reviewed."""
    conn = get_connection(db_path)
    rows = conn.execute(
        """SELECT substr(saved_at, 1, 10) AS day FROM learning_items
        UNION
        SELECT substr(reviewed_at, 1, 10) AS day FROM review_results"""
    ).fetchall()
    conn.close()
    return {date.fromisoformat(r["day"]) for r in rows}


def current_streak(db_path: str, today: Optional[date] = None) -> int:
    """Consecutive activity days ending today, or yesterday if today is still empty."""
    today = today or date.today()
    days = activity_days(db_path)
    day = today if today in days else today - timedelta(days=1)
    streak = 0
    while day in days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def longest_streak(db_path: str) -> int:
    days = sorted(activity_days(db_path))
    best = run = 0
    previous = None
    for day in days:
        run = run + 1 if previous and day - previous == timedelta(days=1) else 1
        best = max(best, run)
        previous = day
    return best


def accuracy(item: LearningItem) -> float:
    total = item.correct_count + item.incorrect_count
    if total == 0:
        return 0.5
    return item.correct_count / total


def difficult_words(db_path: str, threshold: float = 0.6, min_reviews: int = 2) -> list[dict]:
    """Items answered correctly less often than the threshold, worst first."""
    results = []
    for item in load_items(db_path):
        if item.correct_count + item.incorrect_count < min_reviews:
            continue
        score = accuracy(item)
        if score < threshold:
            results.append({
                "word": item.word,
                "meaning": item.meaning,
                "accuracy": round(score * 100, 1),
                "incorrect": item.incorrect_count,
                "stage": item.srs_stage,
            })
    return sorted(results, key=lambda r: (r["accuracy"], -r["incorrect"]))


def stage_distribution(db_path: str) -> dict[int, int]:
    counts = {stage: 0 for stage in range(len(INTERVAL_TABLE))}
    for item in load_items(db_path):
        counts[item.srs_stage] += 1
    return counts


def get_study_stats(db_path: str, today: Optional[date] = None) -> dict:
    conn = get_connection(db_path)
    saved = conn.execute("SELECT COUNT(*) FROM learning_items").fetchone()[0]
    favorites = conn.execute("SELECT COUNT(*) FROM learning_items WHERE is_favorite = 1").fetchone()[0]
    row = conn.execute(
        "SELECT COUNT(*) AS t, SUM(CASE WHEN outcome = 'remembered' THEN 1 ELSE 0 END) AS c FROM review_results"
    ).fetchone()
    conn.close()
    retention = round(row["c"] / row["t"] * 100, 1) if row["t"] else 0.0
    return {
        "words_saved": saved,
        "favorites": favorites,
        "saved_today": words_saved_today(db_path, today),
        "reviews": row["t"],
        "retention": retention,
        "current_streak": current_streak(db_path, today),
        "longest_streak": longest_streak(db_path),
    }
