"""The learner's saved words and their review state."""
import logging
import sqlite3
from datetime import datetime
from typing import Optional

from vocab_tutor.db import get_connection
from vocab_tutor.errors import ItemNotFoundError
from vocab_tutor.models import LearningItem, Outcome, ReviewResult, VocabularyEntry
from vocab_tutor.srs import grade

logger = logging.getLogger(__name__)


def _row_to_item(row: sqlite3.Row) -> LearningItem:
    return LearningItem(
        id=row["id"],
        word=row["word"],
        pronunciation_hint=row["pronunciation_hint"],
        meaning=row["meaning"],
        example_sentence=row["example_sentence"],
        proficiency_level=row["proficiency_level"],
        srs_stage=row["srs_stage"],
        review_count=row["review_count"],
        correct_count=row["correct_count"],
        incorrect_count=row["incorrect_count"],
        is_favorite=bool(row["is_favorite"]),
        saved_at=datetime.fromisoformat(row["saved_at"]),
        last_reviewed_at=datetime.fromisoformat(row["last_reviewed_at"]),
        next_review_at=datetime.fromisoformat(row["next_review_at"]),
    )


def get_item(db_path: str, word: str) -> Optional[LearningItem]:
    conn = get_connection(db_path)
    row = conn.execute("SELECT * FROM learning_items WHERE word = ?", (word,)).fetchone()
    conn.close()
    return _row_to_item(row) if row else None


def is_saved(db_path: str, word: str) -> bool:
    return get_item(db_path, word) is not None


def load_items(db_path: str) -> list[LearningItem]:
    """All saved items in the order they were saved."""
    conn = get_connection(db_path)
    rows = conn.execute("SELECT * FROM learning_items ORDER BY id").fetchall()
    conn.close()
    return [_row_to_item(r) for r in rows]


def save_word(db_path: str, entry: VocabularyEntry, now: Optional[datetime] = None) -> LearningItem:
    """Save a catalog word to the library. Saving a word twice is a no-op."""
    if now is None:
        now = datetime.now()
    stamp = now.isoformat()
    conn = get_connection(db_path)
    cursor = conn.execute(
        """INSERT OR IGNORE INTO learning_items
        (word, pronunciation_hint, meaning, example_sentence, proficiency_level,
         saved_at, last_reviewed_at, next_review_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
        (entry.text, entry.pronunciation_hint, entry.meaning, entry.example_sentence,
         entry.proficiency_level, stamp, stamp, stamp),
    )
    conn.commit()
    row = conn.execute("SELECT * FROM learning_items WHERE word = ?", (entry.text,)).fetchone()
    conn.close()
    if cursor.rowcount:
        logger.info("Saved %s to library", entry.text)
    else:
        logger.debug("%s already saved", entry.text)
    return _row_to_item(row)


def delete_word(db_path: str, word: str) -> None:
    conn = get_connection(db_path)
    cursor = conn.execute("DELETE FROM learning_items WHERE word = ?", (word,))
    conn.commit()
    conn.close()
    if not cursor.rowcount:
        raise ItemNotFoundError(word)
    logger.info("Deleted %s from library", word)


def toggle_favorite(db_path: str, word: str) -> bool:
    """Flip the favorite flag and return its new value."""
    conn = get_connection(db_path)
    row = conn.execute("SELECT is_favorite FROM learning_items WHERE word = ?", (word,)).fetchone()
    if row is None:
        conn.close()
        raise ItemNotFoundError(word)
    value = not row["is_favorite"]
    conn.execute("UPDATE learning_items SET is_favorite = ? WHERE word = ?", (int(value), word))
    conn.commit()
    conn.close()
    return value


def _write_item(conn: sqlite3.Connection, item: LearningItem) -> None:
    cursor = conn.execute(
        """UPDATE learning_items SET srs_stage=?, review_count=?, correct_count=?,
        incorrect_count=?, is_favorite=?, last_reviewed_at=?, next_review_at=?
        WHERE word=?""",
        (item.srs_stage, item.review_count, item.correct_count, item.incorrect_count,
         int(item.is_favorite), item.last_reviewed_at.isoformat(),
         item.next_review_at.isoformat(), item.word),
    )
    if not cursor.rowcount:
        raise ItemNotFoundError(item.word)


def update_item(db_path: str, item: LearningItem) -> None:
    """Write back an item mutated in memory."""
    conn = get_connection(db_path)
    try:
        _write_item(conn, item)
        conn.commit()
    finally:
        conn.close()


def record_review(
    db_path: str,
    item: LearningItem,
    outcome: Outcome,
    now: Optional[datetime] = None,
) -> LearningItem:
    """Grade an item, persist it and log the review, in one transaction."""
    if now is None:
        now = datetime.now()
    grade(item, outcome, now)
    conn = get_connection(db_path)
    try:
        _write_item(conn, item)
        conn.execute(
            """INSERT INTO review_results (item_id, outcome, reviewed_at)
            SELECT id, ?, ? FROM learning_items WHERE word = ?""",
            (Outcome(outcome).value, now.isoformat(), item.word),
        )
        conn.commit()
    finally:
        conn.close()
    logger.info("Reviewed %s: %s, next review %s", item.word, Outcome(outcome).value, item.next_review_at.date())
    return item


def search_items(db_path: str, query: str) -> list[LearningItem]:
    """Saved items whose text, pronunciation or meaning contains the query."""
    needle = query.strip().lower()
    items = load_items(db_path)
    if not needle:
        return items
    return [
        i for i in items
        if needle in i.word.lower()
        or needle in i.pronunciation_hint.lower()
        or needle in i.meaning.lower()
    ]


def favorite_items(db_path: str) -> list[LearningItem]:
    return [i for i in load_items(db_path) if i.is_favorite]


def reset_progress(db_path: str, now: Optional[datetime] = None) -> None:
    """Put every saved word back to stage 0, due today, and clear the review history."""
    if now is None:
        now = datetime.now()
    stamp = datetime.combine(now.date(), datetime.min.time()).isoformat()
    conn = get_connection(db_path)
    conn.execute(
        """UPDATE learning_items SET srs_stage=0, review_count=0, correct_count=0,
        incorrect_count=0, last_reviewed_at=?, next_review_at=?""",
        (stamp, stamp),
    )
    conn.execute("DELETE FROM review_results")
    conn.commit()
    conn.close()
    logger.info("Review progress reset")


def review_history(db_path: str, word: str) -> list[ReviewResult]:
    """Grading events for one word, oldest first."""
    conn = get_connection(db_path)
    rows = conn.execute(
        """SELECT r.id, i.word, r.outcome, r.reviewed_at
        FROM review_results r JOIN learning_items i ON r.item_id = i.id
        WHERE i.word = ? ORDER BY r.id""",
        (word,),
    ).fetchall()
    conn.close()
    return [
        ReviewResult(
            id=r["id"],
            word=r["word"],
            outcome=Outcome(r["outcome"]),
            reviewed_at=datetime.fromisoformat(r["reviewed_at"]),
        )
        for r in rows
    ]
