"""Learner preferences and the shared key-value table."""
from vocab_tutor.config import settings
from vocab_tutor.db import get_connection


def get_setting(db_path: str, key: str, default: str = None) -> str | None:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM user_settings WHERE key = ?", (key,)).fetchone()
    conn.close()
    return row["value"] if row else default


def set_setting(db_path: str, key: str, value: str) -> None:
    conn = get_connection(db_path)
    conn.execute(
        "INSERT INTO user_settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=?",
        (key, value, value),
    )
    conn.commit()
    conn.close()


def get_proficiency_level(db_path: str) -> int:
    return int(get_setting(db_path, "proficiency_level", str(settings.learning.proficiency_level)))


def set_proficiency_level(db_path: str, level: int) -> None:
    set_setting(db_path, "proficiency_level", str(int(level)))


def get_daily_limit(db_path: str) -> int:
    return int(get_setting(db_path, "daily_new_word_limit", str(settings.learning.daily_new_word_limit)))


def set_daily_limit(db_path: str, limit: int) -> None:
    if limit < 0:
        raise ValueError("Daily new word limit cannot be negative")
    set_setting(db_path, "daily_new_word_limit", str(int(limit)))
