"""Current-word snapshot for out-of-process widgets.

The widget renderer never talks to the scheduler. It reads these keys
from the shared ``user_settings`` table.
"""
from datetime import datetime
from typing import Optional

from vocab_tutor.models import VocabularyEntry, WidgetSnapshot
from vocab_tutor.prefs import get_setting, set_setting

SNAPSHOT_KEYS = {
    "text": "current_text",
    "pronunciation_hint": "current_pronunciation",
    "meaning": "current_meaning",
    "example_sentence": "current_example",
    "updated_at": "current_updated_at",
}

DEFAULT_SNAPSHOT = WidgetSnapshot(text="学", pronunciation_hint="xué", meaning="to learn")


def save_snapshot(db_path: str, entry: VocabularyEntry, now: Optional[datetime] = None) -> None:
    now = now or datetime.now()
    set_setting(db_path, SNAPSHOT_KEYS["text"], entry.text)
    set_setting(db_path, SNAPSHOT_KEYS["pronunciation_hint"], entry.pronunciation_hint)
    set_setting(db_path, SNAPSHOT_KEYS["meaning"], entry.meaning)
    set_setting(db_path, SNAPSHOT_KEYS["example_sentence"], entry.example_sentence or "")
    set_setting(db_path, SNAPSHOT_KEYS["updated_at"], now.isoformat())


def load_snapshot(db_path: str) -> WidgetSnapshot:
    text = get_setting(db_path, SNAPSHOT_KEYS["text"])
    if text is None:
        return DEFAULT_SNAPSHOT
    return WidgetSnapshot(
        text=text,
        pronunciation_hint=get_setting(db_path, SNAPSHOT_KEYS["pronunciation_hint"], ""),
        meaning=get_setting(db_path, SNAPSHOT_KEYS["meaning"], ""),
        example_sentence=get_setting(db_path, SNAPSHOT_KEYS["example_sentence"]) or None,
        updated_at=get_setting(db_path, SNAPSHOT_KEYS["updated_at"]),
    )


def save_progress(db_path: str, learned_today: int, daily_goal: int) -> None:
    set_setting(db_path, "words_learned_today", str(learned_today))
    set_setting(db_path, "daily_goal", str(daily_goal))


def load_progress(db_path: str) -> tuple[int, int]:
    return (
        int(get_setting(db_path, "words_learned_today", "0")),
        int(get_setting(db_path, "daily_goal", "20")),
    )
