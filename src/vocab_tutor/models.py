"""Data classes for the vocabulary domain model."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Outcome(str, Enum):
    REMEMBERED = "remembered"
    FORGOTTEN = "forgotten"


class SelectionPolicy(str, Enum):
    """How a new word is picked when nothing is due."""

    DAILY = "daily"    # stable for a calendar day (widget, word of the day)
    RANDOM = "random"  # uniform, for practice sessions


@dataclass(frozen=True)
class VocabularyEntry:
    text: str
    pronunciation_hint: str
    meaning: str
    example_sentence: Optional[str] = None
    proficiency_level: int = 0


@dataclass
class LearningItem:
    word: str  # VocabularyEntry.text
    saved_at: datetime
    last_reviewed_at: datetime
    next_review_at: datetime
    id: Optional[int] = None
    srs_stage: int = 0
    review_count: int = 0
    is_favorite: bool = False
    correct_count: int = 0
    incorrect_count: int = 0
    # Copied from the catalog on save so the library survives catalog changes
    pronunciation_hint: str = ""
    meaning: str = ""
    example_sentence: Optional[str] = None
    proficiency_level: int = 0

    def to_entry(self) -> VocabularyEntry:
        return VocabularyEntry(
            text=self.word,
            pronunciation_hint=self.pronunciation_hint,
            meaning=self.meaning,
            example_sentence=self.example_sentence,
            proficiency_level=self.proficiency_level,
        )


@dataclass
class ReviewResult:
    id: int
    word: str
    outcome: Outcome
    reviewed_at: datetime


@dataclass
class WidgetSnapshot:
    text: str
    pronunciation_hint: str
    meaning: str
    example_sentence: Optional[str] = None
    updated_at: Optional[str] = None
