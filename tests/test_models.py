"""Tests for data model classes."""
import dataclasses
from datetime import datetime

import pytest

from vocab_tutor.models import LearningItem, Outcome, SelectionPolicy, VocabularyEntry


def test_vocabulary_entry_defaults():
    e = VocabularyEntry(text="城市", pronunciation_hint="chéngshì", meaning="city")
    assert e.example_sentence is None
    assert e.proficiency_level == 0


def test_vocabulary_entry_is_immutable():
    e = VocabularyEntry("城市", "chéngshì", "city", None, 3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        e.meaning = "town"


def test_learning_item_defaults():
    t = datetime(2026, 1, 1)
    item = LearningItem(word="城市", saved_at=t, last_reviewed_at=t, next_review_at=t)
    assert item.id is None
    assert item.srs_stage == 0
    assert item.review_count == 0
    assert item.is_favorite is False
    assert item.correct_count == 0
    assert item.incorrect_count == 0


def test_learning_item_to_entry():
    t = datetime(2026, 1, 1)
    item = LearningItem(
        word="城市", saved_at=t, last_reviewed_at=t, next_review_at=t,
        pronunciation_hint="chéngshì", meaning="city", proficiency_level=3,
    )
    assert item.to_entry() == VocabularyEntry("城市", "chéngshì", "city", None, 3)


def test_enum_values():
    assert Outcome("forgotten") is Outcome.FORGOTTEN
    assert SelectionPolicy("random") is SelectionPolicy.RANDOM
