# tests/test_srs.py
from datetime import datetime, timedelta

from vocab_tutor.models import LearningItem, Outcome
from vocab_tutor.srs import INTERVAL_TABLE, MAX_STAGE, grade, next_stage

T0 = datetime(2026, 3, 1, 9, 30)


def make_item(stage: int = 0) -> LearningItem:
    return LearningItem(word="把握", saved_at=T0, last_reviewed_at=T0, next_review_at=T0, srs_stage=stage)


def test_interval_table():
    assert INTERVAL_TABLE == (1, 3, 7, 14, 30, 60, 120)
    assert MAX_STAGE == 6


def test_new_item_remembered():
    """Stage 0 remembered -> stage 1, due in 3 days."""
    item = make_item(0)
    grade(item, Outcome.REMEMBERED, now=T0)
    assert item.srs_stage == 1
    assert item.next_review_at == T0 + timedelta(days=3)
    assert item.last_reviewed_at == T0
    assert item.review_count == 1


def test_max_stage_remembered_saturates():
    item = make_item(6)
    grade(item, Outcome.REMEMBERED, now=T0)
    assert item.srs_stage == 6
    assert item.next_review_at == T0 + timedelta(days=120)


def test_forgotten_resets_to_zero():
    item = make_item(4)
    grade(item, Outcome.FORGOTTEN, now=T0)
    assert item.srs_stage == 0
    assert item.next_review_at == T0 + timedelta(days=1)


def test_forgotten_from_max_stage():
    item = make_item(MAX_STAGE)
    grade(item, Outcome.FORGOTTEN, now=T0)
    assert item.srs_stage == 0


def test_repeated_remembered_is_monotonic_and_capped():
    item = make_item(0)
    stages = []
    now = T0
    for _ in range(12):
        grade(item, Outcome.REMEMBERED, now=now)
        stages.append(item.srs_stage)
        now = item.next_review_at
    assert stages == sorted(stages)
    assert max(stages) == MAX_STAGE
    assert item.review_count == 12


def test_interval_matches_table_for_every_stage():
    for stage in range(len(INTERVAL_TABLE)):
        item = make_item(stage)
        grade(item, Outcome.REMEMBERED, now=T0)
        expected = INTERVAL_TABLE[min(stage + 1, MAX_STAGE)]
        assert item.next_review_at - item.last_reviewed_at == timedelta(days=expected)


def test_counters_track_outcomes():
    item = make_item(2)
    grade(item, Outcome.REMEMBERED, now=T0)
    grade(item, Outcome.FORGOTTEN, now=T0)
    grade(item, Outcome.FORGOTTEN, now=T0)
    assert item.correct_count == 1
    assert item.incorrect_count == 2
    assert item.review_count == 3


def test_grade_accepts_outcome_value_string():
    item = make_item(1)
    grade(item, "remembered", now=T0)
    assert item.srs_stage == 2


def test_grade_defaults_to_current_time():
    item = make_item(0)
    before = datetime.now()
    grade(item, Outcome.FORGOTTEN)
    assert item.last_reviewed_at >= before
    assert item.next_review_at == item.last_reviewed_at + timedelta(days=1)


def test_favorite_untouched_by_grading():
    item = make_item(3)
    item.is_favorite = True
    grade(item, Outcome.FORGOTTEN, now=T0)
    assert item.is_favorite is True


def test_next_stage():
    assert next_stage(0, Outcome.REMEMBERED) == 1
    assert next_stage(MAX_STAGE, Outcome.REMEMBERED) == MAX_STAGE
    assert next_stage(5, Outcome.FORGOTTEN) == 0
