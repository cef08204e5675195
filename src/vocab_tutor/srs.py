"""Fixed-interval spaced repetition grading."""
import logging
from datetime import datetime, timedelta
from typing import Optional

from vocab_tutor.models import LearningItem, Outcome

logger = logging.getLogger(__name__)

# Days until the next review, indexed by stage
INTERVAL_TABLE = (1, 3, 7, 14, 30, 60, 120)
MAX_STAGE = len(INTERVAL_TABLE) - 1


def next_stage(stage: int, outcome: Outcome) -> int:
    """Return the stage after a review.

    Remembered advances one stage and saturates at MAX_STAGE; forgotten
    always drops back to stage 0.
    """
    if outcome == Outcome.REMEMBERED:
        return min(stage + 1, MAX_STAGE)
    return 0


def interval_for(stage: int) -> timedelta:
    return timedelta(days=INTERVAL_TABLE[stage])


def grade(item: LearningItem, outcome: Outcome, now: Optional[datetime] = None) -> LearningItem:
    """Apply a review outcome to an item in place.

    Args:
        item: The learner's item. The caller persists it afterwards.
        outcome: Outcome.REMEMBERED or Outcome.FORGOTTEN.
        now: Review time; sampled once from the clock when omitted.

    Returns:
        The same item, mutated.
    """
    if now is None:
        now = datetime.now()
    outcome = Outcome(outcome)

    item.review_count += 1
    item.last_reviewed_at = now
    item.srs_stage = next_stage(item.srs_stage, outcome)
    item.next_review_at = now + interval_for(item.srs_stage)
    if outcome == Outcome.REMEMBERED:
        item.correct_count += 1
    else:
        item.incorrect_count += 1

    logger.debug(
        "Graded %s as %s: stage=%d next=%s",
        item.word, outcome.value, item.srs_stage, item.next_review_at.isoformat(),
    )
    return item
