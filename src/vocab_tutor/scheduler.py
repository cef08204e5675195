"""Review scheduling: what is due, and which word to show next."""
import logging
import random
from datetime import datetime, time
from typing import Optional

from vocab_tutor.catalog import WordCatalog
from vocab_tutor.models import LearningItem, Outcome, SelectionPolicy, VocabularyEntry
from vocab_tutor.srs import grade

logger = logging.getLogger(__name__)


def start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min)


def day_of_year(moment: datetime) -> int:
    """Zero-based ordinal of the day within its year (1 January is 0)."""
    return moment.timetuple().tm_yday - 1


class Scheduler:
    """One learner's scheduler over an in-memory list of saved items.

    The items are live references handed over by the store; ``grade``
    mutates them and the caller writes them back.
    """

    def __init__(
        self,
        catalog: WordCatalog,
        items: list[LearningItem],
        proficiency_level: int,
        rng: Optional[random.Random] = None,
    ):
        self.catalog = catalog
        self.items = items
        self.proficiency_level = proficiency_level
        self.rng = rng or random.Random()

    def grade(self, item: LearningItem, outcome: Outcome, now: Optional[datetime] = None) -> LearningItem:
        return grade(item, outcome, now)

    def due_items(self, now: Optional[datetime] = None) -> list[LearningItem]:
        """Items due by the start of today, earliest first."""
        if now is None:
            now = datetime.now()
        cutoff = start_of_day(now)
        due = [item for item in self.items if item.next_review_at <= cutoff]
        # sorted() is stable, so equal due times keep insertion order
        return sorted(due, key=lambda item: item.next_review_at)

    def _entry_for(self, item: LearningItem) -> VocabularyEntry:
        return self.catalog.get(item.word) or item.to_entry()

    def _candidates(self) -> list[VocabularyEntry]:
        entries = self.catalog.entries_at_level(self.proficiency_level)
        if not entries:
            logger.debug("No catalog entries at level %s, using full catalog", self.proficiency_level)
            entries = self.catalog.all_entries()
        return entries

    def word_of_the_day(self, now: Optional[datetime] = None) -> Optional[VocabularyEntry]:
        """The new-word pick for a calendar day, stable for every call that day."""
        if now is None:
            now = datetime.now()
        candidates = self._candidates()
        if not candidates:
            return None
        return candidates[day_of_year(now) % len(candidates)]

    def random_new_word(self) -> Optional[VocabularyEntry]:
        """A uniformly sampled new word, preferring ones not yet saved."""
        candidates = self._candidates()
        if not candidates:
            return None
        saved = {item.word for item in self.items}
        unseen = [e for e in candidates if e.text not in saved]
        return self.rng.choice(unseen or candidates)

    def select_next_word(
        self,
        policy: SelectionPolicy = SelectionPolicy.DAILY,
        now: Optional[datetime] = None,
    ) -> Optional[VocabularyEntry]:
        """Pick the word to show: overdue reviews first, then new material."""
        if now is None:
            now = datetime.now()
        due = self.due_items(now)
        if due:
            return self._entry_for(due[0])
        if SelectionPolicy(policy) == SelectionPolicy.DAILY:
            return self.word_of_the_day(now)
        return self.random_new_word()
