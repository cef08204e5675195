"""Static word catalog grouped by proficiency level."""
import csv
import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from vocab_tutor.errors import CatalogError
from vocab_tutor.models import VocabularyEntry

logger = logging.getLogger(__name__)

CONTENT_DIR = Path(__file__).parent / "content"
DEFAULT_CATALOG_PATH = CONTENT_DIR / "words.json"

REQUIRED_FIELDS = ("text", "pronunciation_hint", "meaning", "proficiency_level")


class WordCatalog:
    """Read-only collection of vocabulary entries, keyed by text."""

    def __init__(self, entries: Iterable[VocabularyEntry]):
        self._entries: list[VocabularyEntry] = []
        self._by_text: dict[str, VocabularyEntry] = {}
        for entry in entries:
            if entry.text in self._by_text:
                logger.warning("Duplicate catalog entry ignored: %s", entry.text)
                continue
            self._entries.append(entry)
            self._by_text[entry.text] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, text: str) -> bool:
        return text in self._by_text

    def all_entries(self) -> list[VocabularyEntry]:
        return list(self._entries)

    def entries_at_level(self, level: int) -> list[VocabularyEntry]:
        return [e for e in self._entries if e.proficiency_level == level]

    def get(self, text: str) -> Optional[VocabularyEntry]:
        return self._by_text.get(text)

    def levels(self) -> list[int]:
        return sorted({e.proficiency_level for e in self._entries})


def _entry_from_record(record: dict) -> VocabularyEntry:
    if not isinstance(record, dict):
        raise CatalogError(f"Catalog entry {record!r} is not a mapping")
    missing = [f for f in REQUIRED_FIELDS if record.get(f) in (None, "")]
    if missing:
        raise CatalogError(f"Catalog entry {record!r} is missing {', '.join(missing)}")
    try:
        level = int(record["proficiency_level"])
    except (TypeError, ValueError) as e:
        raise CatalogError(f"Bad proficiency level in {record!r}") from e
    return VocabularyEntry(
        text=str(record["text"]).strip(),
        pronunciation_hint=str(record["pronunciation_hint"]).strip(),
        meaning=str(record["meaning"]).strip(),
        example_sentence=record.get("example_sentence") or None,
        proficiency_level=level,
    )


def read_records(path: Path) -> list[dict]:
    """Read raw word records from a .json, .yaml/.yml or .csv word list."""
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".json":
        data = json.loads(text)
    elif suffix in (".yaml", ".yml"):
        import yaml
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise CatalogError(f"Malformed word list {path.name}: {e}") from e
    elif suffix == ".csv":
        return list(csv.DictReader(text.splitlines()))
    else:
        raise CatalogError(f"Unsupported word list format: {path.name}")
    if isinstance(data, dict):
        data = data.get("words", [])
    if not isinstance(data, list):
        raise CatalogError(f"Word list {path.name} must contain a list of words")
    return data


def load_catalog(path: Optional[str] = None) -> WordCatalog:
    """Load the catalog from a word list file (bundled list by default)."""
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        records = read_records(catalog_path)
    except OSError as e:
        raise CatalogError(f"Cannot read word list {catalog_path}: {e}") from e
    except ValueError as e:
        raise CatalogError(f"Malformed word list {catalog_path}: {e}") from e
    catalog = WordCatalog(_entry_from_record(r) for r in records)
    logger.info("Loaded %d catalog entries from %s", len(catalog), catalog_path)
    return catalog
