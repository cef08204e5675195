import pytest

from vocab_tutor.catalog import WordCatalog
from vocab_tutor.models import VocabularyEntry


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_tutor.db")
    return db_path


@pytest.fixture
def catalog():
    """Small catalog: two level-3 words, three level-5 words, nothing at level 4."""
    return WordCatalog([
        VocabularyEntry("城市", "chéngshì", "city", "上海是中国最大的城市。", 3),
        VocabularyEntry("帮助", "bāngzhù", "help, assist", None, 3),
        VocabularyEntry("爱惜", "àixī", "cherish, treasure", None, 5),
        VocabularyEntry("安慰", "ānwèi", "comfort, console", None, 5),
        VocabularyEntry("把握", "bǎwò", "grasp, seize", None, 5),
    ])
