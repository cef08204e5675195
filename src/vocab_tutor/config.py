"""Configuration settings read from the environment."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)

DEFAULT_DB_PATH = str(Path.home() / ".vocab_tutor" / "tutor.db")


@dataclass
class DatabaseSettings:
    path: str = os.getenv("VOCAB_TUTOR_DB", DEFAULT_DB_PATH)


@dataclass
class CatalogSettings:
    # None means the word list bundled with the package
    path: Optional[str] = os.getenv("VOCAB_TUTOR_CATALOG") or None


@dataclass
class LoggingSettings:
    level: str = os.getenv("LOG_LEVEL", "WARNING")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: Optional[str] = os.getenv("LOG_FILE") or None


@dataclass
class LearningSettings:
    proficiency_level: int = int(os.getenv("DEFAULT_PROFICIENCY_LEVEL", "5"))
    daily_new_word_limit: int = int(os.getenv("DAILY_NEW_WORD_LIMIT", "5"))


@dataclass
class Settings:
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    catalog: CatalogSettings = field(default_factory=CatalogSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    learning: LearningSettings = field(default_factory=LearningSettings)


settings = Settings()
