"""Logging configuration for the CLI."""
import logging
import logging.handlers
from pathlib import Path

from vocab_tutor.config import settings


def setup_logging() -> None:
    """Attach console and optional rotating file handlers to the root logger."""
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.logging.level)
    formatter = logging.Formatter(settings.logging.format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if settings.logging.file:
        Path(settings.logging.file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            settings.logging.file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger(__name__).debug("Logging configured")
