"""Exceptions raised by the catalog and the learner's library."""


class VocabTutorError(Exception):
    """Base class for errors surfaced to the CLI."""


class CatalogError(VocabTutorError):
    """The word catalog could not be loaded."""


class ItemNotFoundError(VocabTutorError):
    """A library operation named a word the learner has not saved."""

    def __init__(self, word: str):
        super().__init__(f"Word not in library: {word}")
        self.word = word
