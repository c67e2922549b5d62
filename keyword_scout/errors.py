"""Exception types raised by Keyword Scout."""


class KeywordScoutError(Exception):
    """Base class for all Keyword Scout errors."""


class RepositoryError(KeywordScoutError):
    """The keyword repository could not answer a read or write."""


class EmptyCategoryError(KeywordScoutError):
    """A category aggregate was requested for a category with no keywords."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"No keywords recorded for category '{category}'")


class InvalidInputError(KeywordScoutError):
    """Raw input rejected at an import or API boundary."""
