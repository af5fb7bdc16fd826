"""Custom exception hierarchy for dictionary-editor."""


class DictionaryEditorError(Exception):
    """Base exception for all dictionary-editor errors."""


class ValidationError(DictionaryEditorError):
    """Rejected mutation (last example of a definition, bad letter)."""


class IndexOutOfRangeError(DictionaryEditorError, IndexError):
    """Definition or example index outside the current sequence."""


class PermissionDeniedError(DictionaryEditorError):
    """The current user lacks the right to perform a mutation."""


class EntityNotFoundError(DictionaryEditorError):
    """Entry doesn't exist in the dictionary."""


class PersistenceError(DictionaryEditorError):
    """Saving an entry to the remote store failed."""


class ParseError(DictionaryEditorError):
    """Malformed word or change request data."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        super().__init__(message)


class ConfigError(DictionaryEditorError):
    """Invalid editor settings."""
