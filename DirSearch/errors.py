"""
Exceptions raised by DirSearch.

Per-document errors (DocumentError and subclasses) are recovered by the index
builder, which skips the document. All other errors are fatal for the command
that raised them.
"""


class DirSearchError(Exception):
    """Base class for all DirSearch errors."""


class EnumerationError(DirSearchError):
    """The document directory could not be listed."""


class DocumentError(DirSearchError):
    """A single document could not be turned into text."""

    def __init__(self, path, message):
        super().__init__(f"{path}: {message}")
        self.path = path


class UnsupportedFormatError(DocumentError):
    """No extractor is registered for the document's file extension."""


class DocumentReadError(DocumentError):
    """The document could not be opened, decoded or parsed."""


class PersistenceError(DirSearchError):
    """The index file could not be written, opened or parsed."""


class ConfigError(DirSearchError):
    """The configuration file could not be read."""
