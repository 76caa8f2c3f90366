"""Exceptions raised by thread_fold.

Resolution misses (no thread at point, thread without children) are not
errors: operations return None and leave the view untouched.
"""


class FoldingError(Exception):
    """Base class for thread_fold errors."""


class WrongContextError(FoldingError):
    """A folding command was invoked while the host is not showing a message list."""


class RowSourceError(FoldingError):
    """A row file could not be parsed into Rows."""

    def __init__(self, message: str, entry: int | None = None):
        self.entry = entry
        if entry is not None:
            message = f"entry {entry}: {message}"
        super().__init__(message)
