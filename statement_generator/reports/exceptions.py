class StatementError(Exception):
    """Base class for statement generation errors."""
    pass


class NotFoundError(StatementError):
    """Raised when no spreadsheet or metadata record is available."""
    pass


class MalformedInputError(StatementError):
    """Raised when a spreadsheet or metadata record lacks the expected structure."""
    pass


class StatementIOError(StatementError, OSError):
    """Raised when persisted files or the output stream cannot be read or written."""
    pass
