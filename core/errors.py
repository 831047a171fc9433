"""
Error kinds surfaced by a dbeer invocation.

Every failure reaching the command line is a ``DBeerError``; the CLI prints
it as a single ``[ERROR]`` line and exits non-successfully.
"""

from typing import Optional


class DBeerError(Exception):
    """Base class for every error raised by dbeer."""
    pass


class ConfigurationError(DBeerError):
    """Raised for unknown border styles, actions or engines."""
    pass


class BackendConnectionError(DBeerError):
    """Raised when the backend is unreachable or rejects the credentials."""
    pass


class DriverError(DBeerError):
    """Raised when the backend rejects a query or command."""
    pass


class ParseError(DBeerError):
    """Raised when a command grammar cannot tokenize its input."""

    def __init__(self, message: str, text: Optional[str] = None):
        super().__init__(message)
        self.text = text


class ValidationError(DBeerError):
    """Raised when a required grammar field is empty or not numeric."""
    pass


class UnsupportedOperation(DBeerError):
    """Raised when a recognized operation is not available for a backend."""
    pass


class ShapeError(DBeerError):
    """Raised when a row does not match the registered columns."""
    pass


class ResultIoError(DBeerError):
    """Raised when a result file cannot be created or written."""
    pass
