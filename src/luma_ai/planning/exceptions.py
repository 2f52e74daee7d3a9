"""Custom exceptions for planning functionality."""


class PlanningError(Exception):
    """Base exception for planning errors."""

    pass


class CompletionBackendError(PlanningError):
    """Exception raised when the AI completion backend fails."""

    pass


class ResponseParseError(PlanningError):
    """Exception raised when an AI completion cannot be parsed as JSON."""

    pass


class InvalidStructureError(PlanningError):
    """Exception raised when parsed AI output is not a valid task list."""

    pass


class DatabaseError(PlanningError):
    """Exception raised for session storage errors."""

    pass


class SessionNotFoundError(DatabaseError):
    """Exception raised when a stored planning session is not found."""

    pass
