"""Exception hierarchy shared by the client, session and duration layers.

``str(exc)`` is always a short message fit for showing to the user; the
underlying cause (``requests`` / ``jira`` exception) stays chained on
``__cause__`` for logs.
"""

from __future__ import annotations


class WorklogAppError(Exception):
    """Base class for every error raised by the worklog core."""


class DurationError(WorklogAppError, ValueError):
    pass


class EmptyInput(DurationError):
    def __init__(self, message: str = "Time string is empty"):
        super().__init__(message)


class InvalidFormat(DurationError):
    def __init__(
        self,
        message: str = "Invalid time format. Use 'h' for hours, 'm' for minutes, 'd' for days",
    ):
        super().__init__(message)


class TransportError(WorklogAppError):
    """Network, DNS or TLS failure below the HTTP layer."""


class RemoteError(WorklogAppError):
    """Jira answered with a non-2xx status."""

    def __init__(self, status_code: int | None, text: str = ""):
        self.status_code = status_code
        self.text = text
        super().__init__(f"JIRA API error: {status_code}")


class DecodeError(WorklogAppError):
    """Response body was not the JSON shape we expected."""


class NotConnected(WorklogAppError):
    def __init__(self, message: str = "Not connected to JIRA"):
        super().__init__(message)


class ConnectionFailed(WorklogAppError):
    def __init__(self, message: str = "Failed to connect to JIRA"):
        super().__init__(message)


class LockError(WorklogAppError):
    """Session cell could not be locked. Treat as fatal."""
