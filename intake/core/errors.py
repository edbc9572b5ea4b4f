"""Intake exception hierarchy.

Failures before persistence abort the request; failures after it are
logged and swallowed by the pipeline.
"""


class IntakeError(Exception):
    """Base exception for all intake failures."""


class MalformedInput(IntakeError):
    """Raised when a submission body is not a UTF-8 JSON object."""


class PersistenceError(IntakeError):
    """Raised when an intake record cannot be written to storage."""


class NotificationError(IntakeError):
    """Raised by notifier adapters when a notification cannot be delivered."""


class InternalError(IntakeError):
    """Raised when a server-side resource such as the form file is unreadable."""


__all__ = [
    "IntakeError",
    "InternalError",
    "MalformedInput",
    "NotificationError",
    "PersistenceError",
]
