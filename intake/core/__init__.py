"""Core domain logic for the intake server.

This package contains zero external dependencies: label resolution,
message building, port interfaces and the submission pipeline. All
filesystem, network and process access is handled by the adapters package.
"""

from .errors import (
    IntakeError,
    InternalError,
    MalformedInput,
    NotificationError,
    PersistenceError,
)
from .models import IntakeRecord, Submission, SubmissionResult

__all__ = [
    "IntakeError",
    "IntakeRecord",
    "InternalError",
    "MalformedInput",
    "NotificationError",
    "PersistenceError",
    "Submission",
    "SubmissionResult",
]
