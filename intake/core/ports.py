"""Port interfaces for the intake server.

These abstract base classes define the boundaries between the submission
pipeline and external adapters. Implementations live in the adapters/
package.

Port Interface Categories:

1. **Storage** (core persists through it)
   - IntakeStorePort: Durable storage of intake records

2. **Notification** (core fans out to them after persisting)
   - WebhookPort: Chat webhook relay
   - SystemEventPort: Local system-event command
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from .models import IntakeRecord


class IntakeStorePort(ABC):
    """Port for persisting intake records.

    Implementations must write each record as one complete unit so that a
    reader never observes a partially written record, and must tolerate an
    overwrite of an existing record without corrupting it.
    """

    @abstractmethod
    async def prepare(self) -> None:
        """Create the underlying storage location if it does not exist.

        Idempotent. Called once before the server accepts requests.

        Raises:
            PersistenceError: If the storage location cannot be created.
        """

    @abstractmethod
    async def save(self, record: IntakeRecord) -> Path:
        """Persist a record.

        Args:
            record: The accepted intake record.

        Returns:
            Path of the persisted record.

        Raises:
            PersistenceError: If the record cannot be written.
        """


class WebhookPort(ABC):
    """Port for relaying a notification payload to a chat webhook.

    Delivery is best-effort: implementations log delivery failures instead
    of raising them.
    """

    @abstractmethod
    async def send(self, payload: dict[str, Any]) -> None:
        """Deliver a JSON payload to the configured endpoint."""

    async def close(self) -> None:
        """Release any resources held by the adapter."""


class SystemEventPort(ABC):
    """Port for emitting a local system event with a text summary."""

    @abstractmethod
    async def emit(self, text: str) -> None:
        """Emit a system event.

        Args:
            text: Human-readable summary of the intake.

        Raises:
            NotificationError: If the event could not be emitted (spawn
                failure, timeout, or non-zero exit).
        """
