"""Submission pipeline for the intake server.

Handles one "create intake" request end to end:

1. Decode the body into a Submission
2. Assign an id and receipt time
3. Persist the record (failures abort the request)
4. Dispatch the webhook notification in the background
5. Emit the system event, bounded in time (failures are logged only)
6. Return the assigned id
"""

import asyncio
import json
import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from .errors import MalformedInput, NotificationError
from .messages import DEFAULT_FOLLOW_UP, build_system_event_text, build_webhook_payload
from .models import IntakeRecord, Submission, SubmissionResult
from .ports import IntakeStorePort, SystemEventPort, WebhookPort

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimestampIdGenerator:
    """Issues millisecond-timestamp ids that never repeat within a process.

    When the clock has not advanced since the last id (or went backwards),
    the previous id plus one is issued instead. Ids from separate processes
    sharing a storage directory can still collide.
    """

    def __init__(self) -> None:
        self._last = 0

    def next_id(self, moment: datetime) -> int:
        candidate = (moment - _EPOCH) // timedelta(milliseconds=1)
        if candidate <= self._last:
            candidate = self._last + 1
        self._last = candidate
        return candidate


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not JSON and could not be stored as such
    raise MalformedInput(f"Invalid JSON: {name} is not a valid value")


def decode_submission(body: bytes) -> Submission:
    """Parse a request body into a Submission.

    Raises:
        MalformedInput: If the body is not UTF-8, not JSON, or not a JSON
            object.
    """
    try:
        data = json.loads(body.decode("utf-8"), parse_constant=_reject_constant)
    except UnicodeDecodeError as e:
        raise MalformedInput(f"Request body is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise MalformedInput(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedInput(
            f"Expected a JSON object, got {type(data).__name__}"
        )
    return Submission(fields=data)


class SubmissionPipeline:
    """Orchestrates persistence and notification of one submission.

    Uses ports but contains no adapter-specific logic.
    """

    def __init__(
        self,
        store: IntakeStorePort,
        webhook: WebhookPort | None,
        system_event: SystemEventPort | None,
        brand_name: str = "Swift Studio",
        follow_up: str = DEFAULT_FOLLOW_UP,
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.store = store
        self.webhook = webhook
        self.system_event = system_event
        self.brand_name = brand_name
        self.follow_up = follow_up
        self.clock = clock
        self.id_generator = TimestampIdGenerator()
        self._webhook_tasks: set[asyncio.Task[None]] = set()

    async def submit(self, body: bytes) -> SubmissionResult:
        """Accept a raw request body.

        Raises:
            MalformedInput: If the body cannot be decoded. Nothing is written.
            PersistenceError: If the record cannot be saved. No notification
                is attempted.
        """
        # 1. Decode
        submission = decode_submission(body)

        # 2. Assign identity
        received_at = self.clock()
        record = IntakeRecord(
            id=self.id_generator.next_id(received_at),
            received_at=received_at,
            submission=submission,
        )

        # 3. Persist (errors propagate to the caller)
        path = await self.store.save(record)

        # 4. Webhook, not awaited
        self._dispatch_webhook(submission)

        # 5. System event, awaited but never fatal
        await self._emit_system_event(submission, path)

        logger.info(
            f"Intake from {submission.get('name') or 'Unknown'} "
            f"({submission.get('business') or '—'}) saved to {path}",
            extra={"intake_id": record.id},
        )
        return SubmissionResult(record_id=record.id, path=path)

    def _dispatch_webhook(self, submission: Submission) -> None:
        if self.webhook is None:
            logger.debug("No webhook configured, skipping relay")
            return

        payload = build_webhook_payload(
            submission,
            rendered_at=self.clock().astimezone(),
            brand_name=self.brand_name,
        )
        task = asyncio.create_task(self._send_webhook(self.webhook, payload))
        self._webhook_tasks.add(task)
        task.add_done_callback(self._webhook_tasks.discard)

    async def _send_webhook(self, webhook: WebhookPort, payload: dict[str, Any]) -> None:
        try:
            await webhook.send(payload)
        except Exception as e:
            # Record is already persisted; the relay is best-effort
            logger.warning(f"Webhook relay failed: {e}", exc_info=True)

    async def _emit_system_event(self, submission: Submission, path: Path) -> None:
        if self.system_event is None:
            return

        text = build_system_event_text(submission, path, follow_up=self.follow_up)
        try:
            await self.system_event.emit(text)
        except NotificationError as e:
            logger.warning(f"System event failed: {e}")
        except Exception as e:
            logger.error(f"Unexpected system event error: {e}", exc_info=True)

    @property
    def pending_webhooks(self) -> int:
        """Number of webhook deliveries still in flight."""
        return len(self._webhook_tasks)

    async def drain(self) -> None:
        """Wait for in-flight webhook deliveries to finish."""
        if self._webhook_tasks:
            await asyncio.gather(*list(self._webhook_tasks), return_exceptions=True)
