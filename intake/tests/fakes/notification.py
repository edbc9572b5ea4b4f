"""Fake notification port implementations for testing."""

import asyncio
from typing import Any

from intake.core.errors import NotificationError
from intake.core.ports import SystemEventPort, WebhookPort


class FakeWebhookPort(WebhookPort):
    """Captures webhook payloads for test assertions.

    ``release`` gates delivery so tests can observe that the caller did not
    wait for it.
    """

    def __init__(self):
        self.payloads: list[dict[str, Any]] = []
        self.send_call_count = 0
        self.closed = False
        self.should_fail: bool = False
        self.release = asyncio.Event()
        self.release.set()

    async def send(self, payload: dict[str, Any]) -> None:
        self.send_call_count += 1
        await self.release.wait()
        if self.should_fail:
            raise RuntimeError("connection refused")
        self.payloads.append(payload)

    async def close(self) -> None:
        self.closed = True

    def hold(self) -> None:
        """Block deliveries until release.set() is called."""
        self.release.clear()


class FakeSystemEventPort(SystemEventPort):
    """Captures system event texts for test assertions.

    ``release`` gates completion so tests can hold a request open after
    its record was persisted.
    """

    def __init__(self):
        self.texts: list[str] = []
        self.emit_call_count = 0
        self.error: Exception | None = None
        self.release = asyncio.Event()
        self.release.set()

    async def emit(self, text: str) -> None:
        self.emit_call_count += 1
        await self.release.wait()
        if self.error is not None:
            raise self.error
        self.texts.append(text)

    def set_should_fail(self, message: str = "openclaw timed out after 5 seconds") -> None:
        """Configure the adapter to fail with a NotificationError."""
        self.error = NotificationError(message)

    def hold(self) -> None:
        """Block emits until release.set() is called."""
        self.release.clear()
