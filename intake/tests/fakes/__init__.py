"""Fake implementations of core ports for testing.

- FakeIntakeStorePort: In-memory record storage
- FakeWebhookPort: Captured webhook payloads
- FakeSystemEventPort: Captured system event texts
"""

from .notification import FakeSystemEventPort, FakeWebhookPort
from .store import FakeIntakeStorePort

__all__ = [
    "FakeIntakeStorePort",
    "FakeSystemEventPort",
    "FakeWebhookPort",
]
