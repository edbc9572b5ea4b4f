"""Domain models for the intake server.

All models in this module use only Python standard library types,
keeping the core free of external dependencies.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class Submission:
    """Answers posted by the onboarding form.

    Open-ended: any JSON object is accepted, and the known keys (name,
    business, existingSite, siteUrl, goals, pages, branding, features,
    inspiration, timeline, budget, notes, channel, source) are all optional.
    """

    fields: dict[str, Any] | MappingProxyType[str, Any]

    def __post_init__(self) -> None:
        """Convert fields dict to a read-only proxy over a private copy."""
        if not isinstance(self.fields, MappingProxyType):
            object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    @property
    def name(self) -> Any:
        return self.fields.get("name")

    @property
    def business(self) -> Any:
        return self.fields.get("business")


@dataclass(frozen=True)
class IntakeRecord:
    """A submission as accepted and persisted by the server."""

    id: int
    received_at: datetime
    submission: Submission

    def __post_init__(self) -> None:
        """Validate record invariants on creation."""
        if self.id <= 0:
            raise ValueError(f"id must be positive, got {self.id}")
        if self.received_at.tzinfo is None:
            raise ValueError("received_at must be timezone-aware")

    @property
    def received_at_iso(self) -> str:
        """Receipt time as ISO 8601 UTC with millisecond precision."""
        utc = self.received_at.astimezone(timezone.utc)
        return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def to_dict(self) -> dict[str, Any]:
        """Serializable form: submission fields plus id and receivedAt.

        Server-assigned keys win over submitted keys of the same name.
        """
        data: dict[str, Any] = dict(self.submission.fields)
        data["id"] = self.id
        data["receivedAt"] = self.received_at_iso
        return data


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of an accepted submission."""

    record_id: int
    path: Path


__all__ = ["IntakeRecord", "Submission", "SubmissionResult"]
