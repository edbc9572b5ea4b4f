"""Notification messages derived from a submission.

Both builders are pure: they take everything they render as arguments so
the pipeline controls the clock and the record path.
"""

from datetime import datetime
from pathlib import Path
from typing import Any

from .labels import PLACEHOLDER, display, label, label_list
from .models import Submission

EMBED_COLOR = 0x2563EB

DEFAULT_FOLLOW_UP = (
    "Read the file, follow up with the client to clarify anything unclear, "
    "then send a requirements summary."
)


def _field(name: str, value: str, inline: bool = False) -> dict[str, Any]:
    entry: dict[str, Any] = {"name": name, "value": value}
    if inline:
        entry["inline"] = True
    return entry


def format_footer_time(moment: datetime) -> str:
    """Format a footer timestamp like ``10/19/2026, 3:04:05 PM``."""
    hour = moment.hour % 12 or 12
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment:%M:%S} {moment:%p}"
    )


def build_webhook_payload(
    submission: Submission,
    rendered_at: datetime,
    brand_name: str = "Swift Studio",
) -> dict[str, Any]:
    """Project a submission into a chat webhook message with one embed.

    Coded answers go through the label table; free-text answers only get the
    placeholder when missing.
    """
    data = submission
    embed = {
        "title": f"New Onboarding — {display(data.get('name'), 'Unknown')}",
        "color": EMBED_COLOR,
        "fields": [
            _field("Name", display(data.get("name")), inline=True),
            _field("Source", display(data.get("source"), "direct"), inline=True),
            _field("Business", display(data.get("business"))),
            _field("Existing Site", label(data.get("existingSite")), inline=True),
            _field("URL", display(data.get("siteUrl")), inline=True),
            _field("Goals", label_list(data.get("goals"))),
            _field("Pages", label_list(data.get("pages"))),
            _field("Branding", label_list(data.get("branding"))),
            _field("Features", label_list(data.get("features"))),
            _field("Inspiration", display(data.get("inspiration"))),
            _field("Timeline", label(data.get("timeline")), inline=True),
            _field("Budget", label(data.get("budget")), inline=True),
            _field("Notes", display(data.get("notes"))),
        ],
        "footer": {
            "text": f"{brand_name} Onboarding • {format_footer_time(rendered_at)}"
        },
    }
    return {"embeds": [embed]}


def _raw_list(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value) or PLACEHOLDER
    return display(value)


def build_system_event_text(
    submission: Submission,
    record_path: Path | str,
    follow_up: str = DEFAULT_FOLLOW_UP,
) -> str:
    """Summarize a submission as one line of text for the system event.

    Uses the raw codes rather than labels; the reader is pointed at the
    persisted file for the full answers.
    """
    name = display(submission.get("name"), "Unknown")
    business = display(submission.get("business"))
    goals = _raw_list(submission.get("goals"))
    budget = display(submission.get("budget"))
    timeline = display(submission.get("timeline"))
    channel = display(submission.get("channel"), "")

    parts = [
        f"New client intake from {name} ({business}).",
        f"Goals: {goals} | Budget: {budget} | Timeline: {timeline}.",
        f"Follow up in Discord channel {channel}." if channel else "",
        f"Full intake at {record_path}.",
        follow_up,
    ]
    return " ".join(part for part in parts if part)


__all__ = [
    "DEFAULT_FOLLOW_UP",
    "EMBED_COLOR",
    "build_system_event_text",
    "build_webhook_payload",
    "format_footer_time",
]
