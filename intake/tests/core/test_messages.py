"""Unit tests for webhook payload and system event text building."""

from datetime import datetime
from pathlib import Path

import pytest

from intake.core.messages import (
    EMBED_COLOR,
    build_system_event_text,
    build_webhook_payload,
    format_footer_time,
)
from intake.core.models import Submission

RENDERED_AT = datetime(2026, 3, 4, 15, 6, 7)


@pytest.fixture
def full_submission() -> Submission:
    """A submission with every form field filled."""
    return Submission(
        fields={
            "name": "Dana Reyes",
            "business": "Reyes Bakery",
            "existingSite": "yes-ok",
            "siteUrl": "https://reyes.example",
            "goals": ["leads", "sales"],
            "pages": ["home", "shop"],
            "branding": ["logo"],
            "features": ["booking", "payments"],
            "inspiration": "clean, warm",
            "timeline": "month",
            "budget": "1-2k",
            "notes": "Needs Spanish too",
            "channel": "#reyes-bakery",
            "source": "instagram",
        }
    )


def _fields(payload: dict) -> dict[str, dict]:
    return {f["name"]: f for f in payload["embeds"][0]["fields"]}


class TestWebhookPayload:
    """Embed projection of a submission."""

    def test_embed_structure(self, full_submission: Submission) -> None:
        payload = build_webhook_payload(full_submission, RENDERED_AT)

        assert list(payload) == ["embeds"]
        assert len(payload["embeds"]) == 1
        embed = payload["embeds"][0]
        assert embed["title"] == "New Onboarding — Dana Reyes"
        assert embed["color"] == EMBED_COLOR == 0x2563EB
        assert embed["footer"]["text"] == "Swift Studio Onboarding • 3/4/2026, 3:06:07 PM"

    def test_field_order(self, full_submission: Submission) -> None:
        payload = build_webhook_payload(full_submission, RENDERED_AT)
        names = [f["name"] for f in payload["embeds"][0]["fields"]]

        assert names == [
            "Name", "Source", "Business", "Existing Site", "URL", "Goals",
            "Pages", "Branding", "Features", "Inspiration", "Timeline",
            "Budget", "Notes",
        ]

    def test_coded_fields_use_labels(self, full_submission: Submission) -> None:
        fields = _fields(build_webhook_payload(full_submission, RENDERED_AT))

        assert fields["Existing Site"]["value"] == "Yes — minor improvements"
        assert fields["Goals"]["value"] == "Get more leads, Sell online"
        assert fields["Pages"]["value"] == "Home, Online Store"
        assert fields["Features"]["value"] == "Online booking, Payments"
        assert fields["Timeline"]["value"] == "Within a month"
        assert fields["Budget"]["value"] == "$1k–$2k"

    def test_inline_flags(self, full_submission: Submission) -> None:
        fields = _fields(build_webhook_payload(full_submission, RENDERED_AT))

        inline = {name for name, f in fields.items() if f.get("inline")}
        assert inline == {"Name", "Source", "Existing Site", "URL", "Timeline", "Budget"}
        assert "inline" not in fields["Notes"]

    def test_empty_submission_uses_placeholders(self) -> None:
        payload = build_webhook_payload(Submission(fields={}), RENDERED_AT)
        fields = _fields(payload)

        assert payload["embeds"][0]["title"] == "New Onboarding — Unknown"
        assert fields["Source"]["value"] == "direct"
        for name in ("Name", "Business", "URL", "Goals", "Notes", "Budget"):
            assert fields[name]["value"] == "—"

    def test_brand_name(self, full_submission: Submission) -> None:
        payload = build_webhook_payload(full_submission, RENDERED_AT, brand_name="Acme")
        assert payload["embeds"][0]["footer"]["text"].startswith("Acme Onboarding • ")


class TestFooterTime:
    @pytest.mark.parametrize(
        ("moment", "expected"),
        [
            (datetime(2026, 1, 2, 0, 5, 9), "1/2/2026, 12:05:09 AM"),
            (datetime(2026, 12, 31, 12, 0, 0), "12/31/2026, 12:00:00 PM"),
            (datetime(2026, 7, 4, 23, 59, 59), "7/4/2026, 11:59:59 PM"),
        ],
    )
    def test_format(self, moment: datetime, expected: str) -> None:
        assert format_footer_time(moment) == expected


class TestSystemEventText:
    """One-line summary passed to the system event command."""

    def test_full_summary(self, full_submission: Submission) -> None:
        text = build_system_event_text(
            full_submission, Path("/data/intakes/1700000000000.json"), follow_up="Go."
        )

        assert text == (
            "New client intake from Dana Reyes (Reyes Bakery). "
            "Goals: leads, sales | Budget: 1-2k | Timeline: month. "
            "Follow up in Discord channel #reyes-bakery. "
            "Full intake at /data/intakes/1700000000000.json. "
            "Go."
        )

    def test_channel_sentence_omitted_when_missing(self) -> None:
        text = build_system_event_text(Submission(fields={"name": "Lee"}), "/tmp/1.json")

        assert "Discord channel" not in text
        assert text.startswith("New client intake from Lee (—). ")
        assert "Goals: — | Budget: — | Timeline: —." in text

    def test_unknown_name(self) -> None:
        text = build_system_event_text(Submission(fields={}), "/tmp/1.json")
        assert text.startswith("New client intake from Unknown (—).")

    def test_scalar_goals(self) -> None:
        text = build_system_event_text(Submission(fields={"goals": "seo"}), "/tmp/1.json")
        assert "Goals: seo |" in text
