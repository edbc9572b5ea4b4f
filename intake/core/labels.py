"""Human-readable labels for onboarding form codes.

The form posts short codes (``"leads"``, ``"1-3mo"``, ``"2k+"``) for its
choice fields. Notifications show the label instead, falling back to the raw
value for codes the table does not know and to a placeholder for missing
values.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

PLACEHOLDER = "—"

LABELS: Mapping[str, str] = MappingProxyType(
    {
        # Existing site
        "yes-outdated": "Yes — needs full redo",
        "yes-ok": "Yes — minor improvements",
        "no": "No website yet",
        # Goals
        "leads": "Get more leads",
        "credibility": "Look professional",
        "sales": "Sell online",
        "portfolio": "Showcase work",
        "info": "Informational",
        "seo": "Improve SEO",
        # Branding
        "logo": "Logo",
        "colors": "Brand colors",
        "fonts": "Fonts",
        "photos": "Photography",
        "copy": "Written copy",
        "none": "None — starting fresh",
        # Features
        "contact-form": "Contact form",
        "live-chat": "Live chat",
        "booking": "Online booking",
        "payments": "Payments",
        "gallery": "Gallery",
        "map": "Map embed",
        "multilang": "Multi-language",
        "nothing": "Keep it simple",
        # Timeline
        "urgent": "ASAP",
        "month": "Within a month",
        "1-3mo": "1–3 months",
        "planning": "Just planning",
        # Budget
        "<500": "Under $500",
        "500-1k": "$500–$1k",
        "1-2k": "$1k–$2k",
        "2k+": "$2k+",
        "unsure": "Not sure / get a quote",
        # Pages
        "home": "Home",
        "about": "About",
        "services": "Services",
        "contact": "Contact",
        "shop": "Online Store",
        "blog": "Blog",
        "faq": "FAQ",
    }
)


def _is_blank(value: Any) -> bool:
    return value is None or value == "" or value is False


def display(value: Any, default: str = PLACEHOLDER) -> str:
    """Render a free-text answer, using ``default`` when it is missing."""
    if _is_blank(value):
        return default
    return str(value)


def label(value: Any, labels: Mapping[str, str] = LABELS) -> str:
    """Resolve a single form code to its label.

    Args:
        value: Raw answer from the submission.
        labels: Code to label table (defaults to the onboarding form table).

    Returns:
        The mapped label, the value itself if it is unknown but non-empty,
        or the placeholder if it is missing.
    """
    if isinstance(value, str) and value in labels:
        return labels[value]
    return display(value)


def label_list(values: Any, labels: Mapping[str, str] = LABELS) -> str:
    """Resolve a multi-choice answer to a comma separated list of labels.

    A scalar is resolved like a single code. An empty or missing list
    resolves to the placeholder.
    """
    if isinstance(values, (list, tuple)):
        return ", ".join(label(v, labels) for v in values) or PLACEHOLDER
    return label(values, labels)


__all__ = ["LABELS", "PLACEHOLDER", "display", "label", "label_list"]
