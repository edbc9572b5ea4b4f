"""Unit tests for form code label resolution."""

import pytest

from intake.core.labels import LABELS, PLACEHOLDER, display, label, label_list


class TestLabel:
    """Single code resolution."""

    def test_known_code_returns_label(self) -> None:
        assert label("leads") == "Get more leads"

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("yes-outdated", "Yes — needs full redo"),
            ("1-3mo", "1–3 months"),
            ("<500", "Under $500"),
            ("2k+", "$2k+"),
            ("shop", "Online Store"),
        ],
    )
    def test_codes_with_punctuation(self, code: str, expected: str) -> None:
        assert label(code) == expected

    def test_unknown_code_returns_value(self) -> None:
        assert label("something-custom") == "something-custom"

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_value_returns_placeholder(self, value) -> None:
        assert label(value) == PLACEHOLDER == "—"

    def test_label_is_idempotent_on_labels(self) -> None:
        """Resolving an already resolved label leaves it unchanged."""
        for text in LABELS.values():
            assert label(label(text)) == label(text)

    def test_custom_table(self) -> None:
        assert label("x", {"x": "Ex"}) == "Ex"
        assert label("leads", {"x": "Ex"}) == "leads"


class TestLabelList:
    """Multi-choice resolution."""

    def test_joins_labels_in_order(self) -> None:
        assert label_list(["leads", "sales"]) == "Get more leads, Sell online"

    def test_mixes_known_and_unknown(self) -> None:
        assert label_list(["seo", "podcast"]) == "Improve SEO, podcast"

    @pytest.mark.parametrize("values", [[], None, ()])
    def test_empty_or_missing_returns_placeholder(self, values) -> None:
        assert label_list(values) == PLACEHOLDER

    def test_scalar_resolved_as_single_code(self) -> None:
        assert label_list("blog") == "Blog"

    def test_blank_element_renders_placeholder(self) -> None:
        assert label_list(["home", ""]) == "Home, —"


class TestDisplay:
    """Free-text fallback."""

    def test_present_value(self) -> None:
        assert display("Acme Co") == "Acme Co"

    def test_missing_value_uses_default(self) -> None:
        assert display(None) == PLACEHOLDER
        assert display("", "direct") == "direct"

    def test_does_not_apply_labels(self) -> None:
        assert display("no") == "no"
