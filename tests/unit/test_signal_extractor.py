"""Tests for intent signal extraction."""

import pytest

from demopilot.services.signal_extractor import SIGNAL_KEYWORDS, extract_signals


class TestExtractSignals:
    """Tests for extract_signals."""

    @pytest.mark.parametrize(
        "message,expected",
        [
            ("How much is the pro plan?", ["pricing"]),
            ("I want to SIGN UP today", ["buy"]),
            ("Can I get a trial account", ["demo"]),
            ("Is this better than Looker", ["comparison"]),
            ("We need it ASAP", ["timeline"]),
            ("Is there a Salesforce integration", ["feature_interest"]),
            ("My boss has to approve this", ["decision_maker"]),
        ],
    )
    def test_single_category(self, message, expected):
        """Each category is detected from its keywords, case-insensitively."""
        assert extract_signals(message, "") == expected

    def test_no_signals(self):
        """Small talk yields no tags."""
        assert extract_signals("hello there", "Hi! Nice to meet you.") == []

    def test_empty_message(self):
        """Empty or missing visitor text yields no tags."""
        assert extract_signals("", "anything") == []
        assert extract_signals(None, "anything") == []

    def test_declaration_order(self):
        """Tags follow category declaration order, not text order."""
        signals = extract_signals(
            "My manager asked when we could buy it and what the price is",
            "",
        )

        assert signals == ["pricing", "buy", "timeline", "decision_maker"]

    def test_category_reported_once(self):
        """Several keywords from one category still yield a single tag."""
        assert extract_signals("price, cost, pricing - how much?", "") == ["pricing"]

    def test_ai_response_ignored(self):
        """Only the visitor message drives categorization."""
        assert extract_signals("hello", "Our pricing starts at $49. Want a demo?") == []

    def test_substring_matching(self):
        """Keywords match anywhere in the text, including inside words."""
        # "test" inside "latest", "vs" inside "devs"
        assert extract_signals("what is the latest update for devs", "") == ["demo", "comparison"]

    def test_idempotent(self):
        """Repeated calls with the same input give the same output."""
        message = "Can it integrate with our team's CRM? How much?"
        first = extract_signals(message, "reply")
        second = extract_signals(message, "reply")

        assert first == second
        assert first == ["pricing", "feature_interest", "decision_maker"]

    def test_all_categories_declared(self):
        """The seven intent categories are declared in priority order."""
        assert list(SIGNAL_KEYWORDS) == [
            "pricing",
            "buy",
            "demo",
            "comparison",
            "timeline",
            "feature_interest",
            "decision_maker",
        ]
