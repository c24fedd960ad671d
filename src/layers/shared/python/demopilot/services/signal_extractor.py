"""Intent signal extraction from a single conversation turn.

Categories are matched by case-insensitive substring search over the
visitor's message. Each category contributes at most one tag per call, and
tags come out in the declaration order of ``SIGNAL_KEYWORDS``.
"""

import structlog

logger = structlog.get_logger()

# Category -> trigger phrases. Order matters: it is the output order.
SIGNAL_KEYWORDS: dict[str, tuple[str, ...]] = {
    "pricing": ("price", "cost", "pricing", "how much", "expensive"),
    "buy": ("buy", "purchase", "get started", "sign up", "subscribe"),
    "demo": ("demo", "trial", "test", "try it", "show me"),
    "comparison": ("compare", "alternative", "vs", "better than", "different from"),
    "timeline": ("when", "how long", "timeline", "asap", "urgent"),
    "feature_interest": ("feature", "capability", "can it", "does it", "integration"),
    "decision_maker": ("team", "boss", "manager", "decision", "approve"),
}


def extract_signals(visitor_message: str, ai_response: str = "") -> list[str]:
    """Categorize a visitor message into intent signal tags.

    Args:
        visitor_message: What the visitor said this turn.
        ai_response: What the avatar answered. Accepted for future use;
            categorization currently looks at the visitor text only.

    Returns:
        Signal tags in category declaration order, possibly empty.
    """
    message = (visitor_message or "").lower()
    if not message:
        return []

    signals = [
        category
        for category, keywords in SIGNAL_KEYWORDS.items()
        if any(keyword in message for keyword in keywords)
    ]

    if signals:
        logger.debug("Conversion signals extracted", signals=signals)

    return signals
