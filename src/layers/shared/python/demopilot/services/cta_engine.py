"""Call-to-action decision engine.

Decides whether a visitor should see a conversion prompt right now, based on
their behavior record. Rules are evaluated top to bottom and the first match
wins, so intent signals preempt the generic engagement and time heuristics
that follow them even when a later rule would carry a higher confidence.

Two separate questions are answered here:

- ``should_trigger_cta`` decides *whether* to show a CTA. It is the only
  gate for rule-driven prompts.
- ``generate_personalized_cta_message`` decides *what to say* once something
  else (the avatar model) has already asked for a CTA. It never decides
  whether one is shown.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Mapping

import structlog
from pydantic import ValidationError as PydanticValidationError

from demopilot.models.behavior import BehaviorRecord
from demopilot.models.cta import CTATiming, CTATrigger, CTATriggerType, CTAUrgency

logger = structlog.get_logger()

# Rule thresholds
HIGH_ENGAGEMENT_SCORE = 0.8
HIGH_ENGAGEMENT_MIN_VIDEOS = 2
EXTENDED_SESSION_SECONDS = 300
EXTENDED_SESSION_MIN_VIDEOS = 1
REPEATED_QUESTIONS_MIN = 3
REPEATED_QUESTIONS_SCORE = 0.6
EXIT_INTENT_SECONDS = 180
EXIT_INTENT_MAX_SCORE = 0.4

# Signal tags checked by the intent rules
PRICING_SIGNALS = ("pricing", "cost")
PURCHASE_SIGNALS = ("buy", "purchase", "get started")
DEMO_SIGNALS = ("demo", "trial")

# Optimal timing helper
OPTIMAL_TIMING_ENGAGEMENT = 0.7

# AI-recommended path
AI_RECOMMENDED_REASON = "AI recommendation"
AI_RECOMMENDED_CONFIDENCE = 0.8


def _round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def _minutes(seconds: int) -> int:
    return _round_half_up(seconds / 60)


@dataclass(frozen=True)
class CTARule:
    """One ordered rule: a condition and the trigger it produces."""

    name: str
    matches: Callable[[BehaviorRecord], bool]
    build: Callable[[BehaviorRecord], CTATrigger]


def _high_engagement(record: BehaviorRecord) -> CTATrigger:
    return CTATrigger(
        type=CTATriggerType.ENGAGEMENT_BASED,
        urgency=CTAUrgency.HIGH,
        reason="High engagement detected",
        confidence=0.9,
        custom_message=(
            f"You've watched {record.videos_watched} videos and asked "
            f"{record.questions_asked} questions - you're clearly interested!"
        ),
        timing=CTATiming.IMMEDIATE,
    )


def _pricing_intent(record: BehaviorRecord) -> CTATrigger:
    return CTATrigger(
        type=CTATriggerType.INTENT_BASED,
        urgency=CTAUrgency.HIGH,
        reason="Pricing inquiry detected",
        confidence=0.95,
        custom_message=(
            "I see you're interested in pricing. Let me connect you with our team "
            "for a personalized quote."
        ),
        timing=CTATiming.IMMEDIATE,
    )


def _purchase_intent(record: BehaviorRecord) -> CTATrigger:
    return CTATrigger(
        type=CTATriggerType.INTENT_BASED,
        urgency=CTAUrgency.HIGH,
        reason="Purchase intent detected",
        confidence=0.98,
        custom_message="Ready to get started? Let me help you take the next step!",
        timing=CTATiming.IMMEDIATE,
    )


def _demo_intent(record: BehaviorRecord) -> CTATrigger:
    return CTATrigger(
        type=CTATriggerType.INTENT_BASED,
        urgency=CTAUrgency.MEDIUM,
        reason="Demo request detected",
        confidence=0.85,
        custom_message=(
            "I'd love to show you a personalized demo! Let me connect you with our team."
        ),
        timing=CTATiming.IMMEDIATE,
    )


def _extended_session(record: BehaviorRecord) -> CTATrigger:
    return CTATrigger(
        type=CTATriggerType.TIME_BASED,
        urgency=CTAUrgency.MEDIUM,
        reason="Extended session duration",
        confidence=0.7,
        custom_message=(
            f"You've spent {_minutes(record.session_duration_seconds)} minutes exploring "
            "- let's take the next step!"
        ),
        timing=CTATiming.DELAYED,
    )


def _repeated_questions(record: BehaviorRecord) -> CTATrigger:
    return CTATrigger(
        type=CTATriggerType.ENGAGEMENT_BASED,
        urgency=CTAUrgency.MEDIUM,
        reason="Multiple questions asked",
        confidence=0.75,
        custom_message=(
            f"You've asked {record.questions_asked} great questions - I think you'd "
            "love what we can do for you!"
        ),
        timing=CTATiming.IMMEDIATE,
    )


def _exit_intent(record: BehaviorRecord) -> CTATrigger:
    return CTATrigger(
        type=CTATriggerType.ENGAGEMENT_BASED,
        urgency=CTAUrgency.LOW,
        reason="Exit intent detected",
        confidence=0.6,
        custom_message=(
            "Before you go, would you like to see how this could work for your specific needs?"
        ),
        timing=CTATiming.EXIT_INTENT,
    )


# Priority order. Intent rules come first so a recorded buying signal always
# wins over the generic heuristics. High engagement also requires videos,
# which is stricter than the score alone.
CTA_RULES: tuple[CTARule, ...] = (
    CTARule(
        name="pricing_intent",
        matches=lambda r: r.has_signal(*PRICING_SIGNALS),
        build=_pricing_intent,
    ),
    CTARule(
        name="purchase_intent",
        matches=lambda r: r.has_signal(*PURCHASE_SIGNALS),
        build=_purchase_intent,
    ),
    CTARule(
        name="demo_intent",
        matches=lambda r: r.has_signal(*DEMO_SIGNALS),
        build=_demo_intent,
    ),
    CTARule(
        name="high_engagement",
        matches=lambda r: (
            r.engagement_score > HIGH_ENGAGEMENT_SCORE
            and r.videos_watched >= HIGH_ENGAGEMENT_MIN_VIDEOS
        ),
        build=_high_engagement,
    ),
    CTARule(
        name="extended_session",
        matches=lambda r: (
            r.session_duration_seconds > EXTENDED_SESSION_SECONDS
            and r.videos_watched >= EXTENDED_SESSION_MIN_VIDEOS
        ),
        build=_extended_session,
    ),
    CTARule(
        name="repeated_questions",
        matches=lambda r: (
            r.questions_asked >= REPEATED_QUESTIONS_MIN
            and r.engagement_score > REPEATED_QUESTIONS_SCORE
        ),
        build=_repeated_questions,
    ),
    CTARule(
        name="exit_intent",
        matches=lambda r: (
            r.session_duration_seconds > EXIT_INTENT_SECONDS
            and r.engagement_score < EXIT_INTENT_MAX_SCORE
        ),
        build=_exit_intent,
    ),
)


def _coerce_record(record: BehaviorRecord | Mapping[str, Any]) -> BehaviorRecord | None:
    """Accept a record or a plain mapping of its fields."""
    if isinstance(record, BehaviorRecord):
        return record
    try:
        return BehaviorRecord.model_validate(dict(record or {}))
    except (PydanticValidationError, TypeError, ValueError, OverflowError) as e:
        logger.warning("Unusable behavior record, skipping CTA evaluation", error=str(e))
        return None


def should_trigger_cta(record: BehaviorRecord | Mapping[str, Any]) -> CTATrigger | None:
    """Decide whether to show a CTA for the current behavior record.

    Args:
        record: Behavior record snapshot, or a mapping of its fields.

    Returns:
        Trigger of the first matching rule, or None when no rule matches.
    """
    behavior = _coerce_record(record)
    if behavior is None:
        return None

    for rule in CTA_RULES:
        if rule.matches(behavior):
            trigger = rule.build(behavior)
            logger.debug(
                "CTA rule matched",
                rule=rule.name,
                trigger_type=trigger.type,
                confidence=trigger.confidence,
            )
            return trigger

    return None


def get_optimal_cta_timing(record: BehaviorRecord) -> CTATiming:
    """Pick when a CTA should appear given the visitor's current state."""
    if record.conversion_signals:
        return CTATiming.IMMEDIATE
    if record.engagement_score > OPTIMAL_TIMING_ENGAGEMENT:
        return CTATiming.IMMEDIATE
    if record.session_duration_seconds > EXTENDED_SESSION_SECONDS:
        return CTATiming.DELAYED
    return CTATiming.EXIT_INTENT


def generate_personalized_cta_message(record: BehaviorRecord, subject_name: str) -> str:
    """Compose CTA text for a prompt that has already been decided on.

    Args:
        record: Current behavior record.
        subject_name: Product or demo name to mention.

    Returns:
        Personalized message.
    """
    if record.videos_watched > 2 and record.questions_asked > 2:
        return (
            f"You've watched {record.videos_watched} videos and asked "
            f"{record.questions_asked} thoughtful questions about {subject_name}. "
            "You're clearly interested - let's make this happen!"
        )

    if record.specific_interests:
        interests = " and ".join(sorted(record.specific_interests))
        return (
            f"I noticed you're particularly interested in {interests}. "
            f"{subject_name} excels in these areas - want to see how it can work for you?"
        )

    if record.session_duration_seconds > EXTENDED_SESSION_SECONDS:
        return (
            f"You've spent {_minutes(record.session_duration_seconds)} minutes exploring "
            f"{subject_name}. Ready to take the next step?"
        )

    return f"{subject_name} seems like a great fit for your needs. Want to see how we can help you get started?"


def build_ai_recommended_trigger(
    record: BehaviorRecord,
    subject_name: str,
    message: str | None = None,
) -> CTATrigger:
    """Build the trigger for a CTA the avatar model explicitly asked for.

    The ordered rules are not consulted; the model already decided.

    Args:
        record: Current behavior record.
        subject_name: Product or demo name.
        message: Text supplied by the model, if any.

    Returns:
        AI-recommended trigger.
    """
    return CTATrigger(
        type=CTATriggerType.AI_RECOMMENDED,
        urgency=CTAUrgency.MEDIUM,
        reason=AI_RECOMMENDED_REASON,
        confidence=AI_RECOMMENDED_CONFIDENCE,
        custom_message=(message or "").strip() or generate_personalized_cta_message(record, subject_name),
        timing=CTATiming.IMMEDIATE,
    )
