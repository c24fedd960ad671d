"""Call-to-action trigger and analytics models."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from demopilot.models.base import ValueModel, generate_ulid, utc_now
from demopilot.models.behavior import BehaviorRecord


class CTATriggerType(str, Enum):
    """What kind of evidence produced a trigger."""

    TIME_BASED = "time_based"
    ENGAGEMENT_BASED = "engagement_based"
    INTENT_BASED = "intent_based"
    AI_RECOMMENDED = "ai_recommended"


class CTAUrgency(str, Enum):
    """How assertively the presentation layer should surface a CTA."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CTATiming(str, Enum):
    """When, relative to the current turn, a CTA should appear."""

    IMMEDIATE = "immediate"
    DELAYED = "delayed"
    EXIT_INTENT = "exit_intent"


class CTAOutcome(str, Enum):
    """Visitor reaction to a surfaced CTA."""

    SHOWN = "shown"
    CLICKED = "clicked"
    DISMISSED = "dismissed"
    CONVERTED = "converted"


class CTATrigger(ValueModel):
    """Decision to show a conversion prompt now."""

    type: CTATriggerType
    urgency: CTAUrgency
    reason: str = Field(..., description="Stable human-readable reason")
    confidence: float = Field(..., ge=0.0, le=1.0)
    custom_message: str = Field(default="", description="Personalized prompt text")
    timing: CTATiming


class CTAAnalyticsEvent(ValueModel):
    """One lifecycle event of a trigger. Never mutated after creation."""

    trigger_id: str = Field(default_factory=generate_ulid)
    trigger_type: str = "unknown"
    behavior_snapshot: BehaviorRecord = Field(default_factory=BehaviorRecord)
    timestamp: datetime = Field(default_factory=utc_now)
    outcome: CTAOutcome = CTAOutcome.SHOWN
    conversion_value: float | None = Field(default=None, ge=0)


class CTAMetrics(ValueModel):
    """Aggregate conversion metrics over recorded events."""

    total_triggers: int = 0
    conversion_rate: float = 0.0
    average_conversion_value: float = 0.0
    top_performing_triggers: list[str] = Field(default_factory=list)


class CTAFunnel(ValueModel):
    """Outcome counts with a click-rate based recommendation."""

    shown: int = 0
    clicked: int = 0
    dismissed: int = 0
    converted: int = 0
    click_rate: float = 0.0
    recommendation: str = ""
