"""Pydantic models for DemoPilot entities."""

from demopilot.models.base import BaseModel, ValueModel, generate_ulid, utc_now
from demopilot.models.behavior import BehaviorRecord
from demopilot.models.cta import (
    CTAAnalyticsEvent,
    CTAFunnel,
    CTAMetrics,
    CTAOutcome,
    CTATiming,
    CTATrigger,
    CTATriggerType,
    CTAUrgency,
)
from demopilot.models.agent_action import (
    AGENT_ACTION_NAMES,
    AgentAction,
    PlayVideo,
    RequestDemo,
    ShowCTA,
    Speak,
    parse_agent_action,
)
from demopilot.models.demo import DemoContext, DemoVideo

__all__ = [
    # Base
    "BaseModel",
    "ValueModel",
    "generate_ulid",
    "utc_now",
    # Behavior
    "BehaviorRecord",
    # CTA
    "CTAAnalyticsEvent",
    "CTAFunnel",
    "CTAMetrics",
    "CTAOutcome",
    "CTATiming",
    "CTATrigger",
    "CTATriggerType",
    "CTAUrgency",
    # Agent actions
    "AGENT_ACTION_NAMES",
    "AgentAction",
    "PlayVideo",
    "RequestDemo",
    "ShowCTA",
    "Speak",
    "parse_agent_action",
    # Demo
    "DemoContext",
    "DemoVideo",
]
