"""Service classes for CTA decision logic."""

from demopilot.services.conversation_session import AgentDirective, ConversationSession
from demopilot.services.cta_analytics import CTAAnalyticsRecorder
from demopilot.services.cta_engine import (
    CTA_RULES,
    CTARule,
    build_ai_recommended_trigger,
    generate_personalized_cta_message,
    get_optimal_cta_timing,
    should_trigger_cta,
)
from demopilot.services.engagement_scorer import EngagementWeights, compute_engagement_score
from demopilot.services.signal_extractor import SIGNAL_KEYWORDS, extract_signals
from demopilot.services.system_prompt import build_agent_system_prompt

__all__ = [
    "AgentDirective",
    "CTAAnalyticsRecorder",
    "CTARule",
    "CTA_RULES",
    "ConversationSession",
    "EngagementWeights",
    "SIGNAL_KEYWORDS",
    "build_agent_system_prompt",
    "build_ai_recommended_trigger",
    "compute_engagement_score",
    "extract_signals",
    "generate_personalized_cta_message",
    "get_optimal_cta_timing",
    "should_trigger_cta",
]
