"""Actions the avatar model may request during a conversation.

The model answers every turn with a JSON object tagged by ``action``. The set
of actions is closed: anything outside it is rejected at decode time instead
of being silently dropped.

Example payloads:
    {"action": "speak", "text": "Great question!", "emotion": "excited"}
    {"action": "play_video", "video_index": 2, "reason": "Dashboard requested"}
    {"action": "show_cta", "message": "Let me help you get started"}
    {"action": "request_demo", "text": "Let me connect you", "urgency": "medium"}
"""

import json
from typing import Annotated, Any, Literal

import structlog
from pydantic import BaseModel as PydanticBaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from demopilot.models.cta import CTAUrgency
from demopilot.utils.exceptions import InvalidAgentActionError

logger = structlog.get_logger()

Emotion = Literal["neutral", "excited", "empathetic", "confident"]


class _AgentActionBase(PydanticBaseModel):
    """Fields shared by every action."""

    model_config = ConfigDict(extra="forbid", frozen=True, use_enum_values=True)

    emotion: Emotion | None = None
    confidence: float | None = Field(None, ge=0.0, le=1.0)


class Speak(_AgentActionBase):
    """Say something without any side effect."""

    action: Literal["speak"] = "speak"
    text: str = Field(..., min_length=1)


class PlayVideo(_AgentActionBase):
    """Play one of the demo videos by its order index."""

    action: Literal["play_video"] = "play_video"
    video_index: int = Field(..., ge=0)
    reason: str | None = None
    text: str | None = None


class ShowCTA(_AgentActionBase):
    """Ask the presentation layer to show a call-to-action now."""

    action: Literal["show_cta"] = "show_cta"
    message: str | None = None
    text: str | None = None


class RequestDemo(_AgentActionBase):
    """Hand the visitor over to a human for a personalized demo."""

    action: Literal["request_demo"] = "request_demo"
    text: str | None = None
    urgency: CTAUrgency = CTAUrgency.MEDIUM


AgentAction = Annotated[
    Speak | PlayVideo | ShowCTA | RequestDemo,
    Field(discriminator="action"),
]

AGENT_ACTION_NAMES = ("speak", "play_video", "show_cta", "request_demo")

_agent_action_adapter: TypeAdapter = TypeAdapter(AgentAction)


def parse_agent_action(raw: str | bytes | dict[str, Any]) -> Speak | PlayVideo | ShowCTA | RequestDemo:
    """Decode an avatar model response into a typed action.

    Args:
        raw: JSON text or an already-decoded mapping.

    Returns:
        The matching action variant.

    Raises:
        InvalidAgentActionError: If the payload is not a JSON object, names an
            unknown action, or fails field validation.
    """
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Agent action is not valid JSON", error=str(e))
            raise InvalidAgentActionError(
                "Agent action is not valid JSON",
                errors=[{"field": "body", "message": str(e)}],
            ) from e

    if not isinstance(raw, dict):
        raise InvalidAgentActionError(
            "Agent action must be a JSON object",
            errors=[{"field": "body", "message": f"Got {type(raw).__name__}"}],
        )

    action_name = raw.get("action")
    if action_name not in AGENT_ACTION_NAMES:
        logger.warning("Unknown agent action rejected", action=action_name)
        raise InvalidAgentActionError(
            f"Unknown agent action: {action_name!r}",
            errors=[
                {
                    "field": "action",
                    "message": f"Must be one of: {', '.join(AGENT_ACTION_NAMES)}",
                }
            ],
        )

    try:
        return _agent_action_adapter.validate_python(raw)
    except PydanticValidationError as e:
        logger.warning("Agent action failed validation", action=action_name, error_count=e.error_count())
        raise InvalidAgentActionError.from_pydantic(e, message=f"Invalid {action_name} action") from e
