"""Per-visitor conversation session.

Owns one visitor's behavior record and runs the turn loop around it: every
visitor utterance, video playback, timer tick or avatar action updates the
record first and then asks the CTA engine whether to interrupt. Turns are
expected to be processed one at a time per session; different sessions share
nothing except the injected analytics recorder.
"""

import os
from dataclasses import dataclass
from typing import Any

import structlog

from demopilot.models.agent_action import PlayVideo, RequestDemo, ShowCTA, Speak, parse_agent_action
from demopilot.models.behavior import BehaviorRecord
from demopilot.models.cta import CTAAnalyticsEvent, CTAOutcome, CTATrigger
from demopilot.services.cta_analytics import CTAAnalyticsRecorder
from demopilot.services.cta_engine import build_ai_recommended_trigger, should_trigger_cta
from demopilot.services.signal_extractor import extract_signals

logger = structlog.get_logger()

_STAGE = os.environ.get("STAGE", "dev")


@dataclass
class AgentDirective:
    """What the presentation layer should do after an avatar action."""

    action: str
    text: str | None = None
    video_index: int | None = None
    trigger: CTATrigger | None = None


class ConversationSession:
    """Turn loop for one visitor's avatar conversation."""

    def __init__(
        self,
        subject_name: str,
        recorder: CTAAnalyticsRecorder,
        record: BehaviorRecord | None = None,
        session_id: str | None = None,
    ):
        """Initialize the session.

        Args:
            subject_name: Product or demo name used in CTA copy.
            recorder: Shared analytics recorder.
            record: Existing behavior record to resume from.
            session_id: Identifier for log context.
        """
        self.subject_name = subject_name
        self.recorder = recorder
        self.record = record or BehaviorRecord()
        self.session_id = session_id
        self.logger = logger.bind(
            service="conversation_session",
            session_id=session_id,
            stage=_STAGE,
        )

    def handle_turn(self, visitor_message: str, ai_response: str = "") -> CTATrigger | None:
        """Process one visitor utterance and the avatar's reply.

        Args:
            visitor_message: What the visitor said.
            ai_response: What the avatar answered.

        Returns:
            CTA trigger to surface, or None.
        """
        signals = extract_signals(visitor_message, ai_response)
        self.record.record_visitor_message(visitor_message, signals)
        return self._evaluate()

    def handle_video_watched(self) -> CTATrigger | None:
        """Count a video playback and re-evaluate."""
        self.record.record_video_watched()
        return self._evaluate()

    def tick(self, session_duration_seconds: int) -> CTATrigger | None:
        """Advance the session clock and re-evaluate.

        Args:
            session_duration_seconds: Seconds since the conversation started.

        Returns:
            CTA trigger to surface, or None.
        """
        self.record.update_session_duration(session_duration_seconds)
        return self._evaluate()

    def apply_agent_action(self, action: Speak | PlayVideo | ShowCTA | RequestDemo | str | dict[str, Any]) -> AgentDirective:
        """Apply an action requested by the avatar model.

        Raw JSON or mappings are decoded strictly first.

        Args:
            action: Decoded action, JSON text, or mapping.

        Returns:
            Directive for the presentation layer.

        Raises:
            InvalidAgentActionError: If a raw action cannot be decoded.
        """
        if not isinstance(action, (Speak, PlayVideo, ShowCTA, RequestDemo)):
            action = parse_agent_action(action)

        if isinstance(action, PlayVideo):
            self.logger.info("Agent played video", video_index=action.video_index, reason=action.reason)
            return AgentDirective(
                action=action.action,
                text=action.text,
                video_index=action.video_index,
                trigger=self.handle_video_watched(),
            )

        if isinstance(action, ShowCTA):
            # The model already decided; the rules are not consulted here
            trigger = build_ai_recommended_trigger(self.record, self.subject_name, action.message)
            self._record_shown(trigger)
            return AgentDirective(action=action.action, text=action.text, trigger=trigger)

        if isinstance(action, RequestDemo):
            self.logger.info("Agent requested human demo", urgency=action.urgency)

        return AgentDirective(action=action.action, text=action.text)

    def report_outcome(
        self,
        trigger: CTATrigger,
        outcome: CTAOutcome | str,
        conversion_value: float | None = None,
    ) -> CTAAnalyticsEvent:
        """Record how the visitor reacted to a surfaced trigger.

        Args:
            trigger: Trigger that was shown.
            outcome: Visitor reaction.
            conversion_value: Value of the conversion, if any.

        Returns:
            The recorded analytics event.
        """
        return self.recorder.record_event(
            trigger_type=trigger.type,
            behavior_snapshot=self.record,
            outcome=outcome,
            conversion_value=conversion_value,
        )

    def _evaluate(self) -> CTATrigger | None:
        trigger = should_trigger_cta(self.record)
        if trigger is None:
            return None

        self.logger.info(
            "CTA triggered",
            trigger_type=trigger.type,
            reason=trigger.reason,
            urgency=trigger.urgency,
            confidence=trigger.confidence,
            engagement_score=self.record.engagement_score,
        )
        self._record_shown(trigger)
        return trigger

    def _record_shown(self, trigger: CTATrigger) -> None:
        self.recorder.record_event(
            trigger_type=trigger.type,
            behavior_snapshot=self.record,
            outcome=CTAOutcome.SHOWN,
        )
