"""CTA analytics recording and aggregation.

The recorder keeps an append-only log of trigger lifecycle events. It is the
only state shared between visitor sessions, so appends are serialized; the
aggregates are computed from the log on demand and always reflect every
event recorded so far.
"""

import threading
from collections import Counter

import structlog

from demopilot.models.behavior import BehaviorRecord
from demopilot.models.cta import CTAAnalyticsEvent, CTAFunnel, CTAMetrics, CTAOutcome

logger = structlog.get_logger()

TOP_PERFORMING_LIMIT = 3

# Click-rate thresholds for funnel recommendations
LOW_CLICK_RATE = 0.05
HIGH_CLICK_RATE = 0.2


class CTAAnalyticsRecorder:
    """Append-only log of CTA events with derived metrics.

    Create one per process (or per test) and hand it to the sessions that
    should report into it.
    """

    def __init__(self, top_performing_limit: int = TOP_PERFORMING_LIMIT):
        """Initialize the recorder.

        Args:
            top_performing_limit: How many trigger types to rank in metrics.
        """
        self.top_performing_limit = top_performing_limit
        self._events: list[CTAAnalyticsEvent] = []
        self._lock = threading.Lock()
        self.logger = logger.bind(service="cta_analytics")

    @property
    def events(self) -> tuple[CTAAnalyticsEvent, ...]:
        """Recorded events, oldest first."""
        with self._lock:
            return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def record_event(
        self,
        trigger_type: str | None = None,
        behavior_snapshot: BehaviorRecord | None = None,
        outcome: CTAOutcome | str | None = None,
        conversion_value: float | None = None,
    ) -> CTAAnalyticsEvent:
        """Append one event to the log.

        Missing fields fall back to defaults: trigger type ``unknown``,
        outcome ``shown``, an empty behavior record. The behavior record is
        copied so later mutations by the session are not visible here.

        Args:
            trigger_type: Type of the trigger this event belongs to.
            behavior_snapshot: Visitor behavior at the time of the event.
            outcome: What the visitor did.
            conversion_value: Monetary value of a conversion, if known.

        Returns:
            The recorded event.
        """
        event = CTAAnalyticsEvent(
            trigger_type=trigger_type or "unknown",
            behavior_snapshot=(
                behavior_snapshot.snapshot() if behavior_snapshot is not None else BehaviorRecord()
            ),
            outcome=outcome or CTAOutcome.SHOWN,
            conversion_value=conversion_value,
        )

        with self._lock:
            self._events.append(event)

        self.logger.info(
            "CTA analytics event recorded",
            trigger_id=event.trigger_id,
            trigger_type=event.trigger_type,
            outcome=event.outcome,
            conversion_value=event.conversion_value,
        )
        return event

    def compute_metrics(self) -> CTAMetrics:
        """Aggregate conversion metrics over all recorded events."""
        events = self.events
        total = len(events)
        if total == 0:
            return CTAMetrics()

        conversions = sum(1 for e in events if e.outcome == CTAOutcome.CONVERTED)
        values = [e.conversion_value for e in events if e.conversion_value is not None]

        # Counter keeps first-seen order and most_common sorts stably
        type_counts = Counter(e.trigger_type for e in events)
        top = [t for t, _ in type_counts.most_common(self.top_performing_limit)]

        return CTAMetrics(
            total_triggers=total,
            conversion_rate=conversions / total,
            average_conversion_value=sum(values) / len(values) if values else 0.0,
            top_performing_triggers=top,
        )

    def compute_funnel(self) -> CTAFunnel:
        """Summarize outcomes and recommend whether CTAs need tuning."""
        counts = Counter(e.outcome for e in self.events)
        shown = counts.get(CTAOutcome.SHOWN.value, 0)
        clicked = counts.get(CTAOutcome.CLICKED.value, 0)
        click_rate = clicked / shown if shown > 0 else 0.0

        if click_rate < LOW_CLICK_RATE:
            recommendation = "Consider adjusting CTA timing and messaging"
        elif click_rate > HIGH_CLICK_RATE:
            recommendation = "Excellent CTA performance!"
        else:
            recommendation = "Good CTA performance, room for optimization"

        return CTAFunnel(
            shown=shown,
            clicked=clicked,
            dismissed=counts.get(CTAOutcome.DISMISSED.value, 0),
            converted=counts.get(CTAOutcome.CONVERTED.value, 0),
            click_rate=click_rate,
            recommendation=recommendation,
        )
