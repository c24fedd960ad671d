"""Tests for CTA analytics recording and metrics."""

from datetime import datetime

import pytest

from demopilot.models.behavior import BehaviorRecord
from demopilot.models.cta import CTAOutcome
from demopilot.services.cta_analytics import CTAAnalyticsRecorder


class TestRecordEvent:
    """Tests for CTAAnalyticsRecorder.record_event."""

    def test_defaults(self, recorder):
        """Missing fields fall back to unknown/shown/empty record."""
        event = recorder.record_event()

        assert event.trigger_type == "unknown"
        assert event.outcome == "shown"
        assert event.conversion_value is None
        assert event.behavior_snapshot.messages_sent == 0
        assert isinstance(event.timestamp, datetime)
        assert event.timestamp.tzinfo is not None

    def test_unique_trigger_ids(self, recorder):
        """Each event gets its own ULID."""
        first = recorder.record_event(trigger_type="intent_based")
        second = recorder.record_event(trigger_type="intent_based")

        assert len(first.trigger_id) == 26
        assert first.trigger_id != second.trigger_id

    def test_snapshot_is_copied(self, recorder):
        """Later changes to the live record do not leak into the log."""
        record = BehaviorRecord(videos_watched=1, conversion_signals=["demo"])

        event = recorder.record_event(trigger_type="intent_based", behavior_snapshot=record)
        record.record_video_watched()
        record.record_visitor_message("buy", ["buy"])

        assert event.behavior_snapshot is not record
        assert event.behavior_snapshot.videos_watched == 1
        assert event.behavior_snapshot.conversion_signals == ["demo"]

    def test_events_are_immutable(self, recorder):
        """Recorded events cannot be edited."""
        event = recorder.record_event(outcome=CTAOutcome.CLICKED)

        with pytest.raises(Exception):
            event.outcome = "converted"

    def test_append_only_log(self, recorder):
        """Events accumulate in order and the exposed log is read-only."""
        recorder.record_event(trigger_type="a")
        recorder.record_event(trigger_type="b")

        events = recorder.events

        assert isinstance(events, tuple)
        assert [e.trigger_type for e in events] == ["a", "b"]
        assert len(recorder) == 2

    def test_negative_conversion_value_rejected(self, recorder):
        """Conversion values must be non-negative."""
        with pytest.raises(Exception):
            recorder.record_event(outcome="converted", conversion_value=-5)

        assert len(recorder) == 0


class TestComputeMetrics:
    """Tests for CTAAnalyticsRecorder.compute_metrics."""

    def test_empty_log(self, recorder):
        """No events means zeroed metrics."""
        metrics = recorder.compute_metrics()

        assert metrics.total_triggers == 0
        assert metrics.conversion_rate == 0.0
        assert metrics.average_conversion_value == 0.0
        assert metrics.top_performing_triggers == []

    def test_conversion_rate_and_value(self, recorder):
        """One conversion out of three events with a value of 100."""
        recorder.record_event(trigger_type="intent_based", outcome="shown")
        recorder.record_event(trigger_type="intent_based", outcome="shown")
        recorder.record_event(trigger_type="intent_based", outcome="converted", conversion_value=100)

        metrics = recorder.compute_metrics()

        assert metrics.total_triggers == 3
        assert metrics.conversion_rate == pytest.approx(1 / 3)
        assert metrics.average_conversion_value == pytest.approx(100)

    def test_average_ignores_missing_values(self, recorder):
        """Only events carrying a value count toward the average."""
        recorder.record_event(outcome="converted", conversion_value=50)
        recorder.record_event(outcome="converted", conversion_value=0)
        recorder.record_event(outcome="converted")

        metrics = recorder.compute_metrics()

        assert metrics.average_conversion_value == pytest.approx(25)
        assert metrics.conversion_rate == pytest.approx(1.0)

    def test_top_performing_triggers(self, recorder):
        """The three most frequent types, ties in first-seen order."""
        for trigger_type in [
            "time_based",
            "intent_based",
            "engagement_based",
            "ai_recommended",
            "intent_based",
            "engagement_based",
            "ai_recommended",
            "intent_based",
        ]:
            recorder.record_event(trigger_type=trigger_type)

        metrics = recorder.compute_metrics()

        assert metrics.top_performing_triggers == ["intent_based", "engagement_based", "ai_recommended"]

    def test_top_performing_limit(self):
        """The ranking length is configurable."""
        recorder = CTAAnalyticsRecorder(top_performing_limit=1)
        recorder.record_event(trigger_type="a")
        recorder.record_event(trigger_type="b")

        assert recorder.compute_metrics().top_performing_triggers == ["a"]

    def test_metrics_reflect_latest_event(self, recorder):
        """Metrics are computed without buffering delay."""
        recorder.record_event(trigger_type="intent_based", outcome="converted", conversion_value=10)

        metrics = recorder.compute_metrics()

        assert metrics.total_triggers == 1
        assert metrics.conversion_rate == 1.0
        assert metrics.top_performing_triggers == ["intent_based"]

    def test_recorders_are_isolated(self, recorder):
        """Separate recorders never share events."""
        other = CTAAnalyticsRecorder()
        recorder.record_event(trigger_type="intent_based")

        assert other.compute_metrics().total_triggers == 0


class TestComputeFunnel:
    """Tests for CTAAnalyticsRecorder.compute_funnel."""

    def _record(self, recorder, shown, clicked, dismissed=0, converted=0):
        for outcome, count in (
            ("shown", shown),
            ("clicked", clicked),
            ("dismissed", dismissed),
            ("converted", converted),
        ):
            for _ in range(count):
                recorder.record_event(trigger_type="intent_based", outcome=outcome)

    def test_empty_funnel(self, recorder):
        """Nothing shown means a zero click rate."""
        funnel = recorder.compute_funnel()

        assert funnel.shown == 0
        assert funnel.click_rate == 0.0
        assert funnel.recommendation == "Consider adjusting CTA timing and messaging"

    def test_counts(self, recorder):
        """Outcome counts are tallied per outcome."""
        self._record(recorder, shown=10, clicked=1, dismissed=3, converted=2)

        funnel = recorder.compute_funnel()

        assert (funnel.shown, funnel.clicked, funnel.dismissed, funnel.converted) == (10, 1, 3, 2)
        assert funnel.click_rate == pytest.approx(0.1)
        assert funnel.recommendation == "Good CTA performance, room for optimization"

    def test_excellent(self, recorder):
        """Click rates above 20% are excellent."""
        self._record(recorder, shown=4, clicked=1)

        assert recorder.compute_funnel().recommendation == "Excellent CTA performance!"

    def test_low(self, recorder):
        """Click rates below 5% ask for tuning."""
        self._record(recorder, shown=40, clicked=1)

        assert recorder.compute_funnel().recommendation == "Consider adjusting CTA timing and messaging"
