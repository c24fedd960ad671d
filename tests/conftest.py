"""Pytest configuration and fixtures."""

import os

import pytest

# Set environment variables before imports
os.environ["STAGE"] = "test"


@pytest.fixture
def fresh_record():
    """Create a behavior record at conversation start."""
    from demopilot.models.behavior import BehaviorRecord

    return BehaviorRecord()


@pytest.fixture
def engaged_record():
    """Create a record that clears the high-engagement bar."""
    from demopilot.models.behavior import BehaviorRecord

    return BehaviorRecord(
        videos_watched=4,
        questions_asked=4,
        session_duration_seconds=400,
        messages_sent=5,
    )


@pytest.fixture
def recorder():
    """Create an isolated analytics recorder."""
    from demopilot.services.cta_analytics import CTAAnalyticsRecorder

    return CTAAnalyticsRecorder()


@pytest.fixture
def session(recorder):
    """Create a conversation session reporting into the test recorder."""
    from demopilot.services.conversation_session import ConversationSession

    return ConversationSession(
        subject_name="Acme Analytics",
        recorder=recorder,
        session_id="sess-123",
    )


@pytest.fixture
def sample_demo():
    """Create a sample demo context."""
    from demopilot.models.demo import DemoContext, DemoVideo

    return DemoContext(
        title="Acme Analytics",
        knowledge_base="Acme Analytics turns raw events into dashboards. Plans start at $49/month.",
        videos=[
            DemoVideo(title="Dashboard tour", order_index=2),
            DemoVideo(title="Getting started", order_index=1),
        ],
        cta_link="https://acme.example.com/signup",
    )
