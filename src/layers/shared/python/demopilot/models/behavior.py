"""Visitor behavior record for a single avatar conversation.

One record exists per visitor session. It is created when the conversation
starts, updated after every turn by the owning session, and discarded when
the session ends.
"""

import math

from pydantic import Field, field_validator

from demopilot.models.base import BaseModel


class BehaviorRecord(BaseModel):
    """Rolling engagement counters and intent trail for one visitor.

    ``engagement_score`` is derived from the counters on every read and
    cannot be assigned.
    """

    session_duration_seconds: int = Field(default=0, description="Seconds since the conversation started")
    videos_watched: int = Field(default=0, description="Demo videos played to the visitor")
    questions_asked: int = Field(default=0, description="Visitor utterances containing a question mark")
    messages_sent: int = Field(default=0, description="Total visitor utterances")

    # Advisory topic tags from conversation analysis
    specific_interests: set[str] = Field(default_factory=set)

    # Intent tags in arrival order, duplicates kept, never cleared
    conversion_signals: list[str] = Field(default_factory=list)

    @field_validator(
        "session_duration_seconds",
        "videos_watched",
        "questions_asked",
        "messages_sent",
        mode="before",
    )
    @classmethod
    def coerce_counter(cls, v: int | float | str | None) -> int | str:
        """Treat missing counters as zero and truncate fractional ones."""
        if v is None:
            return 0
        if isinstance(v, bool):
            return int(v)
        if isinstance(v, float):
            if not math.isfinite(v):
                raise ValueError("Counter must be a finite number")
            return int(v)
        return v

    @field_validator(
        "session_duration_seconds",
        "videos_watched",
        "questions_asked",
        "messages_sent",
        mode="after",
    )
    @classmethod
    def clamp_non_negative(cls, v: int) -> int:
        """Clamp negative counters to zero once parsed."""
        return max(0, v)

    @property
    def engagement_score(self) -> float:
        """Normalized engagement score in [0, 1]."""
        # Import here to avoid circular imports
        from demopilot.services.engagement_scorer import compute_engagement_score

        return compute_engagement_score(self)

    def record_visitor_message(self, message: str, signals: list[str]) -> None:
        """Count a visitor utterance and append its intent signals.

        Args:
            message: Raw visitor text.
            signals: Signal tags extracted from the message.
        """
        self.messages_sent += 1
        if "?" in (message or ""):
            self.questions_asked += 1
        if signals:
            self.conversion_signals = [*self.conversion_signals, *signals]

    def record_video_watched(self) -> None:
        """Count one more watched video."""
        self.videos_watched += 1

    def update_session_duration(self, seconds: int | float) -> None:
        """Advance the session duration; earlier or non-finite values are ignored."""
        if isinstance(seconds, float) and not math.isfinite(seconds):
            return
        seconds = int(seconds or 0)
        if seconds > self.session_duration_seconds:
            self.session_duration_seconds = seconds

    def add_interest(self, topic: str) -> None:
        """Add an advisory interest tag."""
        topic = (topic or "").strip()
        if topic:
            self.specific_interests = self.specific_interests | {topic}

    def has_signal(self, *tags: str) -> bool:
        """Check whether any of the given tags was ever recorded."""
        return any(tag in self.conversion_signals for tag in tags)

    def snapshot(self) -> "BehaviorRecord":
        """Return a detached deep copy for analytics."""
        return self.model_copy(deep=True)
