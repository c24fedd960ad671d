"""Engagement scoring for visitor behavior records."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from demopilot.models.behavior import BehaviorRecord


@dataclass(frozen=True)
class EngagementWeights:
    """Per-unit weights and caps of the four score components."""

    video_weight: float = 0.1
    video_cap: float = 0.4
    question_weight: float = 0.1
    question_cap: float = 0.3
    time_cap: float = 0.2
    time_saturation_seconds: float = 600.0  # 10 minutes earns the full time component
    message_weight: float = 0.02
    message_cap: float = 0.1


DEFAULT_WEIGHTS = EngagementWeights()


def compute_engagement_score(
    record: "BehaviorRecord",
    weights: EngagementWeights = DEFAULT_WEIGHTS,
) -> float:
    """Fold behavior counters into a score in [0, 1].

    The score is monotonic in every counter: raising any of them never
    lowers the result.

    Args:
        record: Behavior record to score.
        weights: Component weights and caps.

    Returns:
        Normalized engagement score.
    """
    videos = max(0, record.videos_watched or 0)
    questions = max(0, record.questions_asked or 0)
    duration = max(0, record.session_duration_seconds or 0)
    messages = max(0, record.messages_sent or 0)

    score = 0.0
    score += min(weights.video_cap, videos * weights.video_weight)
    score += min(weights.question_cap, questions * weights.question_weight)
    score += min(weights.time_cap, (duration / weights.time_saturation_seconds) * weights.time_cap)
    score += min(weights.message_cap, messages * weights.message_weight)

    # Caps already bound the sum; clamp anyway so reweighting stays in range
    return max(0.0, min(1.0, score))
