"""Utility functions and helpers."""

from demopilot.utils.exceptions import (
    DemoPilotError,
    InvalidAgentActionError,
    ValidationError,
)

__all__ = [
    "DemoPilotError",
    "InvalidAgentActionError",
    "ValidationError",
]
