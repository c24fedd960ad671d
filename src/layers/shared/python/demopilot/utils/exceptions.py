"""Custom exception classes for DemoPilot."""


class DemoPilotError(Exception):
    """Base exception for all DemoPilot errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict | None = None,
    ):
        """Initialize DemoPilotError.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert exception to a plain dictionary for logs and callers."""
        result = {
            "error": True,
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(DemoPilotError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: list[dict] | None = None,
        error_code: str = "VALIDATION_ERROR",
    ):
        """Initialize ValidationError.

        Args:
            message: Error message.
            errors: List of validation errors with field and message.
            error_code: Machine-readable error code.
        """
        self.errors = errors or []
        super().__init__(
            message=message,
            error_code=error_code,
            details={"errors": self.errors},
        )

    @classmethod
    def from_pydantic(cls, exc: Exception, message: str = "Validation failed") -> "ValidationError":
        """Create ValidationError from Pydantic ValidationError."""
        errors = []
        if hasattr(exc, "errors"):
            for error in exc.errors():
                errors.append(
                    {
                        "field": ".".join(str(loc) for loc in error.get("loc", [])),
                        "message": error.get("msg", "Invalid value"),
                        "type": error.get("type", "unknown"),
                    }
                )
        return cls(message=message, errors=errors)


class InvalidAgentActionError(ValidationError):
    """Raised when the avatar model emits an action that cannot be decoded."""

    def __init__(
        self,
        message: str = "Invalid agent action",
        errors: list[dict] | None = None,
    ):
        """Initialize InvalidAgentActionError."""
        super().__init__(
            message=message,
            errors=errors,
            error_code="INVALID_AGENT_ACTION",
        )
