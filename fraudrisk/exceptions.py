"""
Engine Exceptions Module.

Centralized exception definitions with:
- Error codes for client handling
- Structured error details
- Field-level context for validation failures

Element-level problems in upstream payloads (unknown flag names, unknown
signal shapes) are NOT raised; collections drop and log them.
"""

from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel


# ============================================================================
# ERROR CODES
# ============================================================================


class ErrorCode(StrEnum):
    """Engine error codes."""

    # General errors (1xxx)
    INTERNAL_ERROR = "E1000"
    VALIDATION_ERROR = "E1001"
    INVALID_ARGUMENT = "E1002"

    # Data errors (6xxx)
    INVALID_DATA = "E6000"


# ============================================================================
# ERROR DETAIL MODEL
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str
    message: str
    field: Optional[str] = None
    details: Optional[dict[str, Any]] = None


# ============================================================================
# BASE EXCEPTION
# ============================================================================


class FraudRiskError(Exception):
    """Base exception for the fraudrisk engine."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[dict[str, Any]] = None,
        field: Optional[str] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        self.field = field
        super().__init__(message)

    def to_detail(self) -> ErrorDetail:
        """Convert to a structured error detail."""
        return ErrorDetail(
            code=self.code.value,
            message=self.message,
            field=self.field,
            details=self.details,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.to_detail().model_dump()


# ============================================================================
# SPECIFIC EXCEPTIONS
# ============================================================================


class ScoreValidationError(FraudRiskError, ValueError):
    """A score fell outside the closed [0, 1] interval."""

    def __init__(self, value: Any, reason: str = "must be between 0 and 1"):
        super().__init__(
            message=f"Invalid score {value!r}: {reason}",
            code=ErrorCode.VALIDATION_ERROR,
            field="value",
            details={"value": repr(value), "reason": reason},
        )


# Engine-wide name for construction-time invariant violations.
ValidationError = ScoreValidationError


class InvalidArgumentError(FraudRiskError, TypeError):
    """Wrongly shaped input handed to a factory or typed collection."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code=ErrorCode.INVALID_ARGUMENT,
            field=field,
            details=details,
        )

    @classmethod
    def not_iterable(cls, argument: str, value: Any) -> "InvalidArgumentError":
        return cls(
            f"{argument} must be an iterable, got {type(value).__name__}",
            field=argument,
            details={"type": type(value).__name__},
        )

    @classmethod
    def wrong_type(cls, expected: str, value: Any) -> "InvalidArgumentError":
        return cls(
            f"Expected {expected}, got {type(value).__name__}",
            details={"expected": expected, "type": type(value).__name__},
        )
