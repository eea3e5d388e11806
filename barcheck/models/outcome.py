"""
Result model for a single validation call.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FailureCode(str, Enum):
    """Stable identifiers for the reasons a value can be rejected."""

    FAILED = "FAILED"
    INVALID_CHARS = "INVALID_CHARS"
    INVALID_LENGTH = "INVALID_LENGTH"
    INVALID = "INVALID"


class ValidationOutcome(BaseModel):
    """
    Outcome of one ``Barcode.is_valid`` call.

    A new outcome replaces the previous one on every call.
    """

    model_config = ConfigDict(frozen=True)

    is_valid: bool = Field(..., description="Whether the value passed every check")
    failure_code: FailureCode | None = Field(None, description="First check that failed")
    variables: dict[str, str] = Field(
        default_factory=dict,
        description="Values substituted into the failure message (e.g. expected length)",
    )

    @classmethod
    def passed(cls) -> "ValidationOutcome":
        return cls(is_valid=True)

    @classmethod
    def failed(cls, code: FailureCode, **variables: str) -> "ValidationOutcome":
        return cls(is_valid=False, failure_code=code, variables=variables)
