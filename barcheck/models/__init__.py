"""
Pydantic models and enums shared across the validator.
"""

from barcheck.models.config import BarcodeConfig
from barcheck.models.outcome import FailureCode, ValidationOutcome
from barcheck.models.symbology import Symbology

__all__ = [
    # Configuration
    "BarcodeConfig",
    # Outcome
    "FailureCode",
    "ValidationOutcome",
    # Symbology
    "Symbology",
]
