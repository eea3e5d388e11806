"""
Barcode string validation for linear and postal symbologies.
"""

from barcheck.barcode import Adapter, Barcode, SymbologyAdapter, validate_barcode
from barcheck.exceptions import ConfigurationError
from barcheck.models import FailureCode, Symbology, ValidationOutcome

__all__ = [
    "Adapter",
    "Barcode",
    "ConfigurationError",
    "FailureCode",
    "Symbology",
    "SymbologyAdapter",
    "ValidationOutcome",
    "validate_barcode",
]
