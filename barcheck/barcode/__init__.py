"""
Barcode validation: symbology rules, checksum algorithms, adapters and the
``Barcode`` validator.
"""

from barcheck.barcode.adapters import Adapter, SymbologyAdapter
from barcheck.barcode.registry import available_symbologies, get_builtin_adapter, resolve_adapter
from barcheck.barcode.rules import SYMBOLOGY_RULES, SymbologyRule
from barcheck.barcode.validator import Barcode, validate_barcode

__all__ = [
    "Adapter",
    "Barcode",
    "SYMBOLOGY_RULES",
    "SymbologyAdapter",
    "SymbologyRule",
    "available_symbologies",
    "get_builtin_adapter",
    "resolve_adapter",
    "validate_barcode",
]
