"""
Adapter contract and the rule-backed adapter used for every built-in symbology.
"""

from typing import Any, Protocol, runtime_checkable

from barcheck.barcode.checksums import verify_checksum
from barcheck.barcode.rules import CharacterSet, LengthSpec, SymbologyRule


@runtime_checkable
class Adapter(Protocol):
    """
    What the validator needs from a symbology.

    Custom adapters only have to provide these members; they do not need to
    inherit from anything.
    """

    checksum_by_default: bool

    def has_valid_length(self, value: Any) -> bool: ...

    def has_valid_characters(self, value: Any) -> bool: ...

    def has_valid_checksum(self, value: Any) -> bool: ...

    def get_length(self) -> LengthSpec: ...

    def get_characters(self) -> CharacterSet: ...


class SymbologyAdapter:
    """
    Adapter that evaluates one ``SymbologyRule``.

    Stateless apart from the rule reference, so a single instance can be
    shared between validators.
    """

    def __init__(self, rule: SymbologyRule):
        self._rule = rule

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._rule.name!r})"

    @property
    def rule(self) -> SymbologyRule:
        return self._rule

    @property
    def name(self) -> str:
        return self._rule.name

    @property
    def checksum_by_default(self) -> bool:
        """Whether this symbology enforces its checksum unless told otherwise."""
        return self._rule.use_checksum

    def has_valid_length(self, value: Any) -> bool:
        """Check the character count of ``value`` against the allowed lengths."""
        if not isinstance(value, str):
            return False
        return self._rule.length.matches(len(value))

    def has_valid_characters(self, value: Any) -> bool:
        """Check that ``value`` is a non-empty string made only of allowed symbols."""
        if not isinstance(value, str) or not value:
            return False
        return self._rule.characters.accepts(value)

    def has_valid_checksum(self, value: Any) -> bool:
        """
        Verify the embedded check character(s) of ``value``.

        Forms without a check character (e.g. 7-digit EAN-8) always pass.
        Returns False rather than raising when the value is too short or
        otherwise unusable for the algorithm.
        """
        if not isinstance(value, str) or not value:
            return False

        spec = self._rule.checksum_for(len(value))
        if spec is None:
            return True
        return verify_checksum(self._rule.characters.payload(value), spec)

    def get_length(self) -> LengthSpec:
        return self._rule.length

    def get_characters(self) -> CharacterSet:
        return self._rule.characters
