"""
Tests for the adapter contract and adapter resolution.
"""

import pytest

from barcheck.barcode.adapters import Adapter, SymbologyAdapter
from barcheck.barcode.checksums import ChecksumAlgorithm, ChecksumSpec
from barcheck.barcode.registry import available_symbologies, get_builtin_adapter, resolve_adapter
from barcheck.barcode.rules import (
    EAN_13,
    NUMERIC,
    AnyLength,
    AsciiRange,
    ParityLength,
    SymbologyRule,
    exact,
)
from barcheck.exceptions import ConfigurationError


class AlwaysFailingChecksum:
    """Custom adapter that implements the contract without inheriting anything."""

    checksum_by_default = True

    def has_valid_length(self, value):
        return isinstance(value, str) and len(value) == 7

    def has_valid_characters(self, value):
        return isinstance(value, str) and value.isdigit()

    def has_valid_checksum(self, value):
        return False

    def get_length(self):
        return 7

    def get_characters(self):
        return NUMERIC


class NotAnAdapter:
    """Has only part of the contract."""

    def has_valid_length(self, value):
        return True


class OptionAdapter(AlwaysFailingChecksum):
    def __init__(self, length: int = 7):
        self.length = length

    def has_valid_length(self, value):
        return isinstance(value, str) and len(value) == self.length


def make_adapter(length, characters=None) -> SymbologyAdapter:
    rule = SymbologyRule(
        name="custom",
        length=length,
        characters=characters or AsciiRange(128),
        checksum=ChecksumSpec(ChecksumAlgorithm.NONE),
        use_checksum=False,
    )
    return SymbologyAdapter(rule)


class TestSymbologyAdapter:
    """Tests for the rule-backed adapter."""

    def test_satisfies_protocol(self):
        assert isinstance(SymbologyAdapter(EAN_13), Adapter)

    def test_non_string_input_is_rejected_by_every_check(self):
        adapter = SymbologyAdapter(EAN_13)
        assert not adapter.has_valid_characters(123)
        assert not adapter.has_valid_length(1234567890128)
        assert not adapter.has_valid_checksum(1234567890128)

    def test_empty_input(self):
        adapter = SymbologyAdapter(EAN_13)
        assert not adapter.has_valid_characters("")
        assert not adapter.has_valid_checksum("")

    def test_ascii_characters(self):
        adapter = make_adapter(exact(1, 3, 6))
        assert adapter.has_valid_characters('1234QW!"')

    def test_array_length(self):
        adapter = make_adapter(exact(1, 3, 6))
        assert adapter.has_valid_length("1")
        assert not adapter.has_valid_length("12")
        assert adapter.has_valid_length("123")
        assert not adapter.has_valid_length("1234")
        assert not adapter.has_valid_length(123)

    def test_any_length(self):
        adapter = make_adapter(AnyLength())
        for value in ("1", "12", "123", "1234"):
            assert adapter.has_valid_length(value)

    def test_odd_length(self):
        adapter = make_adapter(ParityLength(even=False))
        assert adapter.has_valid_length("1")
        assert not adapter.has_valid_length("12")
        assert adapter.has_valid_length("123")
        assert not adapter.has_valid_length("1234")

    def test_length_counts_characters_not_bytes(self):
        adapter = make_adapter(exact(2))
        assert adapter.has_valid_length("éé")

    def test_length_ignores_character_validity(self):
        adapter = SymbologyAdapter(EAN_13)
        assert adapter.has_valid_length("3RH1131-1BB40")
        assert not adapter.has_valid_characters("3RH1131-1BB40")

    def test_checksum_never_raises_on_short_input(self):
        adapter = get_builtin_adapter("code93")
        assert not adapter.has_valid_checksum("A")
        assert not get_builtin_adapter("ean13").has_valid_checksum("1")

    def test_introspection(self):
        adapter = SymbologyAdapter(EAN_13)
        assert adapter.get_length().describe() == "13"
        assert adapter.get_characters() is NUMERIC
        assert adapter.checksum_by_default is True
        assert adapter.name == "ean13"


class TestResolveAdapter:
    """Tests for turning selectors into adapters."""

    def test_builtin_names_are_case_insensitive(self):
        assert resolve_adapter("EAN13") is resolve_adapter("ean13")
        assert resolve_adapter("Ean-13") is resolve_adapter("ean_13")

    def test_builtin_adapters_are_shared(self):
        assert resolve_adapter("upca") is get_builtin_adapter("upca")

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError, match="not found"):
            resolve_adapter("NonExistentAdapter")
        with pytest.raises(ConfigurationError, match="not found"):
            get_builtin_adapter("ean99")

    def test_unknown_import_path(self):
        with pytest.raises(ConfigurationError, match="not found"):
            resolve_adapter("no_such_package.module.Adapter")
        with pytest.raises(ConfigurationError, match="not found"):
            resolve_adapter("barcheck.barcode.adapters:Missing")

    def test_custom_instance(self):
        adapter = AlwaysFailingChecksum()
        assert resolve_adapter(adapter) is adapter

    def test_custom_class_is_instantiated_with_options(self):
        adapter = resolve_adapter(OptionAdapter, {"length": 9})
        assert isinstance(adapter, OptionAdapter)
        assert adapter.length == 9

    def test_import_path_with_options(self):
        adapter = resolve_adapter(
            "barcheck.barcode.adapters.SymbologyAdapter",
            {"rule": EAN_13},
        )
        assert isinstance(adapter, SymbologyAdapter)
        assert adapter.rule is EAN_13

    def test_import_path_colon_form(self):
        adapter = resolve_adapter("barcheck.barcode.adapters:SymbologyAdapter", {"rule": EAN_13})
        assert adapter.rule is EAN_13

    def test_bad_options(self):
        with pytest.raises(ConfigurationError, match="Cannot create"):
            resolve_adapter("barcheck.barcode.adapters.SymbologyAdapter", {"colour": "red"})

    def test_builtin_rejects_options(self):
        with pytest.raises(ConfigurationError, match="does not accept options"):
            resolve_adapter("ean13", {"length": 12})

    def test_instance_rejects_options(self):
        with pytest.raises(ConfigurationError):
            resolve_adapter(AlwaysFailingChecksum(), {"length": 12})

    def test_object_without_contract(self):
        with pytest.raises(ConfigurationError, match="does not implement"):
            resolve_adapter(NotAnAdapter())
        with pytest.raises(ConfigurationError, match="does not implement"):
            resolve_adapter(NotAnAdapter)
        with pytest.raises(ConfigurationError, match="does not implement"):
            resolve_adapter("barcheck.barcode.rules.EAN_13")
        with pytest.raises(ConfigurationError, match="does not implement"):
            resolve_adapter(["065100004327"])

    def test_available_symbologies(self):
        names = available_symbologies()
        assert names == sorted(names)
        assert "ean13" in names
        assert "royalmail" in names
        assert len(names) == 29
