"""
Tests for the configuration and outcome models.
"""

import pytest
from pydantic import ValidationError

from barcheck.exceptions import ConfigurationError
from barcheck.models import BarcodeConfig, FailureCode, Symbology, ValidationOutcome


class TestBarcodeConfig:
    """Tests for BarcodeConfig normalisation."""

    def test_none(self):
        config = BarcodeConfig.from_source(None)
        assert config.adapter is None
        assert config.options == {}
        assert config.use_checksum is None

    def test_string(self):
        config = BarcodeConfig.from_source("ean13")
        assert config.adapter == "ean13"

    def test_mapping_with_alias(self):
        config = BarcodeConfig.from_source(
            {"adapter": "Ean13", "options": None, "useChecksum": False}
        )
        assert config.adapter == "Ean13"
        assert config.options == {}
        assert config.use_checksum is False

    def test_field_name_is_accepted(self):
        assert BarcodeConfig.from_source({"use_checksum": True}).use_checksum is True

    def test_items_collection(self):
        class Pairs:
            def items(self):
                return [("adapter", "code39"), ("useChecksum", True)]

        config = BarcodeConfig.from_source(Pairs())
        assert config.adapter == "code39"
        assert config.use_checksum is True

    def test_existing_config_is_reused(self):
        config = BarcodeConfig(adapter="upca")
        assert BarcodeConfig.from_source(config) is config

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError, match="Invalid barcode configuration"):
            BarcodeConfig.from_source({"adapter": "ean13", "checksum": False})

    def test_strict_bool(self):
        with pytest.raises(ConfigurationError):
            BarcodeConfig.from_source({"useChecksum": 1})

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            BarcodeConfig.from_source({"options": "unknown"})

    def test_frozen(self):
        config = BarcodeConfig(adapter="ean13")
        with pytest.raises(ValidationError):
            config.adapter = "upca"


class TestValidationOutcome:
    """Tests for ValidationOutcome."""

    def test_passed(self):
        outcome = ValidationOutcome.passed()
        assert outcome.is_valid
        assert outcome.failure_code is None
        assert outcome.variables == {}

    def test_failed_with_variables(self):
        outcome = ValidationOutcome.failed(FailureCode.INVALID_LENGTH, length="7/8")
        assert not outcome.is_valid
        assert outcome.failure_code == FailureCode.INVALID_LENGTH
        assert outcome.variables == {"length": "7/8"}

    def test_failure_codes_are_stable_strings(self):
        assert FailureCode.FAILED == "FAILED"
        assert FailureCode.INVALID_CHARS == "INVALID_CHARS"
        assert FailureCode.INVALID_LENGTH == "INVALID_LENGTH"
        assert FailureCode.INVALID == "INVALID"


class TestSymbology:
    """Tests for symbology name lookup."""

    def test_lookup_normalises_names(self):
        assert Symbology.lookup("EAN-13") == Symbology.EAN_13
        assert Symbology.lookup("ean_13") == Symbology.EAN_13
        assert Symbology.lookup(" Code 25 Interleaved ") == Symbology.CODE25_INTERLEAVED

    def test_lookup_unknown(self):
        assert Symbology.lookup("code11") is None
