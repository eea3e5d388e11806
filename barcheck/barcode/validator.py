"""
Barcode validation entry point.

``Barcode`` holds the active adapter and checksum setting and runs each value
through the fixed pipeline: type, characters, length, checksum.
"""

from typing import Any

from barcheck.barcode.adapters import Adapter
from barcheck.barcode.messages import DEFAULT_MESSAGE_TEMPLATES, describe_length, render_message
from barcheck.barcode.registry import resolve_adapter
from barcheck.config import get_logger, get_settings
from barcheck.exceptions import ConfigurationError
from barcheck.models.config import BarcodeConfig
from barcheck.models.outcome import FailureCode, ValidationOutcome

logger = get_logger(__name__)


class Barcode:
    """
    Validator for a single barcode symbology.

    Configuration is checked eagerly: an unknown symbology or an object that
    is not an adapter raises ``ConfigurationError`` here, never in
    ``is_valid``. Validation itself never raises; the reason for the last
    rejection is available from ``get_failure_reasons``.

    An exception raised by a custom adapter during validation rejects the
    value with ``FailureCode.INVALID``; the error text is kept in the
    outcome variables under ``error``.

    Instances keep the outcome of the last call, so one instance must not be
    shared between threads without external locking.
    """

    def __init__(self, config: Any = None):
        """
        Initialize validator.

        Args:
            config: Symbology name, adapter (class or instance), or a mapping
                with ``adapter``, ``options`` and ``useChecksum`` keys.
                Defaults to the configured default symbology.
        """
        config = BarcodeConfig.from_source(config)
        selector = config.adapter if config.adapter is not None else get_settings().default_adapter

        self._adapter: Adapter = resolve_adapter(selector, config.options)
        self._use_checksum = (
            config.use_checksum
            if config.use_checksum is not None
            else bool(self._adapter.checksum_by_default)
        )
        self._templates: dict[FailureCode, str] = dict(DEFAULT_MESSAGE_TEMPLATES)
        self._outcome: ValidationOutcome | None = None

    def __repr__(self) -> str:
        return f"Barcode(adapter={self._adapter!r}, use_checksum={self._use_checksum})"

    @property
    def adapter(self) -> Adapter:
        """The adapter currently in use."""
        return self._adapter

    @property
    def outcome(self) -> ValidationOutcome | None:
        """Outcome of the last ``is_valid`` call, or None before the first one."""
        return self._outcome

    def set_adapter(self, selector: Any, options: dict[str, Any] | None = None) -> "Barcode":
        """
        Replace the active adapter.

        The checksum setting falls back to the new symbology's default.

        Raises:
            ConfigurationError: If the selector does not resolve to an adapter
        """
        adapter = resolve_adapter(selector, options)
        self._adapter = adapter
        self._use_checksum = bool(adapter.checksum_by_default)
        self._outcome = None
        logger.debug("Barcode adapter changed", adapter=repr(adapter))
        return self

    def use_checksum(self, enable: bool | None = None) -> bool:
        """
        Get or set checksum enforcement.

        Only this validator's flag changes; the symbology rule is untouched.

        Args:
            enable: New setting, or None to only read it

        Returns:
            The (possibly updated) setting
        """
        if enable is not None:
            if not isinstance(enable, bool):
                raise ConfigurationError(f"use_checksum expects a bool, got {type(enable).__name__}")
            self._use_checksum = enable
        return self._use_checksum

    def set_message(self, code: FailureCode | str, template: str) -> None:
        """Override the message template for one failure code."""
        try:
            code = FailureCode(code)
        except ValueError as e:
            raise ConfigurationError(f"Unknown failure code: {code!r}") from e
        self._templates[code] = template

    def get_message_templates(self) -> dict[FailureCode, str]:
        return dict(self._templates)

    def is_valid(self, value: Any) -> bool:
        """
        Validate a barcode value.

        Args:
            value: Barcode string; anything that is not a ``str`` is rejected

        Returns:
            True if the value passes every enabled check
        """
        self._outcome = None
        try:
            self._outcome = self._evaluate(value)
        except Exception as e:
            # A failing custom adapter rejects the value; is_valid never raises.
            logger.warning("Barcode adapter raised", adapter=repr(self._adapter), error=str(e))
            self._outcome = ValidationOutcome.failed(FailureCode.INVALID, error=str(e))
        if not self._outcome.is_valid:
            logger.debug(
                "Barcode rejected",
                adapter=repr(self._adapter),
                reason=self._outcome.failure_code.value,
            )
        return self._outcome.is_valid

    def get_failure_reasons(self) -> dict[FailureCode, str]:
        """
        Messages for the last rejection, keyed by failure code.

        Empty after a successful call or before any call.
        """
        outcome = self._outcome
        if outcome is None or outcome.failure_code is None:
            return {}
        template = self._templates[outcome.failure_code]
        return {outcome.failure_code: render_message(template, outcome.variables)}

    def _evaluate(self, value: Any) -> ValidationOutcome:
        # No coercion: a number would silently lose its leading zeros.
        if not isinstance(value, str):
            return ValidationOutcome.failed(FailureCode.INVALID)

        adapter = self._adapter
        if not adapter.has_valid_characters(value):
            return ValidationOutcome.failed(FailureCode.INVALID_CHARS)

        if not adapter.has_valid_length(value):
            return ValidationOutcome.failed(
                FailureCode.INVALID_LENGTH,
                length=describe_length(adapter.get_length()),
            )

        if self._use_checksum and not adapter.has_valid_checksum(value):
            return ValidationOutcome.failed(FailureCode.FAILED)

        return ValidationOutcome.passed()


def validate_barcode(
    code: Any,
    adapter: Any = None,
    use_checksum: bool | None = None,
) -> ValidationOutcome:
    """
    Convenience function to validate one value.

    Args:
        code: Value to validate
        adapter: Symbology selector (default: configured default symbology)
        use_checksum: Override the symbology's checksum default

    Returns:
        Validation outcome
    """
    validator = Barcode({"adapter": adapter, "useChecksum": use_checksum})
    validator.is_valid(code)
    return validator.outcome
