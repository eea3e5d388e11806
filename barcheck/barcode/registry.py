"""
Resolve adapter selectors into adapter instances.

A selector is a symbology name, an import path to an adapter class or
factory, an adapter class, or an adapter instance.
"""

import importlib
from collections.abc import Mapping
from typing import Any

from barcheck.barcode.adapters import Adapter, SymbologyAdapter
from barcheck.barcode.rules import SYMBOLOGY_RULES
from barcheck.config.logging import get_logger
from barcheck.exceptions import ConfigurationError
from barcheck.models.symbology import Symbology

logger = get_logger(__name__)

# One shared, stateless adapter per built-in symbology.
_BUILTIN_ADAPTERS: dict[Symbology, SymbologyAdapter] = {
    symbology: SymbologyAdapter(rule) for symbology, rule in SYMBOLOGY_RULES.items()
}


def available_symbologies() -> list[str]:
    """Canonical names of all built-in symbologies, sorted."""
    return sorted(symbology.value for symbology in _BUILTIN_ADAPTERS)


def get_builtin_adapter(symbology: Symbology | str) -> SymbologyAdapter:
    """
    Get the adapter for a built-in symbology.

    Raises:
        ConfigurationError: If the name matches no built-in symbology
    """
    if not isinstance(symbology, Symbology):
        found = Symbology.lookup(symbology)
        if found is None:
            raise ConfigurationError(f"Barcode adapter '{symbology}' not found")
        symbology = found
    return _BUILTIN_ADAPTERS[symbology]


def _import_object(path: str) -> Any:
    """Import ``package.module:attr`` or ``package.module.attr``."""
    if ":" in path:
        module_name, _, attribute = path.partition(":")
    else:
        module_name, _, attribute = path.rpartition(".")
    if not module_name or not attribute:
        raise ConfigurationError(f"Barcode adapter '{path}' not found")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Barcode adapter '{path}' not found: {e}") from e

    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise ConfigurationError(f"Barcode adapter '{path}' not found") from e


def _instantiate(factory: Any, options: Mapping[str, Any], label: str) -> Any:
    try:
        return factory(**options)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Cannot create barcode adapter '{label}': {e}") from e


def _check_contract(candidate: Any, label: str) -> Adapter:
    if not isinstance(candidate, Adapter):
        raise ConfigurationError(
            f"Barcode adapter '{label}' does not implement the adapter contract"
        )
    return candidate


def resolve_adapter(selector: Any, options: Mapping[str, Any] | None = None) -> Adapter:
    """
    Turn a selector into an adapter instance.

    Args:
        selector: Symbology name, import path, adapter class or adapter instance
        options: Keyword arguments for adapters built from a class or import path

    Returns:
        Adapter satisfying the ``Adapter`` protocol

    Raises:
        ConfigurationError: If the selector is unknown or does not yield an adapter
    """
    options = dict(options or {})

    if isinstance(selector, str):
        symbology = Symbology.lookup(selector)
        if symbology is not None:
            if options:
                raise ConfigurationError(
                    f"Barcode adapter '{symbology.value}' does not accept options: "
                    f"{sorted(options)}"
                )
            logger.debug("Resolved built-in barcode adapter", adapter=symbology.value)
            return _BUILTIN_ADAPTERS[symbology]

        if "." not in selector and ":" not in selector:
            raise ConfigurationError(f"Barcode adapter '{selector}' not found")

        target = _import_object(selector)
        if isinstance(target, type) or (callable(target) and not isinstance(target, Adapter)):
            target = _instantiate(target, options, selector)
        logger.debug("Resolved barcode adapter from import path", adapter=selector)
        return _check_contract(target, selector)

    if isinstance(selector, type):
        label = selector.__qualname__
        return _check_contract(_instantiate(selector, options, label), label)

    label = type(selector).__qualname__
    if options:
        raise ConfigurationError(f"Options cannot be applied to an adapter instance ('{label}')")
    return _check_contract(selector, label)
