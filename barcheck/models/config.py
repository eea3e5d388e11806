"""
Normalised validator configuration.

A validator can be configured from a symbology name, an adapter instance or a
key/value collection. Every shape is turned into a ``BarcodeConfig`` before
anything else looks at it.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError

from barcheck.exceptions import ConfigurationError


class BarcodeConfig(BaseModel):
    """Configuration record for a ``Barcode`` validator."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    adapter: Any = Field(None, description="Symbology name, import path, adapter class or instance")
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Keyword arguments for adapters built from a class or import path",
    )
    use_checksum: StrictBool | None = Field(
        None,
        alias="useChecksum",
        description="Override the symbology's default checksum enforcement",
    )

    @classmethod
    def from_source(cls, source: Any) -> "BarcodeConfig":
        """
        Normalise any supported configuration shape.

        Args:
            source: None, a name string, an adapter (class or instance), or a
                mapping / ``items()`` collection with ``adapter``, ``options``
                and ``useChecksum`` keys

        Returns:
            Normalised configuration

        Raises:
            ConfigurationError: If the shape or any field is not recognised
        """
        if source is None:
            return cls()
        if isinstance(source, BarcodeConfig):
            return source

        if isinstance(source, Mapping):
            data = dict(source)
        elif isinstance(source, (str, type)):
            data = {"adapter": source}
        elif callable(getattr(source, "items", None)):
            try:
                data = dict(source.items())
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Unreadable configuration collection: {e}") from e
        else:
            # Anything else is taken as an adapter instance; the registry
            # decides whether it honours the contract.
            data = {"adapter": source}

        if data.get("options") is None:
            data.pop("options", None)

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid barcode configuration: {e}") from e
