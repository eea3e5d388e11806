"""
Exceptions raised while configuring a barcode validator.
"""


class ConfigurationError(ValueError):
    """Raised when a validator cannot be set up with the given configuration."""
