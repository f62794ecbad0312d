"""
Errors raised on invalid model configuration.
"""


class ConfigurationError(ValueError):
    """Invalid parameter or unknown model selector."""


class ModelNotSupportedError(ConfigurationError):
    """Selector reserved for a model that has no implementation."""
