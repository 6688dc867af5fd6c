"""Exceptions."""


class ConfigurationError(RuntimeError):
    """The auth pipeline or the shared session settings are misconfigured."""
