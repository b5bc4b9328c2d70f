"""Exceptions raised while loading the operational and job config."""


class ConfigError(Exception):
    """Raised when config is missing, malformed, or inconsistent."""


class ConfigFaultError(ConfigError):
    """Raised when loading hits an unexpected internal fault.

    The original exception is chained as ``__cause__``.
    """
