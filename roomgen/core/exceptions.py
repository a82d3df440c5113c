"""Process-level exceptions."""


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing or inconsistent."""
