"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""


class ConfigurationError(UtilError):
    """Raised when settings are missing or unsafe for the environment.

    Startup raises it for placeholder secrets in production, the profiles
    provider for a missing directory URL.
    """
