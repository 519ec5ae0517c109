"""
Configuration Errors

Author: envbridge Project
License: MIT
"""

from typing import List, Optional

from .constants import ERR_FMT_SECRET_IO_ISSUE


class ConfigurationError(Exception):
    """
    Raised when a configuration load finishes with errors.

    Carries every error collected during the load so the caller can print a
    consolidated report.
    """

    def __init__(self, message: str, errors: Optional[List[Exception]] = None):
        super().__init__(message)
        self.errors = list(errors or [])

    def __str__(self) -> str:
        message = super().__str__()
        if not self.errors:
            return message
        details = "\n".join(f"  - {error}" for error in self.errors)
        return f"{message}\n{details}"


class SecretFileError(ConfigurationError):
    """A secret file referenced by an environment variable could not be read."""

    def __init__(self, path: str, key: str, cause: Exception):
        super().__init__(ERR_FMT_SECRET_IO_ISSUE % (path, key, cause))
        self.path = path
        self.key = key
        self.cause = cause
