"""
Exceptions raised by the harness.

Parse failures for individual settings are never raised; they resolve to the
setting's default instead.
"""
from pathlib import Path
from typing import Optional, Union


class HarnessError(Exception):
    """Base class for all harness errors."""


class ConfigurationLoadError(HarnessError):
    """The settings file is missing, unreadable, or not a JSON object."""

    def __init__(self, path: Union[str, Path], reason: str, cause: Optional[BaseException] = None):
        self.path = Path(path)
        self.reason = reason
        self.cause = cause
        super().__init__(f"Could not load configuration from '{self.path}': {reason}")


class UnsupportedBrowserError(HarnessError, ValueError):
    """The resolved browser name matches none of the supported engines."""

    def __init__(self, browser: str):
        self.browser = browser
        super().__init__(f"Unsupported browser '{browser}'. Expected one of: chrome, firefox, edge.")
