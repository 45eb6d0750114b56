"""Per-thread Selenium WebDriver management and layered test settings."""

from .exceptions import ConfigurationLoadError, HarnessError, UnsupportedBrowserError
from .data_models import BrowserType, SettingsSnapshot, TestResult
from .core import BrowserManager, ConfigLoader, TestSettings

__version__ = "0.1.0"

__all__ = [
    "BrowserManager",
    "BrowserType",
    "ConfigLoader",
    "ConfigurationLoadError",
    "HarnessError",
    "SettingsSnapshot",
    "TestResult",
    "TestSettings",
    "UnsupportedBrowserError",
]
