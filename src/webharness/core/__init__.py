# This file makes webharness.core a Python package and exposes key classes.

from .browser_manager import BrowserManager
from .config_loader import ConfigLoader
from .test_settings import TestSettings

__all__ = [
    "BrowserManager",
    "ConfigLoader",
    "TestSettings",
]
