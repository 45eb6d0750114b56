# This file makes webharness.utils a Python package and exposes key utilities.

from .logger import setup_logger
from .screenshots import save_screenshot

__all__ = [
    "setup_logger",
    "save_screenshot",
]
