"""
Browser manager package.

Public API:
- BrowserManager: creates, hands out and quits one Selenium WebDriver per thread.
"""

from .service import BrowserManager

__all__ = ["BrowserManager"]
