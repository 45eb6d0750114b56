"""
Test configuration and fixtures.

Puts src/ on sys.path so the suite also runs from a plain checkout, and clears
every harness environment override before each test.
"""
import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from webharness.core.config_loader import ConfigLoader, SETTINGS_FILE_ENV  # noqa: E402
from webharness.core.test_settings import TestSettings  # noqa: E402

HARNESS_ENV_VARS = ("BROWSER", "HEADLESS", "SCREENSHOT_ON_FAILURE", SETTINGS_FILE_ENV)


class FakeDriver:
    """Stands in for a Selenium WebDriver; records what the harness did to it."""

    def __init__(self, browser_type=None, headless=False, configured_path=None):
        self.browser_type = browser_type
        self.headless = headless
        self.configured_path = configured_path
        self.implicit_wait = None
        self.page_load_timeout = None
        self.maximized = False
        self.quit_calls = 0
        self.screenshots = []

    def implicitly_wait(self, seconds):
        self.implicit_wait = seconds

    def set_page_load_timeout(self, seconds):
        self.page_load_timeout = seconds

    def maximize_window(self):
        self.maximized = True

    def quit(self):
        self.quit_calls += 1

    def save_screenshot(self, filename):
        Path(filename).write_bytes(b"\x89PNG")
        self.screenshots.append(filename)
        return True


class RecordingLauncher:
    """Launcher that hands out a new FakeDriver per call."""

    def __init__(self):
        self.launched = []

    def __call__(self, browser_type, *, headless, configured_path=None):
        driver = FakeDriver(browser_type, headless, configured_path)
        self.launched.append(driver)
        return driver


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in HARNESS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_settings(tmp_path):
    """Writes a settings document to a temp appsettings.json and returns its path."""
    def _write(data, name="appsettings.json"):
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def make_settings(write_settings):
    def _make(data=None):
        return TestSettings(ConfigLoader(write_settings(data if data is not None else {})))
    return _make


@pytest.fixture
def launcher():
    return RecordingLauncher()


@pytest.fixture
def fake_driver():
    return FakeDriver()
