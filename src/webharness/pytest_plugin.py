"""
Pytest fixtures for browser tests.

Enable from a conftest.py:

    pytest_plugins = ["webharness.pytest_plugin"]

The settings file is chosen the same way as for ConfigLoader()
($WEBHARNESS_SETTINGS_FILE, then config/appsettings.json). Override the
``harness_settings`` or ``browser_manager`` fixture to change that.
"""
import logging
from typing import Generator

import pytest
from selenium.webdriver.remote.webdriver import WebDriver

from .core.browser_manager import BrowserManager
from .core.config_loader import ConfigLoader
from .core.test_settings import TestSettings
from .data_models import TestResult
from .utils.logger import setup_logger
from .utils.screenshots import save_screenshot

logger = logging.getLogger(__name__)

RESULT_ATTR = "harness_result"


def result_from_report(report) -> TestResult:
    if report.failed:
        return TestResult.FAILED
    if report.passed:
        return TestResult.PASSED
    # Skipped (or xfailed) tests never really ran
    return TestResult.NOT_STARTED


def item_failed(item) -> bool:
    """True if any recorded phase (setup, call) of the test failed."""
    results = getattr(item, RESULT_ATTR, {})
    return any(result is TestResult.FAILED for result in results.values())


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    results = getattr(item, RESULT_ATTR, None)
    if results is None:
        results = {}
        setattr(item, RESULT_ATTR, results)
    results[report.when] = result_from_report(report)


@pytest.fixture(scope="session")
def harness_settings() -> TestSettings:
    """Settings shared by the whole test session. Also configures the 'webharness' logger."""
    config_loader = ConfigLoader()
    setup_logger(config_loader, logger_name="webharness")
    return TestSettings(config_loader)


@pytest.fixture(scope="session")
def browser_manager(harness_settings: TestSettings) -> BrowserManager:
    return BrowserManager(harness_settings)


@pytest.fixture(scope="function")
def driver(request, browser_manager: BrowserManager) -> Generator[WebDriver, None, None]:
    """WebDriver for the current test thread, quit after the test."""
    web_driver = browser_manager.acquire()
    try:
        yield web_driver
    finally:
        try:
            settings = browser_manager.settings
            if item_failed(request.node) and settings.screenshot_on_failure:
                logger.info(f"{request.node.nodeid} failed; capturing screenshot.")
                save_screenshot(web_driver, request.node.nodeid, settings.screenshot_directory)
        finally:
            browser_manager.release()
