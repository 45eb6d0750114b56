"""
Tests for per-thread driver lifecycle management.
"""

import os
import threading

import pytest

from webharness.core.browser_manager import BrowserManager
from webharness.data_models import BrowserType
from webharness.exceptions import UnsupportedBrowserError


@pytest.fixture
def settings(make_settings):
    return make_settings({
        "TestSettings": {
            "Browser": "Chrome",
            "Headless": True,
            "ImplicitWait": 3,
            "PageLoadTimeout": 25,
            "DriverPaths": {"Chrome": "/opt/drivers/chromedriver"},
        }
    })


@pytest.fixture
def manager(settings, launcher):
    return BrowserManager(settings, launcher=launcher)


class TestAcquire:
    """Tests for creating and reusing the calling thread's driver."""

    def test_creates_configured_driver(self, manager, launcher):
        driver = manager.acquire()

        assert launcher.launched == [driver]
        assert driver.browser_type is BrowserType.CHROME
        assert driver.headless is True
        assert driver.configured_path == "/opt/drivers/chromedriver"
        assert driver.implicit_wait == 3
        assert driver.page_load_timeout == 25
        assert driver.maximized is True

    def test_second_acquire_returns_same_driver(self, manager, launcher):
        first = manager.acquire()
        second = manager.acquire()

        assert first is second
        assert len(launcher.launched) == 1

    def test_acquire_after_release_creates_new_driver(self, manager, launcher):
        first = manager.acquire()
        manager.release()
        second = manager.acquire()

        assert first is not second
        assert first.quit_calls == 1
        assert second.quit_calls == 0
        assert len(launcher.launched) == 2

    @pytest.mark.parametrize("name,expected", [
        ("chrome", BrowserType.CHROME),
        ("CHROME", BrowserType.CHROME),
        ("Firefox", BrowserType.FIREFOX),
        ("fIrEfOx", BrowserType.FIREFOX),
        ("edge", BrowserType.EDGE),
        ("EDGE", BrowserType.EDGE),
    ])
    def test_browser_name_any_case(self, settings, launcher, monkeypatch, name, expected):
        monkeypatch.setenv("BROWSER", name)
        manager = BrowserManager(settings, launcher=launcher)

        driver = manager.acquire()

        assert driver.browser_type is expected

    @pytest.mark.parametrize("name", ["safari", "opera", "chromium", "ie", " chrome"])
    def test_unsupported_browser(self, settings, launcher, monkeypatch, name):
        monkeypatch.setenv("BROWSER", name)
        manager = BrowserManager(settings, launcher=launcher)

        with pytest.raises(UnsupportedBrowserError) as exc_info:
            manager.acquire()

        assert exc_info.value.browser == name
        assert launcher.launched == []
        assert manager.has_driver() is False

    def test_headless_follows_settings(self, make_settings, launcher, monkeypatch):
        manager = BrowserManager(make_settings({}), launcher=launcher)
        monkeypatch.setenv("HEADLESS", "false")

        assert manager.acquire().headless is False

    def test_launch_failure_propagates_unmodified(self, settings):
        error = RuntimeError("chromedriver crashed")

        def failing_launcher(browser_type, *, headless, configured_path=None):
            raise error

        manager = BrowserManager(settings, launcher=failing_launcher)

        with pytest.raises(RuntimeError) as exc_info:
            manager.acquire()

        assert exc_info.value is error
        assert manager.has_driver() is False

    def test_configuration_failure_quits_new_session(self, settings, launcher, monkeypatch):
        manager = BrowserManager(settings, launcher=launcher)

        def broken_maximize():
            raise RuntimeError("no window manager")

        original_launcher = launcher.__call__

        def launch_with_broken_window(browser_type, *, headless, configured_path=None):
            driver = original_launcher(browser_type, headless=headless, configured_path=configured_path)
            driver.maximize_window = broken_maximize
            return driver

        manager.launcher = launch_with_broken_window

        with pytest.raises(RuntimeError, match="no window manager"):
            manager.acquire()

        assert launcher.launched[0].quit_calls == 1
        assert manager.has_driver() is False


class TestRelease:
    """Tests for quitting the calling thread's driver."""

    def test_release_without_driver_is_noop(self, manager, launcher):
        manager.release()

        assert launcher.launched == []
        assert manager.active_count() == 0

    def test_release_twice(self, manager):
        driver = manager.acquire()
        manager.release()
        manager.release()

        assert driver.quit_calls == 1
        assert manager.has_driver() is False

    def test_quit_failure_still_clears_slot(self, manager):
        driver = manager.acquire()

        def broken_quit():
            raise RuntimeError("session already gone")

        driver.quit = broken_quit

        with pytest.raises(RuntimeError):
            manager.release()

        assert manager.has_driver() is False

    def test_context_manager(self, manager):
        with manager as driver:
            assert manager.has_driver() is True

        assert driver.quit_calls == 1
        assert manager.has_driver() is False


class TestThreads:
    """Each thread owns exactly one driver slot."""

    def _run_in_thread(self, target):
        errors = []

        def wrapper():
            try:
                target()
            except Exception as e:  # surfaced in the main thread below
                errors.append(e)

        thread = threading.Thread(target=wrapper)
        thread.start()
        thread.join(timeout=10)
        assert not errors, errors

    def test_threads_get_distinct_drivers(self, manager, launcher):
        barrier = threading.Barrier(4)
        drivers = {}

        def worker(index):
            driver = manager.acquire()
            assert manager.acquire() is driver
            barrier.wait(timeout=5)
            drivers[index] = driver

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)

        assert len(drivers) == 4
        assert len({id(driver) for driver in drivers.values()}) == 4
        assert len(launcher.launched) == 4
        assert manager.active_count() == 4

    def test_release_only_affects_calling_thread(self, manager):
        main_driver = manager.acquire()
        other = {}

        def worker():
            other["driver"] = manager.acquire()
            manager.release()

        self._run_in_thread(worker)

        assert other["driver"] is not main_driver
        assert other["driver"].quit_calls == 1
        assert main_driver.quit_calls == 0
        assert manager.has_driver() is True
        assert manager.active_count() == 1

    def test_other_thread_release_does_not_touch_main_driver(self, manager):
        main_driver = manager.acquire()

        self._run_in_thread(manager.release)

        assert main_driver.quit_calls == 0
        assert manager.acquire() is main_driver

    def test_finished_threads_never_hand_over_their_driver(self, manager, launcher):
        drivers = []

        def worker():
            drivers.append(manager.acquire())

        # One after another, so a finished thread's identity is free for reuse.
        for _ in range(20):
            self._run_in_thread(worker)

        assert len({id(driver) for driver in drivers}) == 20
        assert len(launcher.launched) == 20
        assert manager.active_count() == 20


class TestWebDriverManagerSsl:
    """The optional SSL switch is exported for webdriver_manager."""

    def test_sets_env_when_configured(self, make_settings, launcher, monkeypatch):
        monkeypatch.setenv("WDM_SSL_VERIFY", "1")

        BrowserManager(make_settings({"TestSettings": {"WebDriverManagerSslVerify": False}}), launcher=launcher)

        assert os.environ["WDM_SSL_VERIFY"] == "0"

    def test_leaves_env_alone_by_default(self, make_settings, launcher, monkeypatch):
        monkeypatch.setenv("WDM_SSL_VERIFY", "1")

        BrowserManager(make_settings({}), launcher=launcher)

        assert os.environ["WDM_SSL_VERIFY"] == "1"

