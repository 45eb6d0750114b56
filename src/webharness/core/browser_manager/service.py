import logging
import threading
from typing import Callable, Dict, Optional

from selenium.webdriver.remote.webdriver import WebDriver

from ...data_models import BrowserType
from ..test_settings import TestSettings
from .constants import set_wdm_ssl_verify
from .drivers import launch_driver

logger = logging.getLogger(__name__)

# (browser_type, headless, configured_path) -> new WebDriver session
DriverLauncher = Callable[..., WebDriver]


class BrowserManager:
    """
    Owns one WebDriver per thread.

    Each thread moves between two states: no driver, or one active driver.
    ``acquire()`` creates the driver on first use and returns the same one
    until ``release()`` quits it. Drivers are never shared or handed to
    another thread.
    """

    def __init__(self, settings: TestSettings, launcher: Optional[DriverLauncher] = None):
        self.settings = settings
        self.launcher: DriverLauncher = launcher if launcher else launch_driver
        # Keyed by Thread object: the map keeps it alive, so its identity is never reused.
        self._drivers: Dict[threading.Thread, WebDriver] = {}
        self._lock = threading.Lock()

        wdm_ssl_verify = settings.webdriver_manager_ssl_verify
        if wdm_ssl_verify is not None:
            set_wdm_ssl_verify(wdm_ssl_verify)
            logger.info("WebDriver Manager SSL verification set.")

    def acquire(self) -> WebDriver:
        """Returns the calling thread's driver, creating it if the thread has none."""
        thread = threading.current_thread()
        with self._lock:
            driver = self._drivers.get(thread)
        if driver is not None:
            return driver

        # Only this thread writes its own slot, so launching outside the lock is safe.
        driver = self._create_driver()
        with self._lock:
            self._drivers[thread] = driver
        return driver

    def release(self) -> None:
        """Quits the calling thread's driver. Does nothing if the thread has none."""
        thread = threading.current_thread()
        with self._lock:
            driver = self._drivers.pop(thread, None)
        if driver is None:
            logger.debug(f"No active WebDriver for thread {thread.name}; nothing to release.")
            return
        driver.quit()
        logger.info(f"WebDriver session closed for thread {thread.name}.")

    def has_driver(self) -> bool:
        with self._lock:
            return threading.current_thread() in self._drivers

    def active_count(self) -> int:
        with self._lock:
            return len(self._drivers)

    def _create_driver(self) -> WebDriver:
        browser_name = self.settings.browser
        browser_type = BrowserType.from_name(browser_name)
        headless = self.settings.headless
        logger.info(f"Launching {browser_type.config_name} WebDriver (headless={headless}).")

        try:
            driver = self.launcher(
                browser_type,
                headless=headless,
                configured_path=self.settings.get_driver_path(browser_type),
            )
        except Exception as e:
            logger.error(f"Failed to initialize {browser_type.config_name} driver: {e}", exc_info=True)
            raise

        try:
            driver.implicitly_wait(self.settings.implicit_wait)
            driver.set_page_load_timeout(self.settings.page_load_timeout)
            driver.maximize_window()
        except Exception:
            logger.error(f"Failed to configure {browser_type.config_name} driver; quitting the new session.", exc_info=True)
            try:
                driver.quit()
            except Exception as quit_error:
                logger.warning(f"Error quitting half-configured WebDriver: {quit_error}")
            raise

        logger.info(f"{browser_type.config_name} WebDriver initialized successfully.")
        return driver

    def __enter__(self) -> WebDriver:
        return self.acquire()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
