import logging
import shutil
from typing import Callable, Dict, Optional

from selenium import webdriver
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.chrome.service import Service as ChromeService
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.edge.service import Service as EdgeService
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.firefox.service import Service as FirefoxService
from selenium.webdriver.remote.webdriver import WebDriver

from webdriver_manager.chrome import ChromeDriverManager
from webdriver_manager.firefox import GeckoDriverManager
from webdriver_manager.microsoft import EdgeChromiumDriverManager

from ...data_models import BrowserType
from .options import configure_driver_options

logger = logging.getLogger(__name__)


def init_chrome_driver(options: ChromeOptions, *, configured_path: Optional[str]) -> WebDriver:
    local_driver = configured_path or shutil.which('chromedriver')
    if local_driver:
        logger.info(f"Using local chromedriver at: {local_driver}")
        service = ChromeService(executable_path=local_driver)
    else:
        logger.info("Local chromedriver not found. Falling back to webdriver_manager (requires internet).")
        service = ChromeService(ChromeDriverManager().install())
    return webdriver.Chrome(service=service, options=options)


def init_firefox_driver(options: FirefoxOptions, *, configured_path: Optional[str]) -> WebDriver:
    local_driver = configured_path or shutil.which('geckodriver')
    if local_driver:
        logger.info(f"Using local geckodriver at: {local_driver}")
        service = FirefoxService(executable_path=local_driver)
    else:
        logger.info("Local geckodriver not found. Falling back to webdriver_manager (requires internet).")
        service = FirefoxService(GeckoDriverManager().install())
    return webdriver.Firefox(service=service, options=options)


def init_edge_driver(options: EdgeOptions, *, configured_path: Optional[str]) -> WebDriver:
    local_driver = configured_path or shutil.which('msedgedriver')
    if local_driver:
        logger.info(f"Using local msedgedriver at: {local_driver}")
        service = EdgeService(executable_path=local_driver)
    else:
        logger.info("Local msedgedriver not found. Falling back to webdriver_manager (requires internet).")
        service = EdgeService(EdgeChromiumDriverManager().install())
    return webdriver.Edge(service=service, options=options)


DRIVER_INITIALIZERS: Dict[BrowserType, Callable[..., WebDriver]] = {
    BrowserType.CHROME: init_chrome_driver,
    BrowserType.FIREFOX: init_firefox_driver,
    BrowserType.EDGE: init_edge_driver,
}


def launch_driver(browser_type: BrowserType, *, headless: bool, configured_path: Optional[str] = None) -> WebDriver:
    """Builds the launch options for the browser and starts a new session."""
    options = configure_driver_options(browser_type, headless=headless)
    return DRIVER_INITIALIZERS[browser_type](options, configured_path=configured_path)
