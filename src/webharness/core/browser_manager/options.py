import logging
from typing import Union

from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.edge.options import Options as EdgeOptions
from selenium.webdriver.firefox.options import Options as FirefoxOptions

from ...data_models import BrowserType
from .constants import (
    CHROME_ARGUMENTS,
    CHROME_EXCLUDED_SWITCHES,
    CHROMIUM_HEADLESS_ARG,
    EDGE_ARGUMENTS,
    FIREFOX_ARGUMENTS,
    FIREFOX_HEADLESS_ARG,
)

logger = logging.getLogger(__name__)

DriverOptions = Union[ChromeOptions, EdgeOptions, FirefoxOptions]


def chrome_options(*, headless: bool) -> ChromeOptions:
    options = ChromeOptions()
    if headless:
        options.add_argument(CHROMIUM_HEADLESS_ARG)
    for arg in CHROME_ARGUMENTS:
        options.add_argument(arg)
    options.add_experimental_option("excludeSwitches", list(CHROME_EXCLUDED_SWITCHES))
    return options


def edge_options(*, headless: bool) -> EdgeOptions:
    options = EdgeOptions()
    if headless:
        options.add_argument(CHROMIUM_HEADLESS_ARG)
    for arg in EDGE_ARGUMENTS:
        options.add_argument(arg)
    return options


def firefox_options(*, headless: bool) -> FirefoxOptions:
    options = FirefoxOptions()
    if headless:
        options.add_argument(FIREFOX_HEADLESS_ARG)
    for arg in FIREFOX_ARGUMENTS:
        options.add_argument(arg)
    return options


def configure_driver_options(browser_type: BrowserType, *, headless: bool) -> DriverOptions:
    if browser_type is BrowserType.CHROME:
        options = chrome_options(headless=headless)
    elif browser_type is BrowserType.EDGE:
        options = edge_options(headless=headless)
    else:
        options = firefox_options(headless=headless)
    logger.debug(f"{browser_type.config_name} launch arguments: {options.arguments}")
    return options
