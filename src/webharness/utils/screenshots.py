import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver

from ..core.config_loader import PROJECT_ROOT

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9._-]+')


def screenshot_filename(test_name: str, when: Optional[datetime] = None) -> str:
    """'tests/test_login.py::test_ok[chrome]' -> 'tests_test_login.py_test_ok_chrome_20240101_120000_000000.png'"""
    safe_name = _UNSAFE_CHARS.sub('_', test_name).strip('_') or 'screenshot'
    stamp = (when or datetime.now()).strftime('%Y%m%d_%H%M%S_%f')
    return f"{safe_name}_{stamp}.png"


def save_screenshot(driver: WebDriver, test_name: str, directory: Union[str, Path]) -> Optional[Path]:
    """
    Saves a PNG of the current browser window.

    Relative directories are resolved against the project root. Returns the
    written path, or None if the browser could not produce a screenshot or the
    file could not be written.
    """
    target_dir = Path(directory)
    if not target_dir.is_absolute():
        target_dir = PROJECT_ROOT / target_dir
    path = target_dir / screenshot_filename(test_name)

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        saved = driver.save_screenshot(str(path))
    except OSError as e:
        logger.error(f"Could not write screenshot for '{test_name}' to {target_dir}: {e}")
        return None
    except WebDriverException as e:
        logger.error(f"Could not capture screenshot for '{test_name}': {e}")
        return None
    if not saved:
        logger.warning(f"Browser reported a failed screenshot write for '{test_name}'.")
        return None

    logger.info(f"Saved screenshot: {path}")
    return path
