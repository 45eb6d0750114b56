import os

WINDOW_WIDTH = 1920
WINDOW_HEIGHT = 1080

# Chromium-family headless switch
CHROMIUM_HEADLESS_ARG = "--headless=new"
FIREFOX_HEADLESS_ARG = "--headless"

CHROME_ARGUMENTS = (
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    f"--window-size={WINDOW_WIDTH},{WINDOW_HEIGHT}",
    "--disable-extensions",
    "--disable-popup-blocking",
    "--log-level=3",
)
CHROME_EXCLUDED_SWITCHES = ("enable-logging",)

EDGE_ARGUMENTS = (
    f"--window-size={WINDOW_WIDTH},{WINDOW_HEIGHT}",
)

FIREFOX_ARGUMENTS = (
    f"--width={WINDOW_WIDTH}",
    f"--height={WINDOW_HEIGHT}",
)

# Environment variable key used by webdriver_manager to control SSL verification
WDM_SSL_VERIFY_ENV = "WDM_SSL_VERIFY"


def set_wdm_ssl_verify(enabled: bool) -> None:
    os.environ[WDM_SSL_VERIFY_ENV] = '1' if enabled else '0'
