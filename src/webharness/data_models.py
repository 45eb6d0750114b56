from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import UnsupportedBrowserError


class BrowserType(str, Enum):
    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"

    @classmethod
    def from_name(cls, name: str) -> "BrowserType":
        """Case-insensitive lookup; raises UnsupportedBrowserError for anything else."""
        try:
            return cls(str(name).lower())
        except ValueError:
            raise UnsupportedBrowserError(name) from None

    @property
    def config_name(self) -> str:
        """Name as written in the settings file (e.g. 'Chrome')."""
        return self.value.capitalize()


class TestResult(str, Enum):
    """Outcome of a single test as recorded by the pytest plugin."""
    __test__ = False

    NOT_STARTED = "not_started"
    PASSED = "passed"
    FAILED = "failed"


class SettingsSnapshot(BaseModel):
    """Resolved settings frozen at one point in time."""
    model_config = ConfigDict(frozen=True)

    base_url: str
    browser: str
    headless: bool
    implicit_wait: int = Field(..., description="Implicit wait in seconds.")
    page_load_timeout: int = Field(..., description="Page load timeout in seconds.")
    screenshot_on_failure: bool
    valid_username: str
    valid_password: str = Field(..., repr=False)
