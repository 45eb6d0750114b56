import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Union, Optional

from ..exceptions import ConfigurationLoadError

# Define project root relative to this file's location (src/webharness/core/config_loader.py)
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / 'config'
DEFAULT_SETTINGS_FILE = CONFIG_DIR / 'appsettings.json'

# Points the default ConfigLoader at another settings file (e.g. per CI job)
SETTINGS_FILE_ENV = 'WEBHARNESS_SETTINGS_FILE'

logger = logging.getLogger(__name__)


def default_settings_file() -> Path:
    override = os.environ.get(SETTINGS_FILE_ENV)
    if override:
        return Path(override)
    return DEFAULT_SETTINGS_FILE


_MISSING = object()


def find_key(mapping: Dict[str, Any], key: str, default: Any = None) -> Any:
    """Returns mapping[key], matching the key without regard to case when there is no exact match."""
    if key in mapping:
        return mapping[key]
    folded = key.casefold()
    for candidate, value in mapping.items():
        if isinstance(candidate, str) and candidate.casefold() == folded:
            return value
    return default


class ConfigLoader:
    def __init__(self, settings_file: Optional[Union[str, Path]] = None):
        """
        Initializes the ConfigLoader and reads the settings file.

        Args:
            settings_file (Union[str, Path], optional): Path to the settings JSON file.
                                                        Defaults to $WEBHARNESS_SETTINGS_FILE,
                                                        then 'config/appsettings.json'.

        Raises:
            ConfigurationLoadError: If the file is missing or is not a well-formed JSON object.
        """
        self.settings_file: Path = Path(settings_file) if settings_file else default_settings_file()
        self.settings: Dict[str, Any] = self._load_json(self.settings_file)

    def _load_json(self, file_path: Path) -> Dict[str, Any]:
        """
        Loads a JSON settings file. The harness has no fallback for an unreadable
        file, so every failure is raised.

        Args:
            file_path (Path): The path to the JSON file.

        Returns:
            Dict[str, Any]: The top-level JSON object.
        """
        if not file_path.exists():
            logger.error(f"Configuration file not found: {file_path}")
            raise ConfigurationLoadError(file_path, "file not found")
        if not file_path.is_file():
            logger.error(f"Configuration path is not a file: {file_path}")
            raise ConfigurationLoadError(file_path, "path is not a file")

        try:
            with file_path.open('r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Could not decode JSON from {file_path}: {e}")
            raise ConfigurationLoadError(file_path, f"malformed JSON ({e})", e) from e
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read {file_path}: {e}")
            raise ConfigurationLoadError(file_path, str(e), e) from e

        if not isinstance(data, dict):
            logger.error(f"Configuration root in {file_path} is {type(data).__name__}, expected an object.")
            raise ConfigurationLoadError(file_path, "top-level JSON value must be an object")

        logger.debug(f"Successfully loaded JSON from {file_path}")
        return data

    def reload(self) -> None:
        """Re-reads the settings file. On failure the previous settings are kept and the error is raised."""
        self.settings = self._load_json(self.settings_file)
        logger.info(f"Reloaded settings from {self.settings_file}")

    def get_settings(self) -> Dict[str, Any]:
        """Returns all loaded settings."""
        return self.settings

    def get_setting(self, path_str: str, default: Any = None) -> Any:
        """
        Retrieves a setting value using a dot-separated path. Keys match without
        regard to case; an exact match wins over a case-folded one.

        Args:
            path_str (str): Dot-separated path to the setting (e.g., "TestSettings.BaseUrl").
            default (Any, optional): Default value if the setting is not found. Defaults to None.

        Returns:
            Any: The setting value or the default.
        """
        current_level: Any = self.settings
        for key in path_str.split('.'):
            if not isinstance(current_level, dict):
                logger.debug(f"Invalid path '{path_str}' at key '{key}'. Expected a dictionary, found {type(current_level).__name__}.")
                return default
            current_level = find_key(current_level, key, _MISSING)
            if current_level is _MISSING:
                logger.debug(f"Setting '{path_str}' not found. Returning default: {default}")
                return default
        return current_level

    def get_section(self, section: str) -> Dict[str, Any]:
        """Retrieves a top-level block (e.g. 'TestSettings', 'logging'); empty if absent or not an object."""
        value = find_key(self.settings, section)
        return value if isinstance(value, dict) else {}

    def get_logging_setting(self, setting_name: str, default: Any = None) -> Any:
        """Retrieves a specific setting from the 'logging' block."""
        return self.get_setting(f'logging.{setting_name}', default)
