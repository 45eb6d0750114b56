import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.config_loader import ConfigLoader, PROJECT_ROOT

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/harness.log'
DEFAULT_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 5


def _handler_config(config_loader: ConfigLoader, name: str) -> Dict[str, Any]:
    # A handler block that is not an object (e.g. "console_handler": true) is ignored.
    value = config_loader.get_logging_setting(name)
    return value if isinstance(value, dict) else {}


def _level(name: Any, fallback: int) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else fallback


def setup_logger(config_loader: Optional[ConfigLoader] = None, logger_name: Optional[str] = None) -> logging.Logger:
    """
    Configures a logger (the root logger by default) from the 'logging' block
    of the settings file and returns it. Calling it again replaces the
    handlers it added before.

    Recognised keys: level, format, propagate, console_handler
    (enabled/level), file_handler (enabled/path/level/max_bytes/backup_count).
    A file handler with max_bytes > 0 rotates by size.
    """
    if config_loader is None:
        config_loader = ConfigLoader()

    log_level = _level(config_loader.get_logging_setting('level', 'INFO'), logging.INFO)
    formatter = logging.Formatter(config_loader.get_logging_setting('format') or DEFAULT_LOG_FORMAT)

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if logger_name is not None:
        logger.propagate = bool(config_loader.get_logging_setting('propagate', False))

    console_config = _handler_config(config_loader, 'console_handler')
    if console_config.get('enabled', True):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(_level(console_config.get('level', log_level), log_level))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    file_config = _handler_config(config_loader, 'file_handler')
    if file_config.get('enabled', False):
        log_file_path = Path(file_config.get('path') or DEFAULT_LOG_FILE)
        if not log_file_path.is_absolute():
            log_file_path = PROJECT_ROOT / log_file_path

        try:
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # Logger isn't usable yet, report on stderr
            print(f"Error: Could not create log directory {log_file_path.parent}. File logging disabled. Error: {e}", file=sys.stderr)
        else:
            max_bytes = int(file_config.get('max_bytes', DEFAULT_MAX_BYTES))
            if max_bytes > 0:
                file_handler = logging.handlers.RotatingFileHandler(
                    log_file_path, maxBytes=max_bytes,
                    backupCount=int(file_config.get('backup_count', DEFAULT_BACKUP_COUNT)),
                    encoding='utf-8',
                )
            else:
                file_handler = logging.FileHandler(log_file_path, encoding='utf-8')
            file_handler.setLevel(_level(file_config.get('level', log_level), log_level))
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    # Nothing enabled: keep logging quiet instead of falling back to lastResort
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
