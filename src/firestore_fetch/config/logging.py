"""
Centralized logging configuration.

Every entry point (CLI, invoke tasks, tests) calls bootstrap_logging() so that
status lines carry the same timestamped format, loaded from the packaged
logging.ini using Python's native INI format.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

VALID_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

PACKAGE_LOGGER = 'firestore_fetch'


def _find_logging_config() -> Optional[Path]:
    """
    Find the logging configuration file.

    A logging.ini in the current working directory wins over the one shipped
    inside the package, so a user can reshape output without reinstalling.

    Returns:
        Path to logging configuration file, or None if not found.
    """
    current_dir_config = Path('logging.ini')
    if current_dir_config.exists():
        return current_dir_config

    packaged_config = Path(__file__).parent / 'logging.ini'
    if packaged_config.exists():
        return packaged_config

    return None


def _resolve_level(debug: bool) -> Optional[str]:
    """Return the level requested by --debug or LOG_LEVEL, if any."""
    if debug:
        return 'DEBUG'

    env_log_level = os.environ.get('LOG_LEVEL', '').strip().upper()
    if not env_log_level:
        return None
    if env_log_level not in VALID_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{env_log_level}', using INFO", file=sys.stderr)
        return 'INFO'
    return env_log_level


def _apply_level(level_name: str) -> None:
    level = getattr(logging, level_name)
    for logger_name in (None, PACKAGE_LOGGER):
        target = logging.getLogger(logger_name)
        target.setLevel(level)
        for handler in target.handlers:
            if isinstance(handler, logging.StreamHandler):
                handler.setLevel(level)


def bootstrap_logging(debug: bool = False) -> None:
    """
    Bootstrap logging for the application.

    This function:
    1. Loads logging.ini using logging.config.fileConfig()
    2. Falls back to basicConfig when no INI file is found or it is invalid
    3. Applies --debug or the LOG_LEVEL environment variable afterwards

    Args:
        debug: Force DEBUG level regardless of LOG_LEVEL.
    """
    config_path = _find_logging_config()

    if config_path is None:
        logging.basicConfig(
            level=logging.INFO,
            format='[%(asctime)s] %(levelname)s %(name)s: %(message)s',
            stream=sys.stderr
        )
    else:
        try:
            logging.config.fileConfig(
                str(config_path),
                disable_existing_loggers=False
            )
        except Exception as e:
            print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
            print("Using basic logging configuration", file=sys.stderr)
            logging.basicConfig(
                level=logging.INFO,
                format='[%(asctime)s] %(levelname)s %(name)s: %(message)s',
                stream=sys.stderr
            )

    level_name = _resolve_level(debug)
    if level_name:
        _apply_level(level_name)

    logging.getLogger(__name__).debug(f"Logging configured from {config_path or 'basicConfig'}")
