"""
Configuration module for the Traffic AQI System.

This module contains the AppConfig dataclass which gathers runtime settings
from environment variables (optionally loaded from a .env file), and the
logging setup shared by the library and the web UI.

Environment variables:
- TRAFFICAQI_LOOKUP_MODE: "offline" (default, no network) or "waqi"
- WAQI_API_TOKEN: token for the WAQI station feed (required for "waqi")
- TRAFFICAQI_LOOKUP_TIMEOUT: request timeout in seconds (default 6)
- TRAFFICAQI_LOG_DIR: directory of the prediction audit log (default "logs")
- TRAFFICAQI_LOG_LEVEL: Python logging level name (default "INFO")
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

LOOKUP_MODES = ("offline", "waqi")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """
    Runtime settings for the Traffic AQI System.

    Attributes:
        lookup_mode: "offline" or "waqi"
        waqi_token: WAQI API token, or None
        lookup_timeout: HTTP timeout in seconds for live lookups
        log_dir: Directory holding the prediction audit log
        log_level: Logging level name
    """

    lookup_mode: str = "offline"
    waqi_token: Optional[str] = None
    lookup_timeout: float = 6.0
    log_dir: Path = Path("logs")
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "AppConfig":
        """
        Builds the configuration from environment variables.

        If "waqi" mode is requested without a token, falls back to "offline".

        Args:
            load_dotenv_file: If True, load a .env file into the environment first

        Raises:
            ConfigurationError: If a numeric setting cannot be parsed
        """
        if load_dotenv_file:
            load_dotenv()

        env_mode = os.getenv("TRAFFICAQI_LOOKUP_MODE", "").lower()
        mode = env_mode if env_mode in LOOKUP_MODES else "offline"
        if env_mode and env_mode not in LOOKUP_MODES:
            logger.warning("Unknown TRAFFICAQI_LOOKUP_MODE %r, falling back to offline mode", env_mode)

        token = os.getenv("WAQI_API_TOKEN") or None
        if mode == "waqi" and token is None:
            logger.warning("WAQI lookup mode requested but WAQI_API_TOKEN is not set, falling back to offline mode")
            mode = "offline"

        raw_timeout = os.getenv("TRAFFICAQI_LOOKUP_TIMEOUT", "6")
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ConfigurationError(f"TRAFFICAQI_LOOKUP_TIMEOUT must be a number, got {raw_timeout!r}") from e
        if timeout <= 0:
            raise ConfigurationError("TRAFFICAQI_LOOKUP_TIMEOUT must be > 0")

        return cls(
            lookup_mode=mode,
            waqi_token=token,
            lookup_timeout=timeout,
            log_dir=Path(os.getenv("TRAFFICAQI_LOG_DIR", "logs")),
            log_level=os.getenv("TRAFFICAQI_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> logging.Logger:
    """
    Sets up the package logger with a standard stream handler.

    Calling it again only updates the level.
    """
    package_logger = logging.getLogger("trafficaqi")
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return package_logger
