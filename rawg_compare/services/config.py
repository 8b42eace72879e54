"""Configuration service for loading settings from the environment."""

import math
import os
from collections.abc import Mapping
from pathlib import Path

import structlog
from dotenv import dotenv_values

from ..models import AppConfig
from ..models.config import DEFAULT_API_URL
from .errors import ConfigurationError

log = structlog.stdlib.get_logger()


API_KEY_VAR = "RAWG_API_KEY"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
MAX_RETRIES_LIMIT = 10


class ConfigurationService:
    """Service for building the application configuration.

    Settings come from the process environment first and from a ``.env``
    file second, so an exported variable always wins over the file. Each
    optional setting is checked on its own; an invalid one is replaced by
    its default without touching the others.
    """

    def __init__(
        self,
        env_file: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.env_file: Path = env_file or Path.cwd() / ".env"
        self._environ: Mapping[str, str] = os.environ if environ is None else environ
        log.debug("Configuration service initialized", env_file=str(self.env_file))

    def load_settings(self) -> dict[str, str]:
        """Merge the .env file with the environment into one flat mapping."""
        settings: dict[str, str] = {}
        if self.env_file.is_file():
            file_values = dotenv_values(self.env_file)
            settings.update({k: v for k, v in file_values.items() if v is not None})
            log.debug("Loaded .env file", env_file=str(self.env_file), keys=len(file_values))
        settings.update(self._environ)
        return settings

    def load_config(self) -> AppConfig:
        """Load configuration, falling back to defaults for invalid optional values.

        Raises:
            ConfigurationError: If the API key is missing or blank
        """
        settings = self.load_settings()

        api_key = settings.get(API_KEY_VAR, "").strip()
        if not api_key:
            raise ConfigurationError(
                f"{API_KEY_VAR} not found in the environment or .env file",
                setting=API_KEY_VAR,
                expected="a RAWG API key from https://rawg.io/apidocs",
            )

        config = self._dict_to_config(api_key, settings)
        log.debug("Configuration loaded", config=repr(config))
        return config

    def _dict_to_config(self, api_key: str, data: Mapping[str, str]) -> AppConfig:
        """Convert raw string settings to AppConfig."""
        log_dir_raw = data.get("RAWG_LOG_DIR", "").strip()

        return AppConfig(
            api_key=api_key,
            api_url=self._parse_api_url(data.get("RAWG_API_URL", "")),
            log_level=self._parse_log_level(data.get("RAWG_LOG_LEVEL", "")),
            log_dir=Path(log_dir_raw).expanduser() if log_dir_raw else None,
            request_timeout=self._parse_timeout(data.get("RAWG_TIMEOUT", "")),
            max_retries=self._parse_max_retries(data.get("RAWG_MAX_RETRIES", "")),
        )

    def _parse_api_url(self, raw: str) -> str:
        value = raw.strip().rstrip("/")
        if not value:
            return DEFAULT_API_URL
        if not value.startswith(("http://", "https://")):
            log.warning("RAWG_API_URL must be an http(s) URL, using default", value=value)
            return DEFAULT_API_URL
        return value

    def _parse_log_level(self, raw: str) -> str:
        value = raw.strip().upper()
        if not value:
            return "WARNING"
        if value not in VALID_LOG_LEVELS:
            log.warning("Invalid RAWG_LOG_LEVEL, using default", value=value, expected=VALID_LOG_LEVELS)
            return "WARNING"
        return value

    def _parse_timeout(self, raw: str) -> float | None:
        value = raw.strip()
        if not value:
            return None
        try:
            timeout = float(value)
        except ValueError:
            log.warning("Ignoring non-numeric RAWG_TIMEOUT", value=value)
            return None
        # float() accepts "nan" and "inf"
        if not math.isfinite(timeout) or timeout <= 0:
            log.warning("RAWG_TIMEOUT must be a positive number, using default", value=value)
            return None
        return timeout

    def _parse_max_retries(self, raw: str) -> int:
        value = raw.strip()
        if not value:
            return 1
        try:
            retries = int(value)
        except ValueError:
            log.warning("Ignoring non-integer RAWG_MAX_RETRIES", value=value)
            return 1
        if not 0 <= retries <= MAX_RETRIES_LIMIT:
            log.warning("RAWG_MAX_RETRIES out of range, using default", value=value, maximum=MAX_RETRIES_LIMIT)
            return 1
        return retries
