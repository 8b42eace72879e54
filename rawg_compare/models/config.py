"""Configuration data models."""

from dataclasses import dataclass
from pathlib import Path


DEFAULT_API_URL = "https://api.rawg.io/api"


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    api_key: str
    api_url: str = DEFAULT_API_URL
    log_level: str = "WARNING"
    log_dir: Path | None = None
    request_timeout: float | None = None  # None = HTTP client default
    max_retries: int = 1

    def __repr__(self) -> str:
        # Keep the credential out of logs and tracebacks
        return (
            f"AppConfig(api_key='***', api_url={self.api_url!r}, "
            f"log_level={self.log_level!r}, log_dir={self.log_dir!r}, "
            f"request_timeout={self.request_timeout!r}, max_retries={self.max_retries!r})"
        )
