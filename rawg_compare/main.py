"""Main entry point for the RAWG comparison client.

This module provides the application entry point with:
- Configuration loading and the fatal missing-credential check
- Application initialization and dependency injection
- Exit code handling for normal termination and interrupts
"""

import asyncio
import sys

import structlog

from rawg_compare import __version__
from rawg_compare.models import AppConfig
from rawg_compare.services.config import ConfigurationService
from rawg_compare.services.errors import ConfigurationError
from rawg_compare.services.http_client import HttpClientService
from rawg_compare.services.logging import setup_logging
from rawg_compare.services.rawg_client import RawgClient
from rawg_compare.ui.display import format_suggestions


log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Container for application services.

    Services are created on first use and released by ``cleanup``.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config: AppConfig = config

        self._http_client: HttpClientService | None = None
        self._rawg_client: RawgClient | None = None

    @property
    def http_client(self) -> HttpClientService:
        """Get the HTTP client service (lazy initialization)."""
        if self._http_client is None:
            self._http_client = HttpClientService(
                timeout=self.config.request_timeout,
                max_retries=self.config.max_retries,
            )
        return self._http_client

    @property
    def rawg_client(self) -> RawgClient:
        """Get the RAWG client (lazy initialization)."""
        if self._rawg_client is None:
            self._rawg_client = RawgClient(
                http_client=self.http_client,
                api_key=self.config.api_key,
                base_url=self.config.api_url,
            )
        return self._rawg_client

    async def cleanup(self) -> None:
        """Close open connections."""
        if self._http_client is not None:
            await self._http_client.close()
        log.debug("Application cleanup complete")


async def run_cli(context: ApplicationContext) -> int:
    """Run the interactive loop.

    Args:
        context: Application context with the configured services

    Returns:
        Exit code (0 for success)
    """
    from rawg_compare.ui.app import CompareApp

    try:
        app = CompareApp(rawg_client=context.rawg_client)
        return await app.run()
    finally:
        await context.cleanup()


def load_config(config_service: ConfigurationService | None = None) -> AppConfig:
    """Load configuration, exiting with status 1 when the API key is missing."""
    config_service = config_service or ConfigurationService()
    try:
        return config_service.load_config()
    except ConfigurationError as e:
        log.critical("Configuration error", error=e.message, setting=e.setting)
        print(f"Fatal error: {e.message}", file=sys.stderr)
        print(format_suggestions(e.suggested_actions), file=sys.stderr)
        sys.exit(1)


def main() -> None:
    """Main entry point for the application."""
    # Console-only logging until the configured level is known
    _ = setup_logging()
    config = load_config()

    _ = setup_logging(log_level=config.log_level, log_dir=config.log_dir)

    log.info(
        "Starting rawg-compare",
        version=__version__,
        log_level=config.log_level,
        api_url=config.api_url,
    )

    context = ApplicationContext(config)

    try:
        exit_code = asyncio.run(run_cli(context))

    except KeyboardInterrupt:
        log.info("Application interrupted by user")
        print()
        exit_code = 130  # Standard exit code for SIGINT

    except Exception as e:
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        exit_code = 1

    log.info("Application exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
