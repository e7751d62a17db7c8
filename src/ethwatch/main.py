"""ETH Balance Watcher - Main application entry point."""

import sys

import structlog
import uvicorn

from ethwatch.api.app import create_app
from ethwatch.config.logging import configure_logging
from ethwatch.config.settings import load_settings
from ethwatch.core.exceptions import ConfigurationError

log = structlog.get_logger()


def main() -> None:
    """Load configuration and serve the app with uvicorn.

    uvicorn handles SIGINT/SIGTERM and runs the lifespan shutdown,
    which stops the balance monitor.
    """
    try:
        settings = load_settings()
        configure_logging(settings)
        app = create_app(settings)
    except ConfigurationError as e:
        log.error("failed_to_load_configuration", error=str(e))
        sys.exit(1)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.metrics_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
