"""Main entry point - runs the API server."""

import logging

import uvicorn

from swapbridge.api.app import create_app
from swapbridge.config import get_settings

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    settings = get_settings()

    # Configure logging
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logger.info("Starting SwapBridge...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Routing engine: {settings.symbiosis_api_url}")

    app = create_app()
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
