"""Entry point: configure logging, load credentials, serve MCP on stdio."""

import asyncio
import sys

from cloudstack_mcp.client import CloudStackClient
from cloudstack_mcp.config import settings
from cloudstack_mcp.core.logging import get_logger, setup_logging
from cloudstack_mcp.errors import ConfigurationError
from cloudstack_mcp.server import run_stdio_server

logger = get_logger(__name__)


def main() -> None:
    setup_logging(
        service_name=settings.service_name,
        service_version=settings.service_version,
        log_level=settings.log_level,
        log_format=settings.log_format,
    )

    try:
        credentials = settings.credentials()
    except ConfigurationError as e:
        logger.error(str(e), missing=e.missing)
        sys.exit(1)

    logger.info(f"Starting CloudStack MCP server for {credentials.api_url}")
    try:
        asyncio.run(
            run_stdio_server(
                CloudStackClient(credentials),
                name=settings.service_name,
                version=settings.service_version,
            )
        )
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
