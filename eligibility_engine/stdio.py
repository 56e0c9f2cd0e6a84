"""stdio entry point: the MCP tool over stdin/stdout."""

from __future__ import annotations

import logging
import sys

from eligibility_engine.core import configure_logging, get_settings
from eligibility_engine.main import build_service
from eligibility_engine.unpaid_leave import create_mcp_server

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    # stdout carries the protocol
    configure_logging(settings.log_level, stream=sys.stderr)
    logger.info("Starting Eligibility Engine MCP server using stdio transport")

    service = build_service()
    try:
        create_mcp_server(service).run(transport="stdio")
    finally:
        service.shutdown()


if __name__ == "__main__":
    main()
