from __future__ import annotations

import logging

from fastmcp import FastMCP

from project_address.app.container import build_container
from project_address.app.settings import get_settings
from project_address.app.logger import configure_logging
from project_address.tools.address_tools import register_address_tools

_settings = get_settings()
configure_logging(_settings.log_level)
log = logging.getLogger(__name__)

mcp = FastMCP("project-address")

try:
    _container = build_container(_settings)
    register_address_tools(mcp, _container)
    log.info("Address tools registered successfully")
except Exception as e:
    log.error("Failed to register address tools: %s", e, exc_info=True)
    raise


def main() -> None:
    settings = _container.settings
    mcp.run(
        transport="http",
        host=settings.mcp_host,
        port=settings.mcp_port,
        path=settings.mcp_path,
    )


if __name__ == "__main__":
    main()
