# ABOUTME: FastMCP server initialization and main entry point
# ABOUTME: Configures MCP server with tools, resources, and lifecycle management

"""Portainer MCP Server - Portainer management for AI assistants."""

from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from importlib import resources
from typing import TYPE_CHECKING, Any

import structlog
from mcp.server.fastmcp import FastMCP

from portainer_mcp import state
from portainer_mcp.config import load_settings
from portainer_mcp.tools import register_all_tools
from portainer_mcp.tools.base import ToolRegistry
from portainer_mcp.utils.client import PortainerClient
from portainer_mcp.utils.logging import AuditLogger, configure_logging
from portainer_mcp.utils.tool_definitions import load_tool_definitions
from portainer_mcp.utils.version import check_portainer_version

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = structlog.get_logger(__name__)

MINIMUM_TOOLS_VERSION = "1.0"


def default_tools_file() -> Any:
    """Location of the tools.yaml shipped with the package."""
    return resources.files("portainer_mcp").joinpath("tools.yaml")


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Manage server lifecycle: load config, check Portainer, register tools, cleanup."""
    settings = load_settings()
    configure_logging(level=settings.log_level, json_output=settings.log_json)

    logger.info("Starting Portainer MCP Server", read_only=settings.security.read_only)

    definitions = load_tool_definitions(
        settings.tools_file or default_tools_file(),
        minimum_version=MINIMUM_TOOLS_VERSION,
    )
    audit_logger = AuditLogger(settings.security.audit_log)

    instance = settings.instance
    if instance is None:
        raise RuntimeError("PORTAINER_URL is not set")

    async with PortainerClient(instance, timeout=settings.request_timeout) as client:
        server_version: str | None = None
        if settings.disable_version_check:
            logger.warning("Portainer version check disabled")
        else:
            server_version = await client.get_version()
            check_portainer_version(server_version)
            logger.info("Connected to Portainer", url=instance.url, version=server_version)

        registry = ToolRegistry(server, definitions, read_only=settings.security.read_only)
        registered = register_all_tools(registry)
        logger.info("Registered tools", count=len(registered))

        state.configure(settings, client, audit_logger, server_version, registered)
        try:
            yield {"settings": settings, "client": client}
        finally:
            state.clear()

    logger.info("Portainer MCP Server stopped")


mcp = FastMCP("Portainer MCP Server", lifespan=lifespan)


# =============================================================================
# MCP RESOURCES
# =============================================================================


@mcp.resource("portainer://server")
async def get_server_resource() -> str:
    """Get information about the connected Portainer server."""
    settings = state.get_settings()
    version = state.get_server_version()

    return (
        "Portainer Server:\n"
        f"  URL: {settings.portainer_url}\n"
        f"  Version: {version or 'unknown (version check disabled)'}\n"
        f"  Registered tools: {len(state.get_registered_tools())}"
    )


@mcp.resource("portainer://security")
async def get_security_resource() -> str:
    """Get current security settings."""
    settings = state.get_settings()
    sec = settings.security

    return (
        "Security Settings:\n"
        f"  Read-only mode: {sec.read_only}\n"
        f"  Version check: {'disabled' if settings.disable_version_check else 'enabled'}\n"
        f"  TLS verification: {'disabled' if settings.portainer_insecure else 'enabled'}\n"
        f"  Audit log: {sec.audit_log or 'structured log output'}"
    )


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================


def main() -> None:
    """Run the Portainer MCP server."""
    configure_logging(level="INFO")
    logger.info("Portainer MCP Server starting")

    try:
        mcp.run()
    except KeyboardInterrupt:
        logger.info("Server interrupted")
        sys.exit(0)
    except Exception as e:
        logger.error("Server error", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
