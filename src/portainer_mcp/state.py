# ABOUTME: Runtime singletons shared between the server lifespan and tool handlers
# ABOUTME: Populated once at startup and cleared on shutdown

"""Server runtime state (initialized in the lifespan)."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from portainer_mcp.config import ServerSettings
    from portainer_mcp.utils.client import PortainerClient
    from portainer_mcp.utils.logging import AuditLogger

_settings: ServerSettings | None = None
_client: PortainerClient | None = None
_audit_logger: AuditLogger | None = None
_server_version: str | None = None
_registered_tools: list[str] = []


def configure(
    settings: ServerSettings,
    client: PortainerClient,
    audit_logger: AuditLogger,
    server_version: str | None,
    registered_tools: list[str],
) -> None:
    """Publish the runtime state for tool handlers and resources."""
    global _settings, _client, _audit_logger, _server_version, _registered_tools
    _settings = settings
    _client = client
    _audit_logger = audit_logger
    _server_version = server_version
    _registered_tools = list(registered_tools)


def clear() -> None:
    global _settings, _client, _audit_logger, _server_version, _registered_tools
    _settings = None
    _client = None
    _audit_logger = None
    _server_version = None
    _registered_tools = []


def get_client() -> PortainerClient:
    """Get the Portainer API client."""
    if _client is None:
        raise RuntimeError("Server not initialized")
    return _client


def get_settings() -> ServerSettings:
    """Get server settings."""
    if _settings is None:
        raise RuntimeError("Server not initialized")
    return _settings


def get_audit_logger() -> AuditLogger:
    """Get audit logger for recording operations."""
    if _audit_logger is None:
        raise RuntimeError("Server not initialized")
    return _audit_logger


def get_server_version() -> str | None:
    """
    Get the Portainer version detected at startup.

    None when the version check was disabled.
    """
    if _settings is None:
        raise RuntimeError("Server not initialized")
    return _server_version


def get_registered_tools() -> list[str]:
    """Names of the tools registered with the MCP server."""
    return list(_registered_tools)
