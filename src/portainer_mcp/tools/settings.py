# ABOUTME: MCP tools for Portainer server settings
# ABOUTME: Settings are read and written as JSON objects

"""
Server settings tools.

get_settings returns the complete /settings payload with Portainer's own key
names. update_settings takes a subset of those keys, so a value can be read,
edited and sent back without translation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field, Json

from portainer_mcp.state import get_audit_logger, get_client
from portainer_mcp.tools.base import MCPContext, to_json
from portainer_mcp.utils.client import PortainerError
from portainer_mcp.utils.logging import set_correlation_id

if TYPE_CHECKING:
    from portainer_mcp.tools.base import ToolRegistry


async def get_settings(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        settings = await get_client().get_settings()
    except PortainerError as e:
        get_audit_logger().log_error("get_settings", "settings", str(e))
        raise ToolError(f"failed to get settings: {e}") from e

    get_audit_logger().log_read("get_settings", "settings")
    return to_json(settings)


class UpdateSettingsParams(BaseModel):
    """Parameters for update_settings tool."""

    settings_json: Json[dict[str, Any]] = Field(
        description="Settings to change as a JSON object string, e.g. '{\"SnapshotInterval\": \"10m\"}'",
    )


async def update_settings(params: UpdateSettingsParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        await get_client().update_settings(params.settings_json)
    except PortainerError as e:
        get_audit_logger().log_error("update_settings", "settings", str(e))
        raise ToolError(f"failed to update settings: {e}") from e

    get_audit_logger().log_write("update_settings", "settings", {"keys": sorted(params.settings_json)})
    return "Settings updated successfully"


def register(registry: ToolRegistry) -> None:
    registry.add_tool_if_exists("get_settings", get_settings)

    if not registry.read_only:
        registry.add_tool_if_exists("update_settings", update_settings)
