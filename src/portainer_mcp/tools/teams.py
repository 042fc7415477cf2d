# ABOUTME: MCP tools for Portainer teams
# ABOUTME: Teams group users for environment access policies

"""Team tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field

from portainer_mcp.state import get_audit_logger, get_client
from portainer_mcp.tools.base import MCPContext
from portainer_mcp.utils.client import PortainerError
from portainer_mcp.utils.logging import set_correlation_id

if TYPE_CHECKING:
    from portainer_mcp.tools.base import ToolRegistry


class TeamIdParams(BaseModel):
    """Parameters identifying one team."""

    id: int = Field(description="Team ID")


async def delete_team(params: TeamIdParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"team={params.id}"

    try:
        await get_client().delete_team(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_team", target, str(e))
        raise ToolError(f"failed to delete team: {e}") from e

    get_audit_logger().log_write("delete_team", target)
    return "Team deleted successfully"


def register(registry: ToolRegistry) -> None:
    if not registry.read_only:
        registry.add_tool_if_exists("delete_team", delete_team)
