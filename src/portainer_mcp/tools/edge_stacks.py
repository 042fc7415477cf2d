# ABOUTME: MCP tools for Portainer edge stacks
# ABOUTME: Stacks deployed to edge groups rather than to a single environment

"""Edge stack tools."""

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


class EdgeStackIdParams(BaseModel):
    """Parameters identifying one edge stack."""

    id: int = Field(description="Edge stack ID")


async def delete_edge_stack(params: EdgeStackIdParams, ctx: MCPContext) -> str:
    """Remove an edge stack from every edge group it was deployed to."""
    set_correlation_id(str(ctx.request_id))
    target = f"edge_stack={params.id}"

    try:
        await get_client().delete_edge_stack(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_edge_stack", target, str(e))
        raise ToolError(f"failed to delete edge stack: {e}") from e

    get_audit_logger().log_write("delete_edge_stack", target)
    return "Edge stack deleted successfully"


def register(registry: ToolRegistry) -> None:
    if not registry.read_only:
        registry.add_tool_if_exists("delete_edge_stack", delete_edge_stack)
