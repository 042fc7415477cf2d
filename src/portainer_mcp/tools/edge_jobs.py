# ABOUTME: MCP tools for Portainer edge jobs
# ABOUTME: Scheduled scripts executed on edge environments

"""Edge job tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field

from portainer_mcp.state import get_audit_logger, get_client
from portainer_mcp.tools.base import MCPContext, to_json
from portainer_mcp.utils.client import PortainerError
from portainer_mcp.utils.logging import set_correlation_id

if TYPE_CHECKING:
    from portainer_mcp.tools.base import ToolRegistry


class EdgeJobIdParams(BaseModel):
    """Parameters identifying one edge job."""

    id: int = Field(description="Edge job ID")


async def list_edge_jobs(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        jobs = await get_client().get_edge_jobs()
    except PortainerError as e:
        get_audit_logger().log_error("list_edge_jobs", "all", str(e))
        raise ToolError(f"failed to get edge jobs: {e}") from e

    get_audit_logger().log_read("list_edge_jobs", "all")
    return to_json(jobs)


async def get_edge_job(params: EdgeJobIdParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"edge_job={params.id}"

    try:
        job = await get_client().get_edge_job(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("get_edge_job", target, str(e))
        raise ToolError(f"failed to get edge job: {e}") from e

    get_audit_logger().log_read("get_edge_job", target)
    return to_json(job)


class CreateEdgeJobParams(BaseModel):
    """Parameters for create_edge_job tool."""

    name: str = Field(min_length=1, description="Edge job name")
    cron_expression: str = Field(
        min_length=1, description="Cron schedule, e.g. '0 2 * * *' for 02:00 every day"
    )
    recurring: bool = Field(description="Run on every schedule tick (false for a single run)")
    script_content: str = Field(min_length=1, description="Script to execute on each environment")
    edge_group_ids: list[int] = Field(
        min_length=1, description="IDs of the edge groups to run the job on"
    )


async def create_edge_job(params: CreateEdgeJobParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"edge_job={params.name}"

    try:
        job_id = await get_client().create_edge_job(
            name=params.name,
            cron_expression=params.cron_expression,
            recurring=params.recurring,
            script_content=params.script_content,
            edge_group_ids=params.edge_group_ids,
        )
    except PortainerError as e:
        get_audit_logger().log_error("create_edge_job", target, str(e))
        raise ToolError(f"failed to create edge job: {e}") from e

    get_audit_logger().log_write(
        "create_edge_job",
        target,
        {"id": job_id, "edge_groups": params.edge_group_ids},
    )
    return f"Edge job created successfully with ID {job_id}"


async def delete_edge_job(params: EdgeJobIdParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"edge_job={params.id}"

    try:
        await get_client().delete_edge_job(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_edge_job", target, str(e))
        raise ToolError(f"failed to delete edge job: {e}") from e

    get_audit_logger().log_write("delete_edge_job", target)
    return "Edge job deleted successfully"


def register(registry: ToolRegistry) -> None:
    registry.add_tool_if_exists("list_edge_jobs", list_edge_jobs)
    registry.add_tool_if_exists("get_edge_job", get_edge_job)

    if not registry.read_only:
        registry.add_tool_if_exists("create_edge_job", create_edge_job)
        registry.add_tool_if_exists("delete_edge_job", delete_edge_job)
