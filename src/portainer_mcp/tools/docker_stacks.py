# ABOUTME: MCP tools for standalone Docker Compose stacks
# ABOUTME: List, read compose file, create, update, delete, start and stop

"""
Docker stack tools.

Stacks are deployed on a specific Docker environment, so every mutating
call carries the environment ID next to the stack ID. Environment variables
are passed as a list of name/value pairs; entries without a name are
dropped before the request is made.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field

from portainer_mcp.models import StackEnvVar
from portainer_mcp.state import get_audit_logger, get_client
from portainer_mcp.tools.base import MCPContext, to_json
from portainer_mcp.utils.client import PortainerError
from portainer_mcp.utils.logging import set_correlation_id

if TYPE_CHECKING:
    from portainer_mcp.tools.base import ToolRegistry


class EnvVarParam(BaseModel):
    """One stack environment variable."""

    name: str = Field(default="", description="Variable name")
    value: str = Field(default="", description="Variable value")


def parse_env_vars(env: list[EnvVarParam] | None) -> list[StackEnvVar]:
    """Convert tool parameters to stack variables, skipping entries without a name."""
    return [StackEnvVar(name=e.name, value=e.value) for e in env or [] if e.name]


class StackParams(BaseModel):
    """Parameters identifying a stack on its environment."""

    id: int = Field(description="Stack ID")
    environment_id: int = Field(description="ID of the environment the stack is deployed on")


# =============================================================================
# READ TOOLS
# =============================================================================


async def list_docker_stacks(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        stacks = await get_client().get_docker_stacks()
    except PortainerError as e:
        get_audit_logger().log_error("list_docker_stacks", "all", str(e))
        raise ToolError(f"failed to get docker stacks: {e}") from e

    get_audit_logger().log_read("list_docker_stacks", "all")
    return to_json(stacks)


class GetDockerStackFileParams(BaseModel):
    """Parameters for get_docker_stack_file tool."""

    id: int = Field(description="Stack ID")


async def get_docker_stack_file(params: GetDockerStackFileParams, ctx: MCPContext) -> str:
    """Return the compose file content as plain text."""
    set_correlation_id(str(ctx.request_id))
    target = f"stack={params.id}"

    try:
        content = await get_client().get_docker_stack_file(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("get_docker_stack_file", target, str(e))
        raise ToolError(f"failed to get docker stack file: {e}") from e

    get_audit_logger().log_read("get_docker_stack_file", target)
    return content


# =============================================================================
# WRITE TOOLS
# =============================================================================


class CreateDockerStackParams(BaseModel):
    """Parameters for create_docker_stack tool."""

    environment_id: int = Field(description="ID of the Docker environment to deploy on")
    name: str = Field(min_length=1, description="Stack name")
    file: str = Field(min_length=1, description="Docker Compose file content")
    env: list[EnvVarParam] | None = Field(
        default=None, description="Environment variables for the stack"
    )


async def create_docker_stack(params: CreateDockerStackParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"environment={params.environment_id}/stack={params.name}"

    try:
        stack_id = await get_client().create_docker_stack(
            params.environment_id,
            params.name,
            params.file,
            env=parse_env_vars(params.env),
        )
    except PortainerError as e:
        get_audit_logger().log_error("create_docker_stack", target, str(e))
        raise ToolError(f"failed to create docker stack: {e}") from e

    get_audit_logger().log_write("create_docker_stack", target, {"id": stack_id})
    return f"Docker stack created successfully with ID {stack_id}"


class UpdateDockerStackParams(StackParams):
    """Parameters for update_docker_stack tool."""

    file: str = Field(min_length=1, description="New Docker Compose file content")
    env: list[EnvVarParam] | None = Field(
        default=None, description="Environment variables for the stack"
    )
    prune: bool = Field(
        default=False, description="Remove services that are no longer in the compose file"
    )
    pull_image: bool = Field(default=False, description="Pull the latest images before redeploying")


async def update_docker_stack(params: UpdateDockerStackParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"environment={params.environment_id}/stack={params.id}"

    try:
        await get_client().update_docker_stack(
            params.id,
            params.environment_id,
            params.file,
            env=parse_env_vars(params.env),
            prune=params.prune,
            pull_image=params.pull_image,
        )
    except PortainerError as e:
        get_audit_logger().log_error("update_docker_stack", target, str(e))
        raise ToolError(f"failed to update docker stack: {e}") from e

    get_audit_logger().log_write(
        "update_docker_stack",
        target,
        {"prune": params.prune, "pull_image": params.pull_image},
    )
    return "Docker stack updated successfully"


async def delete_docker_stack(params: StackParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"environment={params.environment_id}/stack={params.id}"

    try:
        await get_client().delete_docker_stack(params.id, params.environment_id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_docker_stack", target, str(e))
        raise ToolError(f"failed to delete docker stack: {e}") from e

    get_audit_logger().log_write("delete_docker_stack", target)
    return "Docker stack deleted successfully"


async def start_docker_stack(params: StackParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"environment={params.environment_id}/stack={params.id}"

    try:
        await get_client().start_docker_stack(params.id, params.environment_id)
    except PortainerError as e:
        get_audit_logger().log_error("start_docker_stack", target, str(e))
        raise ToolError(f"failed to start docker stack: {e}") from e

    get_audit_logger().log_write("start_docker_stack", target)
    return "Docker stack started successfully"


async def stop_docker_stack(params: StackParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"environment={params.environment_id}/stack={params.id}"

    try:
        await get_client().stop_docker_stack(params.id, params.environment_id)
    except PortainerError as e:
        get_audit_logger().log_error("stop_docker_stack", target, str(e))
        raise ToolError(f"failed to stop docker stack: {e}") from e

    get_audit_logger().log_write("stop_docker_stack", target)
    return "Docker stack stopped successfully"


def register(registry: ToolRegistry) -> None:
    registry.add_tool_if_exists("list_docker_stacks", list_docker_stacks)
    registry.add_tool_if_exists("get_docker_stack_file", get_docker_stack_file)

    if not registry.read_only:
        registry.add_tool_if_exists("create_docker_stack", create_docker_stack)
        registry.add_tool_if_exists("update_docker_stack", update_docker_stack)
        registry.add_tool_if_exists("delete_docker_stack", delete_docker_stack)
        registry.add_tool_if_exists("start_docker_stack", start_docker_stack)
        registry.add_tool_if_exists("stop_docker_stack", stop_docker_stack)
