# ABOUTME: MCP tools for Portainer environments (endpoints) and how they are organized
# ABOUTME: Environment listing and updates, tags, access policies, groups and agent versions

"""
Environment tools.

Most other tools take an environment_id; list_environments is how the
assistant finds one. Access levels are given by name and mapped to Portainer
role IDs by the client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field

from portainer_mcp.state import get_audit_logger, get_client
from portainer_mcp.tools.base import MCPContext, to_json
from portainer_mcp.utils.client import PortainerError
from portainer_mcp.utils.logging import set_correlation_id

if TYPE_CHECKING:
    from portainer_mcp.tools.base import ToolRegistry

AccessLevel = Literal[
    "environment_administrator",
    "helpdesk_user",
    "standard_user",
    "readonly_user",
    "operator_user",
]


async def list_environments(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        environments = await get_client().get_environments()
    except PortainerError as e:
        get_audit_logger().log_error("list_environments", "all", str(e))
        raise ToolError(f"failed to get environments: {e}") from e

    get_audit_logger().log_read("list_environments", "all")
    return to_json(environments)


async def list_agent_versions(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        versions = await get_client().get_agent_versions()
    except PortainerError as e:
        get_audit_logger().log_error("list_agent_versions", "all", str(e))
        raise ToolError(f"failed to get agent versions: {e}") from e

    get_audit_logger().log_read("list_agent_versions", "all")
    return to_json(versions)


class UpdateEnvironmentParams(BaseModel):
    """Parameters for update_environment tool."""

    id: int = Field(description="Environment ID")
    name: str | None = Field(default=None, description="New environment name")
    public_url: str | None = Field(
        default=None, description="Public URL used to reach published ports"
    )
    group_id: int | None = Field(default=None, description="ID of the environment group to move to")


async def update_environment(params: UpdateEnvironmentParams, ctx: MCPContext) -> str:
    """Update the given environment properties, leaving the others unchanged."""
    set_correlation_id(str(ctx.request_id))
    target = f"environment={params.id}"
    changes = params.model_dump(exclude={"id"}, exclude_none=True)

    try:
        await get_client().update_environment(
            params.id,
            name=params.name,
            public_url=params.public_url,
            group_id=params.group_id,
        )
    except PortainerError as e:
        get_audit_logger().log_error("update_environment", target, str(e))
        raise ToolError(f"failed to update environment: {e}") from e

    get_audit_logger().log_write("update_environment", target, changes)
    return "Environment updated successfully"


class UpdateEnvironmentTagsParams(BaseModel):
    """Parameters for update_environment_tags tool."""

    id: int = Field(description="Environment ID")
    tag_ids: list[int] = Field(
        description="IDs of the tags the environment should have; replaces the current tags"
    )


async def update_environment_tags(params: UpdateEnvironmentTagsParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"environment={params.id}"

    try:
        await get_client().update_environment_tags(params.id, params.tag_ids)
    except PortainerError as e:
        get_audit_logger().log_error("update_environment_tags", target, str(e))
        raise ToolError(f"failed to update environment tags: {e}") from e

    get_audit_logger().log_write("update_environment_tags", target, {"tag_ids": params.tag_ids})
    return "Environment tags updated successfully"


class AccessEntry(BaseModel):
    """One user or team and the access level it gets."""

    id: int = Field(description="User or team ID")
    access: AccessLevel = Field(description="Access level on the environment")


class UpdateUserAccessesParams(BaseModel):
    """Parameters for update_environment_user_accesses tool."""

    id: int = Field(description="Environment ID")
    user_accesses: list[AccessEntry] = Field(
        description="Users and their access levels; replaces the current user accesses"
    )


class UpdateTeamAccessesParams(BaseModel):
    """Parameters for update_environment_team_accesses tool."""

    id: int = Field(description="Environment ID")
    team_accesses: list[AccessEntry] = Field(
        description="Teams and their access levels; replaces the current team accesses"
    )


async def update_environment_user_accesses(
    params: UpdateUserAccessesParams, ctx: MCPContext
) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"environment={params.id}"
    accesses = {entry.id: entry.access for entry in params.user_accesses}

    try:
        await get_client().update_environment_user_accesses(params.id, accesses)
    except PortainerError as e:
        get_audit_logger().log_error("update_environment_user_accesses", target, str(e))
        raise ToolError(f"failed to update environment user accesses: {e}") from e

    get_audit_logger().log_write(
        "update_environment_user_accesses", target, {"user_accesses": accesses}
    )
    return "Environment user accesses updated successfully"


async def update_environment_team_accesses(
    params: UpdateTeamAccessesParams, ctx: MCPContext
) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"environment={params.id}"
    accesses = {entry.id: entry.access for entry in params.team_accesses}

    try:
        await get_client().update_environment_team_accesses(params.id, accesses)
    except PortainerError as e:
        get_audit_logger().log_error("update_environment_team_accesses", target, str(e))
        raise ToolError(f"failed to update environment team accesses: {e}") from e

    get_audit_logger().log_write(
        "update_environment_team_accesses", target, {"team_accesses": accesses}
    )
    return "Environment team accesses updated successfully"


class IdParams(BaseModel):
    """Parameters for tools that act on one object by ID."""

    id: int = Field(description="ID of the object")


async def delete_environment_group(params: IdParams, ctx: MCPContext) -> str:
    """Delete an environment group (an edge group in the Portainer API)."""
    set_correlation_id(str(ctx.request_id))
    target = f"environment_group={params.id}"

    try:
        await get_client().delete_environment_group(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_environment_group", target, str(e))
        raise ToolError(f"failed to delete environment group: {e}") from e

    get_audit_logger().log_write("delete_environment_group", target)
    return "Environment group deleted successfully"


async def delete_access_group(params: IdParams, ctx: MCPContext) -> str:
    """Delete an access group (an endpoint group in the Portainer API)."""
    set_correlation_id(str(ctx.request_id))
    target = f"access_group={params.id}"

    try:
        await get_client().delete_access_group(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_access_group", target, str(e))
        raise ToolError(f"failed to delete access group: {e}") from e

    get_audit_logger().log_write("delete_access_group", target)
    return "Access group deleted successfully"


async def delete_tag(params: IdParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"tag={params.id}"

    try:
        await get_client().delete_tag(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_tag", target, str(e))
        raise ToolError(f"failed to delete tag: {e}") from e

    get_audit_logger().log_write("delete_tag", target)
    return "Tag deleted successfully"


def register(registry: ToolRegistry) -> None:
    registry.add_tool_if_exists("list_environments", list_environments)
    registry.add_tool_if_exists("list_agent_versions", list_agent_versions)

    if not registry.read_only:
        registry.add_tool_if_exists("update_environment", update_environment)
        registry.add_tool_if_exists("update_environment_tags", update_environment_tags)
        registry.add_tool_if_exists(
            "update_environment_user_accesses", update_environment_user_accesses
        )
        registry.add_tool_if_exists(
            "update_environment_team_accesses", update_environment_team_accesses
        )
        registry.add_tool_if_exists("delete_environment_group", delete_environment_group)
        registry.add_tool_if_exists("delete_access_group", delete_access_group)
        registry.add_tool_if_exists("delete_tag", delete_tag)
