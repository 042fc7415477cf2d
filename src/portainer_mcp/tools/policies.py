# ABOUTME: MCP tools for Portainer fleet policies
# ABOUTME: Policies, policy templates, metadata and conflict checks

"""
Policy tools.

A policy applies one policy type (for example a registry or security
setting) to every environment of the given environment groups. Policy data
differs per type and is passed through as JSON.

get_policy_conflicts only asks Portainer whether a policy would clash with
existing ones; it creates nothing and is available in read-only mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel, BeforeValidator, Field, Json

from portainer_mcp.state import get_audit_logger, get_client
from portainer_mcp.tools.base import MCPContext, to_json
from portainer_mcp.utils.client import PortainerError
from portainer_mcp.utils.logging import set_correlation_id

if TYPE_CHECKING:
    from portainer_mcp.tools.base import ToolRegistry


def _empty_as_none(value: Any) -> Any:
    return None if value == "" else value


# An empty string means no policy data
PolicyData = Annotated[Json[Any] | None, BeforeValidator(_empty_as_none)]


class PolicyIdParams(BaseModel):
    """Parameters identifying one policy."""

    id: int = Field(description="Policy ID")


class PolicyParams(BaseModel):
    """Parameters describing a complete policy."""

    name: str = Field(min_length=1, description="Policy name")
    type: str = Field(min_length=1, description="Policy type (see get_policy_metadata)")
    environment_type: str = Field(
        min_length=1, description="Environment type the policy targets (e.g. docker, kubernetes)"
    )
    environment_groups: list[int] | None = Field(
        default=None, description="IDs of the environment groups the policy applies to"
    )
    data_json: PolicyData = Field(
        default=None, description="Policy data as a JSON string; shape depends on the policy type"
    )


# =============================================================================
# READ TOOLS
# =============================================================================


async def list_policies(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        policies = await get_client().get_policies()
    except PortainerError as e:
        get_audit_logger().log_error("list_policies", "all", str(e))
        raise ToolError(f"failed to get policies: {e}") from e

    get_audit_logger().log_read("list_policies", "all")
    return to_json(policies)


async def get_policy(params: PolicyIdParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"policy={params.id}"

    try:
        policy = await get_client().get_policy(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("get_policy", target, str(e))
        raise ToolError(f"failed to get policy: {e}") from e

    get_audit_logger().log_read("get_policy", target)
    return to_json(policy)


class ListPolicyTemplatesParams(BaseModel):
    """Parameters for list_policy_templates tool."""

    category: str | None = Field(default=None, description="Filter by template category")
    type: str | None = Field(default=None, description="Filter by policy type")


async def list_policy_templates(params: ListPolicyTemplatesParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        templates = await get_client().get_policy_templates(
            category=params.category, policy_type=params.type
        )
    except PortainerError as e:
        get_audit_logger().log_error("list_policy_templates", "all", str(e))
        raise ToolError(f"failed to get policy templates: {e}") from e

    get_audit_logger().log_read("list_policy_templates", "all")
    return to_json(templates)


class GetPolicyTemplateParams(BaseModel):
    """Parameters for get_policy_template tool."""

    id: str = Field(min_length=1, description="Policy template ID")


async def get_policy_template(params: GetPolicyTemplateParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"policy_template={params.id}"

    try:
        template = await get_client().get_policy_template(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("get_policy_template", target, str(e))
        raise ToolError(f"failed to get policy template: {e}") from e

    get_audit_logger().log_read("get_policy_template", target)
    return to_json(template)


async def get_policy_metadata(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        metadata = await get_client().get_policy_metadata()
    except PortainerError as e:
        get_audit_logger().log_error("get_policy_metadata", "all", str(e))
        raise ToolError(f"failed to get policy metadata: {e}") from e

    get_audit_logger().log_read("get_policy_metadata", "all")
    return to_json(metadata)


async def get_policy_conflicts(params: PolicyParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"policy={params.name}"

    try:
        conflicts = await get_client().get_policy_conflicts(
            name=params.name,
            policy_type=params.type,
            environment_type=params.environment_type,
            environment_groups=params.environment_groups,
            data=params.data_json,
        )
    except PortainerError as e:
        get_audit_logger().log_error("get_policy_conflicts", target, str(e))
        raise ToolError(f"failed to get policy conflicts: {e}") from e

    get_audit_logger().log_read("get_policy_conflicts", target)
    return to_json(conflicts)


# =============================================================================
# WRITE TOOLS
# =============================================================================


async def create_policy(params: PolicyParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"policy={params.name}"

    try:
        policy_id = await get_client().create_policy(
            name=params.name,
            policy_type=params.type,
            environment_type=params.environment_type,
            environment_groups=params.environment_groups,
            data=params.data_json,
        )
    except PortainerError as e:
        get_audit_logger().log_error("create_policy", target, str(e))
        raise ToolError(f"failed to create policy: {e}") from e

    get_audit_logger().log_write("create_policy", target, {"id": policy_id, "type": params.type})
    return f"Policy created successfully with ID {policy_id}"


class UpdatePolicyParams(BaseModel):
    """Parameters for update_policy tool. Omitted fields keep their current value."""

    id: int = Field(description="Policy ID")
    name: str | None = Field(default=None, description="New policy name")
    type: str | None = Field(default=None, description="New policy type")
    environment_type: str | None = Field(default=None, description="New environment type")
    environment_groups: list[int] | None = Field(
        default=None, description="New environment group IDs"
    )
    data_json: PolicyData = Field(default=None, description="New policy data as a JSON string")


async def update_policy(params: UpdatePolicyParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"policy={params.id}"

    try:
        await get_client().update_policy(
            params.id,
            name=params.name,
            policy_type=params.type,
            environment_type=params.environment_type,
            environment_groups=params.environment_groups,
            data=params.data_json,
        )
    except PortainerError as e:
        get_audit_logger().log_error("update_policy", target, str(e))
        raise ToolError(f"failed to update policy: {e}") from e

    get_audit_logger().log_write("update_policy", target)
    return f"Policy {params.id} updated successfully"


async def delete_policy(params: PolicyIdParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"policy={params.id}"

    try:
        await get_client().delete_policy(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_policy", target, str(e))
        raise ToolError(f"failed to delete policy: {e}") from e

    get_audit_logger().log_write("delete_policy", target)
    return "Policy deleted successfully"


def register(registry: ToolRegistry) -> None:
    registry.add_tool_if_exists("list_policies", list_policies)
    registry.add_tool_if_exists("get_policy", get_policy)
    registry.add_tool_if_exists("list_policy_templates", list_policy_templates)
    registry.add_tool_if_exists("get_policy_template", get_policy_template)
    registry.add_tool_if_exists("get_policy_metadata", get_policy_metadata)
    registry.add_tool_if_exists("get_policy_conflicts", get_policy_conflicts)

    if not registry.read_only:
        registry.add_tool_if_exists("create_policy", create_policy)
        registry.add_tool_if_exists("update_policy", update_policy)
        registry.add_tool_if_exists("delete_policy", delete_policy)
