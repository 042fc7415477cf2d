# ABOUTME: MCP tools for Kubernetes custom resources in Portainer environments
# ABOUTME: Custom resource definitions and the custom resources they define

"""Kubernetes custom resource tools."""

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


def _target(environment_id: int, *parts: str) -> str:
    return "/".join([f"environment={environment_id}", *[p for p in parts if p]])


class EnvironmentParams(BaseModel):
    """Parameters for tools scoped to one Kubernetes environment."""

    environment_id: int = Field(description="ID of the Kubernetes environment")


class DefinitionParams(BaseModel):
    """Parameters identifying one custom resource definition."""

    environment_id: int = Field(description="ID of the Kubernetes environment")
    name: str = Field(min_length=1, description="CRD name (e.g. certificates.cert-manager.io)")


class ListCustomResourcesParams(BaseModel):
    """Parameters for list_custom_resources tool."""

    environment_id: int = Field(description="ID of the Kubernetes environment")
    definition: str = Field(
        min_length=1, description="CRD name the resources belong to"
    )


class CustomResourceParams(BaseModel):
    """Parameters identifying one custom resource."""

    environment_id: int = Field(description="ID of the Kubernetes environment")
    name: str = Field(min_length=1, description="Custom resource name")
    definition: str = Field(min_length=1, description="CRD name the resource belongs to")
    namespace: str | None = Field(
        default=None, description="Namespace of the resource (omit for cluster-scoped resources)"
    )


class GetCustomResourceParams(CustomResourceParams):
    """Parameters for get_custom_resource tool."""

    format: str | None = Field(
        default=None, description="Response format (e.g. yaml); JSON when omitted"
    )


# =============================================================================
# READ TOOLS
# =============================================================================


async def list_custom_resource_definitions(params: EnvironmentParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = _target(params.environment_id)

    try:
        crds = await get_client().list_custom_resource_definitions(params.environment_id)
    except PortainerError as e:
        get_audit_logger().log_error("list_custom_resource_definitions", target, str(e))
        raise ToolError(f"failed to list custom resource definitions: {e}") from e

    get_audit_logger().log_read("list_custom_resource_definitions", target)
    return to_json(crds)


async def get_custom_resource_definition(params: DefinitionParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = _target(params.environment_id, f"crd={params.name}")

    try:
        crd = await get_client().get_custom_resource_definition(
            params.environment_id, params.name
        )
    except PortainerError as e:
        get_audit_logger().log_error("get_custom_resource_definition", target, str(e))
        raise ToolError(f"failed to get custom resource definition: {e}") from e

    get_audit_logger().log_read("get_custom_resource_definition", target)
    return to_json(crd)


async def list_custom_resources(params: ListCustomResourcesParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = _target(params.environment_id, f"crd={params.definition}")

    try:
        resources = await get_client().list_custom_resources(
            params.environment_id, params.definition
        )
    except PortainerError as e:
        get_audit_logger().log_error("list_custom_resources", target, str(e))
        raise ToolError(f"failed to list custom resources: {e}") from e

    get_audit_logger().log_read("list_custom_resources", target)
    return to_json(resources)


async def get_custom_resource(params: GetCustomResourceParams, ctx: MCPContext) -> str:
    """
    Get one custom resource.

    The body is returned as Portainer sends it, JSON or YAML depending on
    the requested format.
    """
    set_correlation_id(str(ctx.request_id))
    target = _target(params.environment_id, params.namespace or "", f"cr={params.name}")

    try:
        resource = await get_client().get_custom_resource(
            params.environment_id,
            params.name,
            params.definition,
            namespace=params.namespace,
            output_format=params.format,
        )
    except PortainerError as e:
        get_audit_logger().log_error("get_custom_resource", target, str(e))
        raise ToolError(f"failed to get custom resource: {e}") from e

    get_audit_logger().log_read("get_custom_resource", target)
    return resource


# =============================================================================
# WRITE TOOLS
# =============================================================================


async def delete_custom_resource_definition(params: DefinitionParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = _target(params.environment_id, f"crd={params.name}")

    try:
        await get_client().delete_custom_resource_definition(params.environment_id, params.name)
    except PortainerError as e:
        get_audit_logger().log_error("delete_custom_resource_definition", target, str(e))
        raise ToolError(f"failed to delete custom resource definition: {e}") from e

    get_audit_logger().log_write("delete_custom_resource_definition", target)
    return f"Custom resource definition {params.name} deleted successfully"


async def delete_custom_resource(params: CustomResourceParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = _target(params.environment_id, params.namespace or "", f"cr={params.name}")

    try:
        await get_client().delete_custom_resource(
            params.environment_id,
            params.name,
            params.definition,
            namespace=params.namespace,
        )
    except PortainerError as e:
        get_audit_logger().log_error("delete_custom_resource", target, str(e))
        raise ToolError(f"failed to delete custom resource: {e}") from e

    get_audit_logger().log_write(
        "delete_custom_resource", target, {"definition": params.definition}
    )
    return f"Custom resource {params.name} deleted successfully"


def register(registry: ToolRegistry) -> None:
    registry.add_tool_if_exists("list_custom_resource_definitions", list_custom_resource_definitions)
    registry.add_tool_if_exists("get_custom_resource_definition", get_custom_resource_definition)
    registry.add_tool_if_exists("list_custom_resources", list_custom_resources)
    registry.add_tool_if_exists("get_custom_resource", get_custom_resource)

    if not registry.read_only:
        registry.add_tool_if_exists(
            "delete_custom_resource_definition", delete_custom_resource_definition
        )
        registry.add_tool_if_exists("delete_custom_resource", delete_custom_resource)
