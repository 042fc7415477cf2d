# ABOUTME: MCP tools for Portainer custom templates
# ABOUTME: List, create from file content, and delete

"""Custom template tools."""

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


async def list_custom_templates(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        templates = await get_client().get_custom_templates()
    except PortainerError as e:
        get_audit_logger().log_error("list_custom_templates", "all", str(e))
        raise ToolError(f"failed to get custom templates: {e}") from e

    get_audit_logger().log_read("list_custom_templates", "all")
    return to_json(templates)


class CreateCustomTemplateParams(BaseModel):
    """Parameters for create_custom_template tool."""

    title: str = Field(min_length=1, description="Template title")
    description: str = Field(description="Template description")
    file_content: str = Field(min_length=1, description="Template file content")
    type: int = Field(description="Template type: 1 = Swarm, 2 = Compose, 3 = Kubernetes")
    platform: int = Field(description="Platform: 1 = Linux, 2 = Windows")


async def create_custom_template(params: CreateCustomTemplateParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"custom_template={params.title}"

    try:
        template_id = await get_client().create_custom_template(
            title=params.title,
            description=params.description,
            file_content=params.file_content,
            template_type=params.type,
            platform=params.platform,
        )
    except PortainerError as e:
        get_audit_logger().log_error("create_custom_template", target, str(e))
        raise ToolError(f"failed to create custom template: {e}") from e

    get_audit_logger().log_write("create_custom_template", target, {"id": template_id})
    return f"Custom template created successfully with ID {template_id}"


class DeleteCustomTemplateParams(BaseModel):
    """Parameters for delete_custom_template tool."""

    id: int = Field(description="Custom template ID")


async def delete_custom_template(params: DeleteCustomTemplateParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"custom_template={params.id}"

    try:
        await get_client().delete_custom_template(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_custom_template", target, str(e))
        raise ToolError(f"failed to delete custom template: {e}") from e

    get_audit_logger().log_write("delete_custom_template", target)
    return "Custom template deleted successfully"


def register(registry: ToolRegistry) -> None:
    registry.add_tool_if_exists("list_custom_templates", list_custom_templates)

    if not registry.read_only:
        registry.add_tool_if_exists("create_custom_template", create_custom_template)
        registry.add_tool_if_exists("delete_custom_template", delete_custom_template)
