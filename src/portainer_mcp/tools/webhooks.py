# ABOUTME: MCP tools for Portainer webhooks
# ABOUTME: Webhooks trigger a redeploy of a service or container when called

"""Webhook tools."""

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


async def list_webhooks(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        webhooks = await get_client().get_webhooks()
    except PortainerError as e:
        get_audit_logger().log_error("list_webhooks", "all", str(e))
        raise ToolError(f"failed to get webhooks: {e}") from e

    get_audit_logger().log_read("list_webhooks", "all")
    return to_json(webhooks)


class CreateWebhookParams(BaseModel):
    """Parameters for create_webhook tool."""

    resource_id: str = Field(min_length=1, description="ID of the service or container")
    endpoint_id: int = Field(description="ID of the environment hosting the resource")
    webhook_type: int = Field(description="Webhook type: 1 = service, 2 = container")


async def create_webhook(params: CreateWebhookParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"environment={params.endpoint_id}/resource={params.resource_id}"

    try:
        webhook_id = await get_client().create_webhook(
            resource_id=params.resource_id,
            endpoint_id=params.endpoint_id,
            webhook_type=params.webhook_type,
        )
    except PortainerError as e:
        get_audit_logger().log_error("create_webhook", target, str(e))
        raise ToolError(f"failed to create webhook: {e}") from e

    get_audit_logger().log_write("create_webhook", target, {"id": webhook_id})
    return f"Webhook created successfully with ID {webhook_id}"


class DeleteWebhookParams(BaseModel):
    """Parameters for delete_webhook tool."""

    id: int = Field(description="Webhook ID")


async def delete_webhook(params: DeleteWebhookParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"webhook={params.id}"

    try:
        await get_client().delete_webhook(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_webhook", target, str(e))
        raise ToolError(f"failed to delete webhook: {e}") from e

    get_audit_logger().log_write("delete_webhook", target)
    return "Webhook deleted successfully"


def register(registry: ToolRegistry) -> None:
    registry.add_tool_if_exists("list_webhooks", list_webhooks)

    if not registry.read_only:
        registry.add_tool_if_exists("create_webhook", create_webhook)
        registry.add_tool_if_exists("delete_webhook", delete_webhook)
