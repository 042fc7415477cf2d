# ABOUTME: MCP tools for Portainer observability alerting
# ABOUTME: Alerts, alert rules, alert manager settings and silences

"""Alerting tools."""

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


# =============================================================================
# READ TOOLS
# =============================================================================


class ListAlertsParams(BaseModel):
    """Parameters for list_alerts tool."""

    status: str | None = Field(
        default=None,
        description="Filter alerts by status (e.g. active, suppressed, unprocessed)",
    )


async def list_alerts(params: ListAlertsParams, ctx: MCPContext) -> str:
    """List alerts, returned exactly as Portainer reports them."""
    set_correlation_id(str(ctx.request_id))
    target = f"status={params.status}" if params.status else "all"

    try:
        alerts = await get_client().get_alerts(params.status)
    except PortainerError as e:
        get_audit_logger().log_error("list_alerts", target, str(e))
        raise ToolError(f"failed to get alerts: {e}") from e

    get_audit_logger().log_read("list_alerts", target)
    return to_json(alerts)


async def list_alert_rules(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        rules = await get_client().get_alert_rules()
    except PortainerError as e:
        get_audit_logger().log_error("list_alert_rules", "all", str(e))
        raise ToolError(f"failed to get alert rules: {e}") from e

    get_audit_logger().log_read("list_alert_rules", "all")
    return to_json(rules)


class GetAlertRuleParams(BaseModel):
    """Parameters for get_alert_rule tool."""

    id: int = Field(description="Alert rule ID")


async def get_alert_rule(params: GetAlertRuleParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"alert_rule={params.id}"

    try:
        rule = await get_client().get_alert_rule(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("get_alert_rule", target, str(e))
        raise ToolError(f"failed to get alert rule: {e}") from e

    get_audit_logger().log_read("get_alert_rule", target)
    return to_json(rule)


async def get_alerting_settings(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        settings = await get_client().get_alerting_settings()
    except PortainerError as e:
        get_audit_logger().log_error("get_alerting_settings", "all", str(e))
        raise ToolError(f"failed to get alerting settings: {e}") from e

    get_audit_logger().log_read("get_alerting_settings", "all")
    return to_json(settings)


# =============================================================================
# WRITE TOOLS
# =============================================================================


class UpdateAlertRuleParams(BaseModel):
    """Parameters for update_alert_rule tool."""

    id: int = Field(description="Alert rule ID")
    rule_json: Json[dict[str, Any]] = Field(
        description="Complete alert rule as a JSON object string",
    )


async def update_alert_rule(params: UpdateAlertRuleParams, ctx: MCPContext) -> str:
    """Replace an alert rule with the given JSON definition."""
    set_correlation_id(str(ctx.request_id))
    target = f"alert_rule={params.id}"

    try:
        await get_client().update_alert_rule(params.id, params.rule_json)
    except PortainerError as e:
        get_audit_logger().log_error("update_alert_rule", target, str(e))
        raise ToolError(f"failed to update alert rule: {e}") from e

    get_audit_logger().log_write("update_alert_rule", target)
    return f"Alert rule {params.id} updated successfully"


class DeleteAlertRuleParams(BaseModel):
    """Parameters for delete_alert_rule tool."""

    id: int = Field(description="Alert rule ID")


async def delete_alert_rule(params: DeleteAlertRuleParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"alert_rule={params.id}"

    try:
        await get_client().delete_alert_rule(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_alert_rule", target, str(e))
        raise ToolError(f"failed to delete alert rule: {e}") from e

    get_audit_logger().log_write("delete_alert_rule", target)
    return "Alert rule deleted successfully"


class CreateAlertSilenceParams(BaseModel):
    """Parameters for create_alert_silence tool."""

    silence_json: Json[dict[str, Any]] = Field(
        description="Silence as a JSON object string (matchers, startsAt, endsAt, createdBy, comment)",
    )
    alert_manager_url: str = Field(
        default="",
        description="Alert manager URL to create the silence on (default: the internal one)",
    )


async def create_alert_silence(params: CreateAlertSilenceParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"alert_manager={params.alert_manager_url or 'default'}"

    try:
        await get_client().create_alert_silence(params.silence_json, params.alert_manager_url)
    except PortainerError as e:
        get_audit_logger().log_error("create_alert_silence", target, str(e))
        raise ToolError(f"failed to create alert silence: {e}") from e

    get_audit_logger().log_write("create_alert_silence", target)
    return "Alert silence created successfully"


class DeleteAlertSilenceParams(BaseModel):
    """Parameters for delete_alert_silence tool."""

    id: str = Field(min_length=1, description="Alert silence ID")


async def delete_alert_silence(params: DeleteAlertSilenceParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"alert_silence={params.id}"

    try:
        await get_client().delete_alert_silence(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_alert_silence", target, str(e))
        raise ToolError(f"failed to delete alert silence: {e}") from e

    get_audit_logger().log_write("delete_alert_silence", target)
    return "Alert silence deleted successfully"


def register(registry: ToolRegistry) -> None:
    registry.add_tool_if_exists("list_alerts", list_alerts)
    registry.add_tool_if_exists("list_alert_rules", list_alert_rules)
    registry.add_tool_if_exists("get_alert_rule", get_alert_rule)
    registry.add_tool_if_exists("get_alerting_settings", get_alerting_settings)

    if not registry.read_only:
        registry.add_tool_if_exists("update_alert_rule", update_alert_rule)
        registry.add_tool_if_exists("delete_alert_rule", delete_alert_rule)
        registry.add_tool_if_exists("create_alert_silence", create_alert_silence)
        registry.add_tool_if_exists("delete_alert_silence", delete_alert_silence)
