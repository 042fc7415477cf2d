# ABOUTME: MCP tools for container image registries
# ABOUTME: List, connection test, create and delete

"""Registry tools."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mcp.server.fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field, SecretStr

from portainer_mcp.state import get_audit_logger, get_client
from portainer_mcp.tools.base import MCPContext, to_json
from portainer_mcp.utils.client import PortainerError
from portainer_mcp.utils.logging import set_correlation_id

if TYPE_CHECKING:
    from portainer_mcp.tools.base import ToolRegistry


def _secret(value: SecretStr | None) -> str | None:
    return value.get_secret_value() if value else None


async def list_registries(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        registries = await get_client().get_registries()
    except PortainerError as e:
        get_audit_logger().log_error("list_registries", "all", str(e))
        raise ToolError(f"failed to get registries: {e}") from e

    get_audit_logger().log_read("list_registries", "all")
    return to_json(registries)


class TestRegistryConnectionParams(BaseModel):
    """Parameters for test_registry_connection tool."""

    url: str = Field(min_length=1, description="Registry URL (e.g. registry.example.com)")
    type: int = Field(description="Registry type (3 = custom, 6 = DockerHub, ...)")
    username: str | None = Field(default=None, description="Registry username")
    password: SecretStr | None = Field(default=None, description="Registry password or token")


async def test_registry_connection(params: TestRegistryConnectionParams, ctx: MCPContext) -> str:
    """Ping a registry with the given credentials without storing anything."""
    set_correlation_id(str(ctx.request_id))
    target = f"registry_url={params.url}"

    try:
        result = await get_client().ping_registry(
            url=params.url,
            registry_type=params.type,
            username=params.username,
            password=_secret(params.password),
        )
    except PortainerError as e:
        get_audit_logger().log_error("test_registry_connection", target, str(e))
        raise ToolError(f"failed to test registry connection: {e}") from e

    get_audit_logger().log_read("test_registry_connection", target)
    return to_json(result)


class CreateRegistryParams(BaseModel):
    """Parameters for create_registry tool."""

    name: str = Field(min_length=1, description="Registry name")
    type: int = Field(
        description=(
            "Registry type: 1 = Quay, 2 = Azure, 3 = Custom, 4 = GitLab, "
            "5 = ProGet, 6 = DockerHub, 7 = ECR, 8 = GitHub"
        )
    )
    url: str = Field(min_length=1, description="Registry URL")
    authentication: bool = Field(default=False, description="Whether the registry needs credentials")
    username: str | None = Field(default=None, description="Registry username")
    password: SecretStr | None = Field(default=None, description="Registry password or token")


async def create_registry(params: CreateRegistryParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"registry={params.name}"

    try:
        registry_id = await get_client().create_registry(
            name=params.name,
            registry_type=params.type,
            url=params.url,
            authentication=params.authentication,
            username=params.username,
            password=_secret(params.password),
        )
    except PortainerError as e:
        get_audit_logger().log_error("create_registry", target, str(e))
        raise ToolError(f"failed to create registry: {e}") from e

    get_audit_logger().log_write("create_registry", target, {"id": registry_id, "url": params.url})
    return f"Registry created successfully with ID {registry_id}"


class DeleteRegistryParams(BaseModel):
    """Parameters for delete_registry tool."""

    id: int = Field(description="Registry ID")


async def delete_registry(params: DeleteRegistryParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"registry={params.id}"

    try:
        await get_client().delete_registry(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_registry", target, str(e))
        raise ToolError(f"failed to delete registry: {e}") from e

    get_audit_logger().log_write("delete_registry", target)
    return "Registry deleted successfully"


def register(registry: ToolRegistry) -> None:
    registry.add_tool_if_exists("list_registries", list_registries)
    registry.add_tool_if_exists("test_registry_connection", test_registry_connection)

    if not registry.read_only:
        registry.add_tool_if_exists("create_registry", create_registry)
        registry.add_tool_if_exists("delete_registry", delete_registry)
