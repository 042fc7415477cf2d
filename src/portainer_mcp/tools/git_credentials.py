# ABOUTME: MCP tools for Portainer git credentials
# ABOUTME: Stored credentials used to pull stacks and templates from git

"""
Git credential tools.

Passwords go to Portainer but never come back: the credential models have
no password field, and passwords are left out of audit records.
"""

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


class GitCredentialIdParams(BaseModel):
    """Parameters identifying one git credential."""

    id: int = Field(description="Git credential ID")


async def list_git_credentials(ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))

    try:
        credentials = await get_client().get_git_credentials()
    except PortainerError as e:
        get_audit_logger().log_error("list_git_credentials", "all", str(e))
        raise ToolError(f"failed to get git credentials: {e}") from e

    get_audit_logger().log_read("list_git_credentials", "all")
    return to_json(credentials)


async def get_git_credential(params: GitCredentialIdParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"git_credential={params.id}"

    try:
        credential = await get_client().get_git_credential(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("get_git_credential", target, str(e))
        raise ToolError(f"failed to get git credential: {e}") from e

    get_audit_logger().log_read("get_git_credential", target)
    return to_json(credential)


class CreateGitCredentialParams(BaseModel):
    """Parameters for create_git_credential tool."""

    name: str = Field(min_length=1, description="Credential name")
    username: str = Field(min_length=1, description="Git username")
    password: SecretStr = Field(description="Git password or personal access token")
    authorization_type: int = Field(
        default=0, description="Authorization type: 0 = basic, 1 = token"
    )


async def create_git_credential(params: CreateGitCredentialParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"git_credential={params.name}"

    try:
        credential_id = await get_client().create_git_credential(
            name=params.name,
            username=params.username,
            password=params.password.get_secret_value(),
            authorization_type=params.authorization_type,
        )
    except PortainerError as e:
        get_audit_logger().log_error("create_git_credential", target, str(e))
        raise ToolError(f"failed to create git credential: {e}") from e

    get_audit_logger().log_write("create_git_credential", target, {"id": credential_id})
    return f"Git credential created successfully with ID {credential_id}"


class UpdateGitCredentialParams(BaseModel):
    """Parameters for update_git_credential tool."""

    id: int = Field(description="Git credential ID")
    name: str = Field(min_length=1, description="Credential name")
    username: str = Field(min_length=1, description="Git username")
    password: SecretStr | None = Field(
        default=None, description="New password or token (omit to keep the current one)"
    )
    authorization_type: int = Field(
        default=0, description="Authorization type: 0 = basic, 1 = token"
    )


async def update_git_credential(params: UpdateGitCredentialParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"git_credential={params.id}"

    try:
        await get_client().update_git_credential(
            params.id,
            name=params.name,
            username=params.username,
            authorization_type=params.authorization_type,
            password=params.password.get_secret_value() if params.password else None,
        )
    except PortainerError as e:
        get_audit_logger().log_error("update_git_credential", target, str(e))
        raise ToolError(f"failed to update git credential: {e}") from e

    get_audit_logger().log_write(
        "update_git_credential", target, {"password_changed": bool(params.password)}
    )
    return "Git credential updated successfully"


async def delete_git_credential(params: GitCredentialIdParams, ctx: MCPContext) -> str:
    set_correlation_id(str(ctx.request_id))
    target = f"git_credential={params.id}"

    try:
        await get_client().delete_git_credential(params.id)
    except PortainerError as e:
        get_audit_logger().log_error("delete_git_credential", target, str(e))
        raise ToolError(f"failed to delete git credential: {e}") from e

    get_audit_logger().log_write("delete_git_credential", target)
    return "Git credential deleted successfully"


def register(registry: ToolRegistry) -> None:
    registry.add_tool_if_exists("list_git_credentials", list_git_credentials)
    registry.add_tool_if_exists("get_git_credential", get_git_credential)

    if not registry.read_only:
        registry.add_tool_if_exists("create_git_credential", create_git_credential)
        registry.add_tool_if_exists("update_git_credential", update_git_credential)
        registry.add_tool_if_exists("delete_git_credential", delete_git_credential)
