# ABOUTME: Shared plumbing for MCP tool modules: registration against the tools file
# ABOUTME: and JSON rendering of API results

"""Tool registration and result formatting helpers."""

from __future__ import annotations

import dataclasses
import json
from typing import TYPE_CHECKING, Any

import structlog
from mcp.server.fastmcp import Context

if TYPE_CHECKING:
    from collections.abc import Callable

    from mcp.server.fastmcp import FastMCP

    from portainer_mcp.utils.tool_definitions import ToolDefinition

MCPContext = Context[Any, Any]
logger = structlog.get_logger(__name__)


class ToolRegistry:
    """
    Registers tool handlers on a FastMCP server, filtered by the tools file.

    A handler is only registered when its name appears in the tools file. The
    description and annotations come from the file, so the handler docstring
    is not what the assistant sees.

    USAGE:
    ------
        registry = ToolRegistry(mcp, definitions, read_only=settings.security.read_only)
        registry.add_tool_if_exists("list_docker_stacks", list_docker_stacks)
        if not registry.read_only:
            registry.add_tool_if_exists("delete_docker_stack", delete_docker_stack)
    """

    def __init__(
        self,
        server: FastMCP,
        definitions: dict[str, ToolDefinition],
        read_only: bool = True,
    ) -> None:
        self.server = server
        self.definitions = definitions
        self.read_only = read_only
        self.registered: list[str] = []

    def add_tool_if_exists(self, name: str, handler: Callable[..., Any]) -> bool:
        """
        Register handler under name if the tools file declares it.

        Returns:
            True if the tool was registered.
        """
        definition = self.definitions.get(name)
        if definition is None:
            logger.warning("Tool not found in tools file, will not be registered", tool=name)
            return False

        self.server.add_tool(
            handler,
            name=name,
            description=definition.description,
            annotations=definition.annotations,
        )
        self.registered.append(name)
        logger.debug("Registered tool", tool=name)
        return True


def _plain(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def to_json(value: Any) -> str:
    """Render an API result (dataclasses, lists or raw JSON) as indented JSON text."""
    return json.dumps(_plain(value), indent=2)
