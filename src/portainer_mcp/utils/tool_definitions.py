# ABOUTME: Loader for the YAML tools file that names, describes and annotates MCP tools
# ABOUTME: Tools absent from the file are never registered with the server

"""
Tool definitions file loader.

The tools file controls what the assistant sees: the tool list, the
description shown for each tool, and the MCP annotations (read-only,
destructive, idempotent hints). Editing the file changes descriptions without
touching code, and removing an entry hides the tool entirely.

File format:

    version: "1.0"
    tools:
      - name: list_docker_stacks
        description: List all Docker stacks managed by Portainer.
        annotations:
          title: List Docker Stacks
          readOnlyHint: true
          destructiveHint: false
          idempotentHint: true
          openWorldHint: false

Parameter schemas are not part of the file; they come from the pydantic
models of the tool handlers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import yaml
from mcp.types import ToolAnnotations
from pydantic import ValidationError
from semver import Version

from portainer_mcp.utils.version import parse_version

if TYPE_CHECKING:
    from pathlib import Path


class ToolDefinitionError(Exception):
    """Tools file is missing, malformed or too old."""


@dataclass
class ToolDefinition:
    """Description and annotations for one tool."""

    name: str
    description: str
    annotations: ToolAnnotations | None = None


def _parse_version(raw: Any, path: Path) -> Version:
    try:
        return parse_version(str(raw))
    except ValueError as e:
        raise ToolDefinitionError(f"invalid version {raw!r} in tools file {path}") from e


def load_tool_definitions(path: Path, minimum_version: str = "1.0") -> dict[str, ToolDefinition]:
    """
    Load tool definitions from a YAML file.

    Args:
        path: Tools file location
        minimum_version: Oldest file format version accepted

    Returns:
        Mapping of tool name to definition, in file order.

    Raises:
        ToolDefinitionError: If the file cannot be read or parsed, has no
                             version, is older than minimum_version, or
                             contains an unnamed or duplicate tool.
    """
    try:
        raw = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ToolDefinitionError(f"failed to read tools file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ToolDefinitionError(f"failed to parse tools file {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ToolDefinitionError(f"tools file {path} must contain a mapping")

    if not raw.get("version"):
        raise ToolDefinitionError(f"missing version in tools file {path}")

    file_version = _parse_version(raw["version"], path)
    if file_version < parse_version(minimum_version):
        raise ToolDefinitionError(
            f"tools file version {raw['version']} is older than the minimum "
            f"required version {minimum_version}"
        )

    definitions: dict[str, ToolDefinition] = {}
    for entry in raw.get("tools") or []:
        name = entry.get("name") if isinstance(entry, dict) else None
        if not name:
            raise ToolDefinitionError(f"tool without a name in tools file {path}")
        if name in definitions:
            raise ToolDefinitionError(f"duplicate tool {name!r} in tools file {path}")

        annotations = None
        if entry.get("annotations"):
            try:
                annotations = ToolAnnotations.model_validate(entry["annotations"])
            except ValidationError as e:
                raise ToolDefinitionError(f"invalid annotations for tool {name!r}: {e}") from e

        definitions[name] = ToolDefinition(
            name=name,
            description=str(entry.get("description", "")).strip(),
            annotations=annotations,
        )

    return definitions
