# ABOUTME: Tools package initialization for Portainer MCP Server
# ABOUTME: Contains all MCP tool implementations organized by Portainer resource

"""
Portainer MCP Tools Package

One module per Portainer resource. Each exposes register(registry), which
always registers its read tools and registers its write tools only when the
server is not in read-only mode:

    - alerting.py: alerts, alert rules, alerting settings, silences
    - custom_resources.py: Kubernetes CRDs and custom resources
    - custom_templates.py: custom templates
    - docker_stacks.py: standalone compose stacks
    - edge_jobs.py: scheduled edge scripts
    - edge_stacks.py: stacks deployed to edge groups
    - environments.py: environments, tags, access policies, groups, agent versions
    - git_credentials.py: stored git credentials
    - policies.py: fleet policies, templates, metadata, conflicts
    - registries.py: container registries
    - settings.py: server settings
    - teams.py: teams
    - webhooks.py: redeploy webhooks

Shared plumbing (ToolRegistry, to_json) lives in base.py.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from portainer_mcp.tools import (
    alerting,
    custom_resources,
    custom_templates,
    docker_stacks,
    edge_jobs,
    edge_stacks,
    environments,
    git_credentials,
    policies,
    registries,
    settings,
    teams,
    webhooks,
)

if TYPE_CHECKING:
    from portainer_mcp.tools.base import ToolRegistry

TOOL_MODULES = (
    alerting,
    custom_resources,
    custom_templates,
    docker_stacks,
    edge_jobs,
    edge_stacks,
    environments,
    git_credentials,
    policies,
    registries,
    settings,
    teams,
    webhooks,
)


def register_all_tools(registry: ToolRegistry) -> list[str]:
    """
    Register every tool module on the registry.

    Returns:
        Names of the tools that were registered.
    """
    for module in TOOL_MODULES:
        module.register(registry)
    return list(registry.registered)
