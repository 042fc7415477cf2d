# ABOUTME: Portainer MCP Server package initialization
# ABOUTME: Exposes version information for the Portainer MCP translation layer

"""
Portainer MCP Server - Portainer REST API exposed as Model Context Protocol tools.

=============================================================================
WHAT IS THIS PACKAGE?
=============================================================================

This package is a TRANSLATION LAYER. An AI assistant speaks MCP; Portainer
speaks REST. For every supported Portainer resource the server:

1. DECLARES a tool (name, description, parameter schema)
2. PARSES the parameters the assistant sends
3. CALLS the matching Portainer REST endpoint
4. RETURNS the response as JSON text (or a short success message)

Failures never crash the server. They come back to the assistant as MCP
error results with a short prefix explaining what was attempted:

    failed to get alert rules: API request failed with status 500: ...

=============================================================================
WHAT IS PORTAINER?
=============================================================================

Portainer is a management UI and API for Docker, Swarm and Kubernetes
environments. Among other things it manages:

- ENVIRONMENTS: Docker and Kubernetes endpoints, their tags and access
- STACKS: Docker Compose deployments on an environment
- EDGE JOBS: Scheduled scripts executed on edge devices
- REGISTRIES: Container image registries and their credentials
- POLICIES: Fleet-wide rules applied to groups of environments
- ALERTING: Observability rules, alerts and silences

=============================================================================
PACKAGE STRUCTURE OVERVIEW
=============================================================================

portainer_mcp/
├── __init__.py          <- YOU ARE HERE: Package entry point
├── config.py            <- Configuration management (env vars, settings)
├── models.py            <- Dataclasses mirroring Portainer JSON payloads
├── server.py            <- FastMCP server, lifespan and MCP resources
├── state.py             <- Runtime singletons (client, settings, audit log)
├── tools.yaml           <- Which tools exist, with descriptions/annotations
├── tools/
│   ├── base.py          <- ToolRegistry and JSON result helpers
│   └── *.py             <- One module per Portainer resource
└── utils/
    ├── client.py        <- Async HTTP client for the Portainer REST API
    ├── logging.py       <- Structured logging with audit trails
    ├── tool_definitions.py <- Loader for tools.yaml
    └── version.py       <- Portainer server version compatibility gate
"""

# Version of this package. Follows Semantic Versioning (MAJOR.MINOR.PATCH).
__version__ = "0.5.1"

__all__ = ["__version__"]
