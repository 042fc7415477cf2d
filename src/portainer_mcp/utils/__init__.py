# ABOUTME: Utilities package initialization for Portainer MCP Server
# ABOUTME: Contains the HTTP client, logging, tools file loader and version gate

"""
Portainer MCP Utilities Package

Shared utilities:
    - client.py: Async Portainer REST API client
    - logging.py: Structured logging with correlation IDs and audit trail
    - tool_definitions.py: Loader for the tools.yaml definitions file
    - version.py: Portainer server version compatibility check
"""
