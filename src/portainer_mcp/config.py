# ABOUTME: Configuration management for Portainer MCP Server
# ABOUTME: Handles environment variables, read-only mode and startup options

"""
Configuration management using pydantic-settings.

=============================================================================
WHAT IS THIS FILE?
=============================================================================

This module handles all configuration for the MCP server. It:

1. READS environment variables (like PORTAINER_URL, MCP_READ_ONLY)
2. VALIDATES them (URLs get a scheme, log levels must be real levels, ...)
3. PROVIDES typed access to settings throughout the application

Example without Pydantic:
    read_only = os.environ.get("MCP_READ_ONLY", "true").lower() == "true"
    # What if someone sets it to "yes"? Or "1"? Or "TRUE"?

Example with Pydantic:
    read_only: bool = Field(default=True)
    # Automatically handles "true", "True", "1", "yes", "on", etc.

=============================================================================
ARCHITECTURE: THREE CONFIGURATION CLASSES
=============================================================================

1. PortainerInstance: Connection details for the Portainer server
   - URL, API token, TLS verification

2. SecuritySettings: What the AI is allowed to do (MCP_* prefix)
   - Read-only mode, audit log destination

3. ServerSettings: Main configuration container
   - Portainer connection read from PORTAINER_* variables
   - Tools file location, version check toggle, logging
   - Contains SecuritySettings as nested object

=============================================================================
ENVIRONMENT VARIABLE MAPPING
=============================================================================

Portainer connection:
    PORTAINER_URL          -> Portainer server URL
    PORTAINER_TOKEN        -> API access token (sent as X-API-Key)
    PORTAINER_INSECURE     -> Skip TLS certificate verification (default: true)

Server options (PORTAINER_MCP_ prefix):
    PORTAINER_MCP_TOOLS_FILE             -> Path to a custom tools.yaml
    PORTAINER_MCP_DISABLE_VERSION_CHECK  -> Skip the Portainer version gate
    PORTAINER_MCP_REQUEST_TIMEOUT        -> HTTP timeout in seconds
    PORTAINER_MCP_LOG_LEVEL              -> DEBUG, INFO, WARNING, ERROR, CRITICAL
    PORTAINER_MCP_LOG_JSON               -> Emit JSON log lines

Security settings (MCP_ prefix):
    MCP_READ_ONLY          -> Do not register mutating tools (default: true)
    MCP_AUDIT_LOG          -> Path to audit log file
"""

from __future__ import annotations

import os
from pathlib import Path  # noqa: TC003 - Required at runtime for Pydantic
from typing import Annotated

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# PORTAINER INSTANCE CONFIGURATION
# =============================================================================


class PortainerInstance(BaseModel):
    """
    Connection details for the Portainer server.

    WHY BaseModel NOT BaseSettings?
    -------------------------------
    The instance is assembled by ServerSettings from its PORTAINER_* fields,
    not read from the environment directly. Keeping it a plain model lets
    tests and the client build one without touching os.environ.

    USAGE EXAMPLE:
    --------------
        instance = PortainerInstance(
            url="https://portainer.example.com:9443",
            token=SecretStr("ptr_xxx"),
        )
    """

    model_config = {"extra": "ignore"}

    url: str = Field(description="Portainer server URL")
    # Base URL of the Portainer server, e.g. "https://portainer.example.com:9443".
    # The client appends "/api" to reach the REST API.

    token: SecretStr = Field(description="Portainer API access token")
    # Access tokens are created under "My account > Access tokens" in Portainer
    # and look like "ptr_...". SecretStr keeps the value out of logs and reprs.

    insecure: bool = Field(default=True, description="Skip TLS verification")
    # Portainer ships with a self-signed certificate on :9443, so TLS
    # verification is skipped unless explicitly turned back on.

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """
        Ensure URL has a scheme and no trailing slash.

        "portainer.local:9443"  -> "https://portainer.local:9443"
        "https://portainer/"    -> "https://portainer"
        """
        if not v.startswith(("http://", "https://")):
            v = f"https://{v}"
        return v.rstrip("/")


# =============================================================================
# SECURITY SETTINGS
# =============================================================================


class SecuritySettings(BaseSettings):
    """
    Security-related configuration.

    READ-ONLY MODE
    --------------
    When read_only is true (the default) mutating tools are never registered
    with the MCP server. The assistant does not see them in the tool list and
    cannot call them, which is stronger than rejecting calls at runtime.

    To allow create/update/delete tools: MCP_READ_ONLY=false
    """

    model_config = SettingsConfigDict(env_prefix="MCP_")

    read_only: bool = Field(
        default=True,
        description="Do not register tools that modify Portainer state",
    )

    audit_log: Path | None = Field(
        default=None,
        description="Path to audit log file",
    )
    # If set, every tool call is appended to this file as one JSON line:
    # timestamp, correlation_id, action, target, result, details.
    #
    # Example: MCP_AUDIT_LOG=/var/log/portainer-mcp-audit.json
    #
    # When None (default), audit records go through structured logging.


# =============================================================================
# MAIN SERVER SETTINGS
# =============================================================================


class ServerSettings(BaseSettings):
    """
    Main server configuration.

    USAGE:
    ------
        settings = load_settings()          # Reads from environment
        print(settings.portainer_url)       # Portainer URL
        print(settings.security.read_only)  # Security setting
    """

    model_config = SettingsConfigDict(
        env_prefix="PORTAINER_MCP_",
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
    )

    # -------------------------------------------------------------------------
    # PORTAINER CONNECTION (from environment)
    # -------------------------------------------------------------------------

    portainer_url: str = Field(
        default="",
        validation_alias="PORTAINER_URL",
        description="Portainer server URL",
    )

    portainer_token: SecretStr = Field(
        default=SecretStr(""),
        validation_alias="PORTAINER_TOKEN",
        description="Portainer API access token",
    )

    portainer_insecure: bool = Field(
        default=True,
        validation_alias="PORTAINER_INSECURE",
        description="Skip TLS verification for the Portainer server",
    )

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    # -------------------------------------------------------------------------
    # TOOLS AND COMPATIBILITY
    # -------------------------------------------------------------------------

    tools_file: Path | None = Field(
        default=None,
        description="Path to tools definition YAML file",
    )
    # Only tools listed in this file are registered. When None, the tools.yaml
    # shipped inside the package is used.

    disable_version_check: bool = Field(
        default=False,
        description="Skip the Portainer server version compatibility check",
    )
    # The server refuses to start against Portainer versions outside the
    # supported range. Setting this to true skips the check entirely.

    # -------------------------------------------------------------------------
    # LOGGING
    # -------------------------------------------------------------------------

    log_level: Annotated[str, Field(pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")] = Field(
        default="INFO",
        description="Logging level",
    )

    log_json: bool = Field(
        default=False,
        description="Emit logs as JSON lines instead of console output",
    )

    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @property
    def instance(self) -> PortainerInstance | None:
        """
        Portainer connection built from the PORTAINER_* fields.

        Returns None if PORTAINER_URL is not set.
        """
        if not self.portainer_url:
            return None
        return PortainerInstance(
            url=self.portainer_url,
            token=self.portainer_token,
            insecure=self.portainer_insecure,
        )


# =============================================================================
# SETTINGS LOADER
# =============================================================================


def load_settings() -> ServerSettings:
    """
    Load settings from environment with validation.

    If PORTAINER_MCP_ENV_FILE is set, additional variables are read from
    that file. Useful for local development.

    Example .env file:
        PORTAINER_URL=https://localhost:9443
        PORTAINER_TOKEN=ptr_dev_token
        MCP_READ_ONLY=false

    Raises:
        pydantic.ValidationError: If configuration is invalid.
    """
    return ServerSettings(
        _env_file=os.environ.get("PORTAINER_MCP_ENV_FILE"),
    )
