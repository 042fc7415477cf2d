# ABOUTME: Pytest fixtures and configuration for Portainer MCP Server tests
# ABOUTME: Provides shared fixtures for unit and integration tests

import os
from collections.abc import AsyncIterator, Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import SecretStr

from portainer_mcp import state
from portainer_mcp.config import PortainerInstance, SecuritySettings, ServerSettings
from portainer_mcp.utils.client import PortainerClient
from portainer_mcp.utils.logging import AuditLogger

PORTAINER_ENV_VARS = (
    "PORTAINER_URL",
    "PORTAINER_TOKEN",
    "PORTAINER_INSECURE",
    "PORTAINER_MCP_ENV_FILE",
    "PORTAINER_MCP_TOOLS_FILE",
    "PORTAINER_MCP_DISABLE_VERSION_CHECK",
    "PORTAINER_MCP_REQUEST_TIMEOUT",
    "PORTAINER_MCP_LOG_LEVEL",
    "PORTAINER_MCP_LOG_JSON",
    "MCP_READ_ONLY",
    "MCP_AUDIT_LOG",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every variable the settings read, so the host environment cannot leak in."""
    for name in PORTAINER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def mock_portainer_instance() -> PortainerInstance:
    """Create a Portainer instance configuration."""
    return PortainerInstance(
        url="https://portainer.example.com",
        token=SecretStr("ptr_test-token"),
        insecure=True,
    )


@pytest.fixture
def mock_security_settings() -> SecuritySettings:
    """Create security settings with write tools enabled."""
    return SecuritySettings(read_only=False, audit_log=None)


@pytest.fixture
def mock_server_settings(
    mock_portainer_instance: PortainerInstance,
    mock_security_settings: SecuritySettings,
) -> ServerSettings:
    """Create server settings pointing at the mock instance."""
    return ServerSettings(
        portainer_url=mock_portainer_instance.url,
        portainer_token=mock_portainer_instance.token,
        portainer_insecure=mock_portainer_instance.insecure,
        security=mock_security_settings,
    )


@pytest.fixture
def mock_portainer_client(mock_portainer_instance: PortainerInstance) -> AsyncMock:
    """Create a mock Portainer client."""
    client = AsyncMock(spec=PortainerClient)
    client._instance = mock_portainer_instance
    return client


@pytest.fixture
def mock_audit_logger() -> MagicMock:
    """Create a mock audit logger."""
    return MagicMock(spec=AuditLogger)


@pytest.fixture
def server_state(
    mock_server_settings: ServerSettings,
    mock_portainer_client: AsyncMock,
    mock_audit_logger: MagicMock,
) -> Iterator[AsyncMock]:
    """Publish runtime state backed by the mock client, as the lifespan would."""
    state.configure(
        mock_server_settings,
        mock_portainer_client,
        mock_audit_logger,
        "2.27.3",
        ["list_docker_stacks"],
    )
    yield mock_portainer_client
    state.clear()


@pytest.fixture
def mock_context() -> MagicMock:
    """Create a mock MCP context."""
    ctx = MagicMock()
    ctx.request_id = "test-request-123"
    return ctx


# Integration test fixtures


@pytest.fixture
def portainer_url() -> str | None:
    """Get Portainer URL from environment."""
    return os.environ.get("PORTAINER_URL")


@pytest.fixture
def portainer_token() -> str | None:
    """Get Portainer token from environment."""
    return os.environ.get("PORTAINER_TOKEN")


@pytest.fixture
def portainer_insecure() -> bool:
    """Get Portainer insecure setting from environment."""
    return os.environ.get("PORTAINER_INSECURE", "true").lower() == "true"


@pytest.fixture
async def live_portainer_client(
    portainer_url: str | None,
    portainer_token: str | None,
    portainer_insecure: bool,
) -> AsyncIterator[PortainerClient | None]:
    """Create a live Portainer client for integration tests."""
    if not portainer_url or not portainer_token:
        yield None
        return

    instance = PortainerInstance(
        url=portainer_url,
        token=SecretStr(portainer_token),
        insecure=portainer_insecure,
    )

    async with PortainerClient(instance) as client:
        yield client
