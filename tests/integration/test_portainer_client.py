# ABOUTME: Integration tests for Portainer API client against a live Portainer server
# ABOUTME: Skipped unless PORTAINER_URL and PORTAINER_TOKEN are set

"""Integration tests for the Portainer client against a live server.

These tests require:
- A running Portainer server within the supported version range
- PORTAINER_URL and PORTAINER_TOKEN pointing at it (an admin access token)
- PORTAINER_INSECURE=false if the server has a trusted certificate

Only read endpoints are exercised, so the tests are safe to run against a
shared instance.
"""

from __future__ import annotations

import os

import pytest

from portainer_mcp.utils.client import PortainerAPIError, PortainerClient
from portainer_mcp.utils.version import check_portainer_version

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not (os.environ.get("PORTAINER_URL") and os.environ.get("PORTAINER_TOKEN")),
        reason="PORTAINER_URL and PORTAINER_TOKEN are required for integration tests",
    ),
]


async def test_server_version_is_supported(live_portainer_client: PortainerClient):
    version = await live_portainer_client.get_version()

    check_portainer_version(version)


async def test_list_docker_stacks(live_portainer_client: PortainerClient):
    stacks = await live_portainer_client.get_docker_stacks()

    assert isinstance(stacks, list)
    for stack in stacks:
        assert stack.id > 0


async def test_list_registries_without_passwords(live_portainer_client: PortainerClient):
    registries = await live_portainer_client.get_registries()

    for registry in registries:
        assert not hasattr(registry, "password")


async def test_get_settings(live_portainer_client: PortainerClient):
    settings = await live_portainer_client.get_settings()

    assert isinstance(settings, dict)
    assert settings


async def test_list_agent_versions(live_portainer_client: PortainerClient):
    versions = await live_portainer_client.get_agent_versions()

    assert all(isinstance(v, str) for v in versions)


async def test_missing_edge_job_is_api_error(live_portainer_client: PortainerClient):
    with pytest.raises(PortainerAPIError) as exc_info:
        await live_portainer_client.get_edge_job(999999)

    assert exc_info.value.status_code in (400, 404)
