# ABOUTME: Unit tests for Portainer API client
# ABOUTME: Tests request handling, error mapping, and every endpoint path and body

import json

import httpx
import pytest
import respx
from pydantic import SecretStr

from portainer_mcp.config import PortainerInstance
from portainer_mcp.models import StackEnvVar
from portainer_mcp.utils.client import PortainerAPIError, PortainerClient, PortainerError

BASE_URL = "https://portainer.example.com/api"


@pytest.fixture
def instance() -> PortainerInstance:
    """Create a Portainer instance for respx-based tests."""
    return PortainerInstance(
        url="https://portainer.example.com",
        token=SecretStr("ptr_test-token"),
        insecure=True,
    )


def sent_json(route: respx.Route) -> object:
    """Decode the JSON body of the last request a route received."""
    return json.loads(route.calls.last.request.content)


@pytest.mark.unit
class TestPortainerAPIError:
    """Tests for PortainerAPIError."""

    def test_str(self):
        """Test the message carries status and body."""
        error = PortainerAPIError(404, '{"message":"not found"}')
        assert str(error) == 'API request failed with status 404: {"message":"not found"}'

    def test_attributes(self):
        """Test status code and body are kept."""
        error = PortainerAPIError(500, "boom")
        assert error.status_code == 500
        assert error.body == "boom"

    def test_inherits_from_portainer_error(self):
        """Test handlers can catch every client failure with PortainerError."""
        assert isinstance(PortainerAPIError(400, ""), PortainerError)


@pytest.mark.unit
class TestRequest:
    """Tests for the core request method."""

    async def test_not_entered_raises(self, instance: PortainerInstance):
        """Test using the client outside 'async with' raises RuntimeError."""
        client = PortainerClient(instance)
        with pytest.raises(RuntimeError, match="not initialized"):
            await client._request("GET", "/stacks")

    async def test_context_manager_closes_client(self, instance: PortainerInstance):
        """Test the HTTP client is created on enter and released on exit."""
        client = PortainerClient(instance)
        async with client as entered:
            assert entered is client
            assert client._client is not None
        assert client._client is None

    @respx.mock
    async def test_sends_api_key_header(self, instance: PortainerInstance):
        """Test the token is sent as X-API-Key."""
        route = respx.get(f"{BASE_URL}/stacks").mock(return_value=httpx.Response(200, json=[]))

        async with PortainerClient(instance) as client:
            await client._request("GET", "/stacks")

        request = route.calls.last.request
        assert request.headers["X-API-Key"] == "ptr_test-token"
        assert request.headers["Content-Type"] == "application/json"

    @respx.mock
    async def test_returns_decoded_json(self, instance: PortainerInstance):
        """Test successful responses are decoded."""
        respx.get(f"{BASE_URL}/settings").mock(
            return_value=httpx.Response(200, json={"AuthenticationMethod": 1})
        )

        async with PortainerClient(instance) as client:
            result = await client._request("GET", "/settings")

        assert result == {"AuthenticationMethod": 1}

    @respx.mock
    async def test_empty_body_returns_none(self, instance: PortainerInstance):
        """Test 204 responses yield None."""
        respx.delete(f"{BASE_URL}/registries/1").mock(return_value=httpx.Response(204))

        async with PortainerClient(instance) as client:
            result = await client._request("DELETE", "/registries/1")

        assert result is None

    @respx.mock
    async def test_non_2xx_raises_api_error(self, instance: PortainerInstance):
        """Test error statuses raise PortainerAPIError with the raw body."""
        respx.get(f"{BASE_URL}/edge_jobs/99").mock(
            return_value=httpx.Response(404, text='{"message":"Edge job not found"}')
        )

        async with PortainerClient(instance) as client:
            with pytest.raises(PortainerAPIError) as exc_info:
                await client._request("GET", "/edge_jobs/99")

        assert exc_info.value.status_code == 404
        assert "Edge job not found" in str(exc_info.value)

    @respx.mock
    async def test_redirect_status_is_an_error(self, instance: PortainerInstance):
        """Test statuses outside 2xx are failures, not only 4xx/5xx."""
        respx.get(f"{BASE_URL}/stacks").mock(return_value=httpx.Response(304))

        async with PortainerClient(instance) as client:
            with pytest.raises(PortainerAPIError):
                await client._request("GET", "/stacks")

    @respx.mock
    async def test_single_attempt_on_server_error(self, instance: PortainerInstance):
        """Test failed requests are not retried."""
        route = respx.get(f"{BASE_URL}/stacks").mock(return_value=httpx.Response(503))

        async with PortainerClient(instance) as client:
            with pytest.raises(PortainerAPIError):
                await client._request("GET", "/stacks")

        assert route.call_count == 1

    @respx.mock
    async def test_transport_error_raises_portainer_error(self, instance: PortainerInstance):
        """Test connection failures are wrapped in PortainerError."""
        respx.get(f"{BASE_URL}/stacks").mock(side_effect=httpx.ConnectError("refused"))

        async with PortainerClient(instance) as client:
            with pytest.raises(PortainerError, match="refused"):
                await client._request("GET", "/stacks")

    @respx.mock
    async def test_invalid_json_raises_portainer_error(self, instance: PortainerInstance):
        """Test undecodable bodies raise PortainerError."""
        respx.get(f"{BASE_URL}/stacks").mock(return_value=httpx.Response(200, text="<html>"))

        async with PortainerClient(instance) as client:
            with pytest.raises(PortainerError, match="failed to decode API response"):
                await client._request("GET", "/stacks")


@pytest.mark.unit
class TestServerAndAlerting:
    """Tests for version and alerting endpoints."""

    @respx.mock
    async def test_get_version(self, instance: PortainerInstance):
        respx.get(f"{BASE_URL}/system/version").mock(
            return_value=httpx.Response(200, json={"ServerVersion": "2.27.3", "DatabaseVersion": "x"})
        )

        async with PortainerClient(instance) as client:
            assert await client.get_version() == "2.27.3"

    @respx.mock
    async def test_get_alerts_with_status(self, instance: PortainerInstance):
        route = respx.get(f"{BASE_URL}/observability/alerting/alerts").mock(
            return_value=httpx.Response(200, json=[{"fingerprint": "abc"}])
        )

        async with PortainerClient(instance) as client:
            alerts = await client.get_alerts("active")

        assert alerts == [{"fingerprint": "abc"}]
        assert route.calls.last.request.url.params["status"] == "active"

    @respx.mock
    async def test_get_alerts_without_status(self, instance: PortainerInstance):
        route = respx.get(f"{BASE_URL}/observability/alerting/alerts").mock(
            return_value=httpx.Response(200, json=[])
        )

        async with PortainerClient(instance) as client:
            await client.get_alerts()

        assert "status" not in route.calls.last.request.url.params

    @respx.mock
    async def test_get_alert_rules(self, instance: PortainerInstance):
        respx.get(f"{BASE_URL}/observability/alerting/rules").mock(
            return_value=httpx.Response(200, json=[{"id": 1, "name": "High CPU"}])
        )

        async with PortainerClient(instance) as client:
            rules = await client.get_alert_rules()

        assert [r.name for r in rules] == ["High CPU"]

    @respx.mock
    async def test_null_list_becomes_empty(self, instance: PortainerInstance):
        """Test a JSON null list response is treated as empty."""
        respx.get(f"{BASE_URL}/observability/alerting/rules").mock(
            return_value=httpx.Response(200, text="null")
        )

        async with PortainerClient(instance) as client:
            assert await client.get_alert_rules() == []

    @respx.mock
    async def test_update_alert_rule_wraps_body(self, instance: PortainerInstance):
        route = respx.put(f"{BASE_URL}/observability/alerting/rules/7").mock(
            return_value=httpx.Response(200, json={})
        )

        async with PortainerClient(instance) as client:
            await client.update_alert_rule(7, {"name": "Disk", "threshold": 90})

        assert sent_json(route) == {"alertingRule": {"name": "Disk", "threshold": 90}}

    @respx.mock
    async def test_create_alert_silence(self, instance: PortainerInstance):
        route = respx.post(f"{BASE_URL}/observability/alerting/silence").mock(
            return_value=httpx.Response(200, json={})
        )

        async with PortainerClient(instance) as client:
            await client.create_alert_silence({"comment": "maint"}, "http://am:9093")

        assert sent_json(route) == {
            "alertManagerURL": "http://am:9093",
            "silence": {"comment": "maint"},
        }

    @respx.mock
    async def test_delete_alert_silence(self, instance: PortainerInstance):
        route = respx.delete(f"{BASE_URL}/observability/alerting/silence/abc-123").mock(
            return_value=httpx.Response(204)
        )

        async with PortainerClient(instance) as client:
            await client.delete_alert_silence("abc-123")

        assert route.called


@pytest.mark.unit
class TestCustomResources:
    """Tests for Kubernetes custom resource endpoints."""

    @respx.mock
    async def test_list_custom_resource_definitions(self, instance: PortainerInstance):
        respx.get(f"{BASE_URL}/kubernetes/3/customresourcedefinitions").mock(
            return_value=httpx.Response(
                200, json=[{"name": "certificates.cert-manager.io", "scope": "Namespaced"}]
            )
        )

        async with PortainerClient(instance) as client:
            crds = await client.list_custom_resource_definitions(3)

        assert crds[0].name == "certificates.cert-manager.io"
        assert crds[0].scope == "Namespaced"

    @respx.mock
    async def test_list_custom_resources_sends_definition(self, instance: PortainerInstance):
        route = respx.get(f"{BASE_URL}/kubernetes/3/customresources").mock(
            return_value=httpx.Response(200, json=[])
        )

        async with PortainerClient(instance) as client:
            await client.list_custom_resources(3, "certificates.cert-manager.io")

        params = route.calls.last.request.url.params
        assert params["definition"] == "certificates.cert-manager.io"

    @respx.mock
    async def test_get_namespaced_custom_resource(self, instance: PortainerInstance):
        route = respx.get(f"{BASE_URL}/kubernetes/3/customresources/default/web-cert").mock(
            return_value=httpx.Response(200, text="kind: Certificate\n")
        )

        async with PortainerClient(instance) as client:
            body = await client.get_custom_resource(
                3, "web-cert", "certificates.cert-manager.io", namespace="default", output_format="yaml"
            )

        assert body == "kind: Certificate\n"
        params = route.calls.last.request.url.params
        assert params["definition"] == "certificates.cert-manager.io"
        assert params["format"] == "yaml"

    @respx.mock
    async def test_get_cluster_scoped_custom_resource(self, instance: PortainerInstance):
        route = respx.get(f"{BASE_URL}/kubernetes/3/customresources/issuer").mock(
            return_value=httpx.Response(200, json={"kind": "ClusterIssuer"})
        )

        async with PortainerClient(instance) as client:
            await client.get_custom_resource(3, "issuer", "clusterissuers.cert-manager.io")

        assert "format" not in route.calls.last.request.url.params

    @respx.mock
    async def test_delete_custom_resource(self, instance: PortainerInstance):
        route = respx.delete(f"{BASE_URL}/kubernetes/3/customresources/prod/web-cert").mock(
            return_value=httpx.Response(204)
        )

        async with PortainerClient(instance) as client:
            await client.delete_custom_resource(
                3, "web-cert", "certificates.cert-manager.io", namespace="prod"
            )

        assert route.calls.last.request.url.params["definition"] == "certificates.cert-manager.io"


@pytest.mark.unit
class TestStacksAndTemplates:
    """Tests for Docker stack and custom template endpoints."""

    @respx.mock
    async def test_get_docker_stacks(self, instance: PortainerInstance):
        respx.get(f"{BASE_URL}/stacks").mock(
            return_value=httpx.Response(
                200, json=[{"Id": 4, "Name": "web", "EndpointId": 3, "Status": 1}]
            )
        )

        async with PortainerClient(instance) as client:
            stacks = await client.get_docker_stacks()

        assert stacks[0].id == 4
        assert stacks[0].endpoint_id == 3

    @respx.mock
    async def test_get_docker_stack_file(self, instance: PortainerInstance):
        respx.get(f"{BASE_URL}/stacks/4/file").mock(
            return_value=httpx.Response(200, json={"StackFileContent": "services: {}"})
        )

        async with PortainerClient(instance) as client:
            assert await client.get_docker_stack_file(4) == "services: {}"

    @respx.mock
    async def test_create_docker_stack(self, instance: PortainerInstance):
        route = respx.post(f"{BASE_URL}/stacks/create/standalone/string").mock(
            return_value=httpx.Response(200, json={"Id": 12})
        )

        async with PortainerClient(instance) as client:
            stack_id = await client.create_docker_stack(
                3, "web", "services: {}", env=[StackEnvVar("TAG", "1.2")]
            )

        assert stack_id == 12
        assert route.calls.last.request.url.params["endpointId"] == "3"
        assert sent_json(route) == {
            "name": "web",
            "stackFileContent": "services: {}",
            "env": [{"name": "TAG", "value": "1.2"}],
        }

    @respx.mock
    async def test_update_docker_stack(self, instance: PortainerInstance):
        route = respx.put(f"{BASE_URL}/stacks/12").mock(return_value=httpx.Response(200, json={}))

        async with PortainerClient(instance) as client:
            await client.update_docker_stack(12, 3, "services: {}", prune=True, pull_image=True)

        assert route.calls.last.request.url.params["endpointId"] == "3"
        assert sent_json(route) == {
            "stackFileContent": "services: {}",
            "prune": True,
            "pullImage": True,
        }

    @respx.mock
    async def test_start_and_stop_docker_stack(self, instance: PortainerInstance):
        start = respx.post(f"{BASE_URL}/stacks/12/start").mock(return_value=httpx.Response(200))
        stop = respx.post(f"{BASE_URL}/stacks/12/stop").mock(return_value=httpx.Response(200))

        async with PortainerClient(instance) as client:
            await client.start_docker_stack(12, 3)
            await client.stop_docker_stack(12, 3)

        assert start.calls.last.request.url.params["endpointId"] == "3"
        assert stop.calls.last.request.url.params["endpointId"] == "3"

    @respx.mock
    async def test_create_custom_template(self, instance: PortainerInstance):
        route = respx.post(f"{BASE_URL}/custom_templates/create/string").mock(
            return_value=httpx.Response(200, json={"Id": 5})
        )

        async with PortainerClient(instance) as client:
            template_id = await client.create_custom_template("nginx", "web", "services: {}", 2, 1)

        assert template_id == 5
        assert sent_json(route) == {
            "title": "nginx",
            "description": "web",
            "fileContent": "services: {}",
            "type": 2,
            "platform": 1,
        }


@pytest.mark.unit
class TestEdgeJobsAndEnvironments:
    """Tests for edge job and environment endpoints."""

    @respx.mock
    async def test_create_edge_job(self, instance: PortainerInstance):
        route = respx.post(f"{BASE_URL}/edge_jobs/create/string").mock(
            return_value=httpx.Response(200, json={"Id": 8})
        )

        async with PortainerClient(instance) as client:
            job_id = await client.create_edge_job("cleanup", "0 2 * * *", True, "docker system prune -f", [1, 2])

        assert job_id == 8
        assert sent_json(route) == {
            "name": "cleanup",
            "cronExpression": "0 2 * * *",
            "recurring": True,
            "fileContent": "docker system prune -f",
            "edgeGroups": [1, 2],
        }

    @respx.mock
    async def test_update_environment_sends_only_set_fields(self, instance: PortainerInstance):
        route = respx.put(f"{BASE_URL}/endpoints/3").mock(return_value=httpx.Response(200, json={}))

        async with PortainerClient(instance) as client:
            await client.update_environment(3, name="prod", public_url="", group_id=0)

        assert sent_json(route) == {"name": "prod"}

    @respx.mock
    async def test_update_environment_all_fields(self, instance: PortainerInstance):
        route = respx.put(f"{BASE_URL}/endpoints/3").mock(return_value=httpx.Response(200, json={}))

        async with PortainerClient(instance) as client:
            await client.update_environment(3, name="prod", public_url="prod.example.com", group_id=2)

        assert sent_json(route) == {"name": "prod", "publicURL": "prod.example.com", "groupID": 2}

    @respx.mock
    async def test_get_agent_versions(self, instance: PortainerInstance):
        respx.get(f"{BASE_URL}/endpoints/agent_versions").mock(
            return_value=httpx.Response(200, json=["2.27.0", "2.27.3"])
        )

        async with PortainerClient(instance) as client:
            assert await client.get_agent_versions() == ["2.27.0", "2.27.3"]

    @respx.mock
    async def test_get_environments(self, instance: PortainerInstance):
        respx.get(f"{BASE_URL}/endpoints").mock(
            return_value=httpx.Response(
                200,
                json=[
                    {"Id": 1, "Name": "local", "Type": 1, "Status": 1},
                    {"Id": 3, "Name": "prod", "Type": 7, "Status": 2, "TagIds": [4]},
                ],
            )
        )

        async with PortainerClient(instance) as client:
            environments = await client.get_environments()

        assert [e.name for e in environments] == ["local", "prod"]
        assert environments[1].type == "kubernetes-edge-agent"
        assert environments[1].status == "inactive"
        assert environments[1].tag_ids == [4]

    @respx.mock
    async def test_update_environment_tags(self, instance: PortainerInstance):
        route = respx.put(f"{BASE_URL}/endpoints/3").mock(return_value=httpx.Response(200, json={}))

        async with PortainerClient(instance) as client:
            await client.update_environment_tags(3, [1, 4])

        assert sent_json(route) == {"tagIDs": [1, 4]}

    @respx.mock
    async def test_update_environment_user_accesses(self, instance: PortainerInstance):
        route = respx.put(f"{BASE_URL}/endpoints/3").mock(return_value=httpx.Response(200, json={}))

        async with PortainerClient(instance) as client:
            await client.update_environment_user_accesses(
                3, {7: "readonly_user", 9: "environment_administrator"}
            )

        assert sent_json(route) == {
            "userAccessPolicies": {"7": {"RoleId": 4}, "9": {"RoleId": 1}}
        }

    @respx.mock
    async def test_update_environment_team_accesses(self, instance: PortainerInstance):
        route = respx.put(f"{BASE_URL}/endpoints/3").mock(return_value=httpx.Response(200, json={}))

        async with PortainerClient(instance) as client:
            await client.update_environment_team_accesses(3, {2: "operator_user"})

        assert sent_json(route) == {"teamAccessPolicies": {"2": {"RoleId": 5}}}

    @respx.mock
    async def test_unknown_access_level_sends_nothing(self, instance: PortainerInstance):
        route = respx.put(f"{BASE_URL}/endpoints/3").mock(return_value=httpx.Response(200, json={}))

        async with PortainerClient(instance) as client:
            with pytest.raises(ValueError, match="invalid access level: superuser"):
                await client.update_environment_team_accesses(3, {2: "superuser"})

        assert not route.called


@pytest.mark.unit
class TestOrganizationDeletes:
    """Tests for group, tag, team and edge stack deletion."""

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("delete_access_group", "/endpoint_groups/4"),
            ("delete_environment_group", "/edge_groups/4"),
            ("delete_edge_stack", "/edge_stacks/4"),
            ("delete_tag", "/tags/4"),
            ("delete_team", "/teams/4"),
        ],
    )
    @respx.mock
    async def test_delete_path(self, instance: PortainerInstance, method: str, path: str):
        route = respx.delete(f"{BASE_URL}{path}").mock(return_value=httpx.Response(204))

        async with PortainerClient(instance) as client:
            await getattr(client, method)(4)

        assert route.called

    @respx.mock
    async def test_delete_team_not_found(self, instance: PortainerInstance):
        respx.delete(f"{BASE_URL}/teams/99").mock(
            return_value=httpx.Response(404, json={"message": "Team not found"})
        )

        async with PortainerClient(instance) as client:
            with pytest.raises(PortainerAPIError) as exc_info:
                await client.delete_team(99)

        assert exc_info.value.status_code == 404


@pytest.mark.unit
class TestCredentialsRegistriesWebhooks:
    """Tests for git credential, registry, settings and webhook endpoints."""

    @respx.mock
    async def test_git_credential_has_no_password(self, instance: PortainerInstance):
        respx.get(f"{BASE_URL}/cloud/gitcredentials/2").mock(
            return_value=httpx.Response(
                200, json={"id": 2, "name": "gh", "username": "bot", "password": "hunter2"}
            )
        )

        async with PortainerClient(instance) as client:
            credential = await client.get_git_credential(2)

        assert credential.username == "bot"
        assert "hunter2" not in repr(credential)

    @respx.mock
    async def test_update_git_credential_keeps_password(self, instance: PortainerInstance):
        route = respx.put(f"{BASE_URL}/cloud/gitcredentials/2").mock(
            return_value=httpx.Response(200, json={})
        )

        async with PortainerClient(instance) as client:
            await client.update_git_credential(2, "gh", "bot", 0, password="")

        assert "password" not in sent_json(route)

    @respx.mock
    async def test_create_registry(self, instance: PortainerInstance):
        route = respx.post(f"{BASE_URL}/registries").mock(
            return_value=httpx.Response(200, json={"Id": 6})
        )

        async with PortainerClient(instance) as client:
            registry_id = await client.create_registry(
                "ghcr", 8, "ghcr.io", authentication=True, username="bot", password="pat"
            )

        assert registry_id == 6
        assert sent_json(route) == {
            "name": "ghcr",
            "type": 8,
            "url": "ghcr.io",
            "authentication": True,
            "username": "bot",
            "password": "pat",
        }

    @respx.mock
    async def test_ping_registry(self, instance: PortainerInstance):
        route = respx.post(f"{BASE_URL}/registries/ping").mock(
            return_value=httpx.Response(200, json={"success": True})
        )

        async with PortainerClient(instance) as client:
            result = await client.ping_registry("registry.example.com", 3)

        assert result == {"success": True}
        assert sent_json(route) == {"url": "registry.example.com", "type": 3}

    @respx.mock
    async def test_get_settings_returns_whole_payload(self, instance: PortainerInstance):
        payload = {
            "AuthenticationMethod": 1,
            "EnableEdgeComputeFeatures": True,
            "SnapshotInterval": "5m",
            "InternalAuthSettings": {"RequiredPasswordLength": 12},
        }
        respx.get(f"{BASE_URL}/settings").mock(return_value=httpx.Response(200, json=payload))

        async with PortainerClient(instance) as client:
            assert await client.get_settings() == payload

    @respx.mock
    async def test_update_settings_sends_object(self, instance: PortainerInstance):
        route = respx.put(f"{BASE_URL}/settings").mock(return_value=httpx.Response(200, json={}))

        async with PortainerClient(instance) as client:
            await client.update_settings({"SnapshotInterval": "10m"})

        assert sent_json(route) == {"SnapshotInterval": "10m"}

    @respx.mock
    async def test_create_webhook(self, instance: PortainerInstance):
        route = respx.post(f"{BASE_URL}/webhooks").mock(
            return_value=httpx.Response(200, json={"Id": 11, "Token": "abc"})
        )

        async with PortainerClient(instance) as client:
            webhook_id = await client.create_webhook("svc-1", 3, 1)

        assert webhook_id == 11
        assert sent_json(route) == {"resourceID": "svc-1", "endpointID": 3, "webhookType": 1}


@pytest.mark.unit
class TestPolicies:
    """Tests for policy endpoints."""

    @respx.mock
    async def test_get_policies_unwraps_list(self, instance: PortainerInstance):
        respx.get(f"{BASE_URL}/policies").mock(
            return_value=httpx.Response(
                200, json={"policies": [{"Id": 1, "Name": "baseline", "Type": "security"}]}
            )
        )

        async with PortainerClient(instance) as client:
            policies = await client.get_policies()

        assert [p.name for p in policies] == ["baseline"]

    @respx.mock
    async def test_create_policy_returns_policy_id(self, instance: PortainerInstance):
        route = respx.post(f"{BASE_URL}/policies").mock(
            return_value=httpx.Response(200, json={"Id": 9, "Name": "baseline"})
        )

        async with PortainerClient(instance) as client:
            policy_id = await client.create_policy(
                "baseline", "security", "docker", environment_groups=[1], data={"a": 1}
            )

        assert policy_id == 9
        assert sent_json(route) == {
            "name": "baseline",
            "type": "security",
            "environmentType": "docker",
            "environmentGroups": [1],
            "data": {"a": 1},
        }

    @respx.mock
    async def test_update_policy_omits_empty_fields(self, instance: PortainerInstance):
        route = respx.put(f"{BASE_URL}/policies/9").mock(return_value=httpx.Response(200, json={}))

        async with PortainerClient(instance) as client:
            await client.update_policy(9, name="renamed")

        assert sent_json(route) == {"name": "renamed"}

    @respx.mock
    async def test_get_policy_templates_filters(self, instance: PortainerInstance):
        route = respx.get(f"{BASE_URL}/policies/templates").mock(
            return_value=httpx.Response(200, json=[])
        )

        async with PortainerClient(instance) as client:
            await client.get_policy_templates(category="security", policy_type="rbac")

        params = route.calls.last.request.url.params
        assert params["category"] == "security"
        assert params["type"] == "rbac"
