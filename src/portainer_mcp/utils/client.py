# ABOUTME: Portainer REST API client wrapper with structured error handling
# ABOUTME: Provides async methods for every Portainer endpoint the MCP tools use

"""
Portainer API client with structured error handling.

=============================================================================
WHAT IS THIS FILE?
=============================================================================

This module provides the HTTP client for communicating with Portainer's
REST API. It handles:

1. HTTP COMMUNICATION: One request per client method, fixed REST paths
2. AUTHENTICATION: Attaching the access token as the X-API-Key header
3. ERROR HANDLING: Converting non-2xx responses to PortainerAPIError
4. DECODING: Turning JSON payloads into the dataclasses in models.py

=============================================================================
PORTAINER REST API OVERVIEW
=============================================================================

Portainer serves its API under /api:

    GET    /api/stacks                              - List stacks
    POST   /api/stacks/create/standalone/string     - Deploy a compose stack
    GET    /api/kubernetes/{env}/customresources    - List custom resources
    DELETE /api/registries/{id}                     - Remove a registry

Authentication uses an access token in a header:
    X-API-Key: ptr_xxxxxxxx

Any status outside 2xx is a failure. The response body is kept verbatim in
the error so the assistant sees exactly what Portainer said.

=============================================================================
NO RETRIES
=============================================================================

Every method performs exactly one request. Many calls here are not
idempotent (creating a stack twice deploys it twice), so a failed call is
reported to the assistant, which decides what to do next.

=============================================================================
CONTEXT MANAGERS (async with)
=============================================================================

    async with PortainerClient(instance) as client:
        stacks = await client.get_docker_stacks()

__aenter__ creates the httpx connection pool and __aexit__ closes it, even
when the block raises.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from portainer_mcp.models import (
    ACCESS_LEVEL_ROLES,
    AlertingRule,
    AlertingSettings,
    CustomResource,
    CustomResourceDefinition,
    CustomTemplate,
    DockerStack,
    EdgeJob,
    Environment,
    GitCredential,
    Policy,
    Registry,
    StackEnvVar,
    Webhook,
)

if TYPE_CHECKING:
    from portainer_mcp.config import PortainerInstance

logger = structlog.get_logger(__name__)


# =============================================================================
# ERRORS
# =============================================================================


class PortainerError(Exception):
    """
    Base error for anything that goes wrong talking to Portainer.

    Raised directly for transport failures (connection refused, timeouts)
    and for responses that are not valid JSON.
    """


class PortainerAPIError(PortainerError):
    """
    Portainer answered with a non-2xx status.

    USAGE:
    ------
    try:
        job = await client.get_edge_job(99)
    except PortainerAPIError as e:
        print(e.status_code)  # 404
        print(e)              # API request failed with status 404: {"message": ...}
    """

    def __init__(self, status_code: int, body: str) -> None:
        """
        Initialize API error.

        Args:
            status_code: HTTP status code (e.g., 404, 500)
            body: Raw response body as returned by Portainer
        """
        self.status_code = status_code
        self.body = body
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"API request failed with status {self.status_code}: {self.body}"


# =============================================================================
# PORTAINER CLIENT
# =============================================================================


class PortainerClient:
    """
    Async Portainer API client.

    LIFECYCLE:
    ----------
    1. Create client: client = PortainerClient(instance)
    2. Enter context: async with client: ...
    3. Use client: await client.get_registries()
    4. Exit context: HTTP connections cleaned up

    Calling a method outside the context raises RuntimeError.
    """

    def __init__(
        self,
        instance: PortainerInstance,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize Portainer client.

        The HTTP connection pool is created later, in __aenter__.

        Args:
            instance: Portainer connection settings (URL, token, TLS)
            timeout: HTTP request timeout in seconds
        """
        self._instance = instance
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> PortainerClient:
        self._client = httpx.AsyncClient(
            base_url=f"{self._instance.url}/api",
            headers={
                "X-API-Key": self._instance.token.get_secret_value(),
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=self._timeout,
            verify=not self._instance.insecure,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_data: Any = None,
        raw: bool = False,
    ) -> Any:
        """
        Make HTTP request to the Portainer API.

        This is the CORE REQUEST METHOD. All other methods use this.

        Args:
            method: HTTP method ("GET", "POST", "PUT", "DELETE")
            path: API path relative to /api (e.g., "/stacks/3/file")
            params: URL query parameters (optional)
            json_data: JSON request body (optional)
            raw: Return the response body as text instead of decoding it

        Returns:
            Decoded JSON response, or None when the body is empty.
            The body text when raw is True.

        Raises:
            PortainerAPIError: On any status outside 200-299
            PortainerError: On transport failure or undecodable JSON
            RuntimeError: If client not initialized (forgot async with)
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        log = logger.bind(method=method, path=path)
        log.debug("Portainer API request")

        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json_data,
            )
        except httpx.HTTPError as e:
            log.warning("Portainer API request failed", error=str(e))
            raise PortainerError(f"request to {path} failed: {e}") from e

        if not response.is_success:
            log.warning("Portainer API error", status=response.status_code, body=response.text[:200])
            raise PortainerAPIError(response.status_code, response.text)

        if raw:
            return response.text

        if not response.content:
            return None

        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise PortainerError(f"failed to decode API response: {e}") from e

    async def _request_list(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        """GET a path that returns a JSON array; null or empty becomes []."""
        data = await self._request("GET", path, params=params)
        return list(data) if isinstance(data, list) else []

    async def _request_object(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_data: Any = None,
    ) -> dict[str, Any]:
        data = await self._request(method, path, params=params, json_data=json_data)
        return data if isinstance(data, dict) else {}

    async def _create(self, path: str, json_data: Any, params: dict[str, Any] | None = None) -> int:
        """POST a create request and return the new object's Id."""
        data = await self._request_object("POST", path, params=params, json_data=json_data)
        return int(data.get("Id", data.get("id", 0)))

    # =========================================================================
    # SERVER
    # =========================================================================

    async def get_version(self) -> str:
        """
        Get the Portainer server version.

        Portainer API: GET /api/system/version

        Returns:
            Version string such as "2.27.3"
        """
        data = await self._request_object("GET", "/system/version")
        return str(data.get("ServerVersion", ""))

    # =========================================================================
    # ALERTING
    # =========================================================================

    async def get_alerts(self, status: str | None = None) -> Any:
        """
        List alerts, optionally filtered by status.

        Portainer API: GET /api/observability/alerting/alerts[?status=]

        The alert payload is returned as decoded JSON without conversion.
        """
        params = {"status": status} if status else None
        return await self._request("GET", "/observability/alerting/alerts", params=params)

    async def get_alert_rules(self) -> list[AlertingRule]:
        """Portainer API: GET /api/observability/alerting/rules"""
        items = await self._request_list("/observability/alerting/rules")
        return [AlertingRule.from_api_response(item) for item in items]

    async def get_alert_rule(self, rule_id: int) -> AlertingRule:
        """Portainer API: GET /api/observability/alerting/rules/{id}"""
        data = await self._request_object("GET", f"/observability/alerting/rules/{rule_id}")
        return AlertingRule.from_api_response(data)

    async def update_alert_rule(self, rule_id: int, rule: dict[str, Any]) -> None:
        """
        Replace an alert rule.

        Portainer API: PUT /api/observability/alerting/rules/{id}
        Body: {"alertingRule": <rule>}
        """
        await self._request(
            "PUT",
            f"/observability/alerting/rules/{rule_id}",
            json_data={"alertingRule": rule},
        )

    async def delete_alert_rule(self, rule_id: int) -> None:
        """Portainer API: DELETE /api/observability/alerting/rules/{id}"""
        await self._request("DELETE", f"/observability/alerting/rules/{rule_id}")

    async def get_alerting_settings(self) -> list[AlertingSettings]:
        """Portainer API: GET /api/observability/alerting/settings"""
        items = await self._request_list("/observability/alerting/settings")
        return [AlertingSettings.from_api_response(item) for item in items]

    async def create_alert_silence(self, silence: dict[str, Any], alert_manager_url: str = "") -> None:
        """
        Silence alerts matching the given matchers.

        Portainer API: POST /api/observability/alerting/silence
        Body: {"alertManagerURL": <url>, "silence": <silence>}
        """
        await self._request(
            "POST",
            "/observability/alerting/silence",
            json_data={"alertManagerURL": alert_manager_url, "silence": silence},
        )

    async def delete_alert_silence(self, silence_id: str) -> None:
        """Portainer API: DELETE /api/observability/alerting/silence/{id}"""
        await self._request("DELETE", f"/observability/alerting/silence/{silence_id}")

    # =========================================================================
    # KUBERNETES CUSTOM RESOURCES
    # =========================================================================

    async def list_custom_resource_definitions(
        self, environment_id: int
    ) -> list[CustomResourceDefinition]:
        """Portainer API: GET /api/kubernetes/{env}/customresourcedefinitions"""
        items = await self._request_list(f"/kubernetes/{environment_id}/customresourcedefinitions")
        return [CustomResourceDefinition.from_api_response(item) for item in items]

    async def get_custom_resource_definition(
        self, environment_id: int, name: str
    ) -> CustomResourceDefinition:
        """Portainer API: GET /api/kubernetes/{env}/customresourcedefinitions/{name}"""
        data = await self._request_object(
            "GET", f"/kubernetes/{environment_id}/customresourcedefinitions/{name}"
        )
        return CustomResourceDefinition.from_api_response(data)

    async def delete_custom_resource_definition(self, environment_id: int, name: str) -> None:
        """Portainer API: DELETE /api/kubernetes/{env}/customresourcedefinitions/{name}"""
        await self._request(
            "DELETE", f"/kubernetes/{environment_id}/customresourcedefinitions/{name}"
        )

    async def list_custom_resources(
        self, environment_id: int, definition: str
    ) -> list[CustomResource]:
        """Portainer API: GET /api/kubernetes/{env}/customresources?definition={definition}"""
        items = await self._request_list(
            f"/kubernetes/{environment_id}/customresources",
            params={"definition": definition},
        )
        return [CustomResource.from_api_response(item) for item in items]

    @staticmethod
    def _custom_resource_path(environment_id: int, namespace: str | None, name: str) -> str:
        # Cluster-scoped resources have no namespace segment
        if namespace:
            return f"/kubernetes/{environment_id}/customresources/{namespace}/{name}"
        return f"/kubernetes/{environment_id}/customresources/{name}"

    async def get_custom_resource(
        self,
        environment_id: int,
        name: str,
        definition: str,
        namespace: str | None = None,
        output_format: str | None = None,
    ) -> str:
        """
        Get a single custom resource, returned as the unparsed response body.

        Portainer API:
            GET /api/kubernetes/{env}/customresources/{namespace}/{name}?definition=
            GET /api/kubernetes/{env}/customresources/{name}?definition=   (cluster-scoped)

        Args:
            output_format: Optional "format" query value (e.g. "yaml")
        """
        params = {"definition": definition}
        if output_format:
            params["format"] = output_format
        return await self._request(
            "GET",
            self._custom_resource_path(environment_id, namespace, name),
            params=params,
            raw=True,
        )

    async def delete_custom_resource(
        self,
        environment_id: int,
        name: str,
        definition: str,
        namespace: str | None = None,
    ) -> None:
        """Portainer API: DELETE /api/kubernetes/{env}/customresources/[{namespace}/]{name}"""
        await self._request(
            "DELETE",
            self._custom_resource_path(environment_id, namespace, name),
            params={"definition": definition},
        )

    # =========================================================================
    # CUSTOM TEMPLATES
    # =========================================================================

    async def get_custom_templates(self) -> list[CustomTemplate]:
        """Portainer API: GET /api/custom_templates"""
        items = await self._request_list("/custom_templates")
        return [CustomTemplate.from_api_response(item) for item in items]

    async def create_custom_template(
        self,
        title: str,
        description: str,
        file_content: str,
        template_type: int,
        platform: int,
    ) -> int:
        """
        Create a custom template from inline file content.

        Portainer API: POST /api/custom_templates/create/string

        Args:
            template_type: 1 = Swarm stack, 2 = Compose stack, 3 = Kubernetes
            platform: 1 = Linux, 2 = Windows

        Returns:
            ID of the created template
        """
        return await self._create(
            "/custom_templates/create/string",
            {
                "title": title,
                "description": description,
                "fileContent": file_content,
                "type": template_type,
                "platform": platform,
            },
        )

    async def delete_custom_template(self, template_id: int) -> None:
        """Portainer API: DELETE /api/custom_templates/{id}"""
        await self._request("DELETE", f"/custom_templates/{template_id}")

    # =========================================================================
    # DOCKER STACKS
    # =========================================================================

    async def get_docker_stacks(self) -> list[DockerStack]:
        """Portainer API: GET /api/stacks"""
        items = await self._request_list("/stacks")
        return [DockerStack.from_api_response(item) for item in items]

    async def get_docker_stack_file(self, stack_id: int) -> str:
        """
        Get the compose file content of a stack.

        Portainer API: GET /api/stacks/{id}/file
        """
        data = await self._request_object("GET", f"/stacks/{stack_id}/file")
        return str(data.get("StackFileContent", ""))

    async def create_docker_stack(
        self,
        environment_id: int,
        name: str,
        file_content: str,
        env: list[StackEnvVar] | None = None,
    ) -> int:
        """
        Deploy a standalone compose stack on an environment.

        Portainer API: POST /api/stacks/create/standalone/string?endpointId={env}

        Returns:
            ID of the created stack
        """
        body: dict[str, Any] = {"name": name, "stackFileContent": file_content}
        if env:
            body["env"] = [{"name": e.name, "value": e.value} for e in env]
        return await self._create(
            "/stacks/create/standalone/string",
            body,
            params={"endpointId": environment_id},
        )

    async def update_docker_stack(
        self,
        stack_id: int,
        environment_id: int,
        file_content: str,
        env: list[StackEnvVar] | None = None,
        prune: bool = False,
        pull_image: bool = False,
    ) -> None:
        """
        Redeploy a stack with new compose content.

        Portainer API: PUT /api/stacks/{id}?endpointId={env}

        Args:
            prune: Remove services no longer present in the compose file
            pull_image: Pull the latest images before redeploying
        """
        body: dict[str, Any] = {
            "stackFileContent": file_content,
            "prune": prune,
            "pullImage": pull_image,
        }
        if env:
            body["env"] = [{"name": e.name, "value": e.value} for e in env]
        await self._request(
            "PUT",
            f"/stacks/{stack_id}",
            params={"endpointId": environment_id},
            json_data=body,
        )

    async def delete_docker_stack(self, stack_id: int, environment_id: int) -> None:
        """Portainer API: DELETE /api/stacks/{id}?endpointId={env}"""
        await self._request("DELETE", f"/stacks/{stack_id}", params={"endpointId": environment_id})

    async def start_docker_stack(self, stack_id: int, environment_id: int) -> None:
        """Portainer API: POST /api/stacks/{id}/start?endpointId={env}"""
        await self._request(
            "POST", f"/stacks/{stack_id}/start", params={"endpointId": environment_id}
        )

    async def stop_docker_stack(self, stack_id: int, environment_id: int) -> None:
        """Portainer API: POST /api/stacks/{id}/stop?endpointId={env}"""
        await self._request(
            "POST", f"/stacks/{stack_id}/stop", params={"endpointId": environment_id}
        )

    # =========================================================================
    # EDGE JOBS
    # =========================================================================

    async def get_edge_jobs(self) -> list[EdgeJob]:
        """Portainer API: GET /api/edge_jobs"""
        items = await self._request_list("/edge_jobs")
        return [EdgeJob.from_api_response(item) for item in items]

    async def get_edge_job(self, job_id: int) -> EdgeJob:
        """Portainer API: GET /api/edge_jobs/{id}"""
        data = await self._request_object("GET", f"/edge_jobs/{job_id}")
        return EdgeJob.from_api_response(data)

    async def create_edge_job(
        self,
        name: str,
        cron_expression: str,
        recurring: bool,
        script_content: str,
        edge_group_ids: list[int],
    ) -> int:
        """
        Schedule a script on edge groups.

        Portainer API: POST /api/edge_jobs/create/string

        Returns:
            ID of the created edge job
        """
        return await self._create(
            "/edge_jobs/create/string",
            {
                "name": name,
                "cronExpression": cron_expression,
                "recurring": recurring,
                "fileContent": script_content,
                "edgeGroups": edge_group_ids,
            },
        )

    async def delete_edge_job(self, job_id: int) -> None:
        """Portainer API: DELETE /api/edge_jobs/{id}"""
        await self._request("DELETE", f"/edge_jobs/{job_id}")

    # =========================================================================
    # ENVIRONMENTS
    # =========================================================================

    async def update_environment(
        self,
        environment_id: int,
        name: str | None = None,
        public_url: str | None = None,
        group_id: int | None = None,
    ) -> None:
        """
        Update basic environment properties.

        Portainer API: PUT /api/endpoints/{id}

        Only non-empty values are sent; group_id must be positive to be sent.
        """
        payload: dict[str, Any] = {}
        if name:
            payload["name"] = name
        if public_url:
            payload["publicURL"] = public_url
        if group_id and group_id > 0:
            payload["groupID"] = group_id
        await self._request("PUT", f"/endpoints/{environment_id}", json_data=payload)

    async def get_environments(self) -> list[Environment]:
        """Portainer API: GET /api/endpoints"""
        items = await self._request_list("/endpoints")
        return [Environment.from_api_response(item) for item in items]

    async def update_environment_tags(self, environment_id: int, tag_ids: list[int]) -> None:
        """
        Replace the tags of an environment.

        Portainer API: PUT /api/endpoints/{id}
        Body: {"tagIDs": [...]}
        """
        await self._request("PUT", f"/endpoints/{environment_id}", json_data={"tagIDs": tag_ids})

    @staticmethod
    def _access_policies(accesses: dict[int, str]) -> dict[str, dict[str, int]]:
        try:
            return {str(k): {"RoleId": ACCESS_LEVEL_ROLES[v]} for k, v in accesses.items()}
        except KeyError as e:
            raise ValueError(f"invalid access level: {e.args[0]}") from e

    async def update_environment_user_accesses(
        self, environment_id: int, user_accesses: dict[int, str]
    ) -> None:
        """
        Replace the user access policies of an environment.

        Portainer API: PUT /api/endpoints/{id}
        Body: {"userAccessPolicies": {"<user id>": {"RoleId": n}}}

        Args:
            user_accesses: User ID to access level, one of environment_administrator,
                           helpdesk_user, standard_user, readonly_user, operator_user

        Raises:
            ValueError: For an unknown access level (nothing is sent)
        """
        await self._request(
            "PUT",
            f"/endpoints/{environment_id}",
            json_data={"userAccessPolicies": self._access_policies(user_accesses)},
        )

    async def update_environment_team_accesses(
        self, environment_id: int, team_accesses: dict[int, str]
    ) -> None:
        """
        Replace the team access policies of an environment.

        Portainer API: PUT /api/endpoints/{id}
        Body: {"teamAccessPolicies": {"<team id>": {"RoleId": n}}}
        """
        await self._request(
            "PUT",
            f"/endpoints/{environment_id}",
            json_data={"teamAccessPolicies": self._access_policies(team_accesses)},
        )

    async def get_agent_versions(self) -> list[str]:
        """Portainer API: GET /api/endpoints/agent_versions"""
        items = await self._request_list("/endpoints/agent_versions")
        return [str(v) for v in items]

    # =========================================================================
    # GROUPS, TAGS, TEAMS AND EDGE STACKS
    # =========================================================================

    async def delete_access_group(self, group_id: int) -> None:
        """Portainer API: DELETE /api/endpoint_groups/{id}"""
        await self._request("DELETE", f"/endpoint_groups/{group_id}")

    async def delete_environment_group(self, group_id: int) -> None:
        """Portainer API: DELETE /api/edge_groups/{id}"""
        await self._request("DELETE", f"/edge_groups/{group_id}")

    async def delete_edge_stack(self, stack_id: int) -> None:
        """Portainer API: DELETE /api/edge_stacks/{id}"""
        await self._request("DELETE", f"/edge_stacks/{stack_id}")

    async def delete_tag(self, tag_id: int) -> None:
        """Portainer API: DELETE /api/tags/{id}"""
        await self._request("DELETE", f"/tags/{tag_id}")

    async def delete_team(self, team_id: int) -> None:
        """Portainer API: DELETE /api/teams/{id}"""
        await self._request("DELETE", f"/teams/{team_id}")

    # =========================================================================
    # GIT CREDENTIALS
    # =========================================================================

    async def get_git_credentials(self) -> list[GitCredential]:
        """Portainer API: GET /api/cloud/gitcredentials"""
        items = await self._request_list("/cloud/gitcredentials")
        return [GitCredential.from_api_response(item) for item in items]

    async def get_git_credential(self, credential_id: int) -> GitCredential:
        """Portainer API: GET /api/cloud/gitcredentials/{id}"""
        data = await self._request_object("GET", f"/cloud/gitcredentials/{credential_id}")
        return GitCredential.from_api_response(data)

    async def create_git_credential(
        self,
        name: str,
        username: str,
        password: str,
        authorization_type: int,
    ) -> int:
        """
        Store a git credential.

        Portainer API: POST /api/cloud/gitcredentials

        Returns:
            ID of the created credential
        """
        return await self._create(
            "/cloud/gitcredentials",
            {
                "name": name,
                "username": username,
                "password": password,
                "authorizationType": authorization_type,
            },
        )

    async def update_git_credential(
        self,
        credential_id: int,
        name: str,
        username: str,
        authorization_type: int,
        password: str | None = None,
    ) -> None:
        """
        Update a git credential.

        Portainer API: PUT /api/cloud/gitcredentials/{id}

        The stored password is kept unless a new non-empty one is given.
        """
        body: dict[str, Any] = {
            "name": name,
            "username": username,
            "authorizationType": authorization_type,
        }
        if password:
            body["password"] = password
        await self._request("PUT", f"/cloud/gitcredentials/{credential_id}", json_data=body)

    async def delete_git_credential(self, credential_id: int) -> None:
        """Portainer API: DELETE /api/cloud/gitcredentials/{id}"""
        await self._request("DELETE", f"/cloud/gitcredentials/{credential_id}")

    # =========================================================================
    # POLICIES
    # =========================================================================

    @staticmethod
    def _policy_body(
        name: str | None,
        policy_type: str | None,
        environment_type: str | None,
        environment_groups: list[int] | None,
        data: Any,
    ) -> dict[str, Any]:
        # Empty fields are left out so partial updates keep existing values
        body: dict[str, Any] = {}
        if name:
            body["name"] = name
        if policy_type:
            body["type"] = policy_type
        if environment_type:
            body["environmentType"] = environment_type
        if environment_groups:
            body["environmentGroups"] = environment_groups
        if data is not None:
            body["data"] = data
        return body

    async def get_policies(self) -> list[Policy]:
        """
        Portainer API: GET /api/policies

        The response wraps the list: {"policies": [...]}.
        """
        data = await self._request_object("GET", "/policies")
        return [Policy.from_api_response(item) for item in data.get("policies") or []]

    async def get_policy(self, policy_id: int) -> Policy:
        """Portainer API: GET /api/policies/{id}"""
        data = await self._request_object("GET", f"/policies/{policy_id}")
        return Policy.from_api_response(data)

    async def create_policy(
        self,
        name: str,
        policy_type: str,
        environment_type: str,
        environment_groups: list[int] | None = None,
        data: Any = None,
    ) -> int:
        """
        Create a fleet policy.

        Portainer API: POST /api/policies

        Returns:
            ID of the created policy (read from the returned policy object)
        """
        body = self._policy_body(name, policy_type, environment_type, environment_groups, data)
        created = await self._request_object("POST", "/policies", json_data=body)
        return Policy.from_api_response(created).id

    async def update_policy(
        self,
        policy_id: int,
        name: str | None = None,
        policy_type: str | None = None,
        environment_type: str | None = None,
        environment_groups: list[int] | None = None,
        data: Any = None,
    ) -> None:
        """Portainer API: PUT /api/policies/{id}"""
        body = self._policy_body(name, policy_type, environment_type, environment_groups, data)
        await self._request("PUT", f"/policies/{policy_id}", json_data=body)

    async def delete_policy(self, policy_id: int) -> None:
        """Portainer API: DELETE /api/policies/{id}"""
        await self._request("DELETE", f"/policies/{policy_id}")

    async def get_policy_templates(
        self,
        category: str | None = None,
        policy_type: str | None = None,
    ) -> Any:
        """Portainer API: GET /api/policies/templates[?category=&type=]"""
        params: dict[str, str] = {}
        if category:
            params["category"] = category
        if policy_type:
            params["type"] = policy_type
        return await self._request("GET", "/policies/templates", params=params or None)

    async def get_policy_template(self, template_id: str) -> Any:
        """Portainer API: GET /api/policies/templates/{id}"""
        return await self._request("GET", f"/policies/templates/{template_id}")

    async def get_policy_metadata(self) -> Any:
        """Portainer API: GET /api/policies/metadata"""
        return await self._request("GET", "/policies/metadata")

    async def get_policy_conflicts(
        self,
        name: str,
        policy_type: str,
        environment_type: str,
        environment_groups: list[int] | None = None,
        data: Any = None,
    ) -> Any:
        """
        Check whether a prospective policy conflicts with existing ones.

        Portainer API: POST /api/policies/conflicts
        """
        body = self._policy_body(name, policy_type, environment_type, environment_groups, data)
        return await self._request("POST", "/policies/conflicts", json_data=body)

    # =========================================================================
    # REGISTRIES
    # =========================================================================

    async def get_registries(self) -> list[Registry]:
        """Portainer API: GET /api/registries"""
        items = await self._request_list("/registries")
        return [Registry.from_api_response(item) for item in items]

    async def create_registry(
        self,
        name: str,
        registry_type: int,
        url: str,
        authentication: bool = False,
        username: str | None = None,
        password: str | None = None,
    ) -> int:
        """
        Register a container registry.

        Portainer API: POST /api/registries

        Args:
            registry_type: 1 = Quay, 2 = Azure, 3 = Custom, 4 = GitLab,
                           5 = ProGet, 6 = DockerHub, 7 = ECR, 8 = GitHub

        Returns:
            ID of the created registry
        """
        body: dict[str, Any] = {
            "name": name,
            "type": registry_type,
            "url": url,
            "authentication": authentication,
        }
        if username:
            body["username"] = username
        if password:
            body["password"] = password
        return await self._create("/registries", body)

    async def delete_registry(self, registry_id: int) -> None:
        """Portainer API: DELETE /api/registries/{id}"""
        await self._request("DELETE", f"/registries/{registry_id}")

    async def ping_registry(
        self,
        url: str,
        registry_type: int,
        username: str | None = None,
        password: str | None = None,
    ) -> Any:
        """
        Test connectivity and credentials against a registry.

        Portainer API: POST /api/registries/ping
        """
        body: dict[str, Any] = {"url": url, "type": registry_type}
        if username:
            body["username"] = username
        if password:
            body["password"] = password
        return await self._request("POST", "/registries/ping", json_data=body)

    # =========================================================================
    # SETTINGS
    # =========================================================================

    async def get_settings(self) -> dict[str, Any]:
        """
        Get the server settings.

        Portainer API: GET /api/settings

        The whole payload is returned unchanged rather than reduced to a few
        fields, so any key read here can be written back with update_settings.
        """
        return await self._request_object("GET", "/settings")

    async def update_settings(self, settings: dict[str, Any]) -> None:
        """
        Update server settings.

        Portainer API: PUT /api/settings

        Only the keys present in settings are changed.
        """
        await self._request("PUT", "/settings", json_data=settings)

    # =========================================================================
    # WEBHOOKS
    # =========================================================================

    async def get_webhooks(self) -> list[Webhook]:
        """Portainer API: GET /api/webhooks"""
        items = await self._request_list("/webhooks")
        return [Webhook.from_api_response(item) for item in items]

    async def create_webhook(self, resource_id: str, endpoint_id: int, webhook_type: int) -> int:
        """
        Create a redeploy webhook for a stack or service.

        Portainer API: POST /api/webhooks

        Args:
            webhook_type: 1 = Service, 2 = Container

        Returns:
            ID of the created webhook
        """
        return await self._create(
            "/webhooks",
            {"resourceID": resource_id, "endpointID": endpoint_id, "webhookType": webhook_type},
        )

    async def delete_webhook(self, webhook_id: int) -> None:
        """Portainer API: DELETE /api/webhooks/{id}"""
        await self._request("DELETE", f"/webhooks/{webhook_id}")
