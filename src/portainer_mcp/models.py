# ABOUTME: Dataclasses mirroring Portainer REST API payloads
# ABOUTME: Each model is built from raw JSON via from_api_response and serialized back with asdict

"""
Portainer data transfer objects.

Every class here is a flat snapshot of one Portainer JSON object. They are
created from an API response, serialized to JSON for the assistant, and
thrown away. There is no behaviour beyond construction.

Portainer is not consistent about key casing: stacks use "Id"/"EndpointId",
git credentials use "id"/"userId", CRDs use "creationDate". Lookups in
from_api_response therefore ignore case, and missing keys fall back to
empty defaults rather than raising.

Secrets (registry and git credential passwords) are never copied into a
model, so they cannot leak into tool output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _lookup(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the value of the first key present in data, compared case-insensitively."""
    lowered = {k.lower(): v for k, v in data.items()}
    for key in keys:
        value = lowered.get(key.lower())
        if value is not None:
            return value
    return default


def _str(data: dict[str, Any], *keys: str) -> str:
    return str(_lookup(data, *keys, default=""))


def _int(data: dict[str, Any], *keys: str) -> int:
    return int(_lookup(data, *keys, default=0))


def _bool(data: dict[str, Any], *keys: str) -> bool:
    return bool(_lookup(data, *keys, default=False))


# =============================================================================
# ALERTING
# =============================================================================


@dataclass
class AlertingRule:
    """Observability alert rule."""

    id: int
    name: str
    severity: str
    condition_operator: str
    threshold: float
    duration: int
    enabled: bool
    is_editable: bool
    is_internal: bool
    metric_type: str
    alert_manager_id: int
    description: str = ""
    created_at: str = ""
    updated_at: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    summary: str = ""
    created_by: str = ""
    supported_agent_version: str = ""
    supported_environment_types: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> AlertingRule:
        return cls(
            id=_int(data, "id"),
            name=_str(data, "name"),
            severity=_str(data, "severity"),
            condition_operator=_str(data, "conditionOperator"),
            threshold=float(_lookup(data, "threshold", default=0.0)),
            duration=_int(data, "duration"),
            enabled=_bool(data, "enabled"),
            is_editable=_bool(data, "isEditable"),
            is_internal=_bool(data, "isInternal"),
            metric_type=_str(data, "metricType"),
            alert_manager_id=_int(data, "alertManagerID"),
            description=_str(data, "description"),
            created_at=_str(data, "createdAt"),
            updated_at=_str(data, "updatedAt"),
            labels=dict(_lookup(data, "labels", default={})),
            summary=_str(data, "summary"),
            created_by=_str(data, "createdBy"),
            supported_agent_version=_str(data, "supportedAgentVersion"),
            supported_environment_types=_str(data, "supportedEnvironmentTypes"),
        )


@dataclass
class AlertingNotificationChannel:
    """Notification channel attached to an alert manager."""

    id: int
    name: str
    type: str
    enabled: bool
    config: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> AlertingNotificationChannel:
        return cls(
            id=_int(data, "id"),
            name=_str(data, "name"),
            type=_str(data, "type"),
            enabled=_bool(data, "enabled"),
            config=dict(_lookup(data, "config", default={})),
        )


@dataclass
class AlertingSettings:
    """Alert manager configuration."""

    id: int
    name: str
    enabled: bool
    is_internal: bool
    status: str
    url: str = ""
    portainer_url: str = ""
    notification_channels: list[AlertingNotificationChannel] = field(default_factory=list)
    created_at: str = ""
    created_by: str = ""
    uptime: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> AlertingSettings:
        channels = _lookup(data, "notificationChannels", default=[])
        return cls(
            id=_int(data, "id"),
            name=_str(data, "name"),
            enabled=_bool(data, "enabled"),
            is_internal=_bool(data, "isInternal"),
            status=_str(data, "status"),
            url=_str(data, "url"),
            portainer_url=_str(data, "portainerURL"),
            notification_channels=[
                AlertingNotificationChannel.from_api_response(c) for c in channels
            ],
            created_at=_str(data, "createdAt"),
            created_by=_str(data, "createdBy"),
            uptime=_str(data, "uptime"),
        )


# =============================================================================
# KUBERNETES CUSTOM RESOURCES
# =============================================================================


@dataclass
class CustomResourceDefinition:
    """Kubernetes CRD as reported by Portainer."""

    name: str
    group: str
    scope: str
    creation_date: str
    release_name: str = ""
    release_namespace: str = ""
    release_version: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> CustomResourceDefinition:
        return cls(
            name=_str(data, "name"),
            group=_str(data, "group"),
            scope=_str(data, "scope"),
            creation_date=_str(data, "creationDate"),
            release_name=_str(data, "releaseName"),
            release_namespace=_str(data, "releaseNamespace"),
            release_version=_str(data, "releaseVersion"),
        )


@dataclass
class CustomResource:
    """Instance of a Kubernetes custom resource."""

    name: str
    definition_name: str
    uid: str
    creation_date: str
    namespace: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> CustomResource:
        return cls(
            name=_str(data, "name"),
            definition_name=_str(data, "definitionName"),
            uid=_str(data, "uid"),
            creation_date=_str(data, "creationDate"),
            namespace=_str(data, "namespace"),
        )


# =============================================================================
# TEMPLATES, STACKS AND JOBS
# =============================================================================


@dataclass
class CustomTemplate:
    """User-defined application template."""

    id: int
    title: str
    description: str
    type: int
    platform: int
    created_by: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> CustomTemplate:
        return cls(
            id=_int(data, "Id"),
            title=_str(data, "Title"),
            description=_str(data, "Description"),
            type=_int(data, "Type"),
            platform=_int(data, "Platform"),
            created_by=_str(data, "CreatedBy", "created_by", "CreatedByUserId"),
        )


@dataclass
class StackEnvVar:
    """Environment variable passed to a stack deployment."""

    name: str
    value: str

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> StackEnvVar:
        return cls(name=_str(data, "name"), value=_str(data, "value"))


@dataclass
class DockerStack:
    """Standalone Docker Compose stack."""

    id: int
    name: str
    type: int
    status: int
    endpoint_id: int
    entry_point: str
    created_by: str
    creation_date: int
    is_compose_format: bool = False
    env: list[StackEnvVar] = field(default_factory=list)
    update_date: int = 0
    updated_by: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> DockerStack:
        env = _lookup(data, "Env", default=[])
        return cls(
            id=_int(data, "Id"),
            name=_str(data, "Name"),
            type=_int(data, "Type"),
            status=_int(data, "Status"),
            endpoint_id=_int(data, "EndpointId", "endpoint_id"),
            entry_point=_str(data, "EntryPoint", "entry_point"),
            created_by=_str(data, "CreatedBy", "created_by"),
            creation_date=_int(data, "CreationDate", "creation_date"),
            is_compose_format=_bool(data, "IsComposeFormat", "is_compose_format"),
            env=[StackEnvVar.from_api_response(e) for e in env],
            update_date=_int(data, "UpdateDate", "update_date"),
            updated_by=_str(data, "UpdatedBy", "updated_by"),
        )


@dataclass
class EdgeJob:
    """Scheduled script executed on edge environments."""

    id: int
    name: str
    cron_expression: str
    recurring: bool
    created: int
    edge_groups: list[int] = field(default_factory=list)
    script_path: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> EdgeJob:
        return cls(
            id=_int(data, "Id"),
            name=_str(data, "Name"),
            cron_expression=_str(data, "CronExpression", "cron_expression"),
            recurring=_bool(data, "Recurring"),
            created=_int(data, "Created"),
            edge_groups=[int(g) for g in _lookup(data, "EdgeGroups", "edge_groups", default=[])],
            script_path=_str(data, "ScriptPath", "script_path"),
        )


# =============================================================================
# ENVIRONMENTS
# =============================================================================

ENVIRONMENT_TYPES = {
    1: "docker-local",
    2: "docker-agent",
    3: "azure-aci",
    4: "docker-edge-agent",
    5: "kubernetes-local",
    6: "kubernetes-agent",
    7: "kubernetes-edge-agent",
}

ENVIRONMENT_STATUSES = {1: "active", 2: "inactive"}

# Portainer role IDs behind each access level name
ACCESS_LEVEL_ROLES = {
    "environment_administrator": 1,
    "helpdesk_user": 2,
    "standard_user": 3,
    "readonly_user": 4,
    "operator_user": 5,
}

_ROLE_ACCESS_LEVELS = {role: level for level, role in ACCESS_LEVEL_ROLES.items()}


def _access_policies(raw: Any) -> dict[int, str]:
    """Turn {"<id>": {"RoleId": n}} into {id: access level name}."""
    if not isinstance(raw, dict):
        return {}
    accesses = {}
    for key, policy in raw.items():
        role = _int(policy, "RoleId") if isinstance(policy, dict) else 0
        accesses[int(key)] = _ROLE_ACCESS_LEVELS.get(role, "unknown")
    return accesses


@dataclass
class Environment:
    """
    Portainer environment (an "endpoint" in the API).

    Numeric type and status codes are replaced by names, and the access
    policy maps are reduced to {user or team ID: access level}.
    """

    id: int
    name: str
    type: str
    status: str
    url: str = ""
    group_id: int = 0
    tag_ids: list[int] = field(default_factory=list)
    user_accesses: dict[int, str] = field(default_factory=dict)
    team_accesses: dict[int, str] = field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Environment:
        return cls(
            id=_int(data, "Id"),
            name=_str(data, "Name"),
            type=ENVIRONMENT_TYPES.get(_int(data, "Type"), "unknown"),
            status=ENVIRONMENT_STATUSES.get(_int(data, "Status"), "unknown"),
            url=_str(data, "URL"),
            group_id=_int(data, "GroupId"),
            tag_ids=[int(t) for t in _lookup(data, "TagIds", default=[])],
            user_accesses=_access_policies(_lookup(data, "UserAccessPolicies")),
            team_accesses=_access_policies(_lookup(data, "TeamAccessPolicies")),
        )


# =============================================================================
# CREDENTIALS, REGISTRIES AND WEBHOOKS
# =============================================================================


@dataclass
class GitCredential:
    """Stored git credential. The password is never included."""

    id: int
    name: str
    username: str
    authorization_type: int
    user_id: int
    creation_date: int

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> GitCredential:
        return cls(
            id=_int(data, "id"),
            name=_str(data, "name"),
            username=_str(data, "username"),
            authorization_type=_int(data, "authorizationType"),
            user_id=_int(data, "userId"),
            creation_date=_int(data, "creationDate"),
        )


@dataclass
class Registry:
    """Container image registry. The password is never included."""

    id: int
    name: str
    type: int
    url: str
    authentication: bool
    username: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Registry:
        return cls(
            id=_int(data, "Id"),
            name=_str(data, "Name"),
            type=_int(data, "Type"),
            url=_str(data, "URL"),
            authentication=_bool(data, "Authentication"),
            username=_str(data, "Username"),
        )


@dataclass
class Webhook:
    """Webhook that redeploys a stack or service when called."""

    id: int
    token: str
    resource_id: str
    endpoint_id: int
    type: int

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Webhook:
        return cls(
            id=_int(data, "Id"),
            token=_str(data, "Token"),
            resource_id=_str(data, "ResourceId", "resource_id"),
            endpoint_id=_int(data, "EndpointId", "endpoint_id"),
            type=_int(data, "WebhookType", "Type"),
        )


# =============================================================================
# POLICIES
# =============================================================================


@dataclass
class Policy:
    """Fleet-wide policy applied to environment groups."""

    id: int
    name: str
    type: str
    environment_type: str
    environment_groups: list[int] = field(default_factory=list)
    data: Any = None
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Policy:
        return cls(
            id=_int(data, "Id"),
            name=_str(data, "Name"),
            type=_str(data, "Type"),
            environment_type=_str(data, "EnvironmentType"),
            environment_groups=[int(g) for g in _lookup(data, "EnvironmentGroups", default=[])],
            data=_lookup(data, "Data"),
            created_at=_str(data, "CreatedAt"),
            updated_at=_str(data, "UpdatedAt"),
        )
