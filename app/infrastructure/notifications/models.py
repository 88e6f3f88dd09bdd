"""Notification system core models.

Events that must be surfaced to external systems, the per-resource
notification policy, and the tenant capabilities the channel registry reads.

Uses Pydantic BaseModel for:
- Runtime validation of inbound events before any external call
- Immutability (frozen models) once an event is constructed
- A tagged union discriminated on ``kind``
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from infrastructure.operations.errors import ValidationFailedError


class EventKind(str, Enum):
    """Discriminator values for the Event union."""

    INCIDENT_DETECTED = "incident_detected"
    DEPLOYMENT_FINALIZED = "deployment_finalized"


class IncidentDetected(BaseModel):
    """An incident detected on a running workload.

    Attributes:
        release_name: Release (application) the incident belongs to
        namespace: Kubernetes namespace of the release
        involved_object_kind: Kind of the failing object (Deployment, Job, ...)
        involved_object_name: Name of the failing object
        details: Free-form key/value details shown in notifications
        incident_id: Upstream incident identifier, if known
        summary: One-line human description of the incident

    Example:
        event = IncidentDetected(
            release_name="web",
            namespace="default",
            involved_object_kind="Deployment",
            involved_object_name="web",
            summary="Pod crash looping",
        )
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["incident_detected"] = EventKind.INCIDENT_DETECTED.value
    release_name: str = Field(..., min_length=1)
    namespace: str = Field(..., min_length=1)
    involved_object_kind: str = ""
    involved_object_name: str = ""
    details: Dict[str, str] = Field(default_factory=dict)
    incident_id: str = ""
    summary: str = ""


class SuccessfulResource(BaseModel):
    """A resource successfully deployed in a preview environment."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    kind: str = "application"

    @property
    def is_job(self) -> bool:
        """True when the resource is a job rather than a long-running app."""
        return self.kind.lower() == "job"


class DeploymentFinalized(BaseModel):
    """A preview deployment workflow reached its terminal state.

    Attributes:
        subdomain: Live URL of the deployment ("" when ingress is disabled)
        successful_resources: Resources deployed by the workflow
        commit_sha: Latest commit deployed
        repo_owner: Owner of the repository the commit belongs to
        repo_name: Name of the repository the commit belongs to
        pr_number: Pull request the deployment was created for
        namespace: Namespace the preview environment runs in
        environment_id: Preview environment the deployment belongs to
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["deployment_finalized"] = EventKind.DEPLOYMENT_FINALIZED.value
    subdomain: str = ""
    successful_resources: Tuple[SuccessfulResource, ...] = ()
    commit_sha: str = Field(..., min_length=1)
    repo_owner: str = Field(..., min_length=1)
    repo_name: str = Field(..., min_length=1)
    pr_number: int = Field(..., gt=0)
    namespace: str = Field(..., min_length=1)
    environment_id: int = Field(..., gt=0)


Event = Annotated[
    Union[IncidentDetected, DeploymentFinalized], Field(discriminator="kind")
]

_event_adapter: TypeAdapter = TypeAdapter(Event)


def parse_event(
    payload: Mapping[str, Any],
) -> Union[IncidentDetected, DeploymentFinalized]:
    """Validate a decoded payload into an Event.

    Args:
        payload: Decoded request body including the ``kind`` discriminator

    Returns:
        IncidentDetected or DeploymentFinalized

    Raises:
        ValidationFailedError: payload is malformed; ``errors`` carries the
            per-field details
    """
    try:
        return _event_adapter.validate_python(payload)
    except ValidationError as e:
        raise ValidationFailedError(
            f"invalid event: {e.error_count()} validation error(s)",
            errors=e.errors(include_url=False),
            operation="parse_event",
        ) from e


class NotificationPolicy(BaseModel):
    """Per-resource notification settings, read fresh for every dispatch.

    Attributes:
        notifications_disabled: Suppress delivery entirely (not a failure)
        chat_enabled: Deliver through the chat channel
        chat_target: Restrict chat delivery to the integration with this id
        email_enabled: Deliver through the email channel
        email_template_id: Template overriding the server's incident template
    """

    model_config = ConfigDict(frozen=True)

    notifications_disabled: bool = False
    chat_enabled: bool = True
    chat_target: Optional[str] = None
    email_enabled: bool = True
    email_template_id: Optional[str] = None

    def is_channel_enabled(self, channel_name: str) -> bool:
        """Whether the policy allows delivery through ``channel_name``."""
        if channel_name == "chat":
            return self.chat_enabled
        if channel_name == "email":
            return self.email_enabled
        return False


@dataclass(frozen=True)
class ChatIntegration:
    """A chat webhook installed by the tenant.

    Attributes:
        id: Integration identifier (matched by NotificationPolicy.chat_target)
        webhook_url: Incoming webhook URL
        channel: Display name of the destination channel
    """

    id: str
    webhook_url: str
    channel: str = ""


@dataclass(frozen=True)
class TenantCapabilities:
    """Integrations a tenant has configured.

    Attributes:
        chat_integrations: Chat webhooks, in the order they were installed
        email_recipients: Addresses that receive incident emails
    """

    chat_integrations: Tuple[ChatIntegration, ...] = field(default_factory=tuple)
    email_recipients: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RoutingScope:
    """Cluster and project an event is routed under."""

    cluster_name: str
    project_id: int
