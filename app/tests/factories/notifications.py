"""Test factories for notification infrastructure.

Factory functions for creating incident events, notification policies and
tenant capabilities. All factories accept overrides for every field they set.
"""

from typing import Dict, Optional, Sequence

from infrastructure.notifications.models import (
    ChatIntegration,
    IncidentDetected,
    NotificationPolicy,
    TenantCapabilities,
)


def make_incident(
    release_name: str = "web",
    namespace: str = "default",
    involved_object_kind: str = "Deployment",
    involved_object_name: str = "web",
    details: Optional[Dict[str, str]] = None,
    incident_id: str = "inc-1",
    summary: str = "Pod crash looping",
) -> IncidentDetected:
    """Create a test IncidentDetected event.

    Example:
        >>> event = make_incident(involved_object_kind="Job", involved_object_name="nightly")
    """
    return IncidentDetected(
        release_name=release_name,
        namespace=namespace,
        involved_object_kind=involved_object_kind,
        involved_object_name=involved_object_name,
        details=details if details is not None else {"reason": "CrashLoopBackOff"},
        incident_id=incident_id,
        summary=summary,
    )


def make_policy(**overrides) -> NotificationPolicy:
    """Create a NotificationPolicy, defaulting to every channel enabled."""
    return NotificationPolicy(**overrides)


def make_chat_integration(
    id: str = "slack-1",
    webhook_url: str = "https://hooks.slack.com/services/T000/B000/XXXX",
    channel: str = "#alerts",
) -> ChatIntegration:
    return ChatIntegration(id=id, webhook_url=webhook_url, channel=channel)


def make_tenant(
    chat_integrations: Optional[Sequence[ChatIntegration]] = None,
    email_recipients: Optional[Sequence[str]] = None,
) -> TenantCapabilities:
    """Create TenantCapabilities with one chat integration and one recipient."""
    if chat_integrations is None:
        chat_integrations = [make_chat_integration()]
    if email_recipients is None:
        email_recipients = ["oncall@example.com"]
    return TenantCapabilities(
        chat_integrations=tuple(chat_integrations),
        email_recipients=tuple(email_recipients),
    )
