"""Incident alerting module.

Fans incident events out to the chat and email channels a tenant has
configured, honoring the per-resource notification policy.
"""

from modules.incident.alerts import (
    IncidentAlertService,
    IncidentScope,
    NotificationPolicyStore,
    policy_resource_id,
)

__all__ = [
    "IncidentAlertService",
    "IncidentScope",
    "NotificationPolicyStore",
    "policy_resource_id",
]
