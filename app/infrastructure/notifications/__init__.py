"""Incident notification fan-out.

Provides multi-channel delivery (chat, email) for incident events with:
- Channel selection from tenant integrations and global settings
- Per-resource notification policy (suppression, channel toggles)
- Fail-fast or aggregate handling of failing channels

Usage:
    from infrastructure.notifications import (
        FanoutDispatcher,
        NotificationPolicy,
        RoutingScope,
    )
    from infrastructure.notifications.factory import get_channel_registry

    channels = get_channel_registry().build(tenant, policy)
    result = dispatcher.dispatch(
        event, policy, channels, RoutingScope(cluster_name="prod", project_id=1)
    )

The concrete notifier wiring lives in ``infrastructure.notifications.factory``
and is imported explicitly, since it depends on the integrations package.
"""

# Models
from infrastructure.notifications.models import (
    ChatIntegration,
    DeploymentFinalized,
    Event,
    EventKind,
    IncidentDetected,
    NotificationPolicy,
    RoutingScope,
    SuccessfulResource,
    TenantCapabilities,
    parse_event,
)

# Channel interface
from infrastructure.notifications.channels.base import (
    ChatNotifier,
    EmailNotifier,
    NotificationChannel,
)

# Channel implementations
from infrastructure.notifications.channels.chat import ChatChannel
from infrastructure.notifications.channels.email import EmailChannel

# Registry and dispatcher
from infrastructure.notifications.registry import ChannelRegistry
from infrastructure.notifications.dispatcher import FanoutDispatcher, FanoutErrorPolicy

__all__ = [
    # Models
    "ChatIntegration",
    "DeploymentFinalized",
    "Event",
    "EventKind",
    "IncidentDetected",
    "NotificationPolicy",
    "RoutingScope",
    "SuccessfulResource",
    "TenantCapabilities",
    "parse_event",
    # Channel interface
    "ChatNotifier",
    "EmailNotifier",
    "NotificationChannel",
    # Channel implementations
    "ChatChannel",
    "EmailChannel",
    # Registry and dispatcher
    "ChannelRegistry",
    "FanoutDispatcher",
    "FanoutErrorPolicy",
]
