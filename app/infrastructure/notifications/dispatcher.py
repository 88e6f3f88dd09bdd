"""Notification fan-out dispatcher.

Delivers one incident event to every channel the notification policy
enables, in registry order:
- Suppressed policies short-circuit without touching any channel
- FAIL_FAST stops at the first failing channel (reference behavior)
- AGGREGATE attempts every channel and reports all failures together

Usage Example:
    from infrastructure.notifications import (
        ChannelRegistry,
        FanoutDispatcher,
        RoutingScope,
    )

    channels = registry.build(tenant, policy)
    dispatcher = FanoutDispatcher(server_url=settings.server.SERVER_URL)

    result = dispatcher.dispatch(
        event,
        policy,
        channels,
        RoutingScope(cluster_name="prod-ca", project_id=42),
    )
    if not result.is_success:
        logger.warning("incident_dispatch_failed", error=result.message)
"""

import threading
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

import structlog
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.notifications.models import (
    IncidentDetected,
    NotificationPolicy,
    RoutingScope,
)
from infrastructure.notifications.rendering import build_routing_url
from infrastructure.operations import OperationResult, raise_if_cancelled

logger = structlog.get_logger()


class FanoutErrorPolicy(str, Enum):
    """How the dispatcher reacts to a failing channel."""

    FAIL_FAST = "fail_fast"
    AGGREGATE = "aggregate"


class FanoutDispatcher:
    """Sequential multi-channel dispatcher.

    Attributes:
        server_url: Dashboard base URL used to build routing URLs
        error_policy: FanoutErrorPolicy applied when a channel fails

    Example:
        dispatcher = FanoutDispatcher(
            server_url="https://dashboard.example.com",
            error_policy=FanoutErrorPolicy.AGGREGATE,
        )
    """

    def __init__(
        self,
        server_url: str,
        error_policy: FanoutErrorPolicy = FanoutErrorPolicy.FAIL_FAST,
    ):
        self.server_url = server_url
        self.error_policy = FanoutErrorPolicy(error_policy)

        logger.info(
            "initialized_fanout_dispatcher",
            error_policy=self.error_policy.value,
        )

    def dispatch(
        self,
        event: IncidentDetected,
        policy: NotificationPolicy,
        channels: Sequence[NotificationChannel],
        scope: RoutingScope,
        cancel_event: Optional[threading.Event] = None,
    ) -> OperationResult:
        """Send ``event`` through every enabled channel.

        Process:
        1. Return a suppressed success if the policy disables notifications
        2. Build the routing URL once for all channels
        3. Invoke each enabled channel in order, checking cancellation
           before every invocation
        4. Apply the error policy to failing channels

        Args:
            event: Incident to deliver
            policy: Snapshot of the resource's notification policy
            channels: Ordered channels from ChannelRegistry.build()
            scope: Cluster and project the event is routed under
            cancel_event: Optional caller-owned cancellation signal

        Returns:
            OperationResult. With FAIL_FAST the first failure is returned
            as-is; with AGGREGATE a transient error listing every failure in
            ``data["failures"]``.

        Raises:
            OperationCancelledError: cancel_event was set before a channel
        """
        if policy.notifications_disabled:
            logger.info(
                "incident_dispatch_suppressed",
                release_name=event.release_name,
                namespace=event.namespace,
            )
            return OperationResult.success(
                data={"suppressed": True}, message="Notifications disabled"
            )

        routing_url = build_routing_url(
            self.server_url,
            scope.cluster_name,
            event.namespace,
            event.release_name,
            scope.project_id,
            event.involved_object_kind,
            event.involved_object_name,
        )

        enabled = [c for c in channels if policy.is_channel_enabled(c.channel_name)]
        delivered: List[str] = []
        failures: List[Dict[str, Any]] = []

        for channel in enabled:
            raise_if_cancelled(cancel_event, f"notify_{channel.channel_name}")

            result = self._invoke(channel, event, routing_url)
            if result.is_success:
                delivered.append(channel.channel_name)
                continue

            if self.error_policy == FanoutErrorPolicy.FAIL_FAST:
                logger.warning(
                    "incident_dispatch_failed",
                    channel=channel.channel_name,
                    release_name=event.release_name,
                    error=result.message,
                    error_code=result.error_code,
                    delivered=delivered,
                )
                return result

            failures.append(
                {
                    "channel": channel.channel_name,
                    "status": result.status.value,
                    "message": result.message,
                    "error_code": result.error_code,
                }
            )

        if failures:
            logger.warning(
                "incident_dispatch_partially_failed",
                release_name=event.release_name,
                failed=[f["channel"] for f in failures],
                delivered=delivered,
            )
            return OperationResult.transient_error(
                message=f"{len(failures)} of {len(enabled)} channel(s) failed",
                error_code="FANOUT_FAILED",
                data={"failures": failures, "delivered": delivered},
            )

        logger.info(
            "incident_dispatched",
            release_name=event.release_name,
            channels=delivered,
        )
        return OperationResult.success(
            data={"channels": delivered, "routing_url": routing_url},
            message=f"Delivered to {len(delivered)} channel(s)",
        )

    def _invoke(
        self,
        channel: NotificationChannel,
        event: IncidentDetected,
        routing_url: str,
    ) -> OperationResult:
        try:
            return channel.notify(event, routing_url)
        except Exception as e:
            logger.error(
                "channel_exception",
                channel=channel.channel_name,
                release_name=event.release_name,
                error=str(e),
                exc_info=True,
            )
            return OperationResult.transient_error(
                message=f"Channel exception: {e}",
                error_code="CHANNEL_EXCEPTION",
            )
