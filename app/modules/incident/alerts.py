"""Incident alert service.

Request-scoped entry point for ``IncidentDetected`` events: loads the
resource's notification policy, merges the cluster-level suppression flag,
builds the tenant's channels and dispatches.
"""

import threading
from dataclasses import dataclass
from typing import Optional, Protocol

from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.notifications.dispatcher import FanoutDispatcher
from infrastructure.notifications.models import (
    IncidentDetected,
    NotificationPolicy,
    RoutingScope,
    TenantCapabilities,
)
from infrastructure.notifications.registry import ChannelRegistry
from infrastructure.operations import (
    NotFoundError,
    OperationResult,
    UpstreamCallFailedError,
    raise_for_result,
    raise_if_cancelled,
)
from infrastructure.resilience.faults import FaultInjector

logger = get_module_logger()

OPERATION = "notify_new_incident"


class NotificationPolicyStore(Protocol):
    """Reads per-resource notification policies."""

    def read_policy(self, resource_id: str) -> NotificationPolicy:
        """Return the policy for ``resource_id``.

        Raises:
            NotFoundError: no policy is stored for the resource
        """
        ...


@dataclass(frozen=True)
class IncidentScope:
    """Cluster and project an incident was reported from.

    Attributes:
        cluster_id: Cluster identifier, part of the policy resource id
        cluster_name: Cluster name used in routing URLs
        project_id: Tenant project
        notifications_disabled: Cluster-level switch overriding every policy
    """

    cluster_id: int
    cluster_name: str
    project_id: int
    notifications_disabled: bool = False


def policy_resource_id(cluster_id: int, namespace: str, release_name: str) -> str:
    """Key under which a release's notification policy is stored."""
    return f"{cluster_id}:{namespace}:{release_name}"


class IncidentAlertService:
    """Dispatches new incidents to the tenant's channels.

    Example:
        service = IncidentAlertService(
            policy_store=store,
            registry=get_channel_registry(),
            dispatcher=get_fanout_dispatcher(),
            fault_injector=get_fault_injector(),
        )
        service.notify_new_incident(event, scope, tenant)
    """

    def __init__(
        self,
        policy_store: NotificationPolicyStore,
        registry: ChannelRegistry,
        dispatcher: FanoutDispatcher,
        fault_injector: Optional[FaultInjector] = None,
    ):
        self._policy_store = policy_store
        self._registry = registry
        self._dispatcher = dispatcher
        self._fault_injector = fault_injector

    def notify_new_incident(
        self,
        event: IncidentDetected,
        scope: IncidentScope,
        tenant: TenantCapabilities,
        cancel_event: Optional[threading.Event] = None,
        correlation_id: Optional[str] = None,
    ) -> OperationResult:
        """Notify every enabled channel about ``event``.

        Args:
            event: Validated incident event
            scope: Cluster and project the incident belongs to
            tenant: Integrations the tenant has installed
            cancel_event: Optional caller-owned cancellation signal
            correlation_id: Request identifier bound to every log line

        Returns:
            The successful dispatch result (``data["suppressed"]`` is set when
            notifications are disabled)

        Raises:
            UpstreamCallFailedError: a channel failed or a fault was injected
            OperationCancelledError: cancel_event was set
        """
        with bind_request_context(
            correlation_id=correlation_id,
            event_kind=event.kind,
            project_id=scope.project_id,
            cluster=scope.cluster_name,
            release_name=event.release_name,
        ):
            raise_if_cancelled(cancel_event, OPERATION)

            if self._fault_injector is not None:
                fault = self._fault_injector.maybe_fail(OPERATION)
                if fault is not None:
                    raise_for_result(fault, operation=OPERATION)

            policy = self._load_policy(scope, event)
            if scope.notifications_disabled and not policy.notifications_disabled:
                policy = policy.model_copy(update={"notifications_disabled": True})

            channels = self._registry.build(tenant, policy)
            result = self._dispatcher.dispatch(
                event,
                policy,
                channels,
                RoutingScope(
                    cluster_name=scope.cluster_name, project_id=scope.project_id
                ),
                cancel_event=cancel_event,
            )
            if not result.is_success:
                raise UpstreamCallFailedError(
                    f"{OPERATION} failed: {result.message}",
                    operation=OPERATION,
                    result=result,
                )

            logger.info(
                "incident_notification_completed",
                suppressed=bool((result.data or {}).get("suppressed")),
                channels=len(channels),
            )
            return result

    def _load_policy(
        self, scope: IncidentScope, event: IncidentDetected
    ) -> NotificationPolicy:
        resource_id = policy_resource_id(
            scope.cluster_id, event.namespace, event.release_name
        )
        try:
            return self._policy_store.read_policy(resource_id)
        except NotFoundError:
            logger.debug("notification_policy_not_found", resource_id=resource_id)
            return NotificationPolicy()
