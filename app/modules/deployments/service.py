"""Deployment finalize service.

Request-scoped entry point for ``DeploymentFinalized`` events: marks the
deployment record created, reconciles the git hosting provider and persists
the comment identifier the reconciler returns.
"""

import threading
from dataclasses import dataclass, replace
from typing import Optional

from infrastructure.logging import bind_request_context, get_module_logger
from infrastructure.notifications.models import DeploymentFinalized
from infrastructure.operations import ValidationFailedError, raise_if_cancelled
from modules.deployments.domain.models import (
    DeploymentKey,
    DeploymentRecord,
    DeploymentStatus,
    Environment,
    ReconcileRequest,
)
from modules.deployments.ports import DeploymentRecordStore
from modules.deployments.reconciler import ExternalStatusReconciler

logger = get_module_logger()


@dataclass(frozen=True)
class FinalizeContext:
    """Resolved tenant context of a finalize request."""

    cluster_name: str
    project_id: int
    environment: Environment


class DeploymentFinalizeService:
    """Finalizes preview deployments.

    Concurrent finalize calls for the same deployment are not synchronized:
    two racing calls can both find no stored comment id and create a comment
    each. The record store is expected to serialize them if that matters.
    """

    def __init__(
        self,
        store: DeploymentRecordStore,
        reconciler: ExternalStatusReconciler,
    ):
        self._store = store
        self._reconciler = reconciler

    def finalize(
        self,
        event: DeploymentFinalized,
        context: FinalizeContext,
        cancel_event: Optional[threading.Event] = None,
        correlation_id: Optional[str] = None,
    ) -> DeploymentRecord:
        """Mark the deployment created and reconcile its external state.

        Args:
            event: Validated finalize event
            context: Cluster, project and environment the event belongs to
            cancel_event: Optional caller-owned cancellation signal
            correlation_id: Request identifier bound to every log line

        Returns:
            The stored deployment record

        Raises:
            ValidationFailedError: event does not belong to the environment
            NotFoundError: no deployment record, or no workflow run
            UpstreamCallFailedError: an external call failed
            OperationCancelledError: cancel_event was set
        """
        environment = context.environment
        if event.environment_id != environment.id:
            raise ValidationFailedError(
                f"environment_id {event.environment_id} does not match "
                f"environment {environment.id}",
                operation="finalize_deployment",
            )

        with bind_request_context(
            correlation_id=correlation_id,
            event_kind=event.kind,
            project_id=context.project_id,
            cluster=context.cluster_name,
            environment_id=environment.id,
            namespace=event.namespace,
        ):
            raise_if_cancelled(cancel_event, "read_deployment")
            record = self._store.read(
                DeploymentKey(environment_id=environment.id, namespace=event.namespace)
            )

            record = replace(
                record, subdomain=event.subdomain, status=DeploymentStatus.CREATED
            )
            record = self._store.update(record)
            logger.info("deployment_marked_created", deployment_id=record.id)

            outcome = self._reconciler.reconcile(
                ReconcileRequest(
                    event=event,
                    record=record,
                    environment=environment,
                    cluster_name=context.cluster_name,
                    project_id=context.project_id,
                ),
                cancel_event=cancel_event,
            )

            if outcome.comment.comment_id != record.comment_id:
                record = replace(record, comment_id=outcome.comment.comment_id)
                record = self._store.update(record)
                logger.info(
                    "deployment_comment_id_stored",
                    deployment_id=record.id,
                    comment_id=record.comment_id,
                )

            return record
