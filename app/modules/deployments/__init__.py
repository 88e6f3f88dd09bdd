"""Preview deployments module.

Finalizes preview deployments: marks the deployment record created, posts
the terminal status on the git hosting provider and keeps a single pull
request comment describing the deployment up to date.
"""

from modules.deployments.domain.models import (
    CommentThread,
    CommentUpsert,
    DeploymentHandle,
    DeploymentKey,
    DeploymentRecord,
    DeploymentStatus,
    Environment,
    ExternalStatusRecord,
    ReconcileOutcome,
    ReconcileRequest,
    ReconcileStage,
    WorkflowRunRef,
)
from modules.deployments.ports import DeploymentRecordStore, GitStatusClient
from modules.deployments.reconciler import ExternalStatusReconciler
from modules.deployments.service import DeploymentFinalizeService, FinalizeContext

__all__ = [
    "CommentThread",
    "CommentUpsert",
    "DeploymentHandle",
    "DeploymentKey",
    "DeploymentRecord",
    "DeploymentStatus",
    "Environment",
    "ExternalStatusRecord",
    "ReconcileOutcome",
    "ReconcileRequest",
    "ReconcileStage",
    "WorkflowRunRef",
    "DeploymentRecordStore",
    "GitStatusClient",
    "ExternalStatusReconciler",
    "DeploymentFinalizeService",
    "FinalizeContext",
]
