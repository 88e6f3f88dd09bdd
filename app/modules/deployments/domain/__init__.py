"""Deployment domain models."""

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
]
