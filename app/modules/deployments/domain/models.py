"""Internal data models for the deployments module.

Lightweight dataclasses describing preview deployments and the external
artifacts the reconciler writes for them. These are NOT Pydantic models:
inbound payloads are validated as ``DeploymentFinalized`` events before any
of these structures are built.

Key distinctions:
  - DeploymentRecord / Environment: owned by the persistence collaborator
  - DeploymentHandle, CommentThread: identities on the git hosting provider
  - ReconcileRequest / ReconcileOutcome: reconciler input and output
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from infrastructure.notifications.models import DeploymentFinalized


class DeploymentStatus(str, Enum):
    """Lifecycle status of a preview deployment."""

    CREATING = "creating"
    CREATED = "created"
    FAILED = "failed"
    INACTIVE = "inactive"


class ReconcileStage(str, Enum):
    """Progress of one reconciliation.

    pending -> status_posted -> comment_created | comment_updated -> done
    """

    PENDING = "pending"
    STATUS_POSTED = "status_posted"
    COMMENT_CREATED = "comment_created"
    COMMENT_UPDATED = "comment_updated"
    DONE = "done"


@dataclass(frozen=True)
class DeploymentKey:
    """Lookup key of a deployment record."""

    environment_id: int
    namespace: str


@dataclass
class DeploymentRecord:
    """A preview deployment as stored by the persistence collaborator.

    The record is the sole owner of ``comment_id``: the reconciler reads it
    back on every finalize and the service persists the returned value.

    Attributes:
        id: Record identifier
        environment_id: Preview environment the deployment belongs to
        namespace: Namespace the deployment runs in
        subdomain: Live URL ("" when ingress is disabled)
        status: DeploymentStatus
        commit_sha: Last commit deployed
        repo_owner: Owner of the pull request's source repository
        repo_name: Name of the pull request's source repository
        pr_number: Pull request number
        pr_branch_from: Source branch of the pull request
        external_deployment_id: Deployment id on the git hosting provider
        comment_id: Pull request comment describing the deployment, if any
    """

    id: int
    environment_id: int
    namespace: str
    subdomain: str = ""
    status: DeploymentStatus = DeploymentStatus.CREATING
    commit_sha: str = ""
    repo_owner: str = ""
    repo_name: str = ""
    pr_number: int = 0
    pr_branch_from: str = ""
    external_deployment_id: int = 0
    comment_id: Optional[int] = None

    @property
    def key(self) -> DeploymentKey:
        return DeploymentKey(
            environment_id=self.environment_id, namespace=self.namespace
        )


@dataclass(frozen=True)
class Environment:
    """A preview environment bound to a git repository.

    Attributes:
        id: Environment identifier
        name: Environment name, used to derive the workflow file name
        git_repo_owner: Owner of the repository the environment deploys
        git_repo_name: Name of the repository the environment deploys
        new_comments_disabled: Keep one comment per deployment up to date.
            When False, every finalize posts a fresh comment.
    """

    id: int
    name: str
    git_repo_owner: str
    git_repo_name: str
    new_comments_disabled: bool = True


@dataclass(frozen=True)
class DeploymentHandle:
    """Deployment on the git hosting provider that receives status posts."""

    owner: str
    repo: str
    deployment_id: int


@dataclass(frozen=True)
class ExternalStatusRecord:
    """A terminal status posted on a deployment handle."""

    handle: DeploymentHandle
    state: str
    environment_url: str


@dataclass(frozen=True)
class CommentThread:
    """Pull request comment thread identity."""

    owner: str
    repo: str
    pr_number: int


@dataclass(frozen=True)
class WorkflowRunRef:
    """Reference to an automation run, used for the build logs link."""

    id: int
    html_url: str


@dataclass(frozen=True)
class CommentUpsert:
    """Result of a comment upsert.

    Attributes:
        comment_id: Identifier of the live comment
        created: True when a new comment was created
    """

    comment_id: int
    created: bool


@dataclass(frozen=True)
class ReconcileRequest:
    """Everything the reconciler needs for one finalize event.

    Attributes:
        event: Validated finalize event
        record: Deployment record, already marked created
        environment: Environment the deployment belongs to
        cluster_name: Cluster name used in resource links
        project_id: Tenant project used in resource links
    """

    event: DeploymentFinalized
    record: DeploymentRecord
    environment: Environment
    cluster_name: str
    project_id: int


@dataclass(frozen=True)
class ReconcileOutcome:
    """Outcome of a completed reconciliation."""

    status: ExternalStatusRecord
    run: WorkflowRunRef
    comment: CommentUpsert
    stage: ReconcileStage = ReconcileStage.DONE
