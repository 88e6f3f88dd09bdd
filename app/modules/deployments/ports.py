"""Collaborator protocols for the deployments module.

Concrete implementations live outside this package: the git hosting wire
client and the deployment record persistence are injected by the caller.
"""

from typing import Protocol

from infrastructure.operations import OperationResult
from modules.deployments.domain.models import (
    DeploymentHandle,
    DeploymentKey,
    DeploymentRecord,
)


class GitStatusClient(Protocol):
    """Git hosting operations used by the reconciler.

    Every method reports its outcome as an OperationResult and must not raise
    for upstream failures.
    """

    def post_deployment_status(
        self, handle: DeploymentHandle, state: str, environment_url: str
    ) -> OperationResult:
        """Post a status on the deployment handle."""
        ...

    def find_latest_workflow_run(
        self, owner: str, repo: str, workflow_file: str, branch: str
    ) -> OperationResult:
        """Find the most recent run of ``workflow_file`` on ``branch``.

        Returns:
            ``data`` is a WorkflowRunRef; status NOT_FOUND when no run matches
        """
        ...

    def create_comment(
        self, owner: str, repo: str, pr_number: int, body: str
    ) -> OperationResult:
        """Create a pull request comment. ``data`` is the new comment id."""
        ...

    def update_comment(
        self, owner: str, repo: str, comment_id: int, body: str
    ) -> OperationResult:
        """Replace the body of an existing comment."""
        ...


class DeploymentRecordStore(Protocol):
    """Persistence for deployment records."""

    def read(self, key: DeploymentKey) -> DeploymentRecord:
        """Read a record.

        Raises:
            NotFoundError: no record matches ``key``
        """
        ...

    def update(self, record: DeploymentRecord) -> DeploymentRecord:
        """Persist ``record`` and return the stored version."""
        ...
