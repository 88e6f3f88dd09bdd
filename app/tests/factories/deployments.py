"""Test factories for the deployments module."""

from typing import Optional, Sequence

from infrastructure.notifications.models import (
    DeploymentFinalized,
    SuccessfulResource,
)
from modules.deployments.domain.models import (
    DeploymentRecord,
    DeploymentStatus,
    Environment,
    WorkflowRunRef,
)


def make_environment(
    id: int = 7,
    name: str = "preview",
    git_repo_owner: str = "acme",
    git_repo_name: str = "widgets",
    new_comments_disabled: bool = True,
) -> Environment:
    return Environment(
        id=id,
        name=name,
        git_repo_owner=git_repo_owner,
        git_repo_name=git_repo_name,
        new_comments_disabled=new_comments_disabled,
    )


def make_record(
    id: int = 1,
    environment_id: int = 7,
    namespace: str = "pr-12-widgets",
    subdomain: str = "",
    status: DeploymentStatus = DeploymentStatus.CREATING,
    comment_id: Optional[int] = None,
    **overrides,
) -> DeploymentRecord:
    """Create a DeploymentRecord for pull request 12 of acme/widgets."""
    fields = {
        "commit_sha": "abcd123",
        "repo_owner": "acme",
        "repo_name": "widgets",
        "pr_number": 12,
        "pr_branch_from": "feature/login",
        "external_deployment_id": 555,
    }
    fields.update(overrides)
    return DeploymentRecord(
        id=id,
        environment_id=environment_id,
        namespace=namespace,
        subdomain=subdomain,
        status=status,
        comment_id=comment_id,
        **fields,
    )


def make_finalize_event(
    subdomain: str = "app.example.com",
    successful_resources: Optional[Sequence[SuccessfulResource]] = None,
    commit_sha: str = "abcd123",
    repo_owner: str = "acme",
    repo_name: str = "widgets",
    pr_number: int = 12,
    namespace: str = "pr-12-widgets",
    environment_id: int = 7,
) -> DeploymentFinalized:
    if successful_resources is None:
        successful_resources = [
            SuccessfulResource(name="web", kind="application"),
            SuccessfulResource(name="nightly", kind="job"),
        ]
    return DeploymentFinalized(
        subdomain=subdomain,
        successful_resources=tuple(successful_resources),
        commit_sha=commit_sha,
        repo_owner=repo_owner,
        repo_name=repo_name,
        pr_number=pr_number,
        namespace=namespace,
        environment_id=environment_id,
    )


def make_run(
    id: int = 99, html_url: str = "https://github.com/acme/widgets/actions/runs/99"
) -> WorkflowRunRef:
    return WorkflowRunRef(id=id, html_url=html_url)
