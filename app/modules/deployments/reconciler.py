"""External status reconciler.

Converges the git hosting provider's view of a preview deployment toward the
internal state after a deployment workflow finishes:

1. Post a ``success`` status carrying the live URL on the deployment handle
2. Resolve the latest workflow run for the build logs link
3. Upsert the pull request comment describing the deployment

There are no internal retries. Any failure ends the invocation and the next
finalize event restarts from step 1.
"""

import threading
from typing import Optional

from infrastructure.configuration import Settings
from infrastructure.logging import get_module_logger
from infrastructure.notifications.rendering import build_deployment_comment
from infrastructure.operations import (
    NotFoundError,
    raise_for_result,
    raise_if_cancelled,
)
from modules.deployments.domain.models import (
    CommentThread,
    CommentUpsert,
    DeploymentHandle,
    ExternalStatusRecord,
    ReconcileOutcome,
    ReconcileRequest,
    ReconcileStage,
    WorkflowRunRef,
)
from modules.deployments.ports import GitStatusClient

logger = get_module_logger()

SUCCESS_STATE = "success"


class ExternalStatusReconciler:
    """Posts deployment status and keeps the pull request comment current.

    Example:
        reconciler = ExternalStatusReconciler(git_client, get_settings())
        outcome = reconciler.reconcile(request)
        if outcome.comment.created:
            record.comment_id = outcome.comment.comment_id
    """

    def __init__(self, client: GitStatusClient, settings: Settings):
        self._client = client
        self._settings = settings

    def post_external_status(
        self, handle: DeploymentHandle, state: str, environment_url: str
    ) -> ExternalStatusRecord:
        """Post ``state`` with ``environment_url`` on the deployment handle.

        Raises:
            UpstreamCallFailedError: the status post failed
        """
        result = self._client.post_deployment_status(handle, state, environment_url)
        raise_for_result(result, operation="post_deployment_status")

        logger.info(
            "deployment_status_posted",
            owner=handle.owner,
            repo=handle.repo,
            deployment_id=handle.deployment_id,
            state=state,
        )
        return ExternalStatusRecord(
            handle=handle, state=state, environment_url=environment_url
        )

    def resolve_latest_run(
        self, owner: str, repo: str, workflow_file: str, branch: str
    ) -> WorkflowRunRef:
        """Find the latest run of ``workflow_file`` on ``branch``.

        Raises:
            NotFoundError: no matching run exists
            UpstreamCallFailedError: the lookup failed
        """
        result = self._client.find_latest_workflow_run(owner, repo, workflow_file, branch)
        raise_for_result(result, operation="find_latest_workflow_run")

        if result.data is None:
            raise NotFoundError(
                f"no run of {workflow_file} on {branch}",
                operation="find_latest_workflow_run",
                result=result,
            )
        return result.data

    def upsert_comment(
        self,
        thread: CommentThread,
        stored_comment_id: Optional[int],
        body: str,
    ) -> CommentUpsert:
        """Update the stored comment, or create one.

        A comment is created when no identifier is stored or when updating
        the stored one fails (for example because it was deleted upstream).

        Raises:
            UpstreamCallFailedError: creating the comment failed
        """
        if stored_comment_id is not None:
            result = self._client.update_comment(
                thread.owner, thread.repo, stored_comment_id, body
            )
            if result.is_success:
                logger.info(
                    "comment_updated",
                    owner=thread.owner,
                    repo=thread.repo,
                    comment_id=stored_comment_id,
                )
                return CommentUpsert(comment_id=stored_comment_id, created=False)

            logger.warning(
                "comment_update_failed_falling_back",
                owner=thread.owner,
                repo=thread.repo,
                comment_id=stored_comment_id,
                error=result.message,
                error_code=result.error_code,
            )

        result = self._client.create_comment(
            thread.owner, thread.repo, thread.pr_number, body
        )
        raise_for_result(result, operation="create_comment")

        comment_id = int(result.data)
        logger.info(
            "comment_created",
            owner=thread.owner,
            repo=thread.repo,
            pr_number=thread.pr_number,
            comment_id=comment_id,
        )
        return CommentUpsert(comment_id=comment_id, created=True)

    def reconcile(
        self,
        request: ReconcileRequest,
        cancel_event: Optional[threading.Event] = None,
    ) -> ReconcileOutcome:
        """Run status post, run lookup and comment upsert in order.

        Args:
            request: Finalize event with its record and environment
            cancel_event: Optional caller-owned cancellation signal, checked
                before every step

        Returns:
            ReconcileOutcome with the comment id the caller must persist

        Raises:
            NotFoundError: no workflow run matches; no comment is written
            UpstreamCallFailedError: an external call failed
            OperationCancelledError: cancel_event was set
        """
        event = request.event
        record = request.record
        environment = request.environment
        stage = ReconcileStage.PENDING
        logger.debug("reconcile_stage", stage=stage.value, deployment_id=record.id)

        raise_if_cancelled(cancel_event, "post_deployment_status")
        status = self.post_external_status(
            DeploymentHandle(
                owner=environment.git_repo_owner,
                repo=environment.git_repo_name,
                deployment_id=record.external_deployment_id,
            ),
            SUCCESS_STATE,
            record.subdomain,
        )
        stage = ReconcileStage.STATUS_POSTED
        logger.debug("reconcile_stage", stage=stage.value, deployment_id=record.id)

        deployments = self._settings.deployments
        raise_if_cancelled(cancel_event, "find_latest_workflow_run")
        run = self.resolve_latest_run(
            record.repo_owner or event.repo_owner,
            record.repo_name or event.repo_name,
            deployments.workflow_file_for(environment.name),
            record.pr_branch_from,
        )

        body = build_deployment_comment(
            title=deployments.COMMENT_TITLE,
            server_base_url=self._settings.server.SERVER_URL,
            cluster_name=request.cluster_name,
            project_id=request.project_id,
            namespace=record.namespace,
            environment_id=record.environment_id,
            repo_owner=event.repo_owner,
            repo_name=event.repo_name,
            commit_sha=event.commit_sha,
            live_url=record.subdomain,
            build_logs_url=run.html_url,
            successful_resources=event.successful_resources,
            ingress_disabled_placeholder=deployments.INGRESS_DISABLED_PLACEHOLDER,
        )

        # Repeat-comments mode never reuses the stored comment.
        stored_comment_id = (
            record.comment_id if environment.new_comments_disabled else None
        )

        raise_if_cancelled(cancel_event, "upsert_comment")
        comment = self.upsert_comment(
            CommentThread(
                owner=environment.git_repo_owner,
                repo=environment.git_repo_name,
                pr_number=record.pr_number,
            ),
            stored_comment_id,
            body,
        )
        stage = (
            ReconcileStage.COMMENT_CREATED
            if comment.created
            else ReconcileStage.COMMENT_UPDATED
        )
        logger.debug("reconcile_stage", stage=stage.value, deployment_id=record.id)

        logger.info(
            "deployment_reconciled",
            deployment_id=record.id,
            comment_id=comment.comment_id,
            comment_created=comment.created,
        )
        return ReconcileOutcome(status=status, run=run, comment=comment)
