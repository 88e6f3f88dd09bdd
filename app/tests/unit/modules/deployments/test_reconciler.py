"""Unit tests for ExternalStatusReconciler.

Tests cover:
- Status post, run lookup and comment upsert ordering
- Update with fallback to create
- Convergence on one live comment across repeated reconciliations
- Repeat-comments mode
- NotFound and upstream failures
- Cancellation between steps
"""

import threading
from dataclasses import replace

import pytest

from infrastructure.operations import (
    NotFoundError,
    OperationCancelledError,
    OperationResult,
    UpstreamCallFailedError,
)
from modules.deployments.domain.models import (
    CommentThread,
    DeploymentHandle,
    ReconcileRequest,
    ReconcileStage,
)

SERVER = "https://dashboard.example.com"
THREAD = CommentThread(owner="acme", repo="widgets", pr_number=12)


@pytest.fixture
def request_factory(finalize_event_factory, record_factory, environment_factory):
    def _factory(record=None, environment=None, event=None):
        return ReconcileRequest(
            event=event or finalize_event_factory(),
            record=record or record_factory(subdomain="app.example.com"),
            environment=environment or environment_factory(),
            cluster_name="prod-ca",
            project_id=42,
        )

    return _factory


@pytest.mark.unit
class TestPostExternalStatus:
    def test_returns_status_record(self, reconciler, git_client):
        handle = DeploymentHandle(owner="acme", repo="widgets", deployment_id=555)

        record = reconciler.post_external_status(handle, "success", "app.example.com")

        assert record.handle == handle
        assert record.state == "success"
        assert git_client.statuses == [(handle, "success", "app.example.com")]

    def test_failure_raises_upstream_error(self, reconciler, git_client):
        git_client.status_result = OperationResult.transient_error("502")

        with pytest.raises(UpstreamCallFailedError):
            reconciler.post_external_status(
                DeploymentHandle("acme", "widgets", 555), "success", ""
            )


@pytest.mark.unit
class TestResolveLatestRun:
    def test_returns_run(self, reconciler):
        run = reconciler.resolve_latest_run("acme", "widgets", "porter_preview_env.yml", "main")

        assert run.html_url.endswith("/runs/99")

    def test_miss_raises_not_found(self, reconciler, git_client):
        git_client.run_result = OperationResult.not_found("no runs")

        with pytest.raises(NotFoundError):
            reconciler.resolve_latest_run("acme", "widgets", "wf.yml", "main")

    def test_empty_success_raises_not_found(self, reconciler, git_client):
        git_client.run_result = OperationResult.success(data=None)

        with pytest.raises(NotFoundError):
            reconciler.resolve_latest_run("acme", "widgets", "wf.yml", "main")


@pytest.mark.unit
class TestUpsertComment:
    def test_creates_without_stored_id(self, reconciler, git_client):
        upsert = reconciler.upsert_comment(THREAD, None, "body")

        assert upsert.created
        assert git_client.comments == {upsert.comment_id: "body"}
        assert git_client.comment_writes == ["create_comment"]

    def test_updates_stored_id(self, reconciler, git_client):
        git_client.comments[7] = "old"

        upsert = reconciler.upsert_comment(THREAD, 7, "new")

        assert upsert.comment_id == 7
        assert not upsert.created
        assert git_client.comments == {7: "new"}
        assert git_client.comment_writes == ["update_comment"]

    def test_failed_update_falls_back_to_create(self, reconciler, git_client):
        upsert = reconciler.upsert_comment(THREAD, 7, "body")

        assert upsert.created
        assert upsert.comment_id != 7
        assert git_client.comment_writes == ["update_comment", "create_comment"]

    def test_failed_create_raises(self, reconciler, git_client):
        git_client.create_result = OperationResult.permanent_error("locked")

        with pytest.raises(UpstreamCallFailedError):
            reconciler.upsert_comment(THREAD, None, "body")


@pytest.mark.unit
class TestReconcile:
    def test_steps_run_in_order(self, reconciler, git_client, request_factory):
        outcome = reconciler.reconcile(request_factory())

        assert git_client.calls == [
            "post_deployment_status",
            "find_latest_workflow_run",
            "create_comment",
        ]
        assert outcome.stage == ReconcileStage.DONE
        assert outcome.comment.created

    def test_status_posted_on_environment_repo(
        self, reconciler, git_client, request_factory
    ):
        reconciler.reconcile(request_factory())

        handle, state, url = git_client.statuses[0]
        assert handle == DeploymentHandle(owner="acme", repo="widgets", deployment_id=555)
        assert state == "success"
        assert url == "app.example.com"

    def test_run_lookup_uses_environment_workflow_and_branch(
        self, reconciler, git_client, request_factory, environment_factory
    ):
        reconciler.reconcile(request_factory(environment=environment_factory(name="qa")))

        assert git_client.lookups == [
            ("acme", "widgets", "porter_qa_env.yml", "feature/login")
        ]

    def test_comment_body(self, reconciler, git_client, request_factory):
        outcome = reconciler.reconcile(request_factory())

        body = git_client.comments[outcome.comment.comment_id]
        assert body.startswith("## Preview Environments\n")
        assert "/commit/abcd123)" in body
        assert "| Live URL | app.example.com |" in body
        assert "| Build Logs | https://github.com/acme/widgets/actions/runs/99 |" in body
        assert f"{SERVER}/jobs/prod-ca/pr-12-widgets/nightly?project_id=42" in body
        assert f"{SERVER}/applications/prod-ca/pr-12-widgets/web?project_id=42" in body

    def test_ingress_disabled_placeholder(
        self, reconciler, git_client, request_factory, record_factory
    ):
        outcome = reconciler.reconcile(request_factory(record=record_factory(subdomain="")))

        body = git_client.comments[outcome.comment.comment_id]
        assert "| Live URL | *Ingress is disabled for this deployment* |" in body

    def test_run_not_found_aborts_before_comment_writes(
        self, reconciler, git_client, request_factory, record_factory
    ):
        git_client.run_result = OperationResult.not_found("no runs")
        git_client.comments[5] = "existing"

        with pytest.raises(NotFoundError):
            reconciler.reconcile(request_factory(record=record_factory(comment_id=5)))

        assert git_client.comment_writes == []
        assert git_client.comments == {5: "existing"}

    def test_status_failure_aborts_before_lookup(
        self, reconciler, git_client, request_factory
    ):
        git_client.status_result = OperationResult.transient_error("502")

        with pytest.raises(UpstreamCallFailedError):
            reconciler.reconcile(request_factory())

        assert git_client.calls == ["post_deployment_status"]

    def test_repeated_reconciliations_converge_on_one_comment(
        self, reconciler, git_client, request_factory, record_factory
    ):
        record = record_factory(subdomain="app.example.com")

        for _ in range(5):
            outcome = reconciler.reconcile(request_factory(record=record))
            record = replace(record, comment_id=outcome.comment.comment_id)

        assert git_client.calls.count("create_comment") == 1
        assert git_client.calls.count("update_comment") == 4
        assert list(git_client.comments) == [record.comment_id]

    def test_deleted_comment_is_recreated_once(
        self, reconciler, git_client, request_factory, record_factory
    ):
        record = record_factory(comment_id=404)

        first = reconciler.reconcile(request_factory(record=record))
        record = replace(record, comment_id=first.comment.comment_id)
        second = reconciler.reconcile(request_factory(record=record))

        assert first.comment.created
        assert not second.comment.created
        assert second.comment.comment_id == first.comment.comment_id

    def test_repeat_comments_mode_always_creates(
        self, reconciler, git_client, request_factory, record_factory, environment_factory
    ):
        environment = environment_factory(new_comments_disabled=False)
        record = record_factory()

        for _ in range(3):
            outcome = reconciler.reconcile(
                request_factory(record=record, environment=environment)
            )
            record = replace(record, comment_id=outcome.comment.comment_id)

        assert git_client.calls.count("create_comment") == 3
        assert "update_comment" not in git_client.calls
        assert len(git_client.comments) == 3

    def test_cancelled_before_start(self, reconciler, git_client, request_factory):
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(OperationCancelledError):
            reconciler.reconcile(request_factory(), cancel_event=cancel)

        assert git_client.calls == []

    def test_cancelled_after_status_post(self, reconciler, git_client, request_factory):
        cancel = threading.Event()
        original = git_client.post_deployment_status

        def post_then_cancel(*args):
            result = original(*args)
            cancel.set()
            return result

        git_client.post_deployment_status = post_then_cancel

        with pytest.raises(OperationCancelledError) as exc_info:
            reconciler.reconcile(request_factory(), cancel_event=cancel)

        assert exc_info.value.operation == "find_latest_workflow_run"
        assert git_client.calls == ["post_deployment_status"]
