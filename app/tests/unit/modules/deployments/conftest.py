"""Fixtures for deployments module tests."""

from dataclasses import replace
from typing import Dict, List, Optional

import pytest

from infrastructure.operations import NotFoundError, OperationResult
from modules.deployments.domain.models import DeploymentKey, DeploymentRecord
from modules.deployments.reconciler import ExternalStatusReconciler
from tests.factories.deployments import (
    make_environment,
    make_finalize_event,
    make_record,
    make_run,
)


class FakeGitStatusClient:
    """In-memory git hosting provider.

    Tracks live comments by id so tests can assert convergence, and records
    every call in order.
    """

    def __init__(self):
        self.calls: List[str] = []
        self.comments: Dict[int, str] = {}
        self.statuses: List[tuple] = []
        self.run_result: OperationResult = OperationResult.success(data=make_run())
        self.status_result: Optional[OperationResult] = None
        self.create_result: Optional[OperationResult] = None
        self.update_fails = False
        self.lookups: List[tuple] = []
        self._next_id = 1000

    def post_deployment_status(self, handle, state, environment_url):
        self.calls.append("post_deployment_status")
        if self.status_result is not None:
            return self.status_result
        self.statuses.append((handle, state, environment_url))
        return OperationResult.success()

    def find_latest_workflow_run(self, owner, repo, workflow_file, branch):
        self.calls.append("find_latest_workflow_run")
        self.lookups.append((owner, repo, workflow_file, branch))
        return self.run_result

    def create_comment(self, owner, repo, pr_number, body):
        self.calls.append("create_comment")
        if self.create_result is not None:
            return self.create_result
        self._next_id += 1
        self.comments[self._next_id] = body
        return OperationResult.success(data=self._next_id)

    def update_comment(self, owner, repo, comment_id, body):
        self.calls.append("update_comment")
        if self.update_fails or comment_id not in self.comments:
            return OperationResult.not_found("comment not found")
        self.comments[comment_id] = body
        return OperationResult.success()

    @property
    def comment_writes(self) -> List[str]:
        return [c for c in self.calls if c in ("create_comment", "update_comment")]


class InMemoryRecordStore:
    def __init__(self, *records: DeploymentRecord):
        self.records = {r.key: r for r in records}
        self.updates: List[DeploymentRecord] = []

    def read(self, key: DeploymentKey) -> DeploymentRecord:
        if key not in self.records:
            raise NotFoundError(f"no deployment for {key}", operation="read_deployment")
        return replace(self.records[key])

    def update(self, record: DeploymentRecord) -> DeploymentRecord:
        self.updates.append(record)
        self.records[record.key] = replace(record)
        return replace(record)


@pytest.fixture
def git_client():
    return FakeGitStatusClient()


@pytest.fixture
def reconciler(git_client, settings):
    return ExternalStatusReconciler(git_client, settings)


@pytest.fixture
def environment_factory():
    return make_environment


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def finalize_event_factory():
    return make_finalize_event


@pytest.fixture
def record_store_factory():
    return InMemoryRecordStore
