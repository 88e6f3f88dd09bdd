"""Exceptions raised at service boundaries.

Channels and upstream clients report outcomes as ``OperationResult``. The
request-scoped services (incident alerts, deployment finalize) convert those
results into the exceptions below so callers can tell a lookup miss apart
from a generic upstream failure.

Example:
    result = client.find_latest_workflow_run(owner, repo, workflow, branch)
    raise_for_result(result, operation="find_latest_workflow_run")
"""

import threading
from typing import Any, Optional

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

GENERIC_PUBLIC_MESSAGE = "internal error"


class OperationError(Exception):
    """Base exception for relay operations.

    Attributes:
        operation: Name of the step that failed (e.g. "create_comment")
        public_message: Message safe to show to the end user
        result: The OperationResult that triggered the error, if any
    """

    public_message = GENERIC_PUBLIC_MESSAGE

    def __init__(
        self,
        message: str,
        operation: str = "",
        result: Optional[OperationResult] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.result = result


class UpstreamCallFailedError(OperationError):
    """An external API call failed. Never retried automatically."""


class NotFoundError(OperationError):
    """A policy, workflow run or record lookup found nothing."""

    public_message = "not found"


class ValidationFailedError(OperationError):
    """An inbound event was rejected before any external call.

    Attributes:
        errors: Structured field errors (pydantic ``errors()`` output)
    """

    def __init__(self, message: str, errors: Any = None, operation: str = ""):
        super().__init__(message, operation=operation)
        self.errors = errors or []
        self.public_message = message


class OperationCancelledError(OperationError):
    """The caller's cancellation signal was set before a step started."""

    public_message = "request cancelled"


def raise_for_result(result: OperationResult, operation: str) -> OperationResult:
    """Raise the matching OperationError when ``result`` is not a success.

    Args:
        result: Result returned by a channel, notifier or client
        operation: Step name recorded on the raised error

    Returns:
        The result unchanged when successful

    Raises:
        NotFoundError: status is NOT_FOUND
        UpstreamCallFailedError: any other non-success status
    """
    if result.is_success:
        return result
    if result.status == OperationStatus.NOT_FOUND:
        raise NotFoundError(
            f"{operation}: {result.message}", operation=operation, result=result
        )
    raise UpstreamCallFailedError(
        f"{operation} failed: {result.message}", operation=operation, result=result
    )


def raise_if_cancelled(
    cancel_event: Optional[threading.Event], operation: str
) -> None:
    """Abort before ``operation`` if the caller has signalled cancellation."""
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelledError(
            f"cancelled before {operation}", operation=operation
        )
