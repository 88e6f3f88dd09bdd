"""Operation result types, status enums and boundary errors.

This module contains the standardized result type returned by channels and
upstream clients, the exceptions raised at service boundaries, and the
classifiers that turn HTTP failures into results.
"""

from infrastructure.operations.classifiers import (
    classify_http_status,
    classify_request_exception,
)
from infrastructure.operations.errors import (
    NotFoundError,
    OperationCancelledError,
    OperationError,
    UpstreamCallFailedError,
    ValidationFailedError,
    raise_for_result,
    raise_if_cancelled,
)
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "OperationError",
    "UpstreamCallFailedError",
    "NotFoundError",
    "ValidationFailedError",
    "OperationCancelledError",
    "raise_for_result",
    "raise_if_cancelled",
    "classify_http_status",
    "classify_request_exception",
]
