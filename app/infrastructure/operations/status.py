"""Operation status enumeration.

Status codes attached to every ``OperationResult`` returned by channels,
notifiers and git status clients. Service boundaries translate non-success
statuses into the exceptions defined in ``infrastructure.operations.errors``.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Upstream failure that may succeed on a later call
        PERMANENT_ERROR: Upstream rejected the call (validation, auth)
        UNAUTHORIZED: Credentials missing or rejected by the upstream service
        NOT_FOUND: Lookup miss (policy, workflow run, record, comment)
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
