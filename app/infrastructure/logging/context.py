"""Event context binding for structured logging.

Binds correlation IDs and event metadata to every log entry emitted while
an incident dispatch or deployment finalize is in progress.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(event_kind="incident_detected", release_name="web"):
        logger.info("dispatching_incident")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    event_kind: Optional[str] = None,
    project_id: Optional[int] = None,
    cluster: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind request-scoped context to all logs within the block.

    Args:
        correlation_id: Unique request identifier. Auto-generated if not provided.
        event_kind: Event discriminator (incident_detected, deployment_finalized).
        project_id: Tenant project ID.
        cluster: Cluster name the event originated from.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        None - context is bound to structlog's context vars.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}

    if event_kind is not None:
        context["event_kind"] = event_kind

    if project_id is not None:
        context["project_id"] = project_id

    if cluster is not None:
        context["cluster"] = cluster

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())
