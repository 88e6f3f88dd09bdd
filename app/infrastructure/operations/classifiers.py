"""Error classifiers for upstream HTTP failures.

Converts HTTP status codes and transport exceptions raised by the notifier
adapters (chat webhooks, templated email API) into standardized
OperationResult objects.

Key Functions:
- classify_http_status(): HTTP status code → OperationResult
- classify_request_exception(): requests exceptions → OperationResult

Usage:
    from infrastructure.operations.classifiers import classify_request_exception

    try:
        response = session.post(url, json=payload, timeout=10)
        response.raise_for_status()
    except requests.RequestException as exc:
        return classify_request_exception(exc, service="notify")
"""

from typing import Optional

import requests

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

DEFAULT_RETRY_AFTER_SECONDS = 60


def _parse_retry_after(header_value: Optional[str]) -> int:
    if not header_value:
        return DEFAULT_RETRY_AFTER_SECONDS
    try:
        return int(header_value)
    except (ValueError, TypeError):
        return DEFAULT_RETRY_AFTER_SECONDS


def classify_http_status(
    status_code: int,
    service: str,
    body: str = "",
    retry_after: Optional[str] = None,
) -> OperationResult:
    """Classify an HTTP status code returned by an upstream service.

    Status Code Mapping:
    - 2xx: SUCCESS
    - 429: Rate limiting → TRANSIENT_ERROR with retry_after
    - 401/403: UNAUTHORIZED
    - 404: NOT_FOUND
    - 5xx: TRANSIENT_ERROR
    - Other 4xx: PERMANENT_ERROR

    Args:
        status_code: HTTP status code
        service: Upstream service name used in messages
        body: Response body, included in the error message when present
        retry_after: Raw Retry-After header value

    Returns:
        OperationResult describing the response
    """
    detail = f": {body}" if body else ""

    if 200 <= status_code < 300:
        return OperationResult.success(message=f"{service} accepted request")

    if status_code == 429:
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            f"{service} rate limited{detail}",
            error_code="RATE_LIMITED",
            retry_after=_parse_retry_after(retry_after),
        )

    if status_code in (401, 403):
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            f"{service} rejected credentials{detail}",
            error_code="UNAUTHORIZED" if status_code == 401 else "FORBIDDEN",
        )

    if status_code == 404:
        return OperationResult.not_found(f"{service} resource not found{detail}")

    if status_code >= 500:
        return OperationResult.transient_error(
            f"{service} server error {status_code}{detail}",
            error_code="SERVER_ERROR",
        )

    return OperationResult.permanent_error(
        f"{service} request failed with {status_code}{detail}",
        error_code=f"HTTP_{status_code}",
    )


def classify_request_exception(exc: Exception, service: str) -> OperationResult:
    """Classify an exception raised while calling an upstream HTTP API.

    HTTPError carrying a response is classified by its status code;
    timeouts and connection failures are transient.

    Args:
        exc: Exception raised by requests (or any other transport)
        service: Upstream service name used in messages

    Returns:
        OperationResult with the appropriate error status
    """
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        response = exc.response
        return classify_http_status(
            response.status_code,
            service=service,
            body=response.text,
            retry_after=response.headers.get("Retry-After"),
        )

    if isinstance(exc, requests.Timeout):
        return OperationResult.transient_error(
            f"{service} request timed out", error_code="TIMEOUT"
        )

    return OperationResult.transient_error(
        f"{service} connection error: {type(exc).__name__}: {exc}",
        error_code="CONNECTION_ERROR",
    )
