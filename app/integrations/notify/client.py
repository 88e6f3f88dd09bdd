"""GC Notify client."""

import calendar
import time
from typing import Any, Dict, Optional, Tuple

import jwt
import requests

from infrastructure.configuration.integrations.notify import NotifySettings
from infrastructure.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    classify_http_status,
    classify_request_exception,
)

logger = get_module_logger()

EMAIL_NOTIFICATIONS_PATH = "/v2/notifications/email"


# generate the epoch seconds for the jwt token
def epoch_seconds():
    return calendar.timegm(time.gmtime())


def create_jwt_token(secret, client_id):
    """
    Generate a JWT Token for the Notify API

    Tokens have a header consisting of:
    {
        "typ": "JWT",
        "alg": "HS256"
    }

    Parameters:
    secret: Application signing secret
    client_id: Identifier for the client

    Claims are:
    iss: identifier for the client
    iat: epoch seconds for the token (UTC)

    Returns a JWT token for this request
    """
    if not secret:
        logger.error("jwt_token_creation_failed", error="Missing secret key")
        raise ValueError("Missing secret key")
    if not client_id:
        logger.error("jwt_token_creation_failed", error="Missing client id")
        raise ValueError("Missing client id")

    headers = {"typ": "JWT", "alg": "HS256"}

    claims = {"iss": client_id, "iat": epoch_seconds()}
    t = jwt.encode(payload=claims, key=secret, headers=headers)
    if isinstance(t, str):
        return t
    else:
        return t.decode()


def create_authorization_header(settings: NotifySettings) -> Tuple[str, str]:
    """Create the authorization header for the Notify API."""
    client_id = settings.NOTIFY_CLIENT_ID
    secret = settings.NOTIFY_CLIENT_SECRET

    if not client_id:
        error = "NOTIFY_CLIENT_ID is missing"
        logger.error("authorization_header_creation_failed", error=error)
        raise ValueError(error)
    if not secret:
        error = "NOTIFY_CLIENT_SECRET is missing"
        logger.error("authorization_header_creation_failed", error=error)
        raise ValueError(error)

    token = create_jwt_token(secret=secret, client_id=client_id)
    return "Authorization", "Bearer {}".format(token)


class NotifyClient:
    """Sends templated emails through the GC Notify API.

    Example:
        client = NotifyClient(settings.notify)
        result = client.send_email(
            email_address="oncall@example.com",
            template_id=settings.notify.NOTIFY_INCIDENT_TEMPLATE_ID,
            personalisation={"title": "Pod crash looping"},
        )
    """

    def __init__(
        self,
        settings: NotifySettings,
        session: Optional[requests.Session] = None,
    ):
        self._settings = settings
        self._session = session or requests.Session()

    def send_email(
        self,
        email_address: str,
        template_id: str,
        personalisation: Dict[str, Any],
        reference: Optional[str] = None,
    ) -> OperationResult:
        """Send one templated email.

        Args:
            email_address: Recipient address
            template_id: Notify template to render
            personalisation: Template variables
            reference: Optional client reference stored with the notification

        Returns:
            OperationResult with the Notify notification id in ``data["id"]``
        """
        url = self._settings.NOTIFY_API_URL.rstrip("/") + EMAIL_NOTIFICATIONS_PATH
        payload: Dict[str, Any] = {
            "email_address": email_address,
            "template_id": template_id,
            "personalisation": personalisation,
        }
        if reference:
            payload["reference"] = reference

        try:
            header_key, header_value = create_authorization_header(self._settings)
        except ValueError as e:
            return OperationResult.permanent_error(str(e), error_code="MISSING_CREDENTIALS")

        try:
            response = self._session.post(
                url,
                json=payload,
                headers={header_key: header_value},
                timeout=self._settings.NOTIFY_TIMEOUT_SECONDS,
            )
        except requests.RequestException as e:
            logger.error(
                "notify_send_email_error",
                template_id=template_id,
                error=str(e),
            )
            return classify_request_exception(e, service="notify")

        result = classify_http_status(
            response.status_code,
            service="notify",
            body="" if response.ok else response.text,
            retry_after=response.headers.get("Retry-After"),
        )
        if not result.is_success:
            logger.error(
                "notify_send_email_failed",
                template_id=template_id,
                response_code=response.status_code,
            )
            return result

        notification_id = response.json().get("id")
        logger.info(
            "notify_email_sent",
            template_id=template_id,
            notification_id=notification_id,
        )
        return OperationResult.success(
            data={"id": notification_id}, message="Email accepted by Notify"
        )
