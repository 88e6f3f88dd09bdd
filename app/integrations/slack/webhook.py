"""Slack incoming webhook notifier."""

from typing import Optional

from slack_sdk.webhook import WebhookClient

from infrastructure.logging import get_module_logger
from infrastructure.notifications.models import ChatIntegration, IncidentDetected
from infrastructure.notifications.rendering import build_incident_chat_message
from infrastructure.operations import OperationResult, classify_http_status

logger = get_module_logger()


class SlackWebhookNotifier:
    """Posts incident messages to one Slack incoming webhook.

    Example:
        notifier = SlackWebhookNotifier(integration, timeout=10)
        result = notifier.notify(event, routing_url)
    """

    def __init__(
        self,
        integration: ChatIntegration,
        timeout: int = 10,
        client: Optional[WebhookClient] = None,
    ):
        self._integration = integration
        self._client = client or WebhookClient(
            url=integration.webhook_url, timeout=timeout
        )

    @property
    def integration(self) -> ChatIntegration:
        return self._integration

    def notify(self, event: IncidentDetected, routing_url: str) -> OperationResult:
        message = build_incident_chat_message(event, routing_url)

        try:
            response = self._client.send(
                text=message["text"], blocks=message["blocks"]
            )
        except OSError as e:
            # urllib raises URLError/timeout, both OSError subclasses
            logger.error(
                "slack_webhook_error",
                integration_id=self._integration.id,
                error=str(e),
            )
            return OperationResult.transient_error(
                f"slack webhook unreachable: {e}", error_code="CONNECTION_ERROR"
            )

        result = classify_http_status(
            response.status_code,
            service="slack",
            body="" if response.status_code == 200 else response.body,
        )
        if not result.is_success:
            logger.warning(
                "slack_webhook_rejected",
                integration_id=self._integration.id,
                response_code=response.status_code,
            )
            return result

        logger.debug(
            "slack_webhook_sent",
            integration_id=self._integration.id,
            channel=self._integration.channel,
        )
        return OperationResult.success(
            data={"integration_id": self._integration.id},
            message="Posted to Slack webhook",
        )
