"""Email channel implementation."""

import structlog
from infrastructure.notifications.channels.base import (
    EmailNotifier,
    NotificationChannel,
)
from infrastructure.notifications.models import IncidentDetected
from infrastructure.operations import OperationResult

logger = structlog.get_logger()


class EmailChannel(NotificationChannel):
    """Templated email notification channel.

    Wraps an EmailNotifier bound to the tenant's recipients and template.
    """

    def __init__(self, notifier: EmailNotifier):
        """Initialize email channel.

        Args:
            notifier: Notifier that sends the templated incident email.
        """
        self._notifier = notifier
        logger.debug("initialized_email_channel")

    @property
    def channel_name(self) -> str:
        """Channel identifier."""
        return "email"

    @property
    def notifier(self) -> EmailNotifier:
        """Notifier this channel delivers through."""
        return self._notifier

    def notify(self, event: IncidentDetected, routing_url: str) -> OperationResult:
        """Send the incident email.

        Args:
            event: Incident to deliver.
            routing_url: Dashboard URL for the incident.

        Returns:
            OperationResult from the notifier, or a transient error if it raised.
        """
        try:
            result = self._notifier.notify(event, routing_url)
        except Exception as e:
            logger.error(
                "email_notify_exception",
                release_name=event.release_name,
                error=str(e),
                exc_info=True,
            )
            return OperationResult.transient_error(
                message=f"Email notifier raised: {e}",
                error_code="CHANNEL_EXCEPTION",
            )

        if result.is_success:
            logger.info("email_notification_sent", release_name=event.release_name)
        else:
            logger.warning(
                "email_notify_failed",
                release_name=event.release_name,
                error=result.message,
                error_code=result.error_code,
            )
        return result
