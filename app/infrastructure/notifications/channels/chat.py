"""Chat channel implementation."""

from typing import Sequence

import structlog
from infrastructure.notifications.channels.base import ChatNotifier, NotificationChannel
from infrastructure.notifications.models import IncidentDetected
from infrastructure.operations import OperationResult

logger = structlog.get_logger()


class ChatChannel(NotificationChannel):
    """Chat notification channel.

    Posts the incident to every chat destination the tenant configured, in
    installation order. Delivery stops at the first destination that fails
    and that failure is returned.
    """

    def __init__(self, notifiers: Sequence[ChatNotifier]):
        """Initialize chat channel.

        Args:
            notifiers: One notifier per chat destination.
        """
        self._notifiers = list(notifiers)
        logger.debug("initialized_chat_channel", destinations=len(self._notifiers))

    @property
    def channel_name(self) -> str:
        """Channel identifier."""
        return "chat"

    @property
    def notifiers(self) -> Sequence[ChatNotifier]:
        """Notifiers this channel delivers through."""
        return tuple(self._notifiers)

    def notify(self, event: IncidentDetected, routing_url: str) -> OperationResult:
        """Send the incident to every chat destination.

        Args:
            event: Incident to deliver.
            routing_url: Dashboard URL for the incident.

        Returns:
            OperationResult with the number of destinations reached.
        """
        delivered = 0
        for index, notifier in enumerate(self._notifiers):
            try:
                result = notifier.notify(event, routing_url)
            except Exception as e:
                logger.error(
                    "chat_notify_exception",
                    destination_index=index,
                    release_name=event.release_name,
                    error=str(e),
                    exc_info=True,
                )
                return OperationResult.transient_error(
                    message=f"Chat notifier raised: {e}",
                    error_code="CHANNEL_EXCEPTION",
                )

            if not result.is_success:
                logger.warning(
                    "chat_notify_failed",
                    destination_index=index,
                    release_name=event.release_name,
                    error=result.message,
                    error_code=result.error_code,
                )
                return result

            delivered += 1

        logger.info(
            "chat_notification_sent",
            release_name=event.release_name,
            destinations=delivered,
        )
        return OperationResult.success(
            data={"destinations": delivered},
            message=f"Sent chat notification to {delivered} destination(s)",
        )
