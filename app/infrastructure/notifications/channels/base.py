"""Notification channel abstract base class and notifier capabilities.

All channel implementations (Chat, Email) implement ``NotificationChannel``.
Each channel delegates delivery to one or more notifiers, the abstract
capability a transport adapter (Slack webhook, GC Notify) provides.
"""

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from infrastructure.notifications.models import IncidentDetected
from infrastructure.operations import OperationResult


@runtime_checkable
class ChatNotifier(Protocol):
    """Delivers an incident to one chat destination."""

    def notify(
        self, event: IncidentDetected, routing_url: str
    ) -> OperationResult:  # pragma: no cover - typing helper
        ...


@runtime_checkable
class EmailNotifier(Protocol):
    """Delivers an incident email to the tenant's recipients."""

    def notify(
        self, event: IncidentDetected, routing_url: str
    ) -> OperationResult:  # pragma: no cover - typing helper
        ...


class NotificationChannel(ABC):
    """Abstract base class for notification channels.

    Each channel handles delivery through a specific medium:
    - ChatChannel: chat webhooks (Slack)
    - EmailChannel: templated email (GC Notify)

    Channels must not raise for delivery failures: they return an
    OperationResult with an error status instead, and the dispatcher decides
    whether the fan-out continues.

    Example Implementation:
        class PagerChannel(NotificationChannel):

            @property
            def channel_name(self) -> str:
                return "pager"

            def notify(self, event, routing_url) -> OperationResult:
                return self._pager.page(event.summary, routing_url)
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Channel identifier ("chat", "email") used for policy checks and logs."""
        pass

    @abstractmethod
    def notify(self, event: IncidentDetected, routing_url: str) -> OperationResult:
        """Deliver ``event`` through this channel.

        Args:
            event: Incident to deliver
            routing_url: Dashboard URL the notification links to

        Returns:
            OperationResult; success only if every destination accepted it
        """
        pass
