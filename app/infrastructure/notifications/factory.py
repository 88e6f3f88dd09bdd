"""Channel registry factory.

Wires the registry to the concrete notifier adapters (Slack incoming
webhooks, GC Notify email).
"""

from functools import lru_cache
from typing import Sequence

from infrastructure.configuration import Settings
from infrastructure.notifications.models import ChatIntegration
from infrastructure.notifications.registry import ChannelRegistry
from infrastructure.services.providers import get_settings
from integrations.notify import NotifyClient, NotifyEmailNotifier
from integrations.slack import SlackWebhookNotifier


def create_channel_registry(settings: Settings) -> ChannelRegistry:
    """Create a registry whose notifiers use the given settings.

    Args:
        settings: Application settings

    Returns:
        ChannelRegistry producing SlackWebhookNotifier and NotifyEmailNotifier
    """
    notify_client = NotifyClient(settings.notify)

    def chat_notifier_factory(integration: ChatIntegration) -> SlackWebhookNotifier:
        return SlackWebhookNotifier(
            integration, timeout=settings.slack.SLACK_WEBHOOK_TIMEOUT_SECONDS
        )

    def email_notifier_factory(
        template_id: str, recipients: Sequence[str]
    ) -> NotifyEmailNotifier:
        return NotifyEmailNotifier(notify_client, template_id, recipients)

    return ChannelRegistry(
        settings,
        chat_notifier_factory=chat_notifier_factory,
        email_notifier_factory=email_notifier_factory,
    )


@lru_cache
def get_channel_registry() -> ChannelRegistry:
    """Get the application-scoped channel registry singleton."""
    return create_channel_registry(get_settings())
