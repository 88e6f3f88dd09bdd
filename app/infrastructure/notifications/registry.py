"""Channel registry.

Builds the ordered list of notification channels available for one tenant
from three inputs: global integration settings, the tenant's installed
integrations, and the resource's channel parameters. Channels whose
integration is not configured are left out and never treated as errors.
"""

from typing import Callable, List, Optional, Sequence

import structlog
from infrastructure.configuration import Settings
from infrastructure.notifications.channels.base import (
    ChatNotifier,
    EmailNotifier,
    NotificationChannel,
)
from infrastructure.notifications.channels.chat import ChatChannel
from infrastructure.notifications.channels.email import EmailChannel
from infrastructure.notifications.models import (
    ChatIntegration,
    NotificationPolicy,
    TenantCapabilities,
)

logger = structlog.get_logger()

ChatNotifierFactory = Callable[[ChatIntegration], ChatNotifier]
EmailNotifierFactory = Callable[[str, Sequence[str]], EmailNotifier]


class ChannelRegistry:
    """Builds enabled channels in declaration order (chat, then email).

    Example:
        registry = ChannelRegistry(
            settings,
            chat_notifier_factory=lambda integration: SlackWebhookNotifier(integration),
            email_notifier_factory=lambda template_id, recipients: NotifyEmailNotifier(
                client, template_id, recipients
            ),
        )
        channels = registry.build(tenant, policy)
    """

    def __init__(
        self,
        settings: Settings,
        chat_notifier_factory: ChatNotifierFactory,
        email_notifier_factory: EmailNotifierFactory,
    ):
        self._settings = settings
        self._chat_notifier_factory = chat_notifier_factory
        self._email_notifier_factory = email_notifier_factory

    def build(
        self,
        tenant: TenantCapabilities,
        policy: Optional[NotificationPolicy] = None,
    ) -> List[NotificationChannel]:
        """Build the channels available to ``tenant``.

        Args:
            tenant: Integrations the tenant has installed
            policy: Resource policy supplying the chat target and email
                template override. Enable flags are applied by the dispatcher.

        Returns:
            Ordered list of channels; empty when nothing is configured
        """
        channels: List[NotificationChannel] = []

        chat = self._build_chat(tenant, policy)
        if chat is not None:
            channels.append(chat)

        email = self._build_email(tenant, policy)
        if email is not None:
            channels.append(email)

        logger.debug(
            "channels_built",
            channels=[c.channel_name for c in channels],
        )
        return channels

    def _build_chat(
        self, tenant: TenantCapabilities, policy: Optional[NotificationPolicy]
    ) -> Optional[ChatChannel]:
        if not self._settings.slack.is_configured:
            logger.debug(
                "channel_not_configured", channel="chat", reason="slack_app_settings"
            )
            return None

        integrations = list(tenant.chat_integrations)
        if policy is not None and policy.chat_target:
            integrations = [i for i in integrations if i.id == policy.chat_target]

        if not integrations:
            logger.debug(
                "channel_not_configured",
                channel="chat",
                reason="no_chat_integration",
                chat_target=policy.chat_target if policy else None,
            )
            return None

        return ChatChannel([self._chat_notifier_factory(i) for i in integrations])

    def _build_email(
        self, tenant: TenantCapabilities, policy: Optional[NotificationPolicy]
    ) -> Optional[EmailChannel]:
        notify = self._settings.notify
        if not notify.is_configured:
            logger.debug(
                "channel_not_configured", channel="email", reason="notify_settings"
            )
            return None

        if not tenant.email_recipients:
            logger.debug(
                "channel_not_configured", channel="email", reason="no_recipients"
            )
            return None

        template_id = notify.NOTIFY_INCIDENT_TEMPLATE_ID
        if policy is not None and policy.email_template_id:
            template_id = policy.email_template_id

        return EmailChannel(
            self._email_notifier_factory(template_id, tenant.email_recipients)
        )
