"""Unit tests for the channel registry factory."""

import pytest

from infrastructure.notifications.factory import create_channel_registry
from integrations.notify import NotifyEmailNotifier
from integrations.slack import SlackWebhookNotifier


@pytest.mark.unit
class TestCreateChannelRegistry:
    def test_builds_concrete_notifiers(self, settings, tenant_factory):
        registry = create_channel_registry(settings)

        chat, email = registry.build(tenant_factory())

        assert all(isinstance(n, SlackWebhookNotifier) for n in chat.notifiers)
        assert isinstance(email.notifier, NotifyEmailNotifier)
        assert email.notifier.template_id == "tmpl-incident"
        assert email.notifier.recipients == ("oncall@example.com",)
