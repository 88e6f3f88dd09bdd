"""Test fixtures for notification infrastructure tests."""

from unittest.mock import MagicMock

import pytest

from infrastructure.notifications.channels.base import ChatNotifier, EmailNotifier
from infrastructure.notifications.registry import ChannelRegistry
from infrastructure.operations import OperationResult


@pytest.fixture
def chat_notifier_factory():
    """Records the integrations it builds notifiers for."""
    factory = MagicMock(
        side_effect=lambda integration: MagicMock(
            spec=ChatNotifier, integration=integration
        )
    )
    return factory


@pytest.fixture
def email_notifier_factory():
    factory = MagicMock(
        side_effect=lambda template_id, recipients: MagicMock(
            spec=EmailNotifier, template_id=template_id, recipients=recipients
        )
    )
    return factory


@pytest.fixture
def registry_factory(settings, chat_notifier_factory, email_notifier_factory):
    def _factory(settings_override=None) -> ChannelRegistry:
        return ChannelRegistry(
            settings_override or settings,
            chat_notifier_factory=chat_notifier_factory,
            email_notifier_factory=email_notifier_factory,
        )

    return _factory


@pytest.fixture
def notifier_factory():
    """Factory for mock notifiers returning a fixed result."""

    def _factory(result: OperationResult = None):
        notifier = MagicMock()
        notifier.notify.return_value = result or OperationResult.success()
        return notifier

    return _factory
