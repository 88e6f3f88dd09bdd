"""Shared fixtures for the event relay test suite."""

from unittest.mock import MagicMock

import pytest

from infrastructure.configuration import Settings
from infrastructure.configuration.infrastructure import ServerSettings
from infrastructure.configuration.integrations import NotifySettings, SlackSettings
from infrastructure.notifications.channels.base import NotificationChannel
from infrastructure.operations import OperationResult
from tests.factories.notifications import make_incident, make_policy, make_tenant

SERVER_URL = "https://dashboard.example.com"


@pytest.fixture
def slack_settings():
    return SlackSettings(SLACK_CLIENT_ID="client-id", SLACK_CLIENT_SECRET="secret")


@pytest.fixture
def notify_settings():
    return NotifySettings(
        NOTIFY_API_URL="https://api.notification.canada.ca",
        NOTIFY_CLIENT_ID="notify-client",
        NOTIFY_CLIENT_SECRET="notify-secret",
        NOTIFY_INCIDENT_TEMPLATE_ID="tmpl-incident",
    )


@pytest.fixture
def settings_factory(slack_settings, notify_settings):
    """Factory for Settings with every integration configured.

    Example:
        settings = settings_factory(notify=NotifySettings())  # email unconfigured
    """

    def _factory(**overrides) -> Settings:
        kwargs = {
            "slack": slack_settings,
            "notify": notify_settings,
            "server": ServerSettings(SERVER_URL=SERVER_URL),
        }
        kwargs.update(overrides)
        return Settings(**kwargs)

    return _factory


@pytest.fixture
def settings(settings_factory):
    return settings_factory()


@pytest.fixture
def incident_factory():
    return make_incident


@pytest.fixture
def policy_factory():
    return make_policy


@pytest.fixture
def tenant_factory():
    return make_tenant


@pytest.fixture
def channel_factory():
    """Factory for mock NotificationChannel instances.

    Example:
        chat = channel_factory("chat")
        failing = channel_factory("email", OperationResult.transient_error("down"))
    """

    def _factory(name: str, result: OperationResult = None):
        channel = MagicMock(spec=NotificationChannel)
        channel.channel_name = name
        channel.notify.return_value = result or OperationResult.success()
        return channel

    return _factory
