"""Slack integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class SlackSettings(IntegrationSettings):
    """Slack app configuration.

    Incident alerts are delivered through the incoming webhooks each tenant
    installs; the app credentials below only indicate that the Slack
    integration is available on this server at all.

    Environment Variables:
        SLACK_CLIENT_ID: Slack app client ID
        SLACK_CLIENT_SECRET: Slack app client secret
        SLACK_WEBHOOK_TIMEOUT_SECONDS: Timeout for webhook posts (default: 10)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.slack.is_configured:
            timeout = settings.slack.SLACK_WEBHOOK_TIMEOUT_SECONDS
        ```
    """

    SLACK_CLIENT_ID: str = Field(default="", alias="SLACK_CLIENT_ID")
    SLACK_CLIENT_SECRET: str = Field(default="", alias="SLACK_CLIENT_SECRET")
    SLACK_WEBHOOK_TIMEOUT_SECONDS: int = Field(
        default=10, alias="SLACK_WEBHOOK_TIMEOUT_SECONDS", gt=0
    )

    @property
    def is_configured(self) -> bool:
        """True when the Slack app credentials are present."""
        return bool(self.SLACK_CLIENT_ID and self.SLACK_CLIENT_SECRET)
