"""GC Notify integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class NotifySettings(IntegrationSettings):
    """GC Notify API configuration used for templated incident emails.

    Environment Variables:
        NOTIFY_API_URL: GC Notify API endpoint URL
        NOTIFY_CLIENT_ID: GC Notify service account identifier
        NOTIFY_CLIENT_SECRET: GC Notify service account secret
        NOTIFY_INCIDENT_TEMPLATE_ID: Template used for incident alert emails
        NOTIFY_TIMEOUT_SECONDS: HTTP timeout for API calls (default: 10)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        api_url = settings.notify.NOTIFY_API_URL
        template_id = settings.notify.NOTIFY_INCIDENT_TEMPLATE_ID
        ```
    """

    NOTIFY_API_URL: str = Field(default="", alias="NOTIFY_API_URL")
    NOTIFY_CLIENT_ID: str | None = Field(default=None, alias="NOTIFY_CLIENT_ID")
    NOTIFY_CLIENT_SECRET: str | None = Field(
        default=None, alias="NOTIFY_CLIENT_SECRET"
    )
    NOTIFY_INCIDENT_TEMPLATE_ID: str | None = Field(
        default=None, alias="NOTIFY_INCIDENT_TEMPLATE_ID"
    )
    NOTIFY_TIMEOUT_SECONDS: int = Field(
        default=10, alias="NOTIFY_TIMEOUT_SECONDS", gt=0
    )

    @property
    def is_configured(self) -> bool:
        """True when every value needed to send an incident email is set."""
        return bool(
            self.NOTIFY_API_URL
            and self.NOTIFY_CLIENT_ID
            and self.NOTIFY_CLIENT_SECRET
            and self.NOTIFY_INCIDENT_TEMPLATE_ID
        )
