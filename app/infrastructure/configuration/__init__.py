"""Infrastructure configuration module - public API.

Centralized configuration for the event relay using Pydantic BaseSettings
with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    DeploymentSettings: Preview deployment settings class
    NotificationSettings: Incident fan-out settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    server_url = settings.server.SERVER_URL
    fanout_policy = settings.notifications.NOTIFICATIONS_FANOUT_ERROR_POLICY
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.features import (
    DeploymentSettings,
    NotificationSettings,
)

__all__ = ["Settings", "DeploymentSettings", "NotificationSettings"]
