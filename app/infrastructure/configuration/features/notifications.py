"""Incident notification feature settings."""

from typing import Literal

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class NotificationSettings(FeatureSettings):
    """Incident fan-out configuration.

    Environment Variables:
        NOTIFICATIONS_FANOUT_ERROR_POLICY: ``fail_fast`` stops at the first
            failing channel, ``aggregate`` attempts every channel
            (default: fail_fast)
        NOTIFICATIONS_FAULT_INJECTION_RATE: Probability in [0, 1] of an
            injected failure before dispatch (default: 0.0, disabled)
        NOTIFICATIONS_FAULT_INJECTION_SEED: Seed for the injector's own
            random source (default: 0)

    Example:
        ```python
        from infrastructure.services import get_settings

        policy = get_settings().notifications.NOTIFICATIONS_FANOUT_ERROR_POLICY
        ```
    """

    NOTIFICATIONS_FANOUT_ERROR_POLICY: Literal["fail_fast", "aggregate"] = Field(
        default="fail_fast", alias="NOTIFICATIONS_FANOUT_ERROR_POLICY"
    )
    NOTIFICATIONS_FAULT_INJECTION_RATE: float = Field(
        default=0.0, alias="NOTIFICATIONS_FAULT_INJECTION_RATE", ge=0.0, le=1.0
    )
    NOTIFICATIONS_FAULT_INJECTION_SEED: int = Field(
        default=0, alias="NOTIFICATIONS_FAULT_INJECTION_SEED"
    )
