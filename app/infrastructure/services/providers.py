"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache
from typing import Optional

from infrastructure.configuration import Settings
from infrastructure.notifications.dispatcher import FanoutDispatcher, FanoutErrorPolicy
from infrastructure.resilience.faults import FaultInjector, build_fault_injector


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Infrastructure packages should use this directly to ensure singleton consistency:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_fanout_dispatcher() -> FanoutDispatcher:
    """
    Get application-scoped fan-out dispatcher singleton.

    Returns:
        FanoutDispatcher: Dispatcher configured with the server URL and the
        fan-out error policy from settings.
    """
    settings = get_settings()
    return FanoutDispatcher(
        server_url=settings.server.SERVER_URL,
        error_policy=FanoutErrorPolicy(
            settings.notifications.NOTIFICATIONS_FANOUT_ERROR_POLICY
        ),
    )


@lru_cache
def get_fault_injector() -> Optional[FaultInjector]:
    """
    Get the application-scoped fault injector.

    Returns:
        FaultInjector, or None when fault injection is disabled (the default).
    """
    return build_fault_injector(get_settings())
