"""
Dependency injection services.

Provides provider functions for application-scoped singletons.
"""

from infrastructure.services.providers import (
    get_settings,
    get_fanout_dispatcher,
    get_fault_injector,
)

__all__ = [
    "get_settings",
    "get_fanout_dispatcher",
    "get_fault_injector",
]
