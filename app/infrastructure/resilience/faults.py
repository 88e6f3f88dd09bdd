"""Fault injection for exercising upstream failure paths.

A FaultInjector fails a configurable share of operations with a transient
error, so the failure handling of the notification path can be exercised in
non-production environments. Randomness comes only from the injected
``random.Random``; a seeded generator makes the failures reproducible.

Usage:
    injector = FaultInjector(random.Random(7), failure_rate=0.5)

    fault = injector.maybe_fail("notify_new_incident")
    if fault is not None:
        raise_for_result(fault, operation="notify_new_incident")
"""

import random
from typing import Optional

import structlog
from infrastructure.configuration import Settings
from infrastructure.operations import OperationResult

logger = structlog.get_logger()


class FaultInjector:
    """Fails operations with probability ``failure_rate``."""

    def __init__(self, rng: random.Random, failure_rate: float):
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        self._rng = rng
        self.failure_rate = failure_rate

    def maybe_fail(self, operation: str) -> Optional[OperationResult]:
        """Return a transient error for ``operation``, or None to proceed."""
        if self.failure_rate <= 0.0:
            return None
        if self._rng.random() >= self.failure_rate:
            return None

        logger.warning("fault_injected", operation=operation)
        return OperationResult.transient_error(
            message=f"Injected fault in {operation}",
            error_code="INJECTED_FAULT",
        )


def build_fault_injector(settings: Settings) -> Optional[FaultInjector]:
    """Build the injector from notification settings.

    Returns:
        None when the configured failure rate is zero. Injectors built from
        the same settings fail on the same sequence of calls.
    """
    notifications = settings.notifications
    rate = notifications.NOTIFICATIONS_FAULT_INJECTION_RATE
    if rate <= 0.0:
        return None

    seed = notifications.NOTIFICATIONS_FAULT_INJECTION_SEED
    logger.warning("fault_injection_enabled", failure_rate=rate, seed=seed)
    return FaultInjector(random.Random(seed), rate)
