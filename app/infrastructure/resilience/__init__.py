"""Resilience helpers.

This module contains fault tolerance tooling such as the fault injector used
to exercise upstream failure handling.
"""

from infrastructure.resilience.faults import FaultInjector, build_fault_injector

__all__ = [
    "FaultInjector",
    "build_fault_injector",
]
