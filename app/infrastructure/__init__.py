"""Infrastructure modules for the event relay.

Centralized infrastructure components:
- configuration: Settings management (Settings and per-concern settings)
- logging: Structured logging setup and request context (get_module_logger)
- notifications: Incident channel registry and fan-out dispatcher
- operations: Operation results, boundary errors and error classification
- resilience: Fault injection
- services: Application-scoped providers (get_settings)
"""

# Operations
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    # Operations
    "OperationResult",
    "OperationStatus",
]
