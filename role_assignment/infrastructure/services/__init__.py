"""
Service adapters (supervisor resolution, telemetry).
"""

from .prometheus_telemetry import PrometheusTelemetryCollector
from .supervisor_resolver import (
    COORDINATOR_PREFIX,
    MANAGER_PREFIX,
    PrefixSupervisorResolver,
)

__all__ = [
    "COORDINATOR_PREFIX",
    "MANAGER_PREFIX",
    "PrefixSupervisorResolver",
    "PrometheusTelemetryCollector",
]
