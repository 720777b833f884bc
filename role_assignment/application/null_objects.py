"""
No-op collaborators selected at construction time when the caller does not
configure a unit of work or a telemetry collector.
"""

from __future__ import annotations

from ..domain.entities import StandardRoleType


class NullUnitOfWork:
    """Unit of work that does nothing: writes go straight to the repositories."""

    def begin(self) -> None:
        return None

    def savepoint(self) -> int:
        return 0

    def rollback_to(self, savepoint: int) -> None:
        return None

    def commit(self) -> None:
        return None

    def rollback(self) -> None:
        return None


class NullTelemetryCollector:
    def record_role_assignment(
        self, role_type: StandardRoleType, outcome: str, duration_seconds: float
    ) -> None:
        return None

    def record_work_assignment(self, duration_seconds: float) -> None:
        return None

    def record_retry(self, role_type: StandardRoleType, attempt: int) -> None:
        return None
