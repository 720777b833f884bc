"""
CRC: domain/services.py

Name
- Domain Service Interfaces (Protocols)

Responsibilities
- SupervisorResolver: department -> supervisors, supervisor existence check.
- RoleAssignmentCatalog: department -> ordered list of RoleAssignment.
- TelemetryCollector: fire-and-forget metrics sink.

Collaborators
- application.role_catalog.StandardRoleCatalog (RoleAssignmentCatalog)
- infrastructure.services.* (implementations)

Constraints
- Protocols only; telemetry never influences control flow.
"""

from typing import Protocol, Sequence

from .entities import RoleAssignment, StandardRoleType
from .value_objects import DepartmentId, SupervisorId


class SupervisorResolver(Protocol):
    def get_department_manager(self, department_id: DepartmentId) -> SupervisorId:
        ...

    def get_project_coordinator(self, department_id: DepartmentId) -> SupervisorId:
        ...

    def validate_supervisor(self, supervisor_id: SupervisorId) -> bool:
        """R: True if the supervisor exists."""
        ...


class RoleAssignmentCatalog(Protocol):
    def build_standard_assignments(
        self, department_id: DepartmentId
    ) -> Sequence[RoleAssignment]:
        """R: Roles to grant for the department, in processing order."""
        ...


class TelemetryCollector(Protocol):
    def record_role_assignment(
        self, role_type: StandardRoleType, outcome: str, duration_seconds: float
    ) -> None:
        ...

    def record_work_assignment(self, duration_seconds: float) -> None:
        ...

    def record_retry(self, role_type: StandardRoleType, attempt: int) -> None:
        ...
