"""
============================================================
TARJETA CRC: infrastructure/services/supervisor_resolver.py
============================================================
Class: PrefixSupervisorResolver

Responsibilities:
  - Resolver supervisores por convención de nombres:
      manager del depto     -> "manager-<dept>"
      coordinador del depto -> "coordinator-<dept>"
  - Validar existencia contra un set opcional de supervisores conocidos
    (None = todos existen).

Collaborators:
  - domain.services.SupervisorResolver (contrato)
============================================================
"""

from __future__ import annotations

from typing import Final, FrozenSet, Iterable, Optional

from ...domain.services import SupervisorResolver
from ...domain.value_objects import DepartmentId, SupervisorId

MANAGER_PREFIX: Final[str] = "manager-"
COORDINATOR_PREFIX: Final[str] = "coordinator-"


class PrefixSupervisorResolver(SupervisorResolver):
    def __init__(self, known_supervisors: Optional[Iterable[str]] = None) -> None:
        self._known: Optional[FrozenSet[str]] = (
            frozenset(known_supervisors) if known_supervisors is not None else None
        )

    def get_department_manager(self, department_id: DepartmentId) -> SupervisorId:
        return SupervisorId(f"{MANAGER_PREFIX}{department_id.value}")

    def get_project_coordinator(self, department_id: DepartmentId) -> SupervisorId:
        return SupervisorId(f"{COORDINATOR_PREFIX}{department_id.value}")

    def validate_supervisor(self, supervisor_id: SupervisorId) -> bool:
        if self._known is None:
            return True
        return supervisor_id.value in self._known
