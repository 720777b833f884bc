"""
===============================================================================
APPLICATION: Standard Role Catalog
===============================================================================

Qué hace:
    Dado un departamento, arma la lista fija de roles estándar a otorgar:
      1. Department Manager  -> supervisor = manager del depto,
                                work role = PROJECT_MANAGER
      2. Project Coordinator -> supervisor = coordinador del depto,
                                work role = SPECIAL_ADMINISTRATOR si el depto
                                es "especial", si no GENERAL_ADMINISTRATOR

Reglas:
    - Siempre dos asignaciones, siempre en ese orden.
    - La pertenencia al set de departamentos especiales es case-insensitive
      (DepartmentId compara por clave normalizada).
    - Sin side effects aparte de las llamadas al SupervisorResolver.
===============================================================================
"""

from __future__ import annotations

from typing import AbstractSet, List

from ..domain.entities import (
    RoleAssignment,
    StandardRoleType,
    WorkAssignmentRoleCode,
    describe,
    requires_special_handling,
)
from ..domain.services import SupervisorResolver
from ..domain.value_objects import DepartmentId


class StandardRoleCatalog:
    """Implementación de RoleAssignmentCatalog para los roles estándar."""

    def __init__(
        self,
        supervisor_resolver: SupervisorResolver,
        special_departments: AbstractSet[DepartmentId],
    ) -> None:
        self._supervisors = supervisor_resolver
        self._special_departments = frozenset(special_departments)

    def is_special_department(self, department_id: DepartmentId) -> bool:
        return department_id in self._special_departments

    def work_role_for(
        self, role_type: StandardRoleType, department_id: DepartmentId
    ) -> WorkAssignmentRoleCode:
        # R: Solo los roles marcados en ROLE_METADATA dependen del depto.
        if not requires_special_handling(role_type):
            return WorkAssignmentRoleCode.PROJECT_MANAGER
        if self.is_special_department(department_id):
            return WorkAssignmentRoleCode.SPECIAL_ADMINISTRATOR
        return WorkAssignmentRoleCode.GENERAL_ADMINISTRATOR

    def build_standard_assignments(
        self, department_id: DepartmentId
    ) -> List[RoleAssignment]:
        manager = self._supervisors.get_department_manager(department_id)
        coordinator = self._supervisors.get_project_coordinator(department_id)

        return [
            RoleAssignment(
                role_type=StandardRoleType.DEPARTMENT_MANAGER,
                supervisor_id=manager,
                work_role=self.work_role_for(
                    StandardRoleType.DEPARTMENT_MANAGER, department_id
                ),
                description=describe(StandardRoleType.DEPARTMENT_MANAGER),
            ),
            RoleAssignment(
                role_type=StandardRoleType.PROJECT_COORDINATOR,
                supervisor_id=coordinator,
                work_role=self.work_role_for(
                    StandardRoleType.PROJECT_COORDINATOR, department_id
                ),
                description=describe(StandardRoleType.PROJECT_COORDINATOR),
            ),
        ]
