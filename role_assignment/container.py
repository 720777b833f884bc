"""
===============================================================================
TARJETA CRC: role_assignment/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, resolver, telemetría) siguiendo DIP.
  - Exponer factories para el script demo y para tests de integración.
  - Centralizar decisiones runtime basadas en Settings (config).

Colaboradores:
  - role_assignment.crosscutting.config.get_settings
  - role_assignment.domain.* (puertos)
  - role_assignment.infrastructure.* (implementaciones)
  - role_assignment.application.* (catálogo + use case)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Los colaboradores se pueden pasar explícitamente; si no, se usan los
    in-memory.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from .application.configuration import RoleAssignmentConfiguration
from .application.null_objects import NullTelemetryCollector
from .application.role_catalog import StandardRoleCatalog
from .application.usecases import AssignStandardRolesUseCase
from .crosscutting.config import Settings, get_settings
from .domain.services import SupervisorResolver, TelemetryCollector
from .infrastructure.repositories import (
    InMemoryUnitOfWorkFactory,
    InMemoryUserRoleRepository,
    InMemoryWorkAssignmentRepository,
)
from .infrastructure.services import (
    PrefixSupervisorResolver,
    PrometheusTelemetryCollector,
)


@dataclass
class RoleAssignmentComponents:
    """Todo lo que se compuso, para que el caller pueda inspeccionar los stores."""

    use_case: AssignStandardRolesUseCase
    user_roles: InMemoryUserRoleRepository
    work_assignments: InMemoryWorkAssignmentRepository
    unit_of_work: InMemoryUnitOfWorkFactory
    supervisor_resolver: SupervisorResolver
    configuration: RoleAssignmentConfiguration


def get_telemetry(settings: Settings) -> TelemetryCollector:
    if settings.metrics_enabled:
        return PrometheusTelemetryCollector()
    return NullTelemetryCollector()


def build_in_memory_components(
    settings: Settings | None = None,
    *,
    supervisor_resolver: SupervisorResolver | None = None,
) -> RoleAssignmentComponents:
    settings = settings or get_settings()
    configuration = RoleAssignmentConfiguration.from_settings(settings)
    resolver = supervisor_resolver or PrefixSupervisorResolver()

    user_roles = InMemoryUserRoleRepository()
    work_assignments = InMemoryWorkAssignmentRepository()
    unit_of_work = InMemoryUnitOfWorkFactory()

    use_case = AssignStandardRolesUseCase(
        catalog=StandardRoleCatalog(resolver, configuration.special_departments),
        user_role_repository=user_roles,
        work_assignment_repository=work_assignments,
        supervisor_resolver=resolver,
        configuration=configuration,
        unit_of_work_factory=unit_of_work,
        telemetry=get_telemetry(settings),
    )
    return RoleAssignmentComponents(
        use_case=use_case,
        user_roles=user_roles,
        work_assignments=work_assignments,
        unit_of_work=unit_of_work,
        supervisor_resolver=resolver,
        configuration=configuration,
    )
