"""
Domain layer: identifiers, role model, commands and ports.
"""

from .cancellation import CancellationToken
from .entities import (
    ROLE_METADATA,
    CreateUserRoleCommand,
    ResourceType,
    RoleAssignment,
    RoleTypeMetadata,
    StandardRoleType,
    WorkAssignmentCommand,
    WorkAssignmentRoleCode,
    describe,
    display_name,
    requires_special_handling,
)
from .repositories import (
    UnitOfWork,
    UnitOfWorkFactory,
    UserRoleRepository,
    WorkAssignmentRepository,
)
from .services import RoleAssignmentCatalog, SupervisorResolver, TelemetryCollector
from .value_objects import AssignmentId, DepartmentId, RoleId, SupervisorId, UserId

__all__ = [
    "AssignmentId",
    "CancellationToken",
    "CreateUserRoleCommand",
    "DepartmentId",
    "ROLE_METADATA",
    "ResourceType",
    "RoleAssignment",
    "RoleAssignmentCatalog",
    "RoleId",
    "RoleTypeMetadata",
    "StandardRoleType",
    "SupervisorId",
    "SupervisorResolver",
    "TelemetryCollector",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "UserId",
    "UserRoleRepository",
    "WorkAssignmentCommand",
    "WorkAssignmentRepository",
    "WorkAssignmentRoleCode",
    "describe",
    "display_name",
    "requires_special_handling",
]
