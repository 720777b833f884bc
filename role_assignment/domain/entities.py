"""
CRC: domain/entities.py

Name
- Role Assignment Domain Model

Responsibilities
- Name the standard role types, work-role codes and resource types (legacy
  numeric codes preserved as enum values).
- Hold the role metadata table (display name, description, special handling).
- Describe one role to grant (RoleAssignment) and the commands persisted
  for it (CreateUserRoleCommand, WorkAssignmentCommand).

Collaborators
- domain.value_objects: identifiers
- application.role_catalog: builds RoleAssignment instances
- application.usecases.assign_standard_roles: builds commands

Constraints
- Pure domain: no I/O, no infrastructure imports.
- Everything here is immutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping

from .value_objects import AssignmentId, DepartmentId, RoleId, SupervisorId, UserId


class StandardRoleType(IntEnum):
    """R: Standard role types (values match the stored role type codes)."""

    DEPARTMENT_MANAGER = 6
    PROJECT_COORDINATOR = 7


class WorkAssignmentRoleCode(IntEnum):
    PROJECT_MANAGER = 101
    SPECIAL_ADMINISTRATOR = 202
    GENERAL_ADMINISTRATOR = 203


class ResourceType(IntEnum):
    USER_ACCOUNT = 25


@dataclass(frozen=True, slots=True)
class RoleTypeMetadata:
    display_name: str
    description: str
    requires_special_handling: bool = False


# R: Explicit lookup table, built once at import time.
ROLE_METADATA: Mapping[StandardRoleType, RoleTypeMetadata] = MappingProxyType(
    {
        StandardRoleType.DEPARTMENT_MANAGER: RoleTypeMetadata(
            display_name="Department Manager",
            description="Department Manager - oversees department operations",
        ),
        StandardRoleType.PROJECT_COORDINATOR: RoleTypeMetadata(
            display_name="Project Coordinator",
            description="Project Coordinator - manages project workflows",
            requires_special_handling=True,
        ),
    }
)


def display_name(role_type: StandardRoleType) -> str:
    metadata = ROLE_METADATA.get(role_type)
    return metadata.display_name if metadata else role_type.name


def describe(role_type: StandardRoleType) -> str:
    metadata = ROLE_METADATA.get(role_type)
    return metadata.description if metadata else role_type.name


def requires_special_handling(role_type: StandardRoleType) -> bool:
    metadata = ROLE_METADATA.get(role_type)
    return metadata.requires_special_handling if metadata else False


@dataclass(frozen=True, slots=True)
class RoleAssignment:
    """
    R: One role to grant: template for the create-commands.

    Produced fresh per invocation by the role catalog; never persisted.
    """

    role_type: StandardRoleType
    supervisor_id: SupervisorId
    work_role: WorkAssignmentRoleCode
    description: str


@dataclass(frozen=True, slots=True)
class CreateUserRoleCommand:
    role_id: RoleId
    assignment_id: AssignmentId
    user_id: UserId
    department_id: DepartmentId
    assigned_date: datetime
    role_type: StandardRoleType
    supervisor_id: SupervisorId


@dataclass(frozen=True, slots=True)
class WorkAssignmentCommand:
    supervisor_id: SupervisorId
    role_code: WorkAssignmentRoleCode
    user_id: UserId
    resource_type: ResourceType
    created_date: datetime
