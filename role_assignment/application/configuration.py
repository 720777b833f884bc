"""
Name: Role Assignment Configuration

Responsibilities:
  - Hold the options the workflow recognizes, validated at construction
  - Bridge from crosscutting Settings (env) to the application layer

Collaborators:
  - crosscutting.config.Settings
  - usecases.assign_standard_roles.AssignStandardRolesUseCase
  - container.py

Notes:
  - Invalid values fail fast (ValueError) before any workflow runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, FrozenSet, Iterable

from ..domain.value_objects import DepartmentId

if TYPE_CHECKING:
    from ..crosscutting.config import Settings

DEFAULT_SPECIAL_DEPARTMENTS: FrozenSet[DepartmentId] = frozenset(
    {DepartmentId("SPECIAL-DEPT")}
)


@dataclass(frozen=True)
class RoleAssignmentConfiguration:
    special_departments: FrozenSet[DepartmentId] = field(
        default=DEFAULT_SPECIAL_DEPARTMENTS
    )
    validate_existing_roles: bool = True
    allow_partial_failures: bool = False
    validate_supervisors: bool = True
    max_retry_attempts: int = 2
    retry_delay_seconds: float = 0.5
    transaction_timeout_seconds: float = 300.0
    verbose_logging: bool = False
    empty_catalog_is_success: bool = False

    def __post_init__(self) -> None:
        if self.max_retry_attempts < 0:
            raise ValueError("max_retry_attempts must be >= 0")
        if self.retry_delay_seconds < 0:
            raise ValueError("retry_delay_seconds must be >= 0")
        if self.transaction_timeout_seconds <= 0:
            raise ValueError("transaction_timeout_seconds must be greater than 0")
        # R: Accept any iterable of DepartmentId; store it frozen.
        object.__setattr__(
            self, "special_departments", frozenset(self.special_departments)
        )

    @staticmethod
    def departments(codes: Iterable[str]) -> FrozenSet[DepartmentId]:
        return frozenset(DepartmentId(code) for code in codes)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RoleAssignmentConfiguration":
        return cls(
            special_departments=cls.departments(settings.get_special_departments_list()),
            validate_existing_roles=settings.validate_existing_roles,
            allow_partial_failures=settings.allow_partial_failures,
            validate_supervisors=settings.validate_supervisors,
            max_retry_attempts=settings.max_retry_attempts,
            retry_delay_seconds=settings.retry_delay_seconds,
            transaction_timeout_seconds=settings.transaction_timeout_seconds,
            verbose_logging=settings.verbose_logging,
            empty_catalog_is_success=settings.empty_catalog_is_success,
        )
