"""
Use cases (application layer).
"""

from .assign_standard_roles import AssignStandardRolesUseCase
from .role_assignment_results import (
    FailureReason,
    RoleAssignmentFailure,
    RoleAssignmentResult,
    RoleAssignmentStatus,
    RoleAssignmentSuccess,
    WorkflowError,
    WorkflowErrorCode,
)

__all__ = [
    "AssignStandardRolesUseCase",
    "FailureReason",
    "RoleAssignmentFailure",
    "RoleAssignmentResult",
    "RoleAssignmentStatus",
    "RoleAssignmentSuccess",
    "WorkflowError",
    "WorkflowErrorCode",
]
