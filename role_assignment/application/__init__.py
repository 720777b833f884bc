"""
Application layer: role catalog, retry policy and use cases.
"""

# R: usecases first; retry_policy imports its result models.
from .usecases import AssignStandardRolesUseCase, FailureReason, RoleAssignmentResult
from .configuration import RoleAssignmentConfiguration
from .null_objects import NullTelemetryCollector, NullUnitOfWork
from .retry_policy import classify_failure, create_retrying, is_transient_error
from .role_catalog import StandardRoleCatalog

__all__ = [
    "AssignStandardRolesUseCase",
    "FailureReason",
    "NullTelemetryCollector",
    "NullUnitOfWork",
    "RoleAssignmentConfiguration",
    "RoleAssignmentResult",
    "StandardRoleCatalog",
    "classify_failure",
    "create_retrying",
    "is_transient_error",
]
