"""
Repository implementations.
"""

from .in_memory import (
    InMemoryUnitOfWork,
    InMemoryUnitOfWorkFactory,
    InMemoryUserRoleRepository,
    InMemoryWorkAssignmentRepository,
)

__all__ = [
    "InMemoryUnitOfWork",
    "InMemoryUnitOfWorkFactory",
    "InMemoryUserRoleRepository",
    "InMemoryWorkAssignmentRepository",
]
