"""
In-memory repositories (tests / local dev / demo).
"""

from .unit_of_work import InMemoryUnitOfWork, InMemoryUnitOfWorkFactory
from .user_role import InMemoryUserRoleRepository
from .work_assignment import InMemoryWorkAssignmentRepository

__all__ = [
    "InMemoryUnitOfWork",
    "InMemoryUnitOfWorkFactory",
    "InMemoryUserRoleRepository",
    "InMemoryWorkAssignmentRepository",
]
