"""
CRC: domain/repositories.py

Name
- Role Assignment Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts the workflow depends on (ports).
- Keep the application independent from infrastructure (SQL, in-memory, etc.).
- Enable dependency inversion and straightforward unit testing (fake repositories).

Collaborators
- domain.entities: CreateUserRoleCommand, WorkAssignmentCommand, StandardRoleType
- infrastructure.repositories: in-memory implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports.
- Implementations raise RoleAssignmentError subclasses (or builtins such as
  TimeoutError) so the workflow can classify failures.
"""

from typing import AbstractSet, Callable, Protocol

from .entities import CreateUserRoleCommand, StandardRoleType, WorkAssignmentCommand
from .value_objects import UserId


class UserRoleRepository(Protocol):
    """R: Interface for user-role persistence."""

    def create_user_role(self, command: CreateUserRoleCommand) -> None:
        """R: Persist one user-role record."""
        ...

    def get_existing_role_types(self, user_id: UserId) -> AbstractSet[StandardRoleType]:
        """R: Role types the user already holds (single batched lookup)."""
        ...


class WorkAssignmentRepository(Protocol):
    """R: Interface for work-assignment persistence."""

    def create_work_assignment(self, command: WorkAssignmentCommand) -> None:
        ...


class UnitOfWork(Protocol):
    """
    R: Transactional wrapper around one workflow invocation.

    A fresh instance is created per invocation (see UnitOfWorkFactory). The
    workflow calls begin() once, then exactly one of commit()/rollback().
    savepoint()/rollback_to() undo the writes of a single failed attempt.
    """

    def begin(self) -> None:
        ...

    def savepoint(self) -> int:
        ...

    def rollback_to(self, savepoint: int) -> None:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...


UnitOfWorkFactory = Callable[[], UnitOfWork]
