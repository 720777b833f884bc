"""
============================================================
TARJETA CRC: infrastructure/repositories/in_memory/user_role.py
============================================================
Class: InMemoryUserRoleRepository

Responsibilities:
  - Almacenar user-roles en memoria (tests / local dev / demo).
  - Responder qué role types ya tiene un usuario.
  - Anotar cada escritura en el journal de la transacción (journal_write)
    y exponer discard() para que InMemoryUnitOfWork la deshaga.

Collaborators:
  - domain.repositories.UserRoleRepository (contrato)
  - domain.entities.CreateUserRoleCommand

Constraints / Notes:
  - Thread-safe: Lock protege la lista interna.
  - Repo puro: NO decide si el rol corresponde, sólo persiste/retorna datos.
  - Copias defensivas en lecturas.
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import FrozenSet, Iterable, List

from ....domain.entities import CreateUserRoleCommand, StandardRoleType
from ....domain.repositories import UserRoleRepository
from ....domain.value_objects import UserId
from .unit_of_work import journal_write


class InMemoryUserRoleRepository(UserRoleRepository):
    """
    Repositorio in-memory para user-roles.

    Modelo mental:
    - _records actúa como tabla append-only de CreateUserRoleCommand.
    - _seeded: roles "preexistentes" (cargados por fuera del workflow).
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._records: List[CreateUserRoleCommand] = []
        self._seeded: dict[UserId, set[StandardRoleType]] = {}

    def seed_roles(self, user_id: UserId, role_types: Iterable[StandardRoleType]) -> None:
        """Carga roles que el usuario ya tenía (fixtures / demo)."""
        with self._lock:
            self._seeded.setdefault(user_id, set()).update(role_types)

    # =========================================================
    # API del repositorio
    # =========================================================
    def create_user_role(self, command: CreateUserRoleCommand) -> None:
        with self._lock:
            self._records.append(command)
        journal_write(self, command)

    def get_existing_role_types(self, user_id: UserId) -> FrozenSet[StandardRoleType]:
        with self._lock:
            held = set(self._seeded.get(user_id, set()))
            held.update(r.role_type for r in self._records if r.user_id == user_id)
            return frozenset(held)

    def list_user_roles(self, user_id: UserId | None = None) -> List[CreateUserRoleCommand]:
        with self._lock:
            if user_id is None:
                return list(self._records)
            return [r for r in self._records if r.user_id == user_id]

    # =========================================================
    # Soporte transaccional (journal de InMemoryUnitOfWork)
    # =========================================================
    def discard(self, record: CreateUserRoleCommand) -> None:
        with self._lock:
            self._records = [r for r in self._records if r is not record]
