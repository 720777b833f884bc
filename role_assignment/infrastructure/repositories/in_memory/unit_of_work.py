"""
============================================================
TARJETA CRC: infrastructure/repositories/in_memory/unit_of_work.py
============================================================
Class: InMemoryUnitOfWork, InMemoryUnitOfWorkFactory

Responsibilities:
  - Registrar en un journal las escrituras hechas por la invocación actual
    (solo las suyas, no las de otros callers concurrentes).
  - savepoint()/rollback_to(): deshacer las escrituras de un intento fallido.
  - rollback(): descartar todas las escrituras del journal.
  - La factory crea una unidad nueva por invocación y lleva conteos.

Collaborators:
  - InMemoryUserRoleRepository / InMemoryWorkAssignmentRepository
    (llaman journal_write() y exponen discard())

Constraints:
  - El journal activo vive en un ContextVar: cada thread/invocación ve el
    suyo.
  - begin() con una transacción abierta es error.
  - commit()/rollback()/rollback_to() sin begin() es error.
============================================================
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from threading import Lock
from typing import Any, List, Optional, Protocol, Tuple

from ....crosscutting.exceptions import InvalidStateError


class SupportsDiscard(Protocol):
    def discard(self, record: Any) -> None:
        ...


_Journal = List[Tuple[SupportsDiscard, Any]]

_active_journal: ContextVar[Optional[_Journal]] = ContextVar(
    "in_memory_journal", default=None
)


def journal_write(store: SupportsDiscard, record: Any) -> None:
    """R: Anota una escritura en el journal de la transacción actual (si hay)."""
    journal = _active_journal.get()
    if journal is not None:
        journal.append((store, record))


class InMemoryUnitOfWork:
    """Transacción de una sola invocación sobre los repositorios in-memory."""

    def __init__(self) -> None:
        self._journal: Optional[_Journal] = None
        self._token: Optional[Token] = None
        self.committed = False
        self.rolled_back = False

    @property
    def in_transaction(self) -> bool:
        return self._journal is not None

    def begin(self) -> None:
        if self._journal is not None:
            raise InvalidStateError("Transaction already in progress")
        self._journal = []
        self._token = _active_journal.set(self._journal)

    def savepoint(self) -> int:
        return len(self._require_transaction())

    def rollback_to(self, savepoint: int) -> None:
        journal = self._require_transaction()
        while len(journal) > savepoint:
            store, record = journal.pop()
            store.discard(record)

    def commit(self) -> None:
        self._require_transaction()
        self._close()
        self.committed = True

    def rollback(self) -> None:
        self.rollback_to(0)
        self._close()
        self.rolled_back = True

    def _close(self) -> None:
        if self._token is not None:
            _active_journal.reset(self._token)
        self._journal = None
        self._token = None

    def _require_transaction(self) -> _Journal:
        if self._journal is None:
            raise InvalidStateError("No transaction in progress")
        return self._journal


class InMemoryUnitOfWorkFactory:
    """
    Crea un InMemoryUnitOfWork por invocación.

    Guarda las unidades creadas para inspección (tests / demo).
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self.created: List[InMemoryUnitOfWork] = []

    def __call__(self) -> InMemoryUnitOfWork:
        unit = InMemoryUnitOfWork()
        with self._lock:
            self.created.append(unit)
        return unit

    @property
    def commits(self) -> int:
        with self._lock:
            return sum(1 for unit in self.created if unit.committed)

    @property
    def rollbacks(self) -> int:
        with self._lock:
            return sum(1 for unit in self.created if unit.rolled_back)
