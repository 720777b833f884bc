"""
============================================================
TARJETA CRC: infrastructure/repositories/in_memory/work_assignment.py
============================================================
Class: InMemoryWorkAssignmentRepository

Responsibilities:
  - Almacenar work assignments en memoria (tests / local dev / demo).
  - Anotar escrituras en el journal y exponer discard() para rollback vía
    InMemoryUnitOfWork.

Collaborators:
  - domain.repositories.WorkAssignmentRepository (contrato)
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import List

from ....domain.entities import WorkAssignmentCommand
from ....domain.repositories import WorkAssignmentRepository
from ....domain.value_objects import UserId
from .unit_of_work import journal_write


class InMemoryWorkAssignmentRepository(WorkAssignmentRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._records: List[WorkAssignmentCommand] = []

    def create_work_assignment(self, command: WorkAssignmentCommand) -> None:
        with self._lock:
            self._records.append(command)
        journal_write(self, command)

    def list_work_assignments(
        self, user_id: UserId | None = None
    ) -> List[WorkAssignmentCommand]:
        with self._lock:
            if user_id is None:
                return list(self._records)
            return [r for r in self._records if r.user_id == user_id]

    def discard(self, record: WorkAssignmentCommand) -> None:
        with self._lock:
            self._records = [r for r in self._records if r is not record]
