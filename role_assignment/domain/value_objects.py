# =============================================================================
# FILE: domain/value_objects.py
# =============================================================================
"""
===============================================================================
DOMAIN: Value Objects (Identificadores inmutables)
===============================================================================

Qué es:
    Wrappers inmutables sobre strings/UUIDs que evitan mezclar un user id
    con un department id en las firmas del workflow.

Contenido:
    - UserId, SupervisorId: texto no vacío
    - DepartmentId: texto no vacío, igualdad/hash case-insensitive
    - RoleId, AssignmentId: UUID generado por intento de asignación

Principios:
    - Inmutabilidad (frozen dataclasses)
    - Validación en constructor (falla antes de correr el workflow)
    - Sin conversiones implícitas: `.value` es el accessor explícito
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID, uuid4


def _require_text(value: object, label: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{label} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValueError(f"{label} cannot be null or empty")
    return value


@dataclass(frozen=True, slots=True)
class UserId:
    value: str

    def __post_init__(self) -> None:
        _require_text(self.value, "User ID")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class SupervisorId:
    value: str

    def __post_init__(self) -> None:
        _require_text(self.value, "Supervisor ID")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class DepartmentId:
    """
    Identificador de departamento.

    La comparación se hace sobre `key` (casefold del valor); `value` conserva
    el texto original para logs y comandos. "IT-DEPT" == "it-dept".
    """

    value: str = field(compare=False)
    key: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        _require_text(self.value, "Department ID")
        object.__setattr__(self, "key", self.value.casefold())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class RoleId:
    value: UUID

    @classmethod
    def new(cls) -> "RoleId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class AssignmentId:
    value: UUID

    @classmethod
    def new(cls) -> "AssignmentId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.value)
