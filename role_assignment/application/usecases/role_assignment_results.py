"""
===============================================================================
ROLE ASSIGNMENT RESULTS (Result / Failure Models)
===============================================================================

Business Goal:
    El workflow de asignación devuelve un resultado tipado en lugar de lanzar
    excepciones "hacia afuera": cada rol termina como éxito o como falla
    clasificada, y el caller decide la remediación con esa información.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    role_assignment_results models (module)

Responsibilities:
    - FailureReason: categorías cerradas de falla por rol.
    - RoleAssignmentSuccess / RoleAssignmentFailure: outcome de un rol.
    - WorkflowError: falla del workflow completo (cancelación, timeout,
      catálogo vacío, error inesperado fuera del loop por rol).
    - RoleAssignmentResult: agregado ordenado + status derivado.

Collaborators:
    - domain.entities.StandardRoleType
    - domain.value_objects.RoleId
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from ...domain.entities import StandardRoleType, display_name
from ...domain.value_objects import RoleId


class FailureReason(str, Enum):
    """
    Por qué falló un rol.

    Solo TRANSIENT_FAILURE es reintentable; el resto es terminal para el rol.
    """

    ALREADY_EXISTS = "ALREADY_EXISTS"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    REPOSITORY_ERROR = "REPOSITORY_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    TRANSIENT_FAILURE = "TRANSIENT_FAILURE"
    UNKNOWN = "UNKNOWN"

    @property
    def is_retryable(self) -> bool:
        return self is FailureReason.TRANSIENT_FAILURE


class WorkflowErrorCode(str, Enum):
    CANCELLED = "CANCELLED"
    TIMED_OUT = "TIMED_OUT"
    EMPTY_CATALOG = "EMPTY_CATALOG"
    UNEXPECTED = "UNEXPECTED"


class RoleAssignmentStatus(str, Enum):
    SUCCEEDED = "SUCCEEDED"
    PARTIAL = "PARTIAL"
    FAILED = "FAILED"
    EMPTY = "EMPTY"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class RoleAssignmentSuccess:
    role_id: RoleId
    role_type: StandardRoleType
    duration_seconds: float
    attempts: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role_id": str(self.role_id),
            "role_type": self.role_type.name,
            "duration_ms": round(self.duration_seconds * 1000, 2),
            "attempts": self.attempts,
        }


@dataclass(frozen=True)
class RoleAssignmentFailure:
    role_type: StandardRoleType
    error: str
    reason: FailureReason
    attempts: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role_type": self.role_type.name,
            "error": self.error,
            "reason": self.reason.value,
            "attempts": self.attempts,
        }


@dataclass(frozen=True)
class WorkflowError:
    """Error del workflow completo: code estable + mensaje humano."""

    code: WorkflowErrorCode
    message: str


@dataclass
class RoleAssignmentResult:
    """
    Resultado agregado de una invocación.

    Contrato:
      - successes y failures en orden de procesamiento.
      - Un role_type aparece a lo sumo en una de las dos listas.
      - error != None => el workflow no terminó normalmente (rollback hecho).
    """

    successes: List[RoleAssignmentSuccess] = field(default_factory=list)
    failures: List[RoleAssignmentFailure] = field(default_factory=list)
    error: WorkflowError | None = None

    @property
    def is_fully_successful(self) -> bool:
        return self.error is None and not self.failures and bool(self.successes)

    @property
    def is_partially_successful(self) -> bool:
        return bool(self.successes) and bool(self.failures)

    @property
    def is_complete_failure(self) -> bool:
        return not self.successes and (bool(self.failures) or self.error is not None)

    @property
    def status(self) -> RoleAssignmentStatus:
        if self.error is not None and self.error.code in (
            WorkflowErrorCode.CANCELLED,
            WorkflowErrorCode.TIMED_OUT,
        ):
            return RoleAssignmentStatus.CANCELLED
        if self.is_partially_successful:
            return RoleAssignmentStatus.PARTIAL
        if self.is_complete_failure:
            return RoleAssignmentStatus.FAILED
        if self.successes:
            return RoleAssignmentStatus.SUCCEEDED
        return RoleAssignmentStatus.EMPTY

    def failure_messages(self) -> List[str]:
        messages = [f.error for f in self.failures]
        if self.error is not None:
            messages.append(self.error.message)
        return messages

    def role_types(self) -> List[StandardRoleType]:
        return [s.role_type for s in self.successes] + [
            f.role_type for f in self.failures
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "successes": [s.to_dict() for s in self.successes],
            "failures": [f.to_dict() for f in self.failures],
            "error": (
                {"code": self.error.code.value, "message": self.error.message}
                if self.error
                else None
            ),
        }

    def summary(self) -> str:
        assigned = ", ".join(display_name(s.role_type) for s in self.successes)
        return (
            f"{self.status.value}: {len(self.successes)} assigned"
            f"{f' ({assigned})' if assigned else ''}, {len(self.failures)} failed"
        )
