# role_assignment/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del servicio de asignación de roles
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message “humana” (sin filtrar secretos)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  RoleAssignmentError + subclases

Responsabilidades:
  - Estandarizar las condiciones que levantan repositorios / resolvers
  - Generar error_id para rastreo
  - Dar al clasificador de fallas (application.retry_policy) tipos concretos

Colaboradores:
  - application/retry_policy.py (exception -> FailureReason)
  - application/usecases/assign_standard_roles.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from uuid import uuid4

if TYPE_CHECKING:
    from ..application.usecases.role_assignment_results import RoleAssignmentResult


@dataclass(frozen=True)
class ErrorResponse:
    """Estructura mínima para reportar errores de forma consistente."""

    error_code: str
    message: str
    error_id: str

    def to_dict(self) -> dict:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "error_id": self.error_id,
        }


class RoleAssignmentError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      RoleAssignmentError

    Responsabilidades:
      - Base para errores internos del flujo de asignación
      - Proveer error_code + error_id + message

    Colaboradores:
      - application/retry_policy.classify_failure
    ----------------------------------------------------------------------------
    """

    error_code: str = "ROLE_ASSIGNMENT_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error_code=self.error_code, message=self.message, error_id=self.error_id
        )


class InvalidStateError(RoleAssignmentError):
    """Estado inválido del negocio (no reintentable)."""

    error_code: str = "INVALID_STATE"


class InvalidSupervisorError(InvalidStateError):
    """El supervisor resuelto para un rol no existe."""

    error_code: str = "INVALID_SUPERVISOR"


class UnauthorizedError(RoleAssignmentError):
    """El actor/servicio no tiene permisos para persistir la asignación."""

    error_code: str = "UNAUTHORIZED"


class RepositoryError(RoleAssignmentError):
    """Errores de persistencia (conexión, constraint, driver)."""

    error_code: str = "REPOSITORY_ERROR"


class RoleAlreadyExistsError(RoleAssignmentError):
    """El repositorio detectó el rol como ya existente (p.ej. unique constraint)."""

    error_code: str = "ALREADY_EXISTS"


class OperationCancelledError(RoleAssignmentError):
    """
    Cancelación del workflow completo (manual o por deadline).

    No se clasifica como falla de rol: corta el flujo y fuerza rollback.
    """

    error_code: str = "CANCELLED"


class OperationTimedOutError(OperationCancelledError):
    """El deadline del workflow (transaction timeout) expiró."""

    error_code: str = "TIMED_OUT"


class RoleAssignmentFailedError(RoleAssignmentError):
    """Levantada por el wrapper bloqueante cuando el resultado no es un éxito total."""

    error_code: str = "ROLE_ASSIGNMENT_FAILED"

    def __init__(self, result: "RoleAssignmentResult", messages: list[str]):
        self.result = result
        self.messages = list(messages)
        joined = ", ".join(self.messages) if self.messages else "no roles assigned"
        super().__init__(f"Role assignment failed: {joined}")

    def details(self) -> dict[str, Any]:
        return {**self.to_response().to_dict(), "failures": self.messages}
