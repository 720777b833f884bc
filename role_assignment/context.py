"""
===============================================================================
TARJETA CRC: role_assignment/context.py (Contexto por operación)
===============================================================================

Responsabilidades:
  - Mantener contexto "operation-scoped" usando ContextVars.
  - Permitir correlación de logs sin pasar parámetros por todo el stack.
  - Proveer helpers mínimos: set_operation_context(), get_context_dict(),
    clear_context().

Colaboradores:
  - application.usecases.assign_standard_roles: setea el contexto al iniciar
    cada workflow y lo limpia al terminar.
  - crosscutting.logger: enriquece logs leyendo get_context_dict().

Restricciones:
  - Solo strings (serialización segura).
  - Defaults vacíos ("") para evitar None y simplificar JSON.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from typing import Final

operation_id_var: ContextVar[str] = ContextVar("operation_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")
department_id_var: ContextVar[str] = ContextVar("department_id", default="")

_CTX_OPERATION_ID: Final[str] = "operation_id"
_CTX_USER_ID: Final[str] = "user_id"
_CTX_DEPARTMENT_ID: Final[str] = "department_id"


def set_operation_context(
    *, operation_id: str = "", user_id: str = "", department_id: str = ""
) -> None:
    """
    Setea el contexto de la operación en curso.

    Regla:
      - Strings vacíos significan “no disponible”.
    """
    operation_id_var.set(operation_id or "")
    user_id_var.set(user_id or "")
    department_id_var.set(department_id or "")


def get_context_dict() -> dict[str, str]:
    """Devuelve el contexto actual como dict, omitiendo claves vacías."""
    ctx: dict[str, str] = {}

    if val := operation_id_var.get():
        ctx[_CTX_OPERATION_ID] = val
    if val := user_id_var.get():
        ctx[_CTX_USER_ID] = val
    if val := department_id_var.get():
        ctx[_CTX_DEPARTMENT_ID] = val

    return ctx


def clear_context() -> None:
    """Limpia el contexto al final del workflow."""
    operation_id_var.set("")
    user_id_var.set("")
    department_id_var.set("")
