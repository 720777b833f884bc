"""role_assignment.application.retry_policy

Name: Failure Classification + Bounded Linear Retry

Qué es
------
Política de **resiliencia** para un intento de asignación de rol:
  - Clasificación de errores -> FailureReason (tabla fija, en orden)
  - Solo TRANSIENT_FAILURE (timeout / cancelación de la llamada subordinada)
    se reintenta; el resto es fail-fast
  - `tenacity.Retrying` con backoff **lineal**: antes del reintento k se
    espera `retry_delay * k` (no exponencial)

CRC (Component Card)
--------------------
Component: retry policy
Responsibilities:
  - Decidir qué errores son reintentables
  - Construir el Retrying estándar (stop, wait, retry, sleep, before_sleep)
Collaborators:
  - tenacity (motor de retry)
  - crosscutting.exceptions (tipos que levantan repos/resolvers)
  - usecases.assign_standard_roles (consumidor)
Constraints:
  - N reintentos => N+1 intentos totales
  - La cancelación del workflow nunca se reintenta
"""

from __future__ import annotations

from concurrent.futures import CancelledError as SubordinateCancelledError
from typing import Callable

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_incrementing,
)

from ..crosscutting.exceptions import (
    InvalidStateError,
    OperationCancelledError,
    RepositoryError,
    RoleAlreadyExistsError,
    UnauthorizedError,
)
from .usecases.role_assignment_results import FailureReason

# R: Orden importa: InvalidSupervisorError es InvalidStateError; TimeoutError
#    y PermissionError son OSError.
_CLASSIFICATION: tuple[tuple[tuple[type[BaseException], ...], FailureReason], ...] = (
    ((RoleAlreadyExistsError,), FailureReason.ALREADY_EXISTS),
    ((InvalidStateError, ValueError, TypeError), FailureReason.VALIDATION_FAILED),
    ((UnauthorizedError, PermissionError), FailureReason.UNAUTHORIZED),
    ((TimeoutError, SubordinateCancelledError), FailureReason.TRANSIENT_FAILURE),
    ((RepositoryError,), FailureReason.REPOSITORY_ERROR),
)


def classify_failure(exception: BaseException) -> FailureReason:
    """R: Mapea una excepción de un intento a su FailureReason."""
    for exception_types, reason in _CLASSIFICATION:
        if isinstance(exception, exception_types):
            return reason
    return FailureReason.UNKNOWN


def is_transient_error(exception: BaseException) -> bool:
    """R: True si el error amerita reintento (y no es cancelación del workflow)."""
    if isinstance(exception, OperationCancelledError):
        return False
    return classify_failure(exception).is_retryable


def create_retrying(
    *,
    max_retry_attempts: int,
    retry_delay_seconds: float,
    sleep: Callable[[float], None],
    before_sleep: Callable[[RetryCallState], None] | None = None,
    should_retry: Callable[[BaseException], bool] = is_transient_error,
) -> Retrying:
    """R: Crea un `Retrying` con backoff lineal.

    Config:
      - stop: `stop_after_attempt(max_retry_attempts + 1)`
      - wait: `wait_incrementing(start=d, increment=d)` => d, 2d, 3d...
      - retry: solo si `should_retry(exception)`
      - reraise: True (propaga la última excepción, no RetryError)
    """
    if max_retry_attempts < 0:
        raise ValueError("max_retry_attempts must be >= 0")
    if retry_delay_seconds < 0:
        raise ValueError("retry_delay_seconds must be >= 0")

    return Retrying(
        stop=stop_after_attempt(max_retry_attempts + 1),
        wait=wait_incrementing(start=retry_delay_seconds, increment=retry_delay_seconds),
        retry=retry_if_exception(should_retry),
        sleep=sleep,
        before_sleep=before_sleep,
        reraise=True,
    )
