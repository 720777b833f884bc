"""
===============================================================================
USE CASE: Assign Standard Roles
===============================================================================

Otorga a un usuario los roles estándar de su departamento (Department Manager
y Project Coordinator), cada uno con su work assignment.

Pasos:
  1. Armar la lista de roles con el catálogo.
  2. (opcional) Traer en una sola llamada los roles que el usuario ya tiene.
  3. Por cada rol, en orden:
       a. Ya lo tiene -> falla ALREADY_EXISTS (sin consumir reintentos).
       b. Si no, intento con retry acotado (solo fallas transitorias).
       c. Acumular éxito/falla.
       d. Sin partial failures -> cortar en la primera falla.
  4. Commit si se cumple la política, si no rollback (unit of work nuevo por
     invocación: callers concurrentes no comparten estado).
  5. Devolver el RoleAssignmentResult agregado.

Reglas:
  - Las fallas esperadas del negocio vuelven como datos, no como excepciones.
  - Cancelación/deadline: rollback y resultado CANCELLED (sin éxitos parciales).
  - Procesamiento estrictamente secuencial dentro de una invocación.
  - Un intento que falla después de escribir deshace sus propias escrituras
    (savepoint) antes del reintento.
===============================================================================
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from functools import partial
from typing import AbstractSet, Callable, List, Tuple
from uuid import uuid4

from tenacity import RetryCallState

from ...context import clear_context, set_operation_context
from ...crosscutting.exceptions import (
    InvalidSupervisorError,
    OperationCancelledError,
    OperationTimedOutError,
    RoleAssignmentFailedError,
)
from ...crosscutting.logger import logger
from ...crosscutting.timing import Timer
from ...domain.cancellation import CancellationToken
from ...domain.entities import (
    CreateUserRoleCommand,
    ResourceType,
    RoleAssignment,
    StandardRoleType,
    WorkAssignmentCommand,
    display_name,
)
from ...domain.repositories import (
    UnitOfWork,
    UnitOfWorkFactory,
    UserRoleRepository,
    WorkAssignmentRepository,
)
from ...domain.services import (
    RoleAssignmentCatalog,
    SupervisorResolver,
    TelemetryCollector,
)
from ...domain.value_objects import AssignmentId, DepartmentId, RoleId, UserId
from ..configuration import RoleAssignmentConfiguration
from ..null_objects import NullTelemetryCollector, NullUnitOfWork
from ..retry_policy import classify_failure, create_retrying, is_transient_error
from .role_assignment_results import (
    FailureReason,
    RoleAssignmentFailure,
    RoleAssignmentResult,
    RoleAssignmentSuccess,
    WorkflowError,
    WorkflowErrorCode,
)

OUTCOME_SUCCESS = "success"


class AssignStandardRolesUseCase:
    """Orquesta la asignación de roles estándar con retry y commit/rollback."""

    def __init__(
        self,
        *,
        catalog: RoleAssignmentCatalog,
        user_role_repository: UserRoleRepository,
        work_assignment_repository: WorkAssignmentRepository,
        supervisor_resolver: SupervisorResolver,
        configuration: RoleAssignmentConfiguration | None = None,
        unit_of_work_factory: UnitOfWorkFactory | None = None,
        telemetry: TelemetryCollector | None = None,
        log: logging.Logger | None = None,
        sleep: Callable[[float], None] | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._catalog = catalog
        self._user_roles = user_role_repository
        self._work_assignments = work_assignment_repository
        self._supervisors = supervisor_resolver
        self._config = configuration or RoleAssignmentConfiguration()
        self._unit_of_work_factory: UnitOfWorkFactory = (
            unit_of_work_factory or NullUnitOfWork
        )
        self._telemetry: TelemetryCollector = telemetry or NullTelemetryCollector()
        self._log = log or logger
        self._sleep = sleep
        self._clock = clock

    # =========================================================
    # API pública
    # =========================================================
    def execute(
        self,
        user_id: UserId,
        department_id: DepartmentId,
        assigned_date: datetime,
        *,
        cancellation: CancellationToken | None = None,
    ) -> RoleAssignmentResult:
        operation_id = str(uuid4())
        set_operation_context(
            operation_id=operation_id,
            user_id=user_id.value,
            department_id=department_id.value,
        )
        token = (cancellation or CancellationToken.none()).linked(
            self._config.transaction_timeout_seconds
        )
        failures: List[RoleAssignmentFailure] = []
        unit_of_work: UnitOfWork | None = None

        self._log.info(
            "Role assignment starting",
            extra={"assigned_date": assigned_date.isoformat()},
        )
        try:
            token.raise_if_cancelled()
            assignments = list(self._catalog.build_standard_assignments(department_id))
            if not assignments:
                return self._empty_catalog_result(department_id)

            unit_of_work = self._unit_of_work_factory()
            unit_of_work.begin()

            existing = self._load_existing_role_types(user_id, token)
            successes: List[RoleAssignmentSuccess] = []
            for assignment in assignments:
                token.raise_if_cancelled()
                if assignment.role_type in existing:
                    failures.append(self._already_exists(assignment))
                else:
                    outcome = self._assign_with_retry(
                        user_id,
                        department_id,
                        assigned_date,
                        assignment,
                        token,
                        unit_of_work,
                    )
                    if isinstance(outcome, RoleAssignmentSuccess):
                        successes.append(outcome)
                    else:
                        failures.append(outcome)

                if failures and not self._config.allow_partial_failures:
                    break

            result = RoleAssignmentResult(successes=successes, failures=failures)
            if self._should_commit(result):
                unit_of_work.commit()
                self._log.info(
                    "Role assignment committed",
                    extra={
                        "success_count": len(result.successes),
                        "failure_count": len(result.failures),
                    },
                )
            else:
                unit_of_work.rollback()
                self._log.warning(
                    "Role assignment rolled back",
                    extra={
                        "success_count": len(result.successes),
                        "failure_count": len(result.failures),
                    },
                )
            unit_of_work = None

            self._log.info(
                "Role assignment completed",
                extra={"status": result.status.value, "summary": result.summary()},
            )
            return result

        except OperationCancelledError as exc:
            if unit_of_work is not None:
                self._rollback_after_error(unit_of_work)
            code = (
                WorkflowErrorCode.TIMED_OUT
                if isinstance(exc, OperationTimedOutError)
                else WorkflowErrorCode.CANCELLED
            )
            self._log.warning(
                "Role assignment cancelled",
                extra={"error_code": code.value, "failure_count": len(failures)},
            )
            return RoleAssignmentResult(
                failures=failures, error=WorkflowError(code=code, message=exc.message)
            )

        except Exception as exc:
            self._log.exception("Role assignment aborted")
            if unit_of_work is not None:
                self._rollback_after_error(unit_of_work)
            return RoleAssignmentResult(
                failures=failures,
                error=WorkflowError(
                    code=WorkflowErrorCode.UNEXPECTED,
                    message=f"Role assignment failed: {exc}",
                ),
            )

        finally:
            clear_context()

    def assign_or_raise(
        self,
        user_id: UserId,
        department_id: DepartmentId,
        assigned_date: datetime,
        *,
        cancellation: CancellationToken | None = None,
    ) -> RoleAssignmentResult:
        """
        Variante bloqueante que exige éxito total.

        Raises:
            RoleAssignmentFailedError: con todos los mensajes de falla.
        """
        result = self.execute(
            user_id, department_id, assigned_date, cancellation=cancellation
        )
        if result.failures or result.error is not None:
            raise RoleAssignmentFailedError(result, result.failure_messages())
        return result

    # =========================================================
    # Workflow
    # =========================================================
    def _empty_catalog_result(self, department_id: DepartmentId) -> RoleAssignmentResult:
        self._log.warning("No standard role assignments defined")
        if self._config.empty_catalog_is_success:
            return RoleAssignmentResult()
        return RoleAssignmentResult(
            error=WorkflowError(
                code=WorkflowErrorCode.EMPTY_CATALOG,
                message=(
                    "No standard role assignments defined for department "
                    f"{department_id.value}"
                ),
            )
        )

    def _load_existing_role_types(
        self, user_id: UserId, token: CancellationToken
    ) -> AbstractSet[StandardRoleType]:
        if not self._config.validate_existing_roles:
            return frozenset()
        token.raise_if_cancelled()
        return frozenset(self._user_roles.get_existing_role_types(user_id))

    def _already_exists(self, assignment: RoleAssignment) -> RoleAssignmentFailure:
        failure = RoleAssignmentFailure(
            role_type=assignment.role_type,
            error=f"User already has role {display_name(assignment.role_type)}",
            reason=FailureReason.ALREADY_EXISTS,
            attempts=0,
        )
        self._log.warning(
            "Role assignment failed",
            extra={
                "role_type": assignment.role_type.name,
                "reason": failure.reason.value,
                "error": failure.error,
            },
        )
        self._telemetry.record_role_assignment(
            assignment.role_type, failure.reason.value.lower(), 0.0
        )
        return failure

    def _should_commit(self, result: RoleAssignmentResult) -> bool:
        if self._config.allow_partial_failures:
            return bool(result.successes)
        return not result.failures

    def _rollback_after_error(self, unit_of_work: UnitOfWork) -> None:
        try:
            unit_of_work.rollback()
        except Exception:
            self._log.exception("Role assignment rollback failed")

    # =========================================================
    # Intento por rol (con retry)
    # =========================================================
    def _assign_with_retry(
        self,
        user_id: UserId,
        department_id: DepartmentId,
        assigned_date: datetime,
        assignment: RoleAssignment,
        token: CancellationToken,
        unit_of_work: UnitOfWork,
    ) -> RoleAssignmentSuccess | RoleAssignmentFailure:
        attempts = 0

        def attempt() -> Tuple[RoleId, float]:
            nonlocal attempts
            attempts += 1
            return self._attempt_once(
                user_id, department_id, assigned_date, assignment, token, unit_of_work
            )

        retrying = create_retrying(
            max_retry_attempts=self._config.max_retry_attempts,
            retry_delay_seconds=self._config.retry_delay_seconds,
            sleep=partial(self._backoff, token),
            before_sleep=partial(self._on_retry, assignment),
            should_retry=lambda exc: not token.is_cancelled and is_transient_error(exc),
        )

        try:
            role_id, duration = retrying(attempt)
        except OperationCancelledError:
            raise
        except Exception as exc:
            # R: A timeout caused by our own deadline is a workflow cancellation.
            token.raise_if_cancelled()
            return self._failure(assignment, exc, attempts)

        self._log.info(
            "Role assigned",
            extra={
                "role_type": assignment.role_type.name,
                "role_id": str(role_id),
                "attempts": attempts,
                "duration_ms": round(duration * 1000, 2),
            },
        )
        self._telemetry.record_role_assignment(
            assignment.role_type, OUTCOME_SUCCESS, duration
        )
        return RoleAssignmentSuccess(
            role_id=role_id,
            role_type=assignment.role_type,
            duration_seconds=duration,
            attempts=attempts,
        )

    def _failure(
        self, assignment: RoleAssignment, exc: Exception, attempts: int
    ) -> RoleAssignmentFailure:
        reason = classify_failure(exc)
        message = str(exc) or type(exc).__name__
        if reason is FailureReason.TRANSIENT_FAILURE:
            message = f"Retry budget exhausted after {attempts} attempts: {message}"

        self._log.warning(
            "Role assignment failed",
            extra={
                "role_type": assignment.role_type.name,
                "reason": reason.value,
                "attempts": attempts,
                "error": message,
                "error_type": type(exc).__name__,
            },
        )
        self._telemetry.record_role_assignment(
            assignment.role_type, reason.value.lower(), 0.0
        )
        return RoleAssignmentFailure(
            role_type=assignment.role_type,
            error=message,
            reason=reason,
            attempts=attempts,
        )

    def _attempt_once(
        self,
        user_id: UserId,
        department_id: DepartmentId,
        assigned_date: datetime,
        assignment: RoleAssignment,
        token: CancellationToken,
        unit_of_work: UnitOfWork,
    ) -> Tuple[RoleId, float]:
        with Timer(clock=self._clock) as timer:
            if self._config.validate_supervisors:
                token.raise_if_cancelled()
                if not self._supervisors.validate_supervisor(assignment.supervisor_id):
                    raise InvalidSupervisorError(
                        f"Supervisor {assignment.supervisor_id.value} not found"
                    )

            role_id = RoleId.new()
            command = CreateUserRoleCommand(
                role_id=role_id,
                assignment_id=AssignmentId.new(),
                user_id=user_id,
                department_id=department_id,
                assigned_date=assigned_date,
                role_type=assignment.role_type,
                supervisor_id=assignment.supervisor_id,
            )

            self._log.info(
                "Assigning role",
                extra={
                    "role_type": assignment.role_type.name,
                    "role_name": display_name(assignment.role_type),
                },
            )
            if self._config.verbose_logging:
                self._log.debug(
                    "Role assignment details",
                    extra={
                        "role_id": str(role_id),
                        "supervisor_id": assignment.supervisor_id.value,
                        "description": assignment.description,
                    },
                )

            work_command = WorkAssignmentCommand(
                supervisor_id=assignment.supervisor_id,
                role_code=assignment.work_role,
                user_id=user_id,
                resource_type=ResourceType.USER_ACCOUNT,
                created_date=assigned_date,
            )
            # R: A failed attempt must not leave its user-role row behind.
            savepoint = unit_of_work.savepoint()
            try:
                token.raise_if_cancelled()
                self._user_roles.create_user_role(command)
                token.raise_if_cancelled()
                with Timer(clock=self._clock) as work_timer:
                    self._work_assignments.create_work_assignment(work_command)
            except Exception:
                unit_of_work.rollback_to(savepoint)
                raise
            self._telemetry.record_work_assignment(work_timer.elapsed_seconds)
            self._log.debug(
                "Work assignment created",
                extra={
                    "role_type": assignment.role_type.name,
                    "work_role": assignment.work_role.name,
                    "supervisor_id": assignment.supervisor_id.value,
                },
            )

        return role_id, timer.elapsed_seconds

    def _backoff(self, token: CancellationToken, seconds: float) -> None:
        if self._sleep is None:
            token.sleep(seconds)
            return
        token.raise_if_cancelled()
        self._sleep(seconds)
        token.raise_if_cancelled()

    def _on_retry(self, assignment: RoleAssignment, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        wait_seconds = (
            retry_state.next_action.sleep if retry_state.next_action is not None else 0.0
        )
        self._log.warning(
            "Retrying role assignment",
            extra={
                "role_type": assignment.role_type.name,
                "attempt": retry_state.attempt_number,
                "wait_seconds": round(float(wait_seconds), 3),
                "error": str(exc) if exc else None,
                "error_type": type(exc).__name__ if exc else None,
            },
        )
        self._telemetry.record_retry(assignment.role_type, retry_state.attempt_number)
