"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus) del workflow de asignación de roles

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas y estables para registrar outcomes/duraciones.
    - Cuidar cardinalidad (NO user_id, NO department_id, NO role_id).
    - Exponer el texto /metrics para quien quiera publicarlo.

Colaboradores:
    - infrastructure/services/prometheus_telemetry.py (TelemetryCollector)

Decisiones:
    - Registro único global: Prometheus requiere singletons.
    - Labels acotados: role_type (2 valores) y outcome (enum cerrado).
===============================================================================
"""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# -----------------------------------------------------------------------------
# Métricas
# -----------------------------------------------------------------------------

_role_assignments_total = Counter(
    "role_assignment_total",
    "Asignaciones de rol procesadas por outcome",
    ["role_type", "outcome"],
    registry=_registry,
)

_role_assignment_duration = Histogram(
    "role_assignment_duration_seconds",
    "Duración de un intento de asignación de rol (segundos)",
    ["role_type"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    registry=_registry,
)

_work_assignment_duration = Histogram(
    "role_work_assignment_duration_seconds",
    "Duración de la creación de un work assignment (segundos)",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
    registry=_registry,
)

_retries_total = Counter(
    "role_assignment_retry_total",
    "Reintentos de asignación por fallas transitorias",
    ["role_type"],
    registry=_registry,
)


# -----------------------------------------------------------------------------
# API pública (helpers de registro)
# -----------------------------------------------------------------------------


def record_role_assignment(role_type: str, outcome: str, seconds: float) -> None:
    """Cuenta el outcome de un rol y observa su duración."""
    _role_assignments_total.labels(role_type=role_type, outcome=outcome).inc()
    _role_assignment_duration.labels(role_type=role_type).observe(max(seconds, 0.0))


def record_work_assignment(seconds: float) -> None:
    _work_assignment_duration.observe(max(seconds, 0.0))


def record_retry(role_type: str) -> None:
    _retries_total.labels(role_type=role_type).inc()


def get_registry() -> CollectorRegistry:
    return _registry


def render_metrics() -> tuple[bytes, str]:
    """Devuelve (payload, content_type) en formato de exposición Prometheus."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
