"""
============================================================
TARJETA CRC: infrastructure/services/prometheus_telemetry.py
============================================================
Class: PrometheusTelemetryCollector

Responsibilities:
  - Adaptar el puerto TelemetryCollector a crosscutting.metrics.
  - Traducir StandardRoleType a labels de baja cardinalidad.

Collaborators:
  - domain.services.TelemetryCollector (contrato)
  - crosscutting.metrics (prometheus_client)
============================================================
"""

from __future__ import annotations

from ...crosscutting import metrics
from ...domain.entities import StandardRoleType
from ...domain.services import TelemetryCollector


class PrometheusTelemetryCollector(TelemetryCollector):
    def record_role_assignment(
        self, role_type: StandardRoleType, outcome: str, duration_seconds: float
    ) -> None:
        metrics.record_role_assignment(role_type.name.lower(), outcome, duration_seconds)

    def record_work_assignment(self, duration_seconds: float) -> None:
        metrics.record_work_assignment(duration_seconds)

    def record_retry(self, role_type: StandardRoleType, attempt: int) -> None:
        # attempt is not a label (cardinality); the counter only tracks volume.
        metrics.record_retry(role_type.name.lower())
