"""
Name: Supervisor Resolver + Prometheus Telemetry Tests

Responsibilities:
  - Validate prefix-based supervisor resolution and existence check
  - Validate the telemetry adapter updates the Prometheus registry
"""

import pytest

from role_assignment.crosscutting.metrics import get_registry
from role_assignment.domain import DepartmentId, StandardRoleType, SupervisorId
from role_assignment.infrastructure.services import (
    PrefixSupervisorResolver,
    PrometheusTelemetryCollector,
)


pytestmark = pytest.mark.unit


def _sample(name: str, labels: dict | None = None) -> float:
    return get_registry().get_sample_value(name, labels or {}) or 0.0


def test_resolves_supervisors_by_prefix():
    resolver = PrefixSupervisorResolver()

    assert resolver.get_department_manager(DepartmentId("IT-DEPT")) == SupervisorId(
        "manager-IT-DEPT"
    )
    assert resolver.get_project_coordinator(DepartmentId("IT-DEPT")) == SupervisorId(
        "coordinator-IT-DEPT"
    )


def test_every_supervisor_exists_when_no_registry_given():
    assert PrefixSupervisorResolver().validate_supervisor(SupervisorId("anyone"))


def test_known_supervisors_restrict_validation():
    resolver = PrefixSupervisorResolver(["manager-IT-DEPT"])

    assert resolver.validate_supervisor(SupervisorId("manager-IT-DEPT"))
    assert not resolver.validate_supervisor(SupervisorId("coordinator-IT-DEPT"))


def test_role_outcome_is_counted_and_timed():
    labels = {"role_type": "project_coordinator", "outcome": "success"}
    before_count = _sample("role_assignment_total", labels)
    before_observed = _sample(
        "role_assignment_duration_seconds_count", {"role_type": "project_coordinator"}
    )

    PrometheusTelemetryCollector().record_role_assignment(
        StandardRoleType.PROJECT_COORDINATOR, "success", 0.02
    )

    assert _sample("role_assignment_total", labels) == before_count + 1
    assert (
        _sample("role_assignment_duration_seconds_count", {"role_type": "project_coordinator"})
        == before_observed + 1
    )


def test_work_assignment_and_retry_are_recorded():
    before_work = _sample("role_work_assignment_duration_seconds_count")
    before_retry = _sample(
        "role_assignment_retry_total", {"role_type": "department_manager"}
    )
    collector = PrometheusTelemetryCollector()

    collector.record_work_assignment(0.005)
    collector.record_retry(StandardRoleType.DEPARTMENT_MANAGER, 1)
    collector.record_retry(StandardRoleType.DEPARTMENT_MANAGER, 2)

    assert _sample("role_work_assignment_duration_seconds_count") == before_work + 1
    assert (
        _sample("role_assignment_retry_total", {"role_type": "department_manager"})
        == before_retry + 2
    )
