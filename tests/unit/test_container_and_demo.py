"""
Name: Composition Root + Demo Script Tests

Responsibilities:
  - Validate in-memory wiring driven by Settings
  - Smoke-test the demo entry point (exit code + JSON output)
"""

import importlib.util
import json
from datetime import datetime
from pathlib import Path

import pytest

from role_assignment.application.null_objects import NullTelemetryCollector
from role_assignment.container import build_in_memory_components, get_telemetry
from role_assignment.crosscutting.config import Settings
from role_assignment.domain import DepartmentId, StandardRoleType, UserId
from role_assignment.infrastructure.services import PrometheusTelemetryCollector


pytestmark = pytest.mark.unit

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "assign_roles_demo.py"


def _load_demo():
    spec = importlib.util.spec_from_file_location("assign_roles_demo", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _result_json(out: str) -> dict:
    # Log lines share stdout; the result is the indented JSON printed last.
    return json.loads(out[out.index("{\n"):])


def test_telemetry_follows_metrics_flag():
    assert isinstance(get_telemetry(Settings(metrics_enabled=True)), PrometheusTelemetryCollector)
    assert isinstance(get_telemetry(Settings(metrics_enabled=False)), NullTelemetryCollector)


def test_components_share_stores_with_use_case():
    components = build_in_memory_components(
        Settings(special_departments="LABS", metrics_enabled=False)
    )

    result = components.use_case.execute(
        UserId("user123"), DepartmentId("labs"), datetime(2024, 1, 15)
    )

    assert result.is_fully_successful
    assert len(components.user_roles.list_user_roles()) == 2
    assert components.unit_of_work.commits == 1
    assert DepartmentId("LABS") in components.configuration.special_departments


def test_demo_prints_success(capsys):
    exit_code = _load_demo().main(["--user", "u1", "--department", "special-dept"])

    payload = _result_json(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["status"] == "SUCCEEDED"
    assert [s["role_type"] for s in payload["successes"]] == [
        StandardRoleType.DEPARTMENT_MANAGER.name,
        StandardRoleType.PROJECT_COORDINATOR.name,
    ]


def test_demo_require_success_exits_non_zero(capsys):
    exit_code = _load_demo().main(
        ["--existing-role", "DEPARTMENT_MANAGER", "--require-success"]
    )

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "User already has role Department Manager" in captured.err
    assert _result_json(captured.out)["failures"][0]["reason"] == "ALREADY_EXISTS"
