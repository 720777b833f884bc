"""
Name: Structured Logger Tests

Responsibilities:
  - Validate JSON output enriched with operation context
  - Validate extras (enums by name) and exception payloads
"""

import json
import logging
import sys

import pytest

from role_assignment.context import (
    clear_context,
    get_context_dict,
    set_operation_context,
)
from role_assignment.crosscutting.logger import JSONFormatter, setup_logger
from role_assignment.domain import StandardRoleType


pytestmark = pytest.mark.unit


def _record(msg: str = "Role assigned", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="role-assignment",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def _reset_context():
    clear_context()
    yield
    clear_context()


def test_formats_single_line_json_with_extras():
    payload = json.loads(JSONFormatter().format(_record(role_type="DEPARTMENT_MANAGER")))

    assert payload["message"] == "Role assigned"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "role-assignment"
    assert payload["role_type"] == "DEPARTMENT_MANAGER"


def test_includes_operation_context():
    set_operation_context(operation_id="op-1", user_id="user123", department_id="IT-DEPT")

    payload = json.loads(JSONFormatter().format(_record()))

    assert payload["operation_id"] == "op-1"
    assert payload["user_id"] == "user123"
    assert payload["department_id"] == "IT-DEPT"


def test_context_is_omitted_when_empty():
    payload = json.loads(JSONFormatter().format(_record()))

    assert get_context_dict() == {}
    assert "operation_id" not in payload


def test_enum_extras_are_logged_by_name():
    record = _record(role_type=StandardRoleType.PROJECT_COORDINATOR)

    payload = json.loads(JSONFormatter().format(record))

    assert payload["role_type"] == "PROJECT_COORDINATOR"


def test_extra_overrides_context_value():
    set_operation_context(operation_id="op-1", user_id="user123", department_id="IT-DEPT")

    payload = json.loads(JSONFormatter().format(_record(department_id="HR-DEPT")))

    assert payload["department_id"] == "HR-DEPT"
    assert payload["operation_id"] == "op-1"


def test_record_internals_are_not_copied():
    payload = json.loads(JSONFormatter().format(_record()))

    assert set(payload) == {"timestamp", "level", "logger", "message"}


def test_includes_exception_details():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JSONFormatter().format(record))

    assert payload["exception"]["type"] == "RuntimeError"
    assert payload["exception"]["message"] == "boom"
    assert "RuntimeError: boom" in payload["exception"]["traceback"]


def test_setup_logger_does_not_duplicate_handlers():
    first = setup_logger("role-assignment-test")
    second = setup_logger("role-assignment-test")

    assert first is second
    assert len(second.handlers) == 1
