"""
Name: Value Object Tests

Responsibilities:
  - Validate identifier construction (blank/non-string rejection)
  - Verify case-insensitive DepartmentId equality and hashing
"""

from uuid import UUID

import pytest

from role_assignment.domain.value_objects import (
    AssignmentId,
    DepartmentId,
    RoleId,
    SupervisorId,
    UserId,
)


pytestmark = pytest.mark.unit


@pytest.mark.parametrize("factory", [UserId, SupervisorId, DepartmentId])
@pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
def test_blank_identifiers_are_rejected(factory, blank):
    with pytest.raises(ValueError, match="cannot be null or empty"):
        factory(blank)


@pytest.mark.parametrize("factory", [UserId, SupervisorId, DepartmentId])
def test_non_string_identifiers_are_rejected(factory):
    with pytest.raises(TypeError):
        factory(None)


def test_user_id_error_message_names_the_field():
    with pytest.raises(ValueError, match="User ID cannot be null or empty"):
        UserId("")


def test_identifiers_keep_original_text():
    assert str(UserId("user123")) == "user123"
    assert DepartmentId("It-Dept").value == "It-Dept"


def test_department_id_equality_ignores_case():
    assert DepartmentId("SPECIAL-DEPT") == DepartmentId("special-dept")
    assert hash(DepartmentId("SPECIAL-DEPT")) == hash(DepartmentId("Special-Dept"))
    assert DepartmentId("special-dept") in {DepartmentId("SPECIAL-DEPT")}


def test_department_id_distinct_codes_differ():
    assert DepartmentId("IT-DEPT") != DepartmentId("HR-DEPT")


def test_identifiers_are_immutable():
    user_id = UserId("user123")
    with pytest.raises(AttributeError):
        user_id.value = "other"  # type: ignore[misc]


def test_generated_ids_are_unique_uuids():
    first, second = RoleId.new(), RoleId.new()
    assert isinstance(first.value, UUID)
    assert first != second
    assert str(AssignmentId.new()) != str(AssignmentId.new())
