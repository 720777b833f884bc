"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (no .env file)
  - Provide scripted fakes for repositories, resolver and telemetry
  - Provide a factory that wires AssignStandardRolesUseCase for each test

Collaborators:
  - pytest: Test framework
  - role_assignment.domain: ports and value objects
  - role_assignment.infrastructure: in-memory adapters

Notes:
  - Backoff sleeps are captured in a list, never actually slept
  - Fixtures are function-scoped for per-test isolation
"""

from __future__ import annotations

import sys
from collections import defaultdict, deque
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Deque, Dict, Iterable, List, Tuple

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from role_assignment.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from role_assignment.application import (  # noqa: E402
    AssignStandardRolesUseCase,
    RoleAssignmentConfiguration,
    StandardRoleCatalog,
)
from role_assignment.domain import (  # noqa: E402
    CreateUserRoleCommand,
    DepartmentId,
    StandardRoleType,
    UserId,
    WorkAssignmentCommand,
)
from role_assignment.infrastructure.repositories import (  # noqa: E402
    InMemoryUnitOfWorkFactory,
    InMemoryUserRoleRepository,
    InMemoryWorkAssignmentRepository,
)
from role_assignment.infrastructure.services import PrefixSupervisorResolver  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Fakes
# ============================================================================


class ScriptedUserRoleRepository(InMemoryUserRoleRepository):
    """
    R: In-memory repository that raises scripted errors per role type.

    `fail(role_type, *errors)` queues errors: each create call for that role
    pops one and raises it; once the queue is empty the write succeeds.
    """

    def __init__(self) -> None:
        super().__init__()
        self._scripted: Dict[StandardRoleType, Deque[BaseException]] = defaultdict(deque)
        self.create_calls: List[CreateUserRoleCommand] = []
        self.lookup_calls: List[UserId] = []
        self.on_create: Callable[[CreateUserRoleCommand], None] | None = None

    def fail(self, role_type: StandardRoleType, *errors: BaseException) -> None:
        self._scripted[role_type].extend(errors)

    def create_user_role(self, command: CreateUserRoleCommand) -> None:
        self.create_calls.append(command)
        if self.on_create is not None:
            self.on_create(command)
        queue = self._scripted[command.role_type]
        if queue:
            raise queue.popleft()
        super().create_user_role(command)

    def get_existing_role_types(self, user_id: UserId):
        self.lookup_calls.append(user_id)
        return super().get_existing_role_types(user_id)


class ScriptedWorkAssignmentRepository(InMemoryWorkAssignmentRepository):
    def __init__(self) -> None:
        super().__init__()
        self._scripted: Deque[BaseException] = deque()
        self.create_calls: List[WorkAssignmentCommand] = []

    def fail(self, *errors: BaseException) -> None:
        self._scripted.extend(errors)

    def create_work_assignment(self, command: WorkAssignmentCommand) -> None:
        self.create_calls.append(command)
        if self._scripted:
            raise self._scripted.popleft()
        super().create_work_assignment(command)


class RecordingTelemetry:
    def __init__(self) -> None:
        self.role_outcomes: List[Tuple[StandardRoleType, str, float]] = []
        self.work_durations: List[float] = []
        self.retries: List[Tuple[StandardRoleType, int]] = []

    def record_role_assignment(
        self, role_type: StandardRoleType, outcome: str, duration_seconds: float
    ) -> None:
        self.role_outcomes.append((role_type, outcome, duration_seconds))

    def record_work_assignment(self, duration_seconds: float) -> None:
        self.work_durations.append(duration_seconds)

    def record_retry(self, role_type: StandardRoleType, attempt: int) -> None:
        self.retries.append((role_type, attempt))


class EmptyCatalog:
    def build_standard_assignments(self, department_id: DepartmentId):
        return []


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def user_id() -> UserId:
    return UserId("user123")


@pytest.fixture
def department_id() -> DepartmentId:
    return DepartmentId("IT-DEPT")


@pytest.fixture
def assigned_date() -> datetime:
    return datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def user_roles() -> ScriptedUserRoleRepository:
    return ScriptedUserRoleRepository()


@pytest.fixture
def work_assignments() -> ScriptedWorkAssignmentRepository:
    return ScriptedWorkAssignmentRepository()


@pytest.fixture
def unit_of_work() -> InMemoryUnitOfWorkFactory:
    return InMemoryUnitOfWorkFactory()


@pytest.fixture
def telemetry() -> RecordingTelemetry:
    return RecordingTelemetry()


@pytest.fixture
def empty_catalog() -> EmptyCatalog:
    return EmptyCatalog()


@pytest.fixture
def sleeps() -> List[float]:
    """R: Captures every backoff delay requested by the workflow."""
    return []


@pytest.fixture
def make_use_case(user_roles, work_assignments, unit_of_work, telemetry, sleeps):
    """
    R: Factory: make_use_case(known_supervisors=None, catalog=None, **config).

    Config kwargs go to RoleAssignmentConfiguration; retry delay defaults to
    the production value so backoff assertions use real numbers.
    """

    def _make(
        known_supervisors: Iterable[str] | None = None,
        catalog=None,
        **config_kwargs,
    ) -> AssignStandardRolesUseCase:
        resolver = PrefixSupervisorResolver(known_supervisors)
        configuration = RoleAssignmentConfiguration(**config_kwargs)
        return AssignStandardRolesUseCase(
            catalog=catalog
            or StandardRoleCatalog(resolver, configuration.special_departments),
            user_role_repository=user_roles,
            work_assignment_repository=work_assignments,
            supervisor_resolver=resolver,
            configuration=configuration,
            unit_of_work_factory=unit_of_work,
            telemetry=telemetry,
            sleep=sleeps.append,
        )

    return _make
