"""
Name: Standard Role Assignment Demo

Responsibilities:
  - Run the assignment workflow against the in-memory stores
  - Allow seeding roles the user already holds and restricting known supervisors
  - Print the aggregated result as JSON
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import datetime, timezone

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from role_assignment.container import build_in_memory_components  # noqa: E402
from role_assignment.crosscutting.config import get_settings  # noqa: E402
from role_assignment.crosscutting.exceptions import RoleAssignmentFailedError  # noqa: E402
from role_assignment.domain import DepartmentId, StandardRoleType, UserId  # noqa: E402
from role_assignment.infrastructure.services import PrefixSupervisorResolver  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Assign the standard department roles to a user (in-memory demo)."
    )
    parser.add_argument("--user", default="user123", help="User ID")
    parser.add_argument("--department", default="IT-DEPT", help="Department ID")
    parser.add_argument(
        "--existing-role",
        action="append",
        default=[],
        choices=[role.name for role in StandardRoleType],
        help="Role the user already holds (repeatable)",
    )
    parser.add_argument(
        "--known-supervisor",
        action="append",
        default=None,
        help="Supervisor that exists (repeatable; omit to accept all)",
    )
    parser.add_argument(
        "--allow-partial-failures",
        action="store_true",
        help="Keep assigning after a role fails",
    )
    parser.add_argument(
        "--require-success",
        action="store_true",
        help="Exit non-zero unless every role was assigned",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = get_settings()
    if args.allow_partial_failures:
        settings = settings.model_copy(update={"allow_partial_failures": True})

    components = build_in_memory_components(
        settings,
        supervisor_resolver=PrefixSupervisorResolver(args.known_supervisor),
    )
    user_id = UserId(args.user)
    department_id = DepartmentId(args.department)
    components.user_roles.seed_roles(
        user_id, [StandardRoleType[name] for name in args.existing_role]
    )

    assigned_date = datetime.now(timezone.utc)
    exit_code = 0
    if args.require_success:
        try:
            result = components.use_case.assign_or_raise(
                user_id, department_id, assigned_date
            )
        except RoleAssignmentFailedError as exc:
            result = exc.result
            print(exc.message, file=sys.stderr)
            exit_code = 1
    else:
        result = components.use_case.execute(user_id, department_id, assigned_date)

    print(json.dumps(result.to_dict(), indent=2))
    return exit_code


if __name__ == "__main__":
    raise SystemExit(main())
