"""
Access Policy

The single declarative table of which roles may invoke which operation.
Route handlers never list roles themselves; they name an ``Action`` and the
guard in ``childcare.core.auth`` looks it up here.

Attendance marking, updating and listing include ADMIN.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from childcare.core.enums import UserRole


class PolicyConfigurationError(Exception):
    """Raised at startup when the policy table is incomplete."""

    pass


class Action(str, Enum):
    """Every guarded operation, named ``resource:verb``."""

    # Account self-service
    PROFILE_READ = "profile:read"
    PASSWORD_CHANGE = "password:change"

    # Users
    USER_CREATE = "user:create"
    USER_LIST = "user:list"
    USER_LIST_EMPLOYEES = "user:list_employees"
    USER_READ = "user:read"
    USER_UPDATE = "user:update"
    USER_DELETE = "user:delete"
    USER_SET_STATUS = "user:set_status"

    # Children
    CHILD_REGISTER = "child:register"
    CHILD_LIST_ALL = "child:list_all"
    CHILD_LIST_MINE = "child:list_mine"
    CHILD_READ = "child:read"
    CHILD_UPDATE = "child:update"
    CHILD_DEACTIVATE = "child:deactivate"

    # Attendance
    ATTENDANCE_MARK = "attendance:mark"
    ATTENDANCE_UPDATE = "attendance:update"
    ATTENDANCE_LIST_DAILY = "attendance:list_daily"
    ATTENDANCE_LIST_ALL = "attendance:list_all"
    ATTENDANCE_LIST_BY_CHILD = "attendance:list_by_child"

    # Evaluations
    EVALUATION_CREATE = "evaluation:create"
    EVALUATION_LIST_ALL = "evaluation:list_all"
    EVALUATION_LIST_BY_CHILD = "evaluation:list_by_child"
    EVALUATION_READ = "evaluation:read"
    EVALUATION_UPDATE = "evaluation:update"
    EVALUATION_DELETE = "evaluation:delete"

    # Notifications
    NOTIFICATION_SEND = "notification:send"
    NOTIFICATION_LIST_RECEIVED = "notification:list_received"
    NOTIFICATION_LIST_SENT = "notification:list_sent"
    NOTIFICATION_MARK_READ = "notification:mark_read"
    NOTIFICATION_COUNT_UNREAD = "notification:count_unread"
    NOTIFICATION_DELETE = "notification:delete"

    # Reports
    REPORT_GENERATE_WEEKLY = "report:generate_weekly"
    REPORT_GENERATE_MONTHLY = "report:generate_monthly"
    REPORT_LIST_BY_CHILD = "report:list_by_child"
    REPORT_LIST_ALL = "report:list_all"
    REPORT_STATISTICS = "report:statistics"


ALL_ROLES: frozenset[UserRole] = frozenset(UserRole)
STAFF_FIELD_ROLES: frozenset[UserRole] = frozenset(
    {UserRole.MANAGER, UserRole.GUARDIAN, UserRole.ADMIN}
)
OPERATIONS_ROLES: frozenset[UserRole] = frozenset({UserRole.MANAGER, UserRole.ADMIN})
ADMIN_ONLY: frozenset[UserRole] = frozenset({UserRole.ADMIN})
MANAGER_ONLY: frozenset[UserRole] = frozenset({UserRole.MANAGER})

POLICY: Mapping[Action, frozenset[UserRole]] = {
    Action.PROFILE_READ: ALL_ROLES,
    Action.PASSWORD_CHANGE: ALL_ROLES,
    # Users
    Action.USER_CREATE: ADMIN_ONLY,
    Action.USER_LIST: ADMIN_ONLY,
    Action.USER_LIST_EMPLOYEES: ADMIN_ONLY,
    Action.USER_READ: frozenset({UserRole.ADMIN, UserRole.MANAGER}),
    Action.USER_UPDATE: ADMIN_ONLY,
    Action.USER_DELETE: ADMIN_ONLY,
    Action.USER_SET_STATUS: ADMIN_ONLY,
    # Children
    Action.CHILD_REGISTER: MANAGER_ONLY,
    Action.CHILD_LIST_ALL: frozenset({UserRole.MANAGER, UserRole.GUARDIAN}),
    Action.CHILD_LIST_MINE: ALL_ROLES,
    Action.CHILD_READ: ALL_ROLES,
    Action.CHILD_UPDATE: frozenset({UserRole.MANAGER, UserRole.FAMILY}),
    Action.CHILD_DEACTIVATE: MANAGER_ONLY,
    # Attendance
    Action.ATTENDANCE_MARK: STAFF_FIELD_ROLES,
    Action.ATTENDANCE_UPDATE: STAFF_FIELD_ROLES,
    Action.ATTENDANCE_LIST_DAILY: OPERATIONS_ROLES,
    Action.ATTENDANCE_LIST_ALL: OPERATIONS_ROLES,
    Action.ATTENDANCE_LIST_BY_CHILD: ALL_ROLES,
    # Evaluations
    Action.EVALUATION_CREATE: STAFF_FIELD_ROLES,
    Action.EVALUATION_LIST_ALL: OPERATIONS_ROLES,
    Action.EVALUATION_LIST_BY_CHILD: ALL_ROLES,
    Action.EVALUATION_READ: ALL_ROLES,
    Action.EVALUATION_UPDATE: STAFF_FIELD_ROLES,
    Action.EVALUATION_DELETE: STAFF_FIELD_ROLES,
    # Notifications
    Action.NOTIFICATION_SEND: ALL_ROLES,
    Action.NOTIFICATION_LIST_RECEIVED: ALL_ROLES,
    Action.NOTIFICATION_LIST_SENT: ALL_ROLES,
    Action.NOTIFICATION_MARK_READ: ALL_ROLES,
    Action.NOTIFICATION_COUNT_UNREAD: ALL_ROLES,
    Action.NOTIFICATION_DELETE: ALL_ROLES,
    # Reports
    Action.REPORT_GENERATE_WEEKLY: OPERATIONS_ROLES,
    Action.REPORT_GENERATE_MONTHLY: OPERATIONS_ROLES,
    Action.REPORT_LIST_BY_CHILD: ALL_ROLES,
    Action.REPORT_LIST_ALL: OPERATIONS_ROLES,
    Action.REPORT_STATISTICS: ALL_ROLES,
}


def validate_policy(policy: Mapping[Action, frozenset[UserRole]] = POLICY) -> None:
    """Check that every action has a non-empty allow-list of known roles.

    Raises:
        PolicyConfigurationError: Listing every problem found
    """
    problems: list[str] = []

    for action in Action:
        roles = policy.get(action)
        if roles is None:
            problems.append(f"{action.value}: no allow-list declared")
        elif not roles:
            problems.append(f"{action.value}: empty allow-list")
        elif not all(isinstance(role, UserRole) for role in roles):
            problems.append(f"{action.value}: unknown role in allow-list")

    if problems:
        raise PolicyConfigurationError("Invalid access policy: " + "; ".join(problems))


def allowed_roles(action: Action) -> frozenset[UserRole]:
    return POLICY[action]


def is_permitted(role: UserRole, action: Action) -> bool:
    """Whether ``role`` may invoke ``action`` at all (ownership is checked separately)."""
    return role in POLICY.get(action, frozenset())
