"""
Unit Tests for the Access Policy

Every action must resolve to a non-empty allow-list, and the table must
encode the role matrix exactly.
"""

import pytest

from childcare.core.enums import UserRole
from childcare.core.policy import (
    ALL_ROLES,
    POLICY,
    Action,
    PolicyConfigurationError,
    allowed_roles,
    is_permitted,
    validate_policy,
)


class TestValidatePolicy:
    def test_shipped_policy_is_valid(self):
        validate_policy()

    def test_every_action_has_an_allow_list(self):
        assert set(POLICY) == set(Action)
        assert all(POLICY[action] for action in Action)

    def test_missing_action_rejected(self):
        incomplete = {k: v for k, v in POLICY.items() if k != Action.CHILD_REGISTER}

        with pytest.raises(PolicyConfigurationError, match="child:register"):
            validate_policy(incomplete)

    def test_empty_allow_list_rejected(self):
        broken = dict(POLICY)
        broken[Action.USER_DELETE] = frozenset()

        with pytest.raises(PolicyConfigurationError, match="user:delete: empty allow-list"):
            validate_policy(broken)

    def test_unknown_role_rejected(self):
        broken = dict(POLICY)
        broken[Action.USER_READ] = frozenset({"SUPERUSER"})

        with pytest.raises(PolicyConfigurationError, match="unknown role"):
            validate_policy(broken)

    def test_all_problems_reported_together(self):
        broken = dict(POLICY)
        broken[Action.USER_DELETE] = frozenset()
        del broken[Action.REPORT_LIST_ALL]

        with pytest.raises(PolicyConfigurationError) as exc_info:
            validate_policy(broken)

        assert "user:delete" in str(exc_info.value)
        assert "report:list_all" in str(exc_info.value)


class TestRoleMatrix:
    @pytest.mark.parametrize(
        "action",
        [
            Action.USER_CREATE,
            Action.USER_LIST,
            Action.USER_LIST_EMPLOYEES,
            Action.USER_UPDATE,
            Action.USER_DELETE,
            Action.USER_SET_STATUS,
        ],
    )
    def test_account_administration_is_admin_only(self, action):
        assert allowed_roles(action) == frozenset({UserRole.ADMIN})

    def test_user_read_allows_manager(self):
        assert is_permitted(UserRole.MANAGER, Action.USER_READ)
        assert not is_permitted(UserRole.GUARDIAN, Action.USER_READ)

    def test_child_registration_is_manager_only(self):
        assert allowed_roles(Action.CHILD_REGISTER) == frozenset({UserRole.MANAGER})
        assert not is_permitted(UserRole.ADMIN, Action.CHILD_REGISTER)

    def test_family_may_update_but_not_list_all_children(self):
        assert is_permitted(UserRole.FAMILY, Action.CHILD_UPDATE)
        assert not is_permitted(UserRole.FAMILY, Action.CHILD_LIST_ALL)

    @pytest.mark.parametrize(
        "action", [Action.ATTENDANCE_MARK, Action.ATTENDANCE_UPDATE, Action.EVALUATION_CREATE]
    )
    def test_field_work_excludes_family(self, action):
        assert not is_permitted(UserRole.FAMILY, action)
        assert is_permitted(UserRole.GUARDIAN, action)
        assert is_permitted(UserRole.ADMIN, action)

    @pytest.mark.parametrize(
        "action",
        [
            Action.ATTENDANCE_LIST_DAILY,
            Action.ATTENDANCE_LIST_ALL,
            Action.EVALUATION_LIST_ALL,
            Action.REPORT_GENERATE_WEEKLY,
            Action.REPORT_GENERATE_MONTHLY,
            Action.REPORT_LIST_ALL,
        ],
    )
    def test_operations_are_manager_and_admin(self, action):
        assert allowed_roles(action) == frozenset({UserRole.MANAGER, UserRole.ADMIN})

    @pytest.mark.parametrize(
        "action",
        [
            Action.NOTIFICATION_SEND,
            Action.NOTIFICATION_LIST_RECEIVED,
            Action.NOTIFICATION_MARK_READ,
            Action.REPORT_STATISTICS,
            Action.PROFILE_READ,
        ],
    )
    def test_open_to_every_role(self, action):
        assert allowed_roles(action) == ALL_ROLES
