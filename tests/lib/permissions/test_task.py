"""Tests for Task permissions module."""

import pytest

from projectdb.lib.permissions.actions import Action
from projectdb.lib.permissions.task import has_permission
from tests.lib.permissions.conftest import EntityTestHelper, PermissionTest, permission_test_id


class TestTaskHasPermission:
    @pytest.mark.parametrize("action", [Action.CREATE, Action.READ_ALL])
    def test_parent_actions_require_a_project(self, entity_helper: EntityTestHelper, action: Action) -> None:
        task = entity_helper.create_task()

        with pytest.raises(ValueError) as exc_info:
            has_permission(entity_helper.create_user_data("manager"), task, action)

        assert "parent project" in str(exc_info.value)

    @pytest.mark.parametrize("action", [Action.READ, Action.UPDATE, Action.DELETE])
    def test_entity_actions_require_a_task(self, entity_helper: EntityTestHelper, action: Action) -> None:
        project = entity_helper.create_project()

        with pytest.raises(ValueError):
            has_permission(entity_helper.create_user_data("manager"), project, action)


class TestTaskParentActions:
    @pytest.mark.parametrize(
        "test_case",
        [
            # Managers of the project (and admins) may add tasks
            PermissionTest("Task", "admin", Action.CREATE, True),
            PermissionTest("Task", "manager", Action.CREATE, True),
            PermissionTest("Task", "other_manager", Action.CREATE, False, 403),
            PermissionTest("Task", "staff", Action.CREATE, False, 403),
            PermissionTest("Task", "anonymous", Action.CREATE, False, 401),
            # Listing is open to anyone signed in
            PermissionTest("Task", "other_manager", Action.READ_ALL, True),
            PermissionTest("Task", "other_staff", Action.READ_ALL, True),
            PermissionTest("Task", "anonymous", Action.READ_ALL, False, 401),
        ],
        ids=permission_test_id,
    )
    def test_parent_action(self, test_case: PermissionTest, entity_helper: EntityTestHelper) -> None:
        project = entity_helper.create_project()
        user_data = entity_helper.create_user_data(test_case.user_type)

        result = has_permission(user_data, project, test_case.action)

        assert result.permitted == test_case.should_be_permitted
        if not test_case.should_be_permitted:
            assert result.http_code == test_case.expected_code


class TestTaskEntityActions:
    @pytest.mark.parametrize(
        "test_case",
        [
            PermissionTest("Task", "other_staff", Action.READ, True),
            PermissionTest("Task", "anonymous", Action.READ, False, 401),
            PermissionTest("Task", "admin", Action.UPDATE, True),
            PermissionTest("Task", "manager", Action.UPDATE, True),
            PermissionTest("Task", "other_manager", Action.UPDATE, False, 403),
            # The assignee may not change the task itself
            PermissionTest("Task", "staff", Action.UPDATE, False, 403),
            PermissionTest("Task", "manager", Action.DELETE, True),
            PermissionTest("Task", "staff", Action.DELETE, False, 403),
            PermissionTest("Task", "anonymous", Action.DELETE, False, 401),
        ],
        ids=permission_test_id,
    )
    def test_entity_action(self, test_case: PermissionTest, entity_helper: EntityTestHelper) -> None:
        task = entity_helper.create_task()
        user_data = entity_helper.create_user_data(test_case.user_type)

        result = has_permission(user_data, task, test_case.action)

        assert result.permitted == test_case.should_be_permitted
        if not test_case.should_be_permitted:
            assert result.http_code == test_case.expected_code

    def test_management_follows_the_tasks_own_project(self, entity_helper: EntityTestHelper) -> None:
        """A manager of some other project gains nothing over a task they reach through it."""
        own_project = entity_helper.create_project("other_manager")
        task = entity_helper.create_task(entity_helper.create_project("manager"))
        user_data = entity_helper.create_user_data("other_manager")

        assert has_permission(user_data, own_project, Action.CREATE).permitted is True
        assert has_permission(user_data, task, Action.UPDATE).permitted is False
        assert has_permission(user_data, task, Action.DELETE).permitted is False
