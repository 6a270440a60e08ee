"""Shared fixtures and helpers for permissions tests."""

from dataclasses import dataclass
from typing import Optional

import pytest

from projectdb.lib.authentication import EmployeeData
from projectdb.lib.permissions.actions import Action
from projectdb.models.artifact import Artifact
from projectdb.models.comment import Comment
from projectdb.models.employee import Employee
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.models.project import Project
from projectdb.models.task import Task
from projectdb.models.update import Update


@dataclass
class PermissionTest:
    """Represents a single permission test case for action handler testing.

    Args:
        entity_type: Entity type name for context
        user_type: "admin", "manager", "other_manager", "staff", "other_staff" or "anonymous"
        action: Action enum value
        should_be_permitted: Whether the action is allowed
        expected_code: HTTP error code when denied (403 or 401)
        author_type: For Update and Comment tests, the user type of the entity's author
    """

    entity_type: str
    user_type: str
    action: Action
    should_be_permitted: bool
    expected_code: Optional[int] = None
    author_type: Optional[str] = None


def permission_test_id(test_case: PermissionTest) -> str:
    author = f"_by_{test_case.author_type}" if test_case.author_type else ""
    outcome = "permitted" if test_case.should_be_permitted else "denied"
    return f"{test_case.user_type}_{test_case.action.value}{author}_{outcome}"


class EntityTestHelper:
    """Helper class to create transient entities and user data with consistent properties.

    Every entity hangs off one project managed by "manager", with one task assigned to "staff".
    """

    EMPLOYEE_CONFIGS = {
        "admin": (1, "admin-user", EmployeeRole.admin),
        "manager": (2, "test-manager", EmployeeRole.manager),
        "other_manager": (3, "extra-manager", EmployeeRole.manager),
        "staff": (4, "test-staff", EmployeeRole.staff),
        "other_staff": (5, "extra-staff", EmployeeRole.staff),
    }

    @staticmethod
    def create_employee(user_type: str) -> Employee:
        if user_type not in EntityTestHelper.EMPLOYEE_CONFIGS:
            raise ValueError(f"Unknown user type: {user_type}")

        employee_id, username, role = EntityTestHelper.EMPLOYEE_CONFIGS[user_type]
        return Employee(id=employee_id, username=username, role=role, password_hash="not-a-real-hash")

    @staticmethod
    def create_user_data(user_type: str) -> Optional[EmployeeData]:
        """Create EmployeeData for different user types, or None for anonymous users."""
        if user_type == "anonymous":
            return None

        employee = EntityTestHelper.create_employee(user_type)
        return EmployeeData(employee, employee.roles)

    @staticmethod
    def create_project(manager_type: str = "manager") -> Project:
        manager = EntityTestHelper.create_employee(manager_type)
        return Project(id=1, title="Test Project", body="", manager=manager, manager_id=manager.id)

    @staticmethod
    def create_task(project: Optional[Project] = None, staff_type: str = "staff") -> Task:
        project = project if project is not None else EntityTestHelper.create_project()
        staff = EntityTestHelper.create_employee(staff_type)
        return Task(id=1, title="Test Task", body="", project=project, staff=staff)

    @staticmethod
    def create_update(task: Optional[Task] = None, author_type: str = "staff") -> Update:
        task = task if task is not None else EntityTestHelper.create_task()
        author = EntityTestHelper.create_employee(author_type)
        return Update(id=1, title="Test Update", body="", task=task, author=author)

    @staticmethod
    def create_comment(update: Optional[Update] = None, author_type: str = "staff") -> Comment:
        update = update if update is not None else EntityTestHelper.create_update()
        author = EntityTestHelper.create_employee(author_type)
        return Comment(id=1, body="Looks good", update=update, author=author)

    @staticmethod
    def create_artifact(task: Optional[Task] = None) -> Artifact:
        task = task if task is not None else EntityTestHelper.create_task()
        return Artifact(id=1, description="Test deliverable", task=task)


@pytest.fixture
def entity_helper():
    """Fixture providing EntityTestHelper instance."""
    return EntityTestHelper()
