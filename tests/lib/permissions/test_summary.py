"""Tests for the capability summaries attached to responses."""

import pytest

from projectdb.lib.permissions.summary import entity_permissions, list_permissions
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.models.project import Project
from projectdb.models.task import Task
from projectdb.models.update import Update


@pytest.mark.parametrize(
    "user_type,create",
    [("manager", True), ("admin", True), ("other_manager", False), ("staff", False), ("anonymous", False)],
)
def test_task_list_permission(entity_helper, user_type, create):
    project = entity_helper.create_project()

    summary = list_permissions(
        entity_helper.create_user_data(user_type), project, Task, roles=[EmployeeRole.manager, EmployeeRole.admin]
    )

    assert summary == {"create": create}


def test_list_permission_without_role_gate(entity_helper):
    task = entity_helper.create_task()

    assert list_permissions(entity_helper.create_user_data("staff"), task, Update) == {"create": True}
    assert list_permissions(entity_helper.create_user_data("other_staff"), task, Update) == {"create": False}


def test_role_gate_narrows_list_permission(entity_helper):
    """The policy lets any employee create a project, but only managers reach the route that does so."""
    manager = entity_helper.create_project().manager
    admin = entity_helper.create_user_data("admin")

    assert list_permissions(admin, manager, Project) == {"create": True}
    assert list_permissions(admin, manager, Project, roles=[EmployeeRole.manager]) == {"create": False}


@pytest.mark.parametrize(
    "user_type,permitted",
    [("manager", True), ("admin", True), ("other_manager", False), ("staff", False), ("anonymous", False)],
)
def test_project_entity_permission(entity_helper, user_type, permitted):
    project = entity_helper.create_project()

    summary = entity_permissions(entity_helper.create_user_data(user_type), project)

    assert summary == {"update": permitted, "delete": permitted}


def test_entity_permission_never_reports_read(entity_helper):
    summary = entity_permissions(entity_helper.create_user_data("staff"), entity_helper.create_task())

    assert set(summary) == {"update", "delete"}
