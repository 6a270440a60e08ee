import pytest

from tests.helpers.constants import EXTRA_STAFF, TEST_STAFF
from tests.helpers.dependency_overrider import DependencyOverrider
from tests.helpers.util.artifact import create_artifact
from tests.helpers.util.comment import create_comment
from tests.helpers.util.project import create_project
from tests.helpers.util.task import create_task
from tests.helpers.util.update import create_update


def permission_url(model_name, id, action):
    return f"/api/v1/permissions/user-is-permitted/{model_name}/{id}/{action}"


# Project tests


@pytest.mark.parametrize("action", ["read", "update", "delete"])
def test_manager_is_permitted_on_own_project(client, setup_router_db, action):
    project = create_project(client)

    response = client.get(permission_url("project", project["id"], action))

    assert response.status_code == 200
    assert response.json() is True


@pytest.mark.parametrize("action,permitted", [("read", True), ("update", False), ("delete", False)])
def test_other_manager_permissions_on_project(client, setup_router_db, extra_manager_app_overrides, action, permitted):
    project = create_project(client)

    with DependencyOverrider(extra_manager_app_overrides):
        response = client.get(permission_url("project", project["id"], action))

    assert response.status_code == 200
    assert response.json() is permitted


def test_anonymous_user_is_not_permitted_to_read_project(client, setup_router_db, anonymous_app_overrides):
    project = create_project(client)

    with DependencyOverrider(anonymous_app_overrides):
        response = client.get(permission_url("project", project["id"], "read"))

    assert response.status_code == 200
    assert response.json() is False


# Task tests


@pytest.mark.parametrize("overrides,permitted", [(None, True), ("admin_app_overrides", True), ("staff_app_overrides", False)])
def test_task_update_permission(client, setup_router_db, overrides, permitted, request):
    project = create_project(client)
    task = create_task(client, project["id"])

    with DependencyOverrider(request.getfixturevalue(overrides) if overrides else {}):
        response = client.get(permission_url("task", task["id"], "update"))

    assert response.status_code == 200
    assert response.json() is permitted


# Update and comment tests


@pytest.mark.parametrize(
    "overrides,permitted", [("staff_app_overrides", True), ("extra_staff_app_overrides", False)]
)
def test_update_read_permission_follows_participation(client, setup_router_db, overrides, permitted, request):
    project = create_project(client)
    task = create_task(client, project["id"])
    update = create_update(client, project["id"], task["id"])

    with DependencyOverrider(request.getfixturevalue(overrides)):
        response = client.get(permission_url("update", update["id"], "read"))

    assert response.status_code == 200
    assert response.json() is permitted


def test_comment_delete_permission_belongs_to_author(client, setup_router_db, staff_app_overrides):
    project = create_project(client)
    task = create_task(client, project["id"])
    update = create_update(client, project["id"], task["id"])
    with DependencyOverrider(staff_app_overrides):
        comment = create_comment(client, project["id"], task["id"], update["id"])

        response = client.get(permission_url("comment", comment["id"], "delete"))

    assert response.status_code == 200
    assert response.json() is True


# Artifact tests


def test_staff_may_read_but_not_change_artifact(client, setup_router_db, staff_app_overrides):
    project = create_project(client)
    task = create_task(client, project["id"])
    artifact = create_artifact(client, project["id"], task["id"])

    with DependencyOverrider(staff_app_overrides):
        read_response = client.get(permission_url("artifact", artifact["id"], "read"))
        update_response = client.get(permission_url("artifact", artifact["id"], "update"))

    assert read_response.json() is True
    assert update_response.json() is False


# Employee tests


def test_employee_may_read_own_account(client, setup_router_db, staff_app_overrides):
    with DependencyOverrider(staff_app_overrides):
        own_response = client.get(permission_url("employee", TEST_STAFF["id"], "read"))
        other_response = client.get(permission_url("employee", EXTRA_STAFF["id"], "read"))

    assert own_response.json() is True
    assert other_response.json() is False


def test_admin_may_update_any_account(client, setup_router_db, admin_app_overrides):
    with DependencyOverrider(admin_app_overrides):
        response = client.get(permission_url("employee", TEST_STAFF["id"], "update"))

    assert response.status_code == 200
    assert response.json() is True


# Invalid requests


@pytest.mark.parametrize("action", ["create", "read_all"])
def test_parent_actions_cannot_be_checked_on_single_resource(client, setup_router_db, action):
    project = create_project(client)

    response = client.get(permission_url("project", project["id"], action))

    assert response.status_code == 400
    assert response.json()["detail"] == f"Action '{action}' can not be checked against a single project"


def test_permission_on_unknown_resource_is_not_found(client, setup_router_db):
    response = client.get(permission_url("task", 999, "read"))

    assert response.status_code == 404
    assert response.json()["detail"] == "task with ID 999 not found"


def test_permission_on_unknown_model_is_invalid(client, setup_router_db):
    response = client.get(permission_url("invoice", 1, "read"))

    assert response.status_code == 422


def test_unknown_action_is_invalid(client, setup_router_db):
    project = create_project(client)

    response = client.get(permission_url("project", project["id"], "archive"))

    assert response.status_code == 422
