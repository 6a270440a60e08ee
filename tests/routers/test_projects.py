from copy import deepcopy

import jsonschema
import pytest

from projectdb.view_models.project import Project

from tests.helpers.constants import (
    ENTITY_PERMISSION_DENIED,
    ENTITY_PERMISSION_GRANTED,
    LIST_PERMISSION_DENIED,
    LIST_PERMISSION_GRANTED,
    TEST_EMPLOYEE_SUMMARY,
    TEST_MINIMAL_PROJECT,
    TEST_PROJECT,
)
from tests.helpers.dependency_overrider import DependencyOverrider
from tests.helpers.util.project import create_project
from tests.helpers.util.task import create_task


def test_create_project(client, setup_router_db):
    response = client.post("/api/v1/projects", json=TEST_PROJECT)

    assert response.status_code == 200
    response_data = response.json()["data"]
    jsonschema.validate(instance=response_data, schema=Project.model_json_schema())
    assert response_data["title"] == TEST_PROJECT["title"]
    assert response_data["body"] == TEST_PROJECT["body"]
    assert response_data["status"] == "IN_PROGRESS"
    assert response_data["manager"] == TEST_EMPLOYEE_SUMMARY
    assert response_data["recordType"] == "Project"
    assert "permission" not in response.json()


def test_create_project_without_body(client, setup_router_db):
    response = client.post("/api/v1/projects", json=TEST_MINIMAL_PROJECT)

    assert response.status_code == 200
    assert response.json()["data"]["body"] is None


def test_cannot_create_project_without_title(client, setup_router_db):
    response = client.post("/api/v1/projects", json={"body": "No title"})

    assert response.status_code == 422


def test_cannot_create_project_with_empty_title(client, setup_router_db):
    response = client.post("/api/v1/projects", json={"title": ""})

    assert response.status_code == 422


def test_cannot_create_project_as_anonymous_user(client, setup_router_db, anonymous_app_overrides):
    with DependencyOverrider(anonymous_app_overrides):
        response = client.post("/api/v1/projects", json=TEST_PROJECT)

    assert response.status_code == 401


@pytest.mark.parametrize("overrides", ["staff_app_overrides", "admin_app_overrides"])
def test_only_managers_create_projects_of_their_own(client, setup_router_db, overrides, request):
    with DependencyOverrider(request.getfixturevalue(overrides)):
        response = client.post("/api/v1/projects", json=TEST_PROJECT)

    assert response.status_code == 403
    assert response.json()["detail"] == "You are not authorized to use this feature"


def test_list_projects_as_manager(client, setup_router_db):
    project = create_project(client)

    response = client.get("/api/v1/projects")

    assert response.status_code == 200
    response_value = response.json()
    assert [item["id"] for item in response_value["data"]] == [project["id"]]
    assert response_value["permission"] == LIST_PERMISSION_GRANTED


@pytest.mark.parametrize("overrides", ["staff_app_overrides", "admin_app_overrides"])
def test_list_projects_reports_no_create_permission_to_non_managers(client, setup_router_db, overrides, request):
    create_project(client)

    with DependencyOverrider(request.getfixturevalue(overrides)):
        response = client.get("/api/v1/projects")

    assert response.status_code == 200
    response_value = response.json()
    assert len(response_value["data"]) == 1
    assert response_value["permission"] == LIST_PERMISSION_DENIED


def test_cannot_list_projects_as_anonymous_user(client, setup_router_db, anonymous_app_overrides):
    with DependencyOverrider(anonymous_app_overrides):
        response = client.get("/api/v1/projects")

    assert response.status_code == 401


def test_show_project_as_manager(client, setup_router_db):
    project = create_project(client)

    response = client.get(f"/api/v1/projects/{project['id']}")

    assert response.status_code == 200
    response_value = response.json()
    assert response_value["data"] == project
    assert response_value["permission"] == ENTITY_PERMISSION_GRANTED


@pytest.mark.parametrize("overrides", ["staff_app_overrides", "extra_manager_app_overrides"])
def test_show_project_as_other_employee(client, setup_router_db, overrides, request):
    project = create_project(client)

    with DependencyOverrider(request.getfixturevalue(overrides)):
        response = client.get(f"/api/v1/projects/{project['id']}")

    assert response.status_code == 200
    assert response.json()["permission"] == ENTITY_PERMISSION_DENIED


def test_show_project_as_admin(client, setup_router_db, admin_app_overrides):
    project = create_project(client)

    with DependencyOverrider(admin_app_overrides):
        response = client.get(f"/api/v1/projects/{project['id']}")

    assert response.status_code == 200
    assert response.json()["permission"] == ENTITY_PERMISSION_GRANTED


def test_cannot_show_project_as_anonymous_user(client, setup_router_db, anonymous_app_overrides):
    project = create_project(client)

    with DependencyOverrider(anonymous_app_overrides):
        response = client.get(f"/api/v1/projects/{project['id']}")

    assert response.status_code == 401


def test_show_unknown_project_is_not_found(client, setup_router_db):
    response = client.get("/api/v1/projects/999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Project with ID 999 not found"


def test_update_project(client, setup_router_db):
    project = create_project(client)

    response = client.put(f"/api/v1/projects/{project['id']}", json={"title": "Renamed", "body": "New body"})

    assert response.status_code == 200
    response_data = response.json()["data"]
    assert response_data["title"] == "Renamed"
    assert response_data["body"] == "New body"
    assert response_data["status"] == project["status"]
    assert response_data["manager"] == project["manager"]


def test_cannot_update_project_of_other_manager(client, setup_router_db, extra_manager_app_overrides):
    project = create_project(client)

    with DependencyOverrider(extra_manager_app_overrides):
        response = client.put(f"/api/v1/projects/{project['id']}", json={"title": "Renamed"})

    assert response.status_code == 403
    assert response.json()["detail"] == "cannot manage Project"


def test_cannot_update_project_as_staff(client, setup_router_db, staff_app_overrides):
    project = create_project(client)

    with DependencyOverrider(staff_app_overrides):
        response = client.put(f"/api/v1/projects/{project['id']}", json={"title": "Renamed"})

    assert response.status_code == 403
    assert response.json()["detail"] == "You are not authorized to use this feature"


def test_admin_can_update_any_project(client, setup_router_db, admin_app_overrides):
    project = create_project(client)

    with DependencyOverrider(admin_app_overrides):
        response = client.put(f"/api/v1/projects/{project['id']}", json={"title": "Renamed by admin"})

    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Renamed by admin"


def test_update_unknown_project_is_not_found_for_any_manager(client, setup_router_db, extra_manager_app_overrides):
    with DependencyOverrider(extra_manager_app_overrides):
        response = client.put("/api/v1/projects/999", json={"title": "Renamed"})

    assert response.status_code == 404


def test_owning_manager_can_change_project_status(client, setup_router_db):
    project = create_project(client)

    response = client.put(f"/api/v1/projects/{project['id']}/status", json={"status": "DONE"})

    assert response.status_code == 200
    response_data = response.json()["data"]
    assert response_data["status"] == "DONE"
    expected = deepcopy(project)
    expected["status"] = "DONE"
    assert {k: v for k, v in response_data.items() if k != "modificationDate"} == {
        k: v for k, v in expected.items() if k != "modificationDate"
    }


def test_other_manager_cannot_change_project_status(client, setup_router_db, extra_manager_app_overrides):
    project = create_project(client)

    with DependencyOverrider(extra_manager_app_overrides):
        response = client.put(f"/api/v1/projects/{project['id']}/status", json={"status": "DONE"})

    assert response.status_code == 403
    assert response.json()["detail"] == "cannot manage Project"

    unchanged = client.get(f"/api/v1/projects/{project['id']}").json()["data"]
    assert unchanged["status"] == "IN_PROGRESS"


def test_any_status_may_follow_any_other(client, setup_router_db):
    project = create_project(client)

    for status in ("CANCELLED", "IN_PROGRESS", "DONE", "CANCELLED"):
        response = client.put(f"/api/v1/projects/{project['id']}/status", json={"status": status})
        assert response.status_code == 200
        assert response.json()["data"]["status"] == status


def test_cannot_change_project_to_unknown_status(client, setup_router_db):
    project = create_project(client)

    response = client.put(f"/api/v1/projects/{project['id']}/status", json={"status": "ARCHIVED"})

    assert response.status_code == 422


def test_delete_project(client, setup_router_db):
    project = create_project(client)

    response = client.delete(f"/api/v1/projects/{project['id']}")
    assert response.status_code == 200

    fetch_response = client.get(f"/api/v1/projects/{project['id']}")
    assert fetch_response.status_code == 404


def test_deleting_project_removes_its_tasks(client, setup_router_db):
    project = create_project(client)
    task = create_task(client, project["id"])

    response = client.delete(f"/api/v1/projects/{project['id']}")
    assert response.status_code == 200

    task_response = client.get(f"/api/v1/projects/{project['id']}/tasks/{task['id']}")
    assert task_response.status_code == 404


def test_cannot_delete_project_of_other_manager(client, setup_router_db, extra_manager_app_overrides):
    project = create_project(client)

    with DependencyOverrider(extra_manager_app_overrides):
        response = client.delete(f"/api/v1/projects/{project['id']}")

    assert response.status_code == 403
    assert client.get(f"/api/v1/projects/{project['id']}").status_code == 200
