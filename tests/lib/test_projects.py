import pytest

from projectdb.lib.projects import create_project, delete_project, modify_project, set_project_status
from projectdb.models.artifact import Artifact
from projectdb.models.comment import Comment
from projectdb.models.enums.status import ProjectStatus
from projectdb.models.project import Project
from projectdb.models.task import Task
from projectdb.models.update import Update
from projectdb.view_models.project import ProjectCreate, ProjectModify
from tests.helpers.constants import ADMIN_USER, EXTRA_MANAGER, TEST_MANAGER, TEST_STAFF
from tests.lib.conftest import employee_named


def test_create_project(session, setup_lib_db):
    manager = employee_named(session, TEST_MANAGER["username"])

    project = create_project(session, manager, ProjectCreate(title="New Project"))

    assert project.id is not None
    assert project.manager is manager
    assert project.status == ProjectStatus.in_progress
    assert project.body == ""


def test_modify_project_keeps_status_and_manager(session, saved_project):
    set_project_status(session, saved_project, ProjectStatus.done)

    project = modify_project(session, saved_project, ProjectModify(title="Renamed", body="New body"))

    assert project.title == "Renamed"
    assert project.body == "New body"
    assert project.status == ProjectStatus.done
    assert project.manager.id == TEST_MANAGER["id"]


@pytest.mark.parametrize("status", list(ProjectStatus))
def test_any_status_may_be_set(session, saved_project, status):
    assert set_project_status(session, saved_project, status).status == status


def test_delete_project_cascades(session, saved_project, saved_update, saved_artifact):
    Comment(body="Looks good", update=saved_update, author=saved_update.author)
    saved_artifact.update = saved_update
    session.commit()

    delete_project(session, saved_project)

    assert session.query(Project).count() == 0
    assert session.query(Task).count() == 0
    assert session.query(Update).count() == 0
    assert session.query(Comment).count() == 0
    assert session.query(Artifact).count() == 0


def test_delete_project_leaves_other_projects(session, saved_project, other_project):
    delete_project(session, saved_project)

    assert session.query(Project).all() == [other_project]
    assert session.query(Task).all() == other_project.tasks


@pytest.mark.parametrize(
    "employee,is_manager",
    [(TEST_MANAGER, True), (ADMIN_USER, True), (EXTRA_MANAGER, False), (TEST_STAFF, False)],
)
def test_is_manager(session, saved_project, employee, is_manager):
    assert saved_project.is_manager(employee_named(session, employee["username"])) is is_manager


def test_task_participants(session, saved_task):
    staff = employee_named(session, TEST_STAFF["username"])
    other_manager = employee_named(session, EXTRA_MANAGER["username"])

    assert saved_task.is_participant(staff)
    assert saved_task.is_staff(staff)
    assert not saved_task.is_manager(staff)
    assert not saved_task.is_participant(other_manager)


def test_task_cannot_move_to_another_project(session, saved_task, other_project):
    with pytest.raises(ValueError):
        saved_task.project = other_project
