import pytest

from projectdb.models.artifact import Artifact
from projectdb.models.employee import Employee
from projectdb.models.enums.status import ProjectStatus, TaskStatus
from projectdb.models.project import Project
from projectdb.models.task import Task
from projectdb.models.update import Update
from tests.helpers.constants import EXTRA_MANAGER, TEST_MANAGER, TEST_STAFF


def employee_named(session, username: str) -> Employee:
    return session.query(Employee).filter(Employee.username == username).one()


@pytest.fixture
def saved_project(session, setup_lib_db):
    """A project of the test manager with one task assigned to the test staff member."""
    manager = employee_named(session, TEST_MANAGER["username"])
    staff = employee_named(session, TEST_STAFF["username"])

    project = Project(title="Test Project", body="", status=ProjectStatus.in_progress, manager=manager)
    Task(title="Test Task", body="", status=TaskStatus.in_progress, project=project, staff=staff)
    session.add(project)
    session.commit()
    session.refresh(project)

    return project


@pytest.fixture
def saved_task(session, saved_project):
    return saved_project.tasks[0]


@pytest.fixture
def saved_update(session, saved_task):
    update = Update(title="Test Update", body="", task=saved_task, author=saved_task.staff)
    session.add(update)
    session.commit()
    session.refresh(update)

    return update


@pytest.fixture
def saved_artifact(session, saved_task):
    artifact = Artifact(description="Test deliverable", task=saved_task)
    session.add(artifact)
    session.commit()
    session.refresh(artifact)

    return artifact


@pytest.fixture
def other_project(session, setup_lib_db):
    """A project of the extra manager with one task assigned to the test staff member."""
    manager = employee_named(session, EXTRA_MANAGER["username"])
    staff = employee_named(session, TEST_STAFF["username"])

    project = Project(title="Other Project", body="", status=ProjectStatus.in_progress, manager=manager)
    Task(title="Other Task", body="", status=TaskStatus.in_progress, project=project, staff=staff)
    session.add(project)
    session.commit()
    session.refresh(project)

    return project
