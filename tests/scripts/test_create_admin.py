from unittest import mock

import pytest
from click.testing import CliRunner

from projectdb.models.employee import Employee
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.scripts.create_admin import create_admin
from tests.helpers.constants import TEST_PASSWORD, TEST_STAFF


@pytest.fixture
def run_script(session):
    def get_db():
        yield session

    def run(*args):
        with mock.patch("projectdb.scripts.environment.deps.get_db", get_db):
            return CliRunner().invoke(create_admin, list(args))

    return run


def admins_named(session, username):
    return session.query(Employee).filter(Employee.username == username, Employee.role == EmployeeRole.admin).all()


def test_create_admin(session, setup_lib_db, run_script):
    result = run_script("--username", "new-admin", "--password", TEST_PASSWORD, "--commit")

    assert result.exit_code == 0, result.output
    assert len(admins_named(session, "new-admin")) == 1


def test_dry_run_creates_nothing(session, setup_lib_db, run_script):
    result = run_script("--username", "new-admin", "--password", TEST_PASSWORD)

    assert result.exit_code == 0, result.output
    assert admins_named(session, "new-admin") == []


def test_username_must_be_free(session, setup_lib_db, run_script):
    result = run_script("--username", TEST_STAFF["username"], "--password", TEST_PASSWORD, "--commit")

    assert result.exit_code == 1
    assert "is already taken" in result.output


def test_password_must_be_strong(session, setup_lib_db, run_script):
    result = run_script("--username", "new-admin", "--password", "weak", "--commit")

    assert result.exit_code == 2
    assert admins_named(session, "new-admin") == []
