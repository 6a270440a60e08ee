import pytest

from projectdb.models.employee import Employee

from tests.helpers.constants import TEST_EMPLOYEES, TEST_PASSWORD_HASH


@pytest.fixture
def setup_router_db(session):
    """Set up the database with two managers, two staff members and an admin."""
    db = session
    for employee in TEST_EMPLOYEES:
        db.add(Employee(**employee, password_hash=TEST_PASSWORD_HASH))
    db.commit()
