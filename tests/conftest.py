import logging  # noqa: F401

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from projectdb.db.base import Base
from projectdb.db.session import create_db_engine
from projectdb.models.employee import Employee

from projectdb.models import *  # noqa: F403

from tests.helpers.constants import TEST_EMPLOYEES, TEST_PASSWORD_HASH

# Attempt to import optional top level fixtures. If the modules they depend on are not installed,
# we won't have access to our full fixture suite and only a limited subset of tests can be run.
try:
    from tests.conftest_optional import *  # noqa: F401, F403

except ModuleNotFoundError:
    pass


@pytest.fixture()
def session():
    # Un-comment this line to log all database queries:
    # logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    # A single in-memory connection is shared by every session, so that all of them see the same database.
    engine = create_db_engine("sqlite://", echo=False, poolclass=StaticPool)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()

    Base.metadata.create_all(bind=engine)

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def setup_lib_db(session):
    """
    Sets up the lib test db with two managers, two staff members and an admin.
    """
    db = session
    for employee in TEST_EMPLOYEES:
        db.add(Employee(**employee, password_hash=TEST_PASSWORD_HASH))
    db.commit()
