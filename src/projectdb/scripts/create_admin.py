"""
Register the first admin of a fresh database. Every other employee is registered through the API by an admin.

Usage:
```
python3 -m projectdb.scripts.create_admin --username admin --password 'Secret-Password1' --commit
```
"""

import logging

import click
from sqlalchemy.orm import Session

from projectdb.lib.authentication import hash_password
from projectdb.lib.employees import username_is_taken
from projectdb.lib.logging.models import LogType
from projectdb.lib.validation.exceptions import ValidationError
from projectdb.models.employee import Employee
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.scripts.environment import with_database_session
from projectdb.view_models.employee import validate_password, validate_username

logger = logging.getLogger(__name__)


@click.command()
@with_database_session
@click.option("--username", required=True, help="Username of the new admin.")
@click.option("--password", required=True, help="Password of the new admin.")
def create_admin(db: Session, username: str, password: str) -> None:
    log_ctx = {"log_type": LogType.script, "requested_username": username}

    try:
        validate_username(username)
        validate_password(password)
    except ValidationError as e:
        raise click.BadParameter(str(e))

    if username_is_taken(db, username):
        raise click.ClickException(f"Username '{username}' is already taken.")

    admin = Employee(username=username, role=EmployeeRole.admin, password_hash=hash_password(password))
    db.add(admin)
    db.flush()

    logger.info(msg="Registered admin.", extra={**log_ctx, "created_resource": admin.id})


if __name__ == "__main__":
    create_admin()
