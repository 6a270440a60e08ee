import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from projectdb import deps
from projectdb.lib.authentication import EmployeeData, hash_password
from projectdb.lib.authorization import require_admin
from projectdb.lib.employees import delete_employee, username_is_taken
from projectdb.lib.logging import LoggedRoute
from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.lib.lookups import find_employee
from projectdb.lib.permissions import Action, assert_permission
from projectdb.models.employee import Employee
from projectdb.routers.shared import (
    ACCESS_CONTROL_ERROR_RESPONSES,
    BASE_409_RESPONSE,
    PUBLIC_ERROR_RESPONSES,
    ROUTER_BASE_PREFIX,
)
from projectdb.view_models import employee

TAG_NAME = "Employees"

router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/employees",
    tags=[TAG_NAME],
    responses={**PUBLIC_ERROR_RESPONSES, **ACCESS_CONTROL_ERROR_RESPONSES},
    route_class=LoggedRoute,
)

metadata = {
    "name": TAG_NAME,
    "description": "Register and manage employee accounts. Restricted to admins.",
}

logger = logging.getLogger(__name__)


@router.get("", status_code=200, response_model=list[employee.Employee], summary="List employees")
async def list_employees(
    *,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_admin),
) -> Any:
    """
    List all employees.
    """
    assert_permission(user_data, None, Action.READ_ALL, Employee)
    return db.execute(select(Employee).order_by(Employee.username)).scalars().all()


@router.post(
    "",
    status_code=200,
    response_model=employee.Employee,
    responses={**BASE_409_RESPONSE},
    summary="Register an employee",
)
async def create_employee(
    *,
    item_create: employee.EmployeeCreate,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_admin),
) -> Any:
    """
    Register a new employee.
    """
    assert_permission(user_data, None, Action.CREATE, Employee)

    save_to_logging_context({"requested_username": item_create.username})
    if username_is_taken(db, item_create.username):
        logger.info(msg="Failed to register employee; The username is taken.", extra=logging_context())
        raise HTTPException(status_code=409, detail=f"Username '{item_create.username}' is already taken")

    item = Employee(
        username=item_create.username,
        role=item_create.role,
        password_hash=hash_password(item_create.password),
    )
    db.add(item)
    db.commit()
    db.refresh(item)

    save_to_logging_context({"created_resource": item.id})
    logger.info(msg="Registered employee.", extra=logging_context())
    return item


@router.get("/{employee_id}", status_code=200, response_model=employee.Employee, summary="Fetch an employee")
async def show_employee(
    *,
    employee_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_admin),
) -> Any:
    """
    Fetch a single employee by ID.
    """
    item = find_employee(db, employee_id, "show employee")
    assert_permission(user_data, item, Action.READ)
    return item


@router.put(
    "/{employee_id}",
    status_code=200,
    response_model=employee.Employee,
    responses={**BASE_409_RESPONSE},
    summary="Change an employee",
)
async def update_employee(
    *,
    employee_id: int,
    item_update: employee.EmployeeModify,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_admin),
) -> Any:
    """
    Change the username, role or password of an employee.
    """
    item = find_employee(db, employee_id, "update employee")
    assert_permission(user_data, item, Action.UPDATE)

    if item_update.username is not None:
        if username_is_taken(db, item_update.username, exclude=item):
            logger.info(msg="Failed to update employee; The username is taken.", extra=logging_context())
            raise HTTPException(status_code=409, detail=f"Username '{item_update.username}' is already taken")

        item.username = item_update.username
    if item_update.role is not None:
        save_to_logging_context({"previous_role": item.role.name, "new_role": item_update.role.name})
        item.role = item_update.role
    if item_update.password is not None:
        item.password_hash = hash_password(item_update.password)

    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.delete("/{employee_id}", responses={**BASE_409_RESPONSE}, summary="Remove an employee")
async def remove_employee(
    *,
    employee_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_admin),
) -> None:
    """
    Remove an employee who no longer manages projects or owns any work.
    """
    item = find_employee(db, employee_id, "delete employee")
    assert_permission(user_data, item, Action.DELETE)

    delete_employee(db, item)
    db.commit()
