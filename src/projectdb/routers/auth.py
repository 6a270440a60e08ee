import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from starlette import status

from projectdb import deps
from projectdb.lib.authentication import EmployeeData, authenticate_employee, create_access_token
from projectdb.lib.authorization import require_current_user
from projectdb.lib.logging import LoggedRoute
from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.routers.shared import ACCESS_CONTROL_ERROR_RESPONSES, PUBLIC_ERROR_RESPONSES, ROUTER_BASE_PREFIX
from projectdb.view_models import employee

TAG_NAME = "Authentication"

router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/auth",
    tags=[TAG_NAME],
    responses={**PUBLIC_ERROR_RESPONSES},
    route_class=LoggedRoute,
)

metadata = {
    "name": TAG_NAME,
    "description": "Sign in and identify the current employee.",
}

logger = logging.getLogger(__name__)


@router.post(
    "/signin",
    status_code=200,
    response_model=employee.SignedInEmployee,
    responses={**ACCESS_CONTROL_ERROR_RESPONSES},
    summary="Exchange credentials for an access token",
)
async def sign_in(*, credentials: employee.SignIn, db: Session = Depends(deps.get_db)) -> Any:
    """
    Sign in with a username and password. The returned access token is presented as a bearer token on later requests.
    """
    save_to_logging_context({"requested_username": credentials.username})

    item = authenticate_employee(db, credentials.username, credentials.password)
    if item is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    logger.info(msg="Employee signed in.", extra=logging_context())
    return employee.SignedInEmployee(
        id=item.id,
        username=item.username,
        role=item.role,
        access_token=create_access_token(item.username),
    )


@router.get(
    "/current",
    status_code=200,
    response_model=employee.Employee,
    responses={**ACCESS_CONTROL_ERROR_RESPONSES},
    summary="Show the signed in employee",
)
async def show_current_employee(*, user_data: EmployeeData = Depends(require_current_user)) -> Any:
    """
    Return the current employee.
    """
    return user_data.employee
