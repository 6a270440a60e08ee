import logging
from enum import Enum
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from projectdb import deps
from projectdb.lib.authentication import EmployeeData, get_current_user
from projectdb.lib.logging import LoggedRoute
from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.lib.permissions import Action, has_permission
from projectdb.lib.permissions.actions import PARENT_ACTIONS
from projectdb.models.artifact import Artifact
from projectdb.models.comment import Comment
from projectdb.models.employee import Employee
from projectdb.models.project import Project
from projectdb.models.task import Task
from projectdb.models.update import Update
from projectdb.routers.shared import (
    ACCESS_CONTROL_ERROR_RESPONSES,
    BASE_400_RESPONSE,
    PUBLIC_ERROR_RESPONSES,
    ROUTER_BASE_PREFIX,
)

TAG_NAME = "Permissions"

router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/permissions",
    tags=[TAG_NAME],
    responses={**PUBLIC_ERROR_RESPONSES},
    route_class=LoggedRoute,
)

metadata = {
    "name": TAG_NAME,
    "description": "Check employee permissions on ProjectDB resources.",
}

logger = logging.getLogger(__name__)


class ModelName(str, Enum):
    artifact = "artifact"
    comment = "comment"
    employee = "employee"
    project = "project"
    task = "task"
    update = "update"


MODELS_BY_NAME: dict[ModelName, type] = {
    ModelName.artifact: Artifact,
    ModelName.comment: Comment,
    ModelName.employee: Employee,
    ModelName.project: Project,
    ModelName.task: Task,
    ModelName.update: Update,
}


@router.get(
    "/user-is-permitted/{model_name}/{id}/{action}",
    status_code=200,
    response_model=bool,
    responses={**ACCESS_CONTROL_ERROR_RESPONSES, **BASE_400_RESPONSE},
    summary="Check user permissions on a resource",
)
async def check_permission(
    *,
    model_name: ModelName,
    id: int,
    action: Action,
    db: Session = Depends(deps.get_db),
    user_data: Optional[EmployeeData] = Depends(get_current_user),
) -> bool:
    """
    Check whether the current employee may perform a given action on a resource. Creating and listing are checked
    against the parent of the new or listed entities, and so cannot be answered here.
    """
    save_to_logging_context({"requested_resource": id, "resource_type": model_name.value})

    if action in PARENT_ACTIONS:
        logger.debug(msg="The requested action is not checked against single resources.", extra=logging_context())
        raise HTTPException(
            status_code=400, detail=f"Action '{action.value}' can not be checked against a single {model_name.value}"
        )

    model = MODELS_BY_NAME[model_name]
    item = db.execute(select(model).where(model.id == id)).scalars().one_or_none()

    if item:
        return has_permission(user_data, item, action).permitted
    else:
        logger.debug(msg="The requested resource does not exist.", extra=logging_context())
        raise HTTPException(status_code=404, detail=f"{model_name.value} with ID {id} not found")
