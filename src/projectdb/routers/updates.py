import logging
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from projectdb import deps
from projectdb.lib.authentication import EmployeeData
from projectdb.lib.authorization import require_current_user
from projectdb.lib.logging import LoggedRoute
from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.lib.lookups import find_project, find_task, find_update
from projectdb.lib.permissions import Action, assert_permission
from projectdb.lib.permissions.summary import entity_permissions, list_permissions
from projectdb.models.update import Update
from projectdb.routers.shared import ACCESS_CONTROL_ERROR_RESPONSES, PUBLIC_ERROR_RESPONSES, ROUTER_BASE_PREFIX
from projectdb.view_models import update
from projectdb.view_models.envelope import DataResponse, EntityResponse, ListResponse

TAG_NAME = "Updates"

router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/projects/{{project_id}}/tasks/{{task_id}}/updates",
    tags=[TAG_NAME],
    responses={**PUBLIC_ERROR_RESPONSES, **ACCESS_CONTROL_ERROR_RESPONSES},
    route_class=LoggedRoute,
)

metadata = {
    "name": TAG_NAME,
    "description": "Report progress on tasks. Updates are shared between the participants of a task.",
}

logger = logging.getLogger(__name__)


@router.get("", status_code=200, response_model=ListResponse[update.Update], summary="List the updates of a task")
async def list_updates(
    *,
    project_id: int,
    task_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    project = find_project(db, project_id, action="list updates")
    task = find_task(db, project, task_id, action="list updates")
    assert_permission(user_data, task, Action.READ_ALL, Update)

    return {"data": task.updates, "permission": list_permissions(user_data, task, Update)}


@router.post("", status_code=200, response_model=DataResponse[update.Update], summary="Post an update")
async def create_update(
    *,
    project_id: int,
    task_id: int,
    item_create: update.UpdateCreate,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    """
    Post an update to a task. The current employee is recorded as its author.
    """
    project = find_project(db, project_id, action="create update")
    task = find_task(db, project, task_id, action="create update")
    assert_permission(user_data, task, Action.CREATE, Update)

    item = Update(
        title=item_create.title,
        body=item_create.body or "",
        type=item_create.type,
        task=task,
        author=user_data.employee,
    )
    db.add(item)
    db.commit()
    db.refresh(item)

    save_to_logging_context({"created_resource": item.id})
    logger.info(msg="Posted update.", extra=logging_context())
    return {"data": item}


@router.get("/{update_id}", status_code=200, response_model=EntityResponse[update.Update], summary="Fetch an update")
async def show_update(
    *,
    project_id: int,
    task_id: int,
    update_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    project = find_project(db, project_id, action="show update")
    task = find_task(db, project, task_id, action="show update")
    item = find_update(db, task, update_id, action="show update")
    assert_permission(user_data, item, Action.READ)

    return {"data": item, "permission": entity_permissions(user_data, item)}


@router.put("/{update_id}", status_code=200, response_model=DataResponse[update.Update], summary="Change an update")
async def update_update(
    *,
    project_id: int,
    task_id: int,
    update_id: int,
    item_update: update.UpdateModify,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    project = find_project(db, project_id, action="update update")
    task = find_task(db, project, task_id, action="update update")
    item = find_update(db, task, update_id, action="update update")
    assert_permission(user_data, item, Action.UPDATE)

    item.title = item_update.title
    item.body = item_update.body or ""
    item.type = item_update.type

    db.add(item)
    db.commit()
    db.refresh(item)
    return {"data": item}


@router.delete("/{update_id}", summary="Delete an update")
async def remove_update(
    *,
    project_id: int,
    task_id: int,
    update_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> None:
    """
    Delete an update and its comments. An artifact the update served as proof for loses its proof.
    """
    project = find_project(db, project_id, action="delete update")
    task = find_task(db, project, task_id, action="delete update")
    item = find_update(db, task, update_id, action="delete update")
    assert_permission(user_data, item, Action.DELETE)

    save_to_logging_context({"deleted_resource": item.id})
    db.delete(item)
    db.commit()

    logger.info(msg="Deleted update.", extra=logging_context())
