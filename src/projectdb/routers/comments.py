import logging
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from projectdb import deps
from projectdb.lib.authentication import EmployeeData
from projectdb.lib.authorization import require_current_user
from projectdb.lib.logging import LoggedRoute
from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.lib.lookups import find_comment, find_project, find_task, find_update
from projectdb.lib.permissions import Action, assert_permission
from projectdb.lib.permissions.summary import entity_permissions, list_permissions
from projectdb.models.comment import Comment
from projectdb.routers.shared import ACCESS_CONTROL_ERROR_RESPONSES, PUBLIC_ERROR_RESPONSES, ROUTER_BASE_PREFIX
from projectdb.view_models import comment
from projectdb.view_models.envelope import DataResponse, EntityResponse, ListResponse

TAG_NAME = "Comments"

router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/projects/{{project_id}}/tasks/{{task_id}}/updates/{{update_id}}/comments",
    tags=[TAG_NAME],
    responses={**PUBLIC_ERROR_RESPONSES, **ACCESS_CONTROL_ERROR_RESPONSES},
    route_class=LoggedRoute,
)

metadata = {
    "name": TAG_NAME,
    "description": "Discuss task updates.",
}

logger = logging.getLogger(__name__)


@router.get("", status_code=200, response_model=ListResponse[comment.Comment], summary="List the comments on an update")
async def list_comments(
    *,
    project_id: int,
    task_id: int,
    update_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    project = find_project(db, project_id, action="list comments")
    task = find_task(db, project, task_id, action="list comments")
    parent = find_update(db, task, update_id, action="list comments")
    assert_permission(user_data, parent, Action.READ_ALL, Comment)

    return {"data": parent.comments, "permission": list_permissions(user_data, parent, Comment)}


@router.post("", status_code=200, response_model=DataResponse[comment.Comment], summary="Comment on an update")
async def create_comment(
    *,
    project_id: int,
    task_id: int,
    update_id: int,
    item_create: comment.CommentCreate,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    project = find_project(db, project_id, action="create comment")
    task = find_task(db, project, task_id, action="create comment")
    parent = find_update(db, task, update_id, action="create comment")
    assert_permission(user_data, parent, Action.CREATE, Comment)

    item = Comment(body=item_create.body, update=parent, author=user_data.employee)
    db.add(item)
    db.commit()
    db.refresh(item)

    save_to_logging_context({"created_resource": item.id})
    logger.info(msg="Posted comment.", extra=logging_context())
    return {"data": item}


@router.get(
    "/{comment_id}", status_code=200, response_model=EntityResponse[comment.Comment], summary="Fetch a comment"
)
async def show_comment(
    *,
    project_id: int,
    task_id: int,
    update_id: int,
    comment_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    project = find_project(db, project_id, action="show comment")
    task = find_task(db, project, task_id, action="show comment")
    parent = find_update(db, task, update_id, action="show comment")
    item = find_comment(db, parent, comment_id, action="show comment")
    assert_permission(user_data, item, Action.READ)

    return {"data": item, "permission": entity_permissions(user_data, item)}


@router.put("/{comment_id}", status_code=200, response_model=DataResponse[comment.Comment], summary="Change a comment")
async def update_comment(
    *,
    project_id: int,
    task_id: int,
    update_id: int,
    comment_id: int,
    item_update: comment.CommentModify,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    project = find_project(db, project_id, action="update comment")
    task = find_task(db, project, task_id, action="update comment")
    parent = find_update(db, task, update_id, action="update comment")
    item = find_comment(db, parent, comment_id, action="update comment")
    assert_permission(user_data, item, Action.UPDATE)

    item.body = item_update.body

    db.add(item)
    db.commit()
    db.refresh(item)
    return {"data": item}


@router.delete("/{comment_id}", summary="Delete a comment")
async def remove_comment(
    *,
    project_id: int,
    task_id: int,
    update_id: int,
    comment_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> None:
    project = find_project(db, project_id, action="delete comment")
    task = find_task(db, project, task_id, action="delete comment")
    parent = find_update(db, task, update_id, action="delete comment")
    item = find_comment(db, parent, comment_id, action="delete comment")
    assert_permission(user_data, item, Action.DELETE)

    save_to_logging_context({"deleted_resource": item.id})
    db.delete(item)
    db.commit()

    logger.info(msg="Deleted comment.", extra=logging_context())
