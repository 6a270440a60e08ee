import logging
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from projectdb import deps
from projectdb.lib.authentication import EmployeeData
from projectdb.lib.authorization import require_current_user, require_manager
from projectdb.lib.logging import LoggedRoute
from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.lib.lookups import find_employee, find_project, find_task
from projectdb.lib.permissions import Action, assert_permission
from projectdb.lib.permissions.summary import entity_permissions, list_permissions
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.models.enums.status import TaskStatus
from projectdb.models.task import Task
from projectdb.routers.shared import ACCESS_CONTROL_ERROR_RESPONSES, PUBLIC_ERROR_RESPONSES, ROUTER_BASE_PREFIX
from projectdb.view_models import task
from projectdb.view_models.envelope import DataResponse, EntityResponse, ListResponse

TAG_NAME = "Tasks"

router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/projects/{{project_id}}/tasks",
    tags=[TAG_NAME],
    responses={**PUBLIC_ERROR_RESPONSES, **ACCESS_CONTROL_ERROR_RESPONSES},
    route_class=LoggedRoute,
)

metadata = {
    "name": TAG_NAME,
    "description": "Break projects down into tasks and assign them to employees.",
}

logger = logging.getLogger(__name__)


@router.get("", status_code=200, response_model=ListResponse[task.Task], summary="List the tasks of a project")
async def list_tasks(
    *,
    project_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    project = find_project(db, project_id, action="list tasks")
    assert_permission(user_data, project, Action.READ_ALL, Task)

    return {
        "data": project.tasks,
        "permission": list_permissions(user_data, project, Task, roles=[EmployeeRole.manager, EmployeeRole.admin]),
    }


@router.post("", status_code=200, response_model=DataResponse[task.Task], summary="Create a task")
async def create_task(
    *,
    project_id: int,
    item_create: task.TaskCreate,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> Any:
    """
    Create a task in a project and assign it to an employee.
    """
    project = find_project(db, project_id, action="create task")
    assert_permission(user_data, project, Action.CREATE, Task)
    staff = find_employee(db, item_create.employee_id, action="assign task")

    item = Task(
        title=item_create.title,
        body=item_create.body or "",
        status=TaskStatus.in_progress,
        project=project,
        staff=staff,
    )
    db.add(item)
    db.commit()
    db.refresh(item)

    save_to_logging_context({"created_resource": item.id, "assignee": staff.id})
    logger.info(msg="Created task.", extra=logging_context())
    return {"data": item}


@router.get("/{task_id}", status_code=200, response_model=EntityResponse[task.Task], summary="Fetch a task")
async def show_task(
    *,
    project_id: int,
    task_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    """
    Fetch a task. Tasks are only found under the project they belong to.
    """
    project = find_project(db, project_id, action="show task")
    item = find_task(db, project, task_id, action="show task")
    assert_permission(user_data, item, Action.READ)

    return {"data": item, "permission": entity_permissions(user_data, item)}


@router.put("/{task_id}", status_code=200, response_model=DataResponse[task.Task], summary="Change a task")
async def update_task(
    *,
    project_id: int,
    task_id: int,
    item_update: task.TaskModify,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> Any:
    """
    Change the title, body and assignee of a task.
    """
    project = find_project(db, project_id, action="update task")
    item = find_task(db, project, task_id, action="update task")
    assert_permission(user_data, item, Action.UPDATE)
    staff = find_employee(db, item_update.employee_id, action="assign task")

    if staff.id != item.staff.id:
        save_to_logging_context({"previous_assignee": item.staff.id, "new_assignee": staff.id})
        logger.info(msg="Reassigned task.", extra=logging_context())

    item.title = item_update.title
    item.body = item_update.body or ""
    item.staff = staff

    db.add(item)
    db.commit()
    db.refresh(item)
    return {"data": item}


@router.put(
    "/{task_id}/status",
    status_code=200,
    response_model=DataResponse[task.Task],
    summary="Change the status of a task",
)
async def update_task_status(
    *,
    project_id: int,
    task_id: int,
    status_update: task.TaskStatusModify,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> Any:
    project = find_project(db, project_id, action="update task status")
    item = find_task(db, project, task_id, action="update task status")
    assert_permission(user_data, item, Action.UPDATE)

    save_to_logging_context({"previous_status": item.status.name, "new_status": status_update.status.name})
    item.status = status_update.status

    db.add(item)
    db.commit()
    db.refresh(item)
    return {"data": item}


@router.delete("/{task_id}", summary="Delete a task")
async def remove_task(
    *,
    project_id: int,
    task_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> None:
    """
    Delete a task along with its updates and artifacts.
    """
    project = find_project(db, project_id, action="delete task")
    item = find_task(db, project, task_id, action="delete task")
    assert_permission(user_data, item, Action.DELETE)

    save_to_logging_context({"deleted_resource": item.id})
    db.delete(item)
    db.commit()

    logger.info(msg="Deleted task.", extra=logging_context())
