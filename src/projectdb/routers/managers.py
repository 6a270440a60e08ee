import logging
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from projectdb import deps
from projectdb.lib.authentication import EmployeeData
from projectdb.lib.authorization import require_current_user, require_manager
from projectdb.lib.logging import LoggedRoute
from projectdb.lib.lookups import find_manager, find_project
from projectdb.lib.permissions import Action, assert_permission, can_manage, can_view, has_permission
from projectdb.lib.permissions.summary import entity_permissions, list_permissions
from projectdb.lib.projects import create_project, delete_project, modify_project, set_project_status
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.models.project import Project
from projectdb.routers.shared import ACCESS_CONTROL_ERROR_RESPONSES, PUBLIC_ERROR_RESPONSES, ROUTER_BASE_PREFIX
from projectdb.view_models import project
from projectdb.view_models.employee import EmployeeSummary
from projectdb.view_models.envelope import DataResponse, EntityResponse, ListResponse

TAG_NAME = "Managers"

MANAGER_PROJECTS_LABEL = "Manager's Project"

router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/managers",
    tags=[TAG_NAME],
    responses={**PUBLIC_ERROR_RESPONSES, **ACCESS_CONTROL_ERROR_RESPONSES},
    route_class=LoggedRoute,
)

metadata = {
    "name": TAG_NAME,
    "description": "Look up managers and manage the projects they own.",
}

logger = logging.getLogger(__name__)


@router.get("/{manager_id}", status_code=200, response_model=DataResponse[EmployeeSummary], summary="Fetch a manager")
async def show_manager(
    *,
    manager_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    """
    Fetch a manager by ID. Employees with any other role are reported as missing.
    """
    return {"data": find_manager(db, manager_id, action="show manager")}


@router.get(
    "/{manager_id}/projects",
    status_code=200,
    response_model=ListResponse[project.Project],
    summary="List the projects of a manager",
)
async def list_manager_projects(
    *,
    manager_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    """
    List the projects owned by a manager. Only that manager and admins may do so.
    """
    manager = find_manager(db, manager_id, action="list manager projects")
    can_view(has_permission(user_data, manager, Action.READ_ALL, Project).permitted, MANAGER_PROJECTS_LABEL)

    items = (
        db.execute(
            select(Project)
            .options(joinedload(Project.manager))
            .where(Project.manager_id == manager.id)
            .order_by(Project.id)
        )
        .scalars()
        .all()
    )
    return {
        "data": items,
        "permission": list_permissions(
            user_data, manager, Project, roles=[EmployeeRole.manager, EmployeeRole.admin]
        ),
    }


@router.post(
    "/{manager_id}/projects",
    status_code=200,
    response_model=DataResponse[project.Project],
    summary="Create a project for a manager",
)
async def create_manager_project(
    *,
    manager_id: int,
    item_create: project.ProjectCreate,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> Any:
    """
    Create a project owned by a manager.
    """
    manager = find_manager(db, manager_id, action="create manager project")
    can_manage(has_permission(user_data, manager, Action.CREATE, Project).permitted, MANAGER_PROJECTS_LABEL)

    return {"data": create_project(db, manager, item_create)}


@router.get(
    "/{manager_id}/projects/{project_id}",
    status_code=200,
    response_model=EntityResponse[project.Project],
    summary="Fetch a project of a manager",
)
async def show_manager_project(
    *,
    manager_id: int,
    project_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    """
    Fetch a project owned by a manager. Projects owned by anyone else are reported as missing.
    """
    manager = find_manager(db, manager_id, action="show manager project")
    item = find_project(db, project_id, manager=manager, action="show manager project")
    assert_permission(user_data, item, Action.READ)

    return {"data": item, "permission": entity_permissions(user_data, item)}


@router.put(
    "/{manager_id}/projects/{project_id}",
    status_code=200,
    response_model=DataResponse[project.Project],
    summary="Change a project of a manager",
)
async def update_manager_project(
    *,
    manager_id: int,
    project_id: int,
    item_update: project.ProjectModify,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> Any:
    manager = find_manager(db, manager_id, action="update manager project")
    item = find_project(db, project_id, manager=manager, action="update manager project")
    assert_permission(user_data, item, Action.UPDATE)

    return {"data": modify_project(db, item, item_update)}


@router.put(
    "/{manager_id}/projects/{project_id}/status",
    status_code=200,
    response_model=DataResponse[project.Project],
    summary="Change the status of a project of a manager",
)
async def update_manager_project_status(
    *,
    manager_id: int,
    project_id: int,
    status_update: project.ProjectStatusModify,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> Any:
    manager = find_manager(db, manager_id, action="update manager project status")
    item = find_project(db, project_id, manager=manager, action="update manager project status")
    assert_permission(user_data, item, Action.UPDATE)

    return {"data": set_project_status(db, item, status_update.status)}


@router.delete("/{manager_id}/projects/{project_id}", summary="Delete a project of a manager")
async def remove_manager_project(
    *,
    manager_id: int,
    project_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> None:
    """
    Delete a project owned by a manager, along with all of its tasks.
    """
    manager = find_manager(db, manager_id, action="delete manager project")
    item = find_project(db, project_id, manager=manager, action="delete manager project")
    assert_permission(user_data, item, Action.DELETE)

    delete_project(db, item)
