import logging
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from projectdb import deps
from projectdb.lib.authentication import EmployeeData
from projectdb.lib.authorization import RoleRequirer, require_current_user, require_manager
from projectdb.lib.logging import LoggedRoute
from projectdb.lib.logging.context import save_to_logging_context
from projectdb.lib.lookups import find_project
from projectdb.lib.permissions import Action, assert_permission
from projectdb.lib.permissions.summary import entity_permissions, list_permissions
from projectdb.lib.projects import create_project, delete_project, modify_project, set_project_status
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.models.project import Project
from projectdb.routers.shared import ACCESS_CONTROL_ERROR_RESPONSES, PUBLIC_ERROR_RESPONSES, ROUTER_BASE_PREFIX
from projectdb.view_models import project
from projectdb.view_models.envelope import DataResponse, EntityResponse, ListResponse

TAG_NAME = "Projects"

# Projects created outside of a manager's own routes are owned by whoever creates them, so only managers may.
PROJECT_CREATOR_ROLES = [EmployeeRole.manager]

router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/projects",
    tags=[TAG_NAME],
    responses={**PUBLIC_ERROR_RESPONSES, **ACCESS_CONTROL_ERROR_RESPONSES},
    route_class=LoggedRoute,
)

metadata = {
    "name": TAG_NAME,
    "description": "Create, browse and manage projects.",
}

logger = logging.getLogger(__name__)


@router.get("", status_code=200, response_model=ListResponse[project.Project], summary="List projects")
async def list_projects(
    *,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    """
    List every project.
    """
    items = db.execute(select(Project).options(joinedload(Project.manager)).order_by(Project.id)).scalars().all()
    return {
        "data": items,
        "permission": list_permissions(user_data, user_data.employee, Project, roles=PROJECT_CREATOR_ROLES),
    }


@router.post("", status_code=200, response_model=DataResponse[project.Project], summary="Create a project")
async def create_own_project(
    *,
    item_create: project.ProjectCreate,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(RoleRequirer(PROJECT_CREATOR_ROLES)),
) -> Any:
    """
    Create a project managed by the current employee.
    """
    assert_permission(user_data, user_data.employee, Action.CREATE, Project)
    return {"data": create_project(db, user_data.employee, item_create)}


@router.get("/{project_id}", status_code=200, response_model=EntityResponse[project.Project], summary="Fetch a project")
async def show_project(
    *,
    project_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    """
    Fetch a single project by ID.
    """
    item = find_project(db, project_id, action="show project")
    assert_permission(user_data, item, Action.READ)
    return {"data": item, "permission": entity_permissions(user_data, item)}


@router.put("/{project_id}", status_code=200, response_model=DataResponse[project.Project], summary="Change a project")
async def update_project(
    *,
    project_id: int,
    item_update: project.ProjectModify,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> Any:
    """
    Change the title and body of a project.
    """
    item = find_project(db, project_id, action="update project")
    assert_permission(user_data, item, Action.UPDATE)
    return {"data": modify_project(db, item, item_update)}


@router.put(
    "/{project_id}/status",
    status_code=200,
    response_model=DataResponse[project.Project],
    summary="Change the status of a project",
)
async def update_project_status(
    *,
    project_id: int,
    status_update: project.ProjectStatusModify,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> Any:
    """
    Move a project to another status. All other properties are left unchanged.
    """
    item = find_project(db, project_id, action="update project status")
    assert_permission(user_data, item, Action.UPDATE)
    return {"data": set_project_status(db, item, status_update.status)}


@router.delete("/{project_id}", summary="Delete a project")
async def remove_project(
    *,
    project_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> None:
    """
    Delete a project along with all of its tasks.
    """
    save_to_logging_context({"requested_resource": project_id})
    item = find_project(db, project_id, action="delete project")
    assert_permission(user_data, item, Action.DELETE)
    delete_project(db, item)
