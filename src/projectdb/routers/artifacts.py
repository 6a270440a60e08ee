import logging
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from projectdb import deps
from projectdb.lib.artifacts import assign_update, unassign_update
from projectdb.lib.authentication import EmployeeData
from projectdb.lib.authorization import require_current_user, require_manager
from projectdb.lib.logging import LoggedRoute
from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.lib.lookups import find_artifact, find_project, find_project_update, find_task
from projectdb.lib.permissions import Action, assert_permission
from projectdb.lib.permissions.summary import entity_permissions, list_permissions
from projectdb.models.artifact import Artifact
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.routers.shared import (
    ACCESS_CONTROL_ERROR_RESPONSES,
    BASE_400_RESPONSE,
    BASE_409_RESPONSE,
    PUBLIC_ERROR_RESPONSES,
    ROUTER_BASE_PREFIX,
)
from projectdb.view_models import artifact
from projectdb.view_models.envelope import DataResponse, EntityResponse, ListResponse

TAG_NAME = "Artifacts"

router = APIRouter(
    prefix=f"{ROUTER_BASE_PREFIX}/projects/{{project_id}}/tasks/{{task_id}}/artifacts",
    tags=[TAG_NAME],
    responses={**PUBLIC_ERROR_RESPONSES, **ACCESS_CONTROL_ERROR_RESPONSES},
    route_class=LoggedRoute,
)

metadata = {
    "name": TAG_NAME,
    "description": "Track the deliverables of a task and the updates that prove them.",
}

logger = logging.getLogger(__name__)


@router.get(
    "", status_code=200, response_model=ListResponse[artifact.Artifact], summary="List the artifacts of a task"
)
async def list_artifacts(
    *,
    project_id: int,
    task_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    project = find_project(db, project_id, action="list artifacts")
    task = find_task(db, project, task_id, action="list artifacts")
    assert_permission(user_data, task, Action.READ_ALL, Artifact)

    return {
        "data": task.artifacts,
        "permission": list_permissions(
            user_data, task, Artifact, roles=[EmployeeRole.manager, EmployeeRole.admin]
        ),
    }


@router.post("", status_code=200, response_model=DataResponse[artifact.Artifact], summary="Create an artifact")
async def create_artifact(
    *,
    project_id: int,
    task_id: int,
    item_create: artifact.ArtifactCreate,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> Any:
    project = find_project(db, project_id, action="create artifact")
    task = find_task(db, project, task_id, action="create artifact")
    assert_permission(user_data, task, Action.CREATE, Artifact)

    item = Artifact(description=item_create.description, task=task)
    db.add(item)
    db.commit()
    db.refresh(item)

    save_to_logging_context({"created_resource": item.id})
    logger.info(msg="Created artifact.", extra=logging_context())
    return {"data": item}


@router.get(
    "/{artifact_id}", status_code=200, response_model=EntityResponse[artifact.Artifact], summary="Fetch an artifact"
)
async def show_artifact(
    *,
    project_id: int,
    task_id: int,
    artifact_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_current_user),
) -> Any:
    project = find_project(db, project_id, action="show artifact")
    task = find_task(db, project, task_id, action="show artifact")
    item = find_artifact(db, task, artifact_id, action="show artifact")
    assert_permission(user_data, item, Action.READ)

    return {"data": item, "permission": entity_permissions(user_data, item)}


@router.put(
    "/{artifact_id}", status_code=200, response_model=DataResponse[artifact.Artifact], summary="Change an artifact"
)
async def update_artifact(
    *,
    project_id: int,
    task_id: int,
    artifact_id: int,
    item_update: artifact.ArtifactModify,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> Any:
    project = find_project(db, project_id, action="update artifact")
    task = find_task(db, project, task_id, action="update artifact")
    item = find_artifact(db, task, artifact_id, action="update artifact")
    assert_permission(user_data, item, Action.UPDATE)

    item.description = item_update.description

    db.add(item)
    db.commit()
    db.refresh(item)
    return {"data": item}


@router.delete("/{artifact_id}", summary="Delete an artifact")
async def remove_artifact(
    *,
    project_id: int,
    task_id: int,
    artifact_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> None:
    project = find_project(db, project_id, action="delete artifact")
    task = find_task(db, project, task_id, action="delete artifact")
    item = find_artifact(db, task, artifact_id, action="delete artifact")
    assert_permission(user_data, item, Action.DELETE)

    save_to_logging_context({"deleted_resource": item.id})
    db.delete(item)
    db.commit()

    logger.info(msg="Deleted artifact.", extra=logging_context())


@router.put(
    "/{artifact_id}/update",
    status_code=200,
    response_model=DataResponse[artifact.Artifact],
    responses={**BASE_400_RESPONSE, **BASE_409_RESPONSE},
    summary="Assign an update to an artifact",
)
async def assign_artifact_update(
    *,
    project_id: int,
    task_id: int,
    artifact_id: int,
    assignment: artifact.ArtifactUpdateAssignment,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> Any:
    """
    Link an update to an artifact as its proof. The update must have been posted to the artifact's own task.
    """
    project = find_project(db, project_id, action="assign artifact update")
    task = find_task(db, project, task_id, action="assign artifact update")
    item = find_artifact(db, task, artifact_id, action="assign artifact update")
    assert_permission(user_data, item, Action.UPDATE)

    proof = find_project_update(db, project, assignment.update_id, action="assign artifact update")
    assign_update(item, proof)

    db.add(item)
    db.commit()
    db.refresh(item)

    logger.info(msg="Assigned update to artifact.", extra=logging_context())
    return {"data": item}


@router.delete(
    "/{artifact_id}/update",
    status_code=200,
    response_model=DataResponse[artifact.Artifact],
    summary="Unassign the update of an artifact",
)
async def unassign_artifact_update(
    *,
    project_id: int,
    task_id: int,
    artifact_id: int,
    db: Session = Depends(deps.get_db),
    user_data: EmployeeData = Depends(require_manager),
) -> Any:
    """
    Remove the update linked to an artifact. Artifacts without an update are returned unchanged.
    """
    project = find_project(db, project_id, action="unassign artifact update")
    task = find_task(db, project, task_id, action="unassign artifact update")
    item = find_artifact(db, task, artifact_id, action="unassign artifact update")
    assert_permission(user_data, item, Action.UPDATE)

    unassign_update(item)

    db.add(item)
    db.commit()
    db.refresh(item)
    return {"data": item}
