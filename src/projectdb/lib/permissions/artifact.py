from typing import Optional, Union

from projectdb.lib.authentication import EmployeeData
from projectdb.lib.logging.context import save_to_logging_context
from projectdb.lib.permissions.actions import PARENT_ACTIONS, Action
from projectdb.lib.permissions.models import PermissionResponse
from projectdb.lib.permissions.utils import deny_action_for_entity
from projectdb.models.artifact import Artifact
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.models.task import Task


def has_permission(
    user_data: Optional[EmployeeData], entity: Union[Task, Artifact], action: Action
) -> PermissionResponse:
    """
    Check if a user has permission to perform an action on an Artifact entity.

    Artifacts follow the same split as tasks: anyone signed in may look at them, while only managers of the owning
    project may create, change, delete or (un)assign updates to them.

    Args:
        user_data: The user's authentication data and roles. None for anonymous users.
        entity: The parent Task for CREATE and READ_ALL, otherwise the Artifact.
        action: The action to be performed.

    Returns:
        PermissionResponse: Contains permission result, HTTP status code, and message.

    Raises:
        ValueError: If the entity is not of the kind the action is checked against.
        NotImplementedError: If the action is not supported for Artifact entities.
    """
    if action in PARENT_ACTIONS and not isinstance(entity, Task):
        raise ValueError(f"Action '{action.value}' on artifacts must be checked against the parent task.")
    if action not in PARENT_ACTIONS and not isinstance(entity, Artifact):
        raise ValueError(f"Action '{action.value}' on artifacts must be checked against an artifact.")

    user_is_manager = False
    active_roles = []

    if user_data is not None:
        task = entity if isinstance(entity, Task) else entity.task
        user_is_manager = task.project.is_manager(user_data.employee)
        active_roles = user_data.active_roles

    save_to_logging_context(
        {
            "user_is_manager": user_is_manager,
            "target_entity_type": entity.__class__.__name__,
            "target_entity_id": entity.id,
        }
    )

    handlers = {
        Action.CREATE: _handle_create_action,
        Action.READ_ALL: _handle_read_all_action,
        Action.READ: _handle_read_action,
        Action.UPDATE: _handle_update_action,
        Action.DELETE: _handle_delete_action,
    }

    if action not in handlers:
        supported_actions = ", ".join(a.value for a in handlers.keys())
        raise NotImplementedError(
            f"Action '{action.value}' is not supported for artifact entities. Supported actions: {supported_actions}"
        )

    return handlers[action](
        user_data,
        entity,
        user_is_manager,
        active_roles,
    )


def _handle_create_action(
    user_data: Optional[EmployeeData],
    entity: Task,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow create access under the following conditions:
    # Managers of the task's project may add artifacts to it.
    if user_is_manager:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.CREATE, "Artifact")


def _handle_read_all_action(
    user_data: Optional[EmployeeData],
    entity: Task,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow read all access under the following conditions:
    # Any authenticated user may list the artifacts of any task.
    if user_data is not None:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.READ_ALL, "Artifact")


def _handle_read_action(
    user_data: Optional[EmployeeData],
    entity: Artifact,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow read access under the following conditions:
    # Any authenticated user may view any artifact.
    if user_data is not None:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.READ, "Artifact")


def _handle_update_action(
    user_data: Optional[EmployeeData],
    entity: Artifact,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    """
    Handle UPDATE action permission check for Artifact entities.

    Assigning an update to an artifact, or revoking one, is an UPDATE of the artifact.
    """
    ## Allow update access under the following conditions:
    # Managers of the artifact's project may update it.
    if user_is_manager:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.UPDATE, "Artifact")


def _handle_delete_action(
    user_data: Optional[EmployeeData],
    entity: Artifact,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow delete access under the following conditions:
    # Managers of the artifact's project may delete it.
    if user_is_manager:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.DELETE, "Artifact")
