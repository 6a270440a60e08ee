from typing import Optional, Union

from projectdb.lib.authentication import EmployeeData
from projectdb.lib.logging.context import save_to_logging_context
from projectdb.lib.permissions.actions import PARENT_ACTIONS, Action
from projectdb.lib.permissions.models import PermissionResponse
from projectdb.lib.permissions.utils import deny_action_for_entity
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.models.task import Task
from projectdb.models.update import Update


def has_permission(
    user_data: Optional[EmployeeData], entity: Union[Task, Update], action: Action
) -> PermissionResponse:
    """
    Check if a user has permission to perform an action on an Update entity.

    Updates are visible to, and may be posted by, the participants of their task: its assignee, the managers of its
    project and admins. Once posted, an update may only be changed or removed by its author or a task manager.

    Args:
        user_data: The user's authentication data and roles. None for anonymous users.
        entity: The parent Task for CREATE and READ_ALL, otherwise the Update.
        action: The action to be performed.

    Returns:
        PermissionResponse: Contains permission result, HTTP status code, and message.

    Raises:
        ValueError: If the entity is not of the kind the action is checked against.
        NotImplementedError: If the action is not supported for Update entities.
    """
    if action in PARENT_ACTIONS and not isinstance(entity, Task):
        raise ValueError(f"Action '{action.value}' on updates must be checked against the parent task.")
    if action not in PARENT_ACTIONS and not isinstance(entity, Update):
        raise ValueError(f"Action '{action.value}' on updates must be checked against an update.")

    user_is_participant = False
    user_is_manager = False
    user_is_author = False
    active_roles = []

    if user_data is not None:
        task = entity if isinstance(entity, Task) else entity.task
        user_is_participant = task.is_participant(user_data.employee)
        user_is_manager = task.is_manager(user_data.employee)
        user_is_author = isinstance(entity, Update) and entity.is_author(user_data.employee)
        active_roles = user_data.active_roles

    save_to_logging_context(
        {
            "user_is_participant": user_is_participant,
            "user_is_manager": user_is_manager,
            "user_is_author": user_is_author,
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
            f"Action '{action.value}' is not supported for update entities. Supported actions: {supported_actions}"
        )

    return handlers[action](
        user_data,
        entity,
        user_is_participant,
        user_is_manager,
        user_is_author,
        active_roles,
    )


def _handle_create_action(
    user_data: Optional[EmployeeData],
    entity: Task,
    user_is_participant: bool,
    user_is_manager: bool,
    user_is_author: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow create access under the following conditions:
    # Participants of the task may post updates to it.
    if user_is_participant:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.CREATE, "Update")


def _handle_read_all_action(
    user_data: Optional[EmployeeData],
    entity: Task,
    user_is_participant: bool,
    user_is_manager: bool,
    user_is_author: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow read all access under the following conditions:
    # Participants of the task may list its updates.
    if user_is_participant:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.READ_ALL, "Update")


def _handle_read_action(
    user_data: Optional[EmployeeData],
    entity: Update,
    user_is_participant: bool,
    user_is_manager: bool,
    user_is_author: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow read access under the following conditions:
    # Participants of the update's task may view it.
    if user_is_participant:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.READ, "Update")


def _handle_update_action(
    user_data: Optional[EmployeeData],
    entity: Update,
    user_is_participant: bool,
    user_is_manager: bool,
    user_is_author: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow update access under the following conditions:
    # Authors may edit their own updates.
    if user_is_author:
        return PermissionResponse(True)
    # Managers of the update's task may edit any of its updates.
    if user_is_manager:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.UPDATE, "Update")


def _handle_delete_action(
    user_data: Optional[EmployeeData],
    entity: Update,
    user_is_participant: bool,
    user_is_manager: bool,
    user_is_author: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow delete access under the following conditions:
    # Authors may delete their own updates.
    if user_is_author:
        return PermissionResponse(True)
    # Managers of the update's task may delete any of its updates.
    if user_is_manager:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.DELETE, "Update")
