from typing import Optional, Union

from projectdb.lib.authentication import EmployeeData
from projectdb.lib.logging.context import save_to_logging_context
from projectdb.lib.permissions.actions import PARENT_ACTIONS, Action
from projectdb.lib.permissions.models import PermissionResponse
from projectdb.lib.permissions.utils import deny_action_for_entity
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.models.project import Project
from projectdb.models.task import Task


def has_permission(
    user_data: Optional[EmployeeData], entity: Union[Project, Task], action: Action
) -> PermissionResponse:
    """
    Check if a user has permission to perform an action on a Task entity.

    CREATE and READ_ALL are checked against the parent Project. READ, UPDATE and DELETE are checked against the Task,
    whose management is always decided by the task's own project.

    Args:
        user_data: The user's authentication data and roles. None for anonymous users.
        entity: The parent Project for CREATE and READ_ALL, otherwise the Task.
        action: The action to be performed.

    Returns:
        PermissionResponse: Contains permission result, HTTP status code, and message.

    Raises:
        ValueError: If the entity is not of the kind the action is checked against.
        NotImplementedError: If the action is not supported for Task entities.
    """
    if action in PARENT_ACTIONS and not isinstance(entity, Project):
        raise ValueError(f"Action '{action.value}' on tasks must be checked against the parent project.")
    if action not in PARENT_ACTIONS and not isinstance(entity, Task):
        raise ValueError(f"Action '{action.value}' on tasks must be checked against a task.")

    user_is_manager = False
    active_roles = []

    if user_data is not None:
        project = entity if isinstance(entity, Project) else entity.project
        user_is_manager = project.is_manager(user_data.employee)
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
            f"Action '{action.value}' is not supported for task entities. Supported actions: {supported_actions}"
        )

    return handlers[action](
        user_data,
        entity,
        user_is_manager,
        active_roles,
    )


def _handle_create_action(
    user_data: Optional[EmployeeData],
    entity: Project,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow create access under the following conditions:
    # Managers of the parent project may add tasks to it.
    if user_is_manager:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.CREATE, "Task")


def _handle_read_all_action(
    user_data: Optional[EmployeeData],
    entity: Project,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow read all access under the following conditions:
    # Any authenticated user may list the tasks of any project.
    if user_data is not None:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.READ_ALL, "Task")


def _handle_read_action(
    user_data: Optional[EmployeeData],
    entity: Task,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow read access under the following conditions:
    # Any authenticated user may view any task.
    if user_data is not None:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.READ, "Task")


def _handle_update_action(
    user_data: Optional[EmployeeData],
    entity: Task,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow update access under the following conditions:
    # Managers of the task's own project may update it.
    if user_is_manager:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.UPDATE, "Task")


def _handle_delete_action(
    user_data: Optional[EmployeeData],
    entity: Task,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow delete access under the following conditions:
    # Managers of the task's own project may delete it.
    if user_is_manager:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.DELETE, "Task")
