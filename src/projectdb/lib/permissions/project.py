from typing import Optional, Union

from projectdb.lib.authentication import EmployeeData
from projectdb.lib.logging.context import save_to_logging_context
from projectdb.lib.permissions.actions import PARENT_ACTIONS, Action
from projectdb.lib.permissions.models import PermissionResponse
from projectdb.lib.permissions.utils import deny_action_for_entity, roles_permitted
from projectdb.models.employee import Employee
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.models.project import Project


def has_permission(
    user_data: Optional[EmployeeData], entity: Union[Employee, Project], action: Action
) -> PermissionResponse:
    """
    Check if a user has permission to perform an action on a Project entity.

    Projects hang off the manager who owns them. CREATE and READ_ALL are checked against that manager (the parent
    Employee); READ, UPDATE and DELETE against the Project itself.

    Args:
        user_data: The user's authentication data and roles. None for anonymous users.
        entity: The owning manager for CREATE and READ_ALL, otherwise the Project.
        action: The action to be performed.

    Returns:
        PermissionResponse: Contains permission result, HTTP status code, and message.

    Raises:
        ValueError: If the entity is not of the kind the action is checked against.
        NotImplementedError: If the action is not supported for Project entities.
    """
    if action in PARENT_ACTIONS and not isinstance(entity, Employee):
        raise ValueError(f"Action '{action.value}' on projects must be checked against the managing employee.")
    if action not in PARENT_ACTIONS and not isinstance(entity, Project):
        raise ValueError(f"Action '{action.value}' on projects must be checked against a project.")

    user_is_manager = False
    active_roles = []

    if user_data is not None:
        if isinstance(entity, Project):
            user_is_manager = entity.is_manager(user_data.employee)
        else:
            user_is_manager = entity.id == user_data.employee.id

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
            f"Action '{action.value}' is not supported for project entities. Supported actions: {supported_actions}"
        )

    return handlers[action](
        user_data,
        entity,
        user_is_manager,
        active_roles,
    )


def _handle_create_action(
    user_data: Optional[EmployeeData],
    entity: Employee,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    """
    Handle CREATE action permission check for Project entities.

    Any authenticated employee may create a project under a manager. Which roles may attempt to create projects at
    all is decided by the route-level role gate, not here.
    """
    ## Allow create access under the following conditions:
    # Any authenticated user may create a project.
    if user_data is not None:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.CREATE, "Project")


def _handle_read_all_action(
    user_data: Optional[EmployeeData],
    entity: Employee,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    """
    Handle READ_ALL action permission check for Project entities.

    A manager's projects may be listed by that manager and by admins.
    """
    ## Allow read all access under the following conditions:
    # Managers may list their own projects.
    if user_is_manager:
        return PermissionResponse(True)
    # Admins may list any manager's projects.
    if roles_permitted(active_roles, [EmployeeRole.admin]):
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.READ_ALL, "Manager's Project")


def _handle_read_action(
    user_data: Optional[EmployeeData],
    entity: Project,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow read access under the following conditions:
    # Any authenticated user may view any project.
    if user_data is not None:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.READ, "Project")


def _handle_update_action(
    user_data: Optional[EmployeeData],
    entity: Project,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow update access under the following conditions:
    # The managing employee (or an admin, see Project.is_manager) may update a project.
    if user_is_manager:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.UPDATE, "Project")


def _handle_delete_action(
    user_data: Optional[EmployeeData],
    entity: Project,
    user_is_manager: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow delete access under the following conditions:
    # The managing employee (or an admin, see Project.is_manager) may delete a project.
    if user_is_manager:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.DELETE, "Project")
