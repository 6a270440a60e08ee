from typing import Optional

from projectdb.lib.authentication import EmployeeData
from projectdb.lib.logging.context import save_to_logging_context
from projectdb.lib.permissions.actions import Action
from projectdb.lib.permissions.models import PermissionResponse
from projectdb.lib.permissions.utils import deny_action_for_entity, roles_permitted
from projectdb.models.employee import Employee
from projectdb.models.enums.employee_role import EmployeeRole


def has_permission(user_data: Optional[EmployeeData], entity: Optional[Employee], action: Action) -> PermissionResponse:
    """
    Check if a user has permission to perform an action on an Employee entity.

    Employee accounts are managed by admins. Employees have no parent, so CREATE and READ_ALL are checked without one.
    """
    user_is_self = False
    active_roles = []

    if user_data is not None:
        user_is_self = entity is not None and entity.id == user_data.employee.id
        active_roles = user_data.active_roles

    save_to_logging_context(
        {
            "user_is_self": user_is_self,
            "target_employee_id": entity.id if entity is not None else None,
        }
    )

    handlers = {
        Action.CREATE: _handle_admin_only_action,
        Action.READ_ALL: _handle_admin_only_action,
        Action.READ: _handle_read_action,
        Action.UPDATE: _handle_admin_only_action,
        Action.DELETE: _handle_admin_only_action,
    }

    if action not in handlers:
        supported_actions = ", ".join(a.value for a in handlers.keys())
        raise NotImplementedError(
            f"Action '{action.value}' is not supported for employee entities. Supported actions: {supported_actions}"
        )

    return handlers[action](
        user_data,
        entity,
        action,
        user_is_self,
        active_roles,
    )


def _handle_read_action(
    user_data: Optional[EmployeeData],
    entity: Optional[Employee],
    action: Action,
    user_is_self: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow read access under the following conditions:
    # Employees can always read their own account.
    if user_is_self:
        return PermissionResponse(True)
    # Admins can read any account.
    if roles_permitted(active_roles, [EmployeeRole.admin]):
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, action, "Employee")


def _handle_admin_only_action(
    user_data: Optional[EmployeeData],
    entity: Optional[Employee],
    action: Action,
    user_is_self: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow access under the following conditions:
    # Only admins may register, list, change or remove employee accounts.
    if roles_permitted(active_roles, [EmployeeRole.admin]):
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, action, "Employee")
