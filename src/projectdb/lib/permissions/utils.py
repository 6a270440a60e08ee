import logging
from typing import Any, Optional

from projectdb.lib.authentication import EmployeeData
from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.lib.permissions.actions import VIEW_ACTIONS, Action
from projectdb.lib.permissions.models import PermissionResponse
from projectdb.models.enums.employee_role import EmployeeRole

logger = logging.getLogger(__name__)


def roles_permitted(user_roles: list[EmployeeRole], permitted_roles: list[EmployeeRole]) -> bool:
    save_to_logging_context({"permitted_roles": [role.name for role in permitted_roles]})

    if not user_roles:
        logger.debug(msg="User has no associated roles.", extra=logging_context())
        return False

    return any(role in permitted_roles for role in user_roles)


def deny_message(action: Action, entity_label: str) -> str:
    """
    The generic message shown when *action* is denied on an entity called *entity_label*. Messages never reveal which
    check failed, only whether the employee was trying to view or to manage the resource.
    """
    if action in VIEW_ACTIONS:
        return f"cannot view {entity_label}"

    return f"cannot manage {entity_label}"


def deny_action_for_entity(
    entity: Any,
    user_data: Optional[EmployeeData],
    action: Action,
    entity_label: str,
) -> PermissionResponse:
    """
    Build the response for a denied *action* on *entity*.

    Anonymous employees are told to authenticate (401). Authenticated employees are refused (403) with a message
    naming only the kind of resource involved.
    """
    save_to_logging_context(
        {
            "denied_entity_type": entity.__class__.__name__ if entity is not None else None,
            "denied_entity_id": getattr(entity, "id", None),
            "denied_action": action.name,
        }
    )

    if user_data is None or user_data.employee is None:
        return PermissionResponse(False, 401, "Could not validate credentials")

    return PermissionResponse(False, 403, deny_message(action, entity_label))
