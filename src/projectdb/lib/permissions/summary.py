"""
Capability summaries attached to list and entity responses, so clients know which write operations to offer.

Summaries are computed fresh for every response. Readability is enforced by the permission checks and never reported
here.
"""

from typing import Optional

from projectdb.lib.authentication import EmployeeData
from projectdb.lib.authorization import employee_has_role
from projectdb.lib.permissions.actions import Action
from projectdb.lib.permissions.core import EntityType, has_permission
from projectdb.models.enums.employee_role import EmployeeRole


def list_permissions(
    user_data: Optional[EmployeeData],
    parent: Optional[EntityType],
    model: type,
    roles: Optional[list[EmployeeRole]] = None,
) -> dict[str, bool]:
    """
    Summarize what the user may do with a list of *model* entities under *parent*.

    When *roles* is given, the route that creates these entities is role gated and the user must also hold one of
    those roles.
    """
    create = has_permission(user_data, parent, Action.CREATE, model).permitted
    if roles is not None:
        create = create and employee_has_role(user_data, roles)

    return {"create": create}


def entity_permissions(user_data: Optional[EmployeeData], entity: EntityType) -> dict[str, bool]:
    """
    Summarize what the user may do with a single *entity*.
    """
    return {
        "update": has_permission(user_data, entity, Action.UPDATE).permitted,
        "delete": has_permission(user_data, entity, Action.DELETE).permitted,
    }
