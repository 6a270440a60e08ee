import logging
from typing import Any, Callable, Optional, Union

from projectdb.lib.authentication import EmployeeData
from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.lib.permissions.actions import PARENT_ACTIONS, Action
from projectdb.lib.permissions.exceptions import PermissionException
from projectdb.lib.permissions.models import PermissionResponse
from projectdb.models.artifact import Artifact
from projectdb.models.comment import Comment
from projectdb.models.employee import Employee
from projectdb.models.project import Project
from projectdb.models.task import Task
from projectdb.models.update import Update

# Import entity-specific permission modules
from . import (
    artifact,
    comment,
    employee,
    project,
    task,
    update,
)

logger = logging.getLogger(__name__)

# Define the supported entity types
EntityType = Union[
    Artifact,
    Comment,
    Employee,
    Project,
    Task,
    Update,
]


def has_permission(
    user_data: Optional[EmployeeData],
    entity: Optional[EntityType],
    action: Action,
    model: Optional[type] = None,
) -> PermissionResponse:
    """
    Main dispatcher function for permission checks across all entity types.

    READ, UPDATE and DELETE are checked against the entity itself and routed by its type. CREATE and READ_ALL concern
    children that may not exist yet, so they are checked against the parent entity and routed by *model*, the type of
    the child.

    Args:
        user_data: The user's authentication data and roles. None for anonymous users.
        entity: The entity to check permissions for, or its parent for CREATE and READ_ALL.
        action: The action to be performed on the entity.
        model: The child entity type. Required for CREATE and READ_ALL, ignored otherwise.

    Returns:
        PermissionResponse: Contains permission result, HTTP status code, and message.

    Raises:
        ValueError: If CREATE or READ_ALL is checked without a model.
        NotImplementedError: If the entity type is not supported.

    Example:
        >>> from projectdb.lib.permissions.core import has_permission
        >>> from projectdb.lib.permissions.actions import Action
        >>> has_permission(user_data, project, Action.CREATE, Task).permitted
        True
    """
    # Dictionary mapping entity types to their corresponding permission modules
    entity_handlers: dict[type, Callable[[Optional[EmployeeData], Any, Action], PermissionResponse]] = {
        Artifact: artifact.has_permission,
        Comment: comment.has_permission,
        Employee: employee.has_permission,
        Project: project.has_permission,
        Task: task.has_permission,
        Update: update.has_permission,
    }

    if action in PARENT_ACTIONS:
        if model is None:
            raise ValueError(f"Action '{action.value}' requires the model of the entity to be created or listed.")

        entity_type = model
    else:
        entity_type = type(entity)

    if entity_type not in entity_handlers:
        supported_types = ", ".join(cls.__name__ for cls in entity_handlers.keys())
        raise NotImplementedError(
            f"Permission checks are not implemented for entity type '{entity_type.__name__}'. "
            f"Supported entity types: {supported_types}"
        )

    handler = entity_handlers[entity_type]
    return handler(user_data, entity, action)


def assert_permission(
    user_data: Optional[EmployeeData],
    entity: Optional[EntityType],
    action: Action,
    model: Optional[type] = None,
) -> PermissionResponse:
    """
    Assert that a user has permission to perform an action on an entity.

    Raises:
        PermissionException: If the user lacks sufficient permissions.
    """
    save_to_logging_context({"permission_boundary": action.name})
    permission = has_permission(user_data, entity, action, model)

    if not permission.permitted:
        http_code = permission.http_code if permission.http_code is not None else 403
        message = permission.message if permission.message is not None else "Permission denied"
        raise PermissionException(http_code=http_code, message=message)

    return permission


def can_view(permitted: bool, resource_label: str) -> None:
    """
    Let the request continue if *permitted*, otherwise refuse it with a generic message about viewing
    *resource_label*.
    """
    if not permitted:
        logger.info(msg=f"Refused to show {resource_label}.", extra=logging_context())
        raise PermissionException(http_code=403, message=f"cannot view {resource_label}")


def can_manage(permitted: bool, resource_label: str) -> None:
    """
    Let the request continue if *permitted*, otherwise refuse it with a generic message about managing
    *resource_label*.
    """
    if not permitted:
        logger.info(msg=f"Refused to change {resource_label}.", extra=logging_context())
        raise PermissionException(http_code=403, message=f"cannot manage {resource_label}")
