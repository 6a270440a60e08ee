from typing import Optional, Union

from projectdb.lib.authentication import EmployeeData
from projectdb.lib.logging.context import save_to_logging_context
from projectdb.lib.permissions.actions import PARENT_ACTIONS, Action
from projectdb.lib.permissions.models import PermissionResponse
from projectdb.lib.permissions.utils import deny_action_for_entity
from projectdb.models.comment import Comment
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.models.update import Update


def has_permission(
    user_data: Optional[EmployeeData], entity: Union[Update, Comment], action: Action
) -> PermissionResponse:
    """
    Check if a user has permission to perform an action on a Comment entity.

    Comments share the rules of the update they are attached to, evaluated against that update's task.

    Args:
        user_data: The user's authentication data and roles. None for anonymous users.
        entity: The parent Update for CREATE and READ_ALL, otherwise the Comment.
        action: The action to be performed.

    Returns:
        PermissionResponse: Contains permission result, HTTP status code, and message.

    Raises:
        ValueError: If the entity is not of the kind the action is checked against.
        NotImplementedError: If the action is not supported for Comment entities.
    """
    if action in PARENT_ACTIONS and not isinstance(entity, Update):
        raise ValueError(f"Action '{action.value}' on comments must be checked against the parent update.")
    if action not in PARENT_ACTIONS and not isinstance(entity, Comment):
        raise ValueError(f"Action '{action.value}' on comments must be checked against a comment.")

    user_is_participant = False
    user_is_manager = False
    user_is_author = False
    active_roles = []

    if user_data is not None:
        task = entity.task if isinstance(entity, Update) else entity.update.task
        user_is_participant = task.is_participant(user_data.employee)
        user_is_manager = task.is_manager(user_data.employee)
        user_is_author = isinstance(entity, Comment) and entity.is_author(user_data.employee)
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
            f"Action '{action.value}' is not supported for comment entities. Supported actions: {supported_actions}"
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
    entity: Update,
    user_is_participant: bool,
    user_is_manager: bool,
    user_is_author: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow create access under the following conditions:
    # Participants of the update's task may comment on it.
    if user_is_participant:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.CREATE, "Comment")


def _handle_read_all_action(
    user_data: Optional[EmployeeData],
    entity: Update,
    user_is_participant: bool,
    user_is_manager: bool,
    user_is_author: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow read all access under the following conditions:
    # Participants of the update's task may list its comments.
    if user_is_participant:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.READ_ALL, "Comment")


def _handle_read_action(
    user_data: Optional[EmployeeData],
    entity: Comment,
    user_is_participant: bool,
    user_is_manager: bool,
    user_is_author: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow read access under the following conditions:
    # Participants of the comment's task may view it.
    if user_is_participant:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.READ, "Comment")


def _handle_update_action(
    user_data: Optional[EmployeeData],
    entity: Comment,
    user_is_participant: bool,
    user_is_manager: bool,
    user_is_author: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow update access under the following conditions:
    # Authors may edit their own comments.
    if user_is_author:
        return PermissionResponse(True)
    # Managers of the comment's task may edit any comment on it.
    if user_is_manager:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.UPDATE, "Comment")


def _handle_delete_action(
    user_data: Optional[EmployeeData],
    entity: Comment,
    user_is_participant: bool,
    user_is_manager: bool,
    user_is_author: bool,
    active_roles: list[EmployeeRole],
) -> PermissionResponse:
    ## Allow delete access under the following conditions:
    # Authors may delete their own comments.
    if user_is_author:
        return PermissionResponse(True)
    # Managers of the comment's task may delete any comment on it.
    if user_is_manager:
        return PermissionResponse(True)

    return deny_action_for_entity(entity, user_data, Action.DELETE, "Comment")
