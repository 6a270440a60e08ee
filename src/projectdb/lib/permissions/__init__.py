"""
Permission system for ProjectDB entities.

This module decides, for an employee and an entity (or the parent of the entities being created or listed), whether
an action is allowed. Each entity type has its own policy module; ownership itself is expressed by the models
(Project.is_manager, Task.is_manager, Task.is_participant).

Main Functions:
    has_permission: Check if a user has permission for an action on an entity
    assert_permission: Assert permission or raise exception
    can_view, can_manage: Turn a decision into a labelled refusal

Usage:
    >>> from projectdb.lib.permissions import Action, has_permission, assert_permission
    >>>
    >>> # Check permission against the parent when creating or listing children
    >>> result = has_permission(user_data, project, Action.CREATE, Task)
    >>> if result.permitted:
    ...     # User may add tasks to this project
    ...     pass
    >>>
    >>> # Assert permission (raises exception if denied)
    >>> assert_permission(user_data, task, Action.UPDATE)
"""

from .actions import Action
from .core import assert_permission, can_manage, can_view, has_permission
from .exceptions import PermissionException

__all__ = ["has_permission", "assert_permission", "can_view", "can_manage", "Action", "PermissionException"]
