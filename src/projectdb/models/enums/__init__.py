"""
Enums used by ProjectDB models.
"""

from .employee_role import EmployeeRole
from .status import ProjectStatus, TaskStatus
from .update_type import UpdateType

__all__ = [
    "EmployeeRole",
    "ProjectStatus",
    "TaskStatus",
    "UpdateType",
]
