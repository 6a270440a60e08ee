from .artifact import Artifact
from .comment import Comment
from .employee import Employee
from .project import Project
from .task import Task
from .update import Update

__all__ = [
    "Artifact",
    "Comment",
    "Employee",
    "Project",
    "Task",
    "Update",
]
