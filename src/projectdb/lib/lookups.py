"""
Parent-chain loaders.

Every entity below a project is resolved through the ids of its parents, never by its own id alone, so an entity
requested under the wrong parent is reported as missing before any permission check runs. Each loader eagerly loads
the relations the permission policies read:

* managers: nothing beyond the employee row
* projects: ``manager``
* tasks: ``project.manager`` and ``staff``
* updates: ``task.project.manager``, ``task.staff``, ``author`` and ``artifact``
* comments: ``update.task.project.manager``, ``update.task.staff`` and ``author``
* artifacts: ``task.project.manager``, ``task.staff`` and ``update``
"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.models.artifact import Artifact
from projectdb.models.comment import Comment
from projectdb.models.employee import Employee
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.models.project import Project
from projectdb.models.task import Task
from projectdb.models.update import Update

logger = logging.getLogger(__name__)


def _task_options(*path):
    """Loader options for a task reached through the relationship *path*."""
    return (
        joinedload(*path).joinedload(Task.project).joinedload(Project.manager),
        joinedload(*path).joinedload(Task.staff),
    )


def _not_found(resource: str, id: int, action: str) -> HTTPException:
    save_to_logging_context({"requested_resource": id, "resource_type": resource})
    logger.info(
        msg=f"Failed to {action}; The requested {resource.lower()} does not exist.",
        extra=logging_context(),
    )
    return HTTPException(status_code=404, detail=f"{resource} with ID {id} not found")


def find_employee(db: Session, employee_id: int, action: str = "fetch employee") -> Employee:
    employee = db.execute(select(Employee).where(Employee.id == employee_id)).scalars().one_or_none()
    if employee is None:
        raise _not_found("Employee", employee_id, action)

    return employee


def find_manager(db: Session, manager_id: int, action: str = "fetch manager") -> Employee:
    """
    Resolve the manager named by a route parameter. An employee who exists but is not a manager is reported as
    missing, never as forbidden.
    """
    manager = (
        db.execute(select(Employee).where(Employee.id == manager_id, Employee.role == EmployeeRole.manager))
        .scalars()
        .one_or_none()
    )
    if manager is None:
        raise _not_found("Manager", manager_id, action)

    return manager


def find_project(
    db: Session, project_id: int, manager: Optional[Employee] = None, action: str = "fetch project"
) -> Project:
    query = select(Project).options(joinedload(Project.manager)).where(Project.id == project_id)
    if manager is not None:
        query = query.where(Project.manager_id == manager.id)

    project = db.execute(query).scalars().one_or_none()
    if project is None:
        raise _not_found("Project", project_id, action)

    return project


def find_task(db: Session, project: Project, task_id: int, action: str = "fetch task") -> Task:
    task = (
        db.execute(
            select(Task)
            .options(joinedload(Task.project).joinedload(Project.manager), joinedload(Task.staff))
            .where(Task.id == task_id, Task.project_id == project.id)
        )
        .scalars()
        .one_or_none()
    )
    if task is None:
        raise _not_found("Task", task_id, action)

    return task


def find_update(db: Session, task: Task, update_id: int, action: str = "fetch update") -> Update:
    update = (
        db.execute(
            select(Update)
            .options(*_task_options(Update.task), joinedload(Update.author), joinedload(Update.artifact))
            .where(Update.id == update_id, Update.task_id == task.id)
        )
        .scalars()
        .one_or_none()
    )
    if update is None:
        raise _not_found("Update", update_id, action)

    return update


def find_project_update(db: Session, project: Project, update_id: int, action: str = "fetch update") -> Update:
    """
    Resolve an update anywhere within *project*. Used when an update is named in a request body and its task is
    checked explicitly afterwards.
    """
    update = (
        db.execute(
            select(Update)
            .join(Update.task)
            .options(*_task_options(Update.task), joinedload(Update.author), joinedload(Update.artifact))
            .where(Update.id == update_id, Task.project_id == project.id)
        )
        .scalars()
        .one_or_none()
    )
    if update is None:
        raise _not_found("Update", update_id, action)

    return update


def find_comment(db: Session, update: Update, comment_id: int, action: str = "fetch comment") -> Comment:
    comment = (
        db.execute(
            select(Comment)
            .options(
                joinedload(Comment.update).joinedload(Update.task).joinedload(Task.project).joinedload(Project.manager),
                joinedload(Comment.update).joinedload(Update.task).joinedload(Task.staff),
                joinedload(Comment.author),
            )
            .where(Comment.id == comment_id, Comment.update_id == update.id)
        )
        .scalars()
        .one_or_none()
    )
    if comment is None:
        raise _not_found("Comment", comment_id, action)

    return comment


def find_artifact(db: Session, task: Task, artifact_id: int, action: str = "fetch artifact") -> Artifact:
    artifact = (
        db.execute(
            select(Artifact)
            .options(*_task_options(Artifact.task), joinedload(Artifact.update))
            .where(Artifact.id == artifact_id, Artifact.task_id == task.id)
        )
        .scalars()
        .one_or_none()
    )
    if artifact is None:
        raise _not_found("Artifact", artifact_id, action)

    return artifact
