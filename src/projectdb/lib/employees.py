import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from projectdb.lib.exceptions import EmployeeInUseError
from projectdb.lib.logging.context import logging_context, save_to_logging_context
from projectdb.models.comment import Comment
from projectdb.models.employee import Employee
from projectdb.models.project import Project
from projectdb.models.task import Task
from projectdb.models.update import Update

logger = logging.getLogger(__name__)


def username_is_taken(db: Session, username: str, exclude: Optional[Employee] = None) -> bool:
    query = select(Employee.id).where(Employee.username == username)
    if exclude is not None:
        query = query.where(Employee.id != exclude.id)

    return db.execute(select(query.exists())).scalar_one()


def employee_is_referenced(db: Session, employee: Employee) -> bool:
    """
    Whether *employee* still manages a project, is assigned a task, or authored an update or comment.
    """
    return db.execute(
        select(
            or_(
                select(Project.id).where(Project.manager_id == employee.id).exists(),
                select(Task.id).where(Task.staff_id == employee.id).exists(),
                select(Update.id).where(Update.author_id == employee.id).exists(),
                select(Comment.id).where(Comment.author_id == employee.id).exists(),
            )
        )
    ).scalar_one()


def delete_employee(db: Session, employee: Employee) -> None:
    """
    Remove *employee*. Employees that other records still point at are kept, so that no project loses its manager and
    no task its assignee.

    Raises:
        EmployeeInUseError: If the employee is still referenced.
    """
    save_to_logging_context({"deleted_employee": employee.id})

    if employee_is_referenced(db, employee):
        logger.info(msg="Failed to delete employee; The employee is still referenced.", extra=logging_context())
        raise EmployeeInUseError(
            f"Employee {employee.username} still manages projects, is assigned tasks or has authored updates."
        )

    db.delete(employee)
