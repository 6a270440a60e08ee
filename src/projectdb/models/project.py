from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Column, Date, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, relationship

from projectdb.db.base import Base
from projectdb.models.employee import Employee
from projectdb.models.enums.employee_role import EmployeeRole
from projectdb.models.enums.status import ProjectStatus

if TYPE_CHECKING:
    from projectdb.models.task import Task


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    body = Column(String, nullable=False, default="")
    status = Column(
        Enum(ProjectStatus, create_constraint=True, length=32, native_enum=False, validate_strings=True),
        nullable=False,
        default=ProjectStatus.in_progress,
    )
    creation_date = Column(Date, nullable=False, default=date.today)
    modification_date = Column(Date, nullable=False, default=date.today, onupdate=date.today)

    manager_id = Column(Integer, ForeignKey("employees.id"), index=True, nullable=False)
    manager: Mapped[Employee] = relationship("Employee", foreign_keys="Project.manager_id")

    tasks: Mapped[list["Task"]] = relationship(
        "Task",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="Task.id",
    )

    def is_manager(self, employee: Employee) -> bool:
        """
        Whether *employee* manages this project. Admins manage every project.
        """
        return employee.role == EmployeeRole.admin or employee.id == self.manager.id
