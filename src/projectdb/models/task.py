from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Column, Date, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, relationship, validates

from projectdb.db.base import Base
from projectdb.models.employee import Employee
from projectdb.models.enums.status import TaskStatus

if TYPE_CHECKING:
    from projectdb.models.artifact import Artifact
    from projectdb.models.project import Project
    from projectdb.models.update import Update


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    body = Column(String, nullable=False, default="")
    status = Column(
        Enum(TaskStatus, create_constraint=True, length=32, native_enum=False, validate_strings=True),
        nullable=False,
        default=TaskStatus.in_progress,
    )
    creation_date = Column(Date, nullable=False, default=date.today)
    modification_date = Column(Date, nullable=False, default=date.today, onupdate=date.today)

    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), index=True, nullable=False)
    project: Mapped["Project"] = relationship("Project", back_populates="tasks")

    staff_id = Column(Integer, ForeignKey("employees.id"), index=True, nullable=False)
    staff: Mapped[Employee] = relationship("Employee", foreign_keys="Task.staff_id")

    updates: Mapped[list["Update"]] = relationship(
        "Update",
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="Update.id",
    )
    artifacts: Mapped[list["Artifact"]] = relationship(
        "Artifact",
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="Artifact.id",
    )

    @validates("project")
    def validate_project(self, key, project):
        if self.project is not None and self.project is not project:
            raise ValueError("A task may not be moved to another project.")

        return project

    def is_manager(self, employee: Employee) -> bool:
        return self.project.is_manager(employee)

    def is_staff(self, employee: Employee) -> bool:
        return employee.id == self.staff.id

    def is_participant(self, employee: Employee) -> bool:
        """
        Participants of a task are its assignee and anyone who manages its project.
        """
        return self.is_manager(employee) or self.is_staff(employee)
