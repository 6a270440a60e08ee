from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, relationship

from projectdb.db.base import Base
from projectdb.models.employee import Employee
from projectdb.models.enums.update_type import UpdateType

if TYPE_CHECKING:
    from projectdb.models.artifact import Artifact
    from projectdb.models.comment import Comment
    from projectdb.models.task import Task


class Update(Base):
    __tablename__ = "updates"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    body = Column(String, nullable=False, default="")
    type = Column(
        Enum(UpdateType, create_constraint=True, length=32, native_enum=False, validate_strings=True),
        nullable=False,
        default=UpdateType.progress,
    )
    creation_date = Column(DateTime, nullable=False, default=datetime.now)

    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), index=True, nullable=False)
    task: Mapped["Task"] = relationship("Task", back_populates="updates")

    author_id = Column(Integer, ForeignKey("employees.id"), index=True, nullable=False)
    author: Mapped[Employee] = relationship("Employee", foreign_keys="Update.author_id")

    comments: Mapped[list["Comment"]] = relationship(
        "Comment",
        back_populates="update",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )
    artifact: Mapped[Optional["Artifact"]] = relationship("Artifact", back_populates="update", uselist=False)

    def is_author(self, employee: Employee) -> bool:
        return employee.id == self.author.id
