from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, relationship

from projectdb.db.base import Base
from projectdb.models.employee import Employee

if TYPE_CHECKING:
    from projectdb.models.update import Update


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    body = Column(String, nullable=False)
    creation_date = Column(DateTime, nullable=False, default=datetime.now)

    update_id = Column(Integer, ForeignKey("updates.id", ondelete="CASCADE"), index=True, nullable=False)
    update: Mapped["Update"] = relationship("Update", back_populates="comments")

    author_id = Column(Integer, ForeignKey("employees.id"), index=True, nullable=False)
    author: Mapped[Employee] = relationship("Employee", foreign_keys="Comment.author_id")

    def is_author(self, employee: Employee) -> bool:
        return employee.id == self.author.id
