from typing import TYPE_CHECKING, Optional

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, relationship

from projectdb.db.base import Base

if TYPE_CHECKING:
    from projectdb.models.task import Task
    from projectdb.models.update import Update


class Artifact(Base):
    __tablename__ = "artifacts"

    id = Column(Integer, primary_key=True)
    description = Column(String, nullable=False)

    task_id = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), index=True, nullable=False)
    task: Mapped["Task"] = relationship("Task", back_populates="artifacts")

    # An update may serve as the proof of at most one artifact.
    update_id = Column(Integer, ForeignKey("updates.id", ondelete="SET NULL"), nullable=True, unique=True)
    update: Mapped[Optional["Update"]] = relationship("Update", back_populates="artifact")
