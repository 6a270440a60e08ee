from datetime import date
from typing import Optional

from pydantic import Field

from projectdb.models.enums.status import ProjectStatus
from projectdb.view_models import record_type_validator, set_record_type
from projectdb.view_models.base.base import BaseModel
from projectdb.view_models.employee import EmployeeSummary


class ProjectBase(BaseModel):
    title: str = Field(..., max_length=255)
    body: Optional[str] = None


class ProjectCreate(ProjectBase):
    pass


class ProjectModify(ProjectBase):
    pass


class ProjectStatusModify(BaseModel):
    status: ProjectStatus


# Properties shared by models stored in DB
class SavedProject(ProjectBase):
    id: int
    status: ProjectStatus
    manager: EmployeeSummary
    creation_date: date
    modification_date: date
    record_type: str = None  # type: ignore

    _record_type_factory = record_type_validator()(set_record_type)

    class Config:
        from_attributes = True


# Properties to return to client
class Project(SavedProject):
    pass
