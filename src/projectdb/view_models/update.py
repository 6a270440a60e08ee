from datetime import datetime
from typing import Optional

from pydantic import Field

from projectdb.models.enums.update_type import UpdateType
from projectdb.view_models import record_type_validator, set_record_type
from projectdb.view_models.base.base import BaseModel
from projectdb.view_models.employee import EmployeeSummary


class UpdateBase(BaseModel):
    title: str = Field(..., max_length=255)
    body: Optional[str] = None
    type: UpdateType = UpdateType.progress


class UpdateCreate(UpdateBase):
    pass


class UpdateModify(UpdateBase):
    pass


# Properties shared by models stored in DB
class SavedUpdate(UpdateBase):
    id: int
    author: EmployeeSummary
    creation_date: datetime
    record_type: str = None  # type: ignore

    _record_type_factory = record_type_validator()(set_record_type)

    class Config:
        from_attributes = True


# Properties to return to client
class Update(SavedUpdate):
    pass
