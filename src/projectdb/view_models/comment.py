from datetime import datetime

from projectdb.view_models import record_type_validator, set_record_type
from projectdb.view_models.base.base import BaseModel
from projectdb.view_models.employee import EmployeeSummary


class CommentBase(BaseModel):
    body: str


class CommentCreate(CommentBase):
    pass


class CommentModify(CommentBase):
    pass


class SavedComment(CommentBase):
    id: int
    author: EmployeeSummary
    creation_date: datetime
    record_type: str = None  # type: ignore

    _record_type_factory = record_type_validator()(set_record_type)

    class Config:
        from_attributes = True


class Comment(SavedComment):
    pass
