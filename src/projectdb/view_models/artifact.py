from typing import Optional

from projectdb.view_models import record_type_validator, set_record_type
from projectdb.view_models.base.base import BaseModel


class ArtifactBase(BaseModel):
    description: str


class ArtifactCreate(ArtifactBase):
    pass


class ArtifactModify(ArtifactBase):
    pass


class ArtifactUpdateAssignment(BaseModel):
    """Names the update to link to an artifact as its proof."""

    update_id: int


class AssignedUpdate(BaseModel):
    """The update linked to an artifact."""

    id: int
    title: str

    class Config:
        from_attributes = True


class SavedArtifact(ArtifactBase):
    id: int
    update: Optional[AssignedUpdate] = None
    record_type: str = None  # type: ignore

    _record_type_factory = record_type_validator()(set_record_type)

    class Config:
        from_attributes = True


class Artifact(SavedArtifact):
    pass
