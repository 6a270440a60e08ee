"""
Response envelopes.

Lists are returned with the permission to create new entries, single entities with the permissions to change or
remove them. Responses to writes carry only the data.
"""

from typing import Generic, TypeVar

from projectdb.view_models.base.base import BaseModel

DataT = TypeVar("DataT")


class ListPermission(BaseModel):
    create: bool


class EntityPermission(BaseModel):
    update: bool
    delete: bool


class DataResponse(BaseModel, Generic[DataT]):
    data: DataT

    class Config:
        from_attributes = True


class ListResponse(BaseModel, Generic[DataT]):
    data: list[DataT]
    permission: ListPermission

    class Config:
        from_attributes = True


class EntityResponse(BaseModel, Generic[DataT]):
    data: DataT
    permission: EntityPermission

    class Config:
        from_attributes = True
