from typing import Generic, List, TypeVar
from pydantic import BaseModel

DataT = TypeVar("DataT")


class DataResponse(BaseModel, Generic[DataT]):
    data: DataT


class PageMeta(BaseModel):
    total: int
    page: int
    pages: int
    limit: int


class PageResponse(BaseModel, Generic[DataT]):
    data: List[DataT]
    meta: PageMeta
