from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Wire models speak camelCase; Python code keeps snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Pagination(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    pagination: Optional[Pagination] = None


class MessageResponse(CamelModel):
    success: bool = True
    message: str
