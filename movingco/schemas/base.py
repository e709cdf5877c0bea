from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    status_code: int = 200
    message: str
    data: Optional[T] = None


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class Page(Generic[T]):
    """Slice of rows returned by a repository, with the total before paging."""

    def __init__(self, items: list, total: int, page: int, limit: int):
        self.items = items
        self.total = total
        self.page = page
        self.limit = limit

    @property
    def pagination(self) -> Pagination:
        total_pages = (self.total + self.limit - 1) // self.limit if self.limit else 0
        return Pagination(
            current_page=self.page,
            total_pages=total_pages,
            total_items=self.total,
            items_per_page=self.limit,
        )
