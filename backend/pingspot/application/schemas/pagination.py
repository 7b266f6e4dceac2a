"""Generic paginated response envelope."""

from typing import Generic, TypeVar

from pydantic import BaseModel

ItemT = TypeVar("ItemT")


class PaginatedResponse(BaseModel, Generic[ItemT]):
    items: list[ItemT]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int
