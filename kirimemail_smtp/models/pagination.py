"""Pagination metadata and paged results."""

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from .base import ApiModel

T = TypeVar("T")


@dataclass
class Pagination(ApiModel):
    """Pagination block returned with list responses."""
    total: Optional[int] = None
    per_page: Optional[int] = None
    current_page: Optional[int] = None
    last_page: Optional[int] = None
    count: Optional[int] = None
    offset: Optional[int] = None
    limit: Optional[int] = None

    @property
    def has_next_page(self) -> bool:
        if not self.current_page or not self.last_page:
            return False
        return self.current_page < self.last_page

    @property
    def has_previous_page(self) -> bool:
        if not self.current_page:
            return False
        return self.current_page > 1

    @property
    def is_first_page(self) -> bool:
        return self.current_page == 1

    @property
    def is_last_page(self) -> bool:
        if not self.current_page or not self.last_page:
            return True
        return self.current_page == self.last_page

    @property
    def next_page(self) -> Optional[int]:
        if not self.has_next_page:
            return None
        return self.current_page + 1

    @property
    def previous_page(self) -> Optional[int]:
        if not self.has_previous_page:
            return None
        return self.current_page - 1

    @property
    def total_pages(self) -> int:
        return self.last_page or 0

    @property
    def items_per_page(self) -> int:
        return self.per_page or self.limit or 0

    def offset_for_page(self, page: int) -> int:
        """Offset of the first item on ``page`` (1-indexed)."""
        if self.items_per_page <= 0:
            return 0
        return (page - 1) * self.items_per_page

    def page_for_item(self, index: int) -> int:
        """Page holding the item at zero-based ``index``."""
        if self.items_per_page <= 0:
            return 1
        return index // self.items_per_page + 1

    @property
    def is_valid(self) -> bool:
        return bool(self.current_page and self.per_page and self.total)

    def summary(self) -> str:
        if not self.is_valid:
            return "Invalid pagination data"
        start = self.offset + 1 if self.offset else 1
        end = start + self.count - 1 if self.count else start
        return (
            f"Showing {start}-{end} of {self.total} items "
            f"(page {self.current_page} of {self.last_page or 1})"
        )


@dataclass
class Page(Generic[T]):
    """One page of a list endpoint."""
    data: list[T] = field(default_factory=list)
    pagination: Optional[Pagination] = None
    count: Optional[int] = None
    offset: Optional[int] = None
    limit: Optional[int] = None
    domain: Optional[str] = None

    def __iter__(self):
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)


def pagination_from(block: Any) -> Optional[Pagination]:
    if isinstance(block, dict):
        return Pagination.from_api(block)
    return None
