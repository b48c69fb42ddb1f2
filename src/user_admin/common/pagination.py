from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, List, TypeVar

from ..core.constants import DEFAULT_PAGE_SIZE

T = TypeVar("T")


@dataclass(frozen=True)
class Pageable:
    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.per_page < 1:
            raise ValueError(f"per_page must be >= 1, got {self.per_page}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the total row count of the unpaged query."""

    data: List[T] = field(default_factory=list)
    count: int = 0
    page: int = 1
    per_page: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        if self.count <= 0:
            return 1
        return (self.count + self.per_page - 1) // self.per_page

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
