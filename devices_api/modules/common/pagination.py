"""Paging primitives shared by repositories and services."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class SortDirection(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class Order:
    property: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


@dataclass(frozen=True, slots=True)
class PageRequest:
    """Zero-based page index, page size and ordering of a listing query."""

    page: int = 0
    size: int = 20
    sort: tuple[Order, ...] = ()

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValueError("Page index must not be less than zero")
        if self.size < 1:
            raise ValueError("Page size must not be less than one")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    size: int
    total_elements: int

    @classmethod
    def of(cls, items: list[T], request: PageRequest, total_elements: int) -> "Page[T]":
        return cls(items=list(items), page=request.page, size=request.size, total_elements=total_elements)

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    @property
    def number_of_elements(self) -> int:
        return len(self.items)

    @property
    def first(self) -> bool:
        return self.page == 0

    @property
    def last(self) -> bool:
        return self.page + 1 >= self.total_pages

    @property
    def empty(self) -> bool:
        return not self.items
