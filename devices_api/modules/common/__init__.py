"""Shared abstractions used across domain modules."""

from .pagination import Order, Page, PageRequest, SortDirection
from .repository import AsyncRepository

__all__ = ["AsyncRepository", "Order", "Page", "PageRequest", "SortDirection"]
