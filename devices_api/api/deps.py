"""Reusable FastAPI dependencies."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from devices_api.core.config import get_settings
from devices_api.infrastructure.database.session import get_session
from devices_api.modules.common.pagination import Order, PageRequest, SortDirection
from devices_api.modules.devices import DeviceService

from .errors import ApiError

# Wire name -> repository sort property.
SORT_PROPERTIES = {
    "id": "id",
    "name": "name",
    "brand": "brand",
    "state": "state",
    "creationTime": "creation_time",
    "creation_time": "creation_time",
}


get_db_session = get_session


def get_device_service(db: AsyncSession = Depends(get_db_session)) -> DeviceService:
    return DeviceService.with_session(db)


def _parse_order(raw: str) -> Order:
    parts = [part.strip() for part in raw.split(",")]
    if not parts[0] or len(parts) > 2:
        message = f"Invalid sort parameter: {raw}"
        raise ApiError(status.HTTP_400_BAD_REQUEST, message, {"sort": message})

    prop = SORT_PROPERTIES.get(parts[0])
    if prop is None:
        message = f"No property '{parts[0]}' found to sort by"
        raise ApiError(status.HTTP_400_BAD_REQUEST, message, {"sort": message})

    direction = SortDirection.ASC
    if len(parts) == 2 and parts[1]:
        try:
            direction = SortDirection(parts[1].lower())
        except ValueError:
            message = f"Invalid sort direction: {parts[1]}"
            raise ApiError(status.HTTP_400_BAD_REQUEST, message, {"sort": message}) from None
    return Order(property=prop, direction=direction)


def get_page_request(
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: Optional[int] = Query(None, ge=1, description="Page size"),
    sort: Optional[list[str]] = Query(None, description="property[,asc|desc], repeatable"),
) -> PageRequest:
    settings = get_settings()
    if size is None:
        size = settings.pagination.default_size
    if size > settings.pagination.max_size:
        message = f"Page size must not exceed {settings.pagination.max_size}"
        raise ApiError(status.HTTP_400_BAD_REQUEST, message, {"size": message})
    return PageRequest(page=page, size=size, sort=tuple(_parse_order(item) for item in sort or ()))


__all__ = ["get_db_session", "get_device_service", "get_page_request"]
