"""Repository protocol for device persistence operations."""

from __future__ import annotations

from typing import Protocol

from devices_api.modules.common.pagination import Page, PageRequest

from .models import Device, DeviceState


class DeviceRepository(Protocol):
    async def get_by_id(self, device_id: int) -> Device | None:
        ...

    async def insert(self, device: Device) -> Device:
        ...

    async def update(self, device: Device) -> Device:
        ...

    async def delete(self, device_id: int) -> bool:
        ...

    async def list_all(self, page_request: PageRequest) -> Page[Device]:
        ...

    async def list_by_brand(self, brand: str, page_request: PageRequest) -> Page[Device]:
        ...

    async def list_by_state(self, state: DeviceState, page_request: PageRequest) -> Page[Device]:
        ...
