"""Domain service orchestrating device related workflows."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from devices_api.modules.common.pagination import Page, PageRequest

from . import rules
from .exceptions import DeviceNotFoundError, DeviceValidationError
from .models import UNSET, Device, DeviceState, DeviceUpdateInput
from .repository import DeviceRepository

logger = logging.getLogger(__name__)


def _require_text(value: object, field: str, label: str) -> str:
    """Trim ``value`` and reject ``None`` or blank text."""
    if value is None:
        raise DeviceValidationError.for_field(field, f"Device {label} cannot be null")
    if not isinstance(value, str):
        raise DeviceValidationError.for_field(field, f"Device {label} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise DeviceValidationError.for_field(field, f"Device {label} is required")
    return trimmed


@dataclass(slots=True)
class DeviceService:
    repository: DeviceRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "DeviceService":
        # Imported here, the SQL repository itself imports this package.
        from devices_api.infrastructure.database.repositories import SqlDeviceRepository

        return cls(SqlDeviceRepository(session))

    async def create(self, name: str, brand: str) -> Device:
        logger.info("Creating new device with name: %s and brand: %s", name, brand)
        device = Device(
            name=_require_text(name, "name", "name"),
            brand=_require_text(brand, "brand", "brand"),
            state=DeviceState.AVAILABLE,
        )
        created = await self.repository.insert(device)
        logger.info("Device created successfully with id: %s", created.id)
        return created

    async def find_by_id(self, device_id: int) -> Device:
        logger.debug("Finding device with id: %s", device_id)
        return await self._load(device_id)

    async def find_all(self, page_request: PageRequest) -> Page[Device]:
        logger.debug("Finding all devices with pagination: %s", page_request)
        return await self.repository.list_all(page_request)

    async def find_by_brand(self, brand: str, page_request: PageRequest) -> Page[Device]:
        logger.debug("Finding devices by brand: %s", brand)
        return await self.repository.list_by_brand(brand, page_request)

    async def find_by_state(self, state: str, page_request: PageRequest) -> Page[Device]:
        logger.debug("Finding devices by state: %s", state)
        parsed = DeviceState.parse(state)
        return await self.repository.list_by_state(parsed, page_request)

    async def full_update(self, device_id: int, name: str, brand: str, state: str) -> Device:
        """Replace name, brand and state; every field is required.

        The identity guard compares the trimmed input with the stored values,
        so an IN_USE device accepts a request that only changes its state.
        """
        logger.info("Fully updating device with id: %s", device_id)
        device = await self._load(device_id)

        new_name = _require_text(name, "name", "name")
        new_brand = _require_text(brand, "brand", "brand")
        new_state = DeviceState.parse(state)

        rules.can_change_identity(
            device.state,
            name_unchanged=device.name == new_name,
            brand_unchanged=device.brand == new_brand,
        )

        device.name = new_name
        device.brand = new_brand
        device.state = new_state
        updated = await self.repository.update(device)
        logger.info("Device with id: %s updated successfully", device_id)
        return updated

    async def partial_update(self, device_id: int, changes: DeviceUpdateInput) -> Device:
        """Merge the provided fields into the stored device.

        Unlike :meth:`full_update`, the identity guard triggers on the mere
        presence of ``name`` or ``brand``, even when the value is unchanged.
        """
        logger.info("Partially updating device with id: %s", device_id)
        device = await self._load(device_id)

        new_name = _require_text(changes.name, "name", "name") if changes.name is not UNSET else None
        new_brand = _require_text(changes.brand, "brand", "brand") if changes.brand is not UNSET else None
        new_state = DeviceState.parse(changes.state) if changes.state is not UNSET else None

        if changes.touches_identity():
            rules.can_change_identity(device.state, name_unchanged=False, brand_unchanged=False)

        if new_name is not None:
            device.name = new_name
        if new_brand is not None:
            device.brand = new_brand
        if new_state is not None:
            device.state = new_state

        updated = await self.repository.update(device)
        logger.info("Device with id: %s partially updated successfully", device_id)
        return updated

    async def delete(self, device_id: int) -> None:
        logger.info("Deleting device with id: %s", device_id)
        device = await self._load(device_id)

        if device.in_use:
            logger.warning("Cannot delete device with id: %s because it is IN_USE", device_id)
        rules.can_delete(device.state)

        if not await self.repository.delete(device_id):
            raise DeviceNotFoundError(device_id)
        logger.info("Device with id: %s deleted successfully", device_id)

    async def _load(self, device_id: int) -> Device:
        device = await self.repository.get_by_id(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        return device
