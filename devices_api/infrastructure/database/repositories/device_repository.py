"""SQLAlchemy powered repository for device persistence."""

from __future__ import annotations

from sqlalchemy import func, select

from devices_api.db.models import Device as DeviceModel
from devices_api.modules.common.pagination import Page, PageRequest
from devices_api.modules.common.repository import AsyncRepository
from devices_api.modules.devices.exceptions import DeviceNotFoundError
from devices_api.modules.devices.models import Device, DeviceState


class SqlDeviceRepository(AsyncRepository[DeviceModel]):
    sortable_columns = {
        "id": DeviceModel.id,
        "name": DeviceModel.name,
        "brand": DeviceModel.brand,
        "state": DeviceModel.state,
        "creation_time": DeviceModel.creation_time,
    }

    async def get_by_id(self, device_id: int) -> Device | None:
        model = await self._fetch_model(device_id)
        return self._to_domain(model) if model else None

    async def insert(self, device: Device) -> Device:
        model = DeviceModel(
            name=device.name,
            brand=device.brand,
            state=device.state.value,
        )
        await self.add(model)
        await self.session.refresh(model)
        return self._to_domain(model)

    async def update(self, device: Device) -> Device:
        model = await self._fetch_model(device.id)
        if model is None:
            raise DeviceNotFoundError(device.id)

        # creation_time is owned by the database and never written here.
        model.name = device.name
        model.brand = device.brand
        model.state = device.state.value
        await self.session.flush()
        await self.session.refresh(model)
        return self._to_domain(model)

    async def delete(self, device_id: int) -> bool:
        model = await self._fetch_model(device_id)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.flush()
        return True

    async def list_all(self, page_request: PageRequest) -> Page[Device]:
        return await self._page(select(DeviceModel), page_request)

    async def list_by_brand(self, brand: str, page_request: PageRequest) -> Page[Device]:
        stmt = select(DeviceModel).where(func.lower(DeviceModel.brand) == brand.lower())
        return await self._page(stmt, page_request)

    async def list_by_state(self, state: DeviceState, page_request: PageRequest) -> Page[Device]:
        stmt = select(DeviceModel).where(DeviceModel.state == state.value)
        return await self._page(stmt, page_request)

    async def _page(self, stmt, page_request: PageRequest) -> Page[Device]:
        models, total = await self._paginate(stmt, page_request)
        return Page.of([self._to_domain(model) for model in models], page_request, total)

    async def _fetch_model(self, device_id: int | None) -> DeviceModel | None:
        stmt = select(DeviceModel).where(DeviceModel.id == device_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: DeviceModel) -> Device:
        return Device(
            id=model.id,
            name=model.name,
            brand=model.brand,
            state=DeviceState(model.state),
            creation_time=model.creation_time,
        )
