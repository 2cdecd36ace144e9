import dataclasses
import itertools
import os
from datetime import datetime

os.environ["DATABASE__URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from devices_api.core.config import get_settings
from devices_api.core.container import get_container
from devices_api.db import models  # noqa: F401
from devices_api.infrastructure.database.base import Base
from devices_api.modules.common.pagination import Page, PageRequest
from devices_api.modules.devices import Device, DeviceService, DeviceState


class InMemoryDeviceRepository:
    """Dict backed stand-in for the SQL repository."""

    def __init__(self) -> None:
        self.rows: dict[int, Device] = {}
        self._ids = itertools.count(1)
        self.writes = 0

    async def get_by_id(self, device_id):
        row = self.rows.get(device_id)
        return dataclasses.replace(row) if row else None

    async def insert(self, device):
        stored = dataclasses.replace(
            device,
            id=next(self._ids),
            creation_time=datetime.now().replace(microsecond=0),
        )
        self.rows[stored.id] = stored
        self.writes += 1
        return dataclasses.replace(stored)

    async def update(self, device):
        current = self.rows[device.id]
        stored = dataclasses.replace(
            current, name=device.name, brand=device.brand, state=device.state
        )
        self.rows[stored.id] = stored
        self.writes += 1
        return dataclasses.replace(stored)

    async def delete(self, device_id):
        self.writes += 1
        return self.rows.pop(device_id, None) is not None

    async def list_all(self, page_request):
        return self._page(list(self.rows.values()), page_request)

    async def list_by_brand(self, brand, page_request):
        rows = [row for row in self.rows.values() if row.brand.lower() == brand.lower()]
        return self._page(rows, page_request)

    async def list_by_state(self, state, page_request):
        return self._page([row for row in self.rows.values() if row.state is state], page_request)

    @staticmethod
    def _page(rows: list[Device], request: PageRequest) -> Page[Device]:
        rows = sorted(rows, key=lambda row: row.id)
        for order in reversed(request.sort):
            rows.sort(key=lambda row: getattr(row, order.property), reverse=order.descending)
        chunk = rows[request.offset : request.offset + request.size]
        return Page.of([dataclasses.replace(row) for row in chunk], request, len(rows))


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    get_container.cache_clear()
    yield
    get_settings.cache_clear()
    get_container.cache_clear()


@pytest.fixture
def repository():
    return InMemoryDeviceRepository()


@pytest.fixture
def service(repository):
    return DeviceService(repository)


@pytest.fixture
def seed(repository):
    """Store a device directly, bypassing the service defaults."""

    def _seed(name="Laptop", brand="Dell", state=DeviceState.AVAILABLE):
        device = Device(
            id=next(repository._ids),
            name=name,
            brand=brand,
            state=state,
            creation_time=datetime(2025, 1, 15, 10, 30, 0),
        )
        repository.rows[device.id] = device
        return dataclasses.replace(device)

    return _seed


@pytest_asyncio.fixture
async def session():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as db:
        yield db
    await engine.dispose()


@pytest.fixture
def client():
    from devices_api.main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def api_prefix():
    return get_settings().api_prefix + "/devices"
