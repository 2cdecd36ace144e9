"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from devices_api.modules.common.pagination import Page
from devices_api.modules.devices import UNSET, Device, DeviceUpdateInput

CREATION_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeviceCreate(CamelModel):
    name: str = Field(..., description="Device name, surrounding whitespace is dropped")
    brand: str = Field(..., description="Device brand, surrounding whitespace is dropped")

    @field_validator("name", "brand")
    @classmethod
    def _not_blank(cls, value: str, info) -> str:
        if not value.strip():
            raise PydanticCustomError("blank", "Device {field} is required", {"field": info.field_name})
        return value


class DeviceUpdate(CamelModel):
    name: Optional[str] = Field(...)
    brand: Optional[str] = Field(...)
    state: Optional[str] = Field(..., description="AVAILABLE, IN_USE or INACTIVE")

    @field_validator("name", "brand", "state")
    @classmethod
    def _not_null(cls, value: Optional[str], info) -> str:
        if value is None:
            raise PydanticCustomError("null", "Device {field} cannot be null", {"field": info.field_name})
        return value


class DevicePatch(CamelModel):
    """Only keys present in the request body are applied."""

    name: Optional[str] = None
    brand: Optional[str] = None
    state: Optional[str] = Field(None, description="AVAILABLE, IN_USE or INACTIVE")

    def to_input(self) -> DeviceUpdateInput:
        provided = {field: getattr(self, field) for field in self.model_fields_set}
        return DeviceUpdateInput(
            name=provided.get("name", UNSET),
            brand=provided.get("brand", UNSET),
            state=provided.get("state", UNSET),
        )


class DeviceResponse(CamelModel):
    id: int
    name: str
    brand: str
    state: str
    creation_time: datetime

    @field_serializer("creation_time")
    def _format_creation_time(self, value: datetime) -> str:
        return value.strftime(CREATION_TIME_FORMAT)

    @classmethod
    def from_domain(cls, device: Device) -> "DeviceResponse":
        return cls(
            id=device.id,
            name=device.name,
            brand=device.brand,
            state=device.state.value,
            creation_time=device.creation_time,
        )


class DevicePageResponse(CamelModel):
    content: list[DeviceResponse]
    page: int
    size: int
    total_elements: int
    total_pages: int
    number_of_elements: int
    first: bool
    last: bool
    empty: bool

    @classmethod
    def from_page(cls, page: Page[Device]) -> "DevicePageResponse":
        return cls(
            content=[DeviceResponse.from_domain(device) for device in page.items],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            number_of_elements=page.number_of_elements,
            first=page.first,
            last=page.last,
            empty=page.empty,
        )


class ErrorResponse(CamelModel):
    """Body of every non-2xx response."""

    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
    validation_errors: Optional[dict[str, str]] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
