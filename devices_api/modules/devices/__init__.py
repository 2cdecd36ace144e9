"""Device management: entity, state rules and the orchestrating service."""

from .exceptions import (
    DeviceError,
    DeviceNotFoundError,
    DeviceValidationError,
    InvalidDeviceOperationError,
)
from .models import UNSET, Device, DeviceState, DeviceUpdateInput
from .repository import DeviceRepository
from .service import DeviceService

__all__ = [
    "Device",
    "DeviceState",
    "DeviceUpdateInput",
    "UNSET",
    "DeviceRepository",
    "DeviceService",
    "DeviceError",
    "DeviceNotFoundError",
    "DeviceValidationError",
    "InvalidDeviceOperationError",
]
