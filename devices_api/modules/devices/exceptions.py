"""Device domain specific exceptions."""

from __future__ import annotations

from typing import Mapping


class DeviceError(Exception):
    """Base class for device related domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DeviceValidationError(DeviceError):
    """Raised when device input is missing, blank or not parsable."""

    def __init__(self, message: str, field_errors: Mapping[str, str] | None = None) -> None:
        super().__init__(message)
        self.field_errors = dict(field_errors) if field_errors else None

    @classmethod
    def for_field(cls, field: str, message: str) -> "DeviceValidationError":
        return cls(message, {field: message})


class DeviceNotFoundError(DeviceError):
    """Raised when the requested device could not be found."""

    def __init__(self, device_id: int) -> None:
        super().__init__(f"Device not found with id: {device_id}")
        self.device_id = device_id


class InvalidDeviceOperationError(DeviceError):
    """Raised when a business rule forbids the requested change."""
