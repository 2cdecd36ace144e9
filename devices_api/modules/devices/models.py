"""Device domain models."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .exceptions import DeviceValidationError


class DeviceState(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    INACTIVE = "INACTIVE"

    @classmethod
    def parse(cls, value: str | None, field: str = "state") -> "DeviceState":
        """Case-insensitive lookup by member name, unknown text is rejected."""
        if isinstance(value, cls):
            return value
        if value is None:
            raise DeviceValidationError.for_field(field, "Device state cannot be null")
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise DeviceValidationError.for_field(field, f"Invalid device state: {value}") from None


@dataclass(slots=True)
class Device:
    name: str
    brand: str
    state: DeviceState
    id: Optional[int] = None
    creation_time: Optional[datetime] = None

    @property
    def in_use(self) -> bool:
        return self.state is DeviceState.IN_USE


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class DeviceUpdateInput:
    name: Optional[str] | object = UNSET
    brand: Optional[str] | object = UNSET
    state: Optional[str] | object = UNSET

    def touches_identity(self) -> bool:
        return self.name is not UNSET or self.brand is not UNSET
