"""State dependent guards applied before a device is mutated.

Both checks are pure: they look at the stored state only and raise
:class:`InvalidDeviceOperationError` when the change has to be refused.
"""

from __future__ import annotations

from .exceptions import InvalidDeviceOperationError
from .models import DeviceState

IDENTITY_FROZEN_MESSAGE = "Cannot update name or brand of a device that is IN_USE"
DELETE_IN_USE_MESSAGE = "Cannot delete a device that is IN_USE"


def can_change_identity(current_state: DeviceState, name_unchanged: bool, brand_unchanged: bool) -> None:
    if current_state is DeviceState.IN_USE and not (name_unchanged and brand_unchanged):
        raise InvalidDeviceOperationError(IDENTITY_FROZEN_MESSAGE)


def can_delete(current_state: DeviceState) -> None:
    if current_state is DeviceState.IN_USE:
        raise InvalidDeviceOperationError(DELETE_IN_USE_MESSAGE)


__all__ = ["can_change_identity", "can_delete", "IDENTITY_FROZEN_MESSAGE", "DELETE_IN_USE_MESSAGE"]
