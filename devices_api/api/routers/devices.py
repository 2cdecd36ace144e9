"""Device management endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from devices_api.api.deps import get_device_service, get_page_request
from devices_api.api.errors import to_api_error
from devices_api.modules.common.pagination import PageRequest
from devices_api.modules.devices import DeviceError, DeviceService
from devices_api.schemas import (
    DeviceCreate,
    DevicePageResponse,
    DevicePatch,
    DeviceResponse,
    DeviceUpdate,
    ErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}

# Ids are stored as signed 64-bit integers.
DeviceId = Annotated[int, Path(ge=1, le=2**63 - 1, description="Device identifier")]


@router.post(
    "",
    response_model=DeviceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new device",
    responses=ERROR_RESPONSES,
)
async def create_device(payload: DeviceCreate, service: DeviceService = Depends(get_device_service)):
    """Creates a new device in the AVAILABLE state."""
    logger.info("POST /devices - Creating new device")
    try:
        device = await service.create(payload.name, payload.brand)
    except DeviceError as exc:
        raise to_api_error(exc) from exc
    return DeviceResponse.from_domain(device)


@router.get("", response_model=DevicePageResponse, summary="Get all devices")
async def list_devices(
    page_request: PageRequest = Depends(get_page_request),
    service: DeviceService = Depends(get_device_service),
):
    logger.info("GET /devices - Retrieving all devices with pagination")
    page = await service.find_all(page_request)
    return DevicePageResponse.from_page(page)


@router.get(
    "/brand/{brand}",
    response_model=DevicePageResponse,
    summary="Get devices by brand",
    responses=ERROR_RESPONSES,
)
async def list_devices_by_brand(
    brand: str,
    page_request: PageRequest = Depends(get_page_request),
    service: DeviceService = Depends(get_device_service),
):
    """Brand matching ignores case."""
    logger.info("GET /devices/brand/%s - Retrieving devices by brand", brand)
    page = await service.find_by_brand(brand, page_request)
    return DevicePageResponse.from_page(page)


@router.get(
    "/state/{state}",
    response_model=DevicePageResponse,
    summary="Get devices by state",
    responses=ERROR_RESPONSES,
)
async def list_devices_by_state(
    state: str,
    page_request: PageRequest = Depends(get_page_request),
    service: DeviceService = Depends(get_device_service),
):
    """Retrieves all devices in the given state (AVAILABLE, IN_USE, INACTIVE)."""
    logger.info("GET /devices/state/%s - Retrieving devices by state", state)
    try:
        page = await service.find_by_state(state, page_request)
    except DeviceError as exc:
        raise to_api_error(exc) from exc
    return DevicePageResponse.from_page(page)


@router.get(
    "/{device_id}",
    response_model=DeviceResponse,
    summary="Get device by ID",
    responses=ERROR_RESPONSES,
)
async def get_device(device_id: DeviceId, service: DeviceService = Depends(get_device_service)):
    logger.info("GET /devices/%s - Retrieving device", device_id)
    try:
        device = await service.find_by_id(device_id)
    except DeviceError as exc:
        raise to_api_error(exc) from exc
    return DeviceResponse.from_domain(device)


@router.put(
    "/{device_id}",
    response_model=DeviceResponse,
    summary="Update device (full update)",
    responses=ERROR_RESPONSES,
)
async def update_device(
    device_id: DeviceId,
    payload: DeviceUpdate,
    service: DeviceService = Depends(get_device_service),
):
    """Replaces name, brand and state. Name and brand are frozen while the device is IN_USE."""
    logger.info("PUT /devices/%s - Fully updating device", device_id)
    try:
        device = await service.full_update(device_id, payload.name, payload.brand, payload.state)
    except DeviceError as exc:
        raise to_api_error(exc) from exc
    return DeviceResponse.from_domain(device)


@router.patch(
    "/{device_id}",
    response_model=DeviceResponse,
    summary="Update device (partial update)",
    responses=ERROR_RESPONSES,
)
async def patch_device(
    device_id: DeviceId,
    payload: DevicePatch,
    service: DeviceService = Depends(get_device_service),
):
    """Applies only the provided fields. Sending name or brand for an IN_USE device is rejected."""
    logger.info("PATCH /devices/%s - Partially updating device", device_id)
    try:
        device = await service.partial_update(device_id, payload.to_input())
    except DeviceError as exc:
        raise to_api_error(exc) from exc
    return DeviceResponse.from_domain(device)


@router.delete(
    "/{device_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete device",
    responses=ERROR_RESPONSES,
)
async def delete_device(device_id: DeviceId, service: DeviceService = Depends(get_device_service)):
    """A device that is IN_USE cannot be deleted."""
    logger.info("DELETE /devices/%s - Deleting device", device_id)
    try:
        await service.delete(device_id)
    except DeviceError as exc:
        raise to_api_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
