"""Endpoint que expone la clasificación del dispositivo que hace la llamada."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from device_resolver.api.deps import get_device
from device_resolver.services.device import Device, Platform

router = APIRouter(prefix="/device", tags=["device"])


class DeviceResponse(BaseModel):
    """Clasificación serializada del dispositivo."""

    kind: Literal["normal", "mobile", "tablet"] = Field(..., description="Categoría del dispositivo.")
    is_normal: bool
    is_mobile: bool
    is_tablet: bool
    platform: Platform = Field(..., description="Plataforma aproximada (android, ios, ipad, Kindle, Unknown).")


@router.get("", response_model=DeviceResponse, summary="Clasificación del dispositivo actual")
def read_device(device: Device = Depends(get_device)) -> DeviceResponse:
    """Devuelve cómo se clasificó el request a partir de sus headers."""
    return DeviceResponse(**device.as_dict())
