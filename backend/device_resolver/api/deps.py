"""Dependencias reutilizables para acceder al dispositivo resuelto."""

from fastapi import Request

from device_resolver.core.middleware import DEVICE_STATE_KEY
from device_resolver.services.device import Device


class DeviceNotResolvedError(RuntimeError):
    """El dispositivo se consultó antes de que `DeviceResolverMiddleware` lo calculara."""


def get_device(request: Request) -> Device:
    """Retorna el `Device` publicado por el middleware para este request.

    Se usa directamente o como dependencia (`Depends(get_device)`). Lanza
    `DeviceNotResolvedError` si el middleware no está instalado o aún no corrió.
    """
    device = getattr(request.state, DEVICE_STATE_KEY, None)
    if not isinstance(device, Device):
        raise DeviceNotResolvedError(
            "Device has not been resolved for this request; is DeviceResolverMiddleware installed?"
        )
    return device
