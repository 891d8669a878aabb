"""Middlewares del servicio: clasificación de dispositivo y logging de requests."""

from __future__ import annotations

import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from device_resolver.core.logging import get_logger
from device_resolver.services.device import Device, classify

logger = get_logger("device_resolver.request")

DEVICE_STATE_KEY = "device"
DEVICE_KIND_HEADER = "x-device-kind"


class DeviceResolverMiddleware(BaseHTTPMiddleware):
    """Clasifica el dispositivo de cada request y lo publica en `request.state.device`."""

    def __init__(self, app: ASGIApp, *, expose_header: bool = True) -> None:
        super().__init__(app)
        self.expose_header = expose_header

    async def dispatch(self, request: Request, call_next):
        device: Device = classify(request.headers)
        setattr(request.state, DEVICE_STATE_KEY, device)

        response = await call_next(request)

        if self.expose_header:
            response.headers[DEVICE_KIND_HEADER] = device.kind
            vary = response.headers.get("vary")
            if not vary:
                response.headers["vary"] = "User-Agent"
            elif "user-agent" not in vary.lower():
                response.headers["vary"] = f"{vary}, User-Agent"

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Registra información básica de cada request entrante."""

    def __init__(self, app: ASGIApp, *, skip_prefixes: tuple[str, ...] = ()) -> None:
        super().__init__(app)
        self.skip_prefixes = skip_prefixes

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if self.skip_prefixes and path.startswith(self.skip_prefixes):
            return await call_next(request)

        request_id = uuid4().hex
        start = time.perf_counter()
        client_ip = request.headers.get("x-forwarded-for")
        if client_ip:
            client_ip = client_ip.split(",")[0].strip()
        elif request.client:
            client_ip = request.client.host

        logger.info(
            "request.started",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "client_ip": client_ip,
                "user_agent": request.headers.get("user-agent"),
            },
        )

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.exception(
                "request.failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": path,
                    "duration_ms": round(duration_ms, 2),
                    "client_ip": client_ip,
                },
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers["x-request-id"] = request_id

        extra = {
            "request_id": request_id,
            "method": request.method,
            "path": path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": client_ip,
        }
        device = getattr(request.state, DEVICE_STATE_KEY, None)
        if isinstance(device, Device):
            extra["device_kind"] = device.kind
            extra["device_platform"] = device.platform.value

        logger.info("request.completed", extra=extra)

        return response
