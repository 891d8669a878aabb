"""Pruebas de los middlewares y del acceso al dispositivo resuelto."""

import logging

import pytest
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

from device_resolver.api.deps import DeviceNotResolvedError, get_device
from device_resolver.core.middleware import DeviceResolverMiddleware, RequestLoggingMiddleware
from device_resolver.services.device import Device, Platform


def _build_app(*, with_resolver: bool = True, expose_header: bool = True) -> FastAPI:
    app = FastAPI()
    if with_resolver:
        app.add_middleware(DeviceResolverMiddleware, expose_header=expose_header)
    app.add_middleware(RequestLoggingMiddleware, skip_prefixes=("/skip",))

    @app.get("/kind")
    def kind(device: Device = Depends(get_device)) -> dict[str, str]:
        return {"kind": device.kind, "platform": device.platform.value}

    @app.get("/skip/kind")
    def skipped(device: Device = Depends(get_device)) -> dict[str, str]:
        return {"kind": device.kind}

    return app


async def test_middleware_publishes_device_on_request_state() -> None:
    transport = ASGITransport(app=_build_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get(
            "/kind", headers={"User-Agent": "Mozilla/5.0 (iPhone; CPU iPhone OS 14_0)"}
        )

    assert response.status_code == 200
    assert response.json() == {"kind": "mobile", "platform": "ios"}
    assert response.headers["x-device-kind"] == "mobile"
    assert "User-Agent" in response.headers["vary"]
    assert response.headers["x-request-id"]


async def test_header_exposure_can_be_disabled() -> None:
    transport = ASGITransport(app=_build_app(expose_header=False))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/kind")

    assert response.json()["kind"] == "normal"
    assert "x-device-kind" not in response.headers


async def test_skipped_paths_are_not_logged(caplog: pytest.LogCaptureFixture) -> None:
    transport = ASGITransport(app=_build_app())
    with caplog.at_level(logging.INFO, logger="device_resolver.request"):
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/skip/kind")

    assert response.status_code == 200
    assert "x-request-id" not in response.headers
    assert not [r for r in caplog.records if r.name == "device_resolver.request"]


async def test_completed_log_includes_device(caplog: pytest.LogCaptureFixture) -> None:
    transport = ASGITransport(app=_build_app())
    with caplog.at_level(logging.INFO, logger="device_resolver.request"):
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            await client.get("/kind", headers={"User-Agent": "Mozilla/5.0 (Linux; Android 10)"})

    completed = [r for r in caplog.records if r.getMessage() == "request.completed"]
    assert len(completed) == 1
    assert completed[0].device_kind == "tablet"
    assert completed[0].device_platform == "android"


async def test_missing_resolver_raises_on_access(caplog: pytest.LogCaptureFixture) -> None:
    transport = ASGITransport(app=_build_app(with_resolver=False))
    with caplog.at_level(logging.INFO, logger="device_resolver.request"):
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            with pytest.raises(DeviceNotResolvedError):
                await client.get("/kind")

    assert any(r.getMessage() == "request.failed" for r in caplog.records)


def test_get_device_requires_resolution() -> None:
    request = Request({"type": "http", "method": "GET", "path": "/", "headers": []})
    with pytest.raises(DeviceNotResolvedError):
        get_device(request)


def test_get_device_rejects_foreign_values() -> None:
    request = Request({"type": "http", "method": "GET", "path": "/", "headers": []})
    request.state.device = "tablet"
    with pytest.raises(DeviceNotResolvedError):
        get_device(request)


def test_get_device_returns_stored_device() -> None:
    request = Request({"type": "http", "method": "GET", "path": "/", "headers": []})
    device = Device.tablet(Platform.IPAD)
    request.state.device = device
    assert get_device(request) is device
