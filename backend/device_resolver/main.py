"""Punto de entrada principal para la aplicación FastAPI."""

import logging

from fastapi import FastAPI

from device_resolver.api.routes.device import router as device_router
from device_resolver.api.routes.health import router as health_router
from device_resolver.core.config import Settings, settings
from device_resolver.core.logging import configure_logging, get_logger, resolve_log_level
from device_resolver.core.middleware import DeviceResolverMiddleware, RequestLoggingMiddleware


def create_app(config: Settings | None = None) -> FastAPI:
    """Crea y configura la instancia de FastAPI."""
    config = config or settings
    default_log_level = logging.DEBUG if config.environment != "production" else logging.INFO
    log_level = resolve_log_level(config.log_level, default=default_log_level)
    configure_logging(level=log_level, log_file=config.log_file_path)

    app = FastAPI(title="Device Resolver", version="0.1.0", root_path=config.root_path)

    # El último middleware agregado es el más externo: el logger ve el dispositivo ya resuelto.
    app.add_middleware(DeviceResolverMiddleware, expose_header=config.expose_device_header)
    app.add_middleware(RequestLoggingMiddleware, skip_prefixes=config.request_log_skip_prefixes)

    app.include_router(health_router)
    app.include_router(device_router)

    get_logger("device_resolver").info(
        "app.configured",
        extra={"environment": config.environment, "log_level": logging.getLevelName(log_level)},
    )
    return app


app = create_app()
