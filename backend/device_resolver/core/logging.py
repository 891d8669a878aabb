"""Logging estructurado en JSON para los eventos del servicio."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

# Atributos propios de LogRecord; todo lo demás llegó vía `extra=`.
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
_LOG_FILE_BACKUPS = 5


class JSONFormatter(logging.Formatter):
    """Serializa cada registro como un objeto JSON de una línea."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: int = logging.INFO, *, log_file: str | None = None) -> None:
    """Instala el handler JSON en el logger raíz y, opcionalmente, un archivo rotativo.

    Un `log_file` inaccesible lanza `OSError` durante el arranque.
    """
    formatter = JSONFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_path,
                maxBytes=_LOG_FILE_MAX_BYTES,
                backupCount=_LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)


def resolve_log_level(value: str | int | None, *, default: int = logging.INFO) -> int:
    """Convierte un nivel configurado (`"debug"`, `"20"`, `30`) a su constante numérica."""
    if isinstance(value, int):
        return value
    candidate = (value or "").strip()
    if candidate.isdigit():
        return int(candidate)
    mapped = logging.getLevelName(candidate.upper()) if candidate else None
    return mapped if isinstance(mapped, int) else default


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
