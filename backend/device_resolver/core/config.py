"""Configuración central basada en variables de entorno."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Valores globales leídos desde `.env` o el entorno."""

    environment: str = "development"
    log_level: str | None = Field(
        default=None,
        description="Nivel de logging global (ej. debug, info, warning). Cuando no se define, usa un valor por ambiente.",
    )
    log_file_path: str | None = Field(
        default=None,
        description="Ruta opcional para un archivo de log rotativo en formato JSON.",
    )
    root_path: str = Field(
        default="",
        description="Prefijo bajo el que se publica la API detrás de un proxy.",
    )
    request_log_skip_prefixes: tuple[str, ...] = Field(
        default=("/health",),
        description="Prefijos de ruta para los que no se registrarán eventos de request.started/completed.",
    )
    expose_device_header: bool = Field(
        default=True,
        description="Agrega `x-device-kind` y `Vary: User-Agent` a cada respuesta.",
    )
    model_config = SettingsConfigDict(env_file=".env", env_prefix="DEVICE_RESOLVER_", extra="allow")


settings = Settings()
