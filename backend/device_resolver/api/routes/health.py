"""Endpoint de liveness para balanceadores y orquestadores."""

from fastapi import APIRouter

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Estado del servicio")
def healthcheck() -> dict[str, str]:
    """Indica que el proceso responde; no consulta dependencias externas."""
    return {"status": "ok"}
