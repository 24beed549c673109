"""
Endpoints para disparar el sync Splash -> Webflow.
Pensado para un scheduler externo (cron HTTP) o un boton en la UI.
"""
import asyncio
import threading
from typing import List

from fastapi import APIRouter, HTTPException, Query, status
from loguru import logger
from pydantic import BaseModel

from eventsync.core.config import settings
from eventsync.infrastructure.external.event_sync.sync_service import build_from_settings
from eventsync.infrastructure.external.event_sync.types import SyncResult


router = APIRouter(prefix="/sync", tags=["Sync"])

# Una corrida a la vez por proceso
_sync_lock = threading.Lock()


class SyncFailureDTO(BaseModel):
    identifier: str
    message: str


class SyncResultDTO(BaseModel):
    """Resultado de la sincronizacion."""
    success: bool
    message: str
    total: int
    candidates: int
    created: int
    failed: int
    skipped_unpublished: int = 0
    dry_run: bool = False
    failures: List[SyncFailureDTO] = []

    @classmethod
    def from_result(cls, result: SyncResult) -> "SyncResultDTO":
        if result.dry_run:
            message = f"Dry-run: {result.candidates} evento(s) se crearian"
        elif result.candidates == 0:
            message = "Sin eventos nuevos en Splash"
        else:
            message = f"{result.created}/{result.candidates} evento(s) creados como borrador"
        return cls(
            success=result.failed == 0,
            message=message,
            total=result.total,
            candidates=result.candidates,
            created=result.created,
            failed=result.failed,
            skipped_unpublished=result.skipped_unpublished,
            dry_run=result.dry_run,
            failures=[SyncFailureDTO(identifier=f.identifier, message=f.message) for f in result.failures],
        )


def _run_splash_sync(dry_run: bool) -> SyncResult:
    """
    Ejecuta el sync de forma sincrona (se llama desde un thread).
    """
    if not _sync_lock.acquire(blocking=False):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Ya hay un sync Splash -> Webflow en curso"
        )
    try:
        service = build_from_settings(settings)
        return service.run_once(dry_run=dry_run)
    finally:
        _sync_lock.release()


@router.post(
    "/splash-webflow",
    response_model=SyncResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Sincronizar eventos de Splash hacia Webflow CMS"
)
async def sync_splash_webflow(
    dry_run: bool = Query(
        default=False,
        description="Si True, calcula y loguea los eventos nuevos sin crearlos en Webflow."
    )
) -> SyncResultDTO:
    """
    Ejecuta una corrida del sync.

    - Los eventos nuevos se crean como borrador en Webflow.
    - Errores de lectura (Splash, schema o escaneo de Webflow) abortan la
      corrida y responden 502 con el status/body del upstream.
    - Errores al crear eventos individuales no abortan: se listan en `failures`.
    """
    logger.info(f"Sync Splash -> Webflow disparado desde API (dry_run={dry_run})")

    # Ejecutar sync en thread separado para no bloquear el event loop
    result = await asyncio.to_thread(_run_splash_sync, dry_run)
    return SyncResultDTO.from_result(result)
