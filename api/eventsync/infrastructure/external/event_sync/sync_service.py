"""
Servicio de sincronización Splash -> Webflow.

Diseño (resumen):
- Lee el schema actual de la colección Webflow (field slugs)
- Trae los eventos de Splash
- Escanea Webflow completo y arma el set de Splash IDs existentes
- Crea como draft cada evento publicado cuyo ID no está en Webflow

Estrategia de idempotencia:
- No hay estado local: el "ya sincronizado" es el Splash ID guardado en
  cada item de Webflow, recalculado en cada corrida.
- El índice se calcula una vez al inicio. Un proceso externo que cree el
  mismo evento durante la corrida puede generar un duplicado.
"""

from __future__ import annotations

import time
from typing import Callable, Iterable, Optional, Protocol, Sequence, TypeVar

from loguru import logger

from eventsync.core.config import Settings
from eventsync.infrastructure.external.splash.splash_client import SplashClient, SplashCredentials
from eventsync.infrastructure.external.telegram.telegram_client import TelegramClient
from eventsync.infrastructure.external.webflow.webflow_client import WebflowClient, WebflowCredentials
from eventsync.shared.exceptions.sync import SyncConfigError, SyncException

from .dedup import build_dedup_index
from .field_mappings import DEFAULT_TITLE, NAME_KEY, SLUG_KEY, project_event, resolve_identifier_key
from .notifier import NullNotifier, SyncNotifier, TelegramSyncNotifier
from .pagination import ItemPage
from .types import DedupIndex, DestinationSchema, SourceRecord, SyncFailure, SyncResult, SyncStage

T = TypeVar("T")


class EventSource(Protocol):
    def fetch_events(self) -> list[SourceRecord]:
        ...


class EventDestination(Protocol):
    def get_field_keys(self) -> frozenset[str]:
        ...

    def iter_item_pages(self) -> Iterable[ItemPage]:
        ...

    def create_item(self, field_data: dict) -> str:
        ...


def select_new_records(records: Sequence[SourceRecord], existing: DedupIndex) -> list[SourceRecord]:
    """
    Records publicados cuyo Splash ID no está en Webflow, en el orden de Splash.

    Un record sin ID no entra: se crearía sin splash-id y volvería a crearse
    en cada corrida.
    """
    return [r for r in records if r.published and r.source_id and str(r.source_id) not in existing]


def validate_schema(schema_keys: DestinationSchema) -> None:
    """
    El schema debe poder guardar name, slug y el Splash ID. Sin la key del ID
    cada corrida volvería a crear los mismos eventos.
    """
    missing = [key for key in (NAME_KEY, SLUG_KEY) if key not in schema_keys]
    if missing:
        raise SyncConfigError(f"La colección Webflow no tiene los campos obligatorios: {', '.join(missing)}")
    if resolve_identifier_key(schema_keys) is None:
        raise SyncConfigError(
            "La colección Webflow no tiene un campo para el Splash ID "
            "(se esperaba 'splash-id' o un alias equivalente)"
        )


class SplashToWebflowSync:
    """
    Orquestador de una corrida.

    Etapas: INIT -> SCHEMA_LOADED -> SOURCE_LOADED -> DEDUP_LOADED -> DIFFED
    -> WRITING -> DONE. Un error antes de WRITING aborta la corrida; durante
    WRITING los errores son por record y no cortan el batch.
    """

    def __init__(
        self,
        *,
        source: EventSource,
        destination: EventDestination,
        notifier: Optional[SyncNotifier] = None,
        write_delay_s: float = 1.1,
        sleep: Callable[[float], None] = time.sleep,
        debug: bool = False,
    ) -> None:
        self._source = source
        self._destination = destination
        self._notifier = notifier or NullNotifier()
        self._write_delay_s = write_delay_s
        self._sleep = sleep
        self._debug = debug
        self._stage = SyncStage.INIT

    @property
    def stage(self) -> SyncStage:
        return self._stage

    def _advance(self, stage: SyncStage) -> None:
        logger.debug(f"Sync: {self._stage.value} -> {stage.value}")
        self._stage = stage

    def run_once(self, *, dry_run: bool = False) -> SyncResult:
        """
        Ejecuta una corrida completa.

        Lanza AuthError / TransportError / SyncConfigError si falla alguna
        lectura; en ese caso no se escribe nada.
        """
        self._stage = SyncStage.INIT
        logger.info(f"Iniciando sync Splash -> Webflow{' (dry-run)' if dry_run else ''}")

        schema_keys = self._read(SyncStage.SCHEMA_LOADED, self._load_schema)
        records = self._read(SyncStage.SOURCE_LOADED, self._source.fetch_events)
        logger.info(f"✓ {len(records)} evento(s) en Splash")
        if self._debug and records:
            logger.debug(f"Evento Splash de muestra: {records[0].raw}")

        existing = self._read(
            SyncStage.DEDUP_LOADED,
            lambda: build_dedup_index(self._destination.iter_item_pages()),
        )
        logger.info(f"✓ {len(existing)} evento(s) de Splash ya existen en Webflow")

        new_records = select_new_records(records, existing)
        skipped_unpublished = sum(1 for r in records if not r.published)
        missing_id = [
            SyncFailure(identifier="", message=f"Evento sin id de Splash: {r.title or DEFAULT_TITLE}")
            for r in records
            if r.published and not r.source_id
        ]
        for failure in missing_id:
            logger.warning(f"✗ Omitido: {failure.message}")
        self._advance(SyncStage.DIFFED)
        logger.info(
            f"→ {len(new_records)} evento(s) nuevos por sincronizar "
            f"({skipped_unpublished} sin publicar omitidos)"
        )

        self._advance(SyncStage.WRITING)
        if dry_run:
            created_records: list[SourceRecord] = []
            failures: list[SyncFailure] = list(missing_id)
            created_ids: list[str] = []
            for record in new_records:
                fields = project_event(record, schema_keys)
                logger.info(f"[dry-run] Se crearía: {fields[NAME_KEY]} ({record.source_id})")
                if self._debug:
                    logger.debug(f"fieldData: {fields}")
        else:
            created_records, created_ids, failures = self._write_all(new_records, schema_keys)
            failures = missing_id + failures

        self._advance(SyncStage.DONE)
        result = SyncResult(
            total=len(records),
            candidates=len(new_records),
            created=len(created_records),
            failures=tuple(failures),
            created_ids=tuple(created_ids),
            skipped_unpublished=skipped_unpublished,
            dry_run=dry_run,
        )
        logger.info(f"Sync completado: {result.created}/{result.candidates} evento(s) creados, {result.failed} error(es)")

        if created_records:
            self._notify(created_records)
        return result

    def _read(self, stage: SyncStage, load: Callable[[], T]) -> T:
        try:
            value = load()
        except SyncException as e:
            logger.error(f"Sync abortado en {stage.value}: {e.message}")
            e.at_stage(stage.value)
            raise
        self._advance(stage)
        return value

    def _load_schema(self) -> DestinationSchema:
        schema_keys = frozenset(self._destination.get_field_keys())
        validate_schema(schema_keys)
        logger.info(f"✓ Schema Webflow: {len(schema_keys)} campo(s)")
        return schema_keys

    def _write_all(
        self,
        records: Sequence[SourceRecord],
        schema_keys: DestinationSchema,
    ) -> tuple[list[SourceRecord], list[str], list[SyncFailure]]:
        """
        Escrituras secuenciales con pausa fija tras cada intento.
        Sin reintentos: lo que falle se reintenta en la próxima corrida.
        """
        created: list[SourceRecord] = []
        created_ids: list[str] = []
        failures: list[SyncFailure] = []

        for record in records:
            try:
                fields = project_event(record, schema_keys)
                if self._debug:
                    logger.debug(f"fieldData para {record.source_id}: {fields}")
                item_id = self._destination.create_item(fields)
                created.append(record)
                created_ids.append(item_id)
                logger.success(f"✓ Creado: {fields[NAME_KEY]}")
            except Exception as e:
                message = e.message if isinstance(e, SyncException) else str(e)
                failures.append(SyncFailure(identifier=str(record.source_id), message=message))
                logger.error(f"✗ Falló la creación del evento {record.source_id}: {message}")
            finally:
                self._sleep(self._write_delay_s)

        return created, created_ids, failures

    def _notify(self, created: Sequence[SourceRecord]) -> None:
        try:
            self._notifier.notify(created)
        except Exception as e:
            logger.exception(f"Notificación de eventos creados falló (el sync no se ve afectado): {e}")


def build_notifier(settings: Settings) -> SyncNotifier:
    """Telegram si hay token y chats configurados; si no, NullNotifier."""
    chat_ids = settings.telegram_chat_ids
    if settings.TELEGRAM_BOT_TOKEN and chat_ids:
        return TelegramSyncNotifier(TelegramClient(settings.TELEGRAM_BOT_TOKEN), chat_ids)
    return NullNotifier()


def build_from_settings(
    settings: Settings,
    *,
    notifier: Optional[SyncNotifier] = None,
) -> SplashToWebflowSync:
    """
    Constructor "oficial" del pipeline a partir de la configuración cargada.
    """
    missing = settings.missing_required()
    if missing:
        raise SyncConfigError(f"Faltan variables de entorno obligatorias: {', '.join(missing)}", missing=missing)

    http_options = {
        "timeout_s": settings.HTTP_TIMEOUT_SECONDS,
        "max_retries": settings.HTTP_MAX_RETRIES,
    }
    splash = SplashClient(
        SplashCredentials(
            client_id=settings.SPLASH_CLIENT_ID,
            client_secret=settings.SPLASH_CLIENT_SECRET,
            username=settings.SPLASH_USERNAME,
            password=settings.SPLASH_PASSWORD,
        ),
        base_url=settings.SPLASH_API_BASE,
        page_size=settings.SPLASH_PAGE_SIZE,
        **http_options,
    )
    webflow = WebflowClient(
        WebflowCredentials(token=settings.WEBFLOW_API_TOKEN, collection_id=settings.WEBFLOW_COLLECTION_ID),
        base_url=settings.WEBFLOW_API_BASE,
        page_size=settings.WEBFLOW_PAGE_SIZE,
        **http_options,
    )
    return SplashToWebflowSync(
        source=splash,
        destination=webflow,
        notifier=notifier or build_notifier(settings),
        write_delay_s=settings.WEBFLOW_WRITE_DELAY_SECONDS,
        debug=settings.DEBUG,
    )
