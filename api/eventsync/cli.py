"""
CLI: Splash -> Webflow (one-way sync).

Uso recomendado:
  - Ejecutar como job (cron/systemd timer).

Variables de entorno requeridas:
  - SPLASH_CLIENT_ID
  - SPLASH_CLIENT_SECRET
  - SPLASH_USERNAME
  - SPLASH_PASSWORD
  - WEBFLOW_API_TOKEN
  - WEBFLOW_COLLECTION_ID (tiene default)

Ejecución:
  splash-webflow-sync
  splash-webflow-sync --dry-run
  splash-webflow-sync --debug --no-notify
"""

from __future__ import annotations

import argparse
import json
from typing import Optional, Sequence

from dotenv import find_dotenv, load_dotenv
from loguru import logger

from eventsync.core.config import Settings
from eventsync.core.logging_config import configure_logging
from eventsync.infrastructure.external.event_sync.notifier import NullNotifier
from eventsync.infrastructure.external.event_sync.sync_service import build_from_settings
from eventsync.shared.exceptions.sync import SyncException


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sync one-way de eventos Splash hacia Webflow CMS")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Calcula y muestra los eventos nuevos sin crearlos en Webflow.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Loguea un evento crudo de Splash y el fieldData proyectado.",
    )
    parser.add_argument(
        "--no-notify",
        action="store_true",
        help="No envía la notificación de Telegram aunque esté configurada.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Imprime el resultado como JSON en stdout.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None, *, settings: Optional[Settings] = None) -> int:
    args = build_parser().parse_args(argv)

    if settings is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        settings = Settings()
    if args.debug:
        settings = settings.model_copy(update={"DEBUG": True, "LOG_LEVEL": "DEBUG"})
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    try:
        service = build_from_settings(settings, notifier=NullNotifier() if args.no_notify else None)
        result = service.run_once(dry_run=args.dry_run)
    except SyncException as e:
        stage = f" [{e.stage}]" if e.stage else ""
        logger.error(f"Sync falló{stage}: {e.message}")
        return 1

    if result.failures:
        logger.warning(f"Errores: {[(f.identifier, f.message) for f in result.failures]}")
    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0
