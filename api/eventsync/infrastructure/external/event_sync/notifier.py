"""
Notificación de eventos creados (efecto lateral del sync).

El engine la invoca después del batch de escrituras; si falla, se loguea
y el SyncResult no cambia.
"""

from __future__ import annotations

import html
from typing import Protocol, Sequence

from loguru import logger

from eventsync.infrastructure.external.telegram.telegram_client import TelegramClient
from eventsync.shared.utils.datetime_utils import parse_timestamp

from .types import SourceRecord

# Telegram corta mensajes de más de 4096 chars
MAX_LISTED_EVENTS = 25


class SyncNotifier(Protocol):
    def notify(self, created: Sequence[SourceRecord]) -> None:
        ...


class NullNotifier:
    """Notifier por defecto cuando no hay canal configurado."""

    def notify(self, created: Sequence[SourceRecord]) -> None:
        logger.debug(f"Sin notifier configurado; {len(created)} evento(s) creados no notificados")


def format_created_events_message(created: Sequence[SourceRecord]) -> str:
    """
    Resumen HTML para Telegram. Escapa todo lo que viene de Splash.
    """
    lines = [f"<b>Splash → Webflow:</b> {len(created)} evento(s) nuevo(s) en borrador"]

    for record in created[:MAX_LISTED_EVENTS]:
        title = html.escape(record.title or "Untitled Event")
        line = f"• {title}"

        start = parse_timestamp(record.start)
        if start is not None:
            line += f" ({start.strftime('%Y-%m-%d')})"
        if record.url:
            line += f' - <a href="{html.escape(record.url, quote=True)}">ver</a>'
        lines.append(line)

    remaining = len(created) - MAX_LISTED_EVENTS
    if remaining > 0:
        lines.append(f"… y {remaining} más")

    lines.append("Revísalos y publícalos desde el CMS de Webflow.")
    return "\n".join(lines)


class TelegramSyncNotifier:
    """
    Envía el resumen de eventos creados a uno o más chats de Telegram.
    """

    def __init__(self, client: TelegramClient, chat_ids: Sequence[str]) -> None:
        self._client = client
        self._chat_ids = list(chat_ids)

    def notify(self, created: Sequence[SourceRecord]) -> None:
        if not created:
            return

        text = format_created_events_message(created)
        sent = 0
        for chat_id in self._chat_ids:
            if self._client.send_message(text, chat_id):
                sent += 1
        logger.info(f"Notificación de Telegram enviada a {sent}/{len(self._chat_ids)} chat(s)")
