"""
Fixtures y dobles de prueba para el sync Splash -> Webflow.
"""
from __future__ import annotations

import json as jsonlib
from typing import Any, Optional

import pytest

from eventsync.core.config import Settings
from eventsync.infrastructure.external.event_sync.pagination import ItemPage, iter_offset_pages
from eventsync.infrastructure.external.event_sync.types import SourceRecord
from eventsync.shared.exceptions.sync import TransportError


def make_event(event_id: Any, title: str = "Fall Launch Event", **extra: Any) -> dict[str, Any]:
    """Payload de Splash con la forma real de la API v2."""
    payload = {
        "id": event_id,
        "title": title,
        "event_start": "2020-09-30T19:00:00-0400",
        "city": "Boston",
        "state": "MA",
        "fq_url": f"https://acme.splashthat.com/e/{event_id}",
        "description_text": "Lanzamiento de otoño",
        "event_type": {"name": "Conference"},
        "event_setting": {"header_image": "http://cdn.splashthat.com/img.png"},
        "published": True,
    }
    payload.update(extra)
    return payload


class FakeSplash:
    """Source Reader en memoria."""

    def __init__(self, events: list[dict[str, Any]], error: Optional[Exception] = None) -> None:
        self.events = events
        self.error = error
        self.calls = 0

    def fetch_events(self) -> list[SourceRecord]:
        self.calls += 1
        if self.error:
            raise self.error
        return [SourceRecord.from_api(e) for e in self.events]


class FakeWebflow:
    """
    Colección Webflow en memoria: schema, paginación offset/limit y creación.

    Los items creados quedan en `items`, así una segunda corrida los ve.
    """

    def __init__(
        self,
        schema: set[str],
        items: Optional[list[dict[str, Any]]] = None,
        *,
        page_size: int = 100,
        fail_on_ids: Optional[set[str]] = None,
        schema_error: Optional[Exception] = None,
        list_error: Optional[Exception] = None,
    ) -> None:
        self.schema = frozenset(schema)
        self.items = list(items or [])
        self.page_size = page_size
        self.fail_on_ids = fail_on_ids or set()
        self.schema_error = schema_error
        self.list_error = list_error
        self.page_requests: list[tuple[int, int]] = []
        self.create_calls: list[dict[str, Any]] = []

    def get_field_keys(self) -> frozenset[str]:
        if self.schema_error:
            raise self.schema_error
        return self.schema

    def list_items(self, offset: int, limit: int) -> ItemPage:
        self.page_requests.append((offset, limit))
        if self.list_error:
            raise self.list_error
        return ItemPage(items=self.items[offset:offset + limit], offset=offset, limit=limit)

    def iter_item_pages(self):
        return iter_offset_pages(self.list_items, page_size=self.page_size)

    def create_item(self, field_data: dict[str, Any]) -> str:
        self.create_calls.append(field_data)
        source_id = field_data.get("splash-id")
        if source_id in self.fail_on_ids:
            raise TransportError("Webflow", "creación de item", 400, '{"message":"Validation Error"}')
        item_id = f"item-{len(self.items) + 1}"
        self.items.append({"id": item_id, "isDraft": True, "fieldData": dict(field_data)})
        return item_id


class RecordingNotifier:
    def __init__(self, error: Optional[Exception] = None) -> None:
        self.error = error
        self.calls: list[list[SourceRecord]] = []

    def notify(self, created) -> None:
        self.calls.append(list(created))
        if self.error:
            raise self.error


class _DummyResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, headers: Optional[dict] = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.headers = headers or {}
        self.text = text if text is not None else jsonlib.dumps(payload)

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no JSON")
        return self._payload


class _DummySession:
    """Reemplazo de requests.Session: devuelve respuestas en orden y guarda las llamadas."""

    def __init__(self, responses: list[_DummyResponse]) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def request(self, **kwargs: Any) -> _DummyResponse:
        self.calls.append(kwargs)
        return self._responses.pop(0)


@pytest.fixture
def dummy_response():
    return _DummyResponse


@pytest.fixture
def dummy_session():
    return _DummySession


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def record_sleep(sleeps):
    return sleeps.append


@pytest.fixture
def sync_settings() -> Settings:
    """Settings completas sin leer el entorno real."""
    return Settings(
        _env_file=None,
        SPLASH_CLIENT_ID="cid",
        SPLASH_CLIENT_SECRET="secret",
        SPLASH_USERNAME="ops@acme.com",
        SPLASH_PASSWORD="pw",
        WEBFLOW_API_TOKEN="wf-token",
        WEBFLOW_COLLECTION_ID="col-1",
        TELEGRAM_BOT_TOKEN="",
        TELEGRAM_CHAT_IDS="",
        LOG_FILE="",
    )
