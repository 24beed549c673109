"""
Escaneo de Splash IDs existentes en Webflow (paginación offset/limit).
"""
import pytest

from conftest import FakeWebflow

from eventsync.infrastructure.external.event_sync.dedup import build_dedup_index, extract_source_id
from eventsync.infrastructure.external.event_sync.pagination import ItemPage, iter_offset_pages
from eventsync.shared.exceptions.sync import TransportError


def _items(n: int) -> list[dict]:
    return [{"id": f"it{i}", "fieldData": {"name": f"E{i}", "splash-id": str(i)}} for i in range(n)]


def test_scan_250_items_in_three_pages():
    webflow = FakeWebflow({"name", "slug", "splash-id"}, _items(250), page_size=100)

    index = build_dedup_index(webflow.iter_item_pages())

    assert webflow.page_requests == [(0, 100), (100, 100), (200, 100)]
    assert len(index) == 250
    assert "0" in index and "249" in index


def test_exact_multiple_needs_one_extra_empty_page():
    webflow = FakeWebflow({"name"}, _items(200), page_size=100)
    build_dedup_index(webflow.iter_item_pages())
    assert webflow.page_requests == [(0, 100), (100, 100), (200, 100)]


def test_items_without_identifier_are_skipped():
    items = _items(3) + [{"id": "manual", "fieldData": {"name": "Manual"}}, {"id": "blank", "fieldData": {"splash-id": " "}}]
    webflow = FakeWebflow({"name"}, items)
    assert build_dedup_index(webflow.iter_item_pages()) == frozenset({"0", "1", "2"})


def test_extract_source_id_uses_aliases():
    assert extract_source_id({"fieldData": {"splash_id": 99}}) == "99"
    assert extract_source_id({"fieldData": {}}) is None
    assert extract_source_id({}) is None


def test_page_failure_aborts_scan():
    error = TransportError("Webflow", "listado de items (offset=0)", 500, "boom")
    webflow = FakeWebflow({"name"}, _items(10), list_error=error)
    with pytest.raises(TransportError):
        build_dedup_index(webflow.iter_item_pages())


def test_iter_offset_pages_is_not_restartable():
    calls = []

    def fetch(offset, limit):
        calls.append(offset)
        return ItemPage(items=[{}] * (limit if offset == 0 else 1), offset=offset, limit=limit)

    pages = iter_offset_pages(fetch, page_size=2)
    assert [len(p.items) for p in pages] == [2, 1]
    assert list(pages) == []
    assert calls == [0, 2]


def test_iter_offset_pages_rejects_bad_page_size():
    with pytest.raises(ValueError):
        next(iter_offset_pages(lambda o, l: ItemPage([], o, l), page_size=0))
