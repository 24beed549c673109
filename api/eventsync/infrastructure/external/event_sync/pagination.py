"""
Paginación offset/limit genérica.

Webflow no devuelve un cursor opaco: se pide (offset, limit) y la colección
se considera agotada cuando una página trae menos items que `limit`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator


@dataclass(frozen=True)
class ItemPage:
    """Una página de items de Webflow."""

    items: list[dict[str, Any]]
    offset: int
    limit: int

    @property
    def has_more(self) -> bool:
        return len(self.items) >= self.limit


FetchPage = Callable[[int, int], ItemPage]


def iter_offset_pages(fetch_page: FetchPage, *, page_size: int = 100) -> Iterator[ItemPage]:
    """
    Genera páginas hasta que una venga corta.

    Es lazy, finito y no reiniciable. Si `fetch_page` falla, la excepción
    se propaga desde el `next()` correspondiente y no se generan más páginas.
    """
    if page_size <= 0:
        raise ValueError("page_size debe ser > 0")

    offset = 0
    while True:
        page = fetch_page(offset, page_size)
        yield page
        if not page.has_more:
            break
        offset += page_size
