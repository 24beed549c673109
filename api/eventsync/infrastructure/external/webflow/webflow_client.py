"""
Cliente mínimo de Webflow Data API v2 para una colección CMS.

Cubre:
- schema probe: field slugs de la colección
- listado paginado por offset/limit
- creación de items, siempre como draft
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Optional

import requests

from eventsync.infrastructure.external.event_sync.pagination import ItemPage, iter_offset_pages
from eventsync.infrastructure.external.rest_client import RestClient
from eventsync.shared.exceptions.sync import TransportError


@dataclass(frozen=True)
class WebflowCredentials:
    token: str
    collection_id: str


class WebflowClient(RestClient):
    """
    Cliente HTTP de Webflow para una sola colección.

    Importante:
    - No conoce el mapeo de campos: recibe fieldData ya proyectado.
    - create_item no reintenta: un POST repetido tras un timeout podría
      crear el item dos veces.
    """

    service_name = "Webflow"

    def __init__(
        self,
        credentials: WebflowCredentials,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = "https://api.webflow.com/v2",
        page_size: int = 100,
        **kwargs: Any,
    ) -> None:
        super().__init__(base_url, session=session, **kwargs)
        self._creds = credentials
        self._page_size = page_size

    def _headers(self, *, write: bool = False) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._creds.token}",
            "Accept": "application/json",
        }
        if write:
            headers["Content-Type"] = "application/json"
        return headers

    def get_field_keys(self) -> frozenset[str]:
        """
        Schema probe: slugs de todos los campos de la colección.
        """
        payload = self._request_json(
            "GET",
            f"/collections/{self._creds.collection_id}",
            step="schema de la colección",
            headers=self._headers(),
        )
        fields = payload.get("fields") if isinstance(payload, dict) else None
        if not isinstance(fields, list):
            raise TransportError(self.service_name, "schema de la colección", 200, "payload sin 'fields'")
        return frozenset(f["slug"] for f in fields if isinstance(f, dict) and f.get("slug"))

    def list_items(self, offset: int, limit: int) -> ItemPage:
        """Una página de items de la colección."""
        payload = self._request_json(
            "GET",
            f"/collections/{self._creds.collection_id}/items",
            step=f"listado de items (offset={offset})",
            params={"offset": offset, "limit": limit},
            headers=self._headers(),
        )
        items = payload.get("items") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            # una página vacía cortaría el escaneo y dejaría el índice incompleto
            raise TransportError(self.service_name, f"listado de items (offset={offset})", 200, "payload sin 'items'")
        return ItemPage(items=items, offset=offset, limit=limit)

    def iter_item_pages(self) -> Iterator[ItemPage]:
        """Todas las páginas de la colección, hasta una página corta."""
        return iter_offset_pages(self.list_items, page_size=self._page_size)

    def create_item(self, field_data: dict[str, Any]) -> str:
        """
        Crea un item como draft (pendiente de revisión humana) y retorna su id.
        """
        payload = self._request_json(
            "POST",
            f"/collections/{self._creds.collection_id}/items",
            step="creación de item",
            json={
                "isArchived": False,
                "isDraft": True,
                "fieldData": field_data,
            },
            headers=self._headers(write=True),
            retry=False,
        )
        return str(payload.get("id", "")) if isinstance(payload, dict) else ""
