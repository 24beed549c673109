"""
Cliente mínimo de Splash API (sin SDKs externos).

- OAuth2 password grant para obtener el access token
- Un solo listado de eventos acotado por `limit`

El listado no pagina: Splash devuelve los eventos próximos/recientes en una
sola llamada. Con más de `page_size` eventos activos, los restantes quedan
fuera de esa corrida.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import requests
from loguru import logger

from eventsync.infrastructure.external.event_sync.types import SourceRecord
from eventsync.infrastructure.external.rest_client import RestClient
from eventsync.shared.exceptions.sync import AuthError, TransportError


@dataclass(frozen=True)
class SplashCredentials:
    client_id: str
    client_secret: str
    username: str
    password: str


class SplashClient(RestClient):
    """
    Source Reader: autentica contra Splash y retorna los eventos candidatos.
    """

    service_name = "Splash"

    def __init__(
        self,
        credentials: SplashCredentials,
        *,
        session: Optional[requests.Session] = None,
        base_url: str = "https://api.splashthat.com",
        page_size: int = 50,
        **kwargs: Any,
    ) -> None:
        super().__init__(base_url, session=session, **kwargs)
        self._creds = credentials
        self._page_size = page_size

    def acquire_token(self) -> str:
        """
        Intercambia credenciales por un access token.

        4xx -> AuthError (credenciales rechazadas); 5xx/red -> TransportError.
        """
        form = {
            "grant_type": "password",
            "client_id": self._creds.client_id,
            "client_secret": self._creds.client_secret,
            "scope": "user",
            "username": self._creds.username,
            "password": self._creds.password,
        }
        try:
            payload = self._request_json(
                "POST",
                "/oauth/v2/token",
                step="auth",
                data=form,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except TransportError as e:
            if e.status is not None and 400 <= e.status < 500 and e.status != 429:
                raise AuthError(self.service_name, e.status, e.body) from e
            raise

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise AuthError(self.service_name, 200, "respuesta sin access_token")
        return token

    def list_events(self, access_token: str) -> list[SourceRecord]:
        """
        Trae eventos próximos/recientes. Splash responde {"data": [...]} o [...].
        """
        payload = self._request_json(
            "GET",
            "/events",
            step="listado de eventos",
            params={"upcoming": "true", "limit": self._page_size},
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
        )

        raw_events = payload.get("data") if isinstance(payload, dict) else payload
        if not isinstance(raw_events, list):
            raise TransportError(self.service_name, "listado de eventos", 200, "payload sin lista de eventos")

        events = [SourceRecord.from_api(e) for e in raw_events if isinstance(e, dict)]
        logger.debug(f"Splash devolvió {len(events)} eventos (limit={self._page_size})")
        return events

    def fetch_events(self) -> list[SourceRecord]:
        """Token + listado en una sola llamada."""
        return self.list_events(self.acquire_token())
