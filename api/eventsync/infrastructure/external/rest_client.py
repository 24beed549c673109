"""
Base HTTP para los clientes REST de Splash y Webflow.

Requisitos cubiertos:
- requests (Session inyectable para tests)
- rate-limit/backoff (429, 5xx) en lecturas
- escrituras sin reintentos (un POST repetido podría duplicar el item)
- errores HTTP convertidos a TransportError con status y body
"""

from __future__ import annotations

import time
from typing import Any, Callable, Optional

import requests
from loguru import logger

from eventsync.shared.exceptions.sync import TransportError


class RestClient:
    """
    Cliente HTTP JSON con backoff para 429/5xx.

    Subclases definen `service_name` y los headers de autenticación.
    """

    service_name = "HTTP"

    def __init__(
        self,
        base_url: str,
        *,
        session: Optional[requests.Session] = None,
        timeout_s: int = 30,
        max_retries: int = 4,
        min_backoff_s: float = 0.8,
        max_backoff_s: float = 20.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._max_retries = max_retries
        self._min_backoff_s = min_backoff_s
        self._max_backoff_s = max_backoff_s
        self._sleep = sleep
        self._session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        step: str,
        headers: Optional[dict[str, str]] = None,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
        data: Any = None,
        retry: bool = True,
    ) -> requests.Response:
        """
        Request HTTP con backoff para 429/5xx.

        Estrategia:
        - 429: respeta Retry-After si existe, si no exponencial con jitter simple.
        - 5xx: exponencial con jitter.
        - 4xx (no 429): error inmediato (config/auth mal).
        - retry=False: cualquier status no-2xx es error inmediato.
        """
        url = self._url(path)
        max_retries = self._max_retries if retry else 0

        for attempt in range(max_retries + 1):
            try:
                resp = self._session.request(
                    method=method,
                    url=url,
                    params=params,
                    json=json,
                    data=data,
                    headers=headers,
                    timeout=self._timeout_s,
                )
            except requests.RequestException as e:
                raise TransportError(self.service_name, step, None, str(e)) from e

            if 200 <= resp.status_code < 300:
                return resp

            # Errores recuperables
            if resp.status_code == 429 or 500 <= resp.status_code < 600:
                if attempt >= max_retries:
                    raise TransportError(self.service_name, step, resp.status_code, resp.text)

                sleep_s = self._backoff_seconds(attempt, resp.headers.get("Retry-After"))
                logger.warning(
                    f"{self.service_name} {step}: status {resp.status_code}, "
                    f"reintento {attempt + 1}/{max_retries} en {sleep_s:.1f}s"
                )
                self._sleep(sleep_s)
                continue

            # Errores no recuperables
            raise TransportError(self.service_name, step, resp.status_code, resp.text)

        # range() siempre entra al menos una vez; no debería llegar aquí
        raise TransportError(self.service_name, step, None, "sin respuesta")

    def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        resp = self._request(method, path, **kwargs)
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(
                self.service_name, kwargs.get("step", path), resp.status_code, "respuesta no es JSON"
            ) from e

    def _backoff_seconds(self, attempt: int, retry_after: Optional[str]) -> float:
        if retry_after:
            try:
                return float(retry_after)
            except ValueError:
                return self._min_backoff_s
        # Exponencial simple + jitter proporcional
        base = min(self._max_backoff_s, self._min_backoff_s * (2**attempt))
        return base + (0.15 * base)
