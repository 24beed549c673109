"""
Tipos puros para el pipeline Splash -> Webflow.

Se mantienen libres de I/O para poder testearlos fácilmente.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional

# Set de field keys (slugs) de la colección Webflow. Solo membership tests.
DestinationSchema = frozenset
# Set de Splash IDs ya presentes en Webflow, recalculado en cada corrida.
DedupIndex = frozenset


def _text(value: Any) -> str:
    """Convierte a str recortado; None -> ''."""
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class SourceRecord:
    """
    Evento de Splash, reducido a lo que el sync necesita.

    - source_id: identificador estable, siempre comparado como str
    - published: si Splash no manda el flag, se asume publicado
    - raw: payload original (solo para logs de debug)
    """

    source_id: str
    title: str = ""
    start: Optional[str] = None
    city: str = ""
    state: str = ""
    event_type: str = ""
    url: str = ""
    description: str = ""
    image_url: str = ""
    published: bool = True
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "SourceRecord":
        """
        Construye un SourceRecord desde la respuesta de Splash API v2.

        Campos anidados:
        - event_type: {"name": "..."}
        - event_setting: {"header_image": "..."}
        """
        event_type = payload.get("event_type") or {}
        event_setting = payload.get("event_setting") or {}
        published = payload.get("published")

        return cls(
            source_id=_text(payload.get("id")),
            title=_text(payload.get("title")),
            start=payload.get("event_start") or None,
            city=_text(payload.get("city")),
            state=_text(payload.get("state")),
            event_type=_text(event_type.get("name")) if isinstance(event_type, dict) else "",
            url=_text(payload.get("fq_url")),
            description=_text(payload.get("description_text")),
            image_url=_text(event_setting.get("header_image")) if isinstance(event_setting, dict) else "",
            published=published is not False,
            raw=payload,
        )


@dataclass(frozen=True)
class FieldAlias:
    """
    Campo lógico del evento y las spellings candidatas en Webflow.

    - name: nombre lógico (p.ej. "city")
    - candidates: keys posibles en la colección, en orden de preferencia
    """

    name: str
    candidates: tuple[str, ...]

    def resolve(self, schema_keys: frozenset[str]) -> Optional[str]:
        """Primera key candidata presente en el schema, o None."""
        for key in self.candidates:
            if key in schema_keys:
                return key
        return None


class SyncStage(str, Enum):
    """Etapas de una corrida, en orden. Sin vuelta atrás."""

    INIT = "INIT"
    SCHEMA_LOADED = "SCHEMA_LOADED"
    SOURCE_LOADED = "SOURCE_LOADED"
    DEDUP_LOADED = "DEDUP_LOADED"
    DIFFED = "DIFFED"
    WRITING = "WRITING"
    DONE = "DONE"


@dataclass(frozen=True)
class SyncFailure:
    identifier: str
    message: str


@dataclass(frozen=True)
class SyncResult:
    """
    Resumen de una corrida.

    - total: records de Splash considerados
    - candidates: records nuevos (publicados y ausentes en Webflow)
    - created: items creados en Webflow
    - failures: (identifier, mensaje) por cada escritura fallida
    """

    total: int
    candidates: int
    created: int
    failures: tuple[SyncFailure, ...] = ()
    created_ids: tuple[str, ...] = ()
    skipped_unpublished: int = 0
    dry_run: bool = False

    @property
    def failed(self) -> int:
        return len(self.failures)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["failed"] = self.failed
        data["failures"] = [asdict(f) for f in self.failures]
        data["created_ids"] = list(self.created_ids)
        return data
