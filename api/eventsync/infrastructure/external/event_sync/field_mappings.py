"""
Mapeo Splash -> Webflow CMS.

La colección Webflow la edita gente a mano, así que los slugs de los campos
cambian ("location-city" vs "city"). En lugar de un if por campo, cada campo
lógico tiene una lista ordenada de keys candidatas; se usa la primera que
exista en el schema actual de la colección.

Este módulo no realiza I/O.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Optional

from loguru import logger

from eventsync.shared.utils.datetime_utils import format_time_of_day, parse_timestamp, to_iso_z

from .types import FieldAlias, SourceRecord

DEFAULT_TITLE = "Untitled Event"
SLUG_MAX_LENGTH = 100

NAME_KEY = "name"
SLUG_KEY = "slug"

IDENTIFIER = FieldAlias("identifier", ("splash-id", "splash_id", "splashid", "source-id"))
URL = FieldAlias("url", ("splash-url", "event-url", "registration-url", "url"))
DESCRIPTION = FieldAlias("description", ("description", "event-description", "summary"))
DATE = FieldAlias("date", ("date", "event-date", "start-date"))
TIME = FieldAlias("time", ("time", "event-time", "start-time"))
CITY = FieldAlias("city", ("location-city", "city"))
STATE = FieldAlias("state", ("location-state", "state"))
CATEGORY = FieldAlias("category", ("event-type", "category", "type"))
IMAGE = FieldAlias("image", ("thumbnail", "image", "header-image", "main-image"))

# Campos escalares opcionales, en el orden en que se agregan al fieldData.
SCALAR_FIELDS: tuple[tuple[FieldAlias, Callable[[SourceRecord], str]], ...] = (
    (IDENTIFIER, lambda r: r.source_id),
    (URL, lambda r: r.url),
    (DESCRIPTION, lambda r: r.description),
    (CATEGORY, lambda r: r.event_type),
)
LOCATION_FIELDS: tuple[tuple[FieldAlias, Callable[[SourceRecord], str]], ...] = (
    (CITY, lambda r: r.city),
    (STATE, lambda r: r.state),
)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """
    Slug estilo Webflow: minúsculas, cada run de chars fuera de [a-z0-9]
    pasa a un solo '-', sin guiones en los bordes, máximo 100 chars.

    Dos títulos distintos pueden colisionar; Webflow rechaza el duplicado.
    """
    slug = _NON_SLUG_CHARS.sub("-", title.lower()).strip("-")
    return slug[:SLUG_MAX_LENGTH]


def secure_url(url: str) -> str:
    """Sube http:// a https:// (Webflow no acepta imágenes inseguras)."""
    if url.lower().startswith("http://"):
        return "https://" + url[len("http://"):]
    return url


def resolve_identifier_key(schema_keys: frozenset[str]) -> Optional[str]:
    """Key de la colección donde se guarda el Splash ID, si existe."""
    return IDENTIFIER.resolve(schema_keys)


def _add_scalars(
    fields: dict[str, Any],
    record: SourceRecord,
    schema_keys: frozenset[str],
    mappings: tuple[tuple[FieldAlias, Callable[[SourceRecord], str]], ...],
) -> None:
    for alias, getter in mappings:
        value = getter(record)
        if not value:
            continue
        key = alias.resolve(schema_keys)
        if key and key not in fields:
            fields[key] = value


def project_event(record: SourceRecord, schema_keys: frozenset[str]) -> dict[str, Any]:
    """
    Proyecta un evento de Splash sobre el schema actual de la colección.

    Reglas:
    - name y slug siempre presentes (Webflow los exige en toda colección)
    - el resto solo si el schema tiene una key candidata y el valor no es vacío
    - un event_start inválido se omite; no es un error
    """
    title = record.title.strip() or DEFAULT_TITLE

    fields: dict[str, Any] = {
        NAME_KEY: title,
        # títulos solo con símbolos o sin letras latinas dan slug vacío
        SLUG_KEY: slugify(title) or slugify(DEFAULT_TITLE),
    }
    _add_scalars(fields, record, schema_keys, SCALAR_FIELDS)

    start = parse_timestamp(record.start)
    if start is not None:
        date_key = DATE.resolve(schema_keys)
        if date_key and date_key not in fields:
            fields[date_key] = to_iso_z(start)
        time_key = TIME.resolve(schema_keys)
        if time_key and time_key not in fields:
            fields[time_key] = format_time_of_day(start)
    elif record.start:
        logger.debug(f"event_start inválido en evento {record.source_id}: {record.start!r}")

    _add_scalars(fields, record, schema_keys, LOCATION_FIELDS)

    if record.image_url:
        image_key = IMAGE.resolve(schema_keys)
        if image_key and image_key not in fields:
            fields[image_key] = {"url": secure_url(record.image_url)}

    return fields
