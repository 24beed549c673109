"""
Utilidades para manejo de fechas y horas de eventos.
"""
import re
from datetime import datetime, timezone
from typing import Any, Optional


# "-0400" / "+0530" al final del string (Splash no siempre usa "-04:00")
_COMPACT_OFFSET = re.compile(r"([+-]\d{2})(\d{2})$")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parsea un timestamp ISO 8601 tal como lo devuelve Splash.

    Acepta "2020-09-30T19:00:00-0400", "...-04:00", "...Z" y fechas sin zona
    (se asumen UTC). Retorna None si el valor no es un instante valido.
    """
    if not value or not isinstance(value, str):
        return None

    raw = value.strip()
    if raw.endswith("Z") or raw.endswith("z"):
        raw = raw[:-1] + "+00:00"
    if "T" in raw or " " in raw:
        raw = _COMPACT_OFFSET.sub(r"\1:\2", raw)

    try:
        dt = datetime.fromisoformat(raw)
    except (ValueError, TypeError):
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_iso_z(dt: datetime) -> str:
    """
    Serializa a UTC con milisegundos y sufijo Z: 2020-09-30T23:00:00.000Z
    """
    dt_utc = dt.astimezone(timezone.utc)
    return dt_utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt_utc.microsecond // 1000:03d}Z"


def format_time_of_day(dt: datetime) -> str:
    """
    Hora legible en formato en-US de 12 horas ("7:00 PM").

    Usa la zona horaria que trae el propio datetime, es decir la hora local
    del evento. No depende del locale del proceso.
    """
    hour_12 = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour_12}:{dt.minute:02d} {suffix}"
