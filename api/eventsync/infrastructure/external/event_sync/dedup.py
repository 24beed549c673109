"""
Índice de deduplicación: Splash IDs que ya existen en Webflow.

Se recalcula completo en cada corrida. Un índice parcial causaría
duplicados, por eso cualquier error de paginación aborta el escaneo.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from .field_mappings import IDENTIFIER
from .pagination import ItemPage
from .types import DedupIndex


def extract_source_id(item: dict[str, Any], candidates: Iterable[str] = IDENTIFIER.candidates) -> Optional[str]:
    """
    Lee el Splash ID guardado en el fieldData de un item.

    Items creados a mano (o antes de existir el campo) no lo tienen: None.
    """
    field_data = item.get("fieldData") or {}
    for key in candidates:
        value = field_data.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def build_dedup_index(pages: Iterable[ItemPage]) -> DedupIndex:
    """
    Consume todas las páginas y arma el set de Splash IDs presentes.
    """
    existing: set[str] = set()
    for page in pages:
        for item in page.items:
            source_id = extract_source_id(item)
            if source_id:
                existing.add(source_id)
    return frozenset(existing)
