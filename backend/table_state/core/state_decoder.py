"""State Decoder

Reine Projektion: Query-Map (str -> str) + ColumnRegistry + QueryKeyNamespace -> TableState.

Wichtig:
- Wirft nie. Jeder ungültige Wert fällt auf seinen Default zurück
  (None, 1, Default-Sichtbarkeit, fehlender Filter).
- sortBy und sortOrder werden unabhängig voneinander geprüft.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from table_state.core.column_registry import ColumnRegistry
from table_state.core.query_keys import QueryKeyNamespace

logger = logging.getLogger(__name__)

RawQueryMap = Mapping[str, str]

SORT_ORDERS = ("asc", "desc")

_PAGE_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class SortState:
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None


@dataclass(frozen=True)
class TableState:
    keyword_search: Optional[str] = None
    sort: SortState = field(default_factory=SortState)
    column_visibility: Tuple[str, ...] = ()
    pagination: int = 1
    filter: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Wert-Objekt: auch die Container sind unveränderlich
        object.__setattr__(self, "column_visibility", tuple(self.column_visibility))
        object.__setattr__(self, "filter", MappingProxyType(dict(self.filter)))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-Shape wie im Frontend (camelCase)."""
        return {
            "keywordSearch": self.keyword_search,
            "sort": {"sortBy": self.sort.sort_by, "sortOrder": self.sort.sort_order},
            "columnVisibility": list(self.column_visibility),
            "pagination": self.pagination,
            "filter": dict(self.filter),
        }


def _get(raw: RawQueryMap, key: str) -> Optional[str]:
    value = raw.get(key)
    return value if isinstance(value, str) else None


def parse_sort(raw: RawQueryMap, keys: QueryKeyNamespace, registry: ColumnRegistry) -> SortState:
    sort_by_param = _get(raw, keys.sort_by)
    sort_by = sort_by_param if sort_by_param and registry.is_sortable(sort_by_param) else None

    sort_order_param = _get(raw, keys.sort_order)
    sort_order = sort_order_param if sort_order_param in SORT_ORDERS else None

    return SortState(sort_by=sort_by, sort_order=sort_order)


def parse_column_visibility(param: Optional[str], registry: ColumnRegistry) -> List[str]:
    """Reihenfolge aus der Query bleibt erhalten; leer -> initial sichtbare Spalten."""
    visible: List[str] = []
    for token in (param or "").split(","):
        if token in registry and token not in visible:
            visible.append(token)

    return visible if visible else registry.initially_visible()


def parse_pagination(param: Optional[str]) -> int:
    if param is None or not _PAGE_RE.fullmatch(param):
        return 1
    try:
        page = int(param)
    except ValueError:
        # Integer-Stringlimit des Interpreters
        return 1
    return page if page >= 1 else 1


def parse_filters(raw: RawQueryMap, keys: QueryKeyNamespace, registry: ColumnRegistry) -> Dict[str, Any]:
    filters: Dict[str, Any] = {}

    for column in registry.filterable():
        encoded = _get(raw, keys.filter_key(column.key))
        if encoded is None:
            continue
        try:
            value = column.filter.decode(encoded)
        except Exception as e:
            # Fehler einer Spalte darf die anderen Filter nicht löschen
            logger.warning(f"⚠️ Filter für Spalte '{column.key}' konnte nicht dekodiert werden: {e}")
            continue
        if value is not None:
            filters[column.key] = value

    return filters


def parse_table_state(raw: RawQueryMap, registry: ColumnRegistry, keys: QueryKeyNamespace) -> TableState:
    return TableState(
        keyword_search=_get(raw, keys.keyword),
        sort=parse_sort(raw, keys, registry),
        column_visibility=parse_column_visibility(_get(raw, keys.column_visibility), registry),
        pagination=parse_pagination(_get(raw, keys.page)),
        filter=parse_filters(raw, keys, registry),
    )
