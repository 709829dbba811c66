"""Table Actions

Jede Benutzer-Aktion ist eine reine Funktion:
    (Query-Map, ColumnRegistry, QueryKeyNamespace, Argumente) -> neue Query-Map

Die Eingabe-Map wird nie verändert; es wird immer die komplette neue Map
zurückgegeben (alle fremden Keys bleiben erhalten).

Seitenwechsel:
- Keyword und Filter setzen die Seite zurück (page-Key wird gelöscht)
- set_pagination klemmt nicht; Grenzen prüfen next_page/previous_page
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from table_state.core.column_registry import ColumnRegistry
from table_state.core.errors import TableConfigurationError
from table_state.core.query_keys import QueryKeyNamespace
from table_state.core.state_decoder import (
    SORT_ORDERS,
    RawQueryMap,
    parse_column_visibility,
    parse_pagination,
    parse_sort,
)


def update_query_params(
    raw: RawQueryMap,
    updates: Mapping[str, Optional[str]],
    keys: QueryKeyNamespace,
    reset_page: bool = False,
) -> Dict[str, str]:
    """Wendet Updates auf eine Kopie an. None löscht den Key."""
    new_params = dict(raw)

    for key, value in updates.items():
        if value is None:
            new_params.pop(key, None)
        else:
            new_params[key] = value

    if reset_page:
        new_params.pop(keys.page, None)

    return new_params


def set_keyword_search(raw: RawQueryMap, registry: ColumnRegistry, keys: QueryKeyNamespace, keyword: Optional[str]) -> Dict[str, str]:
    return update_query_params(raw, {keys.keyword: keyword or None}, keys, reset_page=True)


def set_sort(
    raw: RawQueryMap,
    registry: ColumnRegistry,
    keys: QueryKeyNamespace,
    sort_by: Optional[str],
    sort_order: Optional[str],
) -> Dict[str, str]:
    if sort_by is not None and not registry.is_sortable(sort_by):
        raise TableConfigurationError(f"Spalte ist nicht sortierbar: {sort_by!r}")
    if sort_order is not None and sort_order not in SORT_ORDERS:
        raise TableConfigurationError(f"Ungültige Sortierrichtung: {sort_order!r}")

    # Nie einen halben Sort-Zustand schreiben
    if sort_by is not None and sort_order is not None:
        return update_query_params(raw, {keys.sort_by: sort_by, keys.sort_order: sort_order}, keys)
    return update_query_params(raw, {keys.sort_by: None, keys.sort_order: None}, keys)


def toggle_sort(raw: RawQueryMap, registry: ColumnRegistry, keys: QueryKeyNamespace, sort_by: str) -> Dict[str, str]:
    """unsortiert -> asc -> desc -> unsortiert (pro Spalte)."""
    current = parse_sort(raw, keys, registry)

    if current.sort_by == sort_by:
        if current.sort_order == "asc":
            return set_sort(raw, registry, keys, sort_by, "desc")
        return set_sort(raw, registry, keys, None, None)
    return set_sort(raw, registry, keys, sort_by, "asc")


def set_column_visibility(
    raw: RawQueryMap,
    registry: ColumnRegistry,
    keys: QueryKeyNamespace,
    column_key: str,
    visible: bool,
) -> Dict[str, str]:
    if column_key not in registry:
        raise TableConfigurationError(f"Unbekannte Spalte: {column_key!r}")

    current = parse_column_visibility(raw.get(keys.column_visibility), registry)
    if visible:
        new_visible = current + [column_key]
    else:
        new_visible = [key for key in current if key != column_key]

    # Mindestens eine Spalte bleibt sichtbar
    if not new_visible:
        return dict(raw)

    ordered = registry.in_registry_order(new_visible)
    return update_query_params(raw, {keys.column_visibility: ",".join(ordered)}, keys)


def set_filter(
    raw: RawQueryMap,
    registry: ColumnRegistry,
    keys: QueryKeyNamespace,
    column_key: str,
    value: Any,
) -> Dict[str, str]:
    column = registry.get(column_key)
    if column is None or column.filter is None:
        raise TableConfigurationError(f"Spalte hat keine Filter-Definition: {column_key!r}")

    filter_param_key = keys.filter_key(column_key)
    if value is None:
        return update_query_params(raw, {filter_param_key: None}, keys, reset_page=True)

    # FilterEncodeError wird bewusst nicht abgefangen
    encoded = column.filter.encode(value)
    return update_query_params(raw, {filter_param_key: encoded}, keys, reset_page=True)


def set_pagination(raw: RawQueryMap, registry: ColumnRegistry, keys: QueryKeyNamespace, page: int) -> Dict[str, str]:
    if isinstance(page, bool) or not isinstance(page, int):
        raise TableConfigurationError(f"Seitennummer muss ganzzahlig sein: {page!r}")
    return update_query_params(raw, {keys.page: str(page)}, keys)


def next_page(raw: RawQueryMap, registry: ColumnRegistry, keys: QueryKeyNamespace, total_pages: int) -> Dict[str, str]:
    current = parse_pagination(raw.get(keys.page))
    if current >= total_pages:
        return dict(raw)
    return set_pagination(raw, registry, keys, current + 1)


def previous_page(raw: RawQueryMap, registry: ColumnRegistry, keys: QueryKeyNamespace) -> Dict[str, str]:
    current = parse_pagination(raw.get(keys.page))
    if current <= 1:
        return dict(raw)
    return set_pagination(raw, registry, keys, current - 1)


def reset_filters(raw: RawQueryMap, registry: ColumnRegistry, keys: QueryKeyNamespace) -> Dict[str, str]:
    filter_columns = [column.key for column in registry.filterable()]
    updates = {key: None for key in keys.filter_keys(filter_columns)}
    return update_query_params(raw, updates, keys, reset_page=True)


def reset_table_state(raw: RawQueryMap, registry: ColumnRegistry, keys: QueryKeyNamespace) -> Dict[str, str]:
    """Entfernt alle Keys dieser Tabelle; Keys anderer Tabellen bleiben."""
    owned = set(keys.owned_keys(column.key for column in registry.filterable()))
    return {key: value for key, value in raw.items() if key not in owned}
