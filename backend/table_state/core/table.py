"""Table Definition

Fassade über Registry + Namespace + Decoder + Aktionen.

Beispiel:
    users = create_table([
        ColumnDefinition("name", sortable=True),
        ColumnDefinition("age", filter=age_filter),
    ], table_name="users")

    nav = QueryStringNavigation("users_page=2")
    state, actions = users.use_table(nav)
    actions.toggle_sort("name")   # -> nav.query enthält users_sortBy=name&users_sortOrder=asc
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from table_state.core import table_actions
from table_state.core.column_registry import ColumnDefinition, ColumnRegistry
from table_state.core.config import settings
from table_state.core.navigation import NavigationAdapter
from table_state.core.query_keys import QueryKeyNamespace
from table_state.core.state_decoder import RawQueryMap, TableState, parse_table_state

logger = logging.getLogger(__name__)


class TableDefinition:
    def __init__(self, registry: ColumnRegistry, keys: QueryKeyNamespace):
        self.registry = registry
        self.keys = keys

    @property
    def column_definitions(self) -> Tuple[ColumnDefinition, ...]:
        return tuple(self.registry)

    def state(self, raw: RawQueryMap) -> TableState:
        return parse_table_state(raw, self.registry, self.keys)

    def actions(self, navigation: NavigationAdapter) -> "TableActions":
        return TableActions(self, navigation)

    def use_table(self, navigation: NavigationAdapter) -> Tuple[TableState, "TableActions"]:
        return self.state(navigation.read()), self.actions(navigation)

    def apply(self, raw: RawQueryMap, action: str, *args: Any, **kwargs: Any) -> Dict[str, str]:
        """Reine Aktion per Name (für API/Tests)."""
        fn = _ACTIONS.get(action)
        if fn is None:
            raise KeyError(action)
        return fn(raw, self.registry, self.keys, *args, **kwargs)


_ACTIONS: Dict[str, Callable[..., Dict[str, str]]] = {
    "set_keyword_search": table_actions.set_keyword_search,
    "set_sort": table_actions.set_sort,
    "toggle_sort": table_actions.toggle_sort,
    "set_column_visibility": table_actions.set_column_visibility,
    "set_filter": table_actions.set_filter,
    "set_pagination": table_actions.set_pagination,
    "next_page": table_actions.next_page,
    "previous_page": table_actions.previous_page,
    "reset_filters": table_actions.reset_filters,
    "reset_table_state": table_actions.reset_table_state,
}

ACTION_NAMES = tuple(_ACTIONS)


class TableActions:
    """Aktionen gebunden an einen Navigation-Adapter: lesen -> reine Aktion -> commit."""

    def __init__(self, table: TableDefinition, navigation: NavigationAdapter):
        self._table = table
        self._navigation = navigation

    def _dispatch(self, action: str, *args: Any) -> Dict[str, str]:
        base = dict(self._navigation.read())
        new_params = self._table.apply(base, action, *args)
        if new_params != base:
            logger.debug(f"{action}{args!r} -> commit ({len(new_params)} Keys)")
            self._navigation.commit(new_params)
        return new_params

    def set_keyword_search(self, keyword: Optional[str]) -> Dict[str, str]:
        return self._dispatch("set_keyword_search", keyword)

    def set_sort(self, sort_by: Optional[str], sort_order: Optional[str]) -> Dict[str, str]:
        return self._dispatch("set_sort", sort_by, sort_order)

    def toggle_sort(self, sort_by: str) -> Dict[str, str]:
        return self._dispatch("toggle_sort", sort_by)

    def set_column_visibility(self, column_key: str, visible: bool) -> Dict[str, str]:
        return self._dispatch("set_column_visibility", column_key, visible)

    def set_filter(self, column_key: str, value: Any) -> Dict[str, str]:
        return self._dispatch("set_filter", column_key, value)

    def set_pagination(self, page: int) -> Dict[str, str]:
        return self._dispatch("set_pagination", page)

    def next_page(self, total_pages: int) -> Dict[str, str]:
        return self._dispatch("next_page", total_pages)

    def previous_page(self) -> Dict[str, str]:
        return self._dispatch("previous_page")

    def reset_filters(self) -> Dict[str, str]:
        return self._dispatch("reset_filters")

    def reset_table_state(self) -> Dict[str, str]:
        return self._dispatch("reset_table_state")


def create_table(
    columns: Iterable[ColumnDefinition],
    *,
    table_name: Optional[str] = None,
    prefix: Optional[str] = None,
    filter_scheme: Optional[str] = None,
) -> TableDefinition:
    """Tabelle definieren.

    Präfix-Reihenfolge: prefix (explizit, auch "") > table_name > TABLE_QUERY_PREFIX.
    """
    if prefix is None:
        prefix = table_name or settings.TABLE_QUERY_PREFIX
    keys = QueryKeyNamespace(prefix=prefix, filter_scheme=filter_scheme or settings.TABLE_FILTER_SCHEME)
    return TableDefinition(ColumnRegistry(columns), keys)
