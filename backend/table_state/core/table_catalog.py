"""Table Catalog

Benannte Tabellen-Definitionen für die API.
Der Default-Katalog enthält die Demo-Tabelle "users".
"""

from __future__ import annotations

import logging
from typing import Dict, Literal, Optional

from pydantic import Field, TypeAdapter, ValidationError
from typing_extensions import Annotated, TypedDict

from table_state.core.column_registry import ColumnDefinition
from table_state.core.errors import ColumnRegistryError, FilterEncodeError
from table_state.core.filter_codec import (
    define_table_column_filter,
    define_table_column_filter_with_schema,
)
from table_state.core.table import TableDefinition, create_table

logger = logging.getLogger(__name__)


class TableCatalog:
    def __init__(self):
        self._tables: Dict[str, TableDefinition] = {}

    def register(self, name: str, table: TableDefinition) -> TableDefinition:
        if name in self._tables:
            raise ColumnRegistryError(f"Tabelle bereits registriert: {name!r}")
        self._tables[name] = table
        logger.info(f"📋 Tabelle registriert: {name} ({len(table.registry)} Spalten, Präfix={table.keys.prefix!r})")
        return table

    def get(self, name: str) -> TableDefinition:
        # KeyError für unbekannte Tabellen (API -> 404)
        return self._tables[name]

    def names(self) -> list:
        return list(self._tables)


# =========================================================================
# DEMO: users
# =========================================================================

class AgeFilter(TypedDict, total=False):
    min: Annotated[int, Field(ge=0)]
    max: Annotated[int, Field(ge=0)]


StatusFilter = Literal["active", "inactive"]

_age_adapter = TypeAdapter(AgeFilter)


def _encode_age(condition: AgeFilter) -> str:
    # "20~50", "20~", "~50"
    try:
        condition = _age_adapter.validate_python(condition, strict=True)
    except ValidationError as e:
        raise FilterEncodeError(
            f"Altersfilter ungültig: {condition!r}",
            errors=e.errors(include_url=False, include_context=False),
        ) from e

    lo = condition.get("min")
    hi = condition.get("max")
    return f"{'' if lo is None else lo}~{'' if hi is None else hi}"


def _decode_age(encoded: str) -> Optional[AgeFilter]:
    parts = encoded.split("~")
    if len(parts) != 2:
        return None

    condition: AgeFilter = {}
    for name, token in zip(("min", "max"), parts):
        if token == "":
            continue
        if not token.isascii() or not token.isdigit():
            return None
        condition[name] = int(token)

    return condition


def build_users_table(table_name: Optional[str] = "users") -> TableDefinition:
    return create_table(
        [
            ColumnDefinition("name", sortable=True, initial_visibility=True),
            ColumnDefinition(
                "age",
                sortable=True,
                initial_visibility=True,
                filter=define_table_column_filter(
                    encode=_encode_age,
                    decode=_decode_age,
                    initial={},
                ),
            ),
            ColumnDefinition("email", sortable=True, initial_visibility=True),
            ColumnDefinition(
                "status",
                sortable=True,
                initial_visibility=True,
                filter=define_table_column_filter_with_schema(StatusFilter),
            ),
        ],
        table_name=table_name,
    )


def build_default_catalog() -> TableCatalog:
    catalog = TableCatalog()
    catalog.register("users", build_users_table())
    return catalog


catalog = build_default_catalog()
