import pytest

from table_state.core.column_registry import ColumnDefinition, ColumnRegistry
from table_state.core.filter_codec import define_table_column_filter
from table_state.core.query_keys import QueryKeyNamespace


def _int_decode(value: str) -> int:
    # wirft ValueError bei ungültigem Wert
    return int(value)


@pytest.fixture
def columns() -> list[ColumnDefinition]:
    return [
        ColumnDefinition("id", sortable=True, initial_visibility=True),
        ColumnDefinition(
            "name",
            sortable=True,
            initial_visibility=True,
            filter=define_table_column_filter(),
        ),
        ColumnDefinition(
            "age",
            sortable=False,
            initial_visibility=False,
            filter=define_table_column_filter(encode=str, decode=_int_decode),
        ),
    ]


@pytest.fixture
def registry(columns: list[ColumnDefinition]) -> ColumnRegistry:
    return ColumnRegistry(columns)


@pytest.fixture
def keys() -> QueryKeyNamespace:
    return QueryKeyNamespace()
