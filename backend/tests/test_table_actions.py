from typing import Literal

import pytest

from table_state.core import table_actions as actions
from table_state.core.column_registry import ColumnDefinition, ColumnRegistry
from table_state.core.errors import FilterEncodeError, TableConfigurationError
from table_state.core.filter_codec import define_table_column_filter_with_schema
from table_state.core.query_keys import QueryKeyNamespace
from table_state.core.state_decoder import SortState, parse_table_state


def _sort(raw, registry, keys) -> SortState:
    return parse_table_state(raw, registry, keys).sort


def test_update_query_params_does_not_mutate_input(keys) -> None:
    raw = {"foreign": "1", keys.page: "4"}

    new_params = actions.update_query_params(raw, {keys.keyword: "x", "foreign": None}, keys, reset_page=True)

    assert new_params == {keys.keyword: "x"}
    assert raw == {"foreign": "1", keys.page: "4"}


def test_set_keyword_search_resets_page(registry, keys) -> None:
    raw = {keys.page: "3", "other": "keep"}

    new_params = actions.set_keyword_search(raw, registry, keys, "tanaka")

    assert new_params == {keys.keyword: "tanaka", "other": "keep"}


def test_empty_keyword_deletes_key(registry, keys) -> None:
    raw = {keys.keyword: "tanaka", keys.page: "2"}

    assert actions.set_keyword_search(raw, registry, keys, "") == {}
    assert actions.set_keyword_search(raw, registry, keys, None) == {}


def test_set_sort_writes_both_keys(registry, keys) -> None:
    new_params = actions.set_sort({}, registry, keys, "name", "desc")

    assert new_params == {keys.sort_by: "name", keys.sort_order: "desc"}


@pytest.mark.parametrize("sort_by, sort_order", [(None, "asc"), ("name", None), (None, None)])
def test_partial_sort_clears_both_keys(registry, keys, sort_by, sort_order) -> None:
    raw = {keys.sort_by: "id", keys.sort_order: "asc", keys.page: "2"}

    new_params = actions.set_sort(raw, registry, keys, sort_by, sort_order)

    assert new_params == {keys.page: "2"}


def test_set_sort_rejects_misconfigured_arguments(registry, keys) -> None:
    with pytest.raises(TableConfigurationError):
        actions.set_sort({}, registry, keys, "age", "asc")

    with pytest.raises(TableConfigurationError):
        actions.set_sort({}, registry, keys, "missing", "asc")

    with pytest.raises(TableConfigurationError):
        actions.set_sort({}, registry, keys, "id", "up")


def test_toggle_sort_cycles_through_three_states(registry, keys) -> None:
    raw: dict = {}

    raw = actions.toggle_sort(raw, registry, keys, "name")
    assert _sort(raw, registry, keys) == SortState("name", "asc")

    raw = actions.toggle_sort(raw, registry, keys, "name")
    assert _sort(raw, registry, keys) == SortState("name", "desc")

    raw = actions.toggle_sort(raw, registry, keys, "name")
    assert _sort(raw, registry, keys) == SortState(None, None)
    assert keys.sort_by not in raw and keys.sort_order not in raw

    raw = actions.toggle_sort(raw, registry, keys, "name")
    assert _sort(raw, registry, keys) == SortState("name", "asc")


def test_toggle_sort_on_other_column_starts_ascending(registry, keys) -> None:
    raw = {keys.sort_by: "id", keys.sort_order: "desc"}

    new_params = actions.toggle_sort(raw, registry, keys, "name")

    assert _sort(new_params, registry, keys) == SortState("name", "asc")


def test_toggle_sort_ignores_stale_column(registry, keys) -> None:
    # age ist nicht sortierbar -> gilt als unsortiert
    raw = {keys.sort_by: "age", keys.sort_order: "asc"}

    new_params = actions.toggle_sort(raw, registry, keys, "id")

    assert new_params == {keys.sort_by: "id", keys.sort_order: "asc"}


def test_show_column_writes_registry_order(registry, keys) -> None:
    raw = {keys.column_visibility: "age,id"}

    new_params = actions.set_column_visibility(raw, registry, keys, "name", True)

    assert new_params[keys.column_visibility] == "id,name,age"


def test_show_column_from_defaults(registry, keys) -> None:
    new_params = actions.set_column_visibility({}, registry, keys, "age", True)

    assert new_params == {keys.column_visibility: "id,name,age"}


def test_show_already_visible_column_does_not_duplicate(registry, keys) -> None:
    new_params = actions.set_column_visibility({}, registry, keys, "id", True)

    assert new_params == {keys.column_visibility: "id,name"}


def test_hide_column(registry, keys) -> None:
    new_params = actions.set_column_visibility({}, registry, keys, "id", False)

    assert new_params == {keys.column_visibility: "name"}


def test_last_visible_column_cannot_be_hidden(registry, keys) -> None:
    raw = {keys.column_visibility: "name", keys.page: "2"}

    new_params = actions.set_column_visibility(raw, registry, keys, "name", False)

    assert new_params == raw
    assert new_params is not raw


def test_column_visibility_for_unknown_column_fails(registry, keys) -> None:
    with pytest.raises(TableConfigurationError):
        actions.set_column_visibility({}, registry, keys, "ghost", True)


def test_set_filter_encodes_and_resets_page(registry, keys) -> None:
    raw = {keys.page: "5"}

    new_params = actions.set_filter(raw, registry, keys, "name", "田中")

    assert new_params == {keys.filter_key("name"): '"田中"'}
    assert parse_table_state(new_params, registry, keys).filter == {"name": "田中"}


def test_clear_filter_deletes_key(registry, keys) -> None:
    raw = {keys.filter_key("age"): "30", keys.filter_key("name"): '"x"', keys.page: "2"}

    new_params = actions.set_filter(raw, registry, keys, "age", None)

    assert new_params == {keys.filter_key("name"): '"x"'}


@pytest.mark.parametrize("column_key", ["id", "ghost"])
def test_set_filter_on_column_without_filter_fails(registry, keys, column_key) -> None:
    with pytest.raises(TableConfigurationError):
        actions.set_filter({}, registry, keys, column_key, "x")


def test_set_filter_propagates_encode_errors(keys) -> None:
    registry = ColumnRegistry(
        [
            ColumnDefinition(
                "status",
                filter=define_table_column_filter_with_schema(Literal["active", "inactive"]),
            )
        ]
    )

    with pytest.raises(FilterEncodeError):
        actions.set_filter({}, registry, keys, "status", "pending")

    assert actions.set_filter({}, registry, keys, "status", "active") == {keys.filter_key("status"): '"active"'}


def test_set_pagination_does_not_clamp(registry, keys) -> None:
    assert actions.set_pagination({}, registry, keys, 7) == {keys.page: "7"}
    assert actions.set_pagination({}, registry, keys, 100) == {keys.page: "100"}


def test_set_pagination_requires_integer(registry, keys) -> None:
    with pytest.raises(TableConfigurationError):
        actions.set_pagination({}, registry, keys, "2")


def test_next_and_previous_page_respect_bounds(registry, keys) -> None:
    assert actions.next_page({keys.page: "2"}, registry, keys, 5) == {keys.page: "3"}
    assert actions.next_page({keys.page: "5"}, registry, keys, 5) == {keys.page: "5"}
    assert actions.next_page({}, registry, keys, 1) == {}

    assert actions.previous_page({keys.page: "3"}, registry, keys) == {keys.page: "2"}
    assert actions.previous_page({}, registry, keys) == {}


def test_reset_filters(registry, keys) -> None:
    raw = {
        keys.keyword: "kw",
        keys.page: "4",
        keys.filter_key("name"): '"x"',
        keys.filter_key("age"): "3",
        "users_filter_age": "1",
    }

    new_params = actions.reset_filters(raw, registry, keys)

    assert new_params == {keys.keyword: "kw", "users_filter_age": "1"}


def test_reset_table_state_keeps_other_tables(registry) -> None:
    users = QueryKeyNamespace(prefix="users")
    orders = QueryKeyNamespace(prefix="orders")
    raw = {"users_page": "2", "users_filter_name": '"a"', "orders_page": "3", "tab": "x"}

    new_params = actions.reset_table_state(raw, registry, users)

    assert new_params == {"orders_page": "3", "tab": "x"}
    assert parse_table_state(new_params, registry, orders).pagination == 3


def test_actions_of_two_tables_do_not_collide(registry) -> None:
    users = QueryKeyNamespace(prefix="users")
    orders = QueryKeyNamespace(prefix="orders")

    raw = actions.set_pagination({}, registry, users, 2)
    raw = actions.set_keyword_search(raw, registry, orders, "kw")

    assert parse_table_state(raw, registry, users).pagination == 2
    assert parse_table_state(raw, registry, users).keyword_search is None
    assert parse_table_state(raw, registry, orders).keyword_search == "kw"


def test_reset_table_state_keeps_nested_prefix_table(registry) -> None:
    outer = QueryKeyNamespace(prefix="t")
    raw = {"t_page": "2", "t_filter_name": '"a"', "t_filter_keyword": "kw", "t_filter_page": "5"}

    assert actions.reset_table_state(raw, registry, outer) == {"t_filter_keyword": "kw", "t_filter_page": "5"}
    assert actions.reset_filters(raw, registry, outer) == {"t_filter_keyword": "kw", "t_filter_page": "5"}
