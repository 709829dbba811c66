"""Query Keys

Leitet die flachen Query-Keys einer Tabelle aus einem optionalen Präfix ab.

Shape (Präfix "table", Filter-Schema "filter"):
    table_keyword, table_sortBy, table_sortOrder, table_columns, table_page,
    table_filter_<spalte>

Präfix None/"" -> Keys ohne Präfix (keyword, sortBy, ...).
Filter-Schema "f" -> <prefix>_f_<spalte>.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

DEFAULT_PREFIX = "table"
FILTER_SCHEMES = ("filter", "f")

KEYWORD = "keyword"
SORT_BY = "sortBy"
SORT_ORDER = "sortOrder"
COLUMNS = "columns"
PAGE = "page"


@dataclass(frozen=True)
class QueryKeyNamespace:
    prefix: Optional[str] = DEFAULT_PREFIX
    filter_scheme: str = "filter"

    def __post_init__(self):
        if self.filter_scheme not in FILTER_SCHEMES:
            raise ValueError(f"Unbekanntes Filter-Schema: {self.filter_scheme!r} (erlaubt: {FILTER_SCHEMES})")
        if self.prefix is not None and not isinstance(self.prefix, str):
            raise ValueError(f"Präfix muss ein String sein: {self.prefix!r}")

    def _key(self, suffix: str) -> str:
        return f"{self.prefix}_{suffix}" if self.prefix else suffix

    @property
    def keyword(self) -> str:
        return self._key(KEYWORD)

    @property
    def sort_by(self) -> str:
        return self._key(SORT_BY)

    @property
    def sort_order(self) -> str:
        return self._key(SORT_ORDER)

    @property
    def column_visibility(self) -> str:
        return self._key(COLUMNS)

    @property
    def page(self) -> str:
        return self._key(PAGE)

    @property
    def filter_prefix(self) -> str:
        return self._key(f"{self.filter_scheme}_")

    def filter_key(self, column_key: str) -> str:
        return f"{self.filter_prefix}{column_key}"

    def field_keys(self) -> List[str]:
        return [self.keyword, self.sort_by, self.sort_order, self.column_visibility, self.page]

    def filter_keys(self, column_keys: Iterable[str]) -> List[str]:
        return [self.filter_key(column_key) for column_key in column_keys]

    def owned_keys(self, column_keys: Iterable[str]) -> List[str]:
        """Alle Keys dieser Tabelle für die gegebenen Filter-Spalten.

        Nur exakte Keys, kein Präfix-Vergleich ("t" besitzt nie "t_filter_keyword").
        """
        return self.field_keys() + self.filter_keys(column_keys)

    def as_dict(self) -> dict:
        return {
            "keywordSearch": self.keyword,
            "sortBy": self.sort_by,
            "sortOrder": self.sort_order,
            "columnVisibility": self.column_visibility,
            "page": self.page,
            "filterPrefix": self.filter_prefix,
        }
