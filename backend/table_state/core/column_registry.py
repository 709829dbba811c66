"""Column Registry

Geordnete, unveränderliche Liste der Spalten-Definitionen einer Tabelle.
Wird einmal beim Definieren der Tabelle gebaut und danach nur gelesen.

Regeln:
- Spalten-Keys sind eindeutig (doppelter Key -> ColumnRegistryError)
- Reihenfolge der Registry ist die kanonische Reihenfolge beim Schreiben
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from table_state.core.errors import ColumnRegistryError
from table_state.core.filter_codec import FilterDefinition


@dataclass(frozen=True)
class ColumnDefinition:
    key: str
    sortable: bool = False
    initial_visibility: bool = True
    filter: Optional[FilterDefinition] = None
    # Präsentation, für den Kern opak
    render_head_cell: Optional[Callable[[], Any]] = None


class ColumnRegistry:
    """Lookup und Normalisierung über die Spalten einer Tabelle."""

    def __init__(self, columns: Iterable[ColumnDefinition]):
        ordered: List[ColumnDefinition] = []
        by_key: Dict[str, ColumnDefinition] = {}

        for column in columns:
            if not isinstance(column, ColumnDefinition):
                raise ColumnRegistryError(f"Ungültige Spalten-Definition: {column!r}")
            key = column.key
            if not isinstance(key, str) or not key:
                raise ColumnRegistryError(f"Spalten-Key muss ein nicht-leerer String sein: {key!r}")
            if "," in key:
                # Sichtbarkeit wird komma-separiert serialisiert
                raise ColumnRegistryError(f"Spalten-Key darf kein ',' enthalten: {key!r}")
            if key in by_key:
                raise ColumnRegistryError(f"Doppelter Spalten-Key: {key!r}")
            by_key[key] = column
            ordered.append(column)

        self._columns: Tuple[ColumnDefinition, ...] = tuple(ordered)
        self._by_key = by_key
        self._position = {column.key: index for index, column in enumerate(ordered)}

    def __iter__(self) -> Iterator[ColumnDefinition]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __repr__(self) -> str:
        return f"ColumnRegistry({list(self.keys())!r})"

    def keys(self) -> List[str]:
        return [column.key for column in self._columns]

    def get(self, key: str) -> Optional[ColumnDefinition]:
        return self._by_key.get(key)

    def require(self, key: str) -> ColumnDefinition:
        column = self._by_key.get(key)
        if column is None:
            raise ColumnRegistryError(f"Unbekannte Spalte: {key!r}")
        return column

    def filterable(self) -> List[ColumnDefinition]:
        return [column for column in self._columns if column.filter is not None]

    def sortable(self) -> List[ColumnDefinition]:
        return [column for column in self._columns if column.sortable]

    def is_sortable(self, key: Any) -> bool:
        column = self._by_key.get(key) if isinstance(key, str) else None
        return bool(column and column.sortable)

    def is_filterable(self, key: Any) -> bool:
        column = self._by_key.get(key) if isinstance(key, str) else None
        return bool(column and column.filter is not None)

    def initially_visible(self) -> List[str]:
        return [column.key for column in self._columns if column.initial_visibility]

    def in_registry_order(self, keys: Iterable[str]) -> List[str]:
        """Teilmenge in Registry-Reihenfolge; unbekannte Keys fallen weg, Duplikate werden zusammengefasst."""
        wanted = {key for key in keys if key in self._by_key}
        return sorted(wanted, key=self._position.__getitem__)
