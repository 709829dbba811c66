"""Navigation Adapter

Schnittstelle zum Ort, an dem die Query-Map lebt (Browser-URL, Redirect, ...).
Der Kern kennt nur read() und commit().

Hinweis: commit ersetzt immer die komplette Map. Zwei Aktionen auf demselben
alten Snapshot -> die zweite überschreibt die erste (last commit wins).
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Protocol
from urllib.parse import parse_qsl, urlencode


class NavigationAdapter(Protocol):
    def read(self) -> Mapping[str, str]: ...

    def commit(self, params: Mapping[str, str]) -> None: ...


def parse_query_string(query: str) -> Dict[str, str]:
    """'?a=1&b=2' -> {'a': '1', 'b': '2'}; bei doppelten Keys gewinnt der letzte."""
    q = (query or "").lstrip("?")
    return dict(parse_qsl(q, keep_blank_values=True))


def build_query_string(params: Mapping[str, str]) -> str:
    return urlencode(list(params.items()))


class InMemoryNavigation:
    """Hält die Map im Speicher; jeder commit landet in history."""

    def __init__(self, initial: Mapping[str, str] | None = None):
        self._params: Dict[str, str] = dict(initial or {})
        self.history: List[Dict[str, str]] = []

    def read(self) -> Dict[str, str]:
        return dict(self._params)

    def commit(self, params: Mapping[str, str]) -> None:
        self._params = dict(params)
        self.history.append(dict(params))


class QueryStringNavigation:
    """Map als URL-Query-String (wie router.push('?...'))."""

    def __init__(self, query: str = ""):
        self.query = (query or "").lstrip("?")

    def read(self) -> Dict[str, str]:
        return parse_query_string(self.query)

    def commit(self, params: Mapping[str, str]) -> None:
        self.query = build_query_string(params)

    @property
    def url(self) -> str:
        return f"?{self.query}"
