"""Fehlerklassen des Tabellen-Zustands.

Decode-Fehler (Query-Werte von außen) werden nie geworfen, sondern auf Defaults
zurückgeführt. Geworfen werden nur Konfigurations- und Encode-Fehler.
"""

from __future__ import annotations


class TableStateError(Exception):
    """Basisklasse für alle Fehler des Tabellen-Zustands."""


class ColumnRegistryError(TableStateError):
    """Spalten-Definitionen sind ungültig (z.B. doppelter Key) oder Spalte unbekannt."""


class TableConfigurationError(TableStateError):
    """Aktion für ein Feld aufgerufen, für das die Tabelle nicht konfiguriert ist."""


class FilterEncodeError(TableStateError):
    """Filterwert erfüllt das Schema der Spalte nicht."""

    def __init__(self, message: str, *, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []
