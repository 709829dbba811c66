"""Tables API

- GET  /                   registrierte Tabellen
- GET  /{table_name}/keys    Query-Keys der Tabelle
- GET  /{table_name}/state   Query-String -> Tabellen-Zustand
- POST /{table_name}/actions Aktion auf Query-String -> neuer Query-String

Wichtig: Keine Datenabfrage hier. Der Router beschreibt nur, WAS der Benutzer
angefragt hat (Suche, Sortierung, Filter, Seite).
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Request

from table_state.core.errors import FilterEncodeError, TableStateError
from table_state.core.navigation import build_query_string, parse_query_string
from table_state.core.table import ACTION_NAMES, TableDefinition
from table_state.core.table_catalog import TableCatalog, catalog
from table_state.models.schemas import (
    TableActionRequest,
    TableActionResponse,
    TableInfo,
    TableKeysResponse,
    TableStateResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_catalog() -> TableCatalog:
    return catalog


def get_table(
    table_name: str = Path(..., description="Table name"),
    tables: TableCatalog = Depends(get_catalog),
) -> TableDefinition:
    try:
        return tables.get(table_name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Tabelle nicht gefunden: {table_name}")


@router.get("", response_model=List[TableInfo])
async def list_tables(tables: TableCatalog = Depends(get_catalog)):
    out = []
    for name in tables.names():
        table = tables.get(name)
        out.append({
            "name": name,
            "prefix": table.keys.prefix,
            "columns": [
                {
                    "key": c.key,
                    "sortable": c.sortable,
                    "initial_visibility": c.initial_visibility,
                    "filterable": c.filter is not None,
                }
                for c in table.column_definitions
            ],
        })
    return out


@router.get("/{table_name}/keys", response_model=TableKeysResponse)
async def get_table_keys(table_name: str, table: TableDefinition = Depends(get_table)):
    return {
        "table": table_name,
        "prefix": table.keys.prefix,
        "keys": table.keys.as_dict(),
        "filter_keys": {c.key: table.keys.filter_key(c.key) for c in table.registry.filterable()},
    }


@router.get("/{table_name}/state", response_model=TableStateResponse)
async def get_table_state(table_name: str, request: Request, table: TableDefinition = Depends(get_table)):
    """Dekodiert den Query-String der Anfrage. Ungültige Werte -> Defaults, nie ein Fehler."""
    raw = parse_query_string(request.url.query)
    state = table.state(raw)

    return {
        "table": table_name,
        "query": build_query_string(raw),
        "state": state.to_dict(),
    }


@router.post("/{table_name}/actions", response_model=TableActionResponse)
async def post_table_action(
    table_name: str,
    request: TableActionRequest,
    table: TableDefinition = Depends(get_table),
):
    if request.action not in ACTION_NAMES:
        raise HTTPException(
            status_code=400,
            detail=f"Unbekannte Aktion: {request.action} (erlaubt: {', '.join(ACTION_NAMES)})",
        )

    raw = parse_query_string(request.query)
    try:
        new_params = table.apply(raw, request.action, **request.args)
    except FilterEncodeError as e:
        logger.warning(f"⚠️ Filterwert ungültig ({table_name}.{request.action}): {e}")
        raise HTTPException(status_code=400, detail={"message": str(e), "errors": e.errors})
    except TableStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except TypeError as e:
        # falsche/fehlende args
        raise HTTPException(status_code=400, detail=f"Ungültige Argumente für {request.action}: {e}")

    logger.info(f"🔧 {table_name}.{request.action} -> {len(new_params)} Query-Keys")

    return {
        "table": table_name,
        "action": request.action,
        "changed": new_params != raw,
        "query": build_query_string(new_params),
        "state": table.state(new_params).to_dict(),
    }
