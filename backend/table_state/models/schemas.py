"""
Pydantic Models for API Request/Response
"""
from pydantic import BaseModel, Field
from typing import Dict, Any, List, Optional

# Table State Models
class SortResponse(BaseModel):
    """Sort-Zustand (sortBy/sortOrder unabhängig validiert)"""
    sortBy: Optional[str] = None
    sortOrder: Optional[str] = None

class TableStateModel(BaseModel):
    """Dekodierter Tabellen-Zustand"""
    keywordSearch: Optional[str] = None
    sort: SortResponse = SortResponse()
    columnVisibility: List[str] = []
    pagination: int = 1
    filter: Dict[str, Any] = {}

class TableStateResponse(BaseModel):
    """Zustand + kanonischer Query-String"""
    table: str
    query: str
    state: TableStateModel

class ColumnInfo(BaseModel):
    """Spalten-Metadaten (ohne Render-Hooks)"""
    key: str
    sortable: bool
    initial_visibility: bool
    filterable: bool

class TableInfo(BaseModel):
    """Registrierte Tabelle"""
    name: str
    prefix: Optional[str] = None
    columns: List[ColumnInfo]

class TableKeysResponse(BaseModel):
    """Query-Keys einer Tabelle"""
    table: str
    prefix: Optional[str] = None
    keys: Dict[str, str]
    filter_keys: Dict[str, str] = {}

class TableActionRequest(BaseModel):
    """Aktion auf einen Query-String anwenden"""
    query: str = ""
    action: str
    args: Dict[str, Any] = Field(default_factory=dict)

class TableActionResponse(TableStateResponse):
    """Ergebnis einer Aktion"""
    action: str
    changed: bool
