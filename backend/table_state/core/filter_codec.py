"""Filter Codec

Pro filterbarer Spalte: Filterbedingung <-> String für die Query.

Zwei Varianten:
- frei: encode/decode werden direkt übergeben (Default: kompaktes JSON)
- Schema: pydantic TypeAdapter prüft den Wert (strict)

Fehlerpolitik (bewusst asymmetrisch):
- encode ist interner Vertrag -> ungültiger Wert wirft FilterEncodeError
- decode verarbeitet Eingaben von außen -> ungültig = None, wirft nie
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from table_state.core.errors import FilterEncodeError


Encoder = Callable[[Any], str]
Decoder = Callable[[str], Any]


def _compact_json(obj: Any) -> str:
    # entspricht JSON.stringify im Frontend (keine Leerzeichen, Unicode unverändert)
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


def _default_encode(condition: Any) -> str:
    return _compact_json(condition)


def _default_decode(encoded: str) -> Any:
    try:
        return json.loads(encoded)
    except (ValueError, TypeError):
        return None


@dataclass(frozen=True)
class FilterDefinition:
    encode: Encoder
    decode: Decoder
    initial: Any = None
    # Render-Hooks gehören der Präsentation; der Kern reicht sie nur durch.
    render_popup_content: Optional[Callable[..., Any]] = None
    render_filter_chip_content: Optional[Callable[..., Any]] = None


def define_table_column_filter(
    *,
    encode: Optional[Encoder] = None,
    decode: Optional[Decoder] = None,
    initial: Any = None,
    render_popup_content: Optional[Callable[..., Any]] = None,
    render_filter_chip_content: Optional[Callable[..., Any]] = None,
) -> FilterDefinition:
    """Filter-Definition mit freiem Codec.

    Fehlende Funktionen werden durch JSON-Text ersetzt; das Default-decode
    liefert bei kaputtem JSON None.
    """
    return FilterDefinition(
        encode=encode or _default_encode,
        decode=decode or _default_decode,
        initial=initial,
        render_popup_content=render_popup_content,
        render_filter_chip_content=render_filter_chip_content,
    )


def create_filter_encoder_decoder(schema: Any) -> Tuple[Encoder, Decoder]:
    """encode/decode aus einem Schema (Typ, den pydantic.TypeAdapter versteht).

    encode: validieren, dann JSON -> FilterEncodeError bei Schemaverletzung
    decode: JSON validieren (kaputtes JSON eingeschlossen) -> None bei jedem Fehler
    """
    adapter = TypeAdapter(schema)

    def encode(value: Any) -> str:
        try:
            validated = adapter.validate_python(value, strict=True)
        except ValidationError as e:
            raise FilterEncodeError(
                f"Filterwert entspricht nicht dem Schema: {value!r}",
                errors=e.errors(include_url=False, include_context=False),
            ) from e
        return _compact_json(adapter.dump_python(validated, mode="json"))

    def decode(encoded: str) -> Any:
        # strict im JSON-Modus akzeptiert die Wire-Form (Array -> Tupel, String -> Enum/date)
        try:
            return adapter.validate_json(encoded, strict=True)
        except ValidationError:
            return None

    return encode, decode


def define_table_column_filter_with_schema(
    schema: Any,
    *,
    initial: Any = None,
    render_popup_content: Optional[Callable[..., Any]] = None,
    render_filter_chip_content: Optional[Callable[..., Any]] = None,
) -> FilterDefinition:
    encode, decode = create_filter_encoder_decoder(schema)
    return FilterDefinition(
        encode=encode,
        decode=decode,
        initial=initial,
        render_popup_content=render_popup_content,
        render_filter_chip_content=render_filter_chip_content,
    )
