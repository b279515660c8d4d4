"""
Codec core - vehicles.lua decoding and encoding.

Functional Core - pure text transformation, no I/O.

Decoding is a recursive-descent parse of Lua table constructors on top of
the lazy lexer. Only the first `local Vehicles = {...}` assignment that is
followed by end-of-text, a `for` loop or a `return` statement is read.

Encoding fills the QBCore shared-vehicles template. The template text is
consumed by QBCore as-is and must not change.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Union

from pydantic import ValidationError

from vehicle_manager.domain.entities import VEHICLE_FIELDS, Vehicle

from ._lexer import Token, tokenize
from .models import (
    DecodeDiagnostic,
    DecodeResult,
    EmptyInputError,
    LuaSyntaxError,
    NoEntriesFoundError,
    TableNotFoundError,
)

logger = logging.getLogger(__name__)

TABLE_NAME = "Vehicles"

_UNSIGNED_INT_RE = re.compile(r"[0-9]+")
_UNSAFE_CHARS = ("'", "\\", "\n", "\r")

# --- Parsed values ---


@dataclass(frozen=True)
class LuaNumber:
    raw: str


@dataclass(frozen=True)
class LuaOpaque:
    """Expression the codec does not interpret (calls, arithmetic, names)."""

    text: str


@dataclass
class LuaTable:
    items: list[TableItem] = field(default_factory=list)

    def keyed(self) -> dict[str, LuaValue]:
        """String-keyed items; the first occurrence of a key wins."""
        out: dict[str, LuaValue] = {}
        for item in self.items:
            if item.key is not None and item.key not in out:
                out[item.key] = item.value
        return out


@dataclass(frozen=True)
class LuaInvalid:
    """Table item that could not be parsed; the parser resumed after it."""

    message: str


LuaValue = Union[str, bool, None, LuaNumber, LuaTable, LuaOpaque, LuaInvalid]


@dataclass
class TableItem:
    key: str | None
    value: LuaValue
    line: int


class _ParseError(Exception):
    def __init__(self, message: str, tok: Token) -> None:
        super().__init__(f"line {tok.line}: {message}")


# --- Parser ---

_SEPARATORS = (",", ";", "}")
_OPENERS = {"(": ")", "[": "]", "{": "}"}


class _Parser:
    """Table-constructor parser over a token stream with lookahead."""

    def __init__(self, source: str) -> None:
        self.source = source
        self._tokens: Iterator[Token] = tokenize(source)
        self._buffer: list[Token] = []
        self._depth = 0

    def peek(self, offset: int = 0) -> Token:
        while len(self._buffer) <= offset:
            if self._buffer and self._buffer[-1].kind == "eof":
                return self._buffer[-1]
            self._buffer.append(next(self._tokens))
        return self._buffer[offset]

    def advance(self) -> Token:
        tok = self.peek()
        if tok.kind != "eof":
            self._buffer.pop(0)
        return tok

    def expect_op(self, op: str) -> Token:
        tok = self.advance()
        if not tok.is_op(op):
            raise _ParseError(f"'{op}' expected near '{tok.value}'", tok)
        return tok

    def find_table(self, name: str) -> LuaTable:
        """Scan forward to the first `local <name> = {...}` with a valid terminator."""
        while self.peek().kind != "eof":
            tok = self.advance()
            if not (
                tok.is_name("local")
                and self.peek(0).is_name(name)
                and self.peek(1).is_op("=")
                and self.peek(2).is_op("{")
            ):
                continue
            self.advance()
            self.advance()
            table = self.parse_table(recover=True)
            follow = self.peek()
            if follow.kind == "eof" or follow.is_name("for") or follow.is_name("return"):
                return table
        raise TableNotFoundError(f"Could not find {name} table in the file")

    def parse_table(self, recover: bool = False) -> LuaTable:
        """
        Parse a table constructor.

        With recover=True a malformed item becomes a LuaInvalid item and
        parsing resumes at the next separator of this table.
        """
        self.expect_op("{")
        self._depth += 1
        level = self._depth
        table = LuaTable()
        while not self.peek().is_op("}"):
            start = self.peek()
            try:
                table.items.append(self.parse_item())
            except _ParseError as e:
                if not recover:
                    raise
                self._skip_to_separator(level)
                table.items.append(TableItem(key=None, value=LuaInvalid(str(e)), line=start.line))
            sep = self.peek()
            if sep.is_op(",") or sep.is_op(";"):
                self.advance()
            elif not sep.is_op("}"):
                raise _ParseError(f"'}}' expected near '{sep.value}'", sep)
        self.expect_op("}")
        self._depth -= 1
        return table

    def _skip_to_separator(self, level: int) -> None:
        """Drop tokens until a separator of the table at nesting `level`."""
        while True:
            tok = self.peek()
            if tok.kind == "eof":
                raise _ParseError("unexpected end of file", tok)
            if self._depth == level and tok.kind == "op" and tok.value in _SEPARATORS:
                return
            if tok.is_op("{"):
                self._depth += 1
            elif tok.is_op("}"):
                self._depth -= 1
            self.advance()

    def parse_item(self) -> TableItem:
        tok = self.peek()
        if tok.is_op("["):
            self.advance()
            key_tok = self.peek()
            if key_tok.kind == "string" and self.peek(1).is_op("]"):
                self.advance()
                key: str | None = key_tok.value
            else:
                self.skip_expression(stop=("]",))
                key = None
            self.expect_op("]")
            self.expect_op("=")
            return TableItem(key=key, value=self.parse_value(), line=tok.line)

        if tok.kind == "name" and self.peek(1).is_op("="):
            self.advance()
            self.advance()
            return TableItem(key=tok.value, value=self.parse_value(), line=tok.line)

        return TableItem(key=None, value=self.parse_value(), line=tok.line)

    def parse_value(self) -> LuaValue:
        start = self.peek()
        value: LuaValue

        if start.is_op("{"):
            value = self.parse_table()
        elif start.kind == "string":
            value = self.advance().value
        elif start.kind == "number":
            value = LuaNumber(self.advance().value)
        elif start.is_op("-") and self.peek(1).kind == "number":
            self.advance()
            value = LuaNumber("-" + self.advance().value)
        elif start.is_name("true") or start.is_name("false"):
            value = self.advance().value == "true"
        elif start.is_name("nil"):
            self.advance()
            value = None
        else:
            return self._opaque_from(start)

        if self.peek().kind == "op" and self.peek().value in _SEPARATORS:
            return value
        # Literal followed by an operator: treat the whole thing as an expression
        return self._opaque_from(start)

    def _opaque_from(self, start: Token) -> LuaOpaque:
        end = self.skip_expression(stop=_SEPARATORS)
        if end is None:
            raise _ParseError("expression expected", start)
        return LuaOpaque(self.source[start.start : end.end].strip())

    def skip_expression(self, stop: tuple[str, ...]) -> Token | None:
        """Consume tokens up to a depth-0 stop operator. Returns the last consumed token."""
        depth: list[str] = []
        last: Token | None = None
        while True:
            tok = self.peek()
            if tok.kind == "eof":
                raise _ParseError("unexpected end of file", tok)
            if tok.kind == "op":
                if not depth and tok.value in stop:
                    return last
                if tok.value in _OPENERS:
                    depth.append(_OPENERS[tok.value])
                elif tok.value in _OPENERS.values():
                    if not depth or depth.pop() != tok.value:
                        raise _ParseError(f"unbalanced '{tok.value}'", tok)
            last = self.advance()


# --- Decoding ---


def _extract_vehicle(
    table: LuaTable, index: int
) -> tuple[Vehicle | None, list[DecodeDiagnostic]]:
    """Build a Vehicle from one entry table, or report why it was skipped."""
    keyed = table.keyed()
    diagnostics: list[DecodeDiagnostic] = []
    values: dict[str, object] = {}

    for name in VEHICLE_FIELDS:
        if name not in keyed:
            diagnostics.append(
                DecodeDiagnostic(
                    code="missing_field",
                    message=f"Entry {index} has no '{name}' field",
                    entry_index=index,
                    field=name,
                )
            )
            continue

        raw = keyed[name]
        value = _coerce_field(name, raw)
        if value is None:
            diagnostics.append(
                DecodeDiagnostic(
                    code="invalid_value",
                    message=f"Entry {index} has an unsupported '{name}' value: {_describe(raw)}",
                    entry_index=index,
                    field=name,
                )
            )
            continue
        values[name] = value

    if diagnostics:
        return None, diagnostics

    try:
        return Vehicle.model_validate(values), []
    except ValidationError as e:
        return None, [
            DecodeDiagnostic(
                code="invalid_entry",
                message=f"Entry {index} failed validation: {e}",
                entry_index=index,
            )
        ]


def _coerce_field(name: str, raw: LuaValue) -> str | int | list[str] | None:
    if name == "price":
        if isinstance(raw, LuaNumber) and _UNSIGNED_INT_RE.fullmatch(raw.raw):
            return int(raw.raw, 10)
        return None

    if isinstance(raw, str):
        return raw.strip()

    if name == "shop" and isinstance(raw, LuaTable):
        shops: list[str] = []
        for item in raw.items:
            if item.key is not None or not isinstance(item.value, str):
                return None
            shops.append(item.value.strip())
        return shops

    return None


def _describe(raw: LuaValue) -> str:
    if isinstance(raw, LuaNumber):
        return raw.raw
    if isinstance(raw, LuaOpaque):
        return raw.text
    if isinstance(raw, LuaInvalid):
        return raw.message
    if isinstance(raw, LuaTable):
        return "table"
    return repr(raw)


def decode_vehicles(text: str, table_name: str = TABLE_NAME) -> DecodeResult:
    """
    Decode a vehicles.lua document.

    Args:
        text: Document text.
        table_name: Name of the local table holding the entries.

    Raises:
        EmptyInputError: text is empty or whitespace-only.
        TableNotFoundError: no vehicles table assignment found.
        NoEntriesFoundError: the table has no brace-delimited entries.
    """
    if not text.strip():
        raise EmptyInputError("File is empty")

    parser = _Parser(text)
    try:
        table = parser.find_table(table_name)
    except (LuaSyntaxError, _ParseError) as e:
        raise TableNotFoundError(f"Could not find {table_name} table in the file ({e})") from e

    # Unparseable items count as entries; they were most likely broken tables
    entries: list[tuple[int, LuaTable | LuaInvalid]] = []
    diagnostics: list[DecodeDiagnostic] = []
    for item in table.items:
        if isinstance(item.value, (LuaTable, LuaInvalid)):
            entries.append((len(entries), item.value))
        else:
            diagnostic = DecodeDiagnostic(
                code="not_a_table",
                message=f"Ignoring non-table item on line {item.line}: {_describe(item.value)}",
                entry_index=-1,
            )
            logger.warning(diagnostic.message)
            diagnostics.append(diagnostic)

    if not entries:
        raise NoEntriesFoundError("No vehicle entries found in the file")

    vehicles: list[Vehicle] = []
    for index, entry in entries:
        vehicle: Vehicle | None = None
        if isinstance(entry, LuaInvalid):
            problems = [
                DecodeDiagnostic(
                    code="invalid_entry",
                    message=f"Entry {index} is malformed: {entry.message}",
                    entry_index=index,
                )
            ]
        else:
            vehicle, problems = _extract_vehicle(entry, index)
        if vehicle is None:
            logger.warning(
                "Skipping invalid vehicle entry %d: %s",
                index,
                "; ".join(p.message for p in problems),
            )
            diagnostics.extend(problems)
            continue
        vehicles.append(vehicle)

    return DecodeResult(vehicles=vehicles, diagnostics=diagnostics)


# --- Encoding ---

_ENTRY_TEMPLATE = """    {{
        ['model'] = {model},
        ['name'] = {name},
        ['brand'] = {brand},
        ['price'] = {price},
        ['categoryLabel'] = {category_label},
        ['shop'] = {shop},
    }}"""

_DOCUMENT_TEMPLATE = """QBShared = QBShared or {{}}
QBShared.Vehicles = QBShared.Vehicles or {{}}

local Vehicles = {{
{entries}
}}

for i = 1, #Vehicles do
    QBShared.Vehicles[Vehicles[i].model] = {{
        spawncode = Vehicles[i].model,
        name = Vehicles[i].name,
        brand = Vehicles[i].brand,
        model = Vehicles[i].model,
        price = Vehicles[i].price,
        category = Vehicles[i].categoryLabel:gsub("%s+", ""):lower(),
        categoryLabel = Vehicles[i].categoryLabel,
        hash = joaat(Vehicles[i].model),
        shop = Vehicles[i].shop
    }}
end

return QBShared.Vehicles"""


def _quote(value: str) -> str:
    # No escaping: QBCore files are written with plain single-quoted strings
    return f"'{value}'"


def _render_shop(shop: str | list[str]) -> str:
    if isinstance(shop, list):
        return "{" + ", ".join(_quote(s) for s in shop) + "}"
    return _quote(shop)


def render_vehicle(vehicle: Vehicle) -> str:
    """Render one vehicle as a table literal in canonical field order."""
    return _ENTRY_TEMPLATE.format(
        model=_quote(vehicle.model),
        name=_quote(vehicle.name),
        brand=_quote(vehicle.brand),
        price=vehicle.price,
        category_label=_quote(vehicle.category_label),
        shop=_render_shop(vehicle.shop),
    )


def unsafe_string_warnings(vehicles: Iterable[Vehicle]) -> list[str]:
    """List values that cannot be written as plain single-quoted strings."""
    warnings: list[str] = []
    for i, vehicle in enumerate(vehicles):
        for name in VEHICLE_FIELDS:
            if name == "price":
                continue
            raw = vehicle.get_field(name)
            values = raw if isinstance(raw, list) else [raw]
            for value in values:
                if any(ch in str(value) for ch in _UNSAFE_CHARS):
                    warnings.append(
                        f"Vehicle {i} ({vehicle.model!r}) field '{name}' contains "
                        f"characters that will not survive export: {value!r}"
                    )
    return warnings


def encode_vehicles(vehicles: Iterable[Vehicle]) -> str:
    """Encode vehicles into a complete QBCore vehicles.lua document."""
    entries = ",\n".join(render_vehicle(v) for v in vehicles)
    return _DOCUMENT_TEMPLATE.format(entries=entries)
