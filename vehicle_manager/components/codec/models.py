"""
Codec component input/output models.

Covers decoding vehicles.lua text into Vehicle records and encoding
records back into the QBCore shared-vehicles document.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vehicle_manager.domain.entities import Vehicle

# --- Errors ---


class VehicleFileError(Exception):
    """Base error for fatal decode failures."""

    code = "decode_failed"


class EmptyInputError(VehicleFileError):
    """Raised when the document is empty or whitespace-only."""

    code = "empty_input"


class TableNotFoundError(VehicleFileError):
    """Raised when no vehicles table assignment can be located."""

    code = "table_not_found"


class NoEntriesFoundError(VehicleFileError):
    """Raised when the vehicles table holds no brace-delimited entries."""

    code = "no_entries_found"


class LuaSyntaxError(ValueError):
    """Raised by the lexer on malformed Lua source."""

    def __init__(self, message: str, line: int) -> None:
        self.line = line
        super().__init__(f"line {line}: {message}")


@dataclass(frozen=True)
class CodecError:
    """Fatal codec error as reported by the shell layer."""

    code: str
    message: str


@dataclass(frozen=True)
class DecodeDiagnostic:
    """Non-fatal problem with a single table entry."""

    code: str
    message: str
    entry_index: int
    field: str | None = None


# --- Decode ---


@dataclass(frozen=True)
class DecodeResult:
    """Core decode result: surviving vehicles plus per-entry diagnostics."""

    vehicles: list[Vehicle]
    diagnostics: list[DecodeDiagnostic] = field(default_factory=list)


@dataclass(frozen=True)
class DecodeVehiclesInput:
    """Input for decoding a vehicles document."""

    text: str


@dataclass
class DecodeVehiclesOutput:
    """Output from decoding a vehicles document."""

    vehicles: list[Vehicle]
    diagnostics: list[DecodeDiagnostic]
    errors: list[CodecError]
    success: bool


# --- Encode ---


@dataclass(frozen=True)
class EncodeVehiclesInput:
    """Input for encoding vehicles into a document."""

    vehicles: list[Vehicle]


@dataclass
class EncodeVehiclesOutput:
    """Output from encoding vehicles."""

    text: str
    warnings: list[str] = field(default_factory=list)
    success: bool = True
