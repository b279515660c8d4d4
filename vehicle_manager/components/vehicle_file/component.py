"""
Vehicle file component - Import and export of vehicles.lua.

Reads an uploaded file as text and decodes it; encodes the current
collection and writes it under the export filename.

Shell Layer - handles I/O and error conversion.
"""

from __future__ import annotations

import logging
from pathlib import PurePath

from vehicle_manager.components.codec import (
    TABLE_NAME,
    DecodeVehiclesInput,
    EncodeVehiclesInput,
    run_decode,
    run_encode,
)

from .models import (
    ExportFileInput,
    ExportFileOutput,
    FileOperationError,
    ImportFileInput,
    ImportFileOutput,
)
from .ports import FileRulesPort, TextFilePort

logger = logging.getLogger(__name__)


class DefaultFileRules:
    """Fallback rules used when no rules port is supplied."""

    def table_name(self) -> str:
        return TABLE_NAME

    def warn_on_unsafe_strings(self) -> bool:
        return True

    def allowed_extensions(self) -> list[str]:
        return [".lua"]

    def export_filename(self) -> str:
        return "vehicles.lua"

    def encoding(self) -> str:
        return "utf-8"

    def max_input_bytes(self) -> int:
        return 5 * 1024 * 1024


def _failed_import(code: str, message: str) -> ImportFileOutput:
    logger.error("Import failed (%s): %s", code, message)
    return ImportFileOutput(
        vehicles=[],
        errors=[FileOperationError(code=code, message=message)],
        success=False,
    )


def _failed_export(code: str, message: str) -> ExportFileOutput:
    logger.error("Export failed (%s): %s", code, message)
    return ExportFileOutput(
        path=None,
        text="",
        errors=[FileOperationError(code=code, message=message)],
        success=False,
    )


def run_import(
    inp: ImportFileInput,
    *,
    fs: TextFilePort,
    rules: FileRulesPort | None = None,
) -> ImportFileOutput:
    """
    Import a vehicles file.

    Args:
        inp: Input containing the file path.
        fs: Text file port for reading.
        rules: Optional rules port. Uses defaults if None.

    Returns:
        ImportFileOutput with decoded vehicles, or errors.
    """
    if rules is None:
        rules = DefaultFileRules()

    allowed = rules.allowed_extensions()
    if PurePath(inp.path).suffix.lower() not in allowed:
        return _failed_import(
            "invalid_extension",
            f"Please select a {' or '.join(allowed)} file",
        )

    try:
        if not fs.exists(inp.path):
            return _failed_import("file_not_found", f"File not found: {inp.path}")

        limit = rules.max_input_bytes()
        if fs.size(inp.path) > limit:
            return _failed_import("file_too_large", f"File is larger than {limit} bytes")

        text = fs.read_text(inp.path, encoding=rules.encoding())
    except UnicodeDecodeError as e:
        return _failed_import("unreadable_file", f"Error reading file: {e}")
    except ValueError as e:
        # Raised by the file port for paths outside its root
        return _failed_import("invalid_path", str(e))
    except OSError as e:
        return _failed_import("unreadable_file", f"Error reading file: {e}")

    decoded = run_decode(DecodeVehiclesInput(text=text), rules=rules)
    if not decoded.success:
        return ImportFileOutput(
            vehicles=[],
            errors=[FileOperationError(code=e.code, message=e.message) for e in decoded.errors],
            success=False,
        )

    if not decoded.vehicles:
        output = _failed_import(
            "no_vehicles_found",
            "No vehicles found in the file. Make sure the file format is correct.",
        )
        output.diagnostics = decoded.diagnostics
        return output

    logger.info(
        "Imported %d vehicles from %s (%d skipped entries)",
        len(decoded.vehicles),
        inp.path,
        len({d.entry_index for d in decoded.diagnostics if d.entry_index >= 0}),
    )
    return ImportFileOutput(
        vehicles=decoded.vehicles,
        diagnostics=decoded.diagnostics,
        errors=[],
        success=True,
    )


def run_export(
    inp: ExportFileInput,
    *,
    fs: TextFilePort,
    rules: FileRulesPort | None = None,
) -> ExportFileOutput:
    """
    Export vehicles as a vehicles.lua document.

    Args:
        inp: Input containing the vehicles and optional filename.
        fs: Text file port for writing.
        rules: Optional rules port. Uses defaults if None.

    Returns:
        ExportFileOutput with the written path and document text.
    """
    if rules is None:
        rules = DefaultFileRules()

    if not inp.vehicles:
        return _failed_export("no_vehicles", "No vehicles to download")

    encoded = run_encode(EncodeVehiclesInput(vehicles=inp.vehicles), rules=rules)
    filename = inp.filename or rules.export_filename()
    try:
        path = fs.write_text(filename, encoded.text, encoding=rules.encoding())
    except ValueError as e:
        return _failed_export("invalid_path", str(e))
    except OSError as e:
        return _failed_export("write_failed", f"Error writing file: {e}")

    logger.info("Exported %d vehicles to %s", len(inp.vehicles), path)
    return ExportFileOutput(path=path, text=encoded.text, warnings=encoded.warnings)
