"""
Vehicle file component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vehicle_manager.components.codec.models import DecodeDiagnostic
from vehicle_manager.domain.entities import Vehicle


@dataclass(frozen=True)
class FileOperationError:
    """Import/export error shown to the user."""

    code: str
    message: str


@dataclass(frozen=True)
class ImportFileInput:
    """Input for importing a vehicles file."""

    path: str


@dataclass
class ImportFileOutput:
    """Output from importing a vehicles file."""

    vehicles: list[Vehicle]
    diagnostics: list[DecodeDiagnostic] = field(default_factory=list)
    errors: list[FileOperationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class ExportFileInput:
    """Input for exporting vehicles. `filename` defaults to the configured export name."""

    vehicles: list[Vehicle]
    filename: str | None = None


@dataclass
class ExportFileOutput:
    """Output from exporting vehicles."""

    path: str | None
    text: str
    warnings: list[str] = field(default_factory=list)
    errors: list[FileOperationError] = field(default_factory=list)
    success: bool = True
