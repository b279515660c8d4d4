"""
Vehicle file component - vehicles.lua import and export.
"""

from .component import DefaultFileRules, run_export, run_import
from .models import (
    ExportFileInput,
    ExportFileOutput,
    FileOperationError,
    ImportFileInput,
    ImportFileOutput,
)
from .ports import FileRulesPort, TextFilePort

__all__ = [
    # Entry points
    "run_import",
    "run_export",
    # Input models
    "ImportFileInput",
    "ExportFileInput",
    # Output models
    "ImportFileOutput",
    "ExportFileOutput",
    "FileOperationError",
    # Ports
    "TextFilePort",
    "FileRulesPort",
    "DefaultFileRules",
]
