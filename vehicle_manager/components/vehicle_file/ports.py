"""
Vehicle file component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class TextFilePort(Protocol):
    """Text file access for import and export."""

    def exists(self, path: str) -> bool:
        """Check whether a file exists."""
        ...

    def size(self, path: str) -> int:
        """File size in bytes. Raises FileNotFoundError."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read a whole file as text. Raises FileNotFoundError."""
        ...

    def write_text(self, name: str, text: str, encoding: str = "utf-8") -> str:
        """Write text and return the stored path."""
        ...


class FileRulesPort(Protocol):
    """Rules interface for file handling."""

    def table_name(self) -> str: ...

    def warn_on_unsafe_strings(self) -> bool: ...

    def allowed_extensions(self) -> list[str]: ...

    def export_filename(self) -> str: ...

    def encoding(self) -> str: ...

    def max_input_bytes(self) -> int: ...
