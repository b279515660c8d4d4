"""
Codec component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class CodecRulesPort(Protocol):
    """Rules interface for codec configuration."""

    def table_name(self) -> str:
        """Name of the local table that holds the vehicle entries."""
        ...

    def warn_on_unsafe_strings(self) -> bool:
        """Whether to report values that cannot be written unescaped."""
        ...
