"""
Catalog component - Port interfaces.
"""

from __future__ import annotations

from typing import Protocol

from vehicle_manager.domain.entities import Vehicle


class CatalogStorePort(Protocol):
    """Holds the in-memory vehicle collection for one editing session."""

    def get_all(self) -> list[Vehicle]:
        """Return the collection in order."""
        ...

    def replace_all(self, vehicles: list[Vehicle]) -> None:
        """Replace the whole collection."""
        ...
