"""
In-memory catalog store.

Holds the vehicle collection for one editing session. Nothing is
persisted; exporting a file is the only way to keep edits.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vehicle_manager.domain.entities import Vehicle


@dataclass
class InMemoryCatalogStore:
    """Implements CatalogStorePort with a plain list."""

    vehicles: list[Vehicle] = field(default_factory=list)

    def get_all(self) -> list[Vehicle]:
        return list(self.vehicles)

    def replace_all(self, vehicles: list[Vehicle]) -> None:
        self.vehicles = list(vehicles)
