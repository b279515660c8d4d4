"""
Catalog component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from vehicle_manager.domain.entities import Vehicle

# --- Validation Error ---


@dataclass(frozen=True)
class CatalogValidationError:
    """Catalog editing error."""

    code: str
    message: str
    field: str | None = None


# --- Rows ---


@dataclass(frozen=True)
class CatalogRow:
    """A vehicle as shown in a filtered/sorted view, with its position in the collection."""

    index: int
    vehicle: Vehicle


# --- Input Models ---


@dataclass
class LoadCatalogInput:
    """Input for replacing the whole collection."""

    vehicles: list[Vehicle]


@dataclass
class AddVehicleInput:
    """Input for prepending a blank vehicle."""


@dataclass
class UpdateVehicleInput:
    """Input for editing one field of one vehicle."""

    index: int
    field: str
    value: str | int | list[str]


@dataclass
class RemoveVehicleInput:
    """Input for removing a vehicle."""

    index: int


@dataclass
class ViewCatalogInput:
    """Input for the filtered and sorted view."""

    query: str = ""
    sort_by: str = "none"


# --- Output Models ---


@dataclass
class VehicleOperationOutput:
    """Output from add/update/remove."""

    vehicle: Vehicle | None
    errors: list[CatalogValidationError]
    success: bool


@dataclass
class CatalogViewOutput:
    """Output from the view operation."""

    rows: list[CatalogRow]
    total: int
    errors: list[CatalogValidationError] = field(default_factory=list)
    success: bool = True


@dataclass
class CategoriesOutput:
    """Output from listing categories."""

    categories: list[str]
