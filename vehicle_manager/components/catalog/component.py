"""
Catalog component - Vehicle collection editing.

Handles add/update/remove and the searchable, sortable view.

Shell Layer - wraps service results in output models.
"""

from __future__ import annotations

from ._impl import CatalogService
from .models import (
    AddVehicleInput,
    CatalogViewOutput,
    CategoriesOutput,
    LoadCatalogInput,
    RemoveVehicleInput,
    UpdateVehicleInput,
    VehicleOperationOutput,
    ViewCatalogInput,
)

# --- Shell Layer Functions ---


def run_load(
    input_data: LoadCatalogInput,
    service: CatalogService,
) -> CatalogViewOutput:
    """Replace the collection and return the unfiltered view."""
    service.load(input_data.vehicles)
    rows, errors = service.view()
    return CatalogViewOutput(rows=rows, total=len(rows), errors=errors, success=not errors)


def run_add(
    input_data: AddVehicleInput,
    service: CatalogService,
) -> VehicleOperationOutput:
    """Prepend a blank vehicle."""
    vehicle = service.add_blank()
    return VehicleOperationOutput(vehicle=vehicle, errors=[], success=True)


def run_update(
    input_data: UpdateVehicleInput,
    service: CatalogService,
) -> VehicleOperationOutput:
    """Update one field of a vehicle."""
    vehicle, errors = service.update(
        index=input_data.index,
        field=input_data.field,
        value=input_data.value,
    )

    return VehicleOperationOutput(
        vehicle=vehicle,
        errors=errors,
        success=vehicle is not None,
    )


def run_remove(
    input_data: RemoveVehicleInput,
    service: CatalogService,
) -> VehicleOperationOutput:
    """Remove a vehicle."""
    success, errors = service.remove(input_data.index)
    return VehicleOperationOutput(vehicle=None, errors=errors, success=success)


def run_view(
    input_data: ViewCatalogInput,
    service: CatalogService,
) -> CatalogViewOutput:
    """Filtered and sorted rows."""
    rows, errors = service.view(query=input_data.query, sort_by=input_data.sort_by)
    return CatalogViewOutput(
        rows=rows,
        total=len(service.get_all()),
        errors=errors,
        success=not errors,
    )


def run_categories(service: CatalogService) -> CategoriesOutput:
    """Category labels for the quick-filter list."""
    return CategoriesOutput(categories=service.categories())
