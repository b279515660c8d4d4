"""
Catalog component - In-memory vehicle collection editing.
"""

from ._impl import (
    DEFAULT_SEARCH_FIELDS,
    SORT_OPTIONS,
    CatalogService,
    matches_query,
    parse_price,
)
from .component import (
    run_add,
    run_categories,
    run_load,
    run_remove,
    run_update,
    run_view,
)
from .models import (
    AddVehicleInput,
    CatalogRow,
    CatalogValidationError,
    CatalogViewOutput,
    CategoriesOutput,
    LoadCatalogInput,
    RemoveVehicleInput,
    UpdateVehicleInput,
    VehicleOperationOutput,
    ViewCatalogInput,
)
from .ports import CatalogStorePort

__all__ = [
    # Entry points
    "run_load",
    "run_add",
    "run_update",
    "run_remove",
    "run_view",
    "run_categories",
    # Input models
    "LoadCatalogInput",
    "AddVehicleInput",
    "UpdateVehicleInput",
    "RemoveVehicleInput",
    "ViewCatalogInput",
    # Output models
    "VehicleOperationOutput",
    "CatalogViewOutput",
    "CategoriesOutput",
    "CatalogRow",
    "CatalogValidationError",
    # Ports
    "CatalogStorePort",
    # Service
    "CatalogService",
    "matches_query",
    "parse_price",
    "DEFAULT_SEARCH_FIELDS",
    "SORT_OPTIONS",
]
