"""
CatalogService - editing operations on the in-memory vehicle collection.

Handles add, field update, removal, search, sort and category listing.

Functional Core - pure business logic.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from vehicle_manager.domain.entities import (
    FIELD_ATTRS,
    VEHICLE_FIELDS,
    Vehicle,
    blank_vehicle,
)

from .models import CatalogRow, CatalogValidationError
from .ports import CatalogStorePort

DEFAULT_SEARCH_FIELDS: tuple[str, ...] = ("name", "model", "brand", "categoryLabel", "shop")
SORT_OPTIONS: tuple[str, ...] = ("none", "category")

_LEADING_INT_RE = re.compile(r"\s*([+-]?[0-9]+)")

# --- Value Coercion ---


def parse_price(value: Any) -> tuple[int | None, list[CatalogValidationError]]:
    """
    Parse a price the way the edit form does.

    Strings use their leading integer digits ("1500abc" -> 1500).
    """
    if isinstance(value, bool):
        value = None
    if isinstance(value, int):
        price = value
    elif isinstance(value, str) and (m := _LEADING_INT_RE.match(value)):
        price = int(m.group(1), 10)
    else:
        return None, [
            CatalogValidationError(
                code="price_invalid",
                message=f"Price must be a whole number, got {value!r}",
                field="price",
            )
        ]

    if price < 0:
        return None, [
            CatalogValidationError(
                code="price_negative",
                message="Price must not be negative",
                field="price",
            )
        ]
    return price, []


def _coerce_value(field: str, value: Any) -> tuple[Any, list[CatalogValidationError]]:
    if field == "price":
        return parse_price(value)

    if field == "shop" and isinstance(value, list):
        if all(isinstance(s, str) for s in value):
            return list(value), []
        return None, [
            CatalogValidationError(
                code="shop_invalid",
                message="Shop list must contain only strings",
                field="shop",
            )
        ]

    if not isinstance(value, str):
        return None, [
            CatalogValidationError(
                code="value_invalid",
                message=f"Field '{field}' must be text, got {type(value).__name__}",
                field=field,
            )
        ]
    return value, []


def _searchable_text(vehicle: Vehicle, field: str) -> str:
    value = vehicle.get_field(field)
    if isinstance(value, list):
        return ",".join(value)
    return str(value)


def matches_query(
    vehicle: Vehicle,
    query: str,
    fields: Sequence[str] = DEFAULT_SEARCH_FIELDS,
) -> bool:
    """Case-insensitive substring match against any of the given fields."""
    if not query:
        return True
    needle = query.lower()
    return any(needle in _searchable_text(vehicle, f).lower() for f in fields)


# --- Catalog Service ---


class CatalogService:
    """
    Catalog service.

    Edits the vehicle collection held by the store. Indices are positions
    in the full collection, not in a filtered view.
    """

    def __init__(
        self,
        store: CatalogStorePort,
        search_fields: Sequence[str] = DEFAULT_SEARCH_FIELDS,
        sort_options: Sequence[str] = SORT_OPTIONS,
    ) -> None:
        """Initialize service."""
        self._store = store
        self._search_fields = tuple(search_fields)
        self._sort_options = tuple(sort_options)

    def load(self, vehicles: list[Vehicle]) -> None:
        """Replace the collection, e.g. after importing a file."""
        self._store.replace_all(list(vehicles))

    def get_all(self) -> list[Vehicle]:
        """Get all vehicles in order."""
        return self._store.get_all()

    def add_blank(self) -> Vehicle:
        """Prepend a blank vehicle and return it."""
        vehicle = blank_vehicle()
        self._store.replace_all([vehicle, *self._store.get_all()])
        return vehicle

    def _check_index(self, vehicles: list[Vehicle], index: int) -> list[CatalogValidationError]:
        if 0 <= index < len(vehicles):
            return []
        return [
            CatalogValidationError(
                code="vehicle_not_found",
                message=f"No vehicle at position {index}",
            )
        ]

    def update(
        self,
        index: int,
        field: str,
        value: Any,
    ) -> tuple[Vehicle | None, list[CatalogValidationError]]:
        """
        Update one field of the vehicle at `index`.

        Returns:
            Tuple of (vehicle, errors). Vehicle is None if validation fails.
        """
        vehicles = self._store.get_all()
        errors = self._check_index(vehicles, index)
        if errors:
            return None, errors

        if field not in VEHICLE_FIELDS:
            return None, [
                CatalogValidationError(
                    code="unknown_field",
                    message=f"Unknown vehicle field '{field}'",
                    field=field,
                )
            ]

        coerced, errors = _coerce_value(field, value)
        if errors:
            return None, errors

        data = vehicles[index].model_dump()
        data[FIELD_ATTRS[field]] = coerced
        try:
            updated = Vehicle.model_validate(data)
        except ValidationError as e:
            return None, [
                CatalogValidationError(
                    code="value_invalid",
                    message=str(e),
                    field=field,
                )
            ]

        vehicles[index] = updated
        self._store.replace_all(vehicles)
        return updated, []

    def remove(self, index: int) -> tuple[bool, list[CatalogValidationError]]:
        """
        Remove the vehicle at `index`.

        Returns:
            Tuple of (success, errors).
        """
        vehicles = self._store.get_all()
        errors = self._check_index(vehicles, index)
        if errors:
            return False, errors

        del vehicles[index]
        self._store.replace_all(vehicles)
        return True, []

    def view(
        self, query: str = "", sort_by: str = "none"
    ) -> tuple[list[CatalogRow], list[CatalogValidationError]]:
        """Filter by query and optionally sort by category label."""
        if sort_by not in self._sort_options:
            return [], [
                CatalogValidationError(
                    code="sort_invalid",
                    message=f"Unknown sort option '{sort_by}'",
                )
            ]

        rows = [
            CatalogRow(index=i, vehicle=v)
            for i, v in enumerate(self._store.get_all())
            if matches_query(v, query, self._search_fields)
        ]
        if sort_by == "category":
            rows.sort(key=lambda r: r.vehicle.category_label.casefold())
        return rows, []

    def categories(self) -> list[str]:
        """Unique non-empty category labels, sorted."""
        labels = {v.category_label for v in self._store.get_all()}
        return sorted(label for label in labels if label)
