from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# --- Enums / Literals ---
VehicleField = Literal["model", "name", "brand", "price", "categoryLabel", "shop"]
SortOption = Literal["none", "category"]

# Canonical field order used by the encoder and the decoder's required set
VEHICLE_FIELDS: tuple[VehicleField, ...] = (
    "model",
    "name",
    "brand",
    "price",
    "categoryLabel",
    "shop",
)

# Wire key -> python attribute
FIELD_ATTRS: dict[str, str] = {
    "model": "model",
    "name": "name",
    "brand": "brand",
    "price": "price",
    "categoryLabel": "category_label",
    "shop": "shop",
}

# --- Vehicles ---

class Vehicle(BaseModel):
    model: str
    name: str
    brand: str
    price: int = Field(ge=0)
    category_label: str = Field(alias="categoryLabel")
    shop: str | list[str]

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    def shops(self) -> list[str]:
        """Shop value as a list, whichever shape it is stored in."""
        if isinstance(self.shop, list):
            return list(self.shop)
        return [self.shop]

    def get_field(self, field: str) -> str | int | list[str]:
        return getattr(self, FIELD_ATTRS[field])


def blank_vehicle() -> Vehicle:
    """New empty entry, as created by the editor's "add" action."""
    return Vehicle(model="", name="", brand="", price=0, categoryLabel="", shop="")
