from pathlib import Path

import pytest

from vehicle_manager.domain.entities import Vehicle
from vehicle_manager.rules.loader import load_rules
from vehicle_manager.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent

SAMPLE_LUA = """QBShared = QBShared or {}
QBShared.Vehicles = QBShared.Vehicles or {}

local Vehicles = {
    { ['model'] = 'adder', ['name'] = 'Adder', ['brand'] = 'Truffade', ['price'] = 1000000, ['categoryLabel'] = 'Super', ['shop'] = 'pdm' },
    {
        ['model'] = 'zentorno',
        ['name'] = 'Zentorno',
        ['brand'] = 'Pegassi',
        ['price'] = 725000,
        ['category'] = 'super',
        ['categoryLabel'] = 'Super',
        ['hash'] = `zentorno`,
        ['shop'] = {'pdm', 'luxury'},
    },
    {
        ['model'] = 'panto',
        ['name'] = 'Panto',
        ['brand'] = 'Benefactor',
        ['price'] = 13000,
        ['categoryLabel'] = 'Compacts',
        ['shop'] = 'pdm',
    },
}

for i = 1, #Vehicles do
    QBShared.Vehicles[Vehicles[i].model] = {
        spawncode = Vehicles[i].model,
        name = Vehicles[i].name,
        category = Vehicles[i].categoryLabel:gsub("%s+", ""):lower(),
        hash = joaat(Vehicles[i].model),
    }
end

return QBShared.Vehicles
"""


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def rules(project_root: Path) -> Rules:
    """Rules loaded from the real rules.yaml."""
    return load_rules(project_root / "rules.yaml")


@pytest.fixture
def sample_lua() -> str:
    return SAMPLE_LUA


@pytest.fixture
def adder() -> Vehicle:
    return Vehicle(
        model="adder",
        name="Adder",
        brand="Truffade",
        price=1000000,
        categoryLabel="Super",
        shop="pdm",
    )


@pytest.fixture
def zentorno() -> Vehicle:
    return Vehicle(
        model="zentorno",
        name="Zentorno",
        brand="Pegassi",
        price=725000,
        categoryLabel="Super",
        shop=["pdm", "luxury"],
    )
