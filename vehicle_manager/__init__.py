"""QB Vehicle Manager - edit QBCore vehicles.lua catalogs."""

__version__ = "0.1.0"
