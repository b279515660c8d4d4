"""
Codec component - vehicles.lua parsing and generation.
"""

from ._impl import (
    TABLE_NAME,
    decode_vehicles,
    encode_vehicles,
    render_vehicle,
    unsafe_string_warnings,
)
from .component import run, run_decode, run_encode
from .models import (
    CodecError,
    DecodeDiagnostic,
    DecodeResult,
    DecodeVehiclesInput,
    DecodeVehiclesOutput,
    EmptyInputError,
    EncodeVehiclesInput,
    EncodeVehiclesOutput,
    LuaSyntaxError,
    NoEntriesFoundError,
    TableNotFoundError,
    VehicleFileError,
)
from .ports import CodecRulesPort

__all__ = [
    # Entry points
    "run",
    "run_decode",
    "run_encode",
    # Core functions
    "decode_vehicles",
    "encode_vehicles",
    "render_vehicle",
    "unsafe_string_warnings",
    "TABLE_NAME",
    # Input models
    "DecodeVehiclesInput",
    "EncodeVehiclesInput",
    # Output models
    "DecodeVehiclesOutput",
    "EncodeVehiclesOutput",
    "DecodeResult",
    "DecodeDiagnostic",
    "CodecError",
    # Errors
    "VehicleFileError",
    "EmptyInputError",
    "TableNotFoundError",
    "NoEntriesFoundError",
    "LuaSyntaxError",
    # Ports
    "CodecRulesPort",
]
