"""
Codec component - vehicles.lua decode and encode.

Shell Layer - converts core exceptions into output models.

Invariants:
- Decode preserves document order of entries
- A malformed entry drops only that entry
- Encode output is valid for every vehicle sequence without quotes in values
"""

from __future__ import annotations

import logging

from ._impl import TABLE_NAME, decode_vehicles, encode_vehicles, unsafe_string_warnings
from .models import (
    CodecError,
    DecodeVehiclesInput,
    DecodeVehiclesOutput,
    EncodeVehiclesInput,
    EncodeVehiclesOutput,
    VehicleFileError,
)
from .ports import CodecRulesPort

logger = logging.getLogger(__name__)


def run_decode(
    inp: DecodeVehiclesInput,
    *,
    rules: CodecRulesPort | None = None,
) -> DecodeVehiclesOutput:
    """
    Decode a vehicles.lua document.

    Args:
        inp: Input containing the raw document text.
        rules: Optional rules port; the table name defaults to Vehicles.

    Returns:
        DecodeVehiclesOutput with vehicles and diagnostics, or the fatal error.
    """
    table_name = TABLE_NAME if rules is None else rules.table_name()
    try:
        result = decode_vehicles(inp.text, table_name=table_name)
    except VehicleFileError as e:
        logger.error("Error parsing vehicles.lua: %s", e)
        return DecodeVehiclesOutput(
            vehicles=[],
            diagnostics=[],
            errors=[CodecError(code=e.code, message=str(e))],
            success=False,
        )

    return DecodeVehiclesOutput(
        vehicles=result.vehicles,
        diagnostics=result.diagnostics,
        errors=[],
        success=True,
    )


def run_encode(
    inp: EncodeVehiclesInput,
    *,
    rules: CodecRulesPort | None = None,
) -> EncodeVehiclesOutput:
    """
    Encode vehicles into a vehicles.lua document.

    Args:
        inp: Input containing the vehicles in export order.
        rules: Optional rules port; unsafe-string warnings are on by default.

    Returns:
        EncodeVehiclesOutput with the document text.
    """
    warnings: list[str] = []
    if rules is None or rules.warn_on_unsafe_strings():
        warnings = unsafe_string_warnings(inp.vehicles)
        for warning in warnings:
            logger.warning(warning)

    return EncodeVehiclesOutput(text=encode_vehicles(inp.vehicles), warnings=warnings)


def run(
    inp: DecodeVehiclesInput | EncodeVehiclesInput,
    *,
    rules: CodecRulesPort | None = None,
) -> DecodeVehiclesOutput | EncodeVehiclesOutput:
    """
    Main entry point for the codec component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, DecodeVehiclesInput):
        return run_decode(inp, rules=rules)
    elif isinstance(inp, EncodeVehiclesInput):
        return run_encode(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
