"""IFC data-type guesses for properties whose PSD carried no type.

Best effort only: substrings of the property name pick a type, everything
else is a label. Every guess is logged as a warning.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

NAME_HEURISTICS: list[tuple[tuple[str, ...], str]] = [
    (
        (
            "ratio", "length", "width", "thickness", "angle", "transmittance",
            "fraction", "rate", "velocity", "speed", "capacity", "pressure",
            "temperature", "power", "heatgain", "efficiency", "resistance",
            "coefficient", "measure",
        ),
        "IfcReal",
    ),
    (("loadbearing",), "IfcBoolean"),
    (("reference",), "IfcIdentifier"),
]
DEFAULT_INFERRED_TYPE = "IfcLabel"


def infer_data_type(prop_name: str, where: str = "") -> str:
    """Guess an IFC data type from substrings of a property name."""
    lowered = prop_name.casefold()
    data_type = DEFAULT_INFERRED_TYPE
    for needles, candidate in NAME_HEURISTICS:
        if any(needle in lowered for needle in needles):
            data_type = candidate
            break
    logger.warning(f"{where or prop_name}: no property type, inferred {data_type} from the name")
    return data_type
