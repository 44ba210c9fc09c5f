"""Entities that exist in a schema release but should not be offered for export.

Keyed by schema version prefix; a version matches the longest listed prefix
(``IFC4_ADD2`` uses the ``IFC4`` list).
"""

from __future__ import annotations

DEPRECATED_ENTITIES: dict[str, frozenset[str]] = {
    "IFC4": frozenset({
        "IfcAnnotation",
        "IfcProxy",
        "IfcOpeningStandardCase",
        "IfcBeamStandardCase",
        "IfcColumnStandardCase",
        "IfcDoorStandardCase",
        "IfcMemberStandardCase",
        "IfcPlateStandardCase",
        "IfcSlabElementedCase",
        "IfcSlabStandardCase",
        "IfcWallElementedCase",
        "IfcWallStandardCase",
        "IfcWindowStandardCase",
        "IfcDoorStyle",
        "IfcWindowStyle",
        "IfcBuilding",
        "IfcBuildingStorey",
    }),
    "IFC2X3": frozenset({
        "IfcAnnotation",
        "IfcElectricalElement",
        "IfcEquipmentElement",
        "IfcBuilding",
        "IfcBuildingStorey",
    }),
    "IFC2X2": frozenset({
        "IfcAnnotation",
        "IfcBuilding",
        "IfcBuildingStorey",
    }),
}


def deprecated_entities(version: str) -> frozenset[str]:
    version = version.upper()
    matches = [prefix for prefix in DEPRECATED_ENTITIES if version.startswith(prefix)]
    if not matches:
        return frozenset()
    return DEPRECATED_ENTITIES[max(matches, key=len)]
