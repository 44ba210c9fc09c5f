"""Applicable classes for historical PSD files that shipped without any.

Each entry is keyed by (declared IfcVersion, pset name); the version must
match exactly and the name is compared case-insensitively. The published
definitions are known to be incomplete; everything not listed here is
reported as an error and left unattached.
"""

from __future__ import annotations

from typing import Optional

_CONTROL_ELEMENT = ["IfcDistributionControlElement"]
_THERMAL_LOAD = ["IfcElement", "IfcSpatialStructureElement", "IfcZone"]

KNOWN_APPLICABLE_CLASSES: dict[tuple[str, str], list[str]] = {
    ("IFC4", "Pset_CivilElementCommon"): ["IfcCivilElement"],
    ("IFC4", "Pset_ElectricFlowStorageDevicePHistory"): ["IfcElectricFlowStorageDevice"],
    ("IFC4", "Pset_ElementAssemblyCommon"): ["IfcElementAssembly"],
    ("IFC4", "Pset_SpatialZoneCommon"): ["IfcSpatialZone"],

    ("IFC2X2", "Pset_AnalogInput"): _CONTROL_ELEMENT,
    ("IFC2X2", "Pset_AnalogOutput"): _CONTROL_ELEMENT,
    ("IFC2X2", "Pset_BinaryInput"): _CONTROL_ELEMENT,
    ("IFC2X2", "Pset_BinaryOutput"): _CONTROL_ELEMENT,
    ("IFC2X2", "Pset_MultiStateInput"): _CONTROL_ELEMENT,
    ("IFC2X2", "Pset_MultiStateOutput"): _CONTROL_ELEMENT,
    ("IFC2X2", "Pset_ElectricalDeviceCommon"): ["IfcDistributionElement"],
    ("IFC2X2", "Pset_DuctConnection"): ["IfcDuctSegmentType", "IfcDuctFittingType"],
    ("IFC2X2", "Pset_DuctDesignCriteria"): ["IfcSystem", "IfcDuctSegmentType", "IfcDuctFittingType"],
    ("IFC2X2", "Pset_PipeConnection"): ["IfcPipeSegmentType", "IfcPipeFittingType"],
    ("IFC2X2", "Pset_PipeConnectionFlanged"): ["IfcPipeSegmentType", "IfcPipeFittingType"],
    ("IFC2X2", "Pset_AirSideSystemInformation"): ["IfcSystem"],
    ("IFC2X2", "Pset_FireRatingProperties"): ["IfcElement", "IfcSpatialStructureElement"],
    ("IFC2X2", "Pset_ThermalLoadAggregate"): _THERMAL_LOAD,
    ("IFC2X2", "Pset_ThermalLoadDesignCriteria"): _THERMAL_LOAD + ["IfcBuilding"],
    ("IFC2X2", "Pset_ConcreteElementGeneral"): ["IfcBuildingElement"],
    ("IFC2X2", "Pset_ConcreteElementQuantityGeneral"): ["IfcBuildingElement"],
    ("IFC2X2", "Pset_ConcreteElementSurfaceFinishQuantityGeneral"): ["IfcBuildingElement"],
    ("IFC2X2", "Pset_PrecastConcreteElementGeneral"): ["IfcBuildingElement"],
}


_LOOKUP: dict[tuple[str, str], list[str]] = {
    (version, name.casefold()): classes for (version, name), classes in KNOWN_APPLICABLE_CLASSES.items()
}


def known_applicable_classes(version: str, pset_name: str) -> Optional[list[str]]:
    """Replacement applicable classes, or None when the pset is not a known case."""
    classes = _LOOKUP.get((version.upper(), pset_name.casefold()))
    return list(classes) if classes is not None else None
