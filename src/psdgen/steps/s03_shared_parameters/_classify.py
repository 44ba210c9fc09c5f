"""Map IFC property types onto shared-parameter primitive types.

``PARAM_TYPE_GROUPS`` maps IFC data-type names to primitives; anything not
listed is ``NUMBER``. Untyped properties get a data type from the name
heuristic in ``psdgen.utils.datatypes`` first.
"""

from __future__ import annotations

from typing import Iterator

from psdgen.core.models import (
    BoundedValue,
    ComplexProperty,
    EnumeratedValue,
    ListValue,
    ParamType,
    Property,
    PropertySetDefinition,
    ReferenceValue,
    SharedParameterDef,
    SingleValue,
    TableValue,
)
from psdgen.utils.datatypes import infer_data_type

# ── Data type -> primitive ───────────────────────────────────────────

PARAM_TYPE_GROUPS: dict[ParamType, tuple[str, ...]] = {
    ParamType.ANGLE: ("IfcPositivePlaneAngleMeasure", "IfcSolidAngleMeasure"),
    ParamType.AREA: ("IfcAreaMeasure",),
    ParamType.CURRENCY: ("IfcMonetaryMeasure",),
    ParamType.INTEGER: (
        "IfcCardinalPointReference",
        "IfcCountMeasure",
        "IfcDayInMonthNumber",
        "IfcDayInWeekNumber",
        "IfcDimensionCount",
        "IfcInteger",
        "IfcIntegerCountRateMeasure",
        "IfcMonthInYearNumber",
        "IfcTimeStamp",
    ),
    ParamType.LENGTH: ("IfcLengthMeasure", "IfcNonNegativeLengthMeasure", "IfcPositiveLengthMeasure"),
    ParamType.MASS_DENSITY: ("IfcMassDensityMeasure",),
    ParamType.MULTILINETEXT: (
        "IfcArcIndex",
        "IfcComplexNumber",
        "IfcCompoundPlaneAngleMeasure",
        "IfcLineIndex",
        "IfcPropertySetDefinitionSet",
    ),
    ParamType.TEXT: (
        "IfcBinary",
        "IfcBoxAlignment",
        "IfcDate",
        "IfcDateTime",
        "IfcDescriptiveMeasure",
        "IfcDuration",
        "IfcFontStyle",
        "IfcFontVariant",
        "IfcFontWeight",
        "IfcGloballyUniqueId",
        "IfcIdentifier",
        "IfcLabel",
        "IfcLanguageId",
        "IfcPresentableText",
        "IfcText",
        "IfcString",
        "IfcTextAlignment",
        "IfcTextDecoration",
        "IfcTextFontName",
        "IfcTextTransformation",
        "IfcTime",
    ),
    ParamType.URL: ("IfcURIReference",),
    ParamType.VOLUME: ("IfcVolumeMeasure",),
    ParamType.YESNO: ("IfcBoolean", "IfcLogical"),
}

DATA_TYPE_PARAM_TYPES: dict[str, ParamType] = {
    data_type.casefold(): param_type
    for param_type, data_types in PARAM_TYPE_GROUPS.items()
    for data_type in data_types
}


def param_type_for(data_type: str) -> ParamType:
    return DATA_TYPE_PARAM_TYPES.get(data_type.casefold(), ParamType.NUMBER)


# ── Properties -> parameter definitions ──────────────────────────────


def classify_property(prop: Property, where: str = "") -> tuple[ParamType, str]:
    """(primitive type, description) of a non-complex property."""
    ptype = prop.property_type
    if ptype is None:
        data_type = infer_data_type(prop.name, where)
        return param_type_for(data_type), data_type
    if isinstance(ptype, SingleValue):
        return param_type_for(ptype.data_type), ptype.data_type
    if isinstance(ptype, EnumeratedValue):
        return ParamType.TEXT, ptype.name
    if isinstance(ptype, ReferenceValue):
        return ParamType.MULTILINETEXT, "PropertyReferenceValue"
    if isinstance(ptype, BoundedValue):
        return ParamType.MULTILINETEXT, "PropertyBoundedValue"
    if isinstance(ptype, ListValue):
        return ParamType.MULTILINETEXT, "PropertyListValue"
    if isinstance(ptype, TableValue):
        return ParamType.MULTILINETEXT, "PropertyTableValue"
    if isinstance(ptype, ComplexProperty):
        raise TypeError(f"{where}: complex properties are flattened before classification")
    raise TypeError(f"{where}: unhandled property type {type(ptype).__name__}")


def flatten_properties(
    pset: PropertySetDefinition, qualified_names: bool = False
) -> Iterator[tuple[str, Property]]:
    """(parameter name, property) pairs with complex members expanded."""
    for prop in pset.properties:
        if isinstance(prop.property_type, ComplexProperty):
            for member in prop.property_type.members:
                yield f"{pset.name}.{prop.name}.{member.name}", member
        elif qualified_names:
            yield f"{pset.name}.{prop.name}", prop
        else:
            yield prop.name, prop


def build_parameter(param_name: str, prop: Property, pset_name: str, group_id: int = 2) -> SharedParameterDef:
    """Unmerged parameter definition; the merger assigns its GUID."""
    param_type, description = classify_property(prop, f"{pset_name}.{prop.name}")
    return SharedParameterDef(
        name=param_name,
        param_type=param_type,
        description=description,
        group_id=group_id,
        owning_pset=pset_name,
    )
