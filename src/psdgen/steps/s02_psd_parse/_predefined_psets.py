"""Predefined property sets that are entity attributes rather than PSD files.

Door/window lining and panel properties, permeable coverings and
reinforcement definitions are modelled as ``IfcPreDefinedPropertySet``
subtypes, so no PSD ships for them. They are added per release so that
parameters exist for them as for any other pset. IFC2x2/IFC2x3 attach them
to the ``...Style`` entities, IFC4 to the ``...Type`` entities.
"""

from __future__ import annotations

from psdgen.core.models import Property, PropertySetDefinition, SingleValue

POS_LEN = "IfcPositiveLengthMeasure"
NON_NEG_LEN = "IfcNonNegativeLengthMeasure"
LEN = "IfcLengthMeasure"
RATIO = "IfcNormalisedRatioMeasure"
LABEL = "IfcLabel"


def _family(schema_file_version: str) -> str | None:
    version = schema_file_version.upper()
    if version.startswith("IFC2X2") or version.startswith("IFC2X3"):
        return "IFC2X"
    if version.startswith("IFC4"):
        return "IFC4"
    return None


# (name, applicable classes, common properties, per-family properties, per-family extra classes)
_PREDEFINED = [
    (
        "IfcDoorLiningProperties",
        ["IfcDoor"],
        [
            ("LiningDepth", POS_LEN),
            ("ThresholdDepth", POS_LEN),
            ("TransomOffset", LEN),
            ("LiningOffset", LEN),
            ("ThresholdOffset", LEN),
            ("CasingThickness", POS_LEN),
            ("CasingDepth", POS_LEN),
        ],
        {
            "IFC2X": [("LiningThickness", POS_LEN), ("ThresholdThickness", POS_LEN), ("TransomThickness", POS_LEN)],
            "IFC4": [
                ("LiningThickness", NON_NEG_LEN),
                ("ThresholdThickness", NON_NEG_LEN),
                ("TransomThickness", NON_NEG_LEN),
                ("LiningToPanelOffsetX", LEN),
                ("LiningToPanelOffsetY", LEN),
            ],
        },
        {"IFC2X": ["IfcDoorStyle"], "IFC4": ["IfcDoorType"]},
    ),
    (
        "IfcDoorPanelProperties",
        ["IfcDoor"],
        [("PanelDepth", POS_LEN), ("PanelOperation", LABEL), ("PanelWidth", RATIO), ("PanelPosition", LABEL)],
        {},
        {"IFC2X": ["IfcDoorStyle"], "IFC4": ["IfcDoorType"]},
    ),
    (
        "IfcPermeableCoveringProperties",
        ["IfcDoor", "IfcWindow"],
        [("OperationType", LABEL), ("PanelPosition", LABEL), ("FrameDepth", POS_LEN), ("FrameThickness", POS_LEN)],
        {},
        {"IFC2X": ["IfcDoorStyle", "IfcWindowStyle"], "IFC4": ["IfcDoorType", "IfcWindowType"]},
    ),
    (
        "IfcReinforcementDefinitionProperties",
        ["IfcReinforcingElement"],
        [("DefinitionType", LABEL), ("ReinforcementSectionDefinitions", LABEL)],
        {},
        {},
    ),
    (
        "IfcWindowLiningProperties",
        ["IfcWindow"],
        [
            ("LiningDepth", POS_LEN),
            ("FirstTransomOffset", RATIO),
            ("SecondTransomOffset", RATIO),
            ("FirstMullionOffset", RATIO),
            ("SecondMullionOffset", RATIO),
        ],
        {
            "IFC2X": [("LiningThickness", POS_LEN), ("TransomThickness", POS_LEN), ("MullionThickness", POS_LEN)],
            "IFC4": [
                ("LiningThickness", NON_NEG_LEN),
                ("TransomThickness", NON_NEG_LEN),
                ("MullionThickness", NON_NEG_LEN),
                ("LiningOffset", LEN),
                ("LiningToPanelOffsetX", LEN),
                ("LiningToPanelOffsetY", LEN),
            ],
        },
        {"IFC2X": ["IfcWindowStyle"], "IFC4": ["IfcWindowType"]},
    ),
    (
        "IfcWindowPanelProperties",
        ["IfcWindow"],
        [("OperationType", LABEL), ("PanelPosition", LABEL), ("FrameDepth", POS_LEN), ("FrameThickness", POS_LEN)],
        {},
        {"IFC2X": ["IfcWindowStyle"], "IFC4": ["IfcWindowType"]},
    ),
]


def predefined_psets(schema_file_version: str) -> list[PropertySetDefinition]:
    family = _family(schema_file_version)
    version = schema_file_version.upper()
    psets = []
    for name, classes, common, per_family, extra_classes in _PREDEFINED:
        props = common + per_family.get(family, [])
        psets.append(
            PropertySetDefinition(
                name=name,
                ifc_version=version,
                schema_file_version=schema_file_version,
                applicable_classes=classes + extra_classes.get(family, []),
                properties=[
                    Property(name=prop_name, property_type=SingleValue(data_type=data_type))
                    for prop_name, data_type in props
                ],
            )
        )
    return psets
