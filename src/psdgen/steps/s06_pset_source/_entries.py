"""Turn catalog definitions into the entries of the generated initializer.

Each pset name gets one ``Init<name>`` method. Every versioned definition of
that pset becomes a block guarded by the export flag of its version, listing
the applicable entity types and one entry per property. Complex properties
are flattened one level: a member becomes ``<Parent>.<Child>``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from psdgen.core.models import (
    BoundedValue,
    ComplexProperty,
    EnumeratedValue,
    ListValue,
    NameAlias,
    Property,
    PropertySetDefinition,
    PsetCatalog,
    ReferenceValue,
    SingleValue,
    TableValue,
)
from psdgen.utils.codegen import emit_version, enum_identifier, render_template
from psdgen.utils.datatypes import infer_data_type

logger = logging.getLogger(__name__)

# Export option flag per emitted version
EXPORT_FLAGS: dict[str, str] = {
    "IFC2X2": "ExportAs2x2",
    "IFC2X3": "ExportAs2x3",
    "IFC4": "ExportAs4",
    "IFC4_ADD1": "ExportAs4_ADD1",
    "IFC4_ADD2": "ExportAs4_ADD2",
    "IFC4X3": "ExportAs4x3",
}

LANGUAGE_TYPES: dict[str, str] = {
    "en": "English_USA",
    "en-us": "English_USA",
    "ja": "Japanese",
    "ja-jp": "Japanese",
    "ko": "Korean",
    "ko-kr": "Korean",
    "zh-cn": "Chinese_Simplified",
    "zh-sg": "Chinese_Simplified",
    "zh-hk": "Chinese_Simplified",
    "zh-tw": "Chinese_Traditional",
    "fr": "French",
    "fr-fr": "French",
    "de": "German",
    "de-de": "German",
    "es": "Spanish",
    "it": "Italian",
    "nl": "Dutch",
    "ru": "Russian",
    "cs": "Czech",
    "pl": "Polish",
    "hu": "Hungarian",
    "pt-br": "Brazilian_Portuguese",
}
UNKNOWN_LANGUAGE = "Unknown"

DEFAULT_ENTITY = "IfcBuildingElementProxy"


@dataclass
class LocalizedName:
    language: str
    text: str


@dataclass
class PsetEntry:
    entry_class: str
    type_enum: str
    param_name: str
    property_name: str
    property_type: str
    value_type: Optional[str] = None
    argument_type: Optional[str] = None
    enum_type: Optional[str] = None
    localized_names: list[LocalizedName] = field(default_factory=list)
    calculator: str = ""


@dataclass
class VersionBlock:
    version: str
    export_flag: str
    entity_types: list[str] = field(default_factory=list)
    entries: list[PsetEntry] = field(default_factory=list)


@dataclass
class PsetInit:
    name: str
    method_name: str
    var_name: str
    allow_check: str
    blocks: list[VersionBlock] = field(default_factory=list)


def entry_class_for(pset_name: str) -> tuple[str, str]:
    """(entry class, type enum) for a pset: common, predefined or quantity."""
    lowered = pset_name.casefold()
    if lowered.startswith("pset"):
        return "PropertySetEntry", "PropertyType"
    if lowered.startswith("ifc"):
        return "PreDefinedPropertySetEntry", "PropertyType"
    return "QuantityEntry", "QuantityType"


def revit_type_name(data_type: Optional[str]) -> str:
    """``IfcLengthMeasure`` -> ``Length``; missing or ``IfcValue`` -> ``Label``."""
    if not data_type or data_type.strip().casefold() == "ifcvalue":
        return "Label"
    name = data_type.replace("Ifc", "").replace("Measure", "").strip()
    if name.casefold() == "string":
        return "Text"
    return name or "Label"


def language_type(lang: str) -> str:
    return LANGUAGE_TYPES.get(lang.strip().casefold(), UNKNOWN_LANGUAGE)


def _localized(aliases: list[NameAlias]) -> list[LocalizedName]:
    return [LocalizedName(language=language_type(a.lang), text=a.text) for a in aliases]


def build_entry(
    pset: PropertySetDefinition,
    prop: Property,
    version: str,
    prefix: str = "",
    enum_namespace: str = "",
) -> PsetEntry:
    entry_class, type_enum = entry_class_for(pset.name)
    property_name = f"{prefix}.{prop.name}" if prefix else prop.name
    entry = PsetEntry(
        entry_class=entry_class,
        type_enum=type_enum,
        param_name=f"{pset.name}.{property_name}",
        property_name=property_name,
        property_type="Label",
        localized_names=_localized(prop.aliases),
        calculator=f"{prop.name}Calculator",
    )

    ptype = prop.property_type
    if ptype is None:
        ptype = SingleValue(data_type=infer_data_type(prop.name, f"{pset.name}({version}).{property_name}"))

    if isinstance(ptype, SingleValue):
        entry.property_type = revit_type_name(ptype.data_type)
    elif isinstance(ptype, EnumeratedValue):
        entry.value_type = "EnumeratedValue"
        prefix_ns = f"{enum_namespace}." if enum_namespace else ""
        entry.enum_type = f"{prefix_ns}{version}.{enum_identifier(ptype.name)}"
    elif isinstance(ptype, ReferenceValue):
        entry.property_type = ptype.ref_entity.strip()
        entry.value_type = "ReferenceValue"
    elif isinstance(ptype, ListValue):
        entry.property_type = revit_type_name(ptype.data_type)
        entry.value_type = "ListValue"
    elif isinstance(ptype, BoundedValue):
        entry.property_type = revit_type_name(ptype.data_type)
        entry.value_type = "BoundedValue"
    elif isinstance(ptype, TableValue):
        entry.argument_type = revit_type_name(ptype.defining_type)
        entry.property_type = revit_type_name(ptype.defined_type)
        entry.value_type = "TableValue"
    else:
        raise TypeError(f"{pset.name}.{property_name}: unexpected property type {type(ptype).__name__}")
    return entry


def build_version_block(
    pset: PropertySetDefinition, schema_file_version: str, enum_namespace: str = ""
) -> Optional[VersionBlock]:
    """One guarded block, or None when the version has no export flag."""
    version = emit_version(pset, schema_file_version)
    flag = EXPORT_FLAGS.get(version)
    if flag is None:
        logger.error(f"{pset.name}: unrecognized schema version {version}, definition not written")
        return None

    block = VersionBlock(
        version=version,
        export_flag=flag,
        entity_types=[cls or DEFAULT_ENTITY for cls in pset.applicable_classes],
    )
    for prop in pset.properties:
        if isinstance(prop.property_type, ComplexProperty):
            for member in prop.property_type.members:
                block.entries.append(build_entry(pset, member, version, prop.name, enum_namespace))
        else:
            block.entries.append(build_entry(pset, prop, version, enum_namespace=enum_namespace))
    return block


def build_pset_inits(catalog: PsetCatalog, enum_namespace: str = "") -> list[PsetInit]:
    inits: list[PsetInit] = []
    for name in sorted(catalog.definitions):
        ident = enum_identifier(name)
        init = PsetInit(
            name=name,
            method_name=f"Init{ident}",
            var_name=ident.replace("Pset_", "propertySet"),
            allow_check="AllowPredefPsetToBeCreated" if name.casefold().startswith("ifc") else "AllowPsetToBeCreated",
        )
        for versioned in catalog.definitions[name]:
            block = build_version_block(versioned.definition, versioned.schema_file_version, enum_namespace)
            if block is not None:
                init.blocks.append(block)
        if not init.blocks:
            logger.warning(f"{name}: no exportable version, Init method skipped")
            continue
        inits.append(init)
    return inits


def render_pset_source(inits: list[PsetInit], namespace: str, calculator_namespace: str = "") -> str:
    """C# initializer source; an empty calculator namespace leaves out the calculator lookup."""
    return render_template(
        "pset_csharp.template",
        inits=inits,
        namespace=namespace,
        calculator_namespace=calculator_namespace,
    )
