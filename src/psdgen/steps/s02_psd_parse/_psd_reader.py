"""Read one Property Set Definition (PSD) XML file.

Handles both ``PropertySetDef`` (Pset_*.xml) and ``QtoSetDef`` (Qto_*.xml)
roots, with or without a default XML namespace. Known defects of the
published definitions are repaired here and logged:

- ``IfcVersion`` written as ``2x`` for IFC2x2,
- ``ClassName`` entries carrying trailing notes,
- missing applicable classes (see ``_known_fixes``),
- missing ``PropertyType``/``DataType`` and empty enumeration lists.

A variant without the data type it needs leaves the property untyped, so
the shared-parameter step falls back to its name heuristic. A property
without a name is dropped with an error; a file that cannot be read at all
raises and is skipped by the caller.
"""

from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path
from typing import Iterator, Optional

from psdgen.core.models import (
    BoundedValue,
    ComplexProperty,
    EnumeratedValue,
    EnumItem,
    ListValue,
    NameAlias,
    Property,
    PropertySetDefinition,
    PropertyType,
    ReferenceValue,
    SingleValue,
    TableValue,
)
from psdgen.utils.xml import (
    child,
    child_text,
    children,
    descendant,
    descendants,
    first_element_child,
    local_name,
    parse_file,
)
from ._known_fixes import known_applicable_classes

logger = logging.getLogger(__name__)


class PsdFormatError(ValueError):
    """A PSD element does not have the shape the reader expects."""


QTO_TYPE_MAP: dict[str, str] = {
    "Q_LENGTH": "IfcLengthMeasure",
    "Q_AREA": "IfcAreaMeasure",
    "Q_VOLUME": "IfcVolumeMeasure",
    "Q_COUNT": "IfcCountMeasure",
    "Q_TIME": "IfcTimeMeasure",
    "Q_WEIGHT": "IfcMassMeasure",
}

_CLASS_NAME_SPLIT = re.compile(r"[/\\ ]")
_TYPE_VALUE_SPLIT = re.compile(r"[/.=]")


# ── Header fields ────────────────────────────────────────────────────


def normalize_ifc_version(raw: Optional[str], schema_file_version: str) -> str:
    """Map a PSD ``IfcVersion`` value to a version tag.

    ``2x``, ``2x2`` and ``2.x`` all mean IFC2X2; any IFC4 value is replaced
    by the release folder the file was read from, because the file alone
    does not tell IFC4 addenda apart.
    """
    version = (raw or "").replace(" ", "").upper()
    if not version:
        return schema_file_version.upper()
    if version.startswith("IFC4"):
        return schema_file_version.upper()
    if version.startswith("2"):
        if version in ("2X", "2X2", "2.X"):
            return "IFC2X2"
        return "IFC" + version
    if version.startswith("IFC2X3"):
        return "IFC2X3"
    return version if version.startswith("IFC") else "IFC" + version


def clean_class_name(raw: Optional[str]) -> Optional[str]:
    """First token of a ClassName entry that looks like an IFC entity name."""
    if not raw:
        return None
    for token in _CLASS_NAME_SPLIT.split(raw.strip()):
        if token.startswith("Ifc"):
            return token
    return None


def parse_applicable_type_value(text: Optional[str]) -> tuple[Optional[str], Optional[str], list[str]]:
    """Split ``[SELF\\]Entity[/PREDEFINED][="literal"]``.

    Returns (applicable type, predefined type, extra applicable classes);
    the extra classes come from a comma-separated entity list.
    """
    if not text:
        return None, None, []
    text = text.strip()
    if not text or text.upper() == "N/A":
        return None, None, []

    parts = _TYPE_VALUE_SPLIT.split(text.replace("SELF\\", ""))
    applicable_type = parts[0].strip()
    predefined_type = None
    if len(parts) > 1 and applicable_type.casefold() != "ifcmaterial":
        predefined_type = parts[-1].replace('"', "").strip().rstrip(",") or None

    extra: list[str] = []
    if "," in applicable_type:
        extra = [name.strip() for name in applicable_type.split(",") if name.strip()]
    return applicable_type or None, predefined_type, extra


def parse_ifd_guid(raw: Optional[str], where: str) -> Optional[str]:
    """Normalize an ifdguid attribute (32 hex digits) to a hyphenated UUID string."""
    if not raw or not raw.strip():
        return None
    try:
        return str(uuid.UUID(raw.strip()))
    except ValueError:
        logger.warning(f"{where}: ignoring malformed ifdguid '{raw}'")
        return None


def _aliases(elem) -> list[NameAlias]:
    container = child(elem, "NameAliases")
    if container is None:
        return []
    return [
        NameAlias(lang=alias.get("lang", ""), text=alias.text.strip())
        for alias in children(container, "NameAlias")
        if alias.text and alias.text.strip()
    ]


def _data_type(elem) -> Optional[str]:
    data_type = child(elem, "DataType")
    if data_type is None:
        return None
    return data_type.get("type") or None


# ── Property types ───────────────────────────────────────────────────


def _single_value(variant, prop_name: str, where: str) -> PropertyType:
    data_type = _data_type(variant)
    if data_type is None:
        data_type = "IfcIdentifier" if prop_name.casefold() == "reference" else "IfcLabel"
        logger.warning(f"{where}: missing DataType, assuming {data_type}")
    return SingleValue(data_type=data_type)


def _reference_value(variant, prop_name: str, where: str) -> Optional[PropertyType]:
    ref_entity = _data_type(variant) or variant.get("reftype")
    if not ref_entity:
        logger.warning(f"{where}: reference value without DataType or reftype, type left to name heuristic")
        return None
    return ReferenceValue(ref_entity=ref_entity)


def _enumerated_value(variant, prop_name: str, where: str) -> PropertyType:
    constants: dict[str, list[NameAlias]] = {}
    constant_names: list[str] = []
    for const in descendants(variant, "ConstantDef"):
        const_name = child_text(const, "Name")
        if const_name:
            constant_names.append(const_name)
            constants[const_name.casefold()] = _aliases(const)

    item_values = [
        item.text.strip()
        for item in descendants(variant, "EnumItem")
        if item.text and item.text.strip()
    ]
    if item_values:
        enum_list = child(variant, "EnumList")
        enum_name = (enum_list.get("name") if enum_list is not None else None) or f"PEnum_{prop_name}"
        if constants and len(constants) != len(item_values):
            logger.warning(
                f"{where}: {len(item_values)} enum items but {len(constants)} constant definitions"
            )
        items = [EnumItem(value=v, aliases=constants.get(v.casefold(), [])) for v in item_values]
    else:
        enum_name = f"PEnum_{prop_name}"
        logger.warning(f"{where}: EnumList empty, using {enum_name} from ConstantList")
        items = [EnumItem(value=v, aliases=constants.get(v.casefold(), [])) for v in constant_names]
    return EnumeratedValue(name=enum_name, items=items)


def _bounded_value(variant, prop_name: str, where: str) -> Optional[PropertyType]:
    data_type = _data_type(variant)
    if data_type is None:
        logger.warning(f"{where}: bounded value without DataType, type left to name heuristic")
        return None
    return BoundedValue(data_type=data_type)


def _list_value(variant, prop_name: str, where: str) -> Optional[PropertyType]:
    data_type = descendant(variant, "DataType")
    if data_type is None or not data_type.get("type"):
        logger.warning(f"{where}: list value without DataType, type left to name heuristic")
        return None
    return ListValue(data_type=data_type.get("type"))


def _table_value(variant, prop_name: str, where: str) -> PropertyType:
    defining = child(variant, "DefiningValue")
    defined = child(variant, "DefinedValue")
    return TableValue(
        expression=child_text(variant, "Expression"),
        defining_type=_data_type(defining) if defining is not None else None,
        defined_type=_data_type(defined) if defined is not None else None,
    )


def _member_defs(variant) -> Iterator:
    for node in variant:
        name = local_name(node)
        if name == "PropertyDef":
            yield node
        elif name == "PropertyDefs":
            yield from children(node, "PropertyDef")


def _complex_property(variant, prop_name: str, where: str) -> PropertyType:
    members: list[Property] = []
    for member_elem in _member_defs(variant):
        member = _read_property_safe(member_elem, where)
        if member is None:
            continue
        if isinstance(member.property_type, ComplexProperty):
            logger.warning(f"{where}.{member.name}: nested complex property dropped")
            continue
        members.append(member)
    return ComplexProperty(name=variant.get("name") or prop_name, members=members)


PROPERTY_TYPE_READERS = {
    "TypePropertySingleValue": _single_value,
    "TypePropertyEnumeratedValue": _enumerated_value,
    "TypePropertyReferenceValue": _reference_value,
    "TypePropertyBoundedValue": _bounded_value,
    "TypePropertyListValue": _list_value,
    "TypePropertyTableValue": _table_value,
    "TypeComplexProperty": _complex_property,
}


# ── Properties ───────────────────────────────────────────────────────


def read_property(elem, pset_name: str) -> Property:
    """Read one ``PropertyDef``. Raises :class:`PsdFormatError` on a broken shape."""
    name = child_text(elem, "Name")
    if not name:
        raise PsdFormatError(f"{pset_name}: PropertyDef without Name")
    where = f"{pset_name}.{name}"

    prop = Property(
        name=name,
        ifd_guid=parse_ifd_guid(elem.get("ifdguid"), where),
        aliases=_aliases(elem),
    )

    type_elem = child(elem, "PropertyType")
    variant = first_element_child(type_elem) if type_elem is not None else None
    if variant is None:
        logger.warning(f"{where}: Missing PropertyType")
        return prop

    reader = PROPERTY_TYPE_READERS.get(local_name(variant))
    if reader is None:
        logger.warning(f"{where}: unsupported property type {local_name(variant)}")
        return prop

    prop.property_type = reader(variant, name, where)
    return prop


def _read_property_safe(elem, pset_name: str) -> Optional[Property]:
    try:
        return read_property(elem, pset_name)
    except PsdFormatError as exc:
        logger.error(f"Dropping property: {exc}")
        return None


def read_quantity(elem, qto_name: str) -> Property:
    """Read one ``QtoDef`` as a single-value property."""
    name = child_text(elem, "Name")
    if not name:
        raise PsdFormatError(f"{qto_name}: QtoDef without Name")
    qto_type = (child_text(elem, "QtoType") or "").upper()
    data_type = QTO_TYPE_MAP.get(qto_type)
    if data_type is None:
        logger.warning(f"{qto_name}.{name}: unknown QtoType '{qto_type}', assuming IfcLabel")
        data_type = "IfcLabel"
    return Property(
        name=name,
        ifd_guid=parse_ifd_guid(elem.get("ifdguid"), f"{qto_name}.{name}"),
        aliases=_aliases(elem),
        property_type=SingleValue(data_type=data_type),
    )


# ── Property set files ───────────────────────────────────────────────


def _read_header(root, schema_file_version: str) -> PropertySetDefinition:
    name = child_text(root, "Name")
    if not name:
        raise PsdFormatError(f"<{local_name(root)}> without Name")

    version_elem = child(root, "IfcVersion")
    raw_version = None
    if version_elem is not None:
        raw_version = version_elem.get("version") or (version_elem.text or "").strip()

    pset = PropertySetDefinition(
        name=name,
        ifc_version=normalize_ifc_version(raw_version, schema_file_version),
        schema_file_version=schema_file_version,
        ifd_guid=parse_ifd_guid(root.get("ifdguid"), name),
    )

    classes: list[str] = []
    for class_elem in descendants(root, "ClassName"):
        cleaned = clean_class_name(class_elem.text)
        if cleaned and cleaned not in classes:
            classes.append(cleaned)

    applicable_type, predefined_type, extra = parse_applicable_type_value(
        child_text(root, "ApplicableTypeValue")
    )
    for extra_class in extra:
        if extra_class not in classes:
            classes.append(extra_class)
    pset.applicable_type_value = applicable_type
    pset.predefined_type = predefined_type

    if not classes:
        # IFC4 addenda all declare IFC4; ifc_version already holds the release folder
        declared = (raw_version or "").replace(" ", "").upper()
        fixed = known_applicable_classes(declared if declared.startswith("IFC4") else pset.ifc_version, name)
        if fixed:
            logger.warning(f"{name} ({pset.ifc_version}): no applicable classes, using known fix {fixed}")
            classes = fixed
        else:
            logger.error(f"{name} ({pset.ifc_version}): missing applicable class information")
    pset.applicable_classes = classes
    return pset


def _add_unique(pset: PropertySetDefinition, prop: Optional[Property]) -> None:
    if prop is None:
        return
    if any(p.name == prop.name for p in pset.properties):
        logger.warning(f"{pset.name}: duplicate property {prop.name} ignored")
        return
    pset.properties.append(prop)


def read_psd(path: Path, schema_file_version: str) -> PropertySetDefinition:
    """Read a Pset_*.xml or Qto_*.xml file.

    Raises ``lxml.etree.XMLSyntaxError`` or :class:`PsdFormatError` when the
    file as a whole cannot be read.
    """
    root = parse_file(Path(path))
    root_name = local_name(root)

    if root_name == "PropertySetDef":
        pset = _read_header(root, schema_file_version)
        defs = child(root, "PropertyDefs")
        for elem in children(defs, "PropertyDef") if defs is not None else []:
            _add_unique(pset, _read_property_safe(elem, pset.name))
        return pset

    if root_name == "QtoSetDef":
        qto = _read_header(root, schema_file_version)
        defs = child(root, "QtoDefs")
        for elem in children(defs, "QtoDef") if defs is not None else []:
            try:
                _add_unique(qto, read_quantity(elem, qto.name))
            except PsdFormatError as exc:
                logger.error(f"Dropping quantity: {exc}")
        return qto

    raise PsdFormatError(f"{Path(path).name}: unexpected root element <{root_name}>")
