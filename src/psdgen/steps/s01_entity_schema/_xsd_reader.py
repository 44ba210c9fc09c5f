"""Extract the entity inheritance graph from an ifcXML schema (XSD).

Only the shape the compiler needs is read: entity name, abstractness,
parent entity and the predefined-type enumeration an entity refers to.
This is not an XSD validator.
"""

from __future__ import annotations

import logging
from pathlib import Path

from psdgen.utils.entity_tree import EntitySchema
from psdgen.utils.xml import child, children, descendants, parse_file, strip_prefix

logger = logging.getLogger(__name__)


def _predefined_type_enum(extension) -> str | None:
    for attr in descendants(extension, "attribute"):
        if attr.get("name") == "PredefinedType" and attr.get("type"):
            return strip_prefix(attr.get("type"))
    for elem in descendants(extension, "element"):
        if elem.get("name") == "PredefinedType" and elem.get("type"):
            return strip_prefix(elem.get("type"))
    return None


def _read_enumerations(root) -> dict[str, list[str]]:
    enums: dict[str, list[str]] = {}
    for simple in children(root, "simpleType"):
        name = simple.get("name", "")
        if not (name.startswith("Ifc") and name.endswith("Enum")):
            continue
        restriction = child(simple, "restriction")
        if restriction is None:
            continue
        values = [
            facet.get("value", "").upper()
            for facet in children(restriction, "enumeration")
            if facet.get("value")
        ]
        enums[name] = values
    return enums


def read_xsd_schema(xsd_path: Path, version: str | None = None) -> EntitySchema:
    """Build an :class:`EntitySchema` from one ifcXML XSD file.

    The version name defaults to the upper-cased file stem (``IFC4_ADD2``).
    """
    xsd_path = Path(xsd_path)
    version = (version or xsd_path.stem).upper()
    root = parse_file(xsd_path)
    schema = EntitySchema(version)

    for ctype in children(root, "complexType"):
        name = ctype.get("name", "")
        if not name.startswith("Ifc"):
            continue

        content = child(ctype, "complexContent")
        if content is None:
            content = child(ctype, "simpleContent")
        if content is None:
            continue
        extension = child(content, "extension")
        if extension is None:
            extension = child(content, "restriction")
        if extension is None:
            continue

        schema.add(
            name,
            strip_prefix(extension.get("base")),
            _predefined_type_enum(extension),
            ctype.get("abstract", "false").lower() == "true",
        )

    schema.predefined_type_enums = _read_enumerations(root)
    logger.info(
        f"{xsd_path.name}: {len(schema)} entities, "
        f"{len(schema.predefined_type_enums)} predefined-type enumerations"
    )
    return schema
