"""Build the entity graph from ifcopenshell's bundled EXPRESS schemas.

Used when no ifcXML schema files are at hand. Requires the ``ifc`` extra.
"""

from __future__ import annotations

import logging

from psdgen.utils.entity_tree import EntitySchema

logger = logging.getLogger(__name__)


def _predefined_type_enum(entity) -> str | None:
    for attr in entity.all_attributes():
        if attr.name() != "PredefinedType":
            continue
        declared = attr.type_of_attribute()
        if hasattr(declared, "declared_type"):
            return declared.declared_type().name()
    return None


def read_ifcopenshell_schema(schema_name: str, version: str | None = None) -> EntitySchema:
    """Build an :class:`EntitySchema` from ``ifcopenshell_wrapper.schema_by_name``.

    ``schema_name`` is an ifcopenshell identifier such as ``IFC2X3`` or ``IFC4``.
    """
    import ifcopenshell.ifcopenshell_wrapper as ifc_wrapper

    wrapped = ifc_wrapper.schema_by_name(schema_name)
    schema = EntitySchema((version or schema_name).upper())

    for decl in wrapped.declarations():
        if isinstance(decl, ifc_wrapper.entity):
            sup = decl.supertype()
            schema.add(
                decl.name(),
                sup.name() if sup else None,
                _predefined_type_enum(decl),
                decl.is_abstract(),
            )
        elif isinstance(decl, ifc_wrapper.enumeration_type) and decl.name().endswith("Enum"):
            schema.predefined_type_enums[decl.name()] = [
                str(item).upper() for item in decl.enumeration_items()
            ]

    logger.info(f"ifcopenshell {schema_name}: {len(schema)} entities")
    return schema
