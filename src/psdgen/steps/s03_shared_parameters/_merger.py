"""Merge parameter definitions into the Instance and Type tables.

GUID rules, per table and name:

- a new name takes the property's external identifier (ifdGuid) when it
  has one, otherwise a fresh GUID from the context's factory;
- an existing name has every field overwritten except its GUID, which only
  changes when the property carries an external identifier.

The Type table mirrors the Instance table under ``<name>[Type]``. A Type
parameter cannot share its Instance parameter's GUID, so an external
identifier is adopted there as a UUIDv5 derived from it: stable across
runs, yet distinct from the Instance GUID.
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, Optional

from psdgen.core.context import CompilationContext
from psdgen.core.models import SharedParameterDef
from ._classify import build_parameter, flatten_properties

logger = logging.getLogger(__name__)

TYPE_SUFFIX = "[Type]"


def type_parameter_name(name: str) -> str:
    return name if name.endswith(TYPE_SUFFIX) else name + TYPE_SUFFIX


def type_guid_from_external(ifd_guid: str) -> str:
    return str(uuid.uuid5(uuid.UUID(ifd_guid), TYPE_SUFFIX))


def merge_parameter(
    table: dict[str, SharedParameterDef],
    param: SharedParameterDef,
    external_guid: Optional[str],
    new_guid: Callable[[], uuid.UUID],
) -> SharedParameterDef:
    existing = table.get(param.name)
    if external_guid:
        guid = external_guid
        if existing is not None and existing.guid != guid:
            logger.info(f"{param.name}: adopting external GUID {guid} (was {existing.guid})")
    elif existing is not None:
        guid = existing.guid
    else:
        guid = str(new_guid())

    merged = param.model_copy(update={"guid": guid})
    table[param.name] = merged
    return merged


def merge_instance_and_type(
    ctx: CompilationContext,
    param: SharedParameterDef,
    ifd_guid: Optional[str] = None,
) -> tuple[SharedParameterDef, SharedParameterDef]:
    """Merge one parameter into both tables. Returns (instance, type) entries."""
    instance = merge_parameter(ctx.instance_params, param, ifd_guid, ctx.new_guid)
    type_param = instance.model_copy(update={"name": type_parameter_name(instance.name), "guid": None})
    type_external = type_guid_from_external(ifd_guid) if ifd_guid else None
    type_entry = merge_parameter(ctx.type_params, type_param, type_external, ctx.new_guid)
    return instance, type_entry


def merge_catalog(ctx: CompilationContext, qualified_names: bool = False, group_id: int = 2) -> int:
    """Merge every property of every pset in ``ctx.catalog``. Returns the count merged."""
    count = 0
    for _, pset in ctx.catalog.iter_definitions():
        for param_name, prop in flatten_properties(pset, qualified_names):
            param = build_parameter(param_name, prop, pset.name, group_id)
            merge_instance_and_type(ctx, param, prop.ifd_guid)
            count += 1
    return count
