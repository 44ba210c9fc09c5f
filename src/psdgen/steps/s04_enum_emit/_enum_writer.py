"""Collect enumerated property domains and render one source file per version.

An enumeration is identified by ``<version>.<enum name>`` only. The first
definition seen wins; a later one under the same key is skipped, with a
warning when its items differ, because two psets may reuse a generated
name for unrelated domains.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from psdgen.core.context import CompilationContext
from psdgen.core.models import ComplexProperty, EnumeratedValue, Property, PropertySetDefinition
from psdgen.utils.codegen import FILE_SUFFIX, Language, build_enum_block, emit_version, render_enum_source

logger = logging.getLogger(__name__)


def _leaf_properties(pset: PropertySetDefinition) -> Iterator[Property]:
    for prop in pset.properties:
        if isinstance(prop.property_type, ComplexProperty):
            yield from prop.property_type.members
        else:
            yield prop


def register_enum(ctx: CompilationContext, version: str, name: str, values: list[str]) -> bool:
    """Record an enum for emission. Returns False when skipped."""
    if not name or not values:
        return False
    key = f"{version}.{name}"
    previous = ctx.emitted_enums.get(key)
    if previous is not None:
        if previous != values:
            logger.warning(f"Enum {key} already emitted with different items; keeping the first ({previous})")
        return False
    ctx.emitted_enums[key] = values
    return True


def collect_enums(ctx: CompilationContext) -> tuple[dict[str, list[tuple[str, list[str]]]], int]:
    """Per version, the (enum name, values) pairs to emit in encounter order.

    Also returns how many duplicates were skipped.
    """
    per_version: dict[str, list[tuple[str, list[str]]]] = {}
    duplicates = 0
    for schema_file_version, pset in ctx.catalog.iter_definitions():
        version = emit_version(pset, schema_file_version)
        for prop in _leaf_properties(pset):
            ptype = prop.property_type
            if not isinstance(ptype, EnumeratedValue):
                continue
            values = [item.value for item in ptype.items]
            if register_enum(ctx, version, ptype.name, values):
                per_version.setdefault(version, []).append((ptype.name, values))
            elif ptype.name and values:
                duplicates += 1
    return per_version, duplicates


def write_enum_sources(
    per_version: dict[str, list[tuple[str, list[str]]]],
    out_dir: Path,
    language: Language = "csharp",
    file_stem: str = "PropertySet",
    namespace: str = "",
) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for version in sorted(per_version):
        blocks = [build_enum_block(name, values, language) for name, values in per_version[version]]
        source = render_enum_source(language, version, blocks, namespace=namespace)
        path = out_dir / f"{file_stem}{version}Enum{FILE_SUFFIX[language]}"
        path.write_text(source, encoding="utf-8")
        logger.info(f"{version}: {len(blocks)} enumerations -> {path.name}")
        written.append(path)
    return written
