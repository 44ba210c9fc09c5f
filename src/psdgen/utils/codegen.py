"""Jinja2 rendering of generated sources: enumerations and pset definitions."""

from __future__ import annotations

import keyword
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from jinja2 import Environment, FileSystemLoader

from psdgen.core.models import PropertySetDefinition

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"

Language = Literal["csharp", "python"]

FILE_SUFFIX: dict[str, str] = {"csharp": ".cs", "python": ".py"}

_INVALID_CHARS = re.compile(r"[^0-9A-Za-z_]")
_ALL_DIGITS = re.compile(r"[0-9]+")


def emit_version(pset: PropertySetDefinition, schema_file_version: str) -> str:
    """Version generated code is filed under: a generic IFC4 tag uses the release it was read from."""
    version = pset.ifc_version.upper()
    if version == "IFC4":
        return schema_file_version.upper()
    return version


def enum_identifier(name: str) -> str:
    return _INVALID_CHARS.sub("_", name)


def csharp_string(value: str) -> str:
    """Escape text for a C# string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


@dataclass
class EnumMember:
    identifier: str
    value: str
    number: Optional[int] = None


@dataclass
class EnumBlock:
    name: str
    members: list[EnumMember] = field(default_factory=list)


def sanitize_enum_item(value: str) -> EnumMember:
    """Turn a raw enum value into a legal identifier.

    ``.`` and ``-`` are dropped, a leading digit gets a ``_`` prefix and a
    value made of digits only keeps its number as the member value.
    """
    raw = value.strip()
    number = int(raw) if _ALL_DIGITS.fullmatch(raw) else None
    ident = _INVALID_CHARS.sub("_", raw.replace(".", "").replace("-", ""))
    if ident[:1].isdigit():
        ident = "_" + ident
    return EnumMember(identifier=ident, value=value, number=number)


def build_enum_block(name: str, values: list[str], language: Language = "csharp") -> EnumBlock:
    """Sanitize items, dropping empty and duplicate identifiers."""
    block = EnumBlock(name=enum_identifier(name))
    seen: set[str] = set()
    for value in values:
        member = sanitize_enum_item(value)
        if language == "python" and keyword.iskeyword(member.identifier):
            member.identifier += "_"
        if not member.identifier or member.identifier in seen:
            logger.warning(f"{name}: skipping enum item '{value}' (empty or duplicate identifier)")
            continue
        seen.add(member.identifier)
        block.members.append(member)
    return block


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters["cs_string"] = csharp_string
    return env


def render_template(template_name: str, **context) -> str:
    return _environment().get_template(template_name).render(**context)


def render_enum_source(
    language: Language,
    version: str,
    blocks: list[EnumBlock],
    namespace: str = "",
    title: str = "property set enumerations",
) -> str:
    return render_template(
        f"enum_{language}.template", version=version, enums=blocks, namespace=namespace, title=title
    )
