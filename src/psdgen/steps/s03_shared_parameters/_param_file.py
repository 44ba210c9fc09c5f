"""Read and write tab-separated shared-parameter files.

Row layout (after the fixed header block)::

    PARAM  GUID  NAME  DATATYPE  DATACATEGORY  GROUP  VISIBLE  DESCRIPTION  USERMODIFIABLE
"""

from __future__ import annotations

import codecs
import logging
import uuid
from pathlib import Path

from psdgen.core.models import ParamType, SharedParameterDef
from ._classify import param_type_for

logger = logging.getLogger(__name__)

PARAM_COLUMNS = [
    "GUID", "NAME", "DATATYPE", "DATACATEGORY", "GROUP", "VISIBLE", "DESCRIPTION", "USERMODIFIABLE",
]


def header_lines(group_id: int = 2, group_name: str = "IFC Parameters") -> list[str]:
    return [
        "# This is a Revit shared parameter file.",
        "# Do not edit manually.",
        "*META\tVERSION\tMINVERSION",
        "META\t2\t1",
        "*GROUP\tID\tNAME",
        f"GROUP\t{group_id}\t{group_name}",
        "*PARAM\t" + "\t".join(PARAM_COLUMNS),
    ]


def format_row(param: SharedParameterDef) -> str:
    if not param.guid:
        raise ValueError(f"Parameter {param.name} has no GUID assigned")
    return "\t".join([
        "PARAM",
        param.guid,
        param.name,
        param.param_type.value,
        param.data_category,
        str(param.group_id),
        "1" if param.visible else "0",
        param.description,
        "1" if param.user_modifiable else "0",
    ])


def parse_row(line: str, where: str = "") -> SharedParameterDef | None:
    """One ``PARAM`` row, or None when the row is not a usable definition."""
    tokens = line.rstrip("\r\n").split("\t")
    if not tokens or tokens[0] != "PARAM":
        return None
    if len(tokens) < 9:
        logger.warning(f"{where}: PARAM row with {len(tokens)} columns skipped")
        return None

    _, raw_guid, name, raw_type, category, raw_group, visible, description, user_mod = tokens[:9]
    if not name.strip():
        logger.warning(f"{where}: PARAM row without a name skipped")
        return None
    try:
        guid = str(uuid.UUID(raw_guid.strip()))
    except ValueError:
        logger.warning(f"{where}: {name} has an invalid GUID '{raw_guid}', skipped")
        return None
    try:
        group_id = int(raw_group)
    except ValueError:
        logger.warning(f"{where}: {name} has a non-integer group '{raw_group}', skipped")
        return None
    try:
        param_type = ParamType(raw_type.strip().upper())
    except ValueError:
        param_type = param_type_for(description.strip())
        logger.warning(
            f"{where}: {name} has an unknown data type '{raw_type}', reclassified as {param_type.value}"
        )

    return SharedParameterDef(
        name=name,
        guid=guid,
        param_type=param_type,
        description=description,
        data_category=category,
        group_id=group_id,
        visible=visible.strip() == "1",
        user_modifiable=user_mod.strip() == "1",
    )


_BOM_ENCODINGS = [
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
]


def detect_encoding(path: Path) -> str:
    """Encoding of a shared-parameter file from its byte order mark, UTF-8 without one."""
    with open(path, "rb") as f:
        head = f.read(4)
    for bom, encoding in _BOM_ENCODINGS:
        if head.startswith(bom):
            return encoding
    return "utf-8"


def read_shared_parameter_file(path: Path, table: dict[str, SharedParameterDef]) -> int:
    """Seed ``table`` from an existing file. Returns the number of rows added.

    A name that is already in the table is reported and the first entry kept.
    Files saved as UTF-16 by the host application are read through their BOM;
    undecodable content stops the read with an error, keeping the rows so far.
    """
    path = Path(path)
    added = 0
    try:
        with open(path, encoding=detect_encoding(path)) as f:
            for lineno, line in enumerate(f, 1):
                param = parse_row(line, f"{path.name}:{lineno}")
                if param is None:
                    continue
                if param.name in table:
                    logger.error(f"{path.name}:{lineno}: duplicate parameter {param.name}, keeping the first entry")
                    continue
                table[param.name] = param
                added += 1
    except UnicodeDecodeError as exc:
        logger.error(f"{path.name}: cannot decode seed file ({exc}), kept {added} rows read before the error")
    logger.info(f"Seeded {added} parameters from {path}")
    return added


def write_shared_parameter_file(
    path: Path,
    table: dict[str, SharedParameterDef],
    group_id: int = 2,
    group_name: str = "IFC Parameters",
) -> Path:
    """Write the header block and one row per definition, sorted by name."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = header_lines(group_id, group_name)
    lines += [format_row(table[name]) for name in sorted(table)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
