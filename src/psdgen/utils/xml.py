"""Namespace-agnostic lxml helpers.

PSD files exist both with and without a default namespace, and ifcXML
schemas qualify everything with ``xs:``/``ifc:`` prefixes. Elements are
matched by local name so one reader handles every variant.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional

from lxml import etree


def local_name(elem) -> str:
    """Local part of an element tag; comments and PIs yield ''."""
    if not isinstance(elem.tag, str):
        return ""
    return etree.QName(elem).localname


def strip_prefix(qname: Optional[str]) -> Optional[str]:
    """``ifc:IfcRoot`` -> ``IfcRoot``."""
    if qname is None:
        return None
    return qname.rsplit(":", 1)[-1]


def parse_file(path: Path):
    """Parse an XML file and return its root element.

    Raises ``lxml.etree.XMLSyntaxError`` for malformed documents.
    """
    parser = etree.XMLParser(remove_comments=True, resolve_entities=False)
    return etree.parse(str(path), parser).getroot()


def children(elem, name: str) -> Iterator:
    for child in elem:
        if local_name(child) == name:
            yield child


def child(elem, name: str):
    """First direct child with the given local name, or None."""
    return next(children(elem, name), None)


def descendants(elem, name: str) -> Iterator:
    for node in elem.iter():
        if node is not elem and local_name(node) == name:
            yield node


def descendant(elem, name: str):
    return next(descendants(elem, name), None)


def first_element_child(elem):
    for node in elem:
        if isinstance(node.tag, str):
            return node
    return None


def child_text(elem, name: str) -> Optional[str]:
    """Stripped text of a direct child, None when absent or empty."""
    node = child(elem, name)
    if node is None or node.text is None:
        return None
    text = node.text.strip()
    return text or None
