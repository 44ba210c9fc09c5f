"""Shared pytest markers for step tests."""

import pytest


def _has_ifcopenshell() -> bool:
    try:
        import ifcopenshell  # noqa: F401
        return True
    except ImportError:
        return False


needs_ifc = pytest.mark.skipif(
    not _has_ifcopenshell(), reason="ifcopenshell not installed"
)
