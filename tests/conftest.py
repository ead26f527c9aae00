"""
Pytest configuration and fixtures for exporter tests
"""
import pytest
import sys
from pathlib import Path

# Make the top-level packages importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from models.element import Element, PropertyCategory, Property, BoundingBox


def make_element(name=None, class_name=None, guid=None, children=None, categories=None, bounds=None):
    """Build an in-memory element; categories is {category: {property: value}}."""
    element = Element(
        display_name=name,
        class_display_name=class_name,
        instance_guid=guid,
        children=list(children or []),
        bounding_box=BoundingBox(*bounds) if bounds else None,
    )
    for category_name, props in (categories or {}).items():
        element.add_category(PropertyCategory(
            display_name=category_name,
            properties=[Property(name=k, display_name=k, value=v) for k, v in props.items()],
        ))
    return element


@pytest.fixture
def element_factory():
    """Factory for in-memory elements"""
    return make_element


@pytest.fixture
def two_root_selection():
    """First root: no children, Item.Name=Wall-01. Second root: one child, no properties."""
    first = make_element("Wall-01", "Wall", categories={"Item": {"Name": "Wall-01"}})
    child = make_element("Child", "Geometry")
    second = make_element("Group", "Group", children=[child])
    return [first, second]


@pytest.fixture
def output_dir(tmp_path):
    """Temporary output directory for tests"""
    output = tmp_path / "output"
    output.mkdir()
    return output
