"""
Element tree data models: Element, PropertyCategory, Property, BoundingBox.

Importers convert a host model into these objects once. Children, property
categories and bounding boxes may be supplied lazily by provider callables;
a provider is allowed to raise, and the export core tolerates that.
"""

from typing import Any, Callable, List, Optional, Tuple
from dataclasses import dataclass, field


ZERO_GUID = "00000000-0000-0000-0000-000000000000"


def is_zero_guid(value: Optional[str]) -> bool:
    """Check whether a GUID string is the all-zero sentinel."""
    if value is None:
        return False
    text = str(value).strip().strip('{}').lower()
    return text == ZERO_GUID or (text != '' and set(text) <= {'0', '-'})


@dataclass
class BoundingBox:
    """Axis-aligned 3D bounding box."""

    min_point: Tuple[float, float, float]
    max_point: Tuple[float, float, float]

    @property
    def center(self) -> Tuple[float, float, float]:
        """Center point (x, y, z) of the box."""
        return tuple((lo + hi) / 2 for lo, hi in zip(self.min_point, self.max_point))


@dataclass
class Property:
    """
    A single named property.

    ``value`` may be None, a primitive, or a zero-argument callable that
    produces the value on demand (and may raise). Nested properties live in
    ``children``.
    """

    name: str
    display_name: Optional[str] = None
    value: Any = None
    children: List['Property'] = field(default_factory=list)

    @property
    def label(self) -> str:
        """Name used for column keys (display name, falling back to internal name)."""
        return self.display_name or self.name or ''

    def display_value(self) -> str:
        """Render the value as a display string ('' when absent)."""
        value = self.value() if callable(self.value) else self.value
        return format_display_value(value)


@dataclass
class PropertyCategory:
    """Named group of properties (a property set / property tab)."""

    display_name: str
    properties: List[Property] = field(default_factory=list)
    name: Optional[str] = None  # Internal name, when the host has one


@dataclass
class Element:
    """Node of the model tree."""

    display_name: Optional[str] = None
    class_display_name: Optional[str] = None
    instance_guid: Optional[str] = None
    bounding_box: Optional[BoundingBox] = None
    children: List['Element'] = field(default_factory=list)
    categories: List[PropertyCategory] = field(default_factory=list)
    children_provider: Optional[Callable[[], List['Element']]] = field(default=None, repr=False)
    categories_provider: Optional[Callable[[], List[PropertyCategory]]] = field(default=None, repr=False)
    bounds_provider: Optional[Callable[[], Optional[BoundingBox]]] = field(default=None, repr=False)

    def get_children(self) -> List['Element']:
        """Ordered child elements. May raise when backed by a provider."""
        if self.children_provider is not None:
            return list(self.children_provider())
        return self.children

    def get_categories(self) -> List[PropertyCategory]:
        """Property categories. May raise when backed by a provider."""
        if self.categories_provider is not None:
            return list(self.categories_provider())
        return self.categories

    def get_bounding_box(self) -> Optional[BoundingBox]:
        """Bounding box, or None when the element has no geometry. May raise."""
        if self.bounds_provider is not None:
            return self.bounds_provider()
        return self.bounding_box

    def add_child(self, child: 'Element'):
        """Append a child element."""
        self.children.append(child)

    def add_category(self, category: PropertyCategory):
        """Append a property category."""
        self.categories.append(category)


@dataclass
class ModelDocument:
    """A loaded document holding one or more models (each a root Element)."""

    file_path: str
    models: List[Element] = field(default_factory=list)

    def root_items(self) -> List[Element]:
        """Top-level items: the children of every model's root item."""
        items = []
        for model in self.models:
            items.extend(model.get_children())
        return items


def format_display_value(value: Any) -> str:
    """Render a host value the way a property grid shows it."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'Yes' if value else 'No'
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, (list, tuple)):
        return ', '.join(format_display_value(v) for v in value if v is not None)
    return str(value).strip()
