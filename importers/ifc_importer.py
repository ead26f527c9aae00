"""
IFC (Industry Foundation Classes) model importer.
Builds the element tree from the IFC spatial structure and reads property
sets, element quantities and nested complex properties for every element.
"""

from typing import List, Optional
import logging
import ifcopenshell
from ifcopenshell import geom

from .base_importer import BaseImporter
from models.element import Element, PropertyCategory, Property, ModelDocument, BoundingBox
from utils.geometry_utils import bounds_from_points

logger = logging.getLogger(__name__)

ATTRIBUTE_CATEGORY = "Element"
ATTRIBUTE_NAMES = ("Name", "Description", "ObjectType", "Tag", "LongName", "PredefinedType")


class IFCImporter(BaseImporter):
    """
    Importer for IFC format models.

    The document holds one model whose root item stands for the file; its
    children are the IfcProject entities. Below that the tree follows
    aggregation (IsDecomposedBy) and spatial containment (ContainsElements).
    Children, properties and bounding boxes are read on demand.
    """

    SUPPORTED_EXTENSIONS = ('.ifc',)

    def __init__(self, file_path: str, ifc_file=None, compute_bounds: bool = True):
        """
        Initialize IFC importer.

        Args:
            file_path: Path to IFC file
            ifc_file: Already opened ifcopenshell file (skips opening file_path)
            compute_bounds: Compute bounding boxes from geometry
        """
        super().__init__(file_path)
        self.ifc_file = ifc_file
        self.compute_bounds = compute_bounds
        self.schema_version: Optional[str] = None
        self._geom_settings = None

    def import_model(self) -> ModelDocument:
        """
        Open the IFC file and build its element tree.

        Returns:
            ModelDocument

        Raises:
            ValueError: File missing or unreadable
        """
        if self.ifc_file is None:
            logger.info(f"Opening IFC file: {self.file_path}")
            try:
                self.ifc_file = ifcopenshell.open(self.file_path)
            except FileNotFoundError:
                error_msg = f"IFC file not found: {self.file_path}"
                logger.error(error_msg)
                raise ValueError(error_msg)
            except Exception as e:
                error_msg = (
                    f"Failed to open IFC file '{self.file_path}': {str(e)}\n\n"
                    "Possible causes:\n- File is corrupted or incomplete\n"
                    "- Unsupported IFC schema version\n- File is not a valid IFC file"
                )
                logger.error(error_msg, exc_info=True)
                raise ValueError(error_msg)

        try:
            self.schema_version = self.ifc_file.schema
            logger.info(f"IFC Schema Version: {self.schema_version}")
        except Exception as e:
            logger.warning(f"Could not detect IFC schema version: {e}")

        projects = sorted(self.ifc_file.by_type("IfcProject"), key=lambda e: e.id())
        logger.info(f"Found {len(projects)} IfcProject element(s)")

        root = Element(
            display_name=self.model_name,
            class_display_name="File",
            children=[self.to_element(project) for project in projects],
        )
        self.document = ModelDocument(file_path=str(self.file_path), models=[root])
        return self.document

    def to_element(self, entity) -> Element:
        """Wrap an IFC entity as an Element with lazy children, properties and bounds."""
        return Element(
            display_name=getattr(entity, 'Name', None),
            class_display_name=entity.is_a(),
            instance_guid=getattr(entity, 'GlobalId', None),
            children_provider=lambda: [self.to_element(c) for c in self._child_entities(entity)],
            categories_provider=lambda: self._extract_categories(entity),
            bounds_provider=(lambda: self._extract_bounds(entity)) if self.compute_bounds else None,
        )

    def _child_entities(self, entity) -> list:
        """Aggregated then spatially contained entities, in relationship order."""
        children = []
        for rel in getattr(entity, 'IsDecomposedBy', None) or []:
            children.extend(rel.RelatedObjects or [])
        for rel in getattr(entity, 'ContainsElements', None) or []:
            children.extend(rel.RelatedElements or [])
        return children

    def _extract_categories(self, entity) -> List[PropertyCategory]:
        """Attribute category followed by every property set and quantity set."""
        categories = [self._attribute_category(entity)]

        type_objects = []
        for rel in getattr(entity, 'IsDefinedBy', None) or []:
            if rel.is_a("IfcRelDefinesByProperties"):
                category = self._definition_category(rel.RelatingPropertyDefinition)
                if category:
                    categories.append(category)
            elif rel.is_a("IfcRelDefinesByType"):
                # IFC2X3 links the element type through IsDefinedBy
                type_objects.append(rel.RelatingType)

        # IFC4 links it through IsTypedBy
        for rel in getattr(entity, 'IsTypedBy', None) or []:
            type_objects.append(rel.RelatingType)

        # Property sets attached to the element type
        for type_object in type_objects:
            for definition in getattr(type_object, 'HasPropertySets', None) or []:
                category = self._definition_category(definition)
                if category:
                    categories.append(category)

        return categories

    def _attribute_category(self, entity) -> PropertyCategory:
        properties = [
            Property(name="GUID", display_name="GUID", value=getattr(entity, 'GlobalId', None)),
            Property(name="Type", display_name="Type", value=entity.is_a()),
        ]
        for attribute in ATTRIBUTE_NAMES:
            properties.append(Property(
                name=attribute,
                display_name=attribute,
                value=lambda a=attribute: getattr(entity, a, None),
            ))
        return PropertyCategory(display_name=ATTRIBUTE_CATEGORY, properties=properties)

    def _definition_category(self, definition) -> Optional[PropertyCategory]:
        if definition is None:
            return None
        if definition.is_a("IfcPropertySet"):
            members = definition.HasProperties or []
        elif definition.is_a("IfcElementQuantity"):
            members = definition.Quantities or []
        else:
            return None
        return PropertyCategory(
            display_name=definition.Name or definition.is_a(),
            name=definition.is_a(),
            properties=[self._to_property(p) for p in members],
        )

    def _to_property(self, prop) -> Property:
        """
        Convert an IFC property or quantity.

        Supports:
        - IfcPropertySingleValue
        - IfcPropertyEnumeratedValue
        - IfcPropertyListValue
        - IfcPropertyBoundedValue (lower/upper as nested properties)
        - IfcComplexProperty / IfcPhysicalComplexQuantity (nested)
        - IfcPhysicalSimpleQuantity subtypes
        """
        name = prop.Name
        kind = prop.is_a()

        if kind == "IfcPropertySingleValue":
            return Property(name=name, value=lambda: _unwrap(prop.NominalValue))
        if kind == "IfcPropertyEnumeratedValue":
            return Property(name=name, value=lambda: [_unwrap(v) for v in prop.EnumerationValues or []])
        if kind == "IfcPropertyListValue":
            return Property(name=name, value=lambda: [_unwrap(v) for v in prop.ListValues or []])
        if kind == "IfcPropertyBoundedValue":
            return Property(name=name, children=[
                Property(name="LowerBoundValue", display_name="Lower Bound",
                         value=lambda: _unwrap(prop.LowerBoundValue)),
                Property(name="UpperBoundValue", display_name="Upper Bound",
                         value=lambda: _unwrap(prop.UpperBoundValue)),
            ])
        if kind == "IfcComplexProperty":
            return Property(name=name, children=[self._to_property(p) for p in prop.HasProperties or []])
        if kind == "IfcPhysicalComplexQuantity":
            return Property(name=name, children=[self._to_property(q) for q in prop.HasQuantities or []])
        if prop.is_a("IfcPhysicalSimpleQuantity"):
            # Name, Description, Unit, <value>
            return Property(name=name, value=lambda: prop[3])

        logger.debug(f"Unsupported property type {kind} for '{name}'")
        return Property(name=name)

    def _extract_bounds(self, entity) -> Optional[BoundingBox]:
        """World-space bounding box from the element's geometry."""
        if not getattr(entity, 'Representation', None):
            return None
        shape = geom.create_shape(self._settings(), entity)
        return bounds_from_points(shape.geometry.verts)

    def _settings(self):
        if self._geom_settings is None:
            settings = geom.settings()
            if hasattr(settings, 'USE_WORLD_COORDS'):
                settings.set(settings.USE_WORLD_COORDS, True)
            else:
                settings.set('use-world-coords', True)
            self._geom_settings = settings
        return self._geom_settings


def _unwrap(value):
    """Plain Python value of an IFC measure/label."""
    if value is None:
        return None
    return getattr(value, 'wrappedValue', value)
