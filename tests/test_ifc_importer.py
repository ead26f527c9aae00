"""
Tests for the IFC importer, using an IFC file built in memory
"""
import logging

import pytest

ifcopenshell = pytest.importorskip("ifcopenshell")
import ifcopenshell.guid

from core.property_extractor import PropertyExtractor
from core.tree_flattener import flatten_items
from importers.ifc_importer import IFCImporter


def _new_id():
    return ifcopenshell.guid.new()


@pytest.fixture
def ifc_model():
    f = ifcopenshell.file(schema="IFC4")
    project = f.create_entity("IfcProject", GlobalId=_new_id(), Name="Demo Project")
    site = f.create_entity("IfcSite", GlobalId=_new_id(), Name="Site")
    building = f.create_entity("IfcBuilding", GlobalId=_new_id(), Name="Building A")
    storey = f.create_entity("IfcBuildingStorey", GlobalId=_new_id(), Name="Level 1")
    wall = f.create_entity("IfcWall", GlobalId=_new_id(), Name="Wall-01")

    f.create_entity("IfcRelAggregates", GlobalId=_new_id(), RelatingObject=project, RelatedObjects=[site])
    f.create_entity("IfcRelAggregates", GlobalId=_new_id(), RelatingObject=site, RelatedObjects=[building])
    f.create_entity("IfcRelAggregates", GlobalId=_new_id(), RelatingObject=building, RelatedObjects=[storey])
    f.create_entity("IfcRelContainedInSpatialStructure", GlobalId=_new_id(),
                    RelatedElements=[wall], RelatingStructure=storey)

    fire_rating = f.create_entity("IfcPropertySingleValue", Name="FireRating",
                                  NominalValue=f.createIfcLabel("EI60"))
    acoustic = f.create_entity("IfcPropertySingleValue", Name="AcousticRating")
    layer = f.create_entity("IfcComplexProperty", Name="Layer", UsageName="Layer", HasProperties=[
        f.create_entity("IfcPropertySingleValue", Name="Thickness",
                        NominalValue=f.createIfcLengthMeasure(0.2)),
    ])
    pset = f.create_entity("IfcPropertySet", GlobalId=_new_id(), Name="Pset_WallCommon",
                           HasProperties=[fire_rating, acoustic, layer])
    f.create_entity("IfcRelDefinesByProperties", GlobalId=_new_id(),
                    RelatedObjects=[wall], RelatingPropertyDefinition=pset)

    quantities = f.create_entity("IfcElementQuantity", GlobalId=_new_id(), Name="Qto_WallBaseQuantities",
                                 Quantities=[f.create_entity("IfcQuantityLength", Name="Length", LengthValue=5.0)])
    f.create_entity("IfcRelDefinesByProperties", GlobalId=_new_id(),
                    RelatedObjects=[wall], RelatingPropertyDefinition=quantities)

    return f, wall


class TestIFCImporter:
    """Spatial tree and property sets"""

    def test_tree_follows_spatial_structure(self, ifc_model):
        f, _ = ifc_model
        document = IFCImporter("demo.ifc", ifc_file=f, compute_bounds=False).import_model()

        roots = document.root_items()
        assert [r.display_name for r in roots] == ["Demo Project"]

        items = list(flatten_items(roots))
        assert [i.display_name for i in items] == ["Demo Project", "Site", "Building A", "Level 1", "Wall-01"]
        assert items[-1].class_display_name == "IfcWall"
        assert document.models[0].display_name == "demo.ifc"

    def test_wall_row(self, ifc_model):
        f, wall = ifc_model
        document = IFCImporter("demo.ifc", ifc_file=f, compute_bounds=False).import_model()
        wall_element = list(flatten_items(document.root_items()))[-1]
        known = set()

        row = PropertyExtractor(logging.getLogger("test")).extract(wall_element, known)

        assert row.guid == wall.GlobalId
        assert row.values["Element.Type"] == "IfcWall"
        assert row.values["Element.Name"] == "Wall-01"
        assert row.values["Pset_WallCommon.FireRating"] == "EI60"
        assert row.values["Pset_WallCommon.Layer.Thickness"] == "0.2"
        assert row.values["Qto_WallBaseQuantities.Length"] == "5"
        assert "Pset_WallCommon.AcousticRating" not in row.values
        assert "Pset_WallCommon.AcousticRating" in known
        assert (row.x, row.y, row.z) == ("", "", "")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match="not found|Failed to open"):
            IFCImporter(str(tmp_path / "missing.ifc")).import_model()

    def test_children_keep_relationship_order(self):
        f = ifcopenshell.file(schema="IFC4")
        project = f.create_entity("IfcProject", GlobalId=_new_id(), Name="Project")
        storey = f.create_entity("IfcBuildingStorey", GlobalId=_new_id(), Name="Level 1")
        first = f.create_entity("IfcWall", GlobalId=_new_id(), Name="Created First")
        second = f.create_entity("IfcWall", GlobalId=_new_id(), Name="Created Second")
        f.create_entity("IfcRelAggregates", GlobalId=_new_id(), RelatingObject=project, RelatedObjects=[storey])
        f.create_entity("IfcRelContainedInSpatialStructure", GlobalId=_new_id(),
                        RelatedElements=[second, first], RelatingStructure=storey)

        document = IFCImporter("order.ifc", ifc_file=f, compute_bounds=False).import_model()
        names = [i.display_name for i in flatten_items(document.root_items())]

        assert names == ["Project", "Level 1", "Created Second", "Created First"]

    def test_ifc2x3_type_property_sets(self):
        f = ifcopenshell.file(schema="IFC2X3")
        project = f.create_entity("IfcProject", GlobalId=_new_id(), Name="Project")
        storey = f.create_entity("IfcBuildingStorey", GlobalId=_new_id(), Name="Level 1")
        wall = f.create_entity("IfcWall", GlobalId=_new_id(), Name="Wall-01")
        f.create_entity("IfcRelAggregates", GlobalId=_new_id(), RelatingObject=project, RelatedObjects=[storey])
        f.create_entity("IfcRelContainedInSpatialStructure", GlobalId=_new_id(),
                        RelatedElements=[wall], RelatingStructure=storey)

        type_pset = f.create_entity("IfcPropertySet", GlobalId=_new_id(), Name="Pset_WallCommon", HasProperties=[
            f.create_entity("IfcPropertySingleValue", Name="IsExternal",
                            NominalValue=f.createIfcBoolean(True)),
        ])
        wall_type = f.create_entity("IfcWallType", GlobalId=_new_id(), Name="Basic Wall",
                                    HasPropertySets=[type_pset], PredefinedType="STANDARD")
        f.create_entity("IfcRelDefinesByType", GlobalId=_new_id(),
                        RelatedObjects=[wall], RelatingType=wall_type)

        document = IFCImporter("legacy.ifc", ifc_file=f, compute_bounds=False).import_model()
        wall_element = list(flatten_items(document.root_items()))[-1]
        row = PropertyExtractor(logging.getLogger("test")).extract(wall_element, set())

        assert row.values["Pset_WallCommon.IsExternal"] == "Yes"
