"""
GLB / glTF model importer.
Builds the element tree from the glTF scene graph. Node ``extras`` carry the
BIM metadata and become property categories; bounding boxes come from the
POSITION accessor bounds of each node's mesh in world coordinates.
"""

from typing import Any, Dict, List, Optional
import logging
from pathlib import Path

import numpy as np
import pygltflib
from trimesh import transformations

from .base_importer import BaseImporter
from models.element import Element, PropertyCategory, Property, ModelDocument, BoundingBox
from utils.geometry_utils import transform_bounds, merge_bounds

logger = logging.getLogger(__name__)

ITEM_CATEGORY = "Item"
EXTRAS_CATEGORY = "Extras"


class GLBImporter(BaseImporter):
    """
    Importer for GLB/glTF files.

    The document holds one model whose root item stands for the file; its
    children are the glTF scenes, and below them the node hierarchy.
    """

    SUPPORTED_EXTENSIONS = ('.glb', '.gltf')

    def __init__(self, file_path: str, gltf: Optional[pygltflib.GLTF2] = None):
        """
        Initialize GLB importer.

        Args:
            file_path: Path to GLB/glTF file
            gltf: Already loaded glTF document (skips loading file_path)
        """
        super().__init__(file_path)
        self.gltf = gltf

    def import_model(self) -> ModelDocument:
        """
        Load the file and build its element tree.

        Raises:
            ValueError: File missing or unreadable
        """
        if self.gltf is None:
            path = Path(self.file_path)
            if not path.exists():
                raise ValueError(f"GLB file not found: {self.file_path}")
            logger.info(f"Loading GLB file: {path}")
            try:
                self.gltf = pygltflib.GLTF2.load(str(path.resolve()))
            except Exception as e:
                logger.error(f"Failed to load GLB file: {e}", exc_info=True)
                raise ValueError(f"Failed to load GLB file '{self.file_path}': {e}")

        scenes = []
        for scene_index, scene in enumerate(self.gltf.scenes or []):
            identity = np.identity(4)
            scenes.append(Element(
                display_name=scene.name or f"Scene {scene_index}",
                class_display_name="Scene",
                children=[self.to_element(i, identity) for i in scene.nodes or []],
                categories=self._extras_categories(scene.extras),
            ))

        if not scenes and self.gltf.nodes:
            # No scene list: every node nobody references is a top-level node
            referenced = {c for node in self.gltf.nodes for c in node.children or []}
            top_level = [i for i in range(len(self.gltf.nodes)) if i not in referenced]
            scenes.append(Element(
                display_name="Scene 0",
                class_display_name="Scene",
                children=[self.to_element(i, np.identity(4)) for i in top_level],
            ))

        logger.info(f"Found {len(scenes)} scene(s), {len(self.gltf.nodes or [])} node(s)")
        root = Element(display_name=self.model_name, class_display_name="File", children=scenes)
        self.document = ModelDocument(file_path=str(self.file_path), models=[root])
        return self.document

    def to_element(self, node_index: int, parent_matrix: np.ndarray) -> Element:
        """Wrap a glTF node as an Element."""
        node = self.gltf.nodes[node_index]
        world = parent_matrix @ local_matrix(node)
        return Element(
            display_name=node.name,
            class_display_name="Mesh" if node.mesh is not None else "Node",
            children_provider=lambda: [self.to_element(c, world) for c in node.children or []],
            categories_provider=lambda: self._node_categories(node),
            bounds_provider=lambda: self._subtree_bounds(node_index, world),
        )

    def _node_categories(self, node) -> List[PropertyCategory]:
        item = PropertyCategory(display_name=ITEM_CATEGORY, properties=[
            Property(name="Name", value=node.name),
            Property(name="Type", value="Mesh" if node.mesh is not None else "Node"),
        ])
        if node.mesh is not None:
            mesh = self.gltf.meshes[node.mesh]
            item.properties.append(Property(name="Mesh", value=mesh.name or f"Mesh {node.mesh}"))
        return [item] + self._extras_categories(node.extras)

    def _extras_categories(self, extras: Optional[Dict]) -> List[PropertyCategory]:
        """
        Split an extras dict into categories: scalar entries go to "Extras",
        each dict-valued entry becomes its own category.
        """
        if not isinstance(extras, dict) or not extras:
            return []
        loose = []
        categories = []
        for key, value in extras.items():
            if isinstance(value, dict):
                categories.append(PropertyCategory(
                    display_name=str(key),
                    properties=[_to_property(k, v) for k, v in value.items()],
                ))
            else:
                loose.append(_to_property(key, value))
        if loose:
            categories.insert(0, PropertyCategory(display_name=EXTRAS_CATEGORY, properties=loose))
        return categories

    def _subtree_bounds(self, node_index: int, world: np.ndarray) -> Optional[BoundingBox]:
        """Union of mesh bounds for a node and all of its descendants."""
        boxes = []
        stack = [(node_index, world)]
        while stack:
            index, matrix = stack.pop()
            node = self.gltf.nodes[index]
            if node.mesh is not None:
                boxes.append(self._mesh_bounds(node.mesh, matrix))
            for child in node.children or []:
                stack.append((child, matrix @ local_matrix(self.gltf.nodes[child])))
        return merge_bounds(boxes)

    def _mesh_bounds(self, mesh_index: int, matrix: np.ndarray) -> Optional[BoundingBox]:
        boxes = []
        for primitive in self.gltf.meshes[mesh_index].primitives:
            position = getattr(primitive.attributes, 'POSITION', None)
            if position is None:
                continue
            accessor = self.gltf.accessors[position]
            if accessor.min and accessor.max:
                boxes.append(transform_bounds(accessor.min[:3], accessor.max[:3], matrix))
        return merge_bounds(boxes)


def local_matrix(node) -> np.ndarray:
    """4x4 local transform of a glTF node (matrix or translation/rotation/scale)."""
    if node.matrix:
        # glTF matrices are column-major
        return np.array(node.matrix, dtype=np.float64).reshape(4, 4).T
    matrix = np.identity(4)
    if node.translation:
        matrix = matrix @ transformations.translation_matrix(node.translation)
    if node.rotation:
        x, y, z, w = node.rotation
        matrix = matrix @ transformations.quaternion_matrix([w, x, y, z])
    if node.scale:
        matrix = matrix @ np.diag([*node.scale, 1.0])
    return matrix


def _to_property(key: Any, value: Any) -> Property:
    """Convert an extras entry; dicts and lists of dicts become nested properties."""
    name = str(key)
    if isinstance(value, dict):
        return Property(name=name, children=[_to_property(k, v) for k, v in value.items()])
    if isinstance(value, list) and any(isinstance(v, dict) for v in value):
        return Property(name=name, children=[_to_property(i, v) for i, v in enumerate(value)])
    return Property(name=name, value=value)
