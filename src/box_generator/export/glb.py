"""GLB export via trimesh, one coloured mesh per solid, for web preview."""

import io

import numpy as np
import trimesh

from box_generator.materials import resolve_material
from box_generator.scene import FlatPart


def part_to_trimesh(part: FlatPart) -> trimesh.Trimesh:
    """Convert a flattened part to a trimesh coloured by its material.

    The logical material name resolves to a base colour; metalness and
    roughness are left to the viewer.
    """
    mesh = part.manifold.to_mesh()
    vertices = np.array(mesh.vert_properties[:, :3], dtype=np.float64)
    faces = np.array(mesh.tri_verts, dtype=np.int32)
    rgba = resolve_material(part.solid.material).rgba
    colors = np.tile(np.array(rgba, dtype=np.uint8), (len(faces), 1))
    return trimesh.Trimesh(vertices=vertices, faces=faces, face_colors=colors, process=False)


def export_glb_bytes(parts: list[FlatPart]) -> bytes:
    """Export parts as GLB bytes, one named geometry per part."""
    scene = trimesh.Scene(geometry={part.path: part_to_trimesh(part) for part in parts})
    buffer = io.BytesIO()
    scene.export(buffer, file_type="glb")
    return buffer.getvalue()
