"""STL export via trimesh with shared vertices for watertight output."""

from __future__ import annotations

import io
import json
import re
from pathlib import Path

import numpy as np
import trimesh
from manifold3d import Manifold

from box_generator.errors import GeometryError
from box_generator.geometry.booleans import compose_disjoint
from box_generator.scene import FlatPart


def manifold_to_trimesh(solid: Manifold) -> trimesh.Trimesh:
    """Convert a Manifold to a trimesh.Trimesh with shared vertices.

    Uses vert_properties[:, :3] for vertices and tri_verts for faces.
    """
    mesh = solid.to_mesh()
    vertices = np.array(mesh.vert_properties[:, :3], dtype=np.float64)
    faces = np.array(mesh.tri_verts, dtype=np.int32)
    return trimesh.Trimesh(vertices=vertices, faces=faces, process=False)


def export_stl_bytes(parts: list[FlatPart]) -> bytes:
    """Export every part as one binary STL.

    Parts are composed without boolean resolution, so touching sheets
    stay separate shells.
    """
    combined = compose_disjoint([part.manifold for part in parts])
    if combined.is_empty():
        raise GeometryError("Nothing to export")
    tmesh = manifold_to_trimesh(combined)
    buffer = io.BytesIO()
    tmesh.export(buffer, file_type="stl")
    return buffer.getvalue()


def part_filename(index: int, part: FlatPart) -> str:
    """'03_walls_panel_front_sheet.stl' style name for one part."""
    stem = re.sub(r"[^A-Za-z0-9]+", "_", part.path.split("/", 1)[-1]).strip("_")
    return f"{index:02d}_{stem}.stl"


def export_parts_to_directory(
    result: "BuildResult",  # noqa: F821
    output_dir: str | Path,
) -> list[str]:
    """Export a built box as one STL file per solid.

    Creates:
    - 01_base.stl, 02_walls_panel_front_sheet.stl, ...
    - manifest.json with materials, dimensions and metadata

    Args:
        result: BuildResult from BoxBuilder.build()
        output_dir: Directory to write files to (created if needed).

    Returns:
        List of created file paths (relative to output_dir).
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    created: list[str] = []
    entries = []
    for i, part in enumerate(result.parts, start=1):
        filename = part_filename(i, part)
        stl_bytes = export_stl_bytes([part])
        (out / filename).write_bytes(stl_bytes)
        created.append(filename)
        entries.append({
            "file": filename,
            "path": part.path,
            "material": part.solid.material,
            "triangles": part.manifold.num_tri(),
        })

    manifest = {
        "num_parts": len(result.parts),
        "triangle_count": result.triangle_count,
        "bounding_box": list(result.bounding_box),
        "dimensions": result.dims.to_dict(),
        "parts": entries,
        "warnings": result.warnings,
        **result.metadata,
    }
    manifest_path = "manifest.json"
    (out / manifest_path).write_text(json.dumps(manifest, indent=2))
    created.append(manifest_path)

    return created
