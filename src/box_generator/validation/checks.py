"""Validation checks for generated box geometry."""

from __future__ import annotations

import numpy as np

from box_generator.errors import ValidationError
from box_generator.export.stl import manifold_to_trimesh
from box_generator.scene import Assembly, FlatPart, Solid

REQUIRED_PANELS = 4
REQUIRED_EDGES = 4


def structure_report(root: Assembly) -> dict:
    """Counts of the parts every box must have, plus tree-shape check."""
    base = root.find("base")
    walls = root.find("walls")
    edges = root.find("edges")
    return {
        "base_count": 1 if isinstance(base, Solid) else 0,
        "panel_count": (
            sum(1 for n in walls.nodes if isinstance(n.child, Assembly))
            if isinstance(walls, Assembly) else 0
        ),
        "edge_count": (
            sum(1 for n in edges.nodes if isinstance(n.child, Solid) and len(n.child.trims) == 2)
            if isinstance(edges, Assembly) else 0
        ),
        "is_tree": root.is_tree(),
    }


def check_structure(root: Assembly) -> None:
    """Raise ValidationError unless the box has one base, four panels and four mitred edges."""
    report = structure_report(root)
    problems = []
    if report["base_count"] != 1:
        problems.append("missing base")
    if report["panel_count"] != REQUIRED_PANELS:
        problems.append(f"{report['panel_count']} wall panels")
    if report["edge_count"] != REQUIRED_EDGES:
        problems.append(f"{report['edge_count']} mitred edges")
    if not report["is_tree"]:
        problems.append("scene graph shares nodes")
    if problems:
        raise ValidationError(f"Box '{root.name}' is malformed: {', '.join(problems)}")


def validate_part(part: FlatPart) -> dict:
    """Run the per-solid checklist on one flattened part."""
    results = {}
    tmesh = manifold_to_trimesh(part.manifold)

    results["is_watertight"] = tmesh.is_watertight
    vol = part.manifold.volume()
    results["volume"] = float(vol)
    results["positive_volume"] = vol > 0
    results["triangle_count"] = len(tmesh.faces)
    areas = tmesh.area_faces
    results["no_degenerate_triangles"] = bool(np.all(areas > 1e-10))
    return results


def validate_scene(root: Assembly, parts: list[FlatPart], max_triangles: int) -> dict:
    """Run the validation checklist on a built box.

    Returns a dict with structural counts, per-part results and overall
    pass/fail.
    """
    results = structure_report(root)
    per_part = {part.path: validate_part(part) for part in parts}
    results["parts"] = per_part

    tri_count = sum(r["triangle_count"] for r in per_part.values())
    results["triangle_count"] = tri_count
    results["triangle_count_ok"] = 0 < tri_count <= max_triangles
    results["all_positive_volume"] = all(r["positive_volume"] for r in per_part.values())
    results["all_watertight"] = all(r["is_watertight"] for r in per_part.values())

    results["pass"] = (
        results["base_count"] == 1
        and results["panel_count"] == REQUIRED_PANELS
        and results["edge_count"] == REQUIRED_EDGES
        and results["is_tree"]
        and results["all_positive_volume"]
        and results["triangle_count_ok"]
    )
    return results
