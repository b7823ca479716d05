"""BoxBuilder orchestrator and BuildResult dataclass."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Mapping

from box_generator.components.edges import compose_edges, compose_lining
from box_generator.components.handles import handle_feature
from box_generator.components.lid import compose_lid, compose_lock_catches, compose_straps
from box_generator.components.panel import compose_handles, compose_walls
from box_generator.components.ribs import rib_layout, rib_solids
from box_generator.components.sides import make_sides
from box_generator.components.wheel import compose_wheels
from box_generator.config import BoxParams, HandleStyle
from box_generator.dimensions import DerivedDimensions, resolve_config
from box_generator.errors import GeometryError
from box_generator.geometry.clipping import MiterPlaneSet
from box_generator.geometry.primitives import box
from box_generator.geometry.transforms import translate
from box_generator.scene import Assembly, FlatPart, Node, Solid
from box_generator.settings import Settings
from box_generator.validation.checks import check_structure

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Result of building a box, including metadata."""

    assembly: Assembly
    params: BoxParams
    dims: DerivedDimensions
    parts: list[FlatPart]
    triangle_count: int
    bounding_box: tuple
    warnings: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def variants(self) -> dict[str, str]:
        """Variant tags actually built, after any dropped features."""
        return self.metadata.get("variants") or variant_tags(self.params)


def variant_tags(params: BoxParams, handle_style: HandleStyle | None = None) -> dict[str, str]:
    """The closed variant tags selected by the feature flags."""
    if handle_style is None:
        handle_style = params.handle_style
    return {
        "top_style": params.top_style.value,
        "wall_finish": params.wall_finish.value,
        "handle_style": handle_style.value,
    }


def fitted_handle_style(params: BoxParams, dims: DerivedDimensions) -> tuple[HandleStyle, str | None]:
    """Handle style that will actually be built, plus why the requested one was dropped."""
    problem = handle_feature(params.handle_style).fit_problem(dims)
    if problem is None:
        return params.handle_style, None
    return HandleStyle.NONE, problem


def base_plate(params: BoxParams, dims: DerivedDimensions) -> Solid:
    """Floor sheet; its top face is the Z=0 plane the walls stand on."""
    floor = translate(box(dims.length, dims.width, dims.thickness), z=-dims.thickness)
    return Solid("base", floor, params.material)


class BoxBuilder:
    """Orchestrator that builds boxes from parameters.

    Responsibility: resolve dimensions, pick the feature variants, call the
    component composers and assemble the scene graph. Does NOT do geometry
    construction itself.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def build(self, params: BoxParams | Mapping[str, Any] | None = None) -> BuildResult:
        """Build a box from parameters.

        1. Validate params and derive dimensions
        2. Base, walls and mitred edges
        3. Optional features in a fixed order
        4. Structural checks, flatten, triangle budget
        5. Return BuildResult with metadata
        """
        start_time = time.time()
        warnings: list[str] = []

        # 1. Everything that can fail on user input fails here
        params, dims = resolve_config(params)
        handle_style, problem = fitted_handle_style(params, dims)
        if problem is not None:
            logger.warning("Dropping %s handles: %s", params.handle_style.value, problem)
            warnings.append(f"Handles dropped: {problem}")
        sides = make_sides(params, dims, handle_style)
        miters = MiterPlaneSet(dims.length, dims.width, dims.alignment_epsilon)

        # 2. Core structure
        nodes = [
            Node(base_plate(params, dims)),
            Node(compose_walls(sides, params, dims)),
            Node(compose_edges(sides, params, dims, miters)),
        ]

        # 3. Optional features
        if params.enable_ribs:
            ribs = rib_solids(rib_layout(sides, dims), sides, dims, miters, params.material)
            if ribs is None:
                logger.debug("Wall too short for ribs (%.1fmm)", dims.total_height)
                warnings.append("Ribs enabled but the wall is shorter than one rib interval")
            else:
                nodes.append(Node(ribs))
        if params.enable_rubber_lining:
            nodes.append(Node(compose_lining(sides, params, dims, miters)))
        handles = compose_handles(sides, params, dims)
        if handles is not None:
            nodes.append(Node(handles))
        if params.enable_wheels:
            nodes.append(Node(compose_wheels(params, dims)))
        if params.enable_lid:
            nodes.append(compose_lid(params, dims))
        if params.lock_enabled:
            nodes.append(Node(compose_lock_catches(params, dims)))
        if params.straps_enabled:
            straps = compose_straps(params, dims)
            if straps is None:
                warnings.append("Straps ignored: the box is too small to hold them")
            else:
                nodes.append(Node(straps))
        if params.enable_lock and not params.enable_lid:
            warnings.append("Lock ignored: it needs the lid")
        if params.enable_straps and not params.enable_lid:
            warnings.append("Straps ignored: they need the lid")

        root = Assembly("box", tuple(nodes))

        # 4. Validate and flatten
        check_structure(root)
        parts = root.flatten()
        if not parts:
            raise GeometryError("Box produced no geometry after trimming")
        tri_count = sum(part.manifold.num_tri() for part in parts)

        if tri_count > self.settings.max_triangles:
            warnings.append(
                f"Triangle count {tri_count} exceeds budget of {self.settings.max_triangles}"
            )
            logger.warning(
                "Box has %d triangles (budget %d)", tri_count, self.settings.max_triangles
            )

        bbox = _bounding_box(parts)
        elapsed = time.time() - start_time
        variants = variant_tags(params, handle_style)

        logger.info(
            "Built %gx%gx%g box (%s) with %d nodes, %d solids, %d triangles in %dms",
            dims.length, dims.width, dims.total_height,
            ", ".join(variants.values()),
            root.node_count(), len(parts), tri_count, round(elapsed * 1000),
        )

        return BuildResult(
            assembly=root,
            params=params,
            dims=dims,
            parts=parts,
            triangle_count=tri_count,
            bounding_box=bbox,
            warnings=warnings,
            metadata={
                "variants": variants,
                "node_count": root.node_count(),
                "solid_count": len(parts),
                "total_height": dims.total_height,
                "generation_time_ms": round(elapsed * 1000),
            },
        )


def _bounding_box(parts: list[FlatPart]) -> tuple:
    """(min_x, min_y, min_z, max_x, max_y, max_z) over all parts."""
    boxes = [part.manifold.bounding_box() for part in parts]
    return (
        min(b[0] for b in boxes),
        min(b[1] for b in boxes),
        min(b[2] for b in boxes),
        max(b[3] for b in boxes),
        max(b[4] for b in boxes),
        max(b[5] for b in boxes),
    )
