"""Derived box dimensions.

DerivedDimensions turns a validated BoxParams into every secondary
dimension the components need (handle plate, tubes, ribs, rubber lining,
wheels, lid seat). It is computed once per build and passed explicitly to
each component; nothing downstream recomputes or mutates it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping, NamedTuple

from box_generator.config import BoxParams

# Handle plate caps (mm)
BASE_PLATE_MAX_WIDTH = 130.0
BASE_PLATE_MAX_HEIGHT = 95.0

# Handle centre sits this fraction of the panel height below the panel top
HANDLE_DROP_FRACTION = 0.3

# Integrated handle cutout relative to the (virtual) base plate
INTEGRATED_WIDTH_FACTOR = 0.8
INTEGRATED_HEIGHT_FACTOR = 0.3
RIM_THICKNESS = 4.0
RIM_DEPTH = 6.0

# Ribs
RIB_DEPTH = 4.0
RIB_WIDTH = 16.0
RIB_INTERVAL = 200.0

# Castor wheels
WHEEL_DIAMETER = 42.0
WHEEL_THICKNESS = 10.0
WHEEL_OFFSET = 30.0


@dataclass(frozen=True)
class DerivedDimensions:
    """All secondary dimensions of one box build."""

    length: float
    width: float
    requested_height: float
    total_height: float  # reference height for handle and rib placement
    thickness: float
    step_height: float
    step_inset: float
    rim_height: float  # height of the top edge piece
    rim_top_z: float  # lid seat / top of the rim

    base_plate_width: float
    base_plate_height: float
    base_plate_thickness: float
    base_plate_depth: float
    handle_width: float
    handle_height: float
    handle_tube_radius: float
    rubber_grip_thickness: float
    handle_center_z: float

    integrated_width: float
    integrated_height: float
    rim_thickness: float
    rim_depth: float

    rib_depth: float
    rib_width: float
    rib_interval: float

    lining_thickness: float
    lining_height: float
    lining_overhang: float
    lining_vertical_offset: float

    wheel_diameter: float
    wheel_thickness: float
    wheel_offset: float

    alignment_epsilon: float

    @classmethod
    def from_params(cls, params: BoxParams) -> DerivedDimensions:
        """Compute every derived dimension from validated params."""
        width = params.width
        step_addend = 2 * params.step_height + 2 * params.step_inset

        straight = params.enable_straight_top
        total_height = params.height + (step_addend if straight else 0.0)

        base_plate_width = min(width * 0.6, BASE_PLATE_MAX_WIDTH)
        base_plate_height = min(width * 0.45, BASE_PLATE_MAX_HEIGHT)

        return cls(
            length=params.length,
            width=width,
            requested_height=params.height,
            total_height=total_height,
            thickness=params.thickness,
            step_height=params.step_height,
            step_inset=params.step_inset,
            rim_height=step_addend,
            rim_top_z=params.height + step_addend,
            base_plate_width=base_plate_width,
            base_plate_height=base_plate_height,
            base_plate_thickness=max(width * 0.015, 3.0),
            base_plate_depth=max(width * 0.05, 10.0),
            handle_width=base_plate_width * 0.75,
            handle_height=base_plate_height * 0.4,
            handle_tube_radius=max(width * 0.015, 3.0),
            rubber_grip_thickness=max(width * 0.005, 1.0),
            handle_center_z=total_height * (1.0 - HANDLE_DROP_FRACTION),
            integrated_width=base_plate_width * INTEGRATED_WIDTH_FACTOR,
            integrated_height=base_plate_height * INTEGRATED_HEIGHT_FACTOR,
            rim_thickness=RIM_THICKNESS,
            rim_depth=RIM_DEPTH,
            rib_depth=RIB_DEPTH,
            rib_width=RIB_WIDTH,
            rib_interval=RIB_INTERVAL,
            lining_thickness=params.rubber_thickness,
            lining_height=params.rubber_height,
            lining_overhang=params.rubber_overhang,
            lining_vertical_offset=0.0 if straight else step_addend,
            wheel_diameter=WHEEL_DIAMETER,
            wheel_thickness=WHEEL_THICKNESS,
            wheel_offset=WHEEL_OFFSET,
            alignment_epsilon=params.alignment_epsilon,
        )

    @property
    def panel_height(self) -> float:
        """Top of the wall sheets, where the edge piece takes over."""
        return self.rim_top_z - self.rim_height

    @property
    def lining_z(self) -> float:
        """Z of the rubber lining attachment edge (always the rim top)."""
        return self.total_height + self.lining_vertical_offset

    @property
    def handle_panel_width(self) -> float:
        """Handle-bearing panels are the left/right walls, spanning the box width."""
        return self.width

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


class ResolvedConfig(NamedTuple):
    """Validated configuration plus its derived dimensions."""

    params: BoxParams
    dims: DerivedDimensions


def resolve_config(raw: BoxParams | Mapping[str, Any] | None = None) -> ResolvedConfig:
    """Validate raw parameters, apply defaults and derive dimensions.

    Raises InvalidDimensionError / UnknownMaterialError before any
    geometry is built. Whether a handle fits the derived panel is left to
    the builder, which drops it with a warning.
    """
    if raw is None:
        params = BoxParams()
    elif isinstance(raw, BoxParams):
        params = raw
    else:
        params = BoxParams(**dict(raw))

    return ResolvedConfig(params, DerivedDimensions.from_params(params))
