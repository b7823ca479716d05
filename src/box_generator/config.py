"""Pydantic models for box parameters, feature variants, and API responses."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, model_validator

from box_generator.materials import RUBBER_COLORS, SELECTABLE_MATERIALS


class TopStyle(str, Enum):
    """Top-edge treatment. The two styles are mutually exclusive."""

    STRAIGHT = "straight"
    STEPPED = "stepped"


class WallFinish(str, Enum):
    """Wall panel surface finish."""

    SOLID = "solid"
    PERFORATED = "perforated"


class HandleStyle(str, Enum):
    """Handle treatment of a wall panel."""

    NONE = "none"
    INTEGRATED = "integrated"  # stamped pill cutout plus reinforcing rim
    BOLT_ON = "bolt_on"  # external plate, tubes, grip and bolts


class BoxParams(BaseModel):
    """Parameters for generating a storage box.

    Immutable once constructed. Dimensions are in millimetres.
    """

    model_config = {"frozen": True}

    length: float = 200.0
    width: float = 200.0
    height: float = 200.0
    thickness: float = 2.0
    step_height: float = 5.0
    step_inset: float = 5.0

    enable_handles: bool = False
    enable_perforation: bool = False
    enable_wheels: bool = False
    enable_ribs: bool = False
    enable_straight_top: bool = True
    enable_rubber_lining: bool = False
    enable_lid: bool = True
    enable_lock: bool = True
    enable_hem: bool = False
    enable_straps: bool = False

    material: str = "steel"
    rubber_color: str = "blue"
    rubber_thickness: float = 2.0
    rubber_height: float = 5.0
    rubber_overhang: float = 0.0

    # Loosens mitre planes and stands lock catches off the wall face
    alignment_epsilon: float = 0.0

    @model_validator(mode="after")
    def check_dimensions(self):
        """Reject non-positive box dimensions."""
        for name in ("length", "width", "height", "thickness"):
            value = getattr(self, name)
            if value <= 0:
                from box_generator.errors import InvalidDimensionError
                raise InvalidDimensionError(f"{name} must be positive, got {value}")
        return self

    @model_validator(mode="after")
    def check_step(self):
        """The stepped fold needs room for a full sheet thickness."""
        from box_generator.errors import InvalidDimensionError
        if self.step_height <= 0 or self.step_inset <= 0:
            raise InvalidDimensionError(
                f"step_height and step_inset must be positive, got "
                f"{self.step_height} and {self.step_inset}"
            )
        if not self.enable_straight_top and min(self.step_height, self.step_inset) <= self.thickness:
            raise InvalidDimensionError(
                f"step_height ({self.step_height}) and step_inset ({self.step_inset}) "
                f"must exceed thickness ({self.thickness}) for a stepped top"
            )
        return self

    @model_validator(mode="after")
    def check_material(self):
        """Validate the material selector."""
        if self.material not in SELECTABLE_MATERIALS:
            from box_generator.errors import UnknownMaterialError
            raise UnknownMaterialError(
                f"material must be one of {list(SELECTABLE_MATERIALS)}, "
                f"got '{self.material}'"
            )
        return self

    @model_validator(mode="after")
    def check_rubber(self):
        """Validate rubber colour and lining sizes."""
        if self.rubber_color not in RUBBER_COLORS:
            from box_generator.errors import InvalidParamsError
            raise InvalidParamsError(
                f"rubber_color must be one of {sorted(RUBBER_COLORS)}, "
                f"got '{self.rubber_color}'"
            )
        if self.enable_rubber_lining:
            from box_generator.errors import InvalidDimensionError
            if self.rubber_thickness <= 0:
                raise InvalidDimensionError(
                    f"rubber_thickness must be positive, got {self.rubber_thickness}"
                )
            if self.rubber_height <= self.rubber_thickness:
                raise InvalidDimensionError(
                    f"rubber_height ({self.rubber_height}) must exceed "
                    f"rubber_thickness ({self.rubber_thickness})"
                )
            if self.rubber_overhang < 0:
                raise InvalidDimensionError(
                    f"rubber_overhang must be non-negative, got {self.rubber_overhang}"
                )
        return self

    @model_validator(mode="after")
    def check_epsilon(self):
        if self.alignment_epsilon < 0:
            from box_generator.errors import InvalidDimensionError
            raise InvalidDimensionError(
                f"alignment_epsilon must be non-negative, got {self.alignment_epsilon}"
            )
        return self

    @property
    def top_style(self) -> TopStyle:
        return TopStyle.STRAIGHT if self.enable_straight_top else TopStyle.STEPPED

    @property
    def wall_finish(self) -> WallFinish:
        return WallFinish.PERFORATED if self.enable_perforation else WallFinish.SOLID

    @property
    def handle_style(self) -> HandleStyle:
        """Handle style of the two handle-bearing (left/right) panels."""
        return HandleStyle.BOLT_ON if self.enable_handles else HandleStyle.INTEGRATED

    @property
    def lock_enabled(self) -> bool:
        """Locks hang off the lid, so they need one."""
        return self.enable_lid and self.enable_lock

    @property
    def straps_enabled(self) -> bool:
        return self.enable_lid and self.enable_straps


class MaterialInfo(BaseModel):
    """Material metadata for API response."""

    name: str
    color: str
    metalness: float
    roughness: float


class GenerateResponse(BaseModel):
    """Metadata returned in X-Build-Metadata header."""

    solid_count: int
    triangle_count: int
    bounding_box: tuple
    variants: dict[str, str]
    warnings: list[str] = []


class ErrorResponse(BaseModel):
    """Error response body."""

    error_type: str
    message: str
    detail: str | None = None
