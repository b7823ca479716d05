"""Custom exception hierarchy for the box generator."""


class BoxGeneratorError(Exception):
    """Base exception for all box generator errors."""


class InvalidParamsError(BoxGeneratorError):
    """Bad user input (maps to HTTP 400)."""


class InvalidDimensionError(InvalidParamsError):
    """A length, width, height, thickness or feature size is not usable."""


class UnknownMaterialError(InvalidParamsError):
    """Material selector does not name a known logical material."""


class GeometryError(BoxGeneratorError):
    """Geometry construction failure (maps to HTTP 500)."""


class InvalidProfileError(GeometryError):
    """A degenerate 2D profile reached the extrusion step (programmer error)."""


class ValidationError(BoxGeneratorError):
    """Post-generation validation check failure (maps to HTTP 500)."""
