"""FastAPI application with box generation endpoints."""

import json
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from box_generator.assembly.box import BoxBuilder, fitted_handle_style, variant_tags
from box_generator.config import BoxParams, ErrorResponse, GenerateResponse, MaterialInfo
from box_generator.dimensions import resolve_config
from box_generator.errors import (
    BoxGeneratorError,
    GeometryError,
    InvalidParamsError,
)
from box_generator.export.glb import export_glb_bytes
from box_generator.export.stl import export_stl_bytes
from box_generator.materials import RUBBER_COLORS, list_materials
from box_generator.settings import Settings

logger = logging.getLogger(__name__)

# Settings
settings = Settings()
logging.getLogger("box_generator").setLevel(settings.log_level.upper())

# Create app
app = FastAPI(title="Sheet-Metal Box Generator", version="0.1.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Build-Metadata"],
)


# Error handlers
@app.exception_handler(InvalidParamsError)
async def invalid_params_handler(request: Request, exc: InvalidParamsError):
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(
            error_type=type(exc).__name__,
            message=str(exc),
        ).model_dump(),
    )


@app.exception_handler(GeometryError)
async def geometry_error_handler(request: Request, exc: GeometryError):
    logger.exception("Geometry error during generation")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error_type=type(exc).__name__,
            message=str(exc),
        ).model_dump(),
    )


@app.exception_handler(BoxGeneratorError)
async def general_error_handler(request: Request, exc: BoxGeneratorError):
    logger.exception("Box generator error")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error_type=type(exc).__name__,
            message=str(exc),
        ).model_dump(),
    )


# Dependency injection
def get_builder() -> BoxBuilder:
    """Provide a BoxBuilder instance. Overridable in tests."""
    return BoxBuilder(settings)


# API routes (sync def for CPU-bound work)
@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/materials")
def get_materials():
    """List selectable materials and rubber colours."""
    return {
        "materials": [MaterialInfo(**m).model_dump() for m in list_materials()],
        "rubber_colors": {name: f"#{color:06X}" for name, color in RUBBER_COLORS.items()},
    }


@app.post("/dimensions")
def get_dimensions(params: BoxParams):
    """Derived dimensions and variant tags, without building geometry."""
    params, dims = resolve_config(params)
    handle_style, problem = fitted_handle_style(params, dims)
    return {
        "variants": variant_tags(params, handle_style),
        "dimensions": dims.to_dict(),
        "warnings": [f"Handles dropped: {problem}"] if problem else [],
    }


@app.post("/generate")
def generate(params: BoxParams, builder: BoxBuilder = Depends(get_builder)):
    """Generate a box and return GLB bytes for 3D preview.

    Returns binary GLB with X-Build-Metadata header containing solid and
    triangle counts, bounding box, variants and warnings.
    """
    result = builder.build(params)
    glb_bytes = export_glb_bytes(result.parts)

    metadata = GenerateResponse(
        solid_count=len(result.parts),
        triangle_count=result.triangle_count,
        bounding_box=tuple(result.bounding_box),
        variants=result.variants,
        warnings=result.warnings,
    )

    return Response(
        content=glb_bytes,
        media_type="application/octet-stream",
        headers={"X-Build-Metadata": json.dumps(metadata.model_dump(mode="json"))},
    )


@app.post("/export/stl")
def export_stl(params: BoxParams, builder: BoxBuilder = Depends(get_builder)):
    """Generate a box and return one STL file with every solid."""
    result = builder.build(params)
    stl_bytes = export_stl_bytes(result.parts)

    filename = f"box_{params.length:g}x{params.width:g}x{params.height:g}.stl"

    return Response(
        content=stl_bytes,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
