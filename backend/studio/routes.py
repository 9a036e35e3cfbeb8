"""
API routes for the live preview.

Exports are rendered locally by the export CLI, never by this service.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from studio.design_templates import FILTER_ORDER, HEIGHT, WIDTH, list_scenes
from studio.models import DesignParameters, DesignSettings, StyleDescriptor
from studio.services.preview import project

router = APIRouter()


# Request/Response Models

class PreviewRequest(DesignSettings):
    """Control-panel values; the photo never leaves the browser, extra keys are ignored."""
    pass


class HealthResponse(BaseModel):
    status: str
    version: str


class SceneResponse(BaseModel):
    id: str
    name: str
    swatch: str


class ExportInfoResponse(BaseModel):
    width: int
    height: int
    filter_order: list[str]


# Routes

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version="1.0.0")


@router.get("/scenes", response_model=list[SceneResponse])
async def get_scenes():
    """Get all scene backdrops with a swatch for the theme picker."""
    return [SceneResponse(**s) for s in list_scenes()]


@router.get("/defaults", response_model=DesignParameters)
async def get_defaults():
    """Get the starting design parameters."""
    return DesignParameters()


@router.get("/export-info", response_model=ExportInfoResponse)
async def get_export_info():
    """Describe the export the CLI produces."""
    return ExportInfoResponse(width=WIDTH, height=HEIGHT, filter_order=list(FILTER_ORDER))


@router.post("/preview", response_model=StyleDescriptor)
async def preview(request: PreviewRequest):
    """Project design parameters into CSS for the live view."""
    return project(request)
