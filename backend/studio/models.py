"""
Design parameter models shared by the export and the preview.
"""

from enum import Enum
from typing import Optional

from PIL import ImageColor
from pydantic import BaseModel, ConfigDict, field_validator

from studio.design_templates import SCENE_BACKGROUNDS

# Adjustment ranges exposed by the control panel
BRIGHTNESS_RANGE = (0.8, 1.6)
CONTRAST_RANGE = (0.8, 1.6)
SATURATION_RANGE = (0.6, 1.8)
BLUR_RANGE = (0.0, 3.0)


def clamp(value: float, bounds: tuple) -> float:
    low, high = bounds
    return min(max(value, low), high)


class BackgroundMode(str, Enum):
    GRADIENT = "gradient"
    SOLID = "solid"
    SCENE = "scene"


class SourceImage(BaseModel):
    """Raw bytes of the uploaded product photo, decoded only at export time."""
    model_config = ConfigDict(frozen=True)

    data: bytes
    filename: str = "product-shot.png"
    content_type: Optional[str] = None


class DesignSettings(BaseModel):
    """Every control-panel value except the photo itself."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    # Lighting & depth
    brightness: float = 1.12
    contrast: float = 1.08
    saturation: float = 1.18
    blur: float = 0.0

    # Brand framing
    background_mode: BackgroundMode = BackgroundMode.GRADIENT
    solid_color: str = "#f8fafc"
    gradient_start: str = "#eef2ff"
    gradient_end: str = "#e0f2fe"
    scene_key: str = "studio"

    # Storytelling copy - empty string omits the element
    badge: str = "20% Off"
    headline: str = "New Arrival"
    description: str = "Premium quality product crafted for everyday excellence."
    cta: str = "Shop Now"

    @field_validator("brightness")
    @classmethod
    def _clamp_brightness(cls, v: float) -> float:
        return clamp(v, BRIGHTNESS_RANGE)

    @field_validator("contrast")
    @classmethod
    def _clamp_contrast(cls, v: float) -> float:
        return clamp(v, CONTRAST_RANGE)

    @field_validator("saturation")
    @classmethod
    def _clamp_saturation(cls, v: float) -> float:
        return clamp(v, SATURATION_RANGE)

    @field_validator("blur")
    @classmethod
    def _clamp_blur(cls, v: float) -> float:
        return clamp(v, BLUR_RANGE)

    @field_validator("solid_color", "gradient_start", "gradient_end")
    @classmethod
    def _check_color(cls, v: str) -> str:
        try:
            ImageColor.getrgb(v)
        except ValueError:
            raise ValueError(f"Unknown color: {v!r}")
        return v

    @field_validator("scene_key")
    @classmethod
    def _check_scene(cls, v: str) -> str:
        if v not in SCENE_BACKGROUNDS:
            raise ValueError(f"Unknown scene '{v}'. Available: {', '.join(SCENE_BACKGROUNDS)}")
        return v

    @field_validator("badge", "headline", "description", "cta", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v


class DesignParameters(DesignSettings):
    """Snapshot of everything one render needs."""
    image: Optional[SourceImage] = None


class StyleDescriptor(BaseModel):
    """CSS-equivalent description of a design for the live preview."""
    background: str
    filter: str
    shadow: str
    badge: Optional[str] = None
    headline: str
    description: str
    cta: Optional[str] = None
