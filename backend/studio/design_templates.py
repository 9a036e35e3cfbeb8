"""
Shared design constants for Product Pic Studio.

Both renderers read from here:
1. EXPORT - the exact 1600x1200 raster composition
2. PREVIEW - the CSS approximation used by the live view

Keep angles, stop/overlay order and the filter order in this module only.
"""

from dataclasses import dataclass
from typing import Optional

from PIL import ImageColor

# Export dimensions
WIDTH = 1600
HEIGHT = 1200

# Preview gradient angles (CSS degrees). The export always runs corner to corner.
GRADIENT_ANGLE_DEG = 130
SCENE_ANGLE_DEG = 135

# Applied left to right, in export and preview alike
FILTER_ORDER = ("brightness", "contrast", "saturate", "blur")

# Overlays fade towards this color at their rim
OVERLAY_FADE_COLOR = (255, 255, 255, 0.0)

# Product drop shadow (CSS box-shadow semantics: blur is twice the sigma)
IMAGE_SHADOW_OFFSET = (24, 32)
IMAGE_SHADOW_BLUR = 55
IMAGE_SHADOW_COLOR = (15, 23, 42, 0.22)


# ============================================
# SCENE CATALOG
# ============================================

@dataclass(frozen=True)
class GradientStop:
    color: str
    position: float


@dataclass(frozen=True)
class RadialOverlay:
    """Circular glow, all geometry relative to the target surface."""
    x: float
    y: float
    radius: float
    color: tuple  # (r, g, b, alpha 0..1)


@dataclass(frozen=True)
class SceneDefinition:
    id: str
    name: str
    stops: tuple
    overlays: tuple = ()


def validate_scene(scene: SceneDefinition) -> SceneDefinition:
    """Reject malformed presets. Runs at import time, never during a render."""
    if len(scene.stops) < 2:
        raise ValueError(f"Scene '{scene.id}' needs at least two gradient stops")
    positions = [stop.position for stop in scene.stops]
    if positions[0] != 0 or positions[-1] != 1:
        raise ValueError(f"Scene '{scene.id}' stops must span 0..1, got {positions}")
    if any(b < a for a, b in zip(positions, positions[1:])):
        raise ValueError(f"Scene '{scene.id}' stop positions must be non-decreasing: {positions}")
    for stop in scene.stops:
        ImageColor.getrgb(stop.color)
    for overlay in scene.overlays:
        for name in ("x", "y", "radius"):
            value = getattr(overlay, name)
            if not 0 <= value <= 1:
                raise ValueError(f"Scene '{scene.id}' overlay {name}={value} outside 0..1")
        if len(overlay.color) != 4 or not 0 <= overlay.color[3] <= 1:
            raise ValueError(f"Scene '{scene.id}' overlay color must be (r, g, b, alpha)")
    return scene


SCENE_BACKGROUNDS = {
    scene.id: validate_scene(scene)
    for scene in (
        SceneDefinition(
            id="studio",
            name="Soft Studio",
            stops=(
                GradientStop("#f8fafc", 0),
                GradientStop("#e2e8f0", 0.45),
                GradientStop("#eef2ff", 1),
            ),
            overlays=(RadialOverlay(0.25, 0.25, 0.55, (99, 102, 241, 0.18)),),
        ),
        SceneDefinition(
            id="neon",
            name="Neon Pop",
            stops=(
                GradientStop("#0f172a", 0),
                GradientStop("#1e293b", 0.45),
                GradientStop("#4c1d95", 1),
            ),
            overlays=(
                RadialOverlay(0.75, 0.25, 0.5, (16, 185, 129, 0.32)),
                RadialOverlay(0.2, 0.8, 0.65, (59, 130, 246, 0.25)),
            ),
        ),
        SceneDefinition(
            id="sunset",
            name="Sunset Glow",
            stops=(
                GradientStop("#fef3c7", 0),
                GradientStop("#f97316", 0.55),
                GradientStop("#ef4444", 1),
            ),
            overlays=(RadialOverlay(0.25, 0.25, 0.6, (254, 240, 138, 0.4)),),
        ),
        SceneDefinition(
            id="slate",
            name="Graphite",
            stops=(
                GradientStop("#1f2937", 0),
                GradientStop("#111827", 1),
            ),
            overlays=(RadialOverlay(0.2, 0.85, 0.65, (148, 163, 184, 0.28)),),
        ),
    )
}


def get_scene(scene_id: str) -> SceneDefinition:
    """Get a scene by ID. Unknown keys are a caller bug."""
    return SCENE_BACKGROUNDS[scene_id]


def find_scene(scene_id: str) -> Optional[SceneDefinition]:
    return SCENE_BACKGROUNDS.get(scene_id)


def list_scenes():
    """List all scenes with a CSS swatch for theme pickers."""
    return [
        {"id": s.id, "name": s.name, "swatch": css_linear_gradient(SCENE_ANGLE_DEG, s.stops)}
        for s in SCENE_BACKGROUNDS.values()
    ]


# ============================================
# CSS HELPERS (preview side)
# ============================================

def css_percent(value: float) -> str:
    return f"{round(value * 100)}%"


def css_rgba(color: tuple) -> str:
    r, g, b, a = color
    return f"rgba({r}, {g}, {b}, {a:g})"


def css_linear_gradient(angle: int, stops) -> str:
    parts = ", ".join(f"{stop.color} {css_percent(stop.position)}" for stop in stops)
    return f"linear-gradient({angle}deg, {parts})"


def css_radial_overlay(overlay: RadialOverlay) -> str:
    return (
        f"radial-gradient(circle at {css_percent(overlay.x)} {css_percent(overlay.y)}, "
        f"{css_rgba(overlay.color)} 0%, {css_rgba(OVERLAY_FADE_COLOR)} {css_percent(overlay.radius)})"
    )
