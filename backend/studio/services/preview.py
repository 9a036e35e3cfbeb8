"""
Preview projection - maps DesignSettings to CSS for the live view.

The browser handles text flow here, so only backgrounds, filters and the
shadow need translating. CSS paints its first background layer on top, so
scene overlays are listed last-first to keep the export's stacking.
"""

from studio.design_templates import (
    GRADIENT_ANGLE_DEG,
    FILTER_ORDER,
    IMAGE_SHADOW_BLUR,
    IMAGE_SHADOW_COLOR,
    IMAGE_SHADOW_OFFSET,
    SCENE_ANGLE_DEG,
    GradientStop,
    css_linear_gradient,
    css_radial_overlay,
    css_rgba,
    get_scene,
)
from studio.models import BackgroundMode, DesignSettings, StyleDescriptor
from studio.services.image_filters import filter_values

HEADLINE_PLACEHOLDER = "Headline goes here"
DESCRIPTION_PLACEHOLDER = "Describe the product value in a concise, compelling way to drive clicks."

FILTER_UNITS = {"blur": "px"}


def css_background(params: DesignSettings) -> str:
    if params.background_mode == BackgroundMode.SOLID:
        return params.solid_color
    if params.background_mode == BackgroundMode.SCENE:
        scene = get_scene(params.scene_key)
        layers = [css_radial_overlay(overlay) for overlay in reversed(scene.overlays)]
        layers.append(css_linear_gradient(SCENE_ANGLE_DEG, scene.stops))
        return ", ".join(layers)
    stops = (GradientStop(params.gradient_start, 0), GradientStop(params.gradient_end, 1))
    return css_linear_gradient(GRADIENT_ANGLE_DEG, stops)


def css_filter(values: dict) -> str:
    return " ".join(f"{name}({values[name]:g}{FILTER_UNITS.get(name, '')})" for name in FILTER_ORDER)


def css_shadow() -> str:
    dx, dy = IMAGE_SHADOW_OFFSET
    return f"{dx}px {dy}px {IMAGE_SHADOW_BLUR}px {css_rgba(IMAGE_SHADOW_COLOR)}"


def project(params: DesignSettings) -> StyleDescriptor:
    return StyleDescriptor(
        background=css_background(params),
        filter=css_filter(filter_values(params)),
        shadow=css_shadow(),
        badge=params.badge.upper() if params.badge else None,
        headline=params.headline or HEADLINE_PLACEHOLDER,
        description=params.description or DESCRIPTION_PLACEHOLDER,
        cta=params.cta or None,
    )
