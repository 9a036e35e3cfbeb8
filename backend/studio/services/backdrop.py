"""
Backdrop synthesis.

`synthesize` turns the background settings into a FillPlan (pure data),
`paint` rasterizes a plan. Layers are painted in list order, so the first
overlay of a scene sits directly on the base gradient and later ones on top.
"""

from dataclasses import dataclass
from typing import Tuple

from PIL import Image, ImageColor

from studio.design_templates import OVERLAY_FADE_COLOR, get_scene
from studio.models import BackgroundMode, DesignParameters

RGBA = Tuple[int, int, int, int]


@dataclass(frozen=True)
class SolidFill:
    color: RGBA


@dataclass(frozen=True)
class LinearFill:
    """Gradient along the line start -> end, stops as (position, color)."""
    start: Tuple[float, float]
    end: Tuple[float, float]
    stops: Tuple[Tuple[float, RGBA], ...]


@dataclass(frozen=True)
class RadialFill:
    center: Tuple[float, float]
    radius: float
    inner: RGBA
    outer: RGBA


@dataclass(frozen=True)
class FillPlan:
    width: int
    height: int
    layers: tuple


def _opaque(color: str) -> RGBA:
    r, g, b = ImageColor.getrgb(color)[:3]
    return (r, g, b, 255)


def _rgba(color: tuple) -> RGBA:
    r, g, b, a = color
    return (r, g, b, round(a * 255))


def synthesize(mode: BackgroundMode, params: DesignParameters, width: int, height: int) -> FillPlan:
    """Build the fill plan for one backdrop mode."""
    corner_to_corner = ((0.0, 0.0), (float(width), float(height)))

    if mode == BackgroundMode.SOLID:
        layers = (SolidFill(_opaque(params.solid_color)),)
    elif mode == BackgroundMode.SCENE:
        scene = get_scene(params.scene_key)
        base = LinearFill(
            *corner_to_corner,
            stops=tuple((stop.position, _opaque(stop.color)) for stop in scene.stops),
        )
        reach = max(width, height)
        overlays = tuple(
            RadialFill(
                center=(overlay.x * width, overlay.y * height),
                radius=overlay.radius * reach,
                inner=_rgba(overlay.color),
                outer=_rgba(OVERLAY_FADE_COLOR),
            )
            for overlay in scene.overlays
        )
        layers = (base,) + overlays
    else:
        layers = (
            LinearFill(
                *corner_to_corner,
                stops=((0.0, _opaque(params.gradient_start)), (1.0, _opaque(params.gradient_end))),
            ),
        )
    return FillPlan(width=width, height=height, layers=layers)


# ============================================
# Rasterization
# ============================================

def _color_at(stops, t: float) -> RGBA:
    if t <= stops[0][0]:
        return stops[0][1]
    for (p0, c0), (p1, c1) in zip(stops, stops[1:]):
        if t <= p1:
            if p1 == p0:
                continue
            f = (t - p0) / (p1 - p0)
            return tuple(round(a + (b - a) * f) for a, b in zip(c0, c1))
    return stops[-1][1]


def _channel_luts(stops) -> list:
    """Per-channel 256-entry lookup tables mapping t*255 to a color."""
    colors = [_color_at(stops, i / 255) for i in range(256)]
    return [[c[channel] for c in colors] for channel in range(4)]


def _apply_luts(t_map: Image.Image, stops) -> Image.Image:
    return Image.merge("RGBA", [t_map.point(lut) for lut in _channel_luts(stops)])


def _linear_t_map(fill: LinearFill, size) -> Image.Image:
    # linear_gradient("L") holds value == row index, so pick the row by projection
    (x0, y0), (x1, y1) = fill.start, fill.end
    dx, dy = x1 - x0, y1 - y0
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return Image.new("L", size, 255)
    k = 255 / length_sq
    data = (0, 0, 128, k * dx, k * dy, -k * (dx * x0 + dy * y0))
    return Image.linear_gradient("L").transform(
        size, Image.Transform.AFFINE, data, resample=Image.Resampling.NEAREST, fillcolor=255
    )


def _radial_t_map(fill: RadialFill, size) -> Image.Image:
    # radial_gradient("L") holds 2 * distance from (128, 128), saturating at 255
    if fill.radius <= 0:
        return Image.new("L", size, 255)
    cx, cy = fill.center
    s = 127.5 / fill.radius
    data = (s, 0, 128 - cx * s, 0, s, 128 - cy * s)
    return Image.radial_gradient("L").transform(
        size, Image.Transform.AFFINE, data, resample=Image.Resampling.BILINEAR, fillcolor=255
    )


def paint(plan: FillPlan) -> Image.Image:
    """Rasterize a fill plan onto a fresh RGBA surface."""
    size = (plan.width, plan.height)
    surface = Image.new("RGBA", size, (0, 0, 0, 0))
    for layer in plan.layers:
        if isinstance(layer, SolidFill):
            surface.alpha_composite(Image.new("RGBA", size, layer.color))
        elif isinstance(layer, LinearFill):
            surface.alpha_composite(_apply_luts(_linear_t_map(layer, size), layer.stops))
        elif isinstance(layer, RadialFill):
            stops = ((0.0, layer.inner), (1.0, layer.outer))
            surface.alpha_composite(_apply_luts(_radial_t_map(layer, size), stops))
        else:
            raise TypeError(f"Unknown fill layer: {layer!r}")
    return surface
