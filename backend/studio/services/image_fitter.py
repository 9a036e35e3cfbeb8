"""Placement of the product photo inside the image area."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FitResult:
    scale: float
    x: float
    y: float
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


def fit_image(
    natural_width: float,
    natural_height: float,
    available_width: float,
    available_height: float,
    scale_cap: float = 1.2,
    left: float = 0.0,
    top: float = 0.0,
) -> FitResult:
    """
    Scale to fit the region without distortion and without exceeding scale_cap.
    The image hugs the right edge of the region and is centered vertically.
    """
    region_right = left + available_width
    if natural_width <= 0 or natural_height <= 0:
        return FitResult(scale=0.0, x=region_right, y=top + available_height / 2, width=0.0, height=0.0)

    scale = min(available_width / natural_width, available_height / natural_height, scale_cap)
    scale = max(scale, 0.0)
    draw_width = natural_width * scale
    draw_height = natural_height * scale
    return FitResult(
        scale=scale,
        x=region_right - draw_width,
        y=top + (available_height - draw_height) / 2,
        width=draw_width,
        height=draw_height,
    )
