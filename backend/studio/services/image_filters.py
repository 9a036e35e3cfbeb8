"""
Pixel filter chain for the product photo.

Mirrors the CSS functions used by the live preview:
    brightness(b)  v * b
    contrast(c)    (v - 127.5) * c + 127.5
    saturate(s)    SVG saturate matrix
    blur(r)        gaussian, sigma = r, spilling into a transparent margin
Every step clamps to 0..255 and leaves alpha alone (blur excepted).
"""

import math
from typing import Dict, Iterable, Tuple

from PIL import Image, ImageFilter

from studio.design_templates import FILTER_ORDER
from studio.models import DesignSettings

IDENTITY = list(range(256))


def _clip(value: float) -> int:
    return min(255, max(0, int(round(value))))


def _rgb_lut(channel_lut: list, image: Image.Image) -> list:
    lut = channel_lut * 3
    if image.mode == "RGBA":
        lut += IDENTITY
    return lut


def brightness(image: Image.Image, amount: float) -> Image.Image:
    if amount == 1:
        return image
    return image.point(_rgb_lut([_clip(i * amount) for i in range(256)], image))


def contrast(image: Image.Image, amount: float) -> Image.Image:
    if amount == 1:
        return image
    return image.point(_rgb_lut([_clip((i - 127.5) * amount + 127.5) for i in range(256)], image))


def saturate_matrix(amount: float) -> tuple:
    s = amount
    return (
        0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s, 0,
        0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s, 0,
        0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s, 0,
    )


def saturate(image: Image.Image, amount: float) -> Image.Image:
    if amount == 1:
        return image
    if image.mode != "RGBA":
        return image.convert("RGB").convert("RGB", saturate_matrix(amount))
    rgb = image.convert("RGB").convert("RGB", saturate_matrix(amount))
    rgb.putalpha(image.getchannel("A"))
    return rgb


def blur_margin(radius: float) -> int:
    return math.ceil(radius * 3) if radius > 0 else 0


def blur(image: Image.Image, radius: float) -> Image.Image:
    if radius <= 0:
        return image
    # Premultiplied so transparent pixels do not bleed black into the edge
    premultiplied = image.convert("RGBA").convert("RGBa")
    return premultiplied.filter(ImageFilter.GaussianBlur(radius)).convert("RGBA")


FILTERS = {
    "brightness": brightness,
    "contrast": contrast,
    "saturate": saturate,
    "blur": blur,
}


def filter_values(params: DesignSettings) -> Dict[str, float]:
    """Filter amounts keyed by their CSS function names."""
    return {
        "brightness": params.brightness,
        "contrast": params.contrast,
        "saturate": params.saturation,
        "blur": params.blur,
    }


def apply_filter_chain(
    image: Image.Image,
    values: Dict[str, float],
    order: Iterable[str] = FILTER_ORDER,
) -> Tuple[Image.Image, int]:
    """
    Run the chain over an RGBA copy of `image`.

    Returns the filtered image and the transparent margin added around it for
    the blur to spread into; draw it `margin` pixels up and left of the
    unfiltered position.
    """
    margin = blur_margin(values.get("blur", 0))
    result = image.convert("RGBA")
    if margin:
        padded = Image.new("RGBA", (result.width + 2 * margin, result.height + 2 * margin), (0, 0, 0, 0))
        padded.paste(result, (margin, margin))
        result = padded
    for name in order:
        result = FILTERS[name](result, values[name])
    return result, margin
