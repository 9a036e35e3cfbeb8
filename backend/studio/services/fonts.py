"""
Font loading and text measurement.

Text is measured through a TextMeasurer so layout never depends on an
ambient drawing surface.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Protocol

from PIL import ImageFont

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontSpec:
    weight: int
    size: int


BADGE_FONT = FontSpec(600, 28)
HEADLINE_FONT = FontSpec(700, 78)
BODY_FONT = FontSpec(400, 32)
CTA_FONT = FontSpec(600, 32)

EXPORT_FONTS = (BADGE_FONT, HEADLINE_FONT, BODY_FONT, CTA_FONT)

FONT_FILES = {
    400: "Inter-Regular.ttf",
    600: "Inter-SemiBold.ttf",
    700: "Inter-Bold.ttf",
}


class TextMeasurer(Protocol):
    async def ready(self, fonts: Iterable[FontSpec]) -> None: ...

    def measure(self, font: FontSpec, text: str) -> float: ...

    def get_font(self, font: FontSpec): ...


class FontBook:
    """Inter family from `font_dir`, falling back to Pillow's built-in font."""

    def __init__(self, font_dir: str):
        self.font_dir = Path(font_dir)
        self._fonts: Dict[FontSpec, ImageFont.FreeTypeFont] = {}

    def _font_file(self, weight: int) -> Path:
        return self.font_dir / FONT_FILES.get(weight, FONT_FILES[400])

    def get_font(self, font: FontSpec):
        """Get font with specified weight and size."""
        if font not in self._fonts:
            path = self._font_file(font.weight)
            if path.exists():
                self._fonts[font] = ImageFont.truetype(str(path), font.size)
            else:
                logger.warning(f"Font file missing: {path} - using built-in font at {font.size}px")
                self._fonts[font] = ImageFont.load_default(size=font.size)
        return self._fonts[font]

    async def ready(self, fonts: Iterable[FontSpec]) -> None:
        """Load every font the export needs before anything is measured."""
        for font in fonts:
            self.get_font(font)
            await asyncio.sleep(0)

    def measure(self, font: FontSpec, text: str) -> float:
        return self.get_font(font).getlength(text)
