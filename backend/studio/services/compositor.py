"""
Export compositor for Product Pic Studio.

Draws one fixed-size marketing image in a fixed z-order:
- Backdrop (solid, gradient or scene)
- Frosted glass card
- Badge pill, headline, description, CTA button (left text column)
- Fitted product photo with drop shadow and filter chain (right)
and encodes it as PNG. Every call allocates its own surface.
"""

import asyncio
import logging
from io import BytesIO
from typing import Optional

from PIL import Image, ImageDraw, ImageFilter

from studio.config import get_settings
from studio.design_templates import (
    HEIGHT,
    IMAGE_SHADOW_BLUR,
    IMAGE_SHADOW_COLOR,
    IMAGE_SHADOW_OFFSET,
    WIDTH,
)
from studio.errors import EncodeFailure, NoImageLoaded, SurfaceUnavailable
from studio.models import DesignParameters
from studio.services.backdrop import paint, synthesize
from studio.services.decoder import ImageDecoder, PillowImageDecoder
from studio.services.fonts import (
    BADGE_FONT,
    BODY_FONT,
    CTA_FONT,
    EXPORT_FONTS,
    HEADLINE_FONT,
    FontBook,
    FontSpec,
    TextMeasurer,
)
from studio.services.image_filters import apply_filter_chain, filter_values
from studio.services.image_fitter import fit_image
from studio.services.text_layout import layout_text

logger = logging.getLogger(__name__)


def _alpha(opacity: float) -> int:
    return round(opacity * 255)


# Colors
WHITE = (255, 255, 255)
INK = (15, 23, 42)
INDIGO = (79, 70, 229)
INDIGO_TEXT = (67, 56, 202)
CTA_FILL = (99, 102, 241)

# Frame
PADDING = 140
TEXT_COLUMN_RATIO = 0.38
CARD_INSET = 80
CARD_RADIUS = 48
CARD_FILL = (*WHITE, _alpha(0.18))

# Badge
BADGE_PADDING_X = 28
BADGE_HEIGHT = 58
BADGE_RADIUS = 32
BADGE_FILL = (*INDIGO, _alpha(0.12))
BADGE_STROKE = (*INDIGO, _alpha(0.35))
BADGE_STROKE_WIDTH = 2
BADGE_GAP = 48

# Copy
HEADLINE_LINE_HEIGHT = 84
HEADLINE_GAP = 36
DESCRIPTION_COLOR = (*INK, _alpha(0.75))
DESCRIPTION_LINE_HEIGHT = 46
DESCRIPTION_GAP = 40

# Call to action
CTA_HEIGHT = 76
CTA_MIN_WIDTH = 260
CTA_PADDING_X = 40
CTA_TEXT_NUDGE = 4


def encode_png(surface: Image.Image) -> bytes:
    buf = BytesIO()
    surface.save(buf, "PNG", quality=95)
    return buf.getvalue()


class Compositor:
    """Renders DesignParameters into PNG bytes."""

    def __init__(
        self,
        measurer: Optional[TextMeasurer] = None,
        decoder: Optional[ImageDecoder] = None,
        scale_cap: Optional[float] = None,
        width: int = WIDTH,
        height: int = HEIGHT,
    ):
        settings = get_settings()
        self.measurer = measurer or FontBook(settings.font_path)
        self.decoder = decoder or PillowImageDecoder()
        self.scale_cap = settings.image_scale_cap if scale_cap is None else scale_cap
        self.width = width
        self.height = height
        self.text_column_width = width * TEXT_COLUMN_RATIO

    async def compose(self, params: DesignParameters) -> bytes:
        if params.image is None:
            logger.warning("Export requested without a source image")
            raise NoImageLoaded()

        await self.measurer.ready(EXPORT_FONTS)
        async with self.decoder.open(params.image) as source:
            surface = self._create_surface(params)
            self._draw_card(surface)
            self._draw_copy(surface, params)
            self._draw_product(surface, source, params)

        try:
            data = await asyncio.to_thread(encode_png, surface)
        except (OSError, ValueError) as e:
            logger.error(f"PNG encoding failed: {e}")
            raise EncodeFailure(f"Unable to export image: {e}") from e
        finally:
            surface.close()
        if not data:
            logger.error("PNG encoding produced no data")
            raise EncodeFailure()

        logger.info(f"Exported {self.width}x{self.height} PNG ({len(data)} bytes)")
        return data

    # ============================================
    # Layers
    # ============================================

    def _create_surface(self, params: DesignParameters) -> Image.Image:
        plan = synthesize(params.background_mode, params, self.width, self.height)
        try:
            backdrop = paint(plan)
            surface = backdrop.convert("RGB")
        except (MemoryError, ValueError) as e:
            logger.error(f"Could not allocate {self.width}x{self.height} surface: {e}")
            raise SurfaceUnavailable(f"Could not create the drawing surface: {e}") from e
        backdrop.close()
        return surface

    def _draw_card(self, surface: Image.Image):
        draw = ImageDraw.Draw(surface, "RGBA")
        # Pillow boxes include their far corner
        draw.rounded_rectangle(
            (CARD_INSET, CARD_INSET, self.width - CARD_INSET - 1, self.height - CARD_INSET - 1),
            radius=CARD_RADIUS,
            fill=CARD_FILL,
        )

    def _measure(self, font: FontSpec):
        return lambda text: self.measurer.measure(font, text)

    def _draw_copy(self, surface: Image.Image, params: DesignParameters):
        """Left column: badge, headline, description and CTA stacked top-down."""
        draw = ImageDraw.Draw(surface, "RGBA")
        x = PADDING
        cursor_y = PADDING + 20

        if params.badge:
            label = params.badge.upper()
            badge_width = round(self.measurer.measure(BADGE_FONT, label) + BADGE_PADDING_X * 2)
            draw.rounded_rectangle(
                (x, cursor_y, x + badge_width - 1, cursor_y + BADGE_HEIGHT - 1),
                radius=BADGE_RADIUS,
                fill=BADGE_FILL,
                outline=BADGE_STROKE,
                width=BADGE_STROKE_WIDTH,
            )
            draw.text(
                (x + BADGE_PADDING_X, cursor_y + BADGE_HEIGHT / 2),
                label,
                font=self.measurer.get_font(BADGE_FONT),
                fill=INDIGO_TEXT,
                anchor="lm",
            )
            cursor_y += BADGE_HEIGHT + BADGE_GAP

        if params.headline:
            cursor_y = self._draw_block(
                draw, params.headline, HEADLINE_FONT, INK, x, cursor_y, HEADLINE_LINE_HEIGHT
            ) + HEADLINE_GAP

        if params.description:
            cursor_y = self._draw_block(
                draw, params.description, BODY_FONT, DESCRIPTION_COLOR, x, cursor_y, DESCRIPTION_LINE_HEIGHT
            ) + DESCRIPTION_GAP

        if params.cta:
            text_width = self.measurer.measure(CTA_FONT, params.cta)
            button_width = round(max(text_width + CTA_PADDING_X * 2, CTA_MIN_WIDTH))
            draw.rounded_rectangle(
                (x, cursor_y, x + button_width - 1, cursor_y + CTA_HEIGHT - 1),
                radius=CTA_HEIGHT // 2,
                fill=CTA_FILL,
            )
            draw.text(
                (x + button_width / 2 - text_width / 2, cursor_y + CTA_HEIGHT / 2 + CTA_TEXT_NUDGE),
                params.cta,
                font=self.measurer.get_font(CTA_FONT),
                fill=WHITE,
                anchor="lm",
            )

    def _draw_block(self, draw, text, font: FontSpec, fill, x, y, line_height) -> float:
        layout = layout_text(text, x, y, self.text_column_width, line_height, self._measure(font))
        pil_font = self.measurer.get_font(font)
        for line in layout.lines:
            draw.text((line.x, line.y), line.text, font=pil_font, fill=fill, anchor="la")
        return layout.end_y

    def _draw_product(self, surface: Image.Image, source: Image.Image, params: DesignParameters):
        available_width = self.width - self.text_column_width - PADDING * 2
        available_height = self.height - PADDING * 2
        fit = fit_image(
            source.width,
            source.height,
            available_width,
            available_height,
            self.scale_cap,
            left=self.width - PADDING - available_width,
            top=PADDING,
        )
        draw_size = (round(fit.width), round(fit.height))
        if fit.is_empty or min(draw_size) < 1:
            logger.warning(f"Skipping product image: nothing to draw at {fit.width:.1f}x{fit.height:.1f}")
            return

        resized = source.resize(draw_size, Image.Resampling.LANCZOS)
        filtered, margin = apply_filter_chain(resized, filter_values(params))
        position = (round(fit.x) - margin, round(fit.y) - margin)

        # Shadow follows the filtered silhouette
        dx, dy = IMAGE_SHADOW_OFFSET
        *shadow_rgb, shadow_opacity = IMAGE_SHADOW_COLOR
        silhouette = filtered.getchannel("A").point(lambda v: round(v * shadow_opacity))
        shadow_mask = Image.new("L", surface.size, 0)
        shadow_mask.paste(silhouette, (position[0] + dx, position[1] + dy))
        shadow_mask = shadow_mask.filter(ImageFilter.GaussianBlur(IMAGE_SHADOW_BLUR / 2))
        surface.paste(Image.new("RGB", surface.size, tuple(shadow_rgb)), (0, 0), shadow_mask)

        surface.paste(filtered, position, filtered)


def get_compositor(
    measurer: Optional[TextMeasurer] = None,
    decoder: Optional[ImageDecoder] = None,
) -> Compositor:
    """Get compositor instance with the configured fonts and decoder."""
    return Compositor(measurer=measurer, decoder=decoder)


async def compose(params: DesignParameters) -> bytes:
    return await get_compositor().compose(params)
