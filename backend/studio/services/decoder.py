"""Source image decoding with guaranteed release."""

import asyncio
import logging
from contextlib import asynccontextmanager
from io import BytesIO
from typing import AsyncContextManager, AsyncIterator, Protocol

from PIL import Image, ImageOps, UnidentifiedImageError

from studio.errors import DecodeFailure
from studio.models import SourceImage

logger = logging.getLogger(__name__)


class ImageDecoder(Protocol):
    def open(self, source: SourceImage) -> AsyncContextManager[Image.Image]: ...


def decode_image(data: bytes) -> Image.Image:
    """Decode bytes into an upright RGBA image."""
    with Image.open(BytesIO(data)) as img:
        img.load()
        upright = ImageOps.exif_transpose(img)
        return upright.convert("RGBA")


class PillowImageDecoder:
    @asynccontextmanager
    async def open(self, source: SourceImage) -> AsyncIterator[Image.Image]:
        try:
            image = await asyncio.to_thread(decode_image, source.data)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
            logger.error(f"Failed to decode {source.filename}: {e}")
            raise DecodeFailure(f"Could not decode {source.filename}: {e}") from e
        try:
            yield image
        finally:
            image.close()
