import asyncio
import logging
from contextlib import asynccontextmanager
from io import BytesIO

import pytest
from PIL import Image, ImageFont

from studio.errors import DecodeFailure, EncodeFailure, NoImageLoaded, SurfaceUnavailable
from studio.models import BackgroundMode, DesignParameters, SourceImage
from studio.services import compositor as compositor_module
from studio.services.compositor import Compositor
from studio.services.fonts import EXPORT_FONTS


class FixedWidthMeasurer:
    """Every character is 10px wide; records what the compositor asked for."""

    def __init__(self):
        self.readied = None
        self.measured = []
        self.font = ImageFont.load_default(size=20)

    async def ready(self, fonts):
        self.readied = tuple(fonts)

    def measure(self, font, text):
        self.measured.append(text)
        return len(text) * 10.0

    def get_font(self, font):
        return self.font


class SpyDecoder:
    def __init__(self, image=None):
        self.image = image
        self.opened = 0

    @asynccontextmanager
    async def open(self, source):
        self.opened += 1
        yield self.image


NEUTRAL = dict(brightness=1.0, contrast=1.0, saturation=1.0, blur=0.0)


def decode(data: bytes) -> Image.Image:
    img = Image.open(BytesIO(data))
    img.load()
    return img


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def measurer():
    return FixedWidthMeasurer()


@pytest.fixture
def source(product_png):
    return SourceImage(data=product_png, filename="shoe.png", content_type="image/png")


def test_requires_an_image(measurer):
    decoder = SpyDecoder()
    with pytest.raises(NoImageLoaded) as exc:
        run(Compositor(measurer, decoder).compose(DesignParameters()))
    assert exc.value.code == "NO_IMAGE_LOADED"
    assert decoder.opened == 0


def test_solid_export(measurer, source):
    params = DesignParameters(
        image=source,
        background_mode=BackgroundMode.SOLID,
        solid_color="#112233",
        badge="Sale",
        headline="Hello World",
        cta="Buy",
    )
    data = run(Compositor(measurer).compose(params))
    img = decode(data)
    assert img.format == "PNG"
    assert img.size == (1600, 1200)
    assert img.mode == "RGB"
    assert img.getpixel((0, 0)) == (17, 34, 51)


def test_uses_injected_measurer(measurer, source):
    params = DesignParameters(image=source, badge="new", headline="Hello World", cta="Buy")
    run(Compositor(measurer).compose(params))
    assert measurer.readied == EXPORT_FONTS
    assert "NEW" in measurer.measured
    assert "Hello World" in measurer.measured
    assert "Buy" in measurer.measured


def test_export_is_deterministic(measurer, source):
    params = DesignParameters(image=source, background_mode=BackgroundMode.SCENE, scene_key="sunset", blur=1.0)
    first = run(Compositor(measurer).compose(params))
    second = run(Compositor(measurer).compose(params))
    assert first == second


def test_product_is_fitted_right_of_text_column(measurer, source):
    params = DesignParameters(image=source, background_mode=BackgroundMode.SOLID, solid_color="#ffffff", **NEUTRAL)
    img = decode(run(Compositor(measurer).compose(params)))
    # 400px source scaled by the 1.2 cap to 480px at (980, 360)
    assert img.getpixel((1220, 600)) == (255, 0, 0)
    assert img.getpixel((981, 361)) == (255, 0, 0)
    assert img.getpixel((1458, 838)) == (255, 0, 0)
    assert img.getpixel((975, 600)) != (255, 0, 0)


def test_undecodable_image(measurer):
    params = DesignParameters(image=SourceImage(data=b"not an image", filename="notes.png"))
    with pytest.raises(DecodeFailure) as exc:
        run(Compositor(measurer).compose(params))
    assert exc.value.code == "DECODE_FAILURE"


def test_zero_size_image_is_skipped(measurer, source):
    decoder = SpyDecoder(Image.new("RGBA", (0, 0)))
    params = DesignParameters(image=source, background_mode=BackgroundMode.SOLID, solid_color="#112233")
    img = decode(run(Compositor(measurer, decoder).compose(params)))
    assert decoder.opened == 1
    assert img.size == (1600, 1200)


def test_surface_allocation_failure(measurer, source, monkeypatch):
    def no_memory(plan):
        raise MemoryError("out of memory")

    monkeypatch.setattr(compositor_module, "paint", no_memory)
    with pytest.raises(SurfaceUnavailable):
        run(Compositor(measurer).compose(DesignParameters(image=source)))


def test_empty_encoding_is_a_failure(measurer, source, monkeypatch):
    monkeypatch.setattr(compositor_module, "encode_png", lambda surface: b"")
    with pytest.raises(EncodeFailure) as exc:
        run(Compositor(measurer).compose(DesignParameters(image=source)))
    assert exc.value.message == "Unable to export image."


def _blank_export(measurer, source, **copy):
    """Black backdrop, no product, only the given copy."""
    values = {"badge": "", "headline": "", "description": "", "cta": "", **copy}
    params = DesignParameters(image=source, background_mode=BackgroundMode.SOLID, solid_color="#000000", **values)
    decoder = SpyDecoder(Image.new("RGBA", (0, 0)))
    return decode(run(Compositor(measurer, decoder).compose(params)))


def test_card_covers_exactly_its_inset_box(measurer, source):
    img = _blank_export(measurer, source)
    black = (0, 0, 0)
    assert img.getpixel((79, 600)) == black
    assert img.getpixel((80, 600)) != black
    assert img.getpixel((1519, 600)) != black
    assert img.getpixel((1520, 600)) == black
    assert img.getpixel((800, 1119)) != black
    assert img.getpixel((800, 1120)) == black


def test_badge_pill_matches_measured_width(measurer, source):
    img = _blank_export(measurer, source, badge="ab")
    card = img.getpixel((1000, 190))
    # "AB" measures 20px, plus 28px padding each side: x 140..215, y 160..217
    assert any(img.getpixel((215, y)) != card for y in range(160, 218))
    assert all(img.getpixel((216, y)) == card for y in range(150, 230))
    assert img.getpixel((180, 217)) != card
    assert img.getpixel((180, 218)) == card


def test_cta_button_keeps_minimum_width(measurer, source):
    img = _blank_export(measurer, source, cta="Go")
    card = img.getpixel((1000, 200))
    # 260px wide from x=140, 76px tall from y=160
    assert any(img.getpixel((399, y)) != card for y in range(160, 236))
    assert all(img.getpixel((400, y)) == card for y in range(150, 246))
    assert img.getpixel((270, 235)) != card
    assert img.getpixel((270, 236)) == card


def test_failures_are_logged(measurer, source, monkeypatch, caplog):
    with caplog.at_level(logging.WARNING, logger="studio.services.compositor"):
        with pytest.raises(NoImageLoaded):
            run(Compositor(measurer).compose(DesignParameters()))
        monkeypatch.setattr(compositor_module, "encode_png", lambda surface: b"")
        with pytest.raises(EncodeFailure):
            run(Compositor(measurer).compose(DesignParameters(image=source)))
    messages = [r.getMessage() for r in caplog.records]
    assert "Export requested without a source image" in messages
    assert "PNG encoding produced no data" in messages
