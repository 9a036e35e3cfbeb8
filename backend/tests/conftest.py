import sys
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


def png_bytes(image: Image.Image) -> bytes:
    buf = BytesIO()
    image.save(buf, "PNG")
    return buf.getvalue()


@pytest.fixture
def product_png():
    """400x400 solid red product shot."""
    return png_bytes(Image.new("RGB", (400, 400), (255, 0, 0)))


@pytest.fixture
def gradient_image():
    """Synthetic RGBA test card: red ramps left-right, green top-bottom."""
    img = Image.new("RGBA", (64, 64))
    img.putdata([(x * 4, y * 4, 64, 255) for y in range(64) for x in range(64)])
    return img


@pytest.fixture
def color_edge_image():
    """Opaque 32x16 card: warm red on the left, blue on the right, hard edge between."""
    img = Image.new("RGBA", (32, 16), (60, 60, 200, 255))
    img.paste((200, 60, 60, 255), (0, 0, 16, 16))
    return img
