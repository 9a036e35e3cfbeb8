"""
Export a designed product shot from the command line.

Usage:
    studio-export shoe.jpg --mode scene --scene neon --headline "Run Further"

Or with a solid backdrop and custom copy:
    studio-export shoe.jpg --mode solid --solid-color "#112233" --badge SALE --cta Buy
"""

import argparse
import asyncio
import logging
import mimetypes
import os
import re
import sys
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from studio.config import get_settings
from studio.design_templates import SCENE_BACKGROUNDS
from studio.errors import ExportError
from studio.log import configure_logging
from studio.models import BackgroundMode, DesignParameters, SourceImage
from studio.services.compositor import get_compositor

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "product-shot.png"

# CLI flag -> DesignParameters field
PARAMETER_FLAGS = {
    "mode": "background_mode",
    "solid_color": "solid_color",
    "gradient_start": "gradient_start",
    "gradient_end": "gradient_end",
    "scene": "scene_key",
    "brightness": "brightness",
    "contrast": "contrast",
    "saturation": "saturation",
    "blur": "blur",
    "badge": "badge",
    "headline": "headline",
    "description": "description",
    "cta": "cta",
}


def export_filename(source_name: Optional[str]) -> str:
    """photo.final.jpg -> photo.final-designed.png"""
    if not source_name:
        return DEFAULT_FILENAME
    stem = re.sub(r"\.[^.]+$", "", Path(source_name).name)
    return f"{stem}-designed.png" if stem else DEFAULT_FILENAME


def is_image_file(path: Path) -> bool:
    content_type, _ = mimetypes.guess_type(path.name)
    return bool(content_type and content_type.startswith("image/"))


def load_source(path: Path) -> Optional[SourceImage]:
    """Read the source photo. Non-image files are skipped, not reported."""
    if not is_image_file(path):
        logger.debug(f"Ignoring non-image file: {path}")
        return None
    content_type, _ = mimetypes.guess_type(path.name)
    return SourceImage(data=path.read_bytes(), filename=path.name, content_type=content_type)


def write_atomically(data: bytes, target: Path):
    """Write via a temp file in the same directory so a failed write leaves nothing behind."""
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        # mkstemp creates 0600; give the export the usual umask-based mode
        umask = os.umask(0)
        os.umask(umask)
        os.chmod(tmp_name, 0o666 & ~umask)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="studio-export",
        description="Compose a product photo into a 1600x1200 marketing PNG"
    )
    parser.add_argument("image", type=Path, help="Product photo to design around")
    parser.add_argument("--output", "-o", type=Path, default=None,
                        help="Output PNG path (default: <output_dir>/<name>-designed.png)")

    framing = parser.add_argument_group("brand framing")
    framing.add_argument("--mode", choices=[m.value for m in BackgroundMode], help="Background style")
    framing.add_argument("--solid-color", help="Background color for --mode solid")
    framing.add_argument("--gradient-start", help="Start color for --mode gradient")
    framing.add_argument("--gradient-end", help="End color for --mode gradient")
    framing.add_argument("--scene", choices=list(SCENE_BACKGROUNDS), help="Theme for --mode scene")

    lighting = parser.add_argument_group("lighting & depth")
    lighting.add_argument("--brightness", type=float, help="0.8 - 1.6 (default: 1.12)")
    lighting.add_argument("--contrast", type=float, help="0.8 - 1.6 (default: 1.08)")
    lighting.add_argument("--saturation", type=float, help="0.6 - 1.8 (default: 1.18)")
    lighting.add_argument("--blur", type=float, help="Focus blur in px, 0 - 3 (default: 0)")

    copy = parser.add_argument_group("storytelling copy", "Pass an empty string to leave an element out")
    copy.add_argument("--badge")
    copy.add_argument("--headline")
    copy.add_argument("--description")
    copy.add_argument("--cta", help="Call-to-action button text")
    return parser


def build_parameters(args: argparse.Namespace, source: Optional[SourceImage]) -> DesignParameters:
    values = {
        field: getattr(args, flag)
        for flag, field in PARAMETER_FLAGS.items()
        if getattr(args, flag) is not None
    }
    return DesignParameters(image=source, **values)


def main(argv=None) -> int:
    settings = get_settings()
    configure_logging(settings.log_level)

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.image.is_file():
        parser.error(f"No such file: {args.image}")

    source = load_source(args.image)
    try:
        params = build_parameters(args, source)
    except ValidationError as e:
        parser.error("; ".join(err["msg"] for err in e.errors()))

    target = args.output or Path(settings.output_dir) / export_filename(args.image.name)

    try:
        data = asyncio.run(get_compositor().compose(params))
    except ExportError as e:
        logger.error(f"✗ Export failed [{e.code}]: {e.message}")
        print(f"Export failed: {e.message}", file=sys.stderr)
        return 1

    try:
        write_atomically(data, target)
    except OSError as e:
        logger.error(f"✗ Could not write {target}: {e}")
        print(f"Export failed: could not write {target}: {e.strerror or e}", file=sys.stderr)
        return 1
    logger.info(f"✓ Saved {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
