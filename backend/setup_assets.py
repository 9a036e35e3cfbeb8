#!/usr/bin/env python3
"""
Setup script to download the Inter fonts used by exported images.
Run this before the first export; without them a built-in font is used.
"""

import os
import urllib.request
import zipfile
from pathlib import Path

from studio.config import get_settings
from studio.services.fonts import FONT_FILES


FONT_URL = "https://fonts.google.com/download?family=Inter"
FONTS_DIR = Path(get_settings().font_path)
ASSETS_DIR = FONTS_DIR.parent.parent


def setup_directories():
    """Create required directories."""
    print("Creating directories...")
    FONTS_DIR.mkdir(parents=True, exist_ok=True)
    Path(get_settings().output_dir).mkdir(exist_ok=True)
    print("✓ Directories created")


def download_fonts():
    """Download Inter fonts from Google Fonts."""
    zip_path = ASSETS_DIR / "inter.zip"

    if all((FONTS_DIR / name).exists() for name in FONT_FILES.values()):
        print("✓ Fonts already exist, skipping download")
        return

    print("Downloading Inter fonts...")
    try:
        urllib.request.urlretrieve(FONT_URL, zip_path)
        print("✓ Downloaded font archive")

        print("Extracting fonts...")
        with zipfile.ZipFile(zip_path, 'r') as zip_ref:
            for target in FONT_FILES.values():
                # Archive names look like static/Inter_18pt-SemiBold.ttf
                suffix = "-" + target.split("-", 1)[1]
                matches = sorted(
                    f for f in zip_ref.namelist()
                    if 'static' in f and os.path.basename(f).endswith(suffix) and 'Italic' not in f
                )
                if not matches:
                    print(f"  ✗ {target} not in archive")
                    continue
                (FONTS_DIR / target).write_bytes(zip_ref.read(matches[0]))
                print(f"  Extracted: {matches[0]} -> {target}")

        zip_path.unlink()
        print("✓ Fonts installed")

    except Exception as e:
        print(f"✗ Failed to download fonts: {e}")
        print("  Please download Inter manually from https://fonts.google.com/specimen/Inter")
        print(f"  and place {', '.join(FONT_FILES.values())} in: {FONTS_DIR}")


def check_assets():
    """Check required fonts and provide instructions."""
    print("\nAsset Status:")

    missing_fonts = []
    for font in FONT_FILES.values():
        if (FONTS_DIR / font).exists():
            print(f"✓ {font} found")
        else:
            missing_fonts.append(font)
            print(f"✗ {font} MISSING")

    if missing_fonts:
        print(f"\n  → Download fonts from: https://fonts.google.com/specimen/Inter")
        print(f"  → Place TTF files in: {FONTS_DIR}")

    return not missing_fonts


def main():
    print("=" * 50)
    print("Product Pic Studio - Asset Setup")
    print("=" * 50)
    print()

    setup_directories()
    download_fonts()

    all_ready = check_assets()

    print()
    print("=" * 50)
    if all_ready:
        print("✓ All assets ready! You can start exporting.")
    else:
        print("⚠ Some fonts are missing.")
        print("  Exports will still work but use Pillow's built-in font.")
    print("=" * 50)


if __name__ == "__main__":
    main()
