#!/usr/bin/env python3
"""
Start the Product Pic Studio preview server.

Exports are not served here; render them with `studio-export`.
"""

import argparse

import uvicorn
from studio.config import get_settings
from studio.design_templates import SCENE_BACKGROUNDS
from studio.log import configure_logging

settings = get_settings()


def main():
    parser = argparse.ArgumentParser(description="Product Pic Studio preview API")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    args = parser.parse_args()

    configure_logging(settings.log_level)
    print("=" * 50)
    print("Product Pic Studio")
    print("=" * 50)
    print(f"Preview API at http://{settings.host}:{args.port}/api")
    print(f"Scenes: {', '.join(s.name for s in SCENE_BACKGROUNDS.values())}")
    print("Export locally with: studio-export <image> --output out.png")
    print("=" * 50)

    uvicorn.run(
        "studio.main:app",
        host=settings.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
