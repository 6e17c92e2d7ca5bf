#!/usr/bin/env python3
"""Create a JPEG thumbnail from an image file.

The longer side of the image is scaled to THUMBNAIL_SIZE pixels (200 by
default) and the aspect ratio is preserved. Small images are scaled up.

Usage:
    uv run scripts/thumbnail.py <input_image> <output_thumbnail>
"""
# /// script
# requires-python = ">=3.11"
# dependencies = ["Pillow"]
# ///

import argparse
import sys
from pathlib import Path

from PIL import Image

THUMBNAIL_SIZE = 200  # px, longer side
JPEG_QUALITY = 75

# Modes the JPEG encoder accepts without conversion
JPEG_MODES = ("RGB", "L", "CMYK")

# Pillow resizes these modes with NEAREST whatever filter is asked for
RESAMPLE_MODES = {"1": "L", "P": "RGB", "PA": "RGBA"}


class ThumbnailError(Exception):
    """Base class for thumbnail failures."""


class DecodeError(ThumbnailError):
    """Input image is missing, unreadable or in an unsupported format."""


class EncodeError(ThumbnailError):
    """Thumbnail could not be written to the output path."""


def read_image(path: str | Path) -> Image.Image:
    """Open and fully decode an image file."""
    try:
        with Image.open(path) as img:
            img.load()
    except (OSError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Cannot read image {path}: {e}") from e
    return img


def target_size(width: int, height: int, size: int = THUMBNAIL_SIZE) -> tuple[int, int]:
    """Return (width, height) with the longer side equal to ``size``.

    The shorter side is rounded half up and never drops below 1 pixel.
    """
    if size < 1:
        raise ValueError(f"Thumbnail size must be positive, got {size}")
    if width >= height:
        return size, max(1, int(height * size / width + 0.5))
    return max(1, int(width * size / height + 0.5)), size


def scale(image: Image.Image | None, size: int = THUMBNAIL_SIZE) -> Image.Image:
    """Return a new image whose longer side is ``size`` pixels."""
    if image is None:
        raise ValueError("No image to scale")
    if image.mode in RESAMPLE_MODES:
        mode = RESAMPLE_MODES[image.mode]
        if image.mode == "P" and "transparency" in image.info:
            mode = "RGBA"
        image = image.convert(mode)
    new_size = target_size(image.width, image.height, size)
    if new_size == image.size:
        return image.copy()
    return image.resize(new_size, Image.Resampling.LANCZOS)


def write_image(image: Image.Image, path: str | Path, quality: int = JPEG_QUALITY) -> None:
    """Encode ``image`` as JPEG at ``path``, replacing any existing file."""
    if image.mode not in JPEG_MODES:
        image = image.convert("RGB")
    try:
        image.save(path, "JPEG", quality=quality)
    except (OSError, ValueError) as e:
        raise EncodeError(f"Cannot write thumbnail {path}: {e}") from e


def create_thumbnail(
    input_path: str | Path,
    output_path: str | Path,
    size: int = THUMBNAIL_SIZE,
    quality: int = JPEG_QUALITY,
) -> tuple[int, int]:
    """Read, scale and write a thumbnail. Returns the thumbnail dimensions."""
    thumb = scale(read_image(input_path), size)
    write_image(thumb, output_path, quality)
    return thumb.size


def _quality(value: str) -> int:
    quality = int(value)
    if not 1 <= quality <= 95:
        raise argparse.ArgumentTypeError(f"quality must be between 1 and 95, got {quality}")
    return quality


def _positive(value: str) -> int:
    size = int(value)
    if size < 1:
        raise argparse.ArgumentTypeError(f"size must be positive, got {size}")
    return size


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="thumbnail",
        description=f"Scale an image so its longer side is {THUMBNAIL_SIZE} pixels (see --size) and save it as JPEG",
    )
    parser.add_argument("input", type=Path, help="Path to the input image")
    parser.add_argument("output", type=Path, help="Path of the JPEG thumbnail to write")
    parser.add_argument(
        "-s", "--size",
        type=_positive,
        default=THUMBNAIL_SIZE,
        help=f"Length of the longer side in pixels (default: {THUMBNAIL_SIZE})",
    )
    parser.add_argument(
        "-q", "--quality",
        type=_quality,
        default=JPEG_QUALITY,
        help=f"JPEG quality, 1-95 (default: {JPEG_QUALITY})",
    )

    args = parser.parse_args(argv)

    try:
        width, height = create_thumbnail(args.input, args.output, args.size, args.quality)
    except ThumbnailError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {width}x{height} thumbnail -> {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
