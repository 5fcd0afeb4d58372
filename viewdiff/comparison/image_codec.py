"""Image codec — reads and writes PNG screenshots with Pillow."""

from __future__ import annotations

import io
import logging
from pathlib import Path

from PIL import Image

logger = logging.getLogger(__name__)


def decode(path: str | Path) -> Image.Image:
    """Load an image file fully into memory."""
    with Image.open(path) as im:
        im.load()
        return im.copy()


def decode_bytes(data: bytes) -> Image.Image:
    """Decode an in-memory PNG (e.g. a Playwright screenshot)."""
    with Image.open(io.BytesIO(data)) as im:
        im.load()
        return im.copy()


def encode(image: Image.Image, path: str | Path) -> Path:
    """Write ``image`` as PNG, creating parent directories as needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path, format="PNG")
    logger.debug("Wrote %dx%d image to %s", image.width, image.height, path)
    return path
