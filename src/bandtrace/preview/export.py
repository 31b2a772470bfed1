"""Image export utilities for rendered frame buffers.

This module provides functions for saving rendered 8-bit RGB buffers to
files. The renderer already applies gamma correction, so the bytes are
written unchanged.

Supported formats:
    - Any RGB format Pillow can write, chosen from the file extension
      (PNG, PPM, BMP, TIFF, ...)

Example:
    >>> from bandtrace.preview.export import save_image
    >>> # pixels = renderer.run()
    >>> # save_image(pixels, "out.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from bandtrace.errors import OutputError

logger = logging.getLogger(__name__)


def buffer_to_image(pixels: npt.NDArray[np.uint8]) -> PILImage.Image:
    """Wrap a frame buffer in a Pillow image.

    Args:
        pixels: Array of shape (H, W, 3) with dtype uint8, row 0 at the top.

    Returns:
        An RGB Pillow image.

    Raises:
        ValueError: If the buffer has the wrong shape or dtype.
    """
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected a buffer of shape (H, W, 3), got {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 buffer, got {pixels.dtype}")
    return PILImage.fromarray(np.ascontiguousarray(pixels))


def save_image(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save a frame buffer as an image file.

    The format is chosen from the file extension.

    Args:
        pixels: Array of shape (H, W, 3) with dtype uint8.
        filepath: Output file path (e.g., "out.png").

    Returns:
        The path written.

    Raises:
        ValueError: If the buffer has the wrong shape or dtype.
        OutputError: If the file cannot be encoded or written.
    """
    image = buffer_to_image(pixels)
    path = Path(filepath)
    try:
        image.save(path)
    except (OSError, ValueError) as e:
        # Pillow raises ValueError for unknown extensions
        raise OutputError(f"Could not write image to {path}: {e}") from e
    logger.info("Saved %dx%d image to %s", image.width, image.height, path)
    return path
