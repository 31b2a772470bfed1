"""Preview module for rendering output.

Components:
    export: Frame buffer to image file encoding via Pillow

Example:
    >>> from bandtrace.preview import save_image
    >>> # save_image(renderer.run(), "out.png")
"""

from bandtrace.preview.export import buffer_to_image, save_image

__all__ = [
    "buffer_to_image",
    "save_image",
]
