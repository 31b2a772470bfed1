"""Camera module for view and ray generation.

This module provides the camera model for generating primary rays:

Components:
    thin_lens: Thin-lens perspective camera with depth of field, and the
        serializable CameraConfig that builds it

Camera responsibilities:
    - Transform (s, t) image coordinates to world-space rays
    - Sample the lens aperture for depth of field
    - Support look-at positioning with up vector

Ray generation uses normalized image coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image
"""

from .thin_lens import Camera, CameraConfig

__all__ = [
    "Camera",
    "CameraConfig",
]
