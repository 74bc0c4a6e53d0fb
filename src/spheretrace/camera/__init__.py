"""Camera module for primary ray construction.

Components:
    pinhole: Simple pinhole (perspective) camera model

Ray generation uses normalized image coordinates:
    s in [0, 1]: left to right across image
    t in [0, 1]: bottom to top across image

get_pixel_ray() maps pixel (column, row) with row 0 at the top onto these
coordinates, through the pixel center.
"""

from .pinhole import CameraBasis, PinholeCamera, get_camera_info, get_pixel_ray, setup_camera

__all__ = [
    "PinholeCamera",
    "CameraBasis",
    "setup_camera",
    "get_pixel_ray",
    "get_camera_info",
]
