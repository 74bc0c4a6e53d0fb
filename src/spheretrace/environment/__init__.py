"""Environment module for light probes.

Components:
    pfm: PFM (Portable Float Map) decoding into a float pixel array
    lightmap: Direction-to-color lookup over a decoded probe

Rays that escape the scene are colored by the scene's environment, if one
is attached. Any object with a get(direction) -> Color method will do;
Lightmap is the probe-backed implementation.

Malformed probe files raise ValueError when decoded. Lookups that land
outside the probe raise IndexError, which aborts the render pass.
"""

from .lightmap import EnvironmentLookup, Lightmap
from .pfm import MAX_HEADER_LENGTH, PFMImage, encode_pfm

__all__ = [
    "EnvironmentLookup",
    "Lightmap",
    "PFMImage",
    "encode_pfm",
    "MAX_HEADER_LENGTH",
]
