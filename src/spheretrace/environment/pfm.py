"""Reader for PFM (Portable Float Map) light-probe images.

A PFM file is a short ASCII header followed by raw 32-bit floats:

    PF            <- "PF" for RGB, "Pf" for greyscale
    <width> <height>
    <scale>       <- sign gives byte order: negative is little-endian

The pixel rows are stored bottom row first. PFMImage flips them on load, so
row 0 is the top of the image. See http://www.pauldebevec.com/Research/HDR/PFM/.

Example:
    >>> probe = PFMImage.load("probes/grace.pfm")
    >>> probe.width, probe.height
    (1000, 1000)
    >>> probe.get(500, 500)
    Color(r=..., g=..., b=..., a=None)
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt

from src.spheretrace.core.color import COLOR_MAX, Color

logger = logging.getLogger(__name__)

# The whole header must fit in this many bytes.
MAX_HEADER_LENGTH = 256

PFM_NEWLINE = b"\n"
COLOR_SIGNATURE = "PF"
GREY_SIGNATURE = "Pf"


def _parse_header(data: bytes) -> tuple[int, int, int, str, int]:
    """Split and validate the three header lines.

    Returns:
        Tuple of (channels, width, height, byte_order, data_offset).

    Raises:
        ValueError: If the header is malformed.
    """
    head = data[:MAX_HEADER_LENGTH]
    lines = head.split(PFM_NEWLINE, 3)
    if len(lines) < 4:
        if len(data) <= MAX_HEADER_LENGTH:
            raise ValueError(
                f"PFM header truncated: expected 3 header lines, got {len(lines) - 1}"
            )
        raise ValueError(f"PFM header longer than {MAX_HEADER_LENGTH} bytes")

    signature = lines[0].decode("ascii", errors="replace").strip()
    if signature == COLOR_SIGNATURE:
        channels = 3
    elif signature == GREY_SIGNATURE:
        channels = 1
    else:
        raise ValueError(
            f"PFM header not intact: expected '{COLOR_SIGNATURE}' or "
            f"'{GREY_SIGNATURE}', got '{signature}'"
        )

    raw_dimensions = lines[1].decode("ascii", errors="replace").split()
    if len(raw_dimensions) != 2:
        raise ValueError(f"Expected 2 dimensions, got {len(raw_dimensions)}")
    try:
        width, height = (int(s, 10) for s in raw_dimensions)
    except ValueError:
        raise ValueError(f"Unparseable PFM dimensions: {raw_dimensions}") from None
    if width <= 0 or height <= 0:
        raise ValueError(f"PFM dimensions must be positive, got {width}x{height}")

    try:
        scale = float(lines[2].decode("ascii", errors="replace"))
    except ValueError:
        raise ValueError(f"Unparseable PFM scale: {lines[2]!r}") from None
    byte_order = "<" if scale < 0 else ">"

    data_offset = len(lines[0]) + len(lines[1]) + len(lines[2]) + 3 * len(PFM_NEWLINE)
    return channels, width, height, byte_order, data_offset


class PFMImage:
    """A decoded PFM image.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        pixels: Float32 array of shape (height, width, 3), row 0 at the top.
            Greyscale files are expanded to three equal channels.
    """

    def __init__(self, pixels: npt.NDArray[np.float32]) -> None:
        """Wrap an already decoded (height, width, 3) pixel array."""
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected pixel array of shape (H, W, 3), got {pixels.shape}")
        self.pixels = pixels
        self.height, self.width = int(pixels.shape[0]), int(pixels.shape[1])

    @classmethod
    def from_bytes(cls, data: bytes) -> PFMImage:
        """Decode a PFM file held in memory.

        Args:
            data: The complete file contents.

        Returns:
            The decoded image.

        Raises:
            ValueError: If the header is malformed or the pixel data is
                truncated.
        """
        channels, width, height, byte_order, offset = _parse_header(data)

        count = width * height * channels
        dtype = np.dtype(f"{byte_order}f4")
        available = (len(data) - offset) // dtype.itemsize
        if available < count:
            raise ValueError(
                f"PFM data truncated: expected {count} floats, got {available}"
            )

        floats = np.frombuffer(data, dtype=dtype, count=count, offset=offset)
        pixels = floats.astype(np.float32).reshape(height, width, channels)
        if channels == 1:
            pixels = np.repeat(pixels, 3, axis=2)

        # Stored bottom-to-top
        return cls(np.ascontiguousarray(np.flipud(pixels)))

    @classmethod
    def load(cls, filepath: str | Path) -> PFMImage:
        """Read and decode a PFM file from disk.

        Raises:
            OSError: If the file cannot be read.
            ValueError: If the file is not a valid PFM image.
        """
        path = Path(filepath)
        image = cls.from_bytes(path.read_bytes())
        logger.info(f"Loaded PFM probe {path}: {image.width}x{image.height}")
        return image

    def get(self, x: int, y: int) -> Color:
        """Sample one pixel, scaled from float radiance into the 8-bit range.

        Args:
            x: Column, 0 at the left.
            y: Row, 0 at the top.

        Returns:
            The pixel color times COLOR_MAX.

        Raises:
            IndexError: If (x, y) lies outside the image. Negative indices
                are rejected rather than wrapped.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"PFM sample ({x}, {y}) outside image of size {self.width}x{self.height}"
            )
        r, g, b = self.pixels[y, x]
        return Color(float(r) * COLOR_MAX, float(g) * COLOR_MAX, float(b) * COLOR_MAX)


def encode_pfm(pixels: npt.NDArray[np.float32], little_endian: bool = True) -> bytes:
    """Encode a (height, width, 3) array, row 0 at the top, as PFM bytes."""
    height, width = pixels.shape[:2]
    dtype = np.dtype("<f4" if little_endian else ">f4")
    scale = -1.0 if little_endian else 1.0
    header = f"{COLOR_SIGNATURE}\n{width} {height}\n{scale}\n".encode("ascii")
    body = np.flipud(pixels).astype(dtype).tobytes()
    return header + body
