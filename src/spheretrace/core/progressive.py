"""Row-by-row renderer driving the tracer over a whole image.

This module provides a convenient wrapper around cast() that supports:
- Rendering a full image into a RenderTarget
- Progress callbacks after every row for UI updates
- A generator interface yielding after every row
- Reset and re-render functionality

Every pixel gets exactly one camera ray. Rows are independent given the
read-only scene; yielding between rows only keeps a host UI responsive and
does not change the result.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.core.progressive import RowRenderer
    >>> from src.spheretrace.core.target import RenderTarget
    >>> from src.spheretrace.scene.generator import create_sphere_field_scene
    >>>
    >>> scene, camera = create_sphere_field_scene()
    >>> renderer = RowRenderer(scene, camera, RenderTarget(160, 120))
    >>> renderer.render()
    >>> rgba = renderer.target.to_rgba()
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator

from src.spheretrace.camera.pinhole import PinholeCamera, get_pixel_ray, setup_camera
from src.spheretrace.core.color import Color
from src.spheretrace.core.integrator import TraceContext, TracerSettings, cast
from src.spheretrace.core.target import RenderTarget
from src.spheretrace.scene.manager import Scene

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class RowRenderer:
    """Renders a scene into a RenderTarget one row at a time.

    Each call to render() or render_progressive() is one render pass with
    its own TraceContext. A fatal error during a pass (such as an
    environment lookup out of bounds) propagates to the caller; the rows
    finished before it remain in the target.

    Attributes:
        scene: The scene being rendered.
        target: The render target receiving colors.
        settings: Tracer configuration for each pass.
    """

    def __init__(
        self,
        scene: Scene,
        camera: PinholeCamera,
        target: RenderTarget,
        settings: TracerSettings | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            scene: The scene to render.
            camera: Camera used to build one ray per pixel.
            target: Destination for traced colors.
            settings: Tracer configuration; defaults when None.
        """
        self.scene = scene
        self.target = target
        self.settings = settings if settings is not None else TracerSettings()
        self._basis = setup_camera(camera)
        self._context = TraceContext.from_settings(self.settings)

    @property
    def cast_count(self) -> int:
        """Get the number of casts in the current (or last) pass."""
        return self._context.cast_count

    def reset(self) -> None:
        """Clear the target and start a fresh pass context."""
        self.target.clear()
        self._context = TraceContext.from_settings(self.settings)

    def render_row(self, j: int) -> list[Color]:
        """Trace every pixel of row j and write it into the target.

        Args:
            j: Row index, 0 at the top.

        Returns:
            The traced colors, left to right.
        """
        width, height = self.target.width, self.target.height
        colors = [
            cast(self.scene, get_pixel_ray(self._basis, i, j, width, height), 0, self._context)
            for i in range(width)
        ]
        self.target.write_row(j, colors)
        return colors

    def render_progressive(self) -> Generator[tuple[int, int], None, None]:
        """Render the image, yielding progress after each row.

        Yields:
            Tuple of (rows_done, total_rows).

        Example:
            >>> for done, total in renderer.render_progressive():
            ...     print(f"Progress: {done}/{total} rows")
        """
        self.reset()
        total_rows = self.target.height
        logger.info(
            f"Rendering {self.target.width}x{total_rows} "
            f"({len(self.scene.objects)} objects, depth_mode={self.settings.depth_mode})"
        )

        start_time = time.time()
        for j in range(total_rows):
            self.render_row(j)
            logger.debug(f"Row {j + 1}/{total_rows} done, {self.cast_count} casts")
            yield (j + 1, total_rows)

        logger.info(
            f"Render finished in {time.time() - start_time:.2f}s with {self.cast_count} casts"
        )

    def render(self, callback: ProgressCallback | None = None) -> None:
        """Render the whole image with an optional progress callback.

        Args:
            callback: Optional function called after each row with
                (rows_done, total_rows).
        """
        for done, total in self.render_progressive():
            if callback is not None:
                callback(done, total)
