"""End-to-end tests: scene, probe, renderer and export together.

These render tiny images so they stay fast on the CPU backend.
"""

import numpy as np


def _probe_file(tmp_path, height=16, width=32):
    """Write a probe whose left half is blue and right half is orange."""
    from src.spheretrace.environment.pfm import encode_pfm

    pixels = np.zeros((height, width, 3), dtype=np.float32)
    pixels[:, : width // 2] = (0.1, 0.2, 0.9)
    pixels[:, width // 2 :] = (0.9, 0.5, 0.1)
    path = tmp_path / "probe.pfm"
    path.write_bytes(encode_pfm(pixels))
    return path


class TestEndToEnd:
    """Full renders of the sphere field."""

    def test_sphere_field_with_probe(self, tmp_path):
        """Test a seeded render with a light probe is deterministic and in range."""
        from src.spheretrace.core.integrator import MAX_BOUNCED_RAYS, TracerSettings
        from src.spheretrace.core.progressive import RowRenderer
        from src.spheretrace.core.target import RenderTarget
        from src.spheretrace.environment import Lightmap, PFMImage
        from src.spheretrace.scene.generator import create_sphere_field_scene

        lightmap = Lightmap(PFMImage.load(_probe_file(tmp_path)))
        scene, camera = create_sphere_field_scene(environment=lightmap, aspect_ratio=4 / 3)

        images = []
        for _ in range(2):
            target = RenderTarget(16, 12)
            renderer = RowRenderer(scene, camera, target, TracerSettings(seed=5))
            renderer.render()
            images.append(target.to_rgba())

            pixels = 16 * 12
            max_casts = 1 + MAX_BOUNCED_RAYS + MAX_BOUNCED_RAYS * 2
            assert pixels <= renderer.cast_count <= pixels * max_casts

        np.testing.assert_array_equal(images[0], images[1])
        assert np.all(images[0][..., 3] == 255)
        # The probe and the lit spheres give more than one color
        assert len(np.unique(images[0][..., :3].reshape(-1, 3), axis=0)) > 1

    def test_depth_render(self):
        """Test that depth mode yields grey pixels and black background."""
        from src.spheretrace.core.integrator import TracerSettings
        from src.spheretrace.core.progressive import RowRenderer
        from src.spheretrace.core.target import RenderTarget
        from src.spheretrace.scene.generator import create_sphere_field_scene

        scene, camera = create_sphere_field_scene()
        target = RenderTarget(12, 12)
        renderer = RowRenderer(scene, camera, target, TracerSettings(depth_mode=True))
        renderer.render()

        rgba = target.to_rgba()
        assert np.all(rgba[..., 0] == rgba[..., 1])
        assert np.all(rgba[..., 1] == rgba[..., 2])
        # One cast per pixel: depth mode never bounces
        assert renderer.cast_count == 144

    def test_example_script(self, tmp_path):
        """Test the example renderer writes a PNG."""
        from PIL import Image

        from examples.render_spheres import render_spheres

        output = render_spheres(
            width=8,
            height=6,
            num_spheres=3,
            seed=2,
            probe_path=str(_probe_file(tmp_path)),
            output_path=str(tmp_path / "spheres.png"),
            quiet=True,
        )

        with Image.open(output) as image:
            assert image.size == (8, 6)
