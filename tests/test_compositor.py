"""
Tests for the circular compositor.

Covers:
- Draw rectangle geometry (centering, scale, offset mapping)
- Circular clipping (transparent corners, opaque center)
- Deterministic output for identical inputs
- No raster -> no artifact
- Physical vs legacy offset mapping on the export surface
"""
import pytest
from PyQt5.QtGui import QImage

from conftest import make_payload
from models.geometry import GeometryConfig
from models.transform import Transform
from services.bitmap_loader import decode_payload
from services.compositor import compute_draw_rect, composite_circle, render_circle


def _alpha(image, x, y):
    return image.pixelColor(x, y).alpha()


def _is_red(image, x, y):
    c = image.pixelColor(x, y)
    return c.alpha() == 255 and c.red() == 255 and c.green() == 0 and c.blue() == 0


@pytest.fixture
def dot(qapp, small_payload):
    """20x20 red raster"""
    return decode_payload(small_payload, serial=2)


class TestDrawRect:

    def test_identity_centers_raster(self):
        rect = compute_draw_rect((400, 300), Transform.identity(), 151)
        assert rect.width() == 400
        assert rect.height() == 300
        assert rect.x() == pytest.approx((151 - 400) / 2)
        assert rect.y() == pytest.approx((151 - 300) / 2)
        assert rect.center().x() == pytest.approx(75.5)
        assert rect.center().y() == pytest.approx(75.5)

    def test_scale_applies_to_both_axes(self):
        rect = compute_draw_rect((400, 300), Transform(0, 0, 0.5), 151)
        assert (rect.width(), rect.height()) == (200, 150)
        assert rect.center().x() == pytest.approx(75.5)

    def test_offset_scaled_by_factor(self):
        rect = compute_draw_rect((20, 20), Transform(50, -20, 1), 151, offset_factor=151 / 200)
        assert rect.x() == pytest.approx(65.5 + 50 * 151 / 200)
        assert rect.y() == pytest.approx(65.5 - 20 * 151 / 200)

    def test_offset_unscaled_by_default(self):
        rect = compute_draw_rect((20, 20), Transform(50, 0, 1), 151)
        assert rect.x() == pytest.approx(115.5)


class TestRender:

    def test_surface_is_output_diameter(self, raster, geometry):
        surface = render_circle(raster, Transform.identity(), geometry)
        assert surface.width() == surface.height() == 151

    def test_corners_clipped(self, raster, geometry):
        surface = render_circle(raster, Transform.identity(), geometry)
        for x, y in [(0, 0), (150, 0), (0, 150), (150, 150), (5, 5)]:
            assert _alpha(surface, x, y) == 0

    def test_center_filled(self, raster, geometry):
        surface = render_circle(raster, Transform.identity(), geometry)
        assert _is_red(surface, 75, 75)
        # Inside the disc near the left edge, raster still covers it
        assert _is_red(surface, 5, 75)

    def test_content_outside_raster_transparent(self, dot, geometry):
        surface = render_circle(dot, Transform.identity(), geometry)
        assert _is_red(surface, 75, 75)
        assert _alpha(surface, 30, 75) == 0

    def test_panned_far_away_leaves_empty_disc(self, dot, geometry):
        surface = render_circle(dot, Transform(5000, 5000, 1), geometry)
        assert _alpha(surface, 75, 75) == 0


class TestCompositeCircle:

    def test_no_raster_no_artifact(self, geometry):
        assert composite_circle(None, Transform.identity(), geometry) is None

    def test_artifact_is_png_at_output_size(self, raster, geometry):
        artifact = composite_circle(raster, Transform.identity(), geometry)
        assert artifact.data.startswith(b"\x89PNG")
        assert artifact.diameter_px == 151
        image = artifact.to_qimage()
        assert (image.width(), image.height()) == (151, 151)

    def test_data_uri(self, raster, geometry):
        artifact = composite_circle(raster, Transform.identity(), geometry)
        assert artifact.data_uri.startswith("data:image/png;base64,")

    def test_key_identifies_inputs(self, raster, geometry):
        t = Transform(3, 4, 1.2)
        assert composite_circle(raster, t, geometry).key == (raster.serial, t)

    def test_idempotent(self, raster, geometry):
        t = Transform(12.5, -7, 1.3)
        first = composite_circle(raster, t, geometry)
        second = composite_circle(raster, t, geometry)
        assert first.data == second.data
        assert first == second

    def test_different_transform_changes_pixels(self, dot, geometry):
        a = composite_circle(dot, Transform(0, 0, 1), geometry)
        b = composite_circle(dot, Transform(30, 0, 1), geometry)
        assert a.data != b.data

    def test_save_writes_bytes(self, raster, geometry, tmp_path):
        artifact = composite_circle(raster, Transform.identity(), geometry)
        out = tmp_path / "circle.png"
        artifact.save(out)
        assert out.read_bytes() == artifact.data


class TestOffsetMapping:
    """Export offset handling: physical (default) vs legacy raw preview pixels.

    A 20x20 dot moved 50 preview px right:
    - physical: left edge at 65.5 + 50*151/200 = 103.25 -> covers x 104..122
    - legacy:   left edge at 65.5 + 50 = 115.5        -> covers x 116..134
    """

    def test_physical_mapping_matches_preview_fraction(self, dot):
        geometry = GeometryConfig(offset_mapping='physical')
        surface = composite_circle(dot, Transform(50, 0, 1), geometry).to_qimage()
        assert _is_red(surface, 110, 75)
        assert _alpha(surface, 128, 75) == 0

    def test_legacy_mapping_uses_raw_offset(self, dot):
        geometry = GeometryConfig(offset_mapping='legacy')
        surface = composite_circle(dot, Transform(50, 0, 1), geometry).to_qimage()
        assert _is_red(surface, 128, 75)
        assert _alpha(surface, 110, 75) == 0

    def test_mappings_agree_at_zero_offset(self, dot):
        physical = composite_circle(dot, Transform(0, 0, 1), GeometryConfig(offset_mapping='physical'))
        legacy = composite_circle(dot, Transform(0, 0, 1), GeometryConfig(offset_mapping='legacy'))
        assert physical.data == legacy.data

    @pytest.mark.parametrize("dpi", [96, 192, 300])
    def test_offset_position_is_independent_of_dpi(self, dpi):
        geometry = GeometryConfig(export_dpi=dpi)
        diameter = geometry.output_diameter_px
        rect = compute_draw_rect((20, 20), Transform(40, -30, 1), diameter, geometry.offset_factor)
        # Shift of the raster center, as a fraction of the surface, equals the preview fraction
        assert (rect.center().x() - diameter / 2) / diameter == pytest.approx(40 / 200)
        assert (rect.center().y() - diameter / 2) / diameter == pytest.approx(-30 / 200)
