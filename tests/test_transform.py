"""
Tests for the Transform value type and geometry config.
"""
import pytest

from models.transform import Transform, Vec2, clamp_scale
from models.geometry import GeometryConfig, output_diameter_for


class TestClampScale:

    @pytest.mark.parametrize("requested,expected", [
        (5.0, 3.0),
        (3.0001, 3.0),
        (0.0, 0.1),
        (-2.0, 0.1),
        (0.05, 0.1),
        (0.1, 0.1),
        (1.7, 1.7),
        (3.0, 3.0),
    ])
    def test_clamp_to_nearest_bound(self, requested, expected):
        assert clamp_scale(requested) == pytest.approx(expected)

    def test_transform_construction_clamps(self):
        assert Transform(0, 0, 5).scale == 3.0
        assert Transform(0, 0, 0.01).scale == 0.1


class TestTransform:

    def test_identity(self):
        t = Transform.identity()
        assert (t.offset_x, t.offset_y, t.scale) == (0.0, 0.0, 1.0)
        assert t.is_identity

    def test_offsets_unconstrained(self):
        t = Transform(-5000, 12000, 1)
        assert t.offset == Vec2(-5000.0, 12000.0)

    def test_with_offset_keeps_scale(self):
        t = Transform(0, 0, 2).with_offset(Vec2(10, -4))
        assert t == Transform(10, -4, 2)

    def test_with_scale_clamps(self):
        assert Transform(3, 4, 1).with_scale(9).scale == 3.0

    def test_hashable_and_comparable(self):
        assert hash(Transform(1, 2, 1.5)) == hash(Transform(1.0, 2.0, 1.5))
        assert Transform(1, 2, 1.5) != Transform(1, 2, 1.6)

    def test_vec2_arithmetic_and_unpacking(self):
        x, y = Vec2(3, 4) + Vec2(1, 1) - Vec2(2, 0)
        assert (x, y) == (2, 5)


class TestGeometryConfig:

    def test_default_output_diameter(self):
        assert GeometryConfig().output_diameter_px == 151

    def test_output_diameter_formula(self):
        assert output_diameter_for(40, 300) == round(40 / 25.4 * 300)
        assert output_diameter_for(25.4, 100) == 100

    def test_physical_offset_factor(self):
        g = GeometryConfig(preview_diameter_px=200, target_diameter_mm=40, export_dpi=96)
        assert g.offset_factor == pytest.approx(151 / 200)

    def test_legacy_offset_factor(self):
        g = GeometryConfig(offset_mapping='legacy')
        assert g.offset_factor == 1.0

    def test_rejects_unknown_mapping(self):
        with pytest.raises(ValueError):
            GeometryConfig(offset_mapping='stretch')

    def test_rejects_non_positive_sizes(self):
        with pytest.raises(ValueError):
            GeometryConfig(preview_diameter_px=0)
        with pytest.raises(ValueError):
            GeometryConfig(export_dpi=-1)

    def test_settings_roundtrip_with_missing_keys(self):
        g = GeometryConfig.from_settings({'export_dpi': 300})
        assert g.export_dpi == 300
        assert g.preview_diameter_px == 200
        assert GeometryConfig.from_settings(g.to_settings()) == g

    def test_from_settings_none_gives_defaults(self):
        assert GeometryConfig.from_settings(None) == GeometryConfig()
