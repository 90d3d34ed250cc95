"""
Tests for ConfigMixin persistence of geometry settings and recent images.
"""
import json
import os
import pytest

from mixins.config_mixin import ConfigMixin
from models.geometry import GeometryConfig


class _Host(ConfigMixin):
    """Minimal stand-in for the main window"""

    def __init__(self, config_dir):
        self.config_dir = str(config_dir)
        self.config_file = os.path.join(self.config_dir, "config.json")
        self.recent_files = []
        self.max_recent_files = 3
        self.crop_geometry = GeometryConfig()


@pytest.fixture
def host(tmp_path):
    return _Host(tmp_path / "cfg")


class TestConfigMixin:

    def test_missing_config_uses_defaults(self, host):
        host._load_config()
        assert host.crop_geometry == GeometryConfig()
        assert host.recent_files == []

    def test_save_and_reload_geometry(self, host):
        host.crop_geometry = GeometryConfig(export_dpi=300, offset_mapping='legacy')
        host._save_config()

        other = _Host(host.config_dir)
        other._load_config()
        assert other.crop_geometry == host.crop_geometry

    def test_unreadable_config_falls_back(self, host):
        os.makedirs(host.config_dir)
        with open(host.config_file, 'w', encoding='utf-8') as f:
            f.write("{not json")
        host._load_config()
        assert host.crop_geometry == GeometryConfig()

    def test_invalid_geometry_falls_back(self, host):
        os.makedirs(host.config_dir)
        with open(host.config_file, 'w', encoding='utf-8') as f:
            json.dump({'geometry': {'offset_mapping': 'sideways'}}, f)
        host._load_config()
        assert host.crop_geometry == GeometryConfig()

    def test_recent_files_most_recent_first_and_trimmed(self, host, tmp_path):
        paths = []
        for i in range(4):
            p = tmp_path / f"img{i}.png"
            p.write_bytes(b"x")
            paths.append(str(p))
            host._add_to_recent_files(str(p))
        host._add_to_recent_files(paths[1])
        assert host.recent_files == [paths[1], paths[3], paths[2]]

    def test_missing_recent_files_dropped_on_load(self, host, tmp_path):
        keep = tmp_path / "keep.png"
        keep.write_bytes(b"x")
        os.makedirs(host.config_dir)
        with open(host.config_file, 'w', encoding='utf-8') as f:
            json.dump({'recent_files': [str(keep), str(tmp_path / "gone.png")]}, f)
        host._load_config()
        assert host.recent_files == [str(keep)]
