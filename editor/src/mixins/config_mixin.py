"""Configuration management for CircleCropperWindow"""

import os
import json
import logging

from models.geometry import GeometryConfig
from utils.logger import loggerRaise

logger = logging.getLogger(__name__)


class ConfigMixin:
    """Config file operations: geometry settings and recent images

    Expected state variables (initialized in main class):
    - config_dir, config_file: str
    - recent_files: list
    - max_recent_files: int
    - crop_geometry: GeometryConfig
    """

    def _load_config(self):
        """Load geometry settings and recent files from the config file

        A missing or unreadable config falls back to defaults.
        """
        config = {}
        if os.path.exists(self.config_file):
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    config = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Ignoring unreadable config %s: %s", self.config_file, e)
                config = {}

        self.recent_files = [f for f in config.get('recent_files', []) if os.path.exists(f)]
        try:
            self.crop_geometry = GeometryConfig.from_settings(config.get('geometry'))
        except (TypeError, ValueError) as e:
            logger.warning("Invalid geometry settings, using defaults: %s", e)
            self.crop_geometry = GeometryConfig()
        return config

    def _save_config(self):
        """Save geometry settings and recent files to the config file

        An unwritable config location is logged and skipped; the in-memory
        settings stay in effect for this run.
        """
        config = {
            'geometry': self.crop_geometry.to_settings(),
            'recent_files': self.recent_files[:self.max_recent_files],
        }
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(config, f, indent=2)
        except OSError as e:
            logger.warning("Could not write config %s: %s", self.config_file, e)
        except Exception as e:
            loggerRaise(e, "Error saving config")

    def _add_to_recent_files(self, filepath):
        """Add an image path to the front of the recent files list"""
        if filepath in self.recent_files:
            self.recent_files.remove(filepath)

        self.recent_files.insert(0, filepath)
        self.recent_files = self.recent_files[:self.max_recent_files]

        if hasattr(self, 'recent_menu'):
            self._update_recent_files_menu()

        self._save_config()

    def _update_recent_files_menu(self):
        """Update the Recent Images submenu"""
        self.recent_menu.clear()

        if not self.recent_files:
            no_recent = self.recent_menu.addAction("No recent images")
            no_recent.setEnabled(False)
            return

        for filepath in self.recent_files:
            if os.path.exists(filepath):
                action = self.recent_menu.addAction(os.path.basename(filepath))
                action.setToolTip(filepath)
                # Default argument captures filepath per action
                action.triggered.connect(lambda checked, f=filepath: self.open_image_path(f))

        self.recent_menu.addSeparator()
        clear_action = self.recent_menu.addAction("Clear Recent Images")
        clear_action.triggered.connect(self._clear_recent_files)

    def _clear_recent_files(self):
        """Clear the recent files list"""
        self.recent_files = []
        if hasattr(self, 'recent_menu'):
            self._update_recent_files_menu()
        self._save_config()
