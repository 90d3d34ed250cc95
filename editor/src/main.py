import sys
import os
import argparse
import logging

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QPushButton, QApplication,
    QFileDialog, QGroupBox, QLabel
)
from PyQt5.QtCore import Qt

# Component imports
from components.crop_widget import CropWidget
from components.circle_preview import CirclePreview

# Model / service imports
from models.errors import CropperError
from models.raster import ImagePayload
from services.crop_session import CropSession

# Utility imports
from utils.logger import setup_logging, report_error, set_main_window
from utils.path_resolver import get_config_dir, get_config_file
from utils.ui_utils import ScaleSliderWidget

# Mixin imports
from mixins.config_mixin import ConfigMixin

from constants import MAX_RECENT_FILES, DEFAULT_SCALE

logger = logging.getLogger(__name__)

IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.gif *.bmp *.webp *.tif *.tiff);;All Files (*)"


class CircleCropperWindow(ConfigMixin, QMainWindow):
    """Main window: crop viewport and controls on the left, artifact preview on the right"""

    def __init__(self, config_dir=None):
        super().__init__()
        self.setWindowTitle("Tonie Circle Cropper")

        # Recent files and settings
        self.recent_files = []
        self.max_recent_files = MAX_RECENT_FILES
        # Path of the image being decoded; remembered once it loads
        self._pending_path = None
        self.config_dir = str(config_dir) if config_dir else str(get_config_dir())
        self.config_file = os.path.join(self.config_dir, os.path.basename(str(get_config_file())))
        self._load_config()

        # Session is created after config so it picks up the stored geometry
        self.session = CropSession(self.crop_geometry, self)

        set_main_window(self)
        self.setup_ui()

        self.session.add_listener(self.preview.set_artifact)
        self.session.errorOccurred.connect(self._on_session_error)
        self.session.rasterChanged.connect(self._on_raster_changed)

    # ============= UI Setup =============

    def setup_ui(self):
        self._create_menu_bar()

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(16, 16, 16, 16)
        main_layout.setSpacing(24)

        # Left: crop controls
        crop_group = QGroupBox("Image")
        crop_layout = QVBoxLayout(crop_group)

        button_row = QHBoxLayout()
        self.choose_btn = QPushButton("Choose Image")
        self.choose_btn.clicked.connect(self.choose_image)
        button_row.addWidget(self.choose_btn)

        self.reset_btn = QPushButton("Reset")
        self.reset_btn.clicked.connect(self.reset_transform)
        self.reset_btn.setEnabled(False)
        button_row.addWidget(self.reset_btn)
        button_row.addStretch()
        crop_layout.addLayout(button_row)

        self.scale_slider = ScaleSliderWidget()
        self.scale_slider.valueChanged.connect(self.session.controller.set_scale)
        self.scale_slider.setEnabled(False)
        crop_layout.addWidget(self.scale_slider)

        self.crop_widget = CropWidget(self.session)
        crop_layout.addWidget(self.crop_widget, alignment=Qt.AlignHCenter)

        hint = QLabel("Drag to position • Use slider to scale")
        hint.setAlignment(Qt.AlignCenter)
        hint.setStyleSheet("font-size: 10px; color: #6b7280;")
        crop_layout.addWidget(hint)
        crop_layout.addStretch()
        main_layout.addWidget(crop_group)

        # Right: artifact preview
        preview_group = QGroupBox("Preview")
        preview_layout = QVBoxLayout(preview_group)
        self.preview = CirclePreview(self.session.geometry)
        preview_layout.addWidget(self.preview, alignment=Qt.AlignHCenter)

        self.save_btn = QPushButton("Save PNG...")
        self.save_btn.clicked.connect(self.save_artifact)
        self.save_btn.setEnabled(False)
        preview_layout.addWidget(self.save_btn)
        preview_layout.addStretch()
        main_layout.addWidget(preview_group)

    def _create_menu_bar(self):
        menubar = self.menuBar()
        file_menu = menubar.addMenu("&File")

        open_action = file_menu.addAction("&Open Image...")
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.choose_image)

        self.recent_menu = file_menu.addMenu("Recent Images")
        self._update_recent_files_menu()

        save_action = file_menu.addAction("&Save PNG...")
        save_action.setShortcut("Ctrl+S")
        save_action.triggered.connect(self.save_artifact)

        file_menu.addSeparator()
        exit_action = file_menu.addAction("E&xit")
        exit_action.triggered.connect(self.close)

        edit_menu = menubar.addMenu("&Edit")
        reset_action = edit_menu.addAction("&Reset Position")
        reset_action.setShortcut("Ctrl+R")
        reset_action.triggered.connect(self.reset_transform)

    # ============= Actions =============

    def choose_image(self):
        filepath, _ = QFileDialog.getOpenFileName(self, "Choose Image", "", IMAGE_FILE_FILTER)
        if filepath:
            self.open_image_path(filepath)

    def open_image_path(self, filepath):
        """Read a file and hand it to the session for background decoding"""
        try:
            payload = ImagePayload.from_path(filepath)
            self.session.load_file(payload)
        except OSError as e:
            report_error(e, f"Could not read {filepath}: {e}", "Open Image")
            return
        except CropperError as e:
            report_error(e, title="Open Image")
            return
        self._pending_path = filepath

    def reset_transform(self):
        self.session.controller.reset()
        self.scale_slider.setValue(DEFAULT_SCALE)

    def save_artifact(self):
        artifact = self.session.artifact
        if artifact is None:
            return
        filepath, _ = QFileDialog.getSaveFileName(self, "Save Circle", "circle.png", "PNG (*.png)")
        if not filepath:
            return
        try:
            artifact.save(filepath)
        except OSError as e:
            report_error(e, f"Could not save {filepath}: {e}", "Save PNG")

    # ============= Session callbacks =============

    def _on_raster_changed(self, raster):
        loaded = raster is not None
        self.reset_btn.setEnabled(loaded)
        self.scale_slider.setEnabled(loaded)
        self.save_btn.setEnabled(loaded)
        self.scale_slider.setValue(self.session.transform.scale)
        self.crop_widget.setFocus()

        if loaded and self._pending_path:
            self._add_to_recent_files(self._pending_path)
        self._pending_path = None

    def _on_session_error(self, error):
        self._pending_path = None
        report_error(error, title="Open Image")

    def closeEvent(self, event):
        self.session.loader.wait()
        super().closeEvent(event)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Crop an image into a printable circle")
    parser.add_argument('image', nargs='?', help="Image to open on startup")
    parser.add_argument('--debug', action='store_true', help="Verbose logging")
    args, qt_args = parser.parse_known_args(argv)

    setup_logging(logging.DEBUG if args.debug else logging.WARNING)

    app = QApplication([sys.argv[0]] + qt_args)
    window = CircleCropperWindow()
    window.show()
    if args.image:
        window.open_image_path(args.image)
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
