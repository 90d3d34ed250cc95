"""
Crop session - wires loader, controller, compositor and publisher together.

The raster slot and the controller's Transform are the single source of
truth. Every change to either calls recompute(), which always renders from
current state, so the latest transform wins.
"""

import logging

from PyQt5.QtCore import QObject, pyqtSignal

from components.crop_widgets.interaction import InteractionController
from models.geometry import GeometryConfig
from models.transform import Transform
from services.bitmap_loader import BitmapLoader
from services.compositor import composite_circle
from services.publisher import ArtifactPublisher

logger = logging.getLogger(__name__)


class CropSession(QObject):
    """One interactive crop: a raster slot, its transform and the resulting artifact."""

    artifactChanged = pyqtSignal(object)  # Artifact
    rasterChanged = pyqtSignal(object)    # RasterImage
    errorOccurred = pyqtSignal(object)    # CropperError

    def __init__(self, geometry=None, parent=None):
        super().__init__(parent)
        self.geometry = geometry or GeometryConfig()
        self.raster = None

        self.controller = InteractionController(self)
        self.loader = BitmapLoader(self)
        self.publisher = ArtifactPublisher()
        self.publisher.add_listener(self.artifactChanged.emit)

        self.controller.transformChanged.connect(self._on_transform_changed)
        self.loader.rasterLoaded.connect(self.set_raster)
        self.loader.decodeFailed.connect(self._on_decode_failed)

    @property
    def transform(self):
        return self.controller.transform

    @property
    def artifact(self):
        return self.publisher.last_artifact

    def add_listener(self, callback):
        """Register an artifact consumer."""
        self.publisher.add_listener(callback)

    def remove_listener(self, callback):
        self.publisher.remove_listener(callback)

    # ========================================
    # Loading
    # ========================================

    def load_file(self, payload):
        """Start loading a payload in the background.

        Raises:
            UnsupportedMediaError: Before anything changes
        """
        return self.loader.load(payload)

    def load_file_sync(self, payload):
        """Load and apply a payload inline.

        Raises:
            UnsupportedMediaError, DecodeError: Previous state is kept
        """
        raster = self.loader.load_sync(payload)
        self.set_raster(raster)
        return raster

    def set_raster(self, raster):
        """Replace the raster and reset the transform to identity."""
        self.raster = raster
        # The old artifact belongs to the old raster
        self.publisher.clear()
        self.controller.restore(Transform.identity())
        self.controller.set_raster_loaded(raster is not None)
        self.rasterChanged.emit(raster)
        self.recompute()

    # ========================================
    # Recompute
    # ========================================

    def recompute(self):
        """Render from current state and publish.

        Returns:
            The new Artifact, or None when no raster is loaded
        """
        artifact = composite_circle(self.raster, self.controller.transform, self.geometry)
        if artifact is not None:
            self.publisher.publish(artifact)
        return artifact

    def _on_transform_changed(self, transform):
        if self.raster is None:
            return
        self.recompute()

    def _on_decode_failed(self, error):
        self.errorOccurred.emit(error)
