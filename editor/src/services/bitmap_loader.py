"""Bitmap loading for the crop pipeline.

Validates the payload media type, decodes it with Pillow and wraps the
pixels in an RGBA QImage. Decoding runs on a QThread worker so the GUI stays
responsive; every load gets a generation number and results from older
generations are dropped when they arrive.
"""

import io
import logging

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError
from PyQt5.QtCore import QObject, QThread, pyqtSignal
from PyQt5.QtGui import QImage

from models.errors import UnsupportedMediaError, DecodeError
from models.raster import RasterImage

logger = logging.getLogger(__name__)


def validate_payload(payload):
    """Raise UnsupportedMediaError unless the payload is an image type."""
    media_type = payload.resolved_media_type
    if not media_type.startswith('image/'):
        raise UnsupportedMediaError(media_type, payload.name)


def decode_payload(payload, serial=0):
    """Decode an image payload into a RasterImage.

    Args:
        payload: ImagePayload with the raw file bytes
        serial: Load sequence number stamped on the raster

    Returns:
        RasterImage holding an RGBA QImage with its own pixel buffer

    Raises:
        DecodeError: If the bytes cannot be decoded as an image
    """
    if not payload.data:
        raise DecodeError(payload.name, "file is empty")

    try:
        with Image.open(io.BytesIO(payload.data)) as img:
            img.load()
            # Apply the EXIF Orientation tag so camera photos come out upright
            img = ImageOps.exif_transpose(img)
            img = img.convert('RGBA')
    except (UnidentifiedImageError, OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise DecodeError(payload.name, str(e)) from e

    width, height = img.size
    if width == 0 or height == 0:
        raise DecodeError(payload.name, "image has no pixels")

    img_data = np.ascontiguousarray(np.array(img, dtype=np.uint8))
    pixels = img_data.tobytes()
    qimage = QImage(pixels, width, height, img_data.strides[0], QImage.Format_RGBA8888)
    # QImage only borrows the pixel buffer; copy so the raster owns its pixels
    qimage = qimage.copy()

    return RasterImage(width=width, height=height, image=qimage, serial=serial, name=payload.name)


class DecodeWorker(QThread):
    """Worker thread that decodes one payload."""

    decoded = pyqtSignal(int, object)  # generation, RasterImage
    failed = pyqtSignal(int, object)   # generation, DecodeError

    def __init__(self, payload, generation, parent=None):
        super().__init__(parent)
        self.payload = payload
        self.generation = generation

    def run(self):
        try:
            raster = decode_payload(self.payload, serial=self.generation)
        except DecodeError as e:
            self.failed.emit(self.generation, e)
            return
        self.decoded.emit(self.generation, raster)


class BitmapLoader(QObject):
    """Loads image payloads asynchronously, keeping only the latest request.

    Signals are emitted on the thread that owns the loader (the GUI thread),
    once per current load.
    """

    rasterLoaded = pyqtSignal(object)  # RasterImage
    decodeFailed = pyqtSignal(object)  # DecodeError

    def __init__(self, parent=None):
        super().__init__(parent)
        self.generation = 0
        self._workers = set()

    def load(self, payload):
        """Start decoding a payload.

        Raises:
            UnsupportedMediaError: Immediately, before any state changes
        """
        validate_payload(payload)
        self.generation += 1
        generation = self.generation
        logger.debug("Decoding %r (generation %d)", payload.name, generation)

        worker = DecodeWorker(payload, generation)
        worker.decoded.connect(self._on_decoded)
        worker.failed.connect(self._on_failed)
        worker.finished.connect(self._on_worker_finished)
        self._workers.add(worker)
        worker.start()
        return generation

    def load_sync(self, payload):
        """Validate and decode inline, returning the RasterImage.

        Supersedes any in-flight asynchronous load.
        """
        validate_payload(payload)
        self.generation += 1
        return decode_payload(payload, serial=self.generation)

    def cancel(self):
        """Make any in-flight decode stale."""
        self.generation += 1

    def wait(self, msecs=5000):
        """Block until all workers have finished (used on shutdown)."""
        for worker in list(self._workers):
            worker.wait(msecs)

    def _is_current(self, generation):
        if generation != self.generation:
            logger.debug("Discarding stale decode result (generation %d, current %d)", generation, self.generation)
            return False
        return True

    def _on_decoded(self, generation, raster):
        if self._is_current(generation):
            logger.info("Loaded %r (%dx%d)", raster.name, raster.width, raster.height)
            self.rasterLoaded.emit(raster)

    def _on_failed(self, generation, error):
        if self._is_current(generation):
            logger.warning("%s", error)
            self.decodeFailed.emit(error)

    def _on_worker_finished(self):
        worker = self.sender()
        self._workers.discard(worker)
        worker.deleteLater()
