"""
Circular crop compositor.

Renders a raster through the current transform onto a square export surface,
clipped to the inscribed disc, and encodes the result as PNG.

The same draw-rectangle math drives the live preview (in preview pixels) and
the export (in output pixels) so both show the same physical placement.
"""

import logging

from PyQt5.QtCore import QBuffer, QByteArray, QIODevice, QRectF, Qt
from PyQt5.QtGui import QImage, QPainter, QPainterPath

from constants import ARTIFACT_FORMAT
from models.raster import Artifact

logger = logging.getLogger(__name__)


def compute_draw_rect(raster_size, transform, surface_diameter, offset_factor=1.0):
    """Rectangle the raster occupies on a square surface, before clipping.

    Args:
        raster_size: (width, height) of the raster in pixels
        transform: Transform with offsets in preview pixels
        surface_diameter: Side of the target surface in pixels
        offset_factor: Multiplier from preview pixels to surface pixels

    Returns:
        QRectF: top-left at ((D - w*s)/2 + ox*f, (D - h*s)/2 + oy*f), size (w*s, h*s)
    """
    width, height = raster_size
    scaled_w = width * transform.scale
    scaled_h = height * transform.scale
    left = (surface_diameter - scaled_w) / 2 + transform.offset_x * offset_factor
    top = (surface_diameter - scaled_h) / 2 + transform.offset_y * offset_factor
    return QRectF(left, top, scaled_w, scaled_h)


def circle_clip_path(diameter):
    """Disc centered on a square surface of the given side."""
    path = QPainterPath()
    path.addEllipse(QRectF(0, 0, diameter, diameter))
    return path


def render_circle(raster, transform, geometry):
    """Draw the clipped composite onto a fresh transparent QImage.

    Returns:
        QImage of side geometry.output_diameter_px
    """
    diameter = geometry.output_diameter_px

    surface = QImage(diameter, diameter, QImage.Format_ARGB32_Premultiplied)
    surface.fill(Qt.transparent)

    painter = QPainter(surface)
    try:
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setRenderHint(QPainter.SmoothPixmapTransform, True)
        painter.setClipPath(circle_clip_path(diameter))

        rect = compute_draw_rect(raster.size, transform, diameter, geometry.offset_factor)
        painter.drawImage(rect, raster.image)
    finally:
        painter.end()

    return surface


def encode_surface(surface, fmt=ARTIFACT_FORMAT):
    """Encode a QImage into bytes."""
    byte_array = QByteArray()
    buffer = QBuffer(byte_array)
    buffer.open(QIODevice.WriteOnly)
    if not surface.save(buffer, fmt):
        raise RuntimeError(f"Failed to encode surface as {fmt}")
    buffer.close()
    return bytes(byte_array)


def composite_circle(raster, transform, geometry):
    """Produce the circular artifact for a raster and transform.

    Args:
        raster: RasterImage, or None when nothing is loaded
        transform: Transform to apply
        geometry: GeometryConfig with preview/output diameters

    Returns:
        Artifact, or None when no raster is loaded
    """
    if raster is None:
        return None

    surface = render_circle(raster, transform, geometry)
    data = encode_surface(surface)
    logger.debug("Composited %r at %s -> %d bytes", raster.name, transform, len(data))
    return Artifact(data=data, diameter_px=geometry.output_diameter_px, key=(raster.serial, transform))
