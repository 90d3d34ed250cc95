"""
Tonie Circle Cropper - Data Models

Plain value types for the crop pipeline. This is the MODEL in MVC
architecture: no widgets, no rendering.
"""

from .errors import CropperError, UnsupportedMediaError, DecodeError, ClampedInputWarning
from .geometry import GeometryConfig, output_diameter_for
from .raster import ImagePayload, RasterImage, Artifact
from .transform import Transform, Vec2, clamp_scale

__all__ = [
    'CropperError', 'UnsupportedMediaError', 'DecodeError', 'ClampedInputWarning',
    'GeometryConfig', 'output_diameter_for',
    'ImagePayload', 'RasterImage', 'Artifact',
    'Transform', 'Vec2', 'clamp_scale',
]
