"""UI components for Tonie Circle Cropper

- crop_widgets: Drag session and interaction controller (no painting)
- crop_widget.py: Interactive circular viewport
- circle_preview.py: Artifact consumer shown at export resolution
"""

from .crop_widget import CropWidget
from .circle_preview import CirclePreview, CircleDisc

__all__ = [
    'CropWidget',
    'CirclePreview',
    'CircleDisc',
]
