"""
Tonie Circle Cropper - Crop Interaction Components

- drag_context.py: Drag session anchors
- interaction.py: State machine turning pointer/slider/reset input into Transform updates
"""

from .drag_context import DragSession
from .interaction import InteractionController

__all__ = ['DragSession', 'InteractionController']
