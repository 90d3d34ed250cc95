"""Drag session dataclass for the crop surface.

Exists only between pointer-down and pointer-up/leave.
"""

from dataclasses import dataclass

from models.transform import Vec2


@dataclass(frozen=True)
class DragSession:
    """Anchors captured when a drag starts.

    Moves are applied relative to these anchors, not as accumulated deltas.
    """
    anchor_offset: Vec2
    anchor_pointer: Vec2

    def offset_for(self, pointer):
        """Offset for the current pointer position."""
        return self.anchor_offset + (pointer - self.anchor_pointer)
