"""Interaction controller for the crop surface.

Turns pointer drags, slider values, arrow-key nudges and reset requests into
Transform updates. Two states:

    Idle --pointer_down (raster loaded)--> Dragging
    Dragging --pointer_move--> Dragging
    Dragging --pointer_up / pointer_leave--> Idle

Reset is accepted in either state and drops any drag in progress.
"""

import logging

from PyQt5.QtCore import QObject, pyqtSignal

from models.errors import ClampedInputWarning
from models.transform import Transform, Vec2, clamp_scale
from .drag_context import DragSession

logger = logging.getLogger(__name__)


class InteractionController(QObject):
    """Owns the Transform and the drag-session lifecycle."""

    transformChanged = pyqtSignal(object)  # Transform
    dragStarted = pyqtSignal()
    dragEnded = pyqtSignal()

    STATE_IDLE = 'idle'
    STATE_DRAGGING = 'dragging'

    def __init__(self, parent=None):
        super().__init__(parent)
        self.transform = Transform.identity()
        self.drag_session = None
        self.raster_loaded = False

    @property
    def state(self):
        return self.STATE_DRAGGING if self.drag_session is not None else self.STATE_IDLE

    @property
    def is_dragging(self):
        return self.drag_session is not None

    def set_raster_loaded(self, loaded):
        """Enable or disable dragging depending on whether a raster is present."""
        self.raster_loaded = bool(loaded)
        if not self.raster_loaded:
            self._end_drag()

    # ========================================
    # Pointer events
    # ========================================

    def pointer_down(self, x, y):
        """Start a drag. Returns True if Dragging was entered."""
        if not self.raster_loaded:
            return False
        self.drag_session = DragSession(
            anchor_offset=self.transform.offset,
            anchor_pointer=Vec2(x, y),
        )
        self.dragStarted.emit()
        return True

    def pointer_move(self, x, y):
        """Move the raster relative to the drag anchors. No-op when Idle."""
        if self.drag_session is None:
            return False
        offset = self.drag_session.offset_for(Vec2(x, y))
        return self._apply(self.transform.with_offset(offset))

    def pointer_up(self):
        """End the drag. No-op when Idle."""
        return self._end_drag()

    def pointer_leave(self):
        """Leaving the surface while pressed counts as a release."""
        return self.pointer_up()

    # ========================================
    # Scale / reset / nudge
    # ========================================

    def set_scale(self, value):
        """Store a new scale, clamped into [MIN_SCALE, MAX_SCALE]."""
        clamped = clamp_scale(value)
        if clamped != float(value):
            logger.debug("%s", ClampedInputWarning(value, clamped))
        return self._apply(self.transform.with_scale(clamped))

    def reset(self):
        """Restore the identity transform, cancelling any drag."""
        self._end_drag()
        return self._apply(Transform.identity(), force=True)

    def nudge(self, dx, dy):
        """Shift the offset by a fixed amount (keyboard arrows)."""
        if not self.raster_loaded:
            return False
        return self._apply(self.transform.with_offset(self.transform.offset + Vec2(dx, dy)))

    def restore(self, transform):
        """Replace the transform wholesale without emitting (used on image load)."""
        self._end_drag()
        self.transform = transform

    def _end_drag(self):
        if self.drag_session is None:
            return False
        self.drag_session = None
        self.dragEnded.emit()
        return True

    def _apply(self, transform, force=False):
        if transform == self.transform and not force:
            return False
        self.transform = transform
        self.transformChanged.emit(transform)
        return True
