"""
Crop Widget - Interactive circular viewport for positioning the image

Shows the raster inside a dashed circle at preview resolution and forwards
mouse drags and arrow keys to the InteractionController. The raster is drawn
with the compositor's draw rectangle, computed at export resolution and
scaled down. With the default physical offset mapping the preview shows
exactly what the artifact will contain; in legacy mode offsets are applied
unscaled at export resolution, so the artifact placement differs from the
preview by the preview/output diameter ratio.
"""

from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QRectF
from PyQt5.QtGui import QPainter, QPen, QColor, QBrush

from constants import ARROW_KEY_MOVE_NORMAL, ARROW_KEY_MOVE_COARSE
from services.compositor import compute_draw_rect, circle_clip_path


class CropWidget(QWidget):
    """Square preview viewport bound to a CropSession"""

    BACKGROUND_COLOR = QColor(243, 244, 246)
    BORDER_COLOR = QColor(209, 213, 219)
    HINT_COLOR = QColor(156, 163, 175, 128)

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session
        self.controller = session.controller

        diameter = session.geometry.preview_diameter_px
        self.setFixedSize(diameter, diameter)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setCursor(Qt.OpenHandCursor)
        self.setToolTip("Drag to position - Use slider to scale")

        self.controller.transformChanged.connect(lambda _t: self.update())
        self.controller.dragStarted.connect(lambda: self.setCursor(Qt.ClosedHandCursor))
        self.controller.dragEnded.connect(lambda: self.setCursor(Qt.OpenHandCursor))
        self.session.rasterChanged.connect(lambda _r: self.update())

    @property
    def diameter(self):
        return self.session.geometry.preview_diameter_px

    def preview_rect(self):
        """Raster rectangle in preview pixels, or None when nothing is loaded"""
        raster = self.session.raster
        if raster is None:
            return None
        geometry = self.session.geometry
        rect = compute_draw_rect(
            raster.size, self.controller.transform,
            geometry.output_diameter_px, geometry.preview_to_output
        )
        ratio = 1.0 / geometry.preview_to_output
        return QRectF(rect.x() * ratio, rect.y() * ratio, rect.width() * ratio, rect.height() * ratio)

    # ========================================
    # Painting
    # ========================================

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setRenderHint(QPainter.SmoothPixmapTransform, True)

        circle = QRectF(1, 1, self.diameter - 2, self.diameter - 2)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(self.BACKGROUND_COLOR))
        painter.drawEllipse(circle)

        rect = self.preview_rect()
        if rect is not None:
            painter.save()
            painter.setClipPath(circle_clip_path(self.diameter))
            painter.drawImage(rect, self.session.raster.image)
            painter.restore()

        pen = QPen(self.BORDER_COLOR, 2, Qt.DashLine)
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        painter.drawEllipse(circle)

        # Move hint
        painter.setPen(self.HINT_COLOR)
        painter.drawText(self.rect(), Qt.AlignCenter, "✥")
        painter.end()

    # ========================================
    # Mouse Event Handlers
    # ========================================

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.setFocus()
            if self.controller.pointer_down(event.x(), event.y()):
                event.accept()
                return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if self.controller.pointer_move(event.x(), event.y()) or self.controller.is_dragging:
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton and self.controller.pointer_up():
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        self.controller.pointer_leave()
        super().leaveEvent(event)

    def keyPressEvent(self, event):
        step = ARROW_KEY_MOVE_COARSE if event.modifiers() & Qt.ShiftModifier else ARROW_KEY_MOVE_NORMAL
        moves = {
            Qt.Key_Left: (-step, 0.0),
            Qt.Key_Right: (step, 0.0),
            Qt.Key_Up: (0.0, -step),
            Qt.Key_Down: (0.0, step),
        }
        if event.key() in moves:
            self.controller.nudge(*moves[event.key()])
            event.accept()
            return
        super().keyPressEvent(event)
