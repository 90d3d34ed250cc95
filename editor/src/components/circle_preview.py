"""Circle preview - displays the latest artifact at a fixed on-screen size"""

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QLabel
from PyQt5.QtCore import Qt, QRectF
from PyQt5.QtGui import QPainter, QPen, QColor, QBrush, QImage

from models.geometry import GeometryConfig


class CircleDisc(QWidget):
    """Circular canvas showing an artifact image or a placeholder"""

    def __init__(self, diameter, parent=None):
        super().__init__(parent)
        self.setFixedSize(diameter, diameter)
        self.image = QImage()

    def set_image(self, image):
        self.image = image if image is not None else QImage()
        self.update()

    def has_image(self):
        return not self.image.isNull()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setRenderHint(QPainter.SmoothPixmapTransform, True)

        circle = QRectF(1, 1, self.width() - 2, self.height() - 2)
        painter.setPen(QPen(QColor(209, 213, 219), 2))
        painter.setBrush(QBrush(Qt.white))
        painter.drawEllipse(circle)

        if self.has_image():
            painter.drawImage(QRectF(0, 0, self.width(), self.height()), self.image)
        else:
            painter.setPen(QColor(156, 163, 175))
            painter.drawText(self.rect(), Qt.AlignCenter | Qt.TextWordWrap, "No image selected")
        painter.end()


class CirclePreview(QWidget):
    """Artifact consumer: shows each delivered artifact, replacing the previous one"""

    def __init__(self, geometry=None, parent=None):
        super().__init__(parent)
        self.geometry = geometry or GeometryConfig()
        self.artifact = None

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        # Shown at the export resolution so 1 artifact pixel = 1 screen pixel
        self.disc = CircleDisc(self.geometry.output_diameter_px)
        layout.addWidget(self.disc, alignment=Qt.AlignHCenter)

        size_mm = f"{self.geometry.target_diameter_mm:g}mm"
        self.caption = QLabel(f"{size_mm} × {size_mm}")
        self.caption.setAlignment(Qt.AlignCenter)
        self.caption.setStyleSheet("font-size: 10px; color: #6b7280;")
        layout.addWidget(self.caption)

    def set_artifact(self, artifact):
        """Listener entry point for the publisher"""
        self.artifact = artifact
        self.disc.set_image(artifact.to_qimage() if artifact is not None else None)

    def clear(self):
        self.set_artifact(None)
