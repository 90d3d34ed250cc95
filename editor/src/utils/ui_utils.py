"""
UI Utility Widgets - Reusable input controls
"""

from PyQt5.QtWidgets import QWidget, QHBoxLayout, QLabel, QSlider
from PyQt5.QtCore import Qt, pyqtSignal

from constants import MIN_SCALE, MAX_SCALE, SCALE_STEP, DEFAULT_SCALE


class ScaleSliderWidget(QWidget):
    """Bounded scale control with a "1.0x" readout.

    QSlider is integer based, so values are stored in SCALE_STEP units
    (0.1 -> 1, 3.0 -> 30).

    Usage:
        widget = ScaleSliderWidget()
        widget.valueChanged.connect(controller.set_scale)
    """

    valueChanged = pyqtSignal(float)

    def __init__(self, label="Scale", value=DEFAULT_SCALE, min_val=MIN_SCALE,
                 max_val=MAX_SCALE, step=SCALE_STEP, parent=None):
        super().__init__(parent)
        self.min_val = min_val
        self.max_val = max_val
        self.step = step

        # Block signal recursion during programmatic updates
        self._updating = False

        self._setup_ui(label, value)

    def _setup_ui(self, label, value):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.label = QLabel(f"{label}:")
        self.label.setStyleSheet("font-weight: 500;")
        layout.addWidget(self.label)

        self.slider = QSlider(Qt.Horizontal)
        self.slider.setMinimum(self._to_ticks(self.min_val))
        self.slider.setMaximum(self._to_ticks(self.max_val))
        self.slider.setSingleStep(1)
        self.slider.setValue(self._to_ticks(value))
        self.slider.setStyleSheet("""
            QSlider::groove:horizontal {
                height: 6px;
                border-radius: 3px;
                background-color: rgba(0, 0, 0, 30);
            }
            QSlider::handle:horizontal {
                width: 12px;
                margin: -4px 0;
                border-radius: 6px;
                background-color: #2563eb;
            }
        """)
        self.slider.valueChanged.connect(self._on_slider_changed)
        layout.addWidget(self.slider, 1)

        self.readout = QLabel(self._format(value))
        self.readout.setMinimumWidth(36)
        self.readout.setStyleSheet("color: #4b5563;")
        layout.addWidget(self.readout)

    def _to_ticks(self, value):
        return int(round(value / self.step))

    def _format(self, value):
        return f"{value:.1f}x"

    def _on_slider_changed(self, ticks):
        value = round(ticks * self.step, 4)
        self.readout.setText(self._format(value))
        if self._updating:
            return
        self.valueChanged.emit(value)

    def value(self):
        return round(self.slider.value() * self.step, 4)

    def setValue(self, value):
        """Set value programmatically without emitting valueChanged."""
        value = max(self.min_val, min(self.max_val, value))
        self._updating = True
        self.slider.setValue(self._to_ticks(value))
        self.readout.setText(self._format(value))
        self._updating = False
