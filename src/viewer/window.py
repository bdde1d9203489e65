"""
Viewer window - 3D model view, gesture indicator, webcam preview and
tracking controls. Drives the render tick.
"""
import time
from typing import Optional
from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QButtonGroup
)
from PyQt5.QtCore import Qt, QThread, QTimer
from PyQt5.QtGui import QImage, QPixmap
import numpy as np

from webcam.config import Config
from webcam.gesture_classifier import Gesture, GestureClassifier, GestureState
from webcam.worker import WebcamWorker
from interaction.controller import InteractionController
from interaction.transform import RenderedTransform

from .meshes import MODEL_TYPES
from .model_widget import ModelWidget

GESTURE_GUIDE = {
    "basic": [
        "Open Hand - Rotate",
        "Pinch - Zoom",
        "Fist - Freeze",
        "R key - Reset",
    ],
    "extended": [
        "Open Hand - Rotate",
        "Thumb+Index - Zoom In",
        "Index Only - Zoom Out",
        "Peace Sign - Move",
        "Fist - Freeze",
        "Thumb+Pinky - Reset",
    ],
}

STYLE = """
QMainWindow, QWidget#SidePanel { background: #070a0f; }
QLabel { color: #c8d2dc; }
QLabel#GestureLabel { color: #00ffff; font-size: 16px; letter-spacing: 3px; }
QPushButton {
    color: #c8d2dc; background: #111821; border: 1px solid #22303d;
    border-radius: 6px; padding: 6px 10px;
}
QPushButton:checked { color: #00ffff; border-color: #00ffff; }
"""


class ViewerWindow(QMainWindow):
    """
    Main window.

    The webcam worker delivers GestureStates on its own thread; the render
    timer ticks the controller with the most recent one on the UI thread.
    """

    def __init__(self, config: Config, parent=None):
        super().__init__(parent)
        self._config = config
        self._controller = InteractionController(config)
        # Shared by every worker so frame ids keep counting across sessions
        self._classifier = GestureClassifier(config.gestures)
        self._rendered = RenderedTransform()
        self._gesture = GestureState.empty()

        self._thread: Optional[QThread] = None
        self._worker: Optional[WebcamWorker] = None
        self._last_error: Optional[str] = None
        self._last_tick = time.perf_counter()

        self.setWindowTitle("HandSpin")
        self.setStyleSheet(STYLE)
        self._setup_ui()

        self._render_timer = QTimer(self)
        self._render_timer.timeout.connect(self._render_tick)
        self._render_timer.start(int(1000 / max(1, config.ui.render_fps)))

    def _setup_ui(self):
        central = QWidget()
        layout = QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        self.setCentralWidget(central)

        # Model view with gesture indicator on top
        view_container = QWidget()
        view_layout = QVBoxLayout(view_container)
        view_layout.setContentsMargins(0, 0, 0, 0)
        self.gesture_label = QLabel("")
        self.gesture_label.setObjectName("GestureLabel")
        self.gesture_label.setAlignment(Qt.AlignCenter)
        self.gesture_label.setFixedHeight(32)
        view_layout.addWidget(self.gesture_label)
        self.model_widget = ModelWidget(self._config.ui.model)
        view_layout.addWidget(self.model_widget, stretch=1)
        layout.addWidget(view_container, stretch=1)

        # Side panel
        panel = QWidget()
        panel.setObjectName("SidePanel")
        panel.setFixedWidth(240)
        panel_layout = QVBoxLayout(panel)

        self.track_button = QPushButton("Start Tracking")
        self.track_button.clicked.connect(self.toggle_tracking)
        panel_layout.addWidget(self.track_button)

        self.reset_button = QPushButton("Reset View")
        self.reset_button.clicked.connect(self.reset_view)
        panel_layout.addWidget(self.reset_button)

        model_row = QHBoxLayout()
        self._model_group = QButtonGroup(self)
        for i, model in enumerate(MODEL_TYPES):
            button = QPushButton(model[0].upper())
            button.setToolTip(model)
            button.setCheckable(True)
            button.setChecked(model == self._config.ui.model)
            button.clicked.connect(lambda _checked, m=model: self.set_model(m))
            self._model_group.addButton(button, i)
            model_row.addWidget(button)
        panel_layout.addLayout(model_row)

        self.status_label = QLabel("Tracking stopped")
        self.status_label.setWordWrap(True)
        panel_layout.addWidget(self.status_label)

        self.webcam_preview = QLabel()
        self.webcam_preview.setAlignment(Qt.AlignCenter)
        self.webcam_preview.setFixedHeight(160)
        self.webcam_preview.setScaledContents(True)
        self.webcam_preview.setVisible(self._config.ui.show_preview)
        panel_layout.addWidget(self.webcam_preview)

        guide = QLabel("\n".join(GESTURE_GUIDE[self._config.gestures.gesture_set]))
        panel_layout.addWidget(guide)
        panel_layout.addStretch(1)

        layout.addWidget(panel)
        self.resize(1000, 640)

    # ------------------------------------------------------------------
    # Tracking lifecycle
    # ------------------------------------------------------------------
    def toggle_tracking(self):
        if self._worker is None:
            self.start_tracking()
        else:
            self.stop_tracking()

    def start_tracking(self):
        """Start the webcam worker. No-op when already tracking."""
        if self._worker is not None:
            return

        self._thread = QThread()
        self._worker = WebcamWorker(self._config, self._classifier)
        self._worker.moveToThread(self._thread)

        self._thread.started.connect(self._worker.start_process)
        self._worker.started.connect(self._on_worker_started, Qt.QueuedConnection)
        self._worker.gesture_detected.connect(self._on_gesture, Qt.QueuedConnection)
        self._worker.frame_ready.connect(self.set_webcam_frame, Qt.QueuedConnection)
        self._worker.error.connect(self._on_worker_error, Qt.QueuedConnection)
        self._worker.stopped.connect(self._on_worker_stopped, Qt.QueuedConnection)

        self.track_button.setText("Stop Tracking")
        self._last_error = None
        self.status_label.setText("Starting camera...")
        self._thread.start()

    def stop_tracking(self):
        """Stop the webcam worker. No-op when not tracking."""
        if self._worker is None:
            return
        self._worker.stop_process()
        self._thread.quit()
        self._thread.wait(2000)
        self._worker = None
        self._thread = None
        self._gesture = GestureState.empty(self._gesture.frame_id)
        self.track_button.setText("Start Tracking")
        self.status_label.setText(self._last_error or "Tracking stopped")
        self.webcam_preview.clear()

    def _on_worker_started(self):
        # New session starts from default targets; a failed start keeps them
        self.reset_view()
        self.status_label.setText("Tracking")

    def _on_worker_stopped(self):
        if self._worker is not None and not self._worker.is_running:
            self.stop_tracking()

    def _on_worker_error(self, message: str):
        print(f"WORKER ERROR: {message}")
        self._last_error = message
        self.status_label.setText(message)

    def _on_gesture(self, state: GestureState):
        self._gesture = state

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------
    def reset_view(self):
        self._controller.reset()
        self._rendered.clear_idle()

    def set_model(self, model: str):
        self.model_widget.set_model(model)

    def set_webcam_frame(self, frame: np.ndarray):
        """Update the webcam preview from a BGR frame."""
        if frame is None:
            self.webcam_preview.clear()
            return
        rgb = frame[:, :, ::-1].copy()
        h, w, ch = rgb.shape
        qimg = QImage(rgb.data, w, h, ch * w, QImage.Format_RGB888)
        self.webcam_preview.setPixmap(QPixmap.fromImage(qimg))

    def keyPressEvent(self, event):
        key = event.key()
        if key == Qt.Key_R:
            self.reset_view()
        elif key == Qt.Key_Space:
            self.toggle_tracking()
        elif Qt.Key_1 <= key < Qt.Key_1 + len(MODEL_TYPES):
            index = key - Qt.Key_1
            self._model_group.button(index).setChecked(True)
            self.set_model(MODEL_TYPES[index])
        else:
            super().keyPressEvent(event)

    # ------------------------------------------------------------------
    # Render tick
    # ------------------------------------------------------------------
    def _render_tick(self):
        now = time.perf_counter()
        dt = min(now - self._last_tick, 0.1)
        self._last_tick = now

        gesture = self._gesture
        target = self._controller.tick(gesture)
        if gesture.gesture == Gesture.RESET:
            self._rendered.clear_idle()
        self._rendered.follow(target, dt, gesture.hand_present, self._config.interaction)
        self.model_widget.set_transform(self._rendered, frozen=target.frozen)

        label = gesture.gesture.label
        if target.frozen and gesture.gesture != Gesture.RESET:
            label = "FROZEN"
        self.gesture_label.setText(label)

        if self._worker is not None and self._worker.is_running:
            if gesture.hand_present:
                self.status_label.setText(
                    f"Hand: {4 - gesture.curled_fingers} fingers extended\n"
                    f"Pinch dist: {gesture.pinch_distance:.3f}\n"
                    f"Scale: {target.scale:.2f}"
                )
            else:
                self.status_label.setText("No hand detected")

    def closeEvent(self, event):
        self.stop_tracking()
        self._render_timer.stop()
        super().closeEvent(event)
