"""
Background worker for MediaPipe hand tracking and gesture classification.
Runs in a separate QThread to avoid blocking the render loop.
"""
import time
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal

from .config import Config
from .gesture_classifier import GestureClassifier
from .hand_tracker import HandTracker
from .session import FramePacer, TrackingSession


class WebcamWorker(QObject):
    """
    Worker class that handles the MediaPipe processing loop.
    Emits one GestureState per loop iteration, at most camera fps times a
    second.
    """
    # Signals
    started = pyqtSignal()
    gesture_detected = pyqtSignal(object)  # Emits GestureState
    frame_ready = pyqtSignal(object)  # Emits numpy array (BGR frame with landmarks)
    error = pyqtSignal(str)
    stopped = pyqtSignal()

    PREVIEW_FPS = 15

    def __init__(self, config: Config, classifier: Optional[GestureClassifier] = None,
                 parent=None):
        """
        Args:
            config: HandSpin configuration
            classifier: Classifier to reuse across workers so frame ids keep
                        counting between tracking sessions
        """
        super().__init__(parent)
        self._config = config
        self._classifier = classifier or GestureClassifier(config.gestures)
        self._session: Optional[TrackingSession] = None
        self._is_running = False

    def start_process(self):
        """Main processing loop. Runs in the worker thread until stop_process()."""
        if self._is_running:
            return

        tracker = HandTracker(self._config)
        self._session = TrackingSession(tracker, self._classifier)

        if not self._session.start():
            self.error.emit("Could not start hand tracking (camera or model unavailable)")
            self.stopped.emit()
            return

        self._is_running = True
        self.started.emit()

        pacer = FramePacer(self._config.camera.fps)
        frame_interval = 1.0 / self.PREVIEW_FPS
        last_frame_time = 0.0

        try:
            while self._is_running:
                state = self._session.poll()
                self.gesture_detected.emit(state)

                now = time.perf_counter()
                if self._config.ui.show_preview and now - last_frame_time >= frame_interval:
                    frame = tracker.get_frame_with_landmarks(
                        self._session.last_landmarks,
                        highlight_pinch=state.is_pinching,
                    )
                    if frame is not None:
                        self.frame_ready.emit(frame)
                    last_frame_time = now

                # Failed reads return at once; never outrun the camera
                pacer.wait()

        except Exception as e:
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            self._session.stop()
            # Neutral state so consumers see the hand disappear
            self.gesture_detected.emit(self._session.last_state)
            self.stopped.emit()

    def stop_process(self):
        """Signal the loop to stop; resources are released in the worker thread."""
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running
