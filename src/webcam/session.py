"""
Tracking session: start/stop lifecycle around a landmark source and the
gesture classifier, and the frame pacing used by the polling loop.
"""
from typing import Optional
import time

from .gesture_classifier import GestureClassifier, GestureState
from .landmarks import HandLandmarks


class TrackingSession:
    """
    Couples a landmark source with a GestureClassifier.

    The source needs start() -> bool, stop() and get_landmarks(); HandTracker
    provides all three. start() and stop() are no-ops when already in the
    requested state, and stop() drops the classifier's motion history so a
    restart cannot produce stale deltas.
    """

    def __init__(self, tracker, classifier: GestureClassifier):
        self._tracker = tracker
        self._classifier = classifier
        self._is_running = False
        self._last_state = GestureState.empty()
        self._last_landmarks: Optional[HandLandmarks] = None

    def start(self) -> bool:
        """Begin delivering frames. Returns False if the source failed to start."""
        if self._is_running:
            return True
        if not self._tracker.start():
            return False
        self._is_running = True
        return True

    def stop(self) -> None:
        """Cease delivery and clear transient history."""
        if not self._is_running:
            return
        self._is_running = False
        self._tracker.stop()
        self._classifier.reset()
        self._last_landmarks = None
        self._last_state = GestureState.empty(self._classifier.history.frame_id)

    def poll(self) -> GestureState:
        """Read one frame from the source and classify it."""
        if not self._is_running:
            return self._last_state
        landmarks = self._tracker.get_landmarks()
        self._last_landmarks = landmarks
        self._last_state = self._classifier.update(landmarks)
        return self._last_state

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def last_state(self) -> GestureState:
        return self._last_state

    @property
    def last_landmarks(self) -> Optional[HandLandmarks]:
        return self._last_landmarks

    @property
    def tracker(self):
        return self._tracker


class FramePacer:
    """
    Holds a loop to at most `fps` iterations per second.

    Call wait() once at the end of each iteration; it sleeps out whatever is
    left of the frame interval. A camera read that blocks paces the loop by
    itself, so this only sleeps when reads return early (e.g. a failed read).
    """

    def __init__(self, fps: float, clock=time.perf_counter, sleep=time.sleep):
        if fps <= 0:
            raise ValueError("fps must be positive")
        self._interval = 1.0 / fps
        self._clock = clock
        self._sleep = sleep
        self._loop_start = clock()

    def wait(self) -> None:
        elapsed = self._clock() - self._loop_start
        sleep_time = self._interval - elapsed
        if sleep_time > 0:
            self._sleep(sleep_time)
        self._loop_start = self._clock()

    @property
    def interval(self) -> float:
        return self._interval
