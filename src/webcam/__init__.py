"""
HandSpin Webcam Module

Hand landmarks, gesture classification and tracking lifecycle.
The MediaPipe tracker and the Qt worker live in `hand_tracker` and `worker`
and are imported explicitly by the application.
"""
from .config import Config, load_config
from .landmarks import HandLandmarks, InvalidObservation
from .gesture_classifier import (
    ClassifierHistory,
    Gesture,
    GestureClassifier,
    GestureState,
    classify,
)
from .session import TrackingSession

__all__ = [
    'Config',
    'load_config',
    'HandLandmarks',
    'InvalidObservation',
    'ClassifierHistory',
    'Gesture',
    'GestureClassifier',
    'GestureState',
    'classify',
    'TrackingSession',
]
