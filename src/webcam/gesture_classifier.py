"""
Gesture classification from hand landmarks.
Detects pinch, open hand, fist and (in the extended set) zoom-in, zoom-out,
peace sign and reset poses, and attributes smoothed palm motion to the
active gesture.
"""
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Dict, Optional, Tuple

from .config import GestureConfig
from .landmarks import (
    FINGER_JOINTS,
    HandLandmarks,
    distance_2d,
    distance_3d,
    mean_point,
)

Vector = Tuple[float, float]
ZERO: Vector = (0.0, 0.0)


class Gesture(Enum):
    """Resolved interaction mode for one frame."""
    NONE = auto()
    PINCH = auto()      # Thumb + index touching (absolute zoom)
    ZOOM_IN = auto()    # Thumb + index extended apart
    ZOOM_OUT = auto()   # Index only
    ROTATE = auto()     # Open hand
    PAN = auto()        # Peace sign
    FREEZE = auto()     # Fist
    RESET = auto()      # Thumb + pinky

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Gesture.NONE: "",
    Gesture.PINCH: "ZOOM",
    Gesture.ZOOM_IN: "ZOOM IN",
    Gesture.ZOOM_OUT: "ZOOM OUT",
    Gesture.ROTATE: "ROTATE",
    Gesture.PAN: "MOVE",
    Gesture.FREEZE: "FREEZE",
    Gesture.RESET: "RESET",
}

# Highest priority first. Exactly one gesture drives the controller per frame.
GESTURE_PRIORITY = (
    Gesture.RESET,
    Gesture.PINCH,
    Gesture.ZOOM_IN,
    Gesture.ZOOM_OUT,
    Gesture.ROTATE,
    Gesture.PAN,
    Gesture.FREEZE,
)


@dataclass(frozen=True)
class GestureState:
    """Per-frame classification result. Always fully populated."""
    is_pinching: bool = False
    is_open_hand: bool = False
    is_fist: bool = False
    is_zoom_in: bool = False
    is_zoom_out: bool = False
    is_peace: bool = False
    is_reset: bool = False
    palm_position: Optional[Vector] = None
    pinch_distance: float = 0.0
    rotation_delta: Vector = ZERO
    position_delta: Vector = ZERO
    curled_fingers: int = 0
    gesture: Gesture = Gesture.NONE
    frame_id: int = 0

    @classmethod
    def empty(cls, frame_id: int = 0) -> "GestureState":
        """Neutral state for a frame without a hand."""
        return cls(frame_id=frame_id)

    @property
    def hand_present(self) -> bool:
        return self.palm_position is not None


@dataclass(frozen=True)
class ClassifierHistory:
    """
    The only state retained between frames.

    prev_palm survives a no-hand gap; hand_lost makes the first frame after
    the gap re-anchor instead of attributing the jump as motion.
    """
    prev_palm: Optional[Vector] = None
    smoothed_rotation: Vector = ZERO
    smoothed_position: Vector = ZERO
    frame_id: int = 0
    hand_lost: bool = False


@dataclass(frozen=True)
class HandFeatures:
    """Geometric primitives shared by every gesture rule."""
    palm: Vector
    pinch_distance: float
    curled: Tuple[bool, bool, bool, bool] = field(default=(False,) * 4)  # index..pinky
    thumb_extended: bool = False
    spread: float = 0.0   # Mean tip-to-wrist distance

    @property
    def curled_count(self) -> int:
        return sum(self.curled)


def gesture_flags(pinch=False, zoom_in=False, zoom_out=False, open_hand=False,
                  peace=False, fist=False, reset=False) -> Dict[Gesture, bool]:
    return {
        Gesture.RESET: reset,
        Gesture.PINCH: pinch,
        Gesture.ZOOM_IN: zoom_in,
        Gesture.ZOOM_OUT: zoom_out,
        Gesture.ROTATE: open_hand,
        Gesture.PAN: peace,
        Gesture.FREEZE: fist,
    }


def resolve_gesture(flags: Dict[Gesture, bool]) -> Gesture:
    """Pick the single active gesture by GESTURE_PRIORITY."""
    for gesture in GESTURE_PRIORITY:
        if flags.get(gesture):
            return gesture
    return Gesture.NONE


def palm_position(hand: HandLandmarks, points: int = 3) -> Vector:
    """Mean of wrist and the index/pinky (and optionally middle) MCP joints."""
    indices = [HandLandmarks.WRIST, HandLandmarks.INDEX_MCP, HandLandmarks.PINKY_MCP]
    if points == 4:
        indices.append(HandLandmarks.MIDDLE_MCP)
    return mean_point([hand.get(i) for i in indices])


def pinch_distance(hand: HandLandmarks, depth_weight: float = 0.5) -> float:
    return distance_3d(hand.thumb_tip, hand.index_tip, depth_weight)


def finger_curls(hand: HandLandmarks, ratio: float = 1.1) -> Tuple[bool, bool, bool, bool]:
    """
    A finger is curled when its tip is not meaningfully further from the
    wrist than its PIP joint.
    """
    wrist = hand.wrist
    return tuple(
        distance_2d(hand.get(tip), wrist) < ratio * distance_2d(hand.get(pip), wrist)
        for tip, pip in FINGER_JOINTS
    )


def thumb_extended(hand: HandLandmarks, ratio: float = 1.1) -> bool:
    """Thumb tip points away from the palm, past the IP joint."""
    pinky_mcp = hand.get(HandLandmarks.PINKY_MCP)
    tip_dist = distance_2d(hand.thumb_tip, pinky_mcp)
    ip_dist = distance_2d(hand.get(HandLandmarks.THUMB_IP), pinky_mcp)
    return tip_dist > ratio * ip_dist


def extract_features(hand: HandLandmarks, config: GestureConfig) -> HandFeatures:
    wrist = hand.wrist
    tips = [hand.get(tip) for tip, _ in FINGER_JOINTS]
    spread = sum(distance_2d(t, wrist) for t in tips) / len(tips)
    return HandFeatures(
        palm=palm_position(hand, config.palm_points),
        pinch_distance=pinch_distance(hand, config.pinch_depth_weight),
        curled=finger_curls(hand, config.curl_ratio),
        thumb_extended=thumb_extended(hand, config.curl_ratio),
        spread=spread,
    )


def detect_gestures(features: HandFeatures, config: GestureConfig) -> Dict[Gesture, bool]:
    """Coarse per-gesture conditions. Several may hold at once."""
    pinching = features.pinch_distance < config.pinch_threshold
    curled = features.curled_count
    fist = curled >= 3 and not pinching
    open_hand = features.spread > config.open_spread and curled <= 1 and not pinching

    if config.gesture_set != "extended":
        return gesture_flags(pinch=pinching, open_hand=open_hand, fist=fist)

    index_c, middle_c, ring_c, pinky_c = features.curled
    thumb = features.thumb_extended
    zoom_in = thumb and not index_c and middle_c and ring_c and pinky_c and not pinching
    zoom_out = not thumb and not index_c and middle_c and ring_c and pinky_c and not pinching
    peace = not index_c and not middle_c and ring_c and pinky_c and not pinching
    reset = thumb and index_c and middle_c and ring_c and not pinky_c and not pinching

    return gesture_flags(
        pinch=pinching, zoom_in=zoom_in, zoom_out=zoom_out,
        open_hand=open_hand, peace=peace, fist=fist, reset=reset,
    )


def _ema(raw: Vector, prev: Vector, alpha: float) -> Vector:
    return (
        alpha * raw[0] + (1.0 - alpha) * prev[0],
        alpha * raw[1] + (1.0 - alpha) * prev[1],
    )


def classify(
    observation,
    history: ClassifierHistory,
    config: GestureConfig,
) -> Tuple[GestureState, ClassifierHistory]:
    """
    Classify one frame.

    Args:
        observation: HandLandmarks, a sequence of 21 (x, y, z) points,
                     or None when no hand was detected
        history: Retained state from the previous frame
        config: Gesture thresholds

    Returns:
        (GestureState, updated ClassifierHistory)

    Raises:
        InvalidObservation: observation does not hold exactly 21 points
    """
    frame_id = history.frame_id + 1

    if observation is None:
        return GestureState.empty(frame_id), replace(
            history,
            frame_id=frame_id,
            smoothed_rotation=ZERO,
            smoothed_position=ZERO,
            hand_lost=True,
        )

    hand = HandLandmarks.from_points(observation)
    features = extract_features(hand, config)
    flags = detect_gestures(features, config)
    gesture = resolve_gesture(flags)

    palm = features.palm
    if history.prev_palm is None or history.hand_lost:
        dx, dy = ZERO
    else:
        dx = palm[0] - history.prev_palm[0]
        dy = palm[1] - history.prev_palm[1]

    alpha = config.motion_smoothing
    smoothed_rotation = ZERO
    smoothed_position = ZERO
    if gesture == Gesture.ROTATE:
        # Vertical hand motion tilts about x, horizontal spins about y
        raw = (dy * config.rotation_gain, -dx * config.rotation_gain)
        smoothed_rotation = _ema(raw, history.smoothed_rotation, alpha)
    elif gesture == Gesture.PAN:
        # Image y grows downward, scene y grows upward
        raw = (dx * config.pan_gain, -dy * config.pan_gain)
        smoothed_position = _ema(raw, history.smoothed_position, alpha)

    state = GestureState(
        is_pinching=flags[Gesture.PINCH],
        is_open_hand=flags[Gesture.ROTATE],
        is_fist=flags[Gesture.FREEZE],
        is_zoom_in=flags[Gesture.ZOOM_IN],
        is_zoom_out=flags[Gesture.ZOOM_OUT],
        is_peace=flags[Gesture.PAN],
        is_reset=flags[Gesture.RESET],
        palm_position=palm,
        pinch_distance=features.pinch_distance,
        rotation_delta=smoothed_rotation,
        position_delta=smoothed_position,
        curled_fingers=features.curled_count,
        gesture=gesture,
        frame_id=frame_id,
    )
    new_history = ClassifierHistory(
        prev_palm=palm,
        smoothed_rotation=smoothed_rotation,
        smoothed_position=smoothed_position,
        frame_id=frame_id,
        hand_lost=False,
    )
    return state, new_history


class GestureClassifier:
    """
    Recognizes gestures from hand landmarks, one frame at a time.

    Gestures detected:
    - Pinch: Thumb tip close to index tip
    - Open hand: Fingers spread, at most one curled (rotate)
    - Fist: Three or more fingers curled (freeze)
    - Extended set: zoom-in, zoom-out, peace sign (pan), thumb+pinky (reset)
    """

    def __init__(self, config: GestureConfig):
        """
        Initialize gesture classifier.

        Args:
            config: Gesture detection thresholds
        """
        self._config = config
        self._history = ClassifierHistory()

    def update(self, landmarks) -> GestureState:
        """Classify one frame (landmarks may be None for a no-hand frame)."""
        state, self._history = classify(landmarks, self._history, self._config)
        return state

    def reset(self) -> None:
        """Discard retained motion history. Frame ids keep counting."""
        self._history = ClassifierHistory(frame_id=self._history.frame_id)

    @property
    def history(self) -> ClassifierHistory:
        return self._history

    @property
    def config(self) -> GestureConfig:
        return self._config
