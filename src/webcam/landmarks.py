"""
Hand landmark container and the small geometry helpers shared by the
classifier and the preview drawing.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from typing import List, Sequence, Tuple
import math

Point3 = Tuple[float, float, float]

NUM_LANDMARKS = 21


class InvalidObservation(ValueError):
    """A landmark observation that does not hold exactly 21 (x, y, z) points."""


@dataclass
class HandLandmarks:
    """
    Normalized hand landmarks from MediaPipe.

    Attributes:
        landmarks: List of 21 (x, y, z) tuples, x/y normalized 0-1
        handedness: 'Left' or 'Right'
        confidence: Detection confidence 0-1
    """
    landmarks: List[Point3]
    handedness: str = "Unknown"
    confidence: float = 1.0

    # MediaPipe landmark indices for convenience
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20

    def __post_init__(self):
        if len(self.landmarks) != NUM_LANDMARKS:
            raise InvalidObservation(
                f"Expected {NUM_LANDMARKS} landmarks, got {len(self.landmarks)}"
            )

    @classmethod
    def from_points(cls, points: Sequence, handedness: str = "Unknown",
                    confidence: float = 1.0) -> "HandLandmarks":
        """
        Build an observation from (x, y, z) sequences, {"x", "y", "z"}
        mappings or objects with x/y/z attributes (MediaPipe
        NormalizedLandmark).

        Raises:
            InvalidObservation: not 21 points, or a point is not (x, y, z)
        """
        if isinstance(points, HandLandmarks):
            return points
        try:
            points = list(points)
        except TypeError as e:
            raise InvalidObservation(f"Landmarks must be a sequence, got {points!r}") from e
        if len(points) != NUM_LANDMARKS:
            raise InvalidObservation(
                f"Expected {NUM_LANDMARKS} landmarks, got {len(points)}"
            )
        converted = [_to_point3(i, p) for i, p in enumerate(points)]
        return cls(landmarks=converted, handedness=handedness, confidence=confidence)

    def get(self, index: int) -> Point3:
        """Get landmark by index."""
        return self.landmarks[index]

    @property
    def thumb_tip(self) -> Point3:
        return self.landmarks[self.THUMB_TIP]

    @property
    def index_tip(self) -> Point3:
        return self.landmarks[self.INDEX_TIP]

    @property
    def wrist(self) -> Point3:
        return self.landmarks[self.WRIST]


# (tip, pip) pairs for the four non-thumb fingers
FINGER_JOINTS = [
    (HandLandmarks.INDEX_TIP, HandLandmarks.INDEX_PIP),
    (HandLandmarks.MIDDLE_TIP, HandLandmarks.MIDDLE_PIP),
    (HandLandmarks.RING_TIP, HandLandmarks.RING_PIP),
    (HandLandmarks.PINKY_TIP, HandLandmarks.PINKY_PIP),
]

# Hand connections for drawing (same as MediaPipe's HAND_CONNECTIONS)
HAND_CONNECTIONS = [
    (0, 1), (1, 2), (2, 3), (3, 4),      # Thumb
    (0, 5), (5, 6), (6, 7), (7, 8),      # Index
    (0, 9), (9, 10), (10, 11), (11, 12), # Middle
    (0, 13), (13, 14), (14, 15), (15, 16), # Ring
    (0, 17), (17, 18), (18, 19), (19, 20), # Pinky
    (5, 9), (9, 13), (13, 17),           # Palm
]


def distance_2d(p1: Point3, p2: Point3) -> float:
    """2D distance between two 3D points (ignoring z)."""
    dx = p1[0] - p2[0]
    dy = p1[1] - p2[1]
    return math.sqrt(dx*dx + dy*dy)


def distance_3d(p1: Point3, p2: Point3, depth_weight: float = 1.0) -> float:
    """3D distance with the depth axis scaled by depth_weight."""
    dx = p1[0] - p2[0]
    dy = p1[1] - p2[1]
    dz = (p1[2] - p2[2]) * depth_weight
    return math.sqrt(dx*dx + dy*dy + dz*dz)


def mean_point(points: Sequence[Point3]) -> Tuple[float, float]:
    """Image-plane centroid of a set of landmarks."""
    n = len(points)
    return (sum(p[0] for p in points) / n, sum(p[1] for p in points) / n)


def _to_point3(index: int, p) -> Point3:
    """Convert one landmark given as x/y/z attributes, a mapping or a 3-sequence."""
    try:
        if hasattr(p, "x"):
            coords = (p.x, p.y, p.z)
        elif isinstance(p, Mapping):
            coords = (p["x"], p["y"], p["z"])
        else:
            coords = tuple(p)
    except (AttributeError, KeyError, TypeError) as e:
        raise InvalidObservation(f"Landmark {index} is not an (x, y, z) point: {p!r}") from e

    if len(coords) != 3:
        raise InvalidObservation(f"Landmark {index} has {len(coords)} coordinates, expected 3")
    try:
        return (float(coords[0]), float(coords[1]), float(coords[2]))
    except (TypeError, ValueError) as e:
        raise InvalidObservation(f"Landmark {index} has non-numeric coordinates: {p!r}") from e
