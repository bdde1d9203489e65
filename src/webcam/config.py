"""
Config loader for HandSpin.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple
import yaml


GESTURE_SETS = ("basic", "extended")

# Scale target range per gesture set
SCALE_RANGES = {
    "basic": (0.5, 2.0),
    "extended": (0.3, 3.0),
}


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30
    mirror: bool = True

    def __post_init__(self):
        if self.fps <= 0:
            raise ValueError(f"camera fps must be positive, got {self.fps}")


@dataclass
class MediaPipeConfig:
    model_path: Optional[str] = None
    max_num_hands: int = 1
    min_detection_confidence: float = 0.7
    min_tracking_confidence: float = 0.5


@dataclass
class GestureConfig:
    gesture_set: str = "extended"     # "basic" (pinch/open/fist) or "extended"
    pinch_threshold: float = 0.05     # Normalized thumb-index distance
    pinch_depth_weight: float = 0.5   # z is noisier than x/y
    curl_ratio: float = 1.1           # tip must reach past PIP by this factor
    open_spread: float = 0.15         # Mean tip-to-wrist distance for open hand
    palm_points: int = 3              # 3 = wrist+index/pinky MCP, 4 adds middle MCP

    # Motion attribution
    rotation_gain: float = 5.0
    pan_gain: float = 6.0
    motion_smoothing: float = 0.3     # EMA alpha (weight of the new sample)

    def __post_init__(self):
        if self.gesture_set not in GESTURE_SETS:
            raise ValueError(f"Unknown gesture set: {self.gesture_set!r}")
        if self.palm_points not in (3, 4):
            raise ValueError(f"palm_points must be 3 or 4, got {self.palm_points}")
        if not 0.0 < self.motion_smoothing <= 1.0:
            raise ValueError("motion_smoothing must be in (0, 1]")


@dataclass
class InteractionConfig:
    min_scale: Optional[float] = None   # None = range of the gesture set
    max_scale: Optional[float] = None
    zoom_step: float = 0.02
    pinch_scale_gain: float = 10.0
    position_bounds: Tuple[float, float] = (3.0, 2.0)  # |x| <= 3, |y| <= 2
    freeze_hold_ticks: int = 1

    # Render-side interpolation
    rotation_lerp: float = 0.15
    position_lerp: float = 0.15
    scale_lerp: float = 0.1
    idle_spin: float = 0.2            # rad/s, rendered value only

    def __post_init__(self):
        self.position_bounds = tuple(self.position_bounds)
        if self.freeze_hold_ticks < 1:
            raise ValueError("freeze_hold_ticks must be >= 1")
        if (self.min_scale is not None and self.max_scale is not None
                and self.min_scale > self.max_scale):
            raise ValueError("min_scale must not exceed max_scale")

    def scale_range(self, gesture_set: str) -> Tuple[float, float]:
        """
        Scale clamp range, falling back to the gesture set's defaults.

        Raises:
            ValueError: the resolved range is empty (min above max)
        """
        lo, hi = SCALE_RANGES[gesture_set]
        if self.min_scale is not None:
            lo = self.min_scale
        if self.max_scale is not None:
            hi = self.max_scale
        if lo > hi:
            raise ValueError(
                f"Scale range [{lo}, {hi}] for the {gesture_set} gesture set is empty"
            )
        return lo, hi


@dataclass
class UIConfig:
    model: str = "torus"
    render_fps: int = 60
    show_preview: bool = True


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    interaction: InteractionConfig = field(default_factory=InteractionConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Cross-section checks. Call again after changing gesture_set."""
        if self.gestures.gesture_set not in GESTURE_SETS:
            raise ValueError(f"Unknown gesture set: {self.gestures.gesture_set!r}")
        self.interaction.scale_range(self.gestures.gesture_set)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        interaction=_dict_to_dataclass(InteractionConfig, data.get('interaction')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    )
