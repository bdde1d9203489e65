"""
Transform state owned by the interaction controller, and the render-side
value that chases it.
"""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import NamedTuple
import math

from webcam.config import InteractionConfig


class Vec2(NamedTuple):
    x: float = 0.0
    y: float = 0.0


class InteractionMode(Enum):
    """
    Controller modes.

    ACTIVE -> FROZEN: sustained fist.
    FROZEN -> ACTIVE: any other recognized gesture (no mutation that tick).
    any    -> ACTIVE: reset, with every target back to its default.
    """
    ACTIVE = auto()
    FROZEN = auto()


@dataclass(frozen=True)
class TransformState:
    """Target values. The renderer interpolates toward these."""
    rotation: Vec2 = Vec2()       # Radians, unbounded
    position: Vec2 = Vec2()
    scale: float = 1.0
    mode: InteractionMode = InteractionMode.ACTIVE

    @classmethod
    def default(cls) -> "TransformState":
        return cls()

    @property
    def frozen(self) -> bool:
        return self.mode == InteractionMode.FROZEN


def lerp(current: float, target: float, k: float) -> float:
    return current + (target - current) * k


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


@dataclass
class RenderedTransform:
    """
    Current (displayed) transform.

    Follows the target every render tick, whether or not the target changed,
    so motion keeps settling between gesture frames. Idle spin accumulates in
    idle_angle and never touches the target.
    """
    rotation: Vec2 = field(default_factory=Vec2)
    position: Vec2 = field(default_factory=Vec2)
    scale: float = 1.0
    idle_angle: float = 0.0

    def follow(self, target: TransformState, dt: float, hand_present: bool,
               config: InteractionConfig) -> "RenderedTransform":
        kr = config.rotation_lerp
        kp = config.position_lerp
        self.rotation = Vec2(
            lerp(self.rotation.x, target.rotation.x, kr),
            lerp(self.rotation.y, target.rotation.y, kr),
        )
        self.position = Vec2(
            lerp(self.position.x, target.position.x, kp),
            lerp(self.position.y, target.position.y, kp),
        )
        self.scale = lerp(self.scale, target.scale, config.scale_lerp)

        if not hand_present:
            self.idle_angle = (self.idle_angle + dt * config.idle_spin) % (2 * math.pi)
        return self

    @property
    def display_rotation(self) -> Vec2:
        """Rotation to pose the object with, idle spin included."""
        return Vec2(self.rotation.x, self.rotation.y + self.idle_angle)

    def clear_idle(self) -> None:
        self.idle_angle = 0.0
