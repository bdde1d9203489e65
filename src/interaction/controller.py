"""
Interaction controller: turns the active gesture into target transform
updates, with freeze/reset handling and clamping.
"""
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from webcam.config import Config
from webcam.gesture_classifier import Gesture, GestureState

from .transform import InteractionMode, TransformState, Vec2, clamp


@dataclass(frozen=True)
class ControllerLimits:
    """Numbers the controller needs, gathered from gesture and interaction config."""
    min_scale: float = 0.3
    max_scale: float = 3.0
    zoom_step: float = 0.02
    pinch_threshold: float = 0.05
    pinch_scale_gain: float = 10.0
    bound_x: float = 3.0
    bound_y: float = 2.0
    freeze_hold_ticks: int = 1

    @classmethod
    def from_config(cls, config: Config) -> "ControllerLimits":
        interaction = config.interaction
        lo, hi = interaction.scale_range(config.gestures.gesture_set)
        bound_x, bound_y = interaction.position_bounds
        return cls(
            min_scale=lo,
            max_scale=hi,
            zoom_step=interaction.zoom_step,
            pinch_threshold=config.gestures.pinch_threshold,
            pinch_scale_gain=interaction.pinch_scale_gain,
            bound_x=bound_x,
            bound_y=bound_y,
            freeze_hold_ticks=interaction.freeze_hold_ticks,
        )


@dataclass(frozen=True)
class TickMemory:
    """
    Bookkeeping between ticks.

    last_frame_id lets motion deltas apply once per classified frame even
    when rendering ticks faster than the camera delivers frames.
    """
    last_frame_id: Optional[int] = None
    fist_frames: int = 0


def tick(
    gesture: GestureState,
    state: TransformState,
    limits: ControllerLimits,
    memory: TickMemory = TickMemory(),
) -> Tuple[TransformState, TickMemory]:
    """
    Advance the target transform by one render tick.

    Args:
        gesture: Latest classified frame (may repeat across ticks)
        state: Current targets
        limits: Clamp ranges and step sizes
        memory: Bookkeeping from the previous tick

    Returns:
        (new TransformState, new TickMemory)
    """
    active = gesture.gesture
    new_frame = gesture.frame_id != memory.last_frame_id
    memory = replace(memory, last_frame_id=gesture.frame_id)

    if active == Gesture.RESET:
        return TransformState.default(), TickMemory(last_frame_id=gesture.frame_id)

    if active == Gesture.FREEZE:
        if state.frozen:
            return state, memory
        frames = memory.fist_frames + 1 if new_frame else memory.fist_frames
        if frames >= limits.freeze_hold_ticks:
            return replace(state, mode=InteractionMode.FROZEN), replace(memory, fist_frames=0)
        return state, replace(memory, fist_frames=frames)

    memory = replace(memory, fist_frames=0)

    if state.frozen:
        if active != Gesture.NONE:
            # Unfreeze only; mutation resumes next tick
            return replace(state, mode=InteractionMode.ACTIVE), memory
        return state, memory

    if active == Gesture.ROTATE and new_frame:
        dx, dy = gesture.rotation_delta
        state = replace(state, rotation=Vec2(state.rotation.x + dx, state.rotation.y + dy))

    elif active == Gesture.PAN and new_frame:
        dx, dy = gesture.position_delta
        state = replace(state, position=Vec2(
            clamp(state.position.x + dx, -limits.bound_x, limits.bound_x),
            clamp(state.position.y + dy, -limits.bound_y, limits.bound_y),
        ))

    elif active == Gesture.ZOOM_IN:
        state = replace(state, scale=min(limits.max_scale, state.scale + limits.zoom_step))

    elif active == Gesture.ZOOM_OUT:
        state = replace(state, scale=max(limits.min_scale, state.scale - limits.zoom_step))

    elif active == Gesture.PINCH:
        scale = 1.0 + (limits.pinch_threshold - gesture.pinch_distance) * limits.pinch_scale_gain
        state = replace(state, scale=clamp(scale, limits.min_scale, limits.max_scale))

    return state, memory


class InteractionController:
    """
    Owns the target TransformState for one tracking session.

    Call tick() once per rendered frame with the most recent GestureState.
    """

    def __init__(self, config: Config):
        self._limits = ControllerLimits.from_config(config)
        self._state = TransformState.default()
        self._memory = TickMemory()

    def tick(self, gesture: GestureState) -> TransformState:
        self._state, self._memory = tick(gesture, self._state, self._limits, self._memory)
        return self._state

    def reset(self) -> TransformState:
        """Explicit reset trigger (button, key or session restart)."""
        self._state = TransformState.default()
        self._memory = TickMemory(last_frame_id=self._memory.last_frame_id)
        return self._state

    @property
    def state(self) -> TransformState:
        return self._state

    @property
    def mode(self) -> InteractionMode:
        return self._state.mode

    @property
    def limits(self) -> ControllerLimits:
        return self._limits
