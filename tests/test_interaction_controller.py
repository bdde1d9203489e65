import pytest

from webcam.config import Config, GestureConfig, InteractionConfig
from webcam.gesture_classifier import Gesture, GestureState
from interaction.controller import ControllerLimits, InteractionController, TickMemory, tick
from interaction.transform import InteractionMode, RenderedTransform, TransformState, Vec2


class Frames:
    """Hands out GestureStates with increasing frame ids."""

    def __init__(self):
        self.frame_id = 0

    def __call__(self, gesture=Gesture.NONE, **fields):
        self.frame_id += 1
        fields.setdefault("palm_position", (0.5, 0.5))
        return GestureState(gesture=gesture, frame_id=self.frame_id, **fields)


@pytest.fixture
def frames():
    return Frames()


@pytest.fixture
def controller():
    return InteractionController(Config())


def test_example_scenario(controller, frames):
    state = controller.tick(frames(Gesture.ROTATE, rotation_delta=(0.1, -0.05)))
    assert state.rotation == pytest.approx((0.1, -0.05))
    assert not state.frozen

    state = controller.tick(frames(Gesture.FREEZE, is_fist=True))
    assert state.frozen
    assert state.rotation == pytest.approx((0.1, -0.05))

    state = controller.tick(frames(Gesture.RESET, is_reset=True))
    assert state == TransformState.default()
    assert state.rotation == (0.0, 0.0)
    assert not state.frozen


def test_rotation_accumulates_without_bound(controller, frames):
    for _ in range(100):
        state = controller.tick(frames(Gesture.ROTATE, rotation_delta=(0.5, -0.5)))
    assert state.rotation == pytest.approx((50.0, -50.0))


@pytest.mark.parametrize("delta", [(10.0, 10.0), (-10.0, -10.0), (100.0, -3.0), (-0.7, 0.9)])
def test_position_stays_in_bounds(controller, frames, delta):
    for _ in range(50):
        state = controller.tick(frames(Gesture.PAN, position_delta=delta))
        assert -3.0 <= state.position.x <= 3.0
        assert -2.0 <= state.position.y <= 2.0


def test_position_clamps_to_box_edges(controller, frames):
    state = controller.tick(frames(Gesture.PAN, position_delta=(9.0, -9.0)))
    assert state.position == (3.0, -2.0)


def test_zoom_is_constant_rate(controller, frames):
    for _ in range(5):
        state = controller.tick(frames(Gesture.ZOOM_IN, is_zoom_in=True))
    assert state.scale == pytest.approx(1.10)

    for _ in range(10):
        state = controller.tick(frames(Gesture.ZOOM_OUT, is_zoom_out=True))
    assert state.scale == pytest.approx(0.90)


def test_zoom_clamps_to_extended_range(controller, frames):
    for _ in range(500):
        state = controller.tick(frames(Gesture.ZOOM_IN))
        assert state.scale <= 3.0
    assert state.scale == pytest.approx(3.0)

    for _ in range(500):
        state = controller.tick(frames(Gesture.ZOOM_OUT))
        assert state.scale >= 0.3
    assert state.scale == pytest.approx(0.3)


def test_basic_set_uses_narrow_scale_range(frames):
    controller = InteractionController(Config(gestures=GestureConfig(gesture_set="basic")))
    assert (controller.limits.min_scale, controller.limits.max_scale) == (0.5, 2.0)

    for _ in range(200):
        state = controller.tick(frames(Gesture.ZOOM_IN))
    assert state.scale == pytest.approx(2.0)


def test_pinch_maps_distance_to_scale(controller, frames):
    state = controller.tick(frames(Gesture.PINCH, is_pinching=True, pinch_distance=0.01))
    assert state.scale == pytest.approx(1.4)

    state = controller.tick(frames(Gesture.PINCH, is_pinching=True, pinch_distance=0.05))
    assert state.scale == pytest.approx(1.0)


def test_pinch_scale_is_clamped(frames):
    config = Config(interaction=InteractionConfig(pinch_scale_gain=1000.0))
    controller = InteractionController(config)
    state = controller.tick(frames(Gesture.PINCH, pinch_distance=0.0))
    assert state.scale == pytest.approx(3.0)


def test_reset_is_idempotent(controller, frames):
    controller.tick(frames(Gesture.ROTATE, rotation_delta=(1.0, 2.0)))
    controller.tick(frames(Gesture.PAN, position_delta=(1.0, 1.0)))
    once = controller.tick(frames(Gesture.RESET))
    twice = controller.tick(frames(Gesture.RESET))

    assert once == twice == TransformState.default()
    assert twice.position == (0.0, 0.0)
    assert twice.scale == 1.0
    assert not twice.frozen


def test_reset_clears_frozen(controller, frames):
    controller.tick(frames(Gesture.ZOOM_IN))
    controller.tick(frames(Gesture.FREEZE))
    assert controller.mode == InteractionMode.FROZEN

    state = controller.tick(frames(Gesture.RESET))
    assert state.mode == InteractionMode.ACTIVE
    assert state.scale == 1.0


def test_frozen_ignores_fist_frames(controller, frames):
    controller.tick(frames(Gesture.ROTATE, rotation_delta=(0.3, 0.1)))
    controller.tick(frames(Gesture.ZOOM_IN))
    frozen = controller.tick(frames(Gesture.FREEZE))
    assert frozen.frozen

    for _ in range(20):
        state = controller.tick(frames(Gesture.FREEZE, rotation_delta=(5.0, 5.0)))
        assert state == frozen


def test_unfreeze_then_resume(controller, frames):
    controller.tick(frames(Gesture.FREEZE))
    assert controller.state.frozen

    # Unfreezing tick does not mutate
    state = controller.tick(frames(Gesture.ROTATE, rotation_delta=(0.2, 0.2)))
    assert not state.frozen
    assert state.rotation == (0.0, 0.0)

    state = controller.tick(frames(Gesture.ROTATE, rotation_delta=(0.2, 0.2)))
    assert state.rotation == pytest.approx((0.2, 0.2))


@pytest.mark.parametrize("gesture", [Gesture.ZOOM_IN, Gesture.ZOOM_OUT, Gesture.PAN, Gesture.PINCH])
def test_other_gestures_unfreeze(controller, frames, gesture):
    controller.tick(frames(Gesture.FREEZE))
    state = controller.tick(frames(gesture, position_delta=(1.0, 1.0), pinch_distance=0.0))
    assert not state.frozen
    assert state.position == (0.0, 0.0)
    assert state.scale == 1.0


def test_no_gesture_keeps_frozen(controller, frames):
    controller.tick(frames(Gesture.FREEZE))
    state = controller.tick(frames(Gesture.NONE))
    assert state.frozen
    state = controller.tick(GestureState.empty(frames.frame_id + 1))
    assert state.frozen


def test_targets_hold_without_gesture(controller, frames):
    controller.tick(frames(Gesture.ROTATE, rotation_delta=(0.4, 0.0)))
    held = controller.tick(frames(Gesture.PAN, position_delta=(1.0, 0.5)))
    for _ in range(30):
        state = controller.tick(frames(Gesture.NONE))
    assert state == held


def test_repeated_frame_applies_motion_once(controller, frames):
    gesture = frames(Gesture.ROTATE, rotation_delta=(0.1, 0.1))
    for _ in range(5):
        state = controller.tick(gesture)
    assert state.rotation == pytest.approx((0.1, 0.1))

    pan = frames(Gesture.PAN, position_delta=(0.5, 0.0))
    for _ in range(5):
        state = controller.tick(pan)
    assert state.position == pytest.approx((0.5, 0.0))


def test_repeated_frame_zooms_every_tick(controller, frames):
    gesture = frames(Gesture.ZOOM_IN)
    for _ in range(3):
        state = controller.tick(gesture)
    assert state.scale == pytest.approx(1.06)


def test_sustained_fist_requirement(frames):
    config = Config(interaction=InteractionConfig(freeze_hold_ticks=3))
    controller = InteractionController(config)

    fist = frames(Gesture.FREEZE)
    for _ in range(5):
        controller.tick(fist)
    assert not controller.state.frozen

    controller.tick(frames(Gesture.FREEZE))
    assert not controller.state.frozen
    controller.tick(frames(Gesture.FREEZE))
    assert controller.state.frozen


def test_interrupted_fist_restarts_count(frames):
    limits = ControllerLimits(freeze_hold_ticks=2)
    state, memory = TransformState(), TickMemory()

    state, memory = tick(frames(Gesture.FREEZE), state, limits, memory)
    state, memory = tick(frames(Gesture.NONE), state, limits, memory)
    state, memory = tick(frames(Gesture.FREEZE), state, limits, memory)
    assert not state.frozen
    state, memory = tick(frames(Gesture.FREEZE), state, limits, memory)
    assert state.frozen


def test_tick_is_pure(frames):
    limits = ControllerLimits()
    start = TransformState()
    gesture = frames(Gesture.ROTATE, rotation_delta=(0.1, 0.0))

    first, _ = tick(gesture, start, limits)
    second, _ = tick(gesture, start, limits)
    assert first == second
    assert start == TransformState.default()


def test_explicit_reset_does_not_replay_frame(controller, frames):
    gesture = frames(Gesture.ROTATE, rotation_delta=(0.3, 0.0))
    controller.tick(gesture)
    controller.reset()
    state = controller.tick(gesture)
    assert state.rotation == (0.0, 0.0)


def test_rendered_transform_lerps_toward_target():
    config = InteractionConfig()
    target = TransformState(rotation=Vec2(1.0, 0.0), position=Vec2(0.0, 2.0), scale=2.0)
    rendered = RenderedTransform()

    rendered.follow(target, dt=1 / 60, hand_present=True, config=config)
    assert rendered.rotation.x == pytest.approx(0.15)
    assert rendered.position.y == pytest.approx(0.30)
    assert rendered.scale == pytest.approx(1.1)

    for _ in range(300):
        rendered.follow(target, dt=1 / 60, hand_present=True, config=config)
    assert rendered.rotation.x == pytest.approx(1.0, abs=1e-6)
    assert rendered.scale == pytest.approx(2.0, abs=1e-6)


def test_idle_spin_only_touches_rendered_value():
    config = InteractionConfig(idle_spin=0.2)
    target = TransformState()
    rendered = RenderedTransform()

    for _ in range(60):
        rendered.follow(target, dt=1 / 60, hand_present=False, config=config)
    assert rendered.idle_angle == pytest.approx(0.2)
    assert rendered.display_rotation.y == pytest.approx(0.2)
    assert target.rotation == (0.0, 0.0)

    angle = rendered.idle_angle
    rendered.follow(target, dt=1 / 60, hand_present=True, config=config)
    assert rendered.idle_angle == angle


def test_limits_reject_empty_scale_range():
    config = Config(interaction=InteractionConfig(min_scale=2.5))
    config.gestures.gesture_set = "basic"
    with pytest.raises(ValueError):
        ControllerLimits.from_config(config)
