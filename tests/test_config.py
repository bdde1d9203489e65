import pytest

from webcam.config import (
    Config,
    GestureConfig,
    InteractionConfig,
    load_config,
)


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "nope.yaml")
    assert config == Config()
    assert config.gestures.gesture_set == "extended"
    assert config.interaction.position_bounds == (3.0, 2.0)


def test_partial_override(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "gestures:\n"
        "  gesture_set: basic\n"
        "  pinch_threshold: 0.04\n"
        "interaction:\n"
        "  position_bounds: [2.5, 1.5]\n"
    )
    config = load_config(path)

    assert config.gestures.gesture_set == "basic"
    assert config.gestures.pinch_threshold == 0.04
    assert config.gestures.curl_ratio == GestureConfig().curl_ratio
    assert config.interaction.position_bounds == (2.5, 1.5)
    assert config.camera.width == 640


def test_unknown_keys_are_ignored(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("ui:\n  model: cube\n  theme: dark\nextra_section:\n  a: 1\n")
    config = load_config(path)
    assert config.ui.model == "cube"


def test_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path) == Config()


def test_bundled_config_loads():
    config = load_config()
    assert config.gestures.gesture_set in ("basic", "extended")
    assert config.interaction.freeze_hold_ticks >= 1


@pytest.mark.parametrize("kwargs", [
    {"gesture_set": "everything"},
    {"palm_points": 5},
    {"motion_smoothing": 0.0},
])
def test_invalid_gesture_config(kwargs):
    with pytest.raises(ValueError):
        GestureConfig(**kwargs)


def test_invalid_interaction_config():
    with pytest.raises(ValueError):
        InteractionConfig(freeze_hold_ticks=0)
    with pytest.raises(ValueError):
        InteractionConfig(min_scale=2.0, max_scale=1.0)


def test_scale_range_per_gesture_set():
    interaction = InteractionConfig()
    assert interaction.scale_range("basic") == (0.5, 2.0)
    assert interaction.scale_range("extended") == (0.3, 3.0)

    custom = InteractionConfig(min_scale=0.8, max_scale=None)
    assert custom.scale_range("extended") == (0.8, 3.0)


@pytest.mark.parametrize("gesture_set, overrides", [
    ("basic", {"min_scale": 2.5}),
    ("extended", {"max_scale": 0.2}),
    ("basic", {"max_scale": 0.4}),
])
def test_one_sided_override_cannot_empty_scale_range(gesture_set, overrides):
    interaction = InteractionConfig(**overrides)
    with pytest.raises(ValueError):
        interaction.scale_range(gesture_set)
    with pytest.raises(ValueError):
        Config(gestures=GestureConfig(gesture_set=gesture_set), interaction=interaction)


def test_one_sided_override_checked_against_active_set():
    # 2.5 fits under the extended maximum but not the basic one
    config = Config(interaction=InteractionConfig(min_scale=2.5))
    assert config.interaction.scale_range("extended") == (2.5, 3.0)

    config.gestures.gesture_set = "basic"
    with pytest.raises(ValueError):
        config.validate()


def test_empty_scale_range_in_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("gestures:\n  gesture_set: basic\ninteraction:\n  min_scale: 2.5\n")
    with pytest.raises(ValueError):
        load_config(path)
