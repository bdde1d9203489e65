import pytest

# Finger columns (x) and joint heights (y) for a synthetic upright right hand
WRIST = (0.50, 0.80)
FINGER_X = {"index": 0.44, "middle": 0.48, "ring": 0.52, "pinky": 0.56}
MCP_Y = 0.60
EXTENDED_Y = (0.50, 0.45, 0.40)  # pip, dip, tip
CURLED_Y = (0.52, 0.56, 0.62)

THUMB_BASE = [(0.44, 0.76), (0.40, 0.71), (0.36, 0.66)]  # cmc, mcp, ip
THUMB_TIP_EXTENDED = (0.31, 0.60)
THUMB_TIP_CURLED = (0.50, 0.68)

ALL_FINGERS = ("index", "middle", "ring", "pinky")

POSES = {
    "open": dict(extended=ALL_FINGERS, thumb=True),
    "fist": dict(extended=(), thumb=False),
    "zoom_in": dict(extended=("index",), thumb=True),
    "zoom_out": dict(extended=("index",), thumb=False),
    "peace": dict(extended=("index", "middle"), thumb=False),
    "reset": dict(extended=("pinky",), thumb=True),
    "pinch": dict(extended=ALL_FINGERS, thumb=True, pinch=True),
}


def make_hand(extended=ALL_FINGERS, thumb=True, pinch=False,
              offset=(0.0, 0.0), thumb_z=0.0):
    """Build 21 (x, y, z) landmarks in MediaPipe order."""
    ox, oy = offset
    points = [(WRIST[0], WRIST[1], 0.0)]

    fingers = {}
    for name, x in FINGER_X.items():
        ys = EXTENDED_Y if name in extended else CURLED_Y
        fingers[name] = [(x, MCP_Y, 0.0)] + [(x, y, 0.0) for y in ys]

    if pinch:
        ix, iy, _ = fingers["index"][-1]
        thumb_tip = (ix + 0.01, iy)
    else:
        thumb_tip = THUMB_TIP_EXTENDED if thumb else THUMB_TIP_CURLED
    points += [(x, y, 0.0) for x, y in THUMB_BASE]
    points.append((thumb_tip[0], thumb_tip[1], thumb_z))

    for name in ALL_FINGERS:
        points += fingers[name]

    return [(x + ox, y + oy, z) for x, y, z in points]


@pytest.fixture
def hand():
    """Factory: hand("open", offset=(0.02, 0.0)) -> 21 landmarks."""
    def _build(pose="open", **overrides):
        params = dict(POSES[pose])
        params.update(overrides)
        return make_hand(**params)
    return _build
