"""
Wireframe meshes and the perspective projection used by the model view.
"""
from dataclasses import dataclass
from typing import List, Tuple
import math
import numpy as np

Edge = Tuple[int, int]

MODEL_TYPES = ("torus", "sphere", "cube", "icosahedron")

CAMERA_DISTANCE = 5.0
FOV_DEGREES = 50.0


@dataclass
class Mesh:
    name: str
    vertices: np.ndarray  # (N, 3) float
    edges: List[Edge]


def _grid_edges(rows: int, cols: int, wrap_rows: bool) -> List[Edge]:
    """Edges of a rows x cols vertex grid that wraps around the columns."""
    edges = []
    for r in range(rows):
        for c in range(cols):
            i = r * cols + c
            edges.append((i, r * cols + (c + 1) % cols))
            if r + 1 < rows:
                edges.append((i, (r + 1) * cols + c))
            elif wrap_rows:
                edges.append((i, c))
    return edges


def make_torus(radius: float = 1.0, tube: float = 0.3,
               rings: int = 24, segments: int = 8) -> Mesh:
    verts = []
    for i in range(rings):
        u = 2 * math.pi * i / rings
        for j in range(segments):
            v = 2 * math.pi * j / segments
            d = radius + tube * math.cos(v)
            verts.append((d * math.cos(u), d * math.sin(u), tube * math.sin(v)))
    return Mesh("torus", np.array(verts, dtype=np.float64),
                _grid_edges(rings, segments, wrap_rows=True))


def make_sphere(radius: float = 1.2, stacks: int = 8, slices: int = 16) -> Mesh:
    # Poles are left out so every ring has the same vertex count
    verts = []
    for i in range(1, stacks):
        phi = math.pi * i / stacks
        for j in range(slices):
            theta = 2 * math.pi * j / slices
            verts.append((
                radius * math.sin(phi) * math.cos(theta),
                radius * math.cos(phi),
                radius * math.sin(phi) * math.sin(theta),
            ))
    return Mesh("sphere", np.array(verts, dtype=np.float64),
                _grid_edges(stacks - 1, slices, wrap_rows=False))


def make_cube(size: float = 1.5) -> Mesh:
    h = size / 2
    verts = [(x, y, z) for x in (-h, h) for y in (-h, h) for z in (-h, h)]
    # Vertices differing in exactly one coordinate share an edge
    edges = [(i, j) for i in range(8) for j in range(i + 1, 8)
             if bin(i ^ j).count("1") == 1]
    return Mesh("cube", np.array(verts, dtype=np.float64), edges)


def make_icosahedron(radius: float = 1.2) -> Mesh:
    t = (1 + math.sqrt(5)) / 2
    raw = [
        (-1, t, 0), (1, t, 0), (-1, -t, 0), (1, -t, 0),
        (0, -1, t), (0, 1, t), (0, -1, -t), (0, 1, -t),
        (t, 0, -1), (t, 0, 1), (-t, 0, -1), (-t, 0, 1),
    ]
    verts = np.array(raw, dtype=np.float64)
    verts *= radius / np.linalg.norm(verts[0])
    # Unit-edge pairs in the raw coordinates are 2 apart
    edges = [(i, j) for i in range(12) for j in range(i + 1, 12)
             if abs(np.linalg.norm(np.subtract(raw[i], raw[j])) - 2.0) < 1e-6]
    return Mesh("icosahedron", verts, edges)


_BUILDERS = {
    "torus": make_torus,
    "sphere": make_sphere,
    "cube": make_cube,
    "icosahedron": make_icosahedron,
}


def get_mesh(name: str) -> Mesh:
    """Get a mesh by model type; unknown names fall back to the torus."""
    return _BUILDERS.get(name, make_torus)()


def rotation_matrix(rx: float, ry: float) -> np.ndarray:
    """Rotation about x then y (XYZ Euler order, z = 0)."""
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    rot_x = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    rot_y = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    return rot_x @ rot_y


def project(
    vertices: np.ndarray,
    rotation: Tuple[float, float],
    position: Tuple[float, float],
    scale: float,
    width: int,
    height: int,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Pose vertices and project them onto a width x height viewport.

    Returns:
        (screen points (N, 2), view depth (N,))
    """
    world = vertices @ rotation_matrix(rotation[0], rotation[1]).T * scale
    world[:, 0] += position[0]
    world[:, 1] += position[1]

    depth = np.maximum(CAMERA_DISTANCE - world[:, 2], 1e-3)
    focal = (height / 2) / math.tan(math.radians(FOV_DEGREES) / 2)
    screen = np.empty((len(world), 2))
    screen[:, 0] = width / 2 + focal * world[:, 0] / depth
    screen[:, 1] = height / 2 - focal * world[:, 1] / depth
    return screen, depth
