"""
HandSpin Viewer Module

Wireframe meshes and the PyQt5 window that renders the gesture-driven
transform. The Qt widgets are imported explicitly by the application.
"""
from .meshes import MODEL_TYPES, Mesh, get_mesh, project

__all__ = [
    'MODEL_TYPES',
    'Mesh',
    'get_mesh',
    'project',
]
