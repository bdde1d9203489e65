"""
HandSpin Interaction Module

Gesture-driven target transform with freeze/reset handling, plus the
interpolated transform the viewer draws.
"""
from .transform import InteractionMode, RenderedTransform, TransformState, Vec2
from .controller import ControllerLimits, InteractionController, TickMemory, tick

__all__ = [
    'InteractionMode',
    'RenderedTransform',
    'TransformState',
    'Vec2',
    'ControllerLimits',
    'InteractionController',
    'TickMemory',
    'tick',
]
