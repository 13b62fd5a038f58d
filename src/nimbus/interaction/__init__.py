"""Pointer, touch and keyboard input over a board controller."""

from nimbus.interaction.drag import DragSession
from nimbus.interaction.mapper import (
    BoardGeometry,
    Gesture,
    InputMapper,
    square_from_coordinates,
    square_origin,
)

__all__ = [
    "BoardGeometry",
    "DragSession",
    "Gesture",
    "InputMapper",
    "square_from_coordinates",
    "square_origin",
]
