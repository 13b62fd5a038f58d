"""Core chess vocabulary and the python-chess rule-engine adapter."""

from nimbus.core.enums import PROMOTION_KINDS, BoardOrientation, PieceKind, Side
from nimbus.core.rules import (
    STARTING_FEN,
    AppliedMove,
    IllegalMoveError,
    InvalidPositionError,
    LegalTarget,
)
from nimbus.core.types import PieceDescriptor, Square

__all__ = [
    "PROMOTION_KINDS",
    "STARTING_FEN",
    "AppliedMove",
    "BoardOrientation",
    "IllegalMoveError",
    "InvalidPositionError",
    "LegalTarget",
    "PieceDescriptor",
    "PieceKind",
    "Side",
    "Square",
]
