"""Core enumerations shared by the board, input and presentation layers."""

from __future__ import annotations

from enum import Enum, IntEnum

import chess


class Side(IntEnum):
    """Side colour."""

    WHITE = 0
    BLACK = 1

    @property
    def letter(self) -> str:
        """Single-letter code used in FEN and API payloads ("w" / "b")."""
        return "w" if self is Side.WHITE else "b"

    @classmethod
    def from_chess(cls, color: chess.Color) -> Side:
        return cls.WHITE if color == chess.WHITE else cls.BLACK

    @classmethod
    def parse(cls, text: str) -> Side:
        """Parse "w", "b", "white" or "black" (case-insensitive)."""
        value = text.strip().lower()
        if value in ("w", "white"):
            return cls.WHITE
        if value in ("b", "black"):
            return cls.BLACK
        raise ValueError(f"Invalid side: {text!r}")

    def __str__(self) -> str:
        return self.name.lower()


class PieceKind(IntEnum):
    """Piece kinds, numbered like python-chess piece types."""

    PAWN = chess.PAWN
    KNIGHT = chess.KNIGHT
    BISHOP = chess.BISHOP
    ROOK = chess.ROOK
    QUEEN = chess.QUEEN
    KING = chess.KING

    @property
    def symbol(self) -> str:
        """Upper-case SAN letter ("P" for pawns)."""
        return chess.piece_symbol(self.value).upper()


PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)


class BoardOrientation(Enum):
    """Which side sits at the bottom of the rendered board."""

    FROM_WHITE = "white"
    FROM_BLACK = "black"

    @property
    def flipped(self) -> BoardOrientation:
        if self is BoardOrientation.FROM_WHITE:
            return BoardOrientation.FROM_BLACK
        return BoardOrientation.FROM_WHITE

    @classmethod
    def for_side(cls, side: Side) -> BoardOrientation:
        return cls.FROM_WHITE if side is Side.WHITE else cls.FROM_BLACK
