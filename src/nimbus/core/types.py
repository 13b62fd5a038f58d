"""Square-name helpers and small value types.

Squares cross every public boundary as lowercase algebraic names::

    a1 = file 0, rank 0    h8 = file 7, rank 7
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

import chess

from nimbus.core.enums import PieceKind, Side

Square: TypeAlias = str  # "a1".."h8"

FILES = "abcdefgh"
RANKS = "12345678"


def file_of(square: Square) -> int:
    """File index 0–7 (a–h)."""
    return FILES.index(square[0])


def rank_of(square: Square) -> int:
    """Rank index 0–7 (1–8)."""
    return RANKS.index(square[1])


def make_square_name(file: int, rank: int) -> Square:
    """Build a square name from file (0–7) and rank (0–7)."""
    if not (0 <= file < 8 and 0 <= rank < 8):
        raise ValueError(f"Square out of range: file={file}, rank={rank}")
    return FILES[file] + RANKS[rank]


def is_square_name(text: object) -> bool:
    """Check whether *text* is a valid lowercase square name."""
    return (
        isinstance(text, str)
        and len(text) == 2
        and text[0] in FILES
        and text[1] in RANKS
    )


def to_chess_square(square: Square) -> chess.Square:
    """Square name → python-chess square index."""
    if not is_square_name(square):
        raise ValueError(f"Invalid square name: {square!r}")
    return chess.parse_square(square)


def from_chess_square(square: chess.Square) -> Square:
    return chess.square_name(square)


def terminal_rank(side: Side) -> int:
    """Rank index a pawn of *side* promotes on."""
    return 7 if side is Side.WHITE else 0


@dataclass(frozen=True)
class PieceDescriptor:
    """What stands on a square."""

    kind: PieceKind
    side: Side

    @property
    def symbol(self) -> str:
        """FEN letter: upper-case for white, lower-case for black."""
        letter = self.kind.symbol
        return letter if self.side is Side.WHITE else letter.lower()
