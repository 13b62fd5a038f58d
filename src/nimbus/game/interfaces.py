"""Move outcomes and the abstract board-controller interface.

Outcomes are plain values: a move attempt either commits, is rejected,
or is suspended pending a promotion choice.  None of them is raised.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    import chess

    from nimbus.core.enums import PieceKind
    from nimbus.core.types import Square
    from nimbus.game.history import Ply
    from nimbus.game.promotion import PromotionRequest


class RejectReason(IntEnum):
    """Why a move attempt did not happen."""

    ILLEGAL_MOVE = auto()
    NOT_LIVE_VIEW = auto()  # viewing a historical ply
    PROMOTION_PENDING = auto()  # another move awaits a promotion choice


@dataclass(frozen=True)
class Committed:
    ply: Ply


@dataclass(frozen=True)
class Rejected:
    reason: RejectReason


@dataclass(frozen=True)
class Suspended:
    request: PromotionRequest


MoveOutcome: TypeAlias = Committed | Rejected | Suspended


class IBoardController(ABC):
    """Interface of the board/replay controller."""

    @abstractmethod
    def initialize(self, starting_position: str | None = None) -> None:
        """Start a fresh game from *starting_position* (FEN)."""

    @abstractmethod
    def execute_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceKind | None = None,
    ) -> MoveOutcome:
        """Attempt a move from the live position."""

    @abstractmethod
    def jump_to_position(self, index: int) -> chess.Board:
        """View the position after ply *index* (``-1`` = start)."""

    @abstractmethod
    def reset(self) -> None:
        """Drop all plies and return to the starting position."""

    @abstractmethod
    def current_selectable_moves(self, square: Square) -> set[Square]:
        """Legal destinations from *square*; empty unless live."""
