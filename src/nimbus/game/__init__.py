"""Board/replay layer — controller, ply history, promotion sub-flow.

Quick start::

    from nimbus.game import BoardController, Committed

    ctrl = BoardController()
    outcome = ctrl.execute_move("e2", "e4")
    assert isinstance(outcome, Committed)
    ctrl.jump_to_position(-1)  # view the start, moves now rejected
"""

from nimbus.game.controller import BoardController, BoardEvents
from nimbus.game.history import MoveHistory, Ply
from nimbus.game.interfaces import (
    Committed,
    IBoardController,
    MoveOutcome,
    Rejected,
    RejectReason,
    Suspended,
)
from nimbus.game.promotion import PromotionFlow, PromotionPhase, PromotionRequest

__all__ = [
    # Interfaces
    "IBoardController",
    "MoveOutcome",
    "RejectReason",
    # Outcomes
    "Committed",
    "Rejected",
    "Suspended",
    # Concrete
    "BoardController",
    "BoardEvents",
    "MoveHistory",
    "Ply",
    "PromotionFlow",
    "PromotionPhase",
    "PromotionRequest",
]
