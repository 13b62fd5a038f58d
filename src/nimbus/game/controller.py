"""BoardController — the board/replay state machine.

Owns the ply history, the navigation cursor and the pending promotion.
Every position it hands out is rebuilt by replaying the recorded moves
from the starting position, so the "live" and the "viewed" boards never
share a mutable python-chess object.

Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

import chess

from nimbus.core import rules
from nimbus.core.enums import BoardOrientation, PieceKind, Side
from nimbus.core.rules import STARTING_FEN, IllegalMoveError, InvalidPositionError
from nimbus.core.types import PieceDescriptor, Square, is_square_name
from nimbus.game.history import MoveHistory, Ply
from nimbus.game.interfaces import (
    Committed,
    IBoardController,
    MoveOutcome,
    Rejected,
    RejectReason,
    Suspended,
)
from nimbus.game.promotion import PromotionFlow, PromotionRequest

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCommittedCallback = Callable[[Ply], None]
ViewChangedCallback = Callable[[chess.Board, int], None]  # board, cursor
PromotionCallback = Callable[[PromotionRequest], None]
OrientationCallback = Callable[[BoardOrientation], None]
ResetCallback = Callable[[], None]


@dataclass
class BoardEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move_committed: list[MoveCommittedCallback] = field(default_factory=list)
    on_view_changed: list[ViewChangedCallback] = field(default_factory=list)
    on_promotion_requested: list[PromotionCallback] = field(default_factory=list)
    on_orientation_changed: list[OrientationCallback] = field(default_factory=list)
    on_reset: list[ResetCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class BoardController(IBoardController):
    """Single source of truth for the move sequence and cursor.

    The cursor ranges over ``-1 .. len(plies) - 1``; ``-1`` is the
    starting position.  New moves are accepted only while the cursor
    sits on the newest ply ("live").

    Thread-safety: designed to be driven from one thread (the UI thread);
    every method runs to completion before the next input event.
    """

    __slots__ = (
        "_start_fen",
        "_start_error",
        "_history",
        "_cursor",
        "_orientation",
        "_promotion",
        "events",
    )

    def __init__(
        self,
        starting_position: str | None = None,
        *,
        player_side: Side = Side.WHITE,
    ) -> None:
        self._start_fen = STARTING_FEN
        self._start_error: str | None = None
        self._history = MoveHistory()
        self._cursor = -1
        self._orientation = BoardOrientation.for_side(player_side)
        self._promotion = PromotionFlow()
        self.events = BoardEvents()
        self.initialize(starting_position)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def plies(self) -> tuple[Ply, ...]:
        return self._history.plies

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def is_live(self) -> bool:
        return self._cursor == self._history.last_index

    @property
    def orientation(self) -> BoardOrientation:
        return self._orientation

    @property
    def pending_promotion(self) -> PromotionRequest | None:
        return self._promotion.request

    @property
    def start_position(self) -> str:
        """FEN the game started from (after any fallback)."""
        return self._start_fen

    @property
    def start_position_error(self) -> str | None:
        """Why the configured start position was replaced, if it was."""
        return self._start_error

    @property
    def live_state(self) -> chess.Board:
        """Fresh board after the newest ply."""
        return self._replay(self._history.last_index)

    @property
    def viewing_state(self) -> chess.Board:
        """Fresh board at the cursor."""
        return self._replay(self._cursor)

    @property
    def side_to_move(self) -> Side:
        return rules.turn_to_move(self.viewing_state)

    @property
    def outcome_text(self) -> str | None:
        return rules.outcome_text(self.viewing_state)

    def piece_at(self, square: Square) -> PieceDescriptor | None:
        """Piece on *square* in the viewed position."""
        if not is_square_name(square):
            return None
        return rules.piece_at(self.viewing_state, square)

    # ── IBoardController impl ────────────────────────────────────────────

    def initialize(self, starting_position: str | None = None) -> None:
        try:
            board = rules.parse_position(starting_position)
        except InvalidPositionError as exc:
            _LOGGER.warning(
                "Invalid FEN provided, using starting position instead: %s", exc
            )
            self._start_error = str(exc)
            board = chess.Board()
        else:
            self._start_error = None
        self._start_fen = rules.serialize(board)
        self._clear()

    def execute_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceKind | None = None,
    ) -> MoveOutcome:
        if self._promotion.is_pending:
            _LOGGER.debug("Move %s%s ignored: promotion pending", from_sq, to_sq)
            return Rejected(RejectReason.PROMOTION_PENDING)
        return self._execute(from_sq, to_sq, promotion)

    def jump_to_position(self, index: int) -> chess.Board:
        if index < -1 or index >= len(self._history):
            return self.viewing_state

        self._cursor = index
        self._promotion.cancel()
        board = self._replay(index)
        self._emit_view_changed(board)
        return board

    def reset(self) -> None:
        self._clear()

    def current_selectable_moves(self, square: Square) -> set[Square]:
        if not self.is_live or self._promotion.is_pending:
            return set()
        if not is_square_name(square):
            return set()
        return {target.to for target in rules.legal_moves(self.live_state, square)}

    # ── Promotion sub-flow ───────────────────────────────────────────────

    def resolve_promotion(self, kind: PieceKind) -> MoveOutcome:
        """Finish the pending pawn move with *kind*.

        The pending request is cleared whatever the retry's outcome.

        Raises:
            ValueError: *kind* is not queen, rook, bishop or knight.
        """
        if not self._promotion.is_pending:
            return Rejected(RejectReason.ILLEGAL_MOVE)
        request = self._promotion.choose(kind)
        return self._execute(request.from_sq, request.to_sq, kind)

    def cancel_promotion(self) -> None:
        """Discard the pending pawn move; nothing is committed."""
        request = self._promotion.cancel()
        if request is not None:
            _LOGGER.debug(
                "Promotion %s%s cancelled", request.from_sq, request.to_sq
            )
            self._emit_view_changed(self.viewing_state)

    # ── Orientation ──────────────────────────────────────────────────────

    def flip_orientation(self) -> BoardOrientation:
        self.set_orientation(self._orientation.flipped)
        return self._orientation

    def set_orientation(self, orientation: BoardOrientation) -> None:
        if orientation is self._orientation:
            return
        self._orientation = orientation
        for cb in self.events.on_orientation_changed:
            cb(orientation)

    # ── Navigation helpers ───────────────────────────────────────────────

    def step_back(self) -> chess.Board:
        return self._step_to(max(-1, self._cursor - 1))

    def step_forward(self) -> chess.Board:
        return self._step_to(min(self._history.last_index, self._cursor + 1))

    def jump_to_start(self) -> chess.Board:
        return self.jump_to_position(-1)

    def jump_to_live(self) -> chess.Board:
        return self.jump_to_position(self._history.last_index)

    # ── Extras ───────────────────────────────────────────────────────────

    def play_random_game(
        self,
        max_plies: int = 30,
        rng: random.Random | None = None,
    ) -> int:
        """Reset and play up to *max_plies* random legal moves.

        Returns the number of plies committed.
        """
        self.reset()
        rng = rng or random.Random()
        played = 0
        for _ in range(max_plies):
            board = self.live_state
            if board.is_game_over():
                break
            picked = rules.random_legal_move(board, rng.choice)
            if picked is None:
                break
            from_sq, to_sq, promotion = picked
            if isinstance(self._execute(from_sq, to_sq, promotion), Committed):
                played += 1
        return played

    def viewing_pgn(self, headers: Mapping[str, str] | None = None) -> str:
        """PGN of the moves leading to the viewed position."""
        return rules.export_pgn(
            self._start_fen,
            self._history.moves_up_to(self._cursor),
            headers,
        )

    # ── Internal helpers ─────────────────────────────────────────────────

    def _execute(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceKind | None,
    ) -> MoveOutcome:
        if not self.is_live:
            _LOGGER.debug("Move %s%s rejected: not viewing live", from_sq, to_sq)
            return Rejected(RejectReason.NOT_LIVE_VIEW)
        if not (is_square_name(from_sq) and is_square_name(to_sq)):
            return Rejected(RejectReason.ILLEGAL_MOVE)

        live = self.live_state
        if promotion is None and rules.is_promotion_move(live, from_sq, to_sq):
            request = PromotionRequest(from_sq, to_sq, rules.turn_to_move(live))
            self._promotion.begin(request)
            for cb in self.events.on_promotion_requested:
                cb(request)
            return Suspended(request)

        try:
            applied = rules.apply_move(live, from_sq, to_sq, promotion)
        except IllegalMoveError as exc:
            _LOGGER.debug("Move rejected: %s", exc)
            return Rejected(RejectReason.ILLEGAL_MOVE)

        ply = self._history.append(
            applied.san, applied.uci, rules.serialize(applied.board)
        )
        self._cursor = self._history.last_index
        _LOGGER.debug("Committed %d. %s (%s)", ply.move_number, ply.san, ply.side)

        for cb in self.events.on_move_committed:
            cb(ply)
        self._emit_view_changed(applied.board)
        return Committed(ply)

    def _clear(self) -> None:
        self._history.clear()
        self._cursor = -1
        self._promotion.cancel()
        for cb in self.events.on_reset:
            cb()
        self._emit_view_changed(self._replay(-1))

    def _step_to(self, index: int) -> chess.Board:
        # A clamped step at either end leaves the view and its listeners alone.
        if index == self._cursor:
            return self.viewing_state
        return self.jump_to_position(index)

    def _replay(self, index: int) -> chess.Board:
        return rules.replay(self._start_fen, self._history.moves_up_to(index))

    def _emit_view_changed(self, board: chess.Board) -> None:
        for cb in self.events.on_view_changed:
            cb(board, self._cursor)
