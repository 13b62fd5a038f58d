"""Input mapping: pointer coordinates and gestures → board squares and moves.

Nothing here draws anything.  A renderer reports raw gestures (click,
press, move, release, arrow keys) together with the rendered board's
bounding box; :class:`InputMapper` turns them into selections and
:meth:`BoardController.execute_move` calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum, auto

from nimbus.core.enums import BoardOrientation
from nimbus.core.types import Square, file_of, make_square_name, rank_of
from nimbus.game.controller import BoardController
from nimbus.game.interfaces import MoveOutcome, Rejected
from nimbus.game.promotion import PromotionRequest
from nimbus.interaction.drag import DragSession

_LOGGER = logging.getLogger(__name__)

SelectionCallback = Callable[[Square | None, frozenset[Square]], None]


class Gesture(IntEnum):
    CLICK = auto()
    PRESS = auto()
    MOVE = auto()
    RELEASE = auto()


@dataclass(frozen=True)
class BoardGeometry:
    """Bounding box of the rendered 8×8 grid, in pointer coordinates."""

    left: float
    top: float
    width: float
    height: float

    @property
    def square_width(self) -> float:
        return self.width / 8

    @property
    def square_height(self) -> float:
        return self.height / 8

    def contains(self, x: float, y: float) -> bool:
        return (
            self.left <= x < self.left + self.width
            and self.top <= y < self.top + self.height
        )


# ── Coordinate helpers ───────────────────────────────────────────────────────


def _visual_coords(
    file: int, rank: int, orientation: BoardOrientation
) -> tuple[int, int]:
    """Board file/rank → visual column/row (row 0 at the top)."""
    if orientation is BoardOrientation.FROM_BLACK:
        return 7 - file, rank
    return file, 7 - rank


def square_from_coordinates(
    x: float,
    y: float,
    geometry: BoardGeometry,
    orientation: BoardOrientation,
) -> Square | None:
    """Pointer position → square name, ``None`` outside the board."""
    if geometry.width <= 0 or geometry.height <= 0:
        return None
    if not geometry.contains(x, y):
        return None
    col = min(7, int((x - geometry.left) // geometry.square_width))
    row = min(7, int((y - geometry.top) // geometry.square_height))
    if orientation is BoardOrientation.FROM_BLACK:
        file, rank = 7 - col, row
    else:
        file, rank = col, 7 - row
    return make_square_name(file, rank)


def square_origin(
    square: Square,
    geometry: BoardGeometry,
    orientation: BoardOrientation,
) -> tuple[float, float]:
    """Top-left corner of *square* in pointer coordinates."""
    col, row = _visual_coords(file_of(square), rank_of(square), orientation)
    return (
        geometry.left + col * geometry.square_width,
        geometry.top + row * geometry.square_height,
    )


# ── Mapper ───────────────────────────────────────────────────────────────────


class InputMapper:
    """Click, drag and keyboard protocols over one :class:`BoardController`.

    Board gestures are inert while the board is non-interactive, while
    a historical ply is viewed, or while a promotion choice is pending.
    Any change of the viewed position drops the selection and the drag.
    """

    __slots__ = (
        "_controller",
        "_selected",
        "_targets",
        "_drag",
        "_interactive",
        "on_selection_changed",
    )

    def __init__(self, controller: BoardController) -> None:
        self._controller = controller
        self._selected: Square | None = None
        self._targets: frozenset[Square] = frozenset()
        self._drag = DragSession()
        self._interactive = True
        self.on_selection_changed: list[SelectionCallback] = []

        events = controller.events
        events.on_view_changed.append(lambda _board, _cursor: self.cancel())
        events.on_reset.append(self.cancel)
        events.on_promotion_requested.append(self._on_promotion_requested)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def controller(self) -> BoardController:
        return self._controller

    @property
    def selected_square(self) -> Square | None:
        return self._selected

    @property
    def selectable_moves(self) -> frozenset[Square]:
        return self._targets

    @property
    def drag(self) -> DragSession:
        return self._drag

    def set_interactive(self, interactive: bool) -> None:
        """Enable / disable board gestures (navigation keys stay active)."""
        self._interactive = interactive
        if not interactive:
            self.cancel()

    # ── Click protocol ───────────────────────────────────────────────────

    def click(self, square: Square) -> MoveOutcome | None:
        """Select a piece, or move the selected piece to *square*.

        Returns the outcome when a move was attempted, else ``None``.
        """
        if not self._accepts_board_input():
            return None

        if self._selected is None:
            self._select_if_friendly(square)
            return None

        outcome = self._controller.execute_move(self._selected, square)
        if isinstance(outcome, Rejected):
            self._select_if_friendly(square)
        return outcome

    # ── Drag protocol ────────────────────────────────────────────────────

    def press(
        self,
        square: Square,
        position: tuple[float, float] | None = None,
    ) -> bool:
        """Start a drag on a friendly piece. Returns whether one started."""
        if not self._accepts_board_input():
            return False
        piece = self._controller.piece_at(square)
        if piece is None or piece.side is not self._controller.side_to_move:
            return False
        self._select(square)
        self._drag.start(square, piece, position)
        return True

    def move(self, x: float, y: float) -> None:
        self._drag.move_to(x, y)

    def release(
        self,
        x: float,
        y: float,
        geometry: BoardGeometry,
        orientation: BoardOrientation | None = None,
    ) -> MoveOutcome | None:
        """Drop the dragged piece at pointer position (*x*, *y*)."""
        if orientation is None:
            orientation = self._controller.orientation
        target = square_from_coordinates(x, y, geometry, orientation)
        return self.release_on(target)

    def release_on(self, target: Square | None) -> MoveOutcome | None:
        """Drop the dragged piece on *target* (``None`` = off the board).

        The drag session ends whatever happens.  Releasing on the source
        square keeps the piece selected so a click can finish the move.
        """
        if not self._drag.active:
            return None
        source = self._drag.source_square
        self._drag.clear()

        if source is None or target is None or target == source:
            return None
        return self._controller.execute_move(source, target)

    # ── Keyboard protocol ────────────────────────────────────────────────

    def key(self, name: str) -> bool:
        """Handle a navigation key. Returns whether it was consumed."""
        if self._controller.pending_promotion is not None:
            return False
        key = name.lower()
        if key == "left":
            self._controller.step_back()
        elif key == "right":
            self._controller.step_forward()
        elif key == "home":
            self._controller.jump_to_start()
        elif key == "end":
            self._controller.jump_to_live()
        else:
            return False
        return True

    # ── Combined entry point ─────────────────────────────────────────────

    def select_or_drag_square(
        self,
        square: Square | None,
        gesture: Gesture,
        position: tuple[float, float] | None = None,
    ) -> MoveOutcome | None:
        """Dispatch a gesture already resolved to a square."""
        if gesture is Gesture.CLICK:
            if square is None:
                self.cancel()
                return None
            return self.click(square)
        if gesture is Gesture.PRESS:
            if square is not None:
                self.press(square, position)
            return None
        if gesture is Gesture.MOVE:
            if position is not None:
                self.move(*position)
            return None
        return self.release_on(square)

    def cancel(self) -> None:
        """Drop selection and drag."""
        self._drag.clear()
        self._set_selection(None, frozenset())

    # ── Internal helpers ─────────────────────────────────────────────────

    def _accepts_board_input(self) -> bool:
        return (
            self._interactive
            and self._controller.is_live
            and self._controller.pending_promotion is None
        )

    def _select_if_friendly(self, square: Square) -> None:
        piece = self._controller.piece_at(square)
        if piece is not None and piece.side is self._controller.side_to_move:
            self._select(square)
        else:
            self._set_selection(None, frozenset())

    def _select(self, square: Square) -> None:
        targets = frozenset(self._controller.current_selectable_moves(square))
        self._set_selection(square, targets)

    def _set_selection(self, square: Square | None, targets: frozenset[Square]) -> None:
        if square == self._selected and targets == self._targets:
            return
        self._selected = square
        self._targets = targets
        for cb in self.on_selection_changed:
            cb(square, targets)

    def _on_promotion_requested(self, request: PromotionRequest) -> None:
        _LOGGER.debug(
            "Awaiting promotion choice for %s%s", request.from_sq, request.to_sq
        )
        self.cancel()
