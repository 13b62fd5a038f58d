"""Tests for the input mapper: coordinates, click, drag and keyboard."""

import pytest

from nimbus.core.enums import BoardOrientation
from nimbus.game.controller import BoardController
from nimbus.game.interfaces import Committed, Rejected, Suspended
from nimbus.interaction.mapper import (
    BoardGeometry,
    Gesture,
    InputMapper,
    square_from_coordinates,
    square_origin,
)

BOARD = BoardGeometry(0, 0, 800, 800)
OFFSET = BoardGeometry(100, 50, 400, 400)


def _centre(square: str, orientation=BoardOrientation.FROM_WHITE) -> tuple[float, float]:
    x, y = square_origin(square, BOARD, orientation)
    return x + 50, y + 50


def _mapper(fen: str | None = None) -> tuple[BoardController, InputMapper]:
    ctrl = BoardController(fen)
    return ctrl, InputMapper(ctrl)


class TestCoordinates:
    @pytest.mark.parametrize(
        ("x", "y", "square"),
        [(50, 750, "a1"), (750, 50, "h8"), (450, 650, "e2"), (0, 0, "a8")],
    )
    def test_white_orientation(self, x: float, y: float, square: str) -> None:
        assert square_from_coordinates(x, y, BOARD, BoardOrientation.FROM_WHITE) == square

    @pytest.mark.parametrize(
        ("x", "y", "square"),
        [(50, 750, "h8"), (750, 50, "a1"), (50, 50, "h1"), (350, 150, "e2")],
    )
    def test_black_orientation(self, x: float, y: float, square: str) -> None:
        assert square_from_coordinates(x, y, BOARD, BoardOrientation.FROM_BLACK) == square

    @pytest.mark.parametrize(("x", "y"), [(-1, 10), (10, -0.5), (800, 10), (10, 800)])
    def test_outside_is_none(self, x: float, y: float) -> None:
        assert square_from_coordinates(x, y, BOARD, BoardOrientation.FROM_WHITE) is None

    def test_offset_box(self) -> None:
        assert square_from_coordinates(101, 51, OFFSET, BoardOrientation.FROM_WHITE) == "a8"
        assert square_from_coordinates(499, 449, OFFSET, BoardOrientation.FROM_WHITE) == "h1"
        assert square_from_coordinates(99, 60, OFFSET, BoardOrientation.FROM_WHITE) is None

    def test_degenerate_box(self) -> None:
        empty = BoardGeometry(0, 0, 0, 0)
        assert square_from_coordinates(0, 0, empty, BoardOrientation.FROM_WHITE) is None

    def test_origin_round_trip(self) -> None:
        for orientation in BoardOrientation:
            for square in ("a1", "c7", "h8", "e4"):
                x, y = square_origin(square, OFFSET, orientation)
                assert square_from_coordinates(x + 1, y + 1, OFFSET, orientation) == square


class TestClickProtocol:
    def test_select_then_move(self) -> None:
        ctrl, mapper = _mapper()
        assert mapper.click("e2") is None
        assert mapper.selected_square == "e2"
        assert mapper.selectable_moves == frozenset({"e3", "e4"})

        outcome = mapper.click("e4")

        assert isinstance(outcome, Committed)
        assert len(ctrl.plies) == 1
        assert mapper.selected_square is None

    def test_first_click_on_empty_or_enemy_selects_nothing(self) -> None:
        _, mapper = _mapper()
        mapper.click("e4")
        assert mapper.selected_square is None
        mapper.click("e7")
        assert mapper.selected_square is None

    def test_second_click_on_friendly_reselects(self) -> None:
        ctrl, mapper = _mapper()
        mapper.click("e2")
        outcome = mapper.click("g1")

        assert isinstance(outcome, Rejected)
        assert mapper.selected_square == "g1"
        assert mapper.selectable_moves == frozenset({"f3", "h3"})
        assert ctrl.plies == ()

    def test_second_click_on_empty_illegal_clears(self) -> None:
        _, mapper = _mapper()
        mapper.click("e2")
        assert isinstance(mapper.click("e5"), Rejected)
        assert mapper.selected_square is None

    def test_second_click_on_enemy_without_capture_clears(self) -> None:
        _, mapper = _mapper()
        mapper.click("e2")
        assert isinstance(mapper.click("e7"), Rejected)
        assert mapper.selected_square is None

    def test_selection_callback(self) -> None:
        _, mapper = _mapper()
        seen: list[tuple[str | None, frozenset[str]]] = []
        mapper.on_selection_changed.append(lambda sq, targets: seen.append((sq, targets)))
        mapper.click("e2")
        mapper.cancel()
        assert seen == [("e2", frozenset({"e3", "e4"})), (None, frozenset())]

    def test_historical_view_is_inert(self) -> None:
        ctrl, mapper = _mapper()
        ctrl.execute_move("e2", "e4")
        ctrl.jump_to_position(-1)
        assert mapper.click("d2") is None
        assert mapper.selected_square is None

    def test_navigation_clears_selection(self) -> None:
        ctrl, mapper = _mapper()
        ctrl.execute_move("e2", "e4")
        mapper.click("e7")
        assert mapper.selected_square == "e7"
        ctrl.jump_to_position(-1)
        assert mapper.selected_square is None

    def test_non_interactive(self) -> None:
        _, mapper = _mapper()
        mapper.click("e2")
        mapper.set_interactive(False)
        assert mapper.selected_square is None
        assert mapper.click("e2") is None
        assert not mapper.press("e2")


class TestPromotionGating:
    def test_click_suspends_and_board_goes_inert(self, promotion_fen: str) -> None:
        ctrl, mapper = _mapper(promotion_fen)
        mapper.click("e7")
        outcome = mapper.click("e8")

        assert isinstance(outcome, Suspended)
        assert mapper.selected_square is None
        assert mapper.click("a1") is None
        assert not mapper.press("a1")
        assert mapper.key("left") is False

        ctrl.cancel_promotion()
        mapper.click("a1")
        assert mapper.selected_square == "a1"


class TestDragProtocol:
    def test_press_move_release_commits(self) -> None:
        ctrl, mapper = _mapper()
        assert mapper.press("e2", _centre("e2"))
        assert mapper.drag.active
        assert mapper.drag.source_square == "e2"
        assert mapper.selectable_moves == frozenset({"e3", "e4"})

        mapper.move(420, 460)
        assert mapper.drag.cursor_position == (420, 460)
        assert ctrl.plies == ()

        outcome = mapper.release(*_centre("e4"), BOARD)

        assert isinstance(outcome, Committed)
        assert not mapper.drag.active
        assert ctrl.plies[0].uci == "e2e4"

    def test_press_on_enemy_or_empty(self) -> None:
        _, mapper = _mapper()
        assert not mapper.press("e7")
        assert not mapper.press("e4")
        assert not mapper.drag.active

    def test_release_outside_abandons(self) -> None:
        ctrl, mapper = _mapper()
        mapper.press("e2", _centre("e2"))
        assert mapper.release(900, 900, BOARD) is None
        assert not mapper.drag.active
        assert ctrl.plies == ()

    def test_release_on_illegal_target(self) -> None:
        ctrl, mapper = _mapper()
        mapper.press("e2")
        assert isinstance(mapper.release(*_centre("e5"), BOARD), Rejected)
        assert not mapper.drag.active
        assert ctrl.plies == ()

    def test_release_on_source_keeps_selection(self) -> None:
        _, mapper = _mapper()
        mapper.press("e2")
        assert mapper.release(*_centre("e2"), BOARD) is None
        assert not mapper.drag.active
        assert mapper.selected_square == "e2"
        assert isinstance(mapper.click("e4"), Committed)

    def test_release_uses_orientation(self) -> None:
        ctrl, mapper = _mapper()
        ctrl.flip_orientation()
        mapper.press("e2")
        x, y = _centre("e4", BoardOrientation.FROM_BLACK)
        assert isinstance(mapper.release(x, y, BOARD), Committed)

    def test_move_without_drag_ignored(self) -> None:
        _, mapper = _mapper()
        mapper.move(10, 10)
        assert mapper.drag.cursor_position is None

    def test_navigation_tears_down_drag(self) -> None:
        ctrl, mapper = _mapper()
        ctrl.execute_move("e2", "e4")
        mapper.press("e7")
        ctrl.jump_to_position(-1)
        assert not mapper.drag.active
        assert mapper.release_on("e5") is None
        assert len(ctrl.plies) == 1


class TestDragClickEquivalence:
    MOVES = [("e2", "e4"), ("e7", "e5"), ("g1", "f3"), ("b8", "c6"), ("f1", "b5")]

    def test_same_plies(self) -> None:
        click_ctrl, click_mapper = _mapper()
        drag_ctrl, drag_mapper = _mapper()

        for from_sq, to_sq in self.MOVES:
            click_mapper.click(from_sq)
            click_mapper.click(to_sq)

            drag_mapper.press(from_sq)
            drag_mapper.release(*_centre(to_sq), BOARD)

        assert click_ctrl.plies == drag_ctrl.plies
        assert len(click_ctrl.plies) == len(self.MOVES)


class TestKeyboard:
    def test_arrows_step_and_clamp(self) -> None:
        ctrl, mapper = _mapper()
        ctrl.execute_move("e2", "e4")
        ctrl.execute_move("e7", "e5")

        assert mapper.key("left")
        assert ctrl.cursor == 0
        mapper.key("Left")
        mapper.key("left")
        assert ctrl.cursor == -1
        mapper.key("right")
        assert ctrl.cursor == 0
        mapper.key("end")
        assert ctrl.cursor == 1
        mapper.key("right")
        assert ctrl.cursor == 1
        mapper.key("home")
        assert ctrl.cursor == -1

    def test_right_at_live_keeps_selection(self) -> None:
        ctrl, mapper = _mapper()
        mapper.click("e2")

        assert mapper.key("right")
        assert ctrl.is_live
        assert mapper.selected_square == "e2"
        assert mapper.selectable_moves == {"e3", "e4"}

    def test_unknown_key(self) -> None:
        _, mapper = _mapper()
        assert mapper.key("space") is False


class TestGestureDispatch:
    def test_click_and_drag_gestures(self) -> None:
        ctrl, mapper = _mapper()
        mapper.select_or_drag_square("e2", Gesture.CLICK)
        assert isinstance(mapper.select_or_drag_square("e4", Gesture.CLICK), Committed)

        mapper.select_or_drag_square("e7", Gesture.PRESS, (10, 10))
        mapper.select_or_drag_square(None, Gesture.MOVE, (20, 30))
        assert mapper.drag.cursor_position == (20, 30)
        outcome = mapper.select_or_drag_square("e5", Gesture.RELEASE)

        assert isinstance(outcome, Committed)
        assert [p.san for p in ctrl.plies] == ["e4", "e5"]

    def test_click_off_board_clears(self) -> None:
        _, mapper = _mapper()
        mapper.click("e2")
        assert mapper.select_or_drag_square(None, Gesture.CLICK) is None
        assert mapper.selected_square is None
