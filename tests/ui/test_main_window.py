"""Tests for MainWindow wiring between controller, board and panels."""

from __future__ import annotations

import time

from PyQt6.QtWidgets import QApplication

from nimbus.analysis.models import AnalysisContent, AnalysisRequest, AnalysisResult
from nimbus.core.enums import BoardOrientation, Side
from nimbus.game.history import Ply
from nimbus.settings import AppSettings
from nimbus.ui.main_window import MainWindow


class _UnusedClient:
    def analyze(self, _request: object) -> AnalysisResult:
        raise AssertionError("network must not be touched")


class _RecordingClient:
    def __init__(self) -> None:
        self.sent: list[AnalysisRequest] = []

    def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        self.sent.append(request)
        return AnalysisResult(AnalysisContent("Solid opening"))


def _wait_for(predicate, timeout: float = 3.0) -> None:
    app = QApplication.instance()
    deadline = time.monotonic() + timeout
    while not predicate() and time.monotonic() < deadline:
        app.processEvents()
        time.sleep(0.01)


def _window(**overrides: object) -> MainWindow:
    settings = AppSettings(**overrides)  # type: ignore[arg-type]
    return MainWindow(settings, client=_UnusedClient())  # type: ignore[arg-type]


def test_initial_state() -> None:
    window = _window()
    assert window.controller.plies == ()
    assert window.move_panel.is_empty
    assert window.status_text == "White to move"


def test_committed_move_updates_panel_status_and_hook() -> None:
    seen: list[Ply] = []
    window = MainWindow(AppSettings(), client=_UnusedClient(), on_move=seen.append)  # type: ignore[arg-type]

    window.mapper.click("e2")
    window.mapper.click("e4")

    assert [p.san for p in seen] == ["e4"]
    assert window.move_panel.button_text(0) == "e4"
    assert window.move_panel.active_ply == 0
    assert window.status_text == "Black to move"


def test_move_panel_click_jumps_to_ply() -> None:
    window = _window()
    ctrl = window.controller
    ctrl.execute_move("e2", "e4")
    ctrl.execute_move("e7", "e5")

    window.move_panel.move_clicked.emit(0)

    assert ctrl.cursor == 0
    assert window.move_panel.active_ply == 0
    assert window.status_text == "Viewing move 1 of 2"


def test_back_button_reaches_start() -> None:
    window = _window()
    window.controller.execute_move("e2", "e4")
    window.control_panel.back_clicked.emit()
    assert window.controller.cursor == -1
    assert window.status_text == "Viewing the starting position"
    assert window.move_panel.active_ply is None


def test_reset_clears_everything() -> None:
    window = _window()
    window.controller.execute_move("e2", "e4")

    window.control_panel.reset_clicked.emit()

    assert window.controller.plies == ()
    assert window.move_panel.is_empty


def test_flip_button() -> None:
    window = _window()
    window.control_panel.flip_clicked.emit()
    assert window.controller.orientation is BoardOrientation.FROM_BLACK


def test_black_player_starts_flipped() -> None:
    window = _window(player_side=Side.BLACK)
    assert window.controller.orientation is BoardOrientation.FROM_BLACK


def test_random_game_fills_move_list() -> None:
    window = _window(random_game_plies=6)
    window.control_panel.random_clicked.emit()

    plies = window.controller.plies
    assert 0 < len(plies) <= 6
    assert window.move_panel.button_text(len(plies) - 1)
    assert window.controller.is_live


def test_invalid_start_position_reported() -> None:
    window = _window(start_position="garbage")
    assert window.controller.start_position_error is not None
    assert "Invalid starting position" in window.status_text


def test_analyze_without_moves_shows_error() -> None:
    window = _window()
    window.control_panel.analyze_clicked.emit()
    assert window.analysis_panel.status_text == "Play at least one move first"
    assert not window.analysis_panel.is_busy


def test_analysis_callbacks_update_panel() -> None:
    window = _window()
    result = AnalysisResult(AnalysisContent("Well played", ("a",), ("b",)))

    window._on_analysis_finished(result)
    assert window.analysis_panel.result is result

    window._on_analysis_failed("offline")
    assert window.analysis_panel.status_text == "offline"
    assert window.analysis_panel.result is None


def test_analyze_sends_viewed_position_pgn() -> None:
    client = _RecordingClient()
    window = MainWindow(AppSettings(), client=client)  # type: ignore[arg-type]
    ctrl = window.controller
    for from_sq, to_sq in (("e2", "e4"), ("e7", "e5"), ("g1", "f3")):
        ctrl.execute_move(from_sq, to_sq)
    ctrl.jump_to_position(0)

    window.control_panel.analyze_clicked.emit()
    _wait_for(lambda: window.analysis_panel.result is not None)

    assert len(client.sent) == 1
    assert client.sent[0].pgn == ctrl.viewing_pgn()
    assert "e4" in client.sent[0].pgn
    assert "Nf3" not in client.sent[0].pgn
    assert window.control_panel.is_analyze_enabled


def test_analyze_disabled_at_starting_position() -> None:
    window = _window()
    window.controller.execute_move("e2", "e4")
    assert window.control_panel.is_analyze_enabled

    window.controller.jump_to_position(-1)
    assert not window.control_panel.is_analyze_enabled

    window.control_panel.analyze_clicked.emit()
    assert window.analysis_panel.status_text == "Select a move to analyze"
    assert not window.analysis_panel.is_busy


def test_review_only_board_ignores_moves() -> None:
    window = _window(allow_moves=False)
    window.mapper.click("e2")
    window.mapper.click("e4")

    assert window.controller.plies == ()
    assert window.mapper.selected_square is None
    assert window.mapper.key("right") is True
