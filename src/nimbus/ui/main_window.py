"""MainWindow — top-level window assembling all UI components."""

from __future__ import annotations

import logging
from collections.abc import Callable

import chess
from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from nimbus.analysis import AnalysisClient, AnalysisRequest, AnalysisResult
from nimbus.game.controller import BoardController
from nimbus.game.history import Ply
from nimbus.game.promotion import PromotionRequest
from nimbus.interaction.mapper import InputMapper
from nimbus.settings import AppSettings
from nimbus.ui.analysis_session import AnalysisSession
from nimbus.ui.board.board_view import BoardView
from nimbus.ui.panels.analysis_panel import AnalysisPanel
from nimbus.ui.panels.control_panel import ControlPanel
from nimbus.ui.panels.move_panel import MovePanel

_LOGGER = logging.getLogger(__name__)

MoveHook = Callable[[Ply], None]


class MainWindow(QMainWindow):
    """Main application window for Nimbus."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: AnalysisClient | None = None,
        on_move: MoveHook | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Nimbus")
        self.setMinimumSize(900, 640)
        self.resize(1100, 750)

        self._settings = settings or AppSettings()
        self._controller = BoardController(
            self._settings.start_position,
            player_side=self._settings.player_side,
        )
        self._mapper = InputMapper(self._controller)
        self._on_move = on_move
        self._analysis = AnalysisSession(
            client
            or AnalysisClient(
                self._settings.api_base_url,
                timeout=self._settings.api_timeout,
                token=self._settings.api_token,
            ),
            on_finished=self._on_analysis_finished,
            on_failed=self._on_analysis_failed,
            parent=self,
        )

        self._setup_ui()
        self._connect_signals()
        self._connect_board_events()
        self._apply_settings()
        self._sync_ui()

        if self._controller.start_position_error is not None:
            self._status_label.setText(
                "Invalid starting position, using the standard one instead"
            )

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        # Board (left)
        self._board_view = BoardView(self._mapper)
        root.addWidget(self._board_view, stretch=3)

        # Right panel
        right = QVBoxLayout()
        right.setSpacing(6)

        self._move_panel = MovePanel()
        right.addWidget(self._move_panel, stretch=2)

        self._control_panel = ControlPanel()
        right.addWidget(self._control_panel)

        self._analysis_panel = AnalysisPanel()
        right.addWidget(self._analysis_panel, stretch=2)

        right_widget = QWidget()
        right_widget.setLayout(right)
        right_widget.setMinimumWidth(280)
        right_widget.setMaximumWidth(400)
        root.addWidget(right_widget, stretch=1)

        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel("Ready")
        self._status.addWidget(self._status_label)

    def _connect_signals(self) -> None:
        cp = self._control_panel
        cp.reset_clicked.connect(self._on_reset)
        cp.flip_clicked.connect(self._controller.flip_orientation)
        cp.back_clicked.connect(self._controller.step_back)
        cp.forward_clicked.connect(self._controller.step_forward)
        cp.random_clicked.connect(self._on_random_game)
        cp.analyze_clicked.connect(self._on_analyze)
        self._move_panel.move_clicked.connect(self._controller.jump_to_position)

    def _connect_board_events(self) -> None:
        events = self._controller.events
        events.on_move_committed.append(self._on_move_committed)
        events.on_view_changed.append(self._on_view_changed)
        events.on_promotion_requested.append(self._on_promotion_requested)
        events.on_reset.append(self._on_board_reset)

    def _apply_settings(self) -> None:
        self._mapper.set_interactive(self._settings.allow_moves)
        scene = self._board_view.board_scene
        scene.set_show_coordinates(self._settings.show_coordinates)
        scene.set_show_legal_moves(self._settings.show_legal_moves)
        self._move_panel.set_use_figurine_notation(
            self._settings.use_figurine_notation
        )

    # ── Accessors ────────────────────────────────────────────────────────

    @property
    def controller(self) -> BoardController:
        return self._controller

    @property
    def mapper(self) -> InputMapper:
        return self._mapper

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    @property
    def move_panel(self) -> MovePanel:
        return self._move_panel

    @property
    def control_panel(self) -> ControlPanel:
        return self._control_panel

    @property
    def analysis_panel(self) -> AnalysisPanel:
        return self._analysis_panel

    @property
    def status_text(self) -> str:
        return self._status_label.text()

    # ── Board events ─────────────────────────────────────────────────────

    def _on_move_committed(self, ply: Ply) -> None:
        self._move_panel.add_ply(ply)
        if self._on_move is not None:
            self._on_move(ply)

    def _on_view_changed(self, _board: chess.Board, cursor: int) -> None:
        self._move_panel.set_active_ply(cursor)
        self._sync_ui()

    def _on_promotion_requested(self, _request: PromotionRequest) -> None:
        self._status_label.setText("Choose a promotion piece")

    def _on_board_reset(self) -> None:
        self._move_panel.clear()

    # ── Control actions ──────────────────────────────────────────────────

    def _on_reset(self) -> None:
        self._analysis.cancel()
        self._analysis_panel.show_idle()
        self._controller.reset()

    def _on_random_game(self) -> None:
        self._analysis.cancel()
        self._analysis_panel.show_idle()
        played = self._controller.play_random_game(self._settings.random_game_plies)
        _LOGGER.info("Random game played %d plies", played)

    def _on_analyze(self) -> None:
        ctrl = self._controller
        if not ctrl.plies:
            self._analysis_panel.show_error("Play at least one move first")
            return
        if ctrl.cursor < 0:
            self._analysis_panel.show_error("Select a move to analyze")
            return
        request = AnalysisRequest(
            pgn=ctrl.viewing_pgn(),
            color=self._settings.player_side.letter,
            game_id=self._settings.game_id,
            user_id=self._settings.user_id,
        )
        if self._analysis.start(request):
            self._analysis_panel.show_running()
            self._update_analyze_action()

    def _on_analysis_finished(self, result: AnalysisResult) -> None:
        self._analysis_panel.show_result(result)
        self._update_analyze_action()

    def _on_analysis_failed(self, message: str) -> None:
        _LOGGER.warning("Game analysis failed: %s", message)
        self._analysis_panel.show_error(message)
        self._update_analyze_action()

    # ── Status ───────────────────────────────────────────────────────────

    def _update_analyze_action(self) -> None:
        # Analysis reads the viewed position, so the start has nothing to send.
        self._control_panel.set_analyze_enabled(
            self._controller.cursor >= 0 and not self._analysis.is_running
        )

    def _sync_ui(self) -> None:
        ctrl = self._controller
        last = len(ctrl.plies) - 1
        self._control_panel.set_navigation(ctrl.cursor > -1, ctrl.cursor < last)
        self._update_analyze_action()

        outcome = ctrl.outcome_text
        if outcome is not None:
            text = outcome
        elif ctrl.cursor == -1 and last >= 0:
            text = "Viewing the starting position"
        elif not ctrl.is_live:
            text = f"Viewing move {ctrl.cursor + 1} of {last + 1}"
        else:
            text = f"{str(ctrl.side_to_move).capitalize()} to move"
        self._status_label.setText(text)

    def closeEvent(self, event: QCloseEvent | None) -> None:
        self._analysis.shutdown()
        super().closeEvent(event)
