"""Background coach-analysis orchestration for the UI thread."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from nimbus.analysis import AnalysisClient, AnalysisRequest, AnalysisResult
from nimbus.analysis.qt_bridge import AnalysisWorker

_LOGGER = logging.getLogger(__name__)

# Worker threads that outlived their session, kept referenced until they finish.
_DETACHED: list[tuple[QThread, AnalysisWorker]] = []


class _AnalysisCommandBus(QObject):
    analyze_requested = pyqtSignal(object, int)


class AnalysisSession:
    """Owns the worker thread for coach analysis requests.

    Only the newest request is reported; replies to superseded or
    cancelled requests are dropped.
    """

    __slots__ = (
        "__weakref__",
        "_on_finished",
        "_on_failed",
        "_command_bus",
        "_thread",
        "_worker",
        "_is_started",
        "_is_shutting_down",
        "_pending_request_id",
        "_next_request_id",
    )

    def __init__(
        self,
        client: AnalysisClient,
        *,
        on_finished: Callable[[AnalysisResult], None],
        on_failed: Callable[[str], None],
        parent: QObject | None = None,
    ) -> None:
        self._on_finished = on_finished
        self._on_failed = on_failed

        self._command_bus = _AnalysisCommandBus(parent)
        self._thread = QThread(parent)
        self._worker = AnalysisWorker(client)
        self._is_started = False
        self._is_shutting_down = False
        self._pending_request_id: int | None = None
        self._next_request_id = 0

    @property
    def is_running(self) -> bool:
        return self._pending_request_id is not None

    def setup(self) -> None:
        """Start worker thread and connect cross-thread signals."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._worker.moveToThread(self._thread)
        self._command_bus.analyze_requested.connect(self._worker.request_analysis)
        self._worker.analysis_ready.connect(self._on_worker_ready)
        self._worker.analysis_failed.connect(self._on_worker_failed)
        self._thread.start()
        self._is_started = True

    def shutdown(self, wait_ms: int = 2000) -> None:
        """Forget pending work and stop the worker thread.

        A worker still blocked in an HTTP request after *wait_ms* is
        detached from the owner and kept alive until its thread
        finishes; see :func:`wait_for_detached_workers`.
        """
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel()
        self._thread.quit()
        if not self._thread.wait(wait_ms):
            self._detach()
        self._is_started = False

    def start(self, request: AnalysisRequest) -> bool:
        """Queue *request*; any earlier request is superseded."""
        if not request.pgn.strip():
            return False
        if not self._is_started:
            self.setup()
        if self._is_shutting_down:
            return False

        self._next_request_id += 1
        request_id = self._next_request_id
        self._pending_request_id = request_id
        self._command_bus.analyze_requested.emit(request, request_id)
        return True

    def cancel(self) -> None:
        """Ignore the reply to the pending request, if any."""
        self._pending_request_id = None

    def _on_worker_ready(self, request_id: int, result_obj: object) -> None:
        if self._is_shutting_down or request_id != self._pending_request_id:
            return
        self._pending_request_id = None
        if not isinstance(result_obj, AnalysisResult):
            self._on_failed("Analysis worker produced an invalid result")
            return
        self._on_finished(result_obj)

    def _on_worker_failed(self, request_id: int, message: str) -> None:
        if self._is_shutting_down or request_id != self._pending_request_id:
            return
        self._pending_request_id = None
        self._on_failed(message)

    def _detach(self) -> None:
        thread, worker = self._thread, self._worker
        _LOGGER.warning("Analysis request still running, detaching its worker thread")
        self._command_bus.analyze_requested.disconnect(worker.request_analysis)
        worker.analysis_ready.disconnect(self._on_worker_ready)
        worker.analysis_failed.disconnect(self._on_worker_failed)
        owner = thread.parent()
        thread.setParent(None)
        _prune_detached()
        _DETACHED.append((thread, worker))

        # A later start() needs a fresh thread and worker.
        self._thread = QThread(owner)
        self._worker = AnalysisWorker(worker.client)


def _prune_detached() -> None:
    _DETACHED[:] = [entry for entry in _DETACHED if not entry[0].isFinished()]


def detached_worker_count() -> int:
    """Number of detached worker threads that are still running."""
    _prune_detached()
    return len(_DETACHED)


def wait_for_detached_workers(timeout_ms: int | None = None) -> bool:
    """Block until every detached worker thread has finished.

    Returns ``False`` if *timeout_ms* expired first.
    """
    for thread, _worker in list(_DETACHED):
        finished = thread.wait() if timeout_ms is None else thread.wait(timeout_ms)
        if not finished:
            return False
    _DETACHED.clear()
    return True
