"""Qt bridge to run coach analysis requests in a worker thread."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from nimbus.analysis.models import AnalysisError, AnalysisRequest
from nimbus.analysis.service import AnalysisClient


class AnalysisWorker(QObject):
    """Thread-affine worker that performs blocking analysis requests."""

    analysis_ready = pyqtSignal(int, object)  # request_id, AnalysisResult
    analysis_failed = pyqtSignal(int, str)  # request_id, message

    def __init__(self, client: AnalysisClient) -> None:
        super().__init__()
        self._client = client

    @property
    def client(self) -> AnalysisClient:
        return self._client

    @pyqtSlot(object, int)
    def request_analysis(self, request_obj: object, request_id: int) -> None:
        """Analyse *request_obj* and emit the result or the failure."""
        if not isinstance(request_obj, AnalysisRequest):
            self.analysis_failed.emit(request_id, "Analysis received invalid request")
            return

        try:
            result = self._client.analyze(request_obj)
        except AnalysisError as exc:
            self.analysis_failed.emit(request_id, str(exc))
            return

        self.analysis_ready.emit(request_id, result)
