"""HTTP client for the AI coach endpoint."""

from __future__ import annotations

import logging

import requests

from nimbus.analysis.models import AnalysisError, AnalysisRequest, AnalysisResult

_LOGGER = logging.getLogger(__name__)

ANALYZE_PATH = "/ai/analyze-game"


class AnalysisClient:
    """Posts a game to the coach API and reshapes the reply.

    One request per call, no retries.  Every failure surfaces as
    :class:`AnalysisError`.
    """

    __slots__ = ("_base_url", "_timeout", "_token", "_session")

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = 120.0,
        token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._token = token
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self._base_url}{ANALYZE_PATH}"

    def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        if not request.pgn.strip():
            raise AnalysisError("PGN is required")
        if not request.color:
            raise AnalysisError("Color is required")

        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        _LOGGER.info("Requesting game analysis from %s", self.url)
        try:
            response = self._session.post(
                self.url,
                json=request.to_payload(),
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise AnalysisError(f"Analysis request failed: {exc}") from exc

        if response.status_code >= 400:
            raise AnalysisError(_error_detail(response))

        try:
            payload = response.json()
        except ValueError as exc:
            raise AnalysisError("Analysis response is not valid JSON") from exc
        return AnalysisResult.from_response(payload)


def _error_detail(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return f"Analysis failed ({response.status_code}): {body['message']}"
    text = (response.text or "").strip()[:200]
    return f"Analysis failed ({response.status_code}): {text or response.reason}"
