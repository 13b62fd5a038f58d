"""Tests for the coach HTTP client (requests session stubbed)."""

from __future__ import annotations

from typing import Any

import pytest
import requests

from nimbus.analysis.models import AnalysisError, AnalysisRequest
from nimbus.analysis.service import AnalysisClient

GOOD_PAYLOAD = {
    "success": True,
    "message": "Game analyzed",
    "data": {
        "gameId": "1",
        "id": "a1",
        "provider": "openai",
        "modelName": "gpt-4o",
        "choices": [{"message": {"content": '{"summary": "Nice"}'}}],
    },
}


class _StubResponse:
    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        text: str = "",
        reason: str = "OK",
    ) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.reason = reason

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no JSON")
        return self._payload


class _StubSession:
    def __init__(self, response: _StubResponse | None = None, error: Exception | None = None) -> None:
        self._response = response
        self._error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def post(self, url: str, **kwargs: Any) -> _StubResponse:
        self.calls.append((url, kwargs))
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response


REQUEST = AnalysisRequest(pgn="1. e4 e5 *", color="w", game_id="1", user_id="u1")


def _client(session: _StubSession, **kwargs: Any) -> AnalysisClient:
    return AnalysisClient("http://coach.test/api/", session=session, **kwargs)  # type: ignore[arg-type]


class TestAnalysisClient:
    def test_posts_payload_and_parses(self) -> None:
        session = _StubSession(_StubResponse(payload=GOOD_PAYLOAD))
        result = _client(session, timeout=5.0).analyze(REQUEST)

        assert result.content.summary == "Nice"
        assert result.model_name == "gpt-4o"
        url, kwargs = session.calls[0]
        assert url == "http://coach.test/api/ai/analyze-game"
        assert kwargs["json"] == REQUEST.to_payload()
        assert kwargs["timeout"] == 5.0
        assert "Authorization" not in kwargs["headers"]

    def test_bearer_token(self) -> None:
        session = _StubSession(_StubResponse(payload=GOOD_PAYLOAD))
        _client(session, token="secret").analyze(REQUEST)
        assert session.calls[0][1]["headers"]["Authorization"] == "Bearer secret"

    @pytest.mark.parametrize(
        "request_obj",
        [
            AnalysisRequest(pgn="  ", color="w"),
            AnalysisRequest(pgn="1. e4 *", color=""),
        ],
    )
    def test_validation_happens_before_network(self, request_obj: AnalysisRequest) -> None:
        session = _StubSession(_StubResponse(payload=GOOD_PAYLOAD))
        with pytest.raises(AnalysisError):
            _client(session).analyze(request_obj)
        assert session.calls == []

    def test_connection_error(self) -> None:
        session = _StubSession(error=requests.ConnectionError("refused"))
        with pytest.raises(AnalysisError, match="request failed"):
            _client(session).analyze(REQUEST)

    def test_http_error_uses_message(self) -> None:
        response = _StubResponse(500, {"success": False, "message": "AI down"})
        with pytest.raises(AnalysisError, match=r"\(500\): AI down"):
            _client(_StubSession(response)).analyze(REQUEST)

    def test_http_error_falls_back_to_text(self) -> None:
        response = _StubResponse(502, None, text="Bad gateway", reason="Bad Gateway")
        with pytest.raises(AnalysisError, match="Bad gateway"):
            _client(_StubSession(response)).analyze(REQUEST)

    def test_invalid_json_body(self) -> None:
        response = _StubResponse(200, None, text="<html>")
        with pytest.raises(AnalysisError, match="not valid JSON"):
            _client(_StubSession(response)).analyze(REQUEST)

    def test_unsuccessful_envelope(self) -> None:
        response = _StubResponse(200, {"success": False, "message": "No credits"})
        with pytest.raises(AnalysisError, match="No credits"):
            _client(_StubSession(response)).analyze(REQUEST)
