"""Data models for AI coach analysis and the reshaping of raw replies."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*\n?|\n?\s*```\s*$")
_EDGE_UNDERSCORES_RE = re.compile(r"^_+|_+$")
_SEPARATOR_RE = re.compile(r"[-_]([a-zA-Z])")


class AnalysisError(Exception):
    """The analysis request failed or returned something unusable."""


def keys_to_camel_case(obj: Any) -> Any:
    """Recursively rewrite mapping keys from snake/kebab case to camelCase."""
    if isinstance(obj, list):
        return [keys_to_camel_case(item) for item in obj]
    if isinstance(obj, Mapping):
        result: dict[str, Any] = {}
        for key, value in obj.items():
            trimmed = _EDGE_UNDERSCORES_RE.sub("", str(key))
            camel = _SEPARATOR_RE.sub(lambda m: m.group(1).upper(), trimmed)
            result[camel] = keys_to_camel_case(value)
        return result
    return obj


def strip_code_fence(text: str) -> str:
    """Remove a surrounding Markdown code fence (```json ... ```)."""
    return _FENCE_RE.sub("", text).strip()


@dataclass(slots=True, frozen=True)
class AnalysisRequest:
    """What the coach needs to look at."""

    pgn: str
    color: str  # "w" / "b"
    game_id: str | None = None
    user_id: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "pgn": self.pgn,
            "color": self.color,
            "gameId": self.game_id,
            "userId": self.user_id,
        }


@dataclass(slots=True, frozen=True)
class AnalysisContent:
    """The coach's prose."""

    summary: str
    key_learnings: tuple[str, ...] = field(default_factory=tuple)
    suggestions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(slots=True, frozen=True)
class AnalysisResult:
    """A completed analysis with provenance."""

    content: AnalysisContent
    game_id: str | None = None
    analysis_id: str | None = None
    provider: str | None = None
    model_name: str | None = None

    @classmethod
    def from_response(cls, payload: Any) -> AnalysisResult:
        """Reshape the API envelope ``{success, message, data}``.

        Raises:
            AnalysisError: unsuccessful or malformed envelope.
        """
        if not isinstance(payload, Mapping):
            raise AnalysisError("Analysis response is not a JSON object")
        if payload.get("success") is False:
            raise AnalysisError(str(payload.get("message") or "Game analysis failed"))

        data = keys_to_camel_case(payload.get("data"))
        if not isinstance(data, Mapping):
            raise AnalysisError("Analysis response has no data")
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise AnalysisError("Analysis response has no choices")
        message = choices[0].get("message") if isinstance(choices[0], Mapping) else None
        if not isinstance(message, Mapping) or "content" not in message:
            raise AnalysisError("Analysis response has no message content")

        return cls(
            content=parse_analysis_content(message["content"]),
            game_id=_opt_str(data.get("gameId")),
            analysis_id=_opt_str(data.get("id")),
            provider=_opt_str(data.get("provider")),
            model_name=_opt_str(data.get("modelName") or data.get("model")),
        )


def parse_analysis_content(raw: Any) -> AnalysisContent:
    """Turn the coach's reply (dict, or JSON text maybe fenced) into content.

    Raises:
        AnalysisError: the reply is not JSON or lacks a summary.
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(strip_code_fence(raw))
        except json.JSONDecodeError as exc:
            raise AnalysisError(f"Analysis content is not valid JSON: {exc}") from exc

    content = keys_to_camel_case(raw)
    if not isinstance(content, Mapping):
        raise AnalysisError("Analysis content is not a JSON object")

    summary = content.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        raise AnalysisError("Analysis content has no summary")

    return AnalysisContent(
        summary=summary.strip(),
        key_learnings=_str_tuple(content.get("keyLearnings")),
        suggestions=_str_tuple(content.get("suggestions")),
    )


def _str_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(item).strip() for item in value if str(item).strip())


def _opt_str(value: Any) -> str | None:
    return None if value is None else str(value)
