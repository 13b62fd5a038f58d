"""Application settings."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from nimbus.core.enums import Side

_LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "NIMBUS_"
_BOOL_WORDS = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Board
    start_position: str | None = None  # FEN, None = standard start
    player_side: Side = Side.WHITE
    show_coordinates: bool = True
    show_legal_moves: bool = True
    allow_moves: bool = True  # False = review-only board
    use_figurine_notation: bool = True
    random_game_plies: int = 30

    # Coach API
    api_base_url: str = "http://localhost:5000/api"
    api_timeout: float = 120.0
    api_token: str | None = None
    user_id: str | None = None
    game_id: str | None = "1"

    # Diagnostics
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppSettings:
        """Build settings from ``NIMBUS_*`` environment variables.

        Malformed values keep their defaults and log a warning.
        """
        env = os.environ if environ is None else environ
        settings = cls()

        def get(name: str) -> str | None:
            value = env.get(ENV_PREFIX + name)
            return value if value else None

        if (fen := get("START_FEN")) is not None:
            settings.start_position = fen
        if (color := get("PLAYER_COLOR")) is not None:
            try:
                settings.player_side = Side.parse(color)
            except ValueError:
                _LOGGER.warning("Ignoring NIMBUS_PLAYER_COLOR=%r", color)
        if (allow := get("ALLOW_MOVES")) is not None:
            flag = _BOOL_WORDS.get(allow.strip().lower())
            if flag is None:
                _LOGGER.warning("Ignoring NIMBUS_ALLOW_MOVES=%r", allow)
            else:
                settings.allow_moves = flag
        if (url := get("API_URL")) is not None:
            settings.api_base_url = url
        if (timeout := get("API_TIMEOUT")) is not None:
            try:
                settings.api_timeout = float(timeout)
            except ValueError:
                _LOGGER.warning("Ignoring NIMBUS_API_TIMEOUT=%r", timeout)
        if (plies := get("RANDOM_GAME_PLIES")) is not None:
            try:
                settings.random_game_plies = max(0, int(plies))
            except ValueError:
                _LOGGER.warning("Ignoring NIMBUS_RANDOM_GAME_PLIES=%r", plies)
        settings.api_token = get("API_TOKEN") or settings.api_token
        settings.user_id = get("USER_ID") or settings.user_id
        settings.game_id = get("GAME_ID") or settings.game_id
        if (level := get("LOG_LEVEL")) is not None:
            settings.log_level = level.upper()
        return settings
