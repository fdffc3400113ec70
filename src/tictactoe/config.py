"""Environment-driven settings for the tic-tac-toe server."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    max_sessions: int = 1000

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        max_sessions = _int_env(env, "TICTACTOE_MAX_SESSIONS", cls.max_sessions)
        if max_sessions < 1:
            raise ValueError("TICTACTOE_MAX_SESSIONS must be at least 1")
        return cls(
            host=env.get("TICTACTOE_HOST", cls.host),
            port=_int_env(env, "TICTACTOE_PORT", cls.port),
            log_level=env.get("TICTACTOE_LOG_LEVEL", cls.log_level).upper(),
            max_sessions=max_sessions,
        )
