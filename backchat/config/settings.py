"""Centralized configuration loaded from environment variables.

Values are read when a ``Settings`` instance is created, so every
``HTTPNetworkService`` gets its configuration passed in explicitly instead of
sharing a process-wide object.
"""

from __future__ import annotations

import json
import logging
import os

from dotenv import load_dotenv


def _optional_int(value: str) -> int | None:
    value = value.strip()
    return int(value) if value else None


def _json_headers(value: str) -> dict[str, str]:
    if not value.strip():
        return {}
    try:
        data = json.loads(value)
    except json.JSONDecodeError as e:
        raise ValueError(f"BACKCHAT_EXTRA_HEADERS is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("BACKCHAT_EXTRA_HEADERS must be a JSON object")
    return {str(k): str(v) for k, v in data.items()}


def _log_level(value: str) -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"BACKCHAT_LOG_LEVEL {value!r} is not a logging level")
    return level


class Settings:
    def __init__(self, *, env_file: str | os.PathLike[str] | None = ".env") -> None:
        # Values already present in the environment win over the file.
        if env_file:
            load_dotenv(env_file)

        # --- Backend target ---
        self.BASE_URL: str = os.environ.get("BACKCHAT_BASE_URL", "")

        # --- Transport ---
        self.TIMEOUT_SECONDS: float = float(os.environ.get("BACKCHAT_TIMEOUT_SECONDS", "30.0"))
        self.MAX_CONNECTIONS_PER_HOST: int = int(os.environ.get("BACKCHAT_MAX_CONNECTIONS_PER_HOST", "1"))

        # --- Request shaping ---
        self.EXTRA_HEADERS: dict[str, str] = _json_headers(os.environ.get("BACKCHAT_EXTRA_HEADERS", ""))
        self.AUTH_SCHEME: str = os.environ.get("BACKCHAT_AUTH_SCHEME", "Bearer")

        # --- Status handling ---
        self.SPECIAL_STATUS_CODE: int | None = _optional_int(os.environ.get("BACKCHAT_SPECIAL_STATUS_CODE", ""))

        # --- Logging ---
        self.LOG_LEVEL: str = _log_level(os.environ.get("BACKCHAT_LOG_LEVEL", "INFO"))

    def __repr__(self) -> str:
        # Header values may carry credentials; only names are shown.
        return (
            f"Settings(BASE_URL={self.BASE_URL!r}, TIMEOUT_SECONDS={self.TIMEOUT_SECONDS}, "
            f"MAX_CONNECTIONS_PER_HOST={self.MAX_CONNECTIONS_PER_HOST}, "
            f"EXTRA_HEADERS={sorted(self.EXTRA_HEADERS)}, AUTH_SCHEME={self.AUTH_SCHEME!r}, "
            f"SPECIAL_STATUS_CODE={self.SPECIAL_STATUS_CODE}, LOG_LEVEL={self.LOG_LEVEL!r})"
        )
