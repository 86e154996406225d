"""Environment-driven configuration for telemirror.

All settings come from environment variables; a local .env file is loaded
first via python-dotenv so secrets stay out of the repo.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from core.config import LoggingConfig, MirrorConfig
from core.errors import ConfigError

DEFAULT_SESSION_PATH = "exporter.session"
DEFAULT_MEDIA_PATH = "media"
DEFAULT_FORWARD_DELAY = 1.0

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _get(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _require(env: Mapping[str, str], name: str) -> str:
    value = _get(env, name)
    # Fail fast on missing values to avoid an ambiguous failure mid-run.
    if value is None:
        raise ConfigError(f"Missing {name} in environment")
    return value


def _parse_int(value: str, name: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid integer for {name}: {value}") from exc


def _parse_float(value: str, name: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid number for {name}: {value}") from exc


def _parse_bool(value: Optional[str], name: str, default: bool) -> bool:
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value}")


def _load_logging(env: Mapping[str, str]) -> LoggingConfig:
    return LoggingConfig(
        level=(_get(env, "LOG_LEVEL") or "INFO").upper(),
        file_path=_get(env, "LOG_FILE"),
        redact=_parse_bool(_get(env, "LOG_REDACT"), "LOG_REDACT", True),
    )


def load_settings(env: Optional[Mapping[str, str]] = None) -> MirrorConfig:
    """Build a MirrorConfig from ``env`` (defaults to the process environment).

    API_ID and API_HASH are always required; forwarding-only settings are
    checked later by ``MirrorConfig.validate_forwarding``.
    """

    if env is None:
        load_dotenv()
        env = os.environ

    target_raw = _get(env, "TARGET_CHAT_ID")
    delay_raw = _get(env, "FORWARD_DELAY")
    source_raw = _get(env, "SOURCE_CHAT_ID")

    return MirrorConfig(
        api_id=_parse_int(_require(env, "API_ID"), "API_ID"),
        api_hash=_require(env, "API_HASH"),
        source_chat_id=_parse_int(source_raw, "SOURCE_CHAT_ID") if source_raw else None,
        export_hashtags=_get(env, "EXPORT_HASHTAGS") or "",
        target_chat_id=_parse_int(target_raw, "TARGET_CHAT_ID") if target_raw else None,
        session_path=Path(_get(env, "SESSION_PATH") or DEFAULT_SESSION_PATH),
        media_path=Path(_get(env, "MEDIA_PATH") or DEFAULT_MEDIA_PATH),
        forward_delay=_parse_float(delay_raw, "FORWARD_DELAY") if delay_raw else DEFAULT_FORWARD_DELAY,
        oldest_first=_parse_bool(_get(env, "FORWARD_OLDEST_FIRST"), "FORWARD_OLDEST_FIRST", False),
        logging=_load_logging(env),
    )
