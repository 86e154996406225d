"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from core.errors import ConfigError


@dataclass(frozen=True)
class LoggingConfig:
    """Logging settings consumed by the entry point."""

    level: str = "INFO"
    file_path: Optional[str] = None
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 5
    redact: bool = True


@dataclass(frozen=True)
class MirrorConfig:
    """Everything one mirroring run needs.

    Only the API credentials are needed to log in or list dialogs; the source
    chat and hashtags are checked by ``validate_forwarding`` before a run.
    """

    api_id: int
    api_hash: str = field(repr=False)
    source_chat_id: Optional[int] = None
    export_hashtags: str = ""
    target_chat_id: Optional[int] = None
    session_path: Path = Path("exporter.session")
    media_path: Path = Path("media")
    forward_delay: float = 1.0
    oldest_first: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate_forwarding(self) -> None:
        """Ensure the fields a forwarding run depends on are present."""

        missing = []
        if self.source_chat_id is None:
            missing.append("SOURCE_CHAT_ID")
        if not self.export_hashtags:
            missing.append("EXPORT_HASHTAGS")
        if missing:
            raise ConfigError(f"Missing required setting(s): {', '.join(missing)}")
        if self.forward_delay < 0:
            raise ConfigError(f"FORWARD_DELAY must not be negative: {self.forward_delay}")
