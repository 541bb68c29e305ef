from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SOURCE_FORMATS = ("auto", "text", "discord")


class Settings(BaseSettings):
    """Configuration for the message picker.

    Values are loaded from environment variables and `.env`.

    Notes:
    - The source directory is only a default; the CLI argument wins.
    - Logs go to a rotating file because the full-screen UI owns the terminal.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Source collection
    MSGPICK_SOURCE_DIR: Path | None = Field(default=None)
    # auto | text | discord
    MSGPICK_SOURCE_FORMAT: str = Field(default="auto")
    # Glob used by the plain-text layout (one file = one message).
    MSGPICK_TEXT_PATTERN: str = Field(default="*.txt")

    # Export artifact
    MSGPICK_EXPORT_DIR: Path = Field(default=Path("."))
    MSGPICK_EXPORT_NAME: str = Field(default="exported_messages.txt")
    # Insert a -YYYYmmdd-HHMMSS stamp before the suffix so runs never collide.
    MSGPICK_EXPORT_TIMESTAMP: bool = Field(default=False)

    # Diagnostic logging
    MSGPICK_LOG_DIR: Path = Field(default=Path("_logs"))
    MSGPICK_LOG_LEVEL: str = Field(default="INFO")
    # Timed rotation retention count (days). Old log files are auto-deleted.
    MSGPICK_LOG_BACKUP_COUNT: int = Field(default=14)


def load_settings() -> Settings:
    s = Settings()
    fmt = (s.MSGPICK_SOURCE_FORMAT or "auto").strip().lower()
    s.MSGPICK_SOURCE_FORMAT = fmt if fmt in SOURCE_FORMATS else "auto"
    s.MSGPICK_LOG_LEVEL = (s.MSGPICK_LOG_LEVEL or "INFO").strip().upper()
    return s
