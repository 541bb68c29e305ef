from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path


def _resolve_log_dir(settings: object) -> Path:
    """Resolve the log directory.

    - If MSGPICK_LOG_DIR is absolute, use it directly.
    - Otherwise, treat it as relative to the current working directory.
    """

    raw = getattr(settings, "MSGPICK_LOG_DIR", Path("_logs"))
    p = raw if isinstance(raw, Path) else Path(str(raw))
    if p.is_absolute():
        return p
    return Path.cwd() / p


def setup_logging(settings: object, *, console: bool = False) -> Path:
    """Configure Python logging to write to a rotating diagnostic log file.

    Returns the resolved log file path.

    Rotation:
      - Daily rotation at midnight.
      - Keep the last `MSGPICK_LOG_BACKUP_COUNT` rotated files.

    Notes:
      - `console` adds a stderr handler; leave it off while the full-screen
        UI is running or log lines will tear the display.
      - Root handlers are replaced on every call, so a second `browse` in
        the same process logs each line once.
    """

    log_dir = _resolve_log_dir(settings)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "msgpick.log"

    level_name = str(getattr(settings, "MSGPICK_LOG_LEVEL", "INFO") or "INFO").upper().strip()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    file_handler = TimedRotatingFileHandler(
        filename=str(log_file),
        when="midnight",
        interval=1,
        backupCount=max(0, int(getattr(settings, "MSGPICK_LOG_BACKUP_COUNT", 14) or 0)),
        encoding="utf-8",
        utc=False,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(fmt))

    # One file handler (plus optional console) per process, never stacked.
    root = logging.getLogger()
    root.handlers = []
    root.setLevel(level)
    root.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(fmt))
        root.addHandler(console_handler)

    logging.getLogger("msgpick").info(
        "msgpick logging enabled (file=%s, level=%s, console=%s)",
        os.fspath(log_file),
        level_name,
        console,
    )

    return log_file
