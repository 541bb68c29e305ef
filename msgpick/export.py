"""Atomic export of the selected messages to a plain text artifact."""
from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Iterable

from .errors import NothingSelected, WriteError
from .store import MessageStore

logger = logging.getLogger(__name__)

SEPARATOR = "\n\n"


def render_artifact(contents: Iterable[str]) -> str:
    """Join message bodies with one blank line between them, no trailing separator."""
    return SEPARATOR.join(contents)


def resolve_export_path(settings: object, now: datetime | None = None) -> Path:
    """Derive the artifact path from settings.

    With MSGPICK_EXPORT_TIMESTAMP on, ``messages.txt`` becomes
    ``messages-20240131-235959.txt``.
    """
    export_dir = Path(getattr(settings, "MSGPICK_EXPORT_DIR", Path(".")) or ".")
    name = str(getattr(settings, "MSGPICK_EXPORT_NAME", "") or "exported_messages.txt")
    if getattr(settings, "MSGPICK_EXPORT_TIMESTAMP", False):
        stamp = (now or datetime.now()).strftime("%Y%m%d-%H%M%S")
        p = Path(name)
        name = f"{p.stem}-{stamp}{p.suffix}"
    return export_dir.expanduser() / name


def export_selection(store: MessageStore, path: Path) -> Path:
    """Write the selected messages to `path`, all or nothing.

    The text goes to a temporary file next to the target, is fsynced and then
    renamed over the target, so the final path either holds a complete
    artifact or is left as it was.

    Returns:
        The final artifact path

    Raises:
        NothingSelected: no message is selected; nothing is written
        WriteError: the temporary file or the rename failed
    """
    selected = store.selected_ids()
    if not selected:
        raise NothingSelected()

    path = Path(path).expanduser()
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
        tmp_path = Path(tmp_name)
        # newline="" keeps embedded line breaks byte-for-byte.
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(render_artifact(store.get(i).content for i in selected))
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
        tmp_path = None
    except (OSError, UnicodeError) as exc:
        logger.error("Export to %s failed: %s", path, exc)
        raise WriteError(path, exc) from exc
    finally:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)

    logger.info("Exported %d message(s) to %s", len(selected), path)
    return path
