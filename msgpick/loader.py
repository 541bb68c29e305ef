"""Read message units from a directory on disk.

Two layouts are understood:

- ``text``: every file matching a glob directly inside the directory is one
  message, ordered by file name.
- ``discord``: a data-package export with ``messages/index.json`` mapping
  channel ids to names and ``messages/c<id>/messages.json`` per channel.

Units are yielded lazily; the store decodes and indexes them.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator

from .errors import LoadError
from .models import RawUnit

logger = logging.getLogger(__name__)


def _channel_label(name: str) -> str:
    """Normalize a Discord index entry to a short channel label.

    "Direct Message with alice" -> "alice"
    "general in My Server"      -> "My Server - general"
    "DM - carol"                -> "carol"
    """
    s = str(name or "").strip()
    prefix = "Direct Message with "
    if s.startswith(prefix):
        s = s[len(prefix):]
    elif " in " in s:
        channel, _, server = s.rpartition(" in ")
        s = f"{server} - {channel}"
    if s.startswith("DM - "):
        s = s[len("DM - "):]
    return s


def _read_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise LoadError(f"Not valid UTF-8: {exc.reason}", unit=str(path)) from exc
    except json.JSONDecodeError as exc:
        raise LoadError(f"Malformed JSON: {exc.msg} at line {exc.lineno}", unit=str(path)) from exc


def _messages_root(source: Path) -> Path | None:
    if (source / "messages" / "index.json").is_file():
        return source / "messages"
    if (source / "index.json").is_file():
        return source
    return None


def detect_format(source: Path) -> str:
    return "discord" if _messages_root(source) is not None else "text"


def iter_text_units(source: Path, pattern: str = "*.txt") -> Iterator[RawUnit]:
    for path in sorted(p for p in source.glob(pattern) if p.is_file()):
        yield RawUnit(content=path.read_bytes(), source_label=path.name)


def iter_discord_units(source: Path) -> Iterator[RawUnit]:
    root = _messages_root(source)
    if root is None:
        raise LoadError("No messages/index.json found", unit=str(source))

    index = _read_json(root / "index.json")
    if not isinstance(index, dict):
        raise LoadError("Channel index must be a JSON object", unit=str(root / "index.json"))

    for channel_id, channel_name in index.items():
        messages_file = root / f"c{channel_id}" / "messages.json"
        if not messages_file.is_file():
            logger.debug("Skipping channel %s: %s missing", channel_id, messages_file)
            continue

        label = _channel_label(channel_name) or str(channel_id)
        rows = _read_json(messages_file)
        if not isinstance(rows, list):
            raise LoadError("Channel messages must be a JSON list", unit=str(messages_file))

        for row in rows:
            if not isinstance(row, dict):
                raise LoadError("Message entry must be a JSON object", unit=str(messages_file))
            contents = row.get("Contents")
            if contents is None or contents == "":
                continue
            if not isinstance(contents, str):
                raise LoadError("Message Contents must be text", unit=f"{label} #{row.get('ID')}")
            yield RawUnit(content=contents, source_label=f"{label} #{row.get('ID')}")


def iter_units(source: Path | str, fmt: str = "auto", pattern: str = "*.txt") -> Iterator[RawUnit]:
    """Yield raw units from `source` in display order.

    Args:
        source: Directory holding the collection
        fmt: "auto", "text" or "discord"
        pattern: Glob for the text layout

    Raises:
        LoadError: source missing, unknown format or malformed package
    """
    source = Path(source).expanduser()
    if not source.is_dir():
        raise LoadError("Source directory not found", unit=str(source))

    fmt = (fmt or "auto").strip().lower()
    if fmt == "auto":
        fmt = detect_format(source)
    if fmt == "text":
        yield from iter_text_units(source, pattern)
    elif fmt == "discord":
        yield from iter_discord_units(source)
    else:
        raise LoadError(f"Unknown source format '{fmt}'", unit=str(source))
