from __future__ import annotations

from pathlib import Path

from msgpick.settings import Settings, load_settings


def test_settings_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in list(Settings.model_fields):
        monkeypatch.delenv(key, raising=False)

    s = load_settings()

    assert s.MSGPICK_SOURCE_DIR is None
    assert s.MSGPICK_SOURCE_FORMAT == "auto"
    assert s.MSGPICK_EXPORT_DIR == Path(".")
    assert s.MSGPICK_EXPORT_NAME == "exported_messages.txt"
    assert s.MSGPICK_EXPORT_TIMESTAMP is False
    assert s.MSGPICK_LOG_BACKUP_COUNT == 14


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MSGPICK_SOURCE_DIR", str(tmp_path / "src"))
    monkeypatch.setenv("MSGPICK_SOURCE_FORMAT", " Discord ")
    monkeypatch.setenv("MSGPICK_EXPORT_TIMESTAMP", "true")
    monkeypatch.setenv("MSGPICK_LOG_LEVEL", "debug")

    s = load_settings()

    assert s.MSGPICK_SOURCE_DIR == tmp_path / "src"
    assert s.MSGPICK_SOURCE_FORMAT == "discord"
    assert s.MSGPICK_EXPORT_TIMESTAMP is True
    assert s.MSGPICK_LOG_LEVEL == "DEBUG"


def test_settings_from_dotenv_and_bad_format(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MSGPICK_SOURCE_FORMAT", raising=False)
    monkeypatch.delenv("MSGPICK_EXPORT_NAME", raising=False)
    (tmp_path / ".env").write_text(
        "MSGPICK_SOURCE_FORMAT=mbox\nMSGPICK_EXPORT_NAME=keep.txt\nUNRELATED=1\n",
        encoding="utf-8",
    )

    s = load_settings()

    assert s.MSGPICK_SOURCE_FORMAT == "auto"
    assert s.MSGPICK_EXPORT_NAME == "keep.txt"
