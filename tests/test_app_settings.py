from __future__ import annotations

from pathlib import Path

import pytest

from utils import app_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    for name in ("INFRACHECK_DEV", "INFRACHECK_EXPORT_DIR"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("INFRACHECK_DATA_DIR", str(tmp_path))
    return tmp_path


def test_defaults(tmp_path: Path) -> None:
    assert app_settings.data_dir() == tmp_path
    assert app_settings.db_path() == tmp_path / "infracheck.db"
    assert app_settings.export_dir() == tmp_path / "exports"
    assert app_settings.dev_mode() is False


def test_ini_values(tmp_path: Path) -> None:
    (tmp_path / "app.ini").write_text(
        "[app]\ndev = yes\n\n[export]\ndir = /srv/relatorios\n", encoding="utf-8"
    )
    assert app_settings.dev_mode() is True
    assert app_settings.export_dir() == Path("/srv/relatorios")


def test_environment_wins_over_ini(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / "app.ini").write_text("[app]\ndev = 1\n", encoding="utf-8")
    monkeypatch.setenv("INFRACHECK_DEV", "off")
    monkeypatch.setenv("INFRACHECK_EXPORT_DIR", str(tmp_path / "out"))
    assert app_settings.dev_mode() is False
    assert app_settings.export_dir() == tmp_path / "out"


def test_broken_ini_is_ignored(tmp_path: Path) -> None:
    (tmp_path / "app.ini").write_text("dev = 1\n", encoding="utf-8")
    assert app_settings.dev_mode() is False
