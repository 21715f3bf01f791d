from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest

import config.testing as testing_settings

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "backup.py"


@pytest.fixture()
def backup(monkeypatch, tmp_path):
    monkeypatch.setenv("APP_ENV", "testing")
    spec = importlib.util.spec_from_file_location("backup_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "REPO_ROOT", tmp_path)
    return module


def test_empty_local_store_path_exits_with_message(backup, monkeypatch, tmp_path):
    monkeypatch.setattr(testing_settings, "LOCAL_STORE_PATH", "")

    with pytest.raises(SystemExit) as exc:
        backup.main()

    assert "LOCAL_STORE_PATH" in str(exc.value.code)
    assert not (tmp_path / "backups").exists()


def test_missing_local_store_file_exits(backup, monkeypatch, tmp_path):
    monkeypatch.setattr(testing_settings, "LOCAL_STORE_PATH", "data/local_store.json")

    with pytest.raises(SystemExit) as exc:
        backup.main()

    assert "does not exist" in str(exc.value.code)
    assert not (tmp_path / "backups").exists()


def test_local_store_is_copied(backup, monkeypatch, tmp_path):
    store_file = tmp_path / "data" / "local_store.json"
    store_file.parent.mkdir()
    store_file.write_text('{"users": []}', encoding="utf-8")
    monkeypatch.setattr(testing_settings, "LOCAL_STORE_PATH", "data/local_store.json")

    backup.main()

    copies = list((tmp_path / "backups").glob("local_store_*.json"))
    assert len(copies) == 1
    assert copies[0].read_text(encoding="utf-8") == '{"users": []}'
