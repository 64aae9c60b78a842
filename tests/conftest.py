from pathlib import Path

import pytest

from spending_dashboard.core import configuration, settings


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "config.yaml"
    monkeypatch.setattr(settings, "_CONFIG_FILE_PATH", str(path))
    monkeypatch.setattr(settings, "_EXTERNAL_ENV_KEYS", set())
    for field in configuration.CONFIG_FIELDS:
        # teardown restores these keys
        monkeypatch.setenv(field.key, "")
        monkeypatch.delenv(field.key)
    return path
