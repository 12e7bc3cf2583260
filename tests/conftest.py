import json

import pytest

from rational_calc import MathEngine, config_manager


@pytest.fixture(autouse=True)
def no_debug(monkeypatch):
    """Tests that switch debug on must not leak it into other tests."""
    monkeypatch.setattr(MathEngine, "debug", False)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point config_manager at a throwaway config.json."""
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", path)
    return path


@pytest.fixture
def write_config(config_file):
    def write(settings):
        config_file.write_text(json.dumps(settings), encoding="utf-8")
        return config_file
    return write
