# test/conftest.py

import json

import pytest

from realm_config.settings import RealmSettings

SAMPLE_CONFIG = {
    "log": {"level": "info", "output": "/var/log/test.log"},
    "endpoints": [
        {"listen": "0.0.0.0:1234", "remote": "example.com:5678"},
        {"listen": "0.0.0.0:4321", "remote": "test.example.org:8765"},
    ],
}


@pytest.fixture
def settings(tmp_path):
    """RealmSettings pointed at a per-test section directory."""
    return RealmSettings(config_dir=str(tmp_path / "realm_configs"))


@pytest.fixture
def write_combined(tmp_path):
    """Write a combined document and return its path."""
    def _write(doc=None, name="realm.json"):
        path = tmp_path / name
        path.write_text(json.dumps(SAMPLE_CONFIG if doc is None else doc, indent=2), encoding="utf-8")
        return path
    return _write
