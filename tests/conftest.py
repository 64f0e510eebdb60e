import json

import pytest
from pgtypes.config.type_extensions import TypeExtensionConfig
from pgtypes.registry import TypeRegistry


@pytest.fixture(autouse=True)
def reset_registry(monkeypatch):
    """Rebuild the process-wide registry for every test, ignoring any
    extension file installed on the machine running the tests."""
    monkeypatch.setattr(TypeExtensionConfig, 'default_locations', [])
    TypeRegistry._instance = None
    TypeExtensionConfig._instance = None
    yield
    TypeRegistry._instance = None
    TypeExtensionConfig._instance = None


@pytest.fixture
def write_config(tmp_path):
    """Write a type extension config and return its path"""
    def _write(config, name='types.json'):
        path = tmp_path / name
        if isinstance(config, str):
            path.write_text(config)
        else:
            path.write_text(json.dumps(config))
        return str(path)
    return _write
