# tests/unit/logging/test_logging_config.py
"""Tests for debug logging configuration."""

import importlib

import pytest

import sedml.logging._config as logging_config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload the config module under patched environment variables, restoring it afterwards."""

    def _reload(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(logging_config)

    yield _reload

    monkeypatch.undo()
    importlib.reload(logging_config)


def test_default_config_values(reload_config, monkeypatch):
    for key in ("SEDML_MAX_FIELD_LEN", "SEDML_BLOB_DIR", "SEDML_LOG_DIR", "SEDML_STACK_TRACES"):
        monkeypatch.delenv(key, raising=False)

    config = reload_config()

    assert config.MAX_FIELD_LENGTH == 8000
    assert config.BLOB_DIR.name == "blobs"
    assert config.LOG_DIR.name == "debug"
    assert config.BLOB_DIR.is_absolute()
    assert config.INCLUDE_STACK_TRACES is True


def test_env_overrides(reload_config, tmp_path):
    blob_dir = tmp_path / "custom_blobs"

    config = reload_config(
        SEDML_MAX_FIELD_LEN="1234",
        SEDML_BLOB_DIR=str(blob_dir),
        SEDML_LOG_DIR=str(tmp_path / "daily"),
        SEDML_STACK_TRACES="0",
    )

    assert config.MAX_FIELD_LENGTH == 1234
    assert config.BLOB_DIR == blob_dir.absolute()
    assert config.LOG_DIR == (tmp_path / "daily").absolute()
    assert config.INCLUDE_STACK_TRACES is False


def test_directories_not_created_on_import(reload_config, tmp_path):
    blob_dir = tmp_path / "new" / "nested" / "blobs"

    reload_config(SEDML_BLOB_DIR=str(blob_dir))

    assert not blob_dir.exists()


def test_invalid_max_field_length(reload_config):
    with pytest.raises(ValueError, match="invalid literal for int"):
        reload_config(SEDML_MAX_FIELD_LEN="not-a-number")


@pytest.mark.parametrize(
    "value, expected",
    [("1", True), ("0", False), ("true", False), ("", False), ("yes", False)],
)
def test_stack_traces_env_parsing(reload_config, value, expected):
    """Only "1" enables stack traces."""
    assert reload_config(SEDML_STACK_TRACES=value).INCLUDE_STACK_TRACES is expected
