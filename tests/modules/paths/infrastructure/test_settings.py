# tests/modules/paths/infrastructure/test_settings.py
"""
Tests para la carga de configuración desde variables de entorno.
"""

import pytest

from file_storage.modules.paths.domain.exceptions import InvalidConfiguration
from file_storage.modules.paths.domain.value_objects import PathBuilderConfig
from file_storage.modules.paths.infrastructure.settings import (
    load_path_builder_config,
    parse_bool,
)


def test_empty_environment_keeps_defaults():
    assert load_path_builder_config(environ={}) == PathBuilderConfig()


def test_environment_overrides_are_typed():
    # Arrange
    environ = {
        "FILE_STORAGE_PATH_PREFIX": "uploads",
        "FILE_STORAGE_SHARDING": "crc32",
        "FILE_STORAGE_SHARD_DEPTH": "2",
        "FILE_STORAGE_MODEL_FOLDER": "yes",
        "FILE_STORAGE_ID_FOLDER": "0",
        "UNRELATED": "ignored",
    }

    # Act
    config = load_path_builder_config(environ=environ)

    # Assert
    assert config.path_prefix == "uploads"
    assert config.sharding_method == "crc32"
    assert config.shard_depth == 2
    assert config.model_folder is True
    assert config.id_shard_folder is False


def test_environment_applies_on_top_of_base():
    base = PathBuilderConfig(separator="/", file_suffix="_orig")
    config = load_path_builder_config(
        environ={"FILE_STORAGE_FILE_PREFIX": "p_"}, base=base
    )

    assert config.separator == "/"
    assert config.file_suffix == "_orig"
    assert config.file_prefix == "p_"


def test_reads_os_environ_by_default(monkeypatch):
    monkeypatch.setenv("FILE_STORAGE_PATH_SUFFIX", "v1")
    assert load_path_builder_config().path_suffix == "v1"


@pytest.mark.parametrize(
    "environ",
    [
        {"FILE_STORAGE_MODEL_FOLDER": "maybe"},
        {"FILE_STORAGE_SHARD_DEPTH": "three"},
        {"FILE_STORAGE_SHARD_DEPTH": "-1"},
    ],
)
def test_invalid_environment_values(environ):
    with pytest.raises(InvalidConfiguration):
        load_path_builder_config(environ=environ)


@pytest.mark.parametrize("raw, expected", [("TRUE", True), (" on ", True), ("off", False)])
def test_parse_bool(raw, expected):
    assert parse_bool("X", raw) is expected
