# tests/modules/paths/application/test_path_builder.py
"""
Tests para PathBuilder.
Enfoque: Orden de construcción de rutas, modos de nombre de archivo y normalización.
"""

import pytest

from file_storage.modules.integrity.domain.entities import FileRecord
from file_storage.modules.paths.application.use_cases import PathBuilder
from file_storage.modules.paths.domain.exceptions import InvalidConfiguration
from file_storage.modules.paths.domain.sharding import default_registry
from file_storage.modules.paths.domain.value_objects import (
    EntityDescriptor,
    PathBuilderConfig,
    SlashPosition,
)

UUID = "3fa85f64-5717-4562-b3fc-2c963f66afa6"
STRIPPED = "3fa85f6457174562b3fc2c963f66afa6"


@pytest.fixture
def entity():
    return EntityDescriptor(id=UUID, filename="report.PDF", extension="pdf", model="Invoices")


@pytest.fixture
def builder():
    return PathBuilder(PathBuilderConfig(separator="/"))


# === path() ===


def test_default_path_is_sha1_shard_plus_id_folder(builder, entity):
    assert builder.path(entity) == f"07/3e/d7/{STRIPPED}/"


def test_path_full_construction_order(entity):
    # Arrange
    config = PathBuilderConfig(
        separator="/",
        path_prefix="files",
        path_suffix="versions",
        model_folder=True,
    )

    # Act
    result = PathBuilder(config).path(entity)

    # Assert
    assert result == f"files/Invoices/07/3e/d7/{STRIPPED}/versions/"


def test_path_without_sharding_or_id_folder_is_just_a_separator(entity):
    config = PathBuilderConfig(separator="/", sharding_method="none", id_shard_folder=False)
    assert PathBuilder(config).path(entity) == "/"


def test_path_with_crc32_sharding(entity):
    config = PathBuilderConfig(separator="/", sharding_method="crc32", id_shard_folder=False)
    assert PathBuilder(config).path(entity) == "95/39/48/"


def test_path_prefix_with_trailing_separator_is_not_doubled(entity):
    config = PathBuilderConfig(separator="/", path_prefix="files/", id_shard_folder=False)
    assert PathBuilder(config).path(entity) == "files/07/3e/d7/"


def test_model_folder_requires_model():
    builder = PathBuilder(PathBuilderConfig(separator="/", model_folder=True))
    with pytest.raises(InvalidConfiguration):
        builder.path(EntityDescriptor(id=UUID))


def test_overrides_apply_per_call_without_mutating_config(builder, entity):
    # Act
    result = builder.path(entity, {"sharding_method": None, "path_prefix": "tmp"})

    # Assert
    assert result == f"tmp/{STRIPPED}/"
    assert builder.config.sharding_method == "sha1"
    assert builder.path(entity) == f"07/3e/d7/{STRIPPED}/"


def test_unknown_sharding_method_fails_fast_at_construction():
    with pytest.raises(InvalidConfiguration):
        PathBuilder(PathBuilderConfig(sharding_method="md5"))


def test_unknown_sharding_method_in_override_fails_the_call(builder, entity):
    with pytest.raises(InvalidConfiguration):
        builder.path(entity, {"sharding_method": "md5"})


def test_custom_registered_strategy_is_used(entity):
    # Arrange
    registry = default_registry()
    registry.register("flat", lambda identifier, depth, sep: "bucket" + sep)
    config = PathBuilderConfig(separator="/", sharding_method="flat")

    # Act
    result = PathBuilder(config, registry).path(entity)

    # Assert
    assert result == f"bucket/{STRIPPED}/"


def test_shard_defaults_to_depth_three(builder):
    assert builder.shard(UUID) == "07/3e/d7/"
    assert builder.shard(UUID, 3, "none") == ""


# === filename() ===


def test_derived_filename(builder, entity):
    assert builder.filename(entity) == f"{STRIPPED}.pdf"


def test_derived_filename_with_prefix_suffix_and_raw_id(builder, entity):
    overrides = {"strip_id_dashes": False, "file_prefix": "thumb_", "file_suffix": "_v2"}
    assert builder.filename(entity, overrides) == f"thumb_{UUID}_v2.pdf"


def test_derived_filename_without_extension(builder, entity):
    assert builder.filename(entity, {"preserve_extension": False}) == STRIPPED


def test_derived_filename_skips_dot_when_record_has_no_extension(builder):
    assert builder.filename(EntityDescriptor(id=UUID)) == STRIPPED


def test_preserved_filename_with_suffix_keeps_original_extension(builder, entity):
    """report.PDF + _v2 -> report_v2.PDF"""
    overrides = {"preserve_original_filename": True, "file_suffix": "_v2"}
    assert builder.filename(entity, overrides) == "report_v2.PDF"


def test_preserved_filename_with_suffix_drops_extension_when_not_preserved(builder, entity):
    overrides = {
        "preserve_original_filename": True,
        "file_suffix": "_v2",
        "preserve_extension": False,
    }
    assert builder.filename(entity, overrides) == "report_v2"


def test_preserved_filename_with_prefix_only(builder, entity):
    overrides = {"preserve_original_filename": True, "file_prefix": "orig_"}
    assert builder.filename(entity, overrides) == "orig_report.PDF"


def test_preserved_filename_requires_filename(builder):
    with pytest.raises(InvalidConfiguration):
        builder.filename(EntityDescriptor(id=UUID), {"preserve_original_filename": True})


# === full_path() / url() ===


def test_full_path_has_no_double_separator_at_join(builder, entity):
    result = builder.full_path(entity)

    assert result == f"07/3e/d7/{STRIPPED}/{STRIPPED}.pdf"
    assert "//" not in result


def test_url_never_contains_backslashes(entity):
    # Arrange: separador estilo Windows
    builder = PathBuilder(PathBuilderConfig(separator="\\", path_prefix="files"))

    # Act
    full_path = builder.full_path(entity)
    url = builder.url(entity)

    # Assert
    assert full_path == f"files\\07\\3e\\d7\\{STRIPPED}\\{STRIPPED}.pdf"
    assert url == f"files/07/3e/d7/{STRIPPED}/{STRIPPED}.pdf"
    assert "\\" not in url


def test_url_honours_overrides(builder, entity):
    assert builder.url(entity, {"sharding_method": "none"}) == f"{STRIPPED}/{STRIPPED}.pdf"


def test_file_record_satisfies_path_subject(builder):
    record = FileRecord(
        id=UUID, adapter_name="Local", stored_path="legacy/path.pdf", extension="pdf"
    )
    # El stored_path persistido no influye en la derivación
    assert builder.full_path(record) == f"07/3e/d7/{STRIPPED}/{STRIPPED}.pdf"


# === ensure_slash() / split_filename() ===


@pytest.mark.parametrize(
    "value, position, expected",
    [
        ("a/b", "after", "a/b/"),
        ("a/b/", "after", "a/b/"),
        ("a/b", "before", "/a/b"),
        ("a/b", "both", "/a/b/"),
        ("/a/b/", SlashPosition.BOTH, "/a/b/"),
        ("", "after", "/"),
    ],
)
def test_ensure_slash(builder, value, position, expected):
    assert builder.ensure_slash(value, position) == expected


@pytest.mark.parametrize("position", ["after", "before", "both"])
def test_ensure_slash_is_idempotent(builder, position):
    once = builder.ensure_slash("x/y", position)
    assert builder.ensure_slash(once, position) == once


def test_ensure_slash_custom_separator(builder):
    assert builder.ensure_slash("a", "both", "\\") == "\\a\\"


def test_ensure_slash_rejects_unknown_position(builder):
    with pytest.raises(InvalidConfiguration, match="Invalid position `middle`!"):
        builder.ensure_slash("a", "middle")
    # InvalidConfiguration también es un ValueError (argumento inválido)
    with pytest.raises(ValueError):
        builder.ensure_slash("a", None)


@pytest.mark.parametrize(
    "filename, keep_dot, expected",
    [
        ("report.PDF", False, ("report", "PDF")),
        ("report.PDF", True, ("report", ".PDF")),
        ("archive.tar.gz", False, ("archive.tar", "gz")),
        ("README", True, ("README", "")),
    ],
)
def test_split_filename(filename, keep_dot, expected):
    assert PathBuilder.split_filename(filename, keep_dot) == expected


def test_strip_dashes():
    assert PathBuilder.strip_dashes(UUID) == STRIPPED
