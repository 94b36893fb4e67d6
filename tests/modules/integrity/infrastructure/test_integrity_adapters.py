# tests/modules/integrity/infrastructure/test_integrity_adapters.py
"""
Tests de Integración para Adaptadores de Infraestructura.
Requieren acceso a disco (usamos tmp_path).
"""

import json
import os
import sys
from unittest.mock import patch

import pytest

from file_storage.modules.integrity.domain.exceptions import (
    AdapterError,
    AdapterResolutionError,
    RecordSourceError,
)
from file_storage.modules.integrity.domain.ports.storage_adapter import StorageAdapter
from file_storage.modules.integrity.infrastructure.adapters import (
    InMemoryAdapterRegistry,
    JsonFileRecordSource,
    LocalStorageAdapter,
)

# === Tests para LocalStorageAdapter ===


def test_local_adapter_detects_existing_and_missing(tmp_path):
    # Arrange
    target = tmp_path / "07" / "3e" / "d7" / "file.pdf"
    target.parent.mkdir(parents=True)
    target.write_bytes(b"%PDF")
    adapter = LocalStorageAdapter(str(tmp_path))

    # Act & Assert
    assert adapter.has("07/3e/d7/file.pdf") is True
    assert adapter.has("07\\3e\\d7\\file.pdf") is True  # separador Windows persistido
    assert adapter.has("/07/3e/d7/file.pdf") is True  # siempre relativo a la raíz
    assert adapter.has("07/3e/d7/other.pdf") is False
    assert adapter.has("07/3e/d7/file.pdf/child") is False


def test_local_adapter_missing_root_is_an_adapter_error(tmp_path):
    adapter = LocalStorageAdapter(str(tmp_path / "not-mounted"))

    with pytest.raises(AdapterError):
        adapter.has("a.txt")


@pytest.mark.skipif(
    sys.platform == "win32" or os.geteuid() == 0,
    reason="Los permisos POSIX no aplican a root ni a Windows",
)
def test_local_adapter_permission_error_is_unknown(tmp_path):
    locked = tmp_path / "locked"
    locked.mkdir()
    (locked / "a.txt").write_text("x")
    locked.chmod(0o000)
    try:
        with pytest.raises(AdapterError):
            LocalStorageAdapter(str(tmp_path)).has("locked/a.txt")
    finally:
        locked.chmod(0o755)


def test_local_adapter_null_byte_in_path_is_an_adapter_error(tmp_path):
    adapter = LocalStorageAdapter(str(tmp_path))

    with pytest.raises(AdapterError):
        adapter.has("bad\x00.bin")


@pytest.mark.parametrize(
    "path", ["../outside.txt", "a/../../outside.txt", "..\\..\\etc\\passwd"]
)
def test_local_adapter_rejects_paths_escaping_the_root(tmp_path, path):
    # Arrange: el archivo existe, pero fuera de la raíz
    root = tmp_path / "storage"
    root.mkdir()
    (tmp_path / "outside.txt").write_text("x")

    # Act & Assert
    with pytest.raises(AdapterError, match="fuera de la raíz"):
        LocalStorageAdapter(str(root)).has(path)


def test_local_adapter_allows_dot_segments_inside_the_root(tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "1.pdf").write_bytes(b"%PDF")

    assert LocalStorageAdapter(str(tmp_path)).has("a/b/../1.pdf") is True


def test_local_adapter_satisfies_port(tmp_path):
    assert isinstance(LocalStorageAdapter(str(tmp_path)), StorageAdapter)


# === Tests para InMemoryAdapterRegistry ===


def test_registry_resolves_registered_adapters(tmp_path):
    local = LocalStorageAdapter(str(tmp_path))
    registry = InMemoryAdapterRegistry({"Local": local})

    assert registry.resolve("Local") is local
    assert registry.names() == ["Local"]


def test_registry_unknown_name():
    with pytest.raises(AdapterResolutionError, match="Dropbox"):
        InMemoryAdapterRegistry().resolve("Dropbox")


# === Tests para JsonFileRecordSource ===


@pytest.fixture
def db_file(tmp_path):
    rows = [
        {"id": "1", "adapter": "Local", "path": "a/1.pdf", "model": "Invoices"},
        {"id": "2", "adapter": "S3", "path": "a/2.pdf", "model": "Invoices"},
        {"id": "3", "adapter": "Local", "path": "a/3.png", "model": "Avatars"},
        {"id": "4", "adapter": "Local", "path": "", "model": "Invoices"},
        {"id": "5", "adapter_name": "Local", "stored_path": "a/5.pdf", "model": "Invoices"},
    ]
    path = tmp_path / "records.json"
    path.write_text(json.dumps({"tables": {"FileStorage": rows}}))
    return path


def test_json_source_pages_and_filters(db_file):
    # Arrange
    source = JsonFileRecordSource(str(db_file), model="Invoices", adapter="Local")

    # Act
    total = source.count()
    first = source.page(0, 1)
    second = source.page(1, 1)
    third = source.page(2, 1)

    # Assert: el registro 4 no tiene ruta y se omite
    assert total == 2
    assert [r.id for r in first] == ["1"]
    assert [r.id for r in second] == ["5"]
    assert third == []


def test_json_source_wildcard_adapter(db_file):
    source = JsonFileRecordSource(str(db_file), adapter="*")
    assert source.count() == 4


def test_json_source_missing_file(tmp_path):
    with pytest.raises(RecordSourceError):
        JsonFileRecordSource(str(tmp_path / "nope.json")).count()


def test_json_source_corrupt_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    with pytest.raises(RecordSourceError):
        JsonFileRecordSource(str(path)).page(0, 10)


def test_json_source_unknown_table(db_file):
    with pytest.raises(RecordSourceError, match="Attachments"):
        JsonFileRecordSource(str(db_file), table="Attachments").count()


def test_json_source_parses_the_file_once_per_scan(tmp_path):
    # Arrange: 100 registros leídos en páginas de 10
    rows = [{"id": str(i), "adapter": "Local", "path": f"p/{i}.pdf"} for i in range(100)]
    path = tmp_path / "records.json"
    path.write_text(json.dumps({"tables": {"FileStorage": rows}}))
    source = JsonFileRecordSource(str(path))

    # Act
    with patch(f"{JsonFileRecordSource.__module__}.json.load", wraps=json.load) as spy:
        total = source.count()
        ids = [r.id for offset in range(0, total, 10) for r in source.page(offset, 10)]

    # Assert
    assert ids == [str(i) for i in range(100)]
    assert spy.call_count == 1


def test_json_source_reloads_when_the_file_changes(db_file):
    source = JsonFileRecordSource(str(db_file), adapter="*")
    assert source.count() == 4

    rows = [{"id": "9", "adapter": "Local", "path": "z/9.pdf", "model": "Invoices"}]
    db_file.write_text(json.dumps({"tables": {"FileStorage": rows}}))

    assert source.count() == 1
    assert [r.id for r in source.page(0, 10)] == ["9"]
