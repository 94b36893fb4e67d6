# tests/e2e/conftest.py
import json

import pytest

from file_storage.modules.paths.application.use_cases import PathBuilder
from file_storage.modules.paths.domain.value_objects import (
    EntityDescriptor,
    PathBuilderConfig,
)


@pytest.fixture
def storage_factory(tmp_path):
    """
    Factory que simula una instalación real: escribe archivos en la raíz Local
    usando las rutas de PathBuilder y persiste los registros en una DB JSON.

    Devuelve (db_path, local_root, records).
    """

    def _create(ids, missing=(), extra_rows=(), table="FileStorage"):
        local_root = tmp_path / "storage"
        local_root.mkdir(exist_ok=True)
        builder = PathBuilder(PathBuilderConfig(separator="/"))

        rows = []
        for record_id in ids:
            entity = EntityDescriptor(id=record_id, extension="pdf", model="Invoices")
            stored_path = builder.full_path(entity)
            if record_id not in missing:
                target = local_root / stored_path
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(b"%PDF-1.4")
            rows.append(
                {
                    "id": record_id,
                    "adapter": "Local",
                    "path": stored_path,
                    "model": "Invoices",
                    "extension": "pdf",
                }
            )
        rows.extend(extra_rows)

        db_path = tmp_path / "records.json"
        db_path.write_text(json.dumps({"tables": {table: rows}}), encoding="utf-8")
        return db_path, local_root, rows

    return _create
