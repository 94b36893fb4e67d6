# src/file_storage/modules/integrity/infrastructure/adapters.py
"""
Adaptadores de Infraestructura para Integridad.

Arquitectura: Modular Monolith
Capa: Infrastructure (Adapters)
Responsabilidad: Implementar los puertos del dominio con tecnologías concretas (OS, JSON, memoria).
"""

import json
import logging
import os
from collections.abc import Iterable, Sequence
from typing import Any, Optional

# === Imports de Dominio ===
from file_storage.infrastructure.observability import measure_time
from file_storage.modules.integrity.domain.entities import FileRecord
from file_storage.modules.integrity.domain.exceptions import (
    AdapterError,
    AdapterResolutionError,
    RecordSourceError,
)
from file_storage.modules.integrity.domain.ports.record_source import RecordSource
from file_storage.modules.integrity.domain.ports.storage_adapter import (
    AdapterRegistry,
    StorageAdapter,
)

logger = logging.getLogger(__name__)

ALL_ADAPTERS = "*"


class LocalStorageAdapter:
    """
    Implementación que consulta el sistema de archivos local bajo un directorio raíz.
    """

    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    def _resolve(self, path: str) -> str:
        # Las rutas persistidas son relativas a la raíz del adaptador
        relative = path.replace("\\", "/").lstrip("/")
        full_path = os.path.normpath(os.path.join(self.root, *relative.split("/")))
        if os.path.commonpath([self.root, full_path]) != self.root:
            raise AdapterError(f"Ruta fuera de la raíz del adaptador: {path!r}")
        return full_path

    def has(self, path: str) -> bool:
        if not os.path.isdir(self.root):
            raise AdapterError(f"La raíz del adaptador local no existe: {self.root}")
        full_path = self._resolve(path)
        try:
            os.stat(full_path)
        except (FileNotFoundError, NotADirectoryError):
            return False
        except (OSError, ValueError) as e:
            # ValueError: la ruta contiene un byte NUL
            raise AdapterError(f"No se pudo verificar {full_path!r}: {e}") from e
        return True


class InMemoryAdapterRegistry(AdapterRegistry):
    """
    Registro explícito nombre -> adaptador, armado en el Composition Root.
    """

    def __init__(self, adapters: Optional[dict[str, StorageAdapter]] = None):
        self._adapters: dict[str, StorageAdapter] = dict(adapters or {})

    def register(self, name: str, adapter: StorageAdapter) -> None:
        if not name:
            raise ValueError("El nombre del adaptador no puede estar vacío.")
        self._adapters[name] = adapter
        logger.debug(f"Adaptador registrado: {name} -> {type(adapter).__name__}")

    def resolve(self, name: str) -> StorageAdapter:
        try:
            return self._adapters[name]
        except KeyError:
            raise AdapterResolutionError(
                f"Adaptador no registrado: {name!r}"
            ) from None

    def names(self) -> list[str]:
        return sorted(self._adapters)


def _matches(
    row: dict[str, Any], model: Optional[str], adapter: Optional[str]
) -> bool:
    if model is not None and row.get("model") != model:
        return False
    if adapter not in (None, ALL_ADAPTERS):
        return (row.get("adapter_name") or row.get("adapter")) == adapter
    return True


class JsonFileRecordSource(RecordSource):
    """
    Fuente de registros basada en un archivo JSON: {"tables": {"<tabla>": [...]}}.
    El JSON se parsea una vez por versión del archivo (mtime + tamaño): un escaneo
    completo cuesta un solo parseo y una modificación concurrente invalida la caché.
    """

    def __init__(
        self,
        db_path: str,
        table: str = "FileStorage",
        model: Optional[str] = None,
        adapter: Optional[str] = None,
    ):
        self.db_path = db_path
        self.table = table
        self.model = model
        self.adapter = adapter
        self._cache_key: Optional[tuple[int, int]] = None
        self._cache: list[FileRecord] = []

    def _load_records(self) -> list[FileRecord]:
        try:
            stat = os.stat(self.db_path)
        except FileNotFoundError as e:
            raise RecordSourceError(f"DB de registros no encontrada: {self.db_path}") from e
        except OSError as e:
            raise RecordSourceError(f"DB ilegible en {self.db_path}: {e}") from e

        key = (stat.st_mtime_ns, stat.st_size)
        if key != self._cache_key:
            self._cache = self._parse()
            self._cache_key = key
        return self._cache

    def _parse(self) -> list[FileRecord]:
        try:
            with open(self.db_path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise RecordSourceError(f"DB de registros no encontrada: {self.db_path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise RecordSourceError(f"DB corrupta o ilegible en {self.db_path}: {e}") from e

        tables = data.get("tables") if isinstance(data, dict) else None
        if not isinstance(tables, dict) or self.table not in tables:
            raise RecordSourceError(f"Tabla {self.table!r} no existe en {self.db_path}")

        records = []
        for row in tables[self.table]:
            if not isinstance(row, dict) or not _matches(row, self.model, self.adapter):
                continue
            # Mapping: DTO -> Entity
            try:
                records.append(FileRecord.from_dict(row))
            except (KeyError, ValueError) as e:
                logger.error(f"Registro inválido en {self.table}, se omite: {e}")
        return records

    def count(self) -> int:
        return len(self._load_records())

    @measure_time(metric_name="record_page_latency")
    def page(self, offset: int, limit: int) -> Sequence[FileRecord]:
        return self._load_records()[offset : offset + limit]


class InMemoryRecordSource(RecordSource):
    """
    Fuente en memoria. Útil para tests y para escaneos de listas ya cargadas.
    """

    def __init__(self, records: Iterable[FileRecord] = ()):
        self.records = list(records)

    def count(self) -> int:
        return len(self.records)

    def page(self, offset: int, limit: int) -> Sequence[FileRecord]:
        return self.records[offset : offset + limit]
