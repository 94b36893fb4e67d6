# src/file_storage/modules/integrity/__init__.py
"""
Módulo de Verificación de Integridad.
"""

from __future__ import annotations

# Application
from .application.use_cases import IntegrityScanner

# Domain
from .domain.entities import FileRecord
from .domain.exceptions import (
    AdapterError,
    AdapterResolutionError,
    IntegrityError,
    RecordSourceError,
)
from .domain.ports.record_source import RecordSource
from .domain.ports.storage_adapter import AdapterRegistry, StorageAdapter
from .domain.value_objects import Finding, FindingKind, PageProgress, ScanReport

# Infrastructure
from .infrastructure.adapters import (
    InMemoryAdapterRegistry,
    InMemoryRecordSource,
    JsonFileRecordSource,
    LocalStorageAdapter,
)
from .infrastructure.s3_adapter import S3StorageAdapter

__all__ = [
    "FileRecord",
    "Finding",
    "FindingKind",
    "PageProgress",
    "ScanReport",
    "RecordSource",
    "StorageAdapter",
    "AdapterRegistry",
    "IntegrityError",
    "AdapterError",
    "AdapterResolutionError",
    "RecordSourceError",
    "IntegrityScanner",
    "InMemoryAdapterRegistry",
    "InMemoryRecordSource",
    "JsonFileRecordSource",
    "LocalStorageAdapter",
    "S3StorageAdapter",
]
