# src/file_storage/modules/integrity/domain/ports/storage_adapter.py
"""
Puertos para los adaptadores de almacenamiento y su registro.

Arquitectura: Domain Port (Interface)
Responsabilidad: Definir el contrato mínimo de existencia (has) y la resolución por nombre.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class StorageAdapter(Protocol):
    """
    Backend que guarda los bytes (disco local, S3, ...).

    Implementaciones esperadas:
    - LocalStorageAdapter (Infraestructura)
    - S3StorageAdapter (Infraestructura)
    """

    def has(self, path: str) -> bool:
        """
        True si existe un archivo en `path`.

        Raises:
            AdapterError: ante fallos de transporte/backend.
        """
        ...


class AdapterRegistry(ABC):
    """
    Resuelve adaptadores por nombre. Se inyecta explícitamente (sin registro global).
    """

    @abstractmethod
    def resolve(self, name: str) -> StorageAdapter:
        """
        Raises:
            AdapterResolutionError: si el nombre no está registrado.
        """
        pass
