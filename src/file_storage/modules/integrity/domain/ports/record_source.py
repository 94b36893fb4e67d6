# src/file_storage/modules/integrity/domain/ports/record_source.py
"""
Puerto (Interface) para la fuente paginada de registros.

Arquitectura: Modular Monolith
Capa: Domain -> Ports
Responsabilidad: Abstraer de dónde salen los FileRecord (JSON, DB, memoria).
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from file_storage.modules.integrity.domain.entities import FileRecord


class RecordSource(ABC):
    """
    Contrato de lectura paginada. Nunca se carga la tabla completa en memoria.
    """

    @abstractmethod
    def count(self) -> int:
        """
        Total de registros a verificar.

        Raises:
            RecordSourceError: si la fuente no está disponible.
        """
        pass

    @abstractmethod
    def page(self, offset: int, limit: int) -> Sequence[FileRecord]:
        """
        Página de registros. Puede ser más corta que `limit`;
        una secuencia vacía indica que no hay más.

        Raises:
            RecordSourceError: si la página no se puede obtener.
        """
        pass
