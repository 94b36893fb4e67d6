# src/file_storage/modules/paths/domain/ports/subject.py
"""
Puerto para la entidad a partir de la cual se derivan rutas.

Arquitectura: Domain Port (Interface)
Responsabilidad: Describir los atributos mínimos que PathBuilder necesita leer.
"""

from __future__ import annotations

from typing import Optional, Protocol


class PathSubject(Protocol):
    """
    Cualquier objeto con estos atributos sirve (FileRecord, un ORM row, un Mock).

    Implementaciones esperadas:
    - FileRecord (modules/integrity/domain/entities.py)
    """

    id: str
    filename: Optional[str]
    extension: Optional[str]
    model: Optional[str]
