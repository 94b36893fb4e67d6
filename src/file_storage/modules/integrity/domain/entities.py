# src/file_storage/modules/integrity/domain/entities.py
"""
Entidades del dominio de Integridad.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Representar los metadatos persistidos de un archivo almacenado.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional

# === Guía de Organización ===
# ✅ IDENTIDAD: Los registros se comparan por id.
# 🔒 stored_path se calculó al escribir y NO se recalcula aquí: los cambios de
#    configuración (prefijos, sharding) no deben invalidar archivos viejos.


@dataclass(frozen=True)
class FileRecord:
    """
    Metadatos de un archivo almacenado. Satisface el puerto PathSubject.
    """

    id: str
    adapter_name: str = field(compare=False)
    stored_path: str = field(compare=False)
    filename: Optional[str] = field(default=None, compare=False)
    extension: Optional[str] = field(default=None, compare=False)
    model: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        if not self.id:
            raise ValueError("El id del registro no puede estar vacío.")
        if not self.adapter_name:
            raise ValueError(f"El registro {self.id} no tiene adaptador.")
        if not self.stored_path:
            raise ValueError(f"El registro {self.id} no tiene ruta almacenada.")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileRecord:
        """Mapping: DTO (dict) -> Entity. Acepta también las claves `adapter` y `path`."""
        return cls(
            id=str(data["id"]),
            adapter_name=data.get("adapter_name") or data.get("adapter") or "",
            stored_path=data.get("stored_path") or data.get("path") or "",
            filename=data.get("filename"),
            extension=data.get("extension"),
            model=data.get("model"),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
