# src/file_storage/modules/paths/domain/value_objects.py
"""
Value Objects para el Bounded Context de Rutas.

Arquitectura: Modular Monolith
Capa: Domain
Responsabilidad: Configuración inmutable de la derivación de rutas y posiciones de separador.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from file_storage.core.value_objects import PositiveValue

from .exceptions import InvalidConfiguration

# === Guía de Organización ===
# ✅ PUREZA: Solo tipos nativos y validación.
# ❌ SIN I/O: La carga desde entorno vive en infrastructure/settings.py.

NO_SHARDING = "none"


class SlashPosition(str, Enum):
    """Dónde garantizar el separador en ensure_slash."""

    BEFORE = "before"
    AFTER = "after"
    BOTH = "both"

    @classmethod
    def parse(cls, value: Any) -> SlashPosition:
        try:
            return cls(value)
        except ValueError:
            raise InvalidConfiguration(f"Invalid position `{value}`!") from None


@dataclass(frozen=True)
class EntityDescriptor:
    """
    Descriptor mínimo de una entidad a almacenar (satisface PathSubject).
    Se usa en la ingesta, antes de que exista un FileRecord persistido.
    """

    id: str
    filename: Optional[str] = None
    extension: Optional[str] = None
    model: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("El id de la entidad no puede estar vacío.")


_BOOL_FIELDS = (
    "strip_id_dashes",
    "preserve_original_filename",
    "preserve_extension",
    "id_shard_folder",
    "model_folder",
)
_STR_FIELDS = ("path_prefix", "path_suffix", "file_prefix", "file_suffix")


@dataclass(frozen=True)
class PathBuilderConfig:
    """
    Configuración de PathBuilder. Nunca se muta: cada override produce una copia.

    sharding_method = None o "none" desactiva los directorios de sharding.
    """

    strip_id_dashes: bool = True
    path_prefix: str = ""
    path_suffix: str = ""
    file_prefix: str = ""
    file_suffix: str = ""
    preserve_original_filename: bool = False
    preserve_extension: bool = True
    id_shard_folder: bool = True
    sharding_method: Optional[str] = "sha1"
    shard_depth: int = 3
    model_folder: bool = False
    separator: str = os.sep

    def __post_init__(self):
        for name in _BOOL_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise InvalidConfiguration(f"`{name}` debe ser bool")
        for name in _STR_FIELDS:
            if not isinstance(getattr(self, name), str):
                raise InvalidConfiguration(f"`{name}` debe ser str")
        if self.sharding_method is not None and not isinstance(
            self.sharding_method, str
        ):
            raise InvalidConfiguration("`sharding_method` debe ser str o None")
        if not isinstance(self.separator, str) or not self.separator:
            raise InvalidConfiguration("`separator` no puede estar vacío")
        try:
            PositiveValue(self.shard_depth, label="shard_depth")
        except ValueError as e:
            raise InvalidConfiguration(str(e)) from e

    @property
    def sharding_enabled(self) -> bool:
        return bool(self.sharding_method) and self.sharding_method != NO_SHARDING

    def with_overrides(self, **changes: Any) -> PathBuilderConfig:
        """Devuelve una nueva configuración con los campos indicados reemplazados."""
        known = {f.name for f in dataclasses.fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise InvalidConfiguration(f"Campos de configuración desconocidos: {unknown}")
        return dataclasses.replace(self, **changes)
