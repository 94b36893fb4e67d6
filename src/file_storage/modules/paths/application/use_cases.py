# src/file_storage/modules/paths/application/use_cases.py
"""
Casos de Uso para la Derivación de Rutas.

Arquitectura: Modular Monolith
Capa: Application
Responsabilidad: Calcular ruta, nombre de archivo, ruta completa y URL de un registro.
Todo es puro: sin I/O, sin efectos secundarios más allá de producir strings.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from file_storage.modules.paths.domain.exceptions import InvalidConfiguration
from file_storage.modules.paths.domain.ports.subject import PathSubject
from file_storage.modules.paths.domain.sharding import (
    ShardingRegistry,
    ShardStrategy,
    default_registry,
)
from file_storage.modules.paths.domain.value_objects import (
    NO_SHARDING,
    PathBuilderConfig,
    SlashPosition,
)

logger = logging.getLogger(__name__)


class PathBuilder:
    """
    Genera la ruta y el nombre bajo los que un registro se guarda en un adaptador.

    Colaboradores:
    - config: PathBuilderConfig (inmutable, se copia con overrides por llamada)
    - registry: ShardingRegistry (estrategias de sharding por nombre)
    """

    def __init__(
        self,
        config: Optional[PathBuilderConfig] = None,
        registry: Optional[ShardingRegistry] = None,
    ):
        self.config = config or PathBuilderConfig()
        self.registry = registry or default_registry()
        # Fail fast: la estrategia configurada debe existir desde el arranque
        if self.config.sharding_enabled:
            self.registry.resolve(self.config.sharding_method)

    # === Helpers ===

    @staticmethod
    def strip_dashes(identifier: str) -> str:
        return identifier.replace("-", "")

    @staticmethod
    def split_filename(filename: str, keep_dot: bool = False) -> tuple[str, str]:
        """
        Separa nombre y extensión por el último punto.
        'report.PDF' -> ('report', 'PDF') o ('report', '.PDF') con keep_dot.
        """
        position = filename.rfind(".")
        if position == -1:
            return filename, ""
        extension = filename[position:] if keep_dot else filename[position + 1 :]
        return filename[:position], extension

    def ensure_slash(
        self, value: str, position: Any, separator: Optional[str] = None
    ) -> str:
        """
        Garantiza separador al inicio y/o al final. Idempotente.

        Raises:
            InvalidConfiguration: si position no es before, after o both.
        """
        position = SlashPosition.parse(position)
        if separator is None:
            separator = self.config.separator

        if position in (SlashPosition.BEFORE, SlashPosition.BOTH):
            if not value.startswith(separator):
                value = separator + value
        if position in (SlashPosition.AFTER, SlashPosition.BOTH):
            if not value.endswith(separator):
                value = value + separator
        return value

    def _resolve_config(
        self, overrides: Optional[dict[str, Any]]
    ) -> PathBuilderConfig:
        if not overrides:
            return self.config
        return self.config.with_overrides(**overrides)

    # === Sharding ===

    def shard(
        self,
        identifier: str,
        depth: int = 3,
        method: Optional[str] = None,
        separator: Optional[str] = None,
    ) -> str:
        """
        Crea una ruta semi-aleatoria de `depth` niveles a partir del identificador.
        """
        if method is None:
            method = (
                self.config.sharding_method if self.config.sharding_enabled else "sha1"
            )
        if method == NO_SHARDING:
            return ""
        strategy: ShardStrategy = self.registry.resolve(method)
        return strategy(identifier, depth, separator or self.config.separator)

    # === Operaciones públicas ===

    def path(
        self, record: PathSubject, overrides: Optional[dict[str, Any]] = None
    ) -> str:
        """
        Construye el directorio (siempre termina en separador).

        Orden: prefix -> model -> sharding -> carpeta del id -> suffix.
        """
        config = self._resolve_config(overrides)
        sep = config.separator
        path = ""

        if config.path_prefix:
            path = self.ensure_slash(config.path_prefix, SlashPosition.AFTER, sep)
        if config.model_folder:
            if not record.model:
                raise InvalidConfiguration(
                    f"model_folder activo pero el registro {record.id} no tiene model"
                )
            path += record.model + sep
        if config.sharding_enabled:
            path += self.shard(
                record.id, config.shard_depth, config.sharding_method, sep
            )
        if config.id_shard_folder:
            path += self.strip_dashes(record.id) + sep
        if config.path_suffix:
            path += self.ensure_slash(config.path_suffix, SlashPosition.AFTER, sep)

        return self.ensure_slash(path, SlashPosition.AFTER, sep)

    def filename(
        self, record: PathSubject, overrides: Optional[dict[str, Any]] = None
    ) -> str:
        """Nombre bajo el que se guarda el archivo (derivado del id o el original)."""
        config = self._resolve_config(overrides)
        if config.preserve_original_filename:
            return self._preserve_filename(record, config)
        return self._build_filename(record, config)

    def _build_filename(self, record: PathSubject, config: PathBuilderConfig) -> str:
        filename = record.id
        if config.strip_id_dashes:
            filename = self.strip_dashes(filename)
        if config.file_suffix:
            filename += config.file_suffix
        if config.preserve_extension and record.extension:
            filename += "." + record.extension
        if config.file_prefix:
            filename = config.file_prefix + filename
        return filename

    def _preserve_filename(
        self, record: PathSubject, config: PathBuilderConfig
    ) -> str:
        """
        Conserva el nombre original inyectando prefix/suffix (útil para versiones).
        """
        if not record.filename:
            raise InvalidConfiguration(
                f"preserve_original_filename activo pero el registro {record.id} no tiene filename"
            )
        filename = record.filename
        if config.file_prefix:
            filename = config.file_prefix + filename
        if config.file_suffix:
            name, extension = self.split_filename(filename, keep_dot=True)
            filename = name + config.file_suffix
            if config.preserve_extension:
                filename += extension
        return filename

    def full_path(
        self, record: PathSubject, overrides: Optional[dict[str, Any]] = None
    ) -> str:
        """path + filename (path ya termina en separador)."""
        return self.path(record, overrides) + self.filename(record, overrides)

    def url(
        self, record: PathSubject, overrides: Optional[dict[str, Any]] = None
    ) -> str:
        """
        Ruta pública: full_path con separadores '/' sin importar el host.
        Importante para S3 o un directorio Local enlazado al webroot.
        """
        url = self.full_path(record, overrides).replace("\\", "/")
        logger.debug(f"URL derivada para {record.id}: {url}")
        return url
